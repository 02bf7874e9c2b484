from io import BytesIO

import pandas as pd
import pytest

from simaka.schemas.report import ExportFormat, ReportType
from simaka.services import report_export_service
from simaka.services.report_export_service import ReportExportError, export_report
from simaka.services.report_service import build_report


def test_summary_report(client):
    body = client.get("/api/v1/reports", params={"type": "summary"}).json()
    assert body["report_type"] == "summary"
    assert body["attendance_stats"]["total_students"] == 3
    assert body["student_categories"]["transfer_students"] == 1
    assert body["promotion_stats"]["promoted"] == 1


def test_default_report_type_is_summary(client):
    assert client.get("/api/v1/reports").json()["report_type"] == "summary"


def test_class_report(client):
    body = client.get("/api/v1/reports", params={"type": "class"}).json()
    rows = {r["class_name"]: r for r in body["class_reports"]}
    assert rows["X-IPA-1"]["total_students"] == 2
    assert rows["X-IPA-1"]["present"] == 1
    assert rows["X-IPA-1"]["late"] == 1
    assert rows["XI-IPS-1"]["absent"] == 1


@pytest.mark.parametrize("report_type", ["performance", "detailed", "promotion", "attendance"])
def test_other_report_types(client, report_type):
    response = client.get("/api/v1/reports", params={"type": report_type, "period": "weekly"})
    assert response.status_code == 200
    assert response.json()["report_type"] == report_type


def test_detailed_report_rows(client):
    body = client.get("/api/v1/reports", params={"type": "detailed"}).json()
    assert [r["current_status"] for r in body["students"]] == ["hadir", "terlambat", "tidak-hadir"]


def test_unknown_report_type(client):
    assert client.get("/api/v1/reports", params={"type": "yearly"}).status_code == 422


@pytest.mark.parametrize("report_type", [t.value for t in ReportType])
def test_export_pdf(client, report_type):
    response = client.post("/api/v1/reports/export", json={"format": "pdf", "report_type": report_type})
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")
    disposition = response.headers["content-disposition"]
    assert f"laporan-kehadiran-{report_type}-" in disposition
    assert disposition.endswith('.pdf"')
    assert response.headers["cache-control"].startswith("no-cache")


def test_export_excel_class_sheet(client):
    response = client.post("/api/v1/reports/export", json={"format": "excel", "report_type": "class"})
    assert response.status_code == 200
    sheets = pd.read_excel(BytesIO(response.content), sheet_name=None, engine="openpyxl")
    assert list(sheets) == ["Per Kelas", "Ringkasan"]
    assert list(sheets["Per Kelas"]["Kelas"]) == ["X-IPA-1", "XI-IPS-1"]


def test_export_excel_summary_sheets(client):
    response = client.post("/api/v1/reports/export", json={"format": "excel"})
    sheets = pd.read_excel(BytesIO(response.content), sheet_name=None, engine="openpyxl")
    assert list(sheets) == ["Ringkasan", "Kategori", "Kenaikan"]


def test_export_csv_detailed(client):
    response = client.post("/api/v1/reports/export", json={"format": "csv", "report_type": "detailed"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    frame = pd.read_csv(BytesIO(response.content), encoding="utf-8-sig", dtype=str)
    assert list(frame["Nama"]) == ["Andi Pratama", "Rina Lestari", "Dimas Saputra"]
    assert list(frame["Status Hari Ini"]) == ["Hadir", "Terlambat", "Tidak Hadir"]


def test_export_rejects_unknown_format(client):
    assert client.post("/api/v1/reports/export", json={"format": "docx"}).status_code == 422


def test_export_empty_collection(store):
    report = build_report(ReportType.PROMOTION, [])
    exported = export_report(report, ExportFormat.PDF)
    assert exported.content.startswith(b"%PDF")
    assert exported.filename.endswith(".pdf")


def test_export_failure_is_wrapped(monkeypatch, students):
    def broken(report):
        raise ValueError("disk penuh")

    monkeypatch.setitem(report_export_service._RENDERERS, ExportFormat.CSV, broken)
    with pytest.raises(ReportExportError, match="csv"):
        export_report(build_report(ReportType.SUMMARY, students), ExportFormat.CSV)


def test_export_failure_returns_json_500(client, monkeypatch):
    def broken(report):
        raise ValueError("disk penuh")

    monkeypatch.setitem(report_export_service._RENDERERS, ExportFormat.EXCEL, broken)
    response = client.post("/api/v1/reports/export", json={"format": "excel"})
    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Internal Server Error"
    assert "excel" in body["message"]
