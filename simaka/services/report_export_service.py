"""Ekspor laporan ke PDF, Excel (openpyxl) dan CSV."""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from io import BytesIO

import pandas as pd

from simaka.core.config import settings
from simaka.schemas.report import (
    AttendanceStats,
    CategoryStats,
    ClassReportData,
    ExportFormat,
    PerformanceReport,
    PromotionReport,
    PromotionStats,
    ReportPayload,
    StudentReportRow,
    SummaryReport,
)
from simaka.schemas.student import Student
from simaka.services.report_pdf_service import generate_report_pdf
from simaka.services.report_service import PROMOTION_LABELS, STATUS_LABELS

logger = logging.getLogger(__name__)

MEDIA_TYPES = {
    ExportFormat.PDF: "application/pdf",
    ExportFormat.EXCEL: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.CSV: "text/csv; charset=utf-8",
}

EXTENSIONS = {
    ExportFormat.PDF: "pdf",
    ExportFormat.EXCEL: "xlsx",
    ExportFormat.CSV: "csv",
}


class ReportExportError(Exception):
    """Laporan gagal dirender ke format yang diminta."""

    def __init__(self, export_format: ExportFormat, reason: str):
        self.export_format = export_format
        super().__init__(f"Gagal membuat laporan {export_format.value}: {reason}")


@dataclass
class ExportedReport:
    content: bytes
    filename: str
    media_type: str


# ── Tabel pandas per jenis laporan ───────────────────────────────────

def _stats_frame(stats: AttendanceStats) -> pd.DataFrame:
    return pd.DataFrame([
        ("Total Siswa", stats.total_students),
        ("Hadir", stats.present),
        ("Terlambat", stats.late),
        ("Tidak Hadir", stats.absent),
        ("Izin / Sakit", stats.permission),
        ("Tingkat Kehadiran (%)", stats.attendance_rate),
    ], columns=["Indikator", "Nilai"])


def _category_frame(cat: CategoryStats) -> pd.DataFrame:
    return pd.DataFrame([
        ("Siswa Baru", cat.new_students),
        ("Siswa Pindahan", cat.transfer_students),
        ("Siswa Lama", cat.existing_students),
        ("Total", cat.total_students),
    ], columns=["Kategori", "Jumlah"])


def _promotion_frame(promo: PromotionStats) -> pd.DataFrame:
    return pd.DataFrame([
        ("Total Siswa", promo.total),
        ("Naik Kelas", promo.promoted),
        ("Tinggal Kelas", promo.retained),
        ("Lulus", promo.graduated),
        ("Belum Ditetapkan", promo.undecided),
    ], columns=["Status", "Jumlah"])


def _student_rows_frame(rows: list[StudentReportRow]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "NIS": r.nis,
                "Nama": r.name,
                "Kelas": r.class_name,
                "Tipe": r.type.value,
                "Hadir": r.present,
                "Terlambat": r.late,
                "Tidak Hadir": r.absent,
                "Izin/Sakit": r.permission,
                "Total Hari": r.total_attendance_days,
                "Kehadiran (%)": r.attendance,
                "Status Hari Ini": STATUS_LABELS[r.current_status],
                "Jam": r.current_time,
                "Status Kenaikan": PROMOTION_LABELS[r.promotion_status],
                "Kelas Tujuan": r.next_class,
            }
            for r in rows
        ],
        columns=[
            "NIS", "Nama", "Kelas", "Tipe", "Hadir", "Terlambat", "Tidak Hadir", "Izin/Sakit",
            "Total Hari", "Kehadiran (%)", "Status Hari Ini", "Jam", "Status Kenaikan",
            "Kelas Tujuan",
        ],
    )


def _ranking_frame(students: list[Student], counter: str, label: str) -> pd.DataFrame:
    return pd.DataFrame(
        [(s.nis, s.name, s.class_name, getattr(s, counter)) for s in students],
        columns=["NIS", "Nama", "Kelas", label],
    )


def report_sheets(report: ReportPayload) -> dict[str, pd.DataFrame]:
    """Lembar kerja per jenis laporan; lembar pertama juga dipakai untuk CSV."""
    if isinstance(report, SummaryReport):
        return {
            "Ringkasan": _stats_frame(report.attendance_stats),
            "Kategori": _category_frame(report.student_categories),
            "Kenaikan": _promotion_frame(report.promotion_stats),
        }
    if isinstance(report, PerformanceReport):
        perf = report.performance_data
        return {
            "Performa": pd.DataFrame([
                ("100%", perf.perfect_attendance),
                ("90% - 99%", perf.high_attendance),
                ("75% - 89%", perf.medium_attendance),
                ("< 75%", perf.low_attendance),
            ], columns=["Rentang Kehadiran", "Jumlah Siswa"]),
            "Terlambat": _ranking_frame(perf.most_late, "late", "Terlambat"),
            "Tidak Hadir": _ranking_frame(perf.most_absent, "absent", "Tidak Hadir"),
            "Ringkasan": _stats_frame(report.attendance_stats),
        }
    if isinstance(report, ClassReportData):
        return {
            "Per Kelas": pd.DataFrame(
                [
                    {
                        "Kelas": c.class_name,
                        "Total Siswa": c.total_students,
                        "Hadir": c.present,
                        "Terlambat": c.late,
                        "Tidak Hadir": c.absent,
                        "Izin/Sakit": c.permission,
                        "Rata-rata Kehadiran (%)": c.average_attendance,
                        "Naik": c.promoted,
                        "Tinggal": c.retained,
                        "Lulus": c.graduated,
                    }
                    for c in report.class_reports
                ],
                columns=[
                    "Kelas", "Total Siswa", "Hadir", "Terlambat", "Tidak Hadir", "Izin/Sakit",
                    "Rata-rata Kehadiran (%)", "Naik", "Tinggal", "Lulus",
                ],
            ),
            "Ringkasan": _stats_frame(report.attendance_stats),
        }
    if isinstance(report, PromotionReport):
        return {
            "Kenaikan": _promotion_frame(report.promotion_stats),
            "Detail": _student_rows_frame(report.detailed_stats),
        }
    # detailed / attendance
    return {
        "Siswa": _student_rows_frame(report.students),
        "Ringkasan": _stats_frame(report.attendance_stats),
    }


def render_excel(report: ReportPayload) -> bytes:
    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        for sheet_name, frame in report_sheets(report).items():
            frame.to_excel(writer, sheet_name=sheet_name, index=False)
    return output.getvalue()


def render_csv(report: ReportPayload) -> bytes:
    main_frame = next(iter(report_sheets(report).values()))
    # BOM agar Excel membaca UTF-8 dengan benar
    return main_frame.to_csv(index=False).encode("utf-8-sig")


_RENDERERS = {
    ExportFormat.PDF: generate_report_pdf,
    ExportFormat.EXCEL: render_excel,
    ExportFormat.CSV: render_csv,
}


def export_filename(report: ReportPayload, export_format: ExportFormat, today=None) -> str:
    local_tz = timezone(timedelta(hours=settings.timezone_offset_hours))
    today = today or datetime.now(local_tz).date()
    return f"laporan-kehadiran-{report.report_type.value}-{today.isoformat()}.{EXTENSIONS[export_format]}"


def export_report(report: ReportPayload, export_format: ExportFormat) -> ExportedReport:
    """Merender laporan dan menyiapkan nama berkas serta media type-nya."""
    try:
        content = _RENDERERS[export_format](report)
    except (ValueError, KeyError, OSError) as exc:
        logger.exception("Ekspor %s gagal untuk laporan %s", export_format.value, report.report_type.value)
        raise ReportExportError(export_format, str(exc)) from exc

    filename = export_filename(report, export_format)
    logger.info("Laporan diekspor: %s (%d byte)", filename, len(content))
    return ExportedReport(content=content, filename=filename, media_type=MEDIA_TYPES[export_format])
