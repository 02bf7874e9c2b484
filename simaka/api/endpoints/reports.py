"""Endpoint laporan: payload JSON per jenis dan ekspor berkas (PDF, Excel, CSV)."""
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from simaka.api.deps import get_store
from simaka.repositories.base import SchoolStore
from simaka.schemas.report import ReportExportRequest, ReportPayload, ReportType
from simaka.services.report_export_service import export_report
from simaka.services.report_service import build_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


@router.get(
    "",
    response_model=ReportPayload,
    summary="Data laporan",
    responses={422: {"description": "Jenis laporan tidak dikenal"}},
)
async def get_report(
    type: ReportType = Query(ReportType.SUMMARY, description="summary, performance, detailed, class, promotion, attendance"),
    period: str = Query("monthly", description="Periode laporan (ditampilkan saja)"),
    store: SchoolStore = Depends(get_store),
):
    logger.debug("Laporan %s diminta untuk periode %s", type.value, period)
    return build_report(type, await store.students.find())


@router.post(
    "/export",
    summary="Unduh laporan",
    response_class=Response,
    responses={
        200: {
            "content": {
                "application/pdf": {},
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": {},
                "text/csv": {},
            },
            "description": "Berkas laporan",
        },
        500: {"description": "Laporan gagal dibuat"},
    },
)
async def export(body: ReportExportRequest, store: SchoolStore = Depends(get_store)):
    """Laporan dihitung ulang di server lalu dirender ke format yang diminta."""
    report = build_report(body.report_type, await store.students.find())
    exported = export_report(report, body.format)
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{exported.filename}"',
            **NO_CACHE_HEADERS,
        },
    )
