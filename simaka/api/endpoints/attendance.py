"""Endpoint presensi harian."""
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status

from simaka.api.deps import get_store
from simaka.core.config import settings
from simaka.repositories.base import SchoolStore
from simaka.schemas.report import AttendanceListResponse, AttendanceUpdateResponse
from simaka.schemas.student import AttendanceUpdateRequest, StudentQuery
from simaka.services.attendance_service import (
    compute_attendance_stats,
    current_time_label,
    transition_attendance,
)

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.get("", response_model=AttendanceListResponse, summary="Presensi hari ini")
async def get_attendance(
    date: str | None = Query(None, description="Tanggal YYYY-MM-DD (hanya dikembalikan)"),
    class_name: str | None = Query(None, description="Kelas, 'all' untuk semua"),
    search: str | None = Query(None, description="Cari nama atau NIS"),
    store: SchoolStore = Depends(get_store),
):
    """Daftar siswa (boleh difilter) dengan statistik global seluruh siswa."""
    query = StudentQuery(
        class_name=None if not class_name or class_name == "all" else class_name.strip(),
        search=search.strip() if search and search.strip() else None,
    )
    if not date:
        local_tz = timezone(timedelta(hours=settings.timezone_offset_hours))
        date = datetime.now(local_tz).date().isoformat()

    records = await store.students.find(query)
    stats = compute_attendance_stats(await store.students.find())
    return AttendanceListResponse(date=date, records=records, stats=stats)


@router.put(
    "",
    response_model=AttendanceUpdateResponse,
    summary="Ubah status presensi siswa",
    responses={
        404: {"description": "Siswa tidak ditemukan"},
        422: {"description": "ID atau status tidak valid"},
    },
)
async def update_attendance(body: AttendanceUpdateRequest, store: SchoolStore = Depends(get_store)):
    """Status: hadir, terlambat, tidak-hadir, izin, sakit.

    Jam default adalah jam sekarang (HH.MM) untuk hadir/terlambat dan '-' untuk lainnya.
    """
    time_label = body.time or current_time_label(body.new_status)
    result = await transition_attendance(store, body.student_id, body.new_status, time_label)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Siswa tidak ditemukan")
    return AttendanceUpdateResponse(
        message="Status presensi berhasil diperbarui",
        **result.model_dump(),
    )
