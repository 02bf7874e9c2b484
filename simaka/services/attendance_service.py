"""Agregator presensi: transisi status, persentase kehadiran dan statistik global.

Semua fungsi di sini murni dan sinkron kecuali `transition_attendance`, yang
hanya membungkus muat-ubah-simpan di sekitar fungsi murni tersebut.
"""
import logging
import math
from datetime import datetime, timedelta, timezone

from simaka.core.config import settings
from simaka.repositories.base import SchoolStore
from simaka.schemas.report import AttendanceStats, AttendanceTransitionResult, CategoryStats
from simaka.schemas.student import AttendanceStatus, Student, StudentType

logger = logging.getLogger(__name__)

# Jendela tetap 100 hari sekolah untuk persentase kehadiran
TRACKED_DAYS = 100

# Status -> penghitung keadaan saat ini. hadir dan belum-diisi tidak punya penghitung.
_COUNTER_FOR_STATUS = {
    AttendanceStatus.TERLAMBAT: "late",
    AttendanceStatus.TIDAK_HADIR: "absent",
    AttendanceStatus.IZIN: "permission",
    AttendanceStatus.SAKIT: "permission",
}

# Status -> riwayat kumulatif
_HISTORY_FOR_STATUS = {
    AttendanceStatus.HADIR: "present_count",
    AttendanceStatus.TERLAMBAT: "late_count",
    AttendanceStatus.TIDAK_HADIR: "absent_count",
    AttendanceStatus.IZIN: "permission_count",
    AttendanceStatus.SAKIT: "permission_count",
}


def js_round(x: float) -> int:
    """Pembulatan setengah ke atas (2.5 -> 3, -2.5 -> -2), bukan banker's rounding."""
    return math.floor(x + 0.5)


def attendance_percentage(absent: int, permission: int) -> int:
    """Persentase kehadiran dalam [0, 100]. Keterlambatan tidak mengurangi."""
    pct = js_round((TRACKED_DAYS - absent - permission) / TRACKED_DAYS * 100)
    return max(0, min(100, pct))


def apply_status_transition(student: Student, new_status: AttendanceStatus, new_time: str) -> Student:
    """Mengembalikan salinan siswa setelah status diganti; `student` tidak diubah.

    Penghitung status lama dikurangi (minimal 0), penghitung status baru
    ditambah, lalu persentase kehadiran dihitung ulang. Mengulang transisi ke
    status yang sama tidak mengubah penghitung.
    """
    counters = {
        "late": student.late,
        "absent": student.absent,
        "permission": student.permission,
    }
    old_counter = _COUNTER_FOR_STATUS.get(student.status)
    if old_counter:
        counters[old_counter] = max(0, counters[old_counter] - 1)
    new_counter = _COUNTER_FOR_STATUS.get(new_status)
    if new_counter:
        counters[new_counter] += 1

    changes = {
        **counters,
        "attendance": attendance_percentage(counters["absent"], counters["permission"]),
        "status": new_status,
        "time": new_time,
        "total_attendance_days": student.total_attendance_days + 1,
    }
    history = _HISTORY_FOR_STATUS.get(new_status)
    if history:
        changes[history] = getattr(student, history) + 1
    return student.model_copy(update=changes)


def compute_attendance_stats(students: list[Student]) -> AttendanceStats:
    total = len(students)
    if total == 0:
        return AttendanceStats()

    present = late = absent = permission = 0
    for s in students:
        if s.status == AttendanceStatus.HADIR:
            present += 1
        elif s.status == AttendanceStatus.TERLAMBAT:
            late += 1
        elif s.status == AttendanceStatus.TIDAK_HADIR:
            absent += 1
        elif s.status in (AttendanceStatus.IZIN, AttendanceStatus.SAKIT):
            permission += 1

    return AttendanceStats(
        total_students=total,
        present=present,
        absent=absent,
        late=late,
        permission=permission,
        attendance_rate=js_round((present + late) / total * 1000) / 10,
    )


def compute_category_stats(students: list[Student]) -> CategoryStats:
    return CategoryStats(
        total_students=len(students),
        new_students=sum(1 for s in students if s.type == StudentType.NEW),
        transfer_students=sum(1 for s in students if s.type == StudentType.TRANSFER),
        existing_students=sum(1 for s in students if s.type == StudentType.EXISTING),
    )


def current_time_label(status: AttendanceStatus, now: datetime | None = None) -> str:
    """Jam lokal 'HH.MM' untuk hadir/terlambat, '-' untuk status lainnya."""
    if status not in (AttendanceStatus.HADIR, AttendanceStatus.TERLAMBAT):
        return "-"
    local_tz = timezone(timedelta(hours=settings.timezone_offset_hours))
    now = now or datetime.now(timezone.utc)
    return now.astimezone(local_tz).strftime("%H.%M")


async def transition_attendance(
    store: SchoolStore,
    student_id: int,
    new_status: AttendanceStatus,
    time_label: str,
) -> AttendanceTransitionResult | None:
    """Memuat siswa, menerapkan transisi dan menyimpannya.

    Statistik dihitung ulang atas seluruh koleksi setelah penulisan.
    None bila ID tidak ditemukan.
    """
    student = await store.students.get(student_id)
    if student is None:
        logger.warning("Presensi: siswa %s tidak ditemukan", student_id)
        return None

    updated = apply_status_transition(student, new_status, time_label)
    await store.students.update(updated)
    logger.info(
        "Presensi siswa %s: %s -> %s (kehadiran %d%%)",
        student_id, student.status.value, new_status.value, updated.attendance,
    )

    students = await store.students.find()
    return AttendanceTransitionResult(
        student=updated,
        stats=compute_attendance_stats(students),
        categories=compute_category_stats(students),
    )
