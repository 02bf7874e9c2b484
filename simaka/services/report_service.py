"""Agregasi laporan: rekap per kelas, kenaikan kelas, performa dan baris per siswa."""
import logging

from simaka.schemas.report import (
    AttendanceReport,
    ClassReport,
    ClassReportData,
    DetailedReport,
    PerformanceReport,
    PerformanceStats,
    PromotionReport,
    PromotionStats,
    ReportPayload,
    ReportType,
    StudentReportRow,
    SummaryReport,
)
from simaka.schemas.student import AttendanceStatus, PromotionStatus, Student
from simaka.services.attendance_service import (
    compute_attendance_stats,
    compute_category_stats,
    js_round,
)

logger = logging.getLogger(__name__)

TOP_N = 5

_BUCKET_FOR_STATUS = {
    AttendanceStatus.HADIR: "present",
    AttendanceStatus.TERLAMBAT: "late",
    AttendanceStatus.TIDAK_HADIR: "absent",
    AttendanceStatus.IZIN: "permission",
    AttendanceStatus.SAKIT: "permission",
}

_PROMOTION_BUCKET = {
    PromotionStatus.NAIK: "promoted",
    PromotionStatus.TINGGAL: "retained",
    PromotionStatus.LULUS: "graduated",
}


def compute_class_reports(students: list[Student]) -> list[ClassReport]:
    """Satu baris per kelas, diurutkan menurut nama kelas."""
    rows: dict[str, ClassReport] = {}
    for s in students:
        row = rows.get(s.class_name)
        if row is None:
            row = rows[s.class_name] = ClassReport(class_name=s.class_name)
        row.total_students += 1
        row.attendance_sum += s.attendance

        bucket = _BUCKET_FOR_STATUS.get(s.status)
        if bucket:
            setattr(row, bucket, getattr(row, bucket) + 1)
        promo = _PROMOTION_BUCKET.get(s.promotion_status)
        if promo:
            setattr(row, promo, getattr(row, promo) + 1)

        row.total_present += s.present_count
        row.total_late += s.late_count
        row.total_absent += s.absent_count
        row.total_permission += s.permission_count
        row.total_attendance_days += s.total_attendance_days

    for row in rows.values():
        row.average_attendance = js_round(row.attendance_sum / row.total_students * 10) / 10
    return [rows[name] for name in sorted(rows)]


def compute_promotion_stats(students: list[Student]) -> PromotionStats:
    stats = PromotionStats(total=len(students))
    for s in students:
        bucket = _PROMOTION_BUCKET.get(s.promotion_status, "undecided")
        setattr(stats, bucket, getattr(stats, bucket) + 1)
    return stats


def compute_performance_stats(students: list[Student]) -> PerformanceStats:
    """Sebaran kehadiran dan lima siswa paling sering terlambat / absen.

    sorted() stabil, sehingga nilai sama mempertahankan urutan koleksi.
    """
    return PerformanceStats(
        perfect_attendance=sum(1 for s in students if s.attendance == 100),
        high_attendance=sum(1 for s in students if 90 <= s.attendance < 100),
        medium_attendance=sum(1 for s in students if 75 <= s.attendance < 90),
        low_attendance=sum(1 for s in students if s.attendance < 75),
        most_late=sorted(students, key=lambda s: s.late, reverse=True)[:TOP_N],
        most_absent=sorted(students, key=lambda s: s.absent, reverse=True)[:TOP_N],
    )


def build_student_report_rows(students: list[Student]) -> list[StudentReportRow]:
    return [
        StudentReportRow(
            id=s.id,
            nis=s.nis,
            name=s.name,
            class_name=s.class_name,
            type=s.type,
            present=s.present_count,
            late=s.late_count,
            absent=s.absent_count,
            permission=s.permission_count,
            total_attendance_days=s.total_attendance_days,
            attendance=s.attendance,
            current_status=s.status,
            current_time=s.time,
            promotion_status=s.promotion_status,
            next_class=s.next_class or "-",
        )
        for s in students
    ]


def build_report(report_type: ReportType, students: list[Student]) -> ReportPayload:
    """Menyusun payload laporan sesuai jenisnya dari koleksi siswa."""
    stats = compute_attendance_stats(students)
    logger.debug("Menyusun laporan %s untuk %d siswa", report_type.value, len(students))

    if report_type == ReportType.PERFORMANCE:
        return PerformanceReport(
            attendance_stats=stats,
            performance_data=compute_performance_stats(students),
        )
    if report_type == ReportType.DETAILED:
        return DetailedReport(students=build_student_report_rows(students), attendance_stats=stats)
    if report_type == ReportType.ATTENDANCE:
        return AttendanceReport(students=build_student_report_rows(students), attendance_stats=stats)
    if report_type == ReportType.CLASS:
        return ClassReportData(class_reports=compute_class_reports(students), attendance_stats=stats)
    if report_type == ReportType.PROMOTION:
        return PromotionReport(
            promotion_stats=compute_promotion_stats(students),
            detailed_stats=build_student_report_rows(students),
            attendance_stats=stats,
        )
    return SummaryReport(
        attendance_stats=stats,
        student_categories=compute_category_stats(students),
        promotion_stats=compute_promotion_stats(students),
    )


# ── Label tampilan untuk ekspor ──────────────────────────────────────

REPORT_TITLES = {
    ReportType.SUMMARY: "Laporan Ringkasan Kehadiran",
    ReportType.PERFORMANCE: "Laporan Performa Kehadiran",
    ReportType.DETAILED: "Laporan Detail Kehadiran Siswa",
    ReportType.CLASS: "Laporan Kehadiran per Kelas",
    ReportType.PROMOTION: "Laporan Kenaikan Kelas",
    ReportType.ATTENDANCE: "Laporan Presensi Siswa",
}

STATUS_LABELS = {
    AttendanceStatus.HADIR: "Hadir",
    AttendanceStatus.TERLAMBAT: "Terlambat",
    AttendanceStatus.TIDAK_HADIR: "Tidak Hadir",
    AttendanceStatus.IZIN: "Izin",
    AttendanceStatus.SAKIT: "Sakit",
    AttendanceStatus.BELUM_DIISI: "Belum Diisi",
}

PROMOTION_LABELS = {
    PromotionStatus.NAIK: "Naik Kelas",
    PromotionStatus.TINGGAL: "Tinggal Kelas",
    PromotionStatus.LULUS: "Lulus",
    PromotionStatus.BELUM_DITETAPKAN: "Belum Ditetapkan",
}
