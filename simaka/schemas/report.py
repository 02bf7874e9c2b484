"""Skema laporan: statistik agregat dan payload tiap jenis laporan."""
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from simaka.schemas.student import AttendanceStatus, PromotionStatus, Student, StudentType


class ReportType(str, Enum):
    SUMMARY = "summary"
    PERFORMANCE = "performance"
    DETAILED = "detailed"
    CLASS = "class"
    PROMOTION = "promotion"
    ATTENDANCE = "attendance"


class ExportFormat(str, Enum):
    PDF = "pdf"
    EXCEL = "excel"
    CSV = "csv"


class AttendanceStats(BaseModel):
    """Ringkasan presensi hari ini untuk seluruh siswa."""

    total_students: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    permission: int = 0
    attendance_rate: float = Field(default=0, description="(hadir + terlambat) / total, satu desimal")


class CategoryStats(BaseModel):
    """Jumlah siswa per kategori pendaftaran."""

    total_students: int = 0
    new_students: int = 0
    transfer_students: int = 0
    existing_students: int = 0


class ClassReport(BaseModel):
    """Baris ringkasan per kelas."""

    class_name: str
    total_students: int = 0
    present: int = 0
    late: int = 0
    absent: int = 0
    permission: int = 0
    attendance_sum: int = 0
    average_attendance: float = 0
    promoted: int = 0
    retained: int = 0
    graduated: int = 0
    total_present: int = 0
    total_late: int = 0
    total_absent: int = 0
    total_permission: int = 0
    total_attendance_days: int = 0


class PromotionStats(BaseModel):
    total: int = 0
    promoted: int = 0
    retained: int = 0
    graduated: int = 0
    undecided: int = 0


class PerformanceStats(BaseModel):
    perfect_attendance: int = 0
    high_attendance: int = 0
    medium_attendance: int = 0
    low_attendance: int = 0
    most_late: list[Student] = []
    most_absent: list[Student] = []


class StudentReportRow(BaseModel):
    """Baris per siswa untuk laporan detail, presensi dan kenaikan kelas."""

    id: int
    nis: str
    name: str
    class_name: str
    type: StudentType
    present: int
    late: int
    absent: int
    permission: int
    total_attendance_days: int
    attendance: int
    current_status: AttendanceStatus
    current_time: str
    promotion_status: PromotionStatus
    next_class: str


class AttendanceTransitionResult(BaseModel):
    """Hasil perubahan status: siswa terbaru plus statistik yang dihitung ulang."""

    student: Student
    stats: AttendanceStats
    categories: CategoryStats


class SummaryReport(BaseModel):
    report_type: Literal[ReportType.SUMMARY] = ReportType.SUMMARY
    attendance_stats: AttendanceStats
    student_categories: CategoryStats
    promotion_stats: PromotionStats


class PerformanceReport(BaseModel):
    report_type: Literal[ReportType.PERFORMANCE] = ReportType.PERFORMANCE
    attendance_stats: AttendanceStats
    performance_data: PerformanceStats


class DetailedReport(BaseModel):
    report_type: Literal[ReportType.DETAILED] = ReportType.DETAILED
    students: list[StudentReportRow]
    attendance_stats: AttendanceStats


class AttendanceReport(BaseModel):
    report_type: Literal[ReportType.ATTENDANCE] = ReportType.ATTENDANCE
    students: list[StudentReportRow]
    attendance_stats: AttendanceStats


class ClassReportData(BaseModel):
    report_type: Literal[ReportType.CLASS] = ReportType.CLASS
    class_reports: list[ClassReport]
    attendance_stats: AttendanceStats


class PromotionReport(BaseModel):
    report_type: Literal[ReportType.PROMOTION] = ReportType.PROMOTION
    promotion_stats: PromotionStats
    detailed_stats: list[StudentReportRow]
    attendance_stats: AttendanceStats


ReportPayload = Annotated[
    SummaryReport
    | PerformanceReport
    | DetailedReport
    | AttendanceReport
    | ClassReportData
    | PromotionReport,
    Field(discriminator="report_type"),
]


class ReportExportRequest(BaseModel):
    """Body ekspor laporan."""

    format: ExportFormat = Field(description="pdf, excel atau csv")
    report_type: ReportType = Field(default=ReportType.SUMMARY, description="Jenis laporan")


class AttendanceListResponse(BaseModel):
    success: bool = True
    date: str
    records: list[Student]
    stats: AttendanceStats


class AttendanceUpdateResponse(AttendanceTransitionResult):
    success: bool = True
    message: str
