"""Skema siswa: enumerasi status, rekaman siswa dan body request."""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AttendanceStatus(str, Enum):
    """Status kehadiran hari ini."""

    HADIR = "hadir"
    TERLAMBAT = "terlambat"
    TIDAK_HADIR = "tidak-hadir"
    IZIN = "izin"
    SAKIT = "sakit"
    BELUM_DIISI = "belum-diisi"


# Status yang boleh dipilih saat mengisi presensi (belum-diisi hanya nilai awal)
MARKABLE_STATUSES = (
    AttendanceStatus.HADIR,
    AttendanceStatus.TERLAMBAT,
    AttendanceStatus.TIDAK_HADIR,
    AttendanceStatus.IZIN,
    AttendanceStatus.SAKIT,
)


class PromotionStatus(str, Enum):
    NAIK = "naik"
    TINGGAL = "tinggal"
    LULUS = "lulus"
    BELUM_DITETAPKAN = "belum-ditetapkan"


class GraduationStatus(str, Enum):
    LULUS = "lulus"
    BELUM_LULUS = "belum-lulus"


class StudentType(str, Enum):
    """Kategori pendaftaran siswa."""

    NEW = "new"
    TRANSFER = "transfer"
    EXISTING = "existing"


def initials(name: str) -> str:
    """Inisial nama untuk avatar, mis. 'Budi Santoso' -> 'BS'."""
    return "".join(part[0] for part in name.split() if part).upper()


class Student(BaseModel):
    """Rekaman satu siswa untuk satu tahun ajaran."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(gt=0, description="ID numerik internal")
    nis: str = Field(description="Nomor induk siswa")
    name: str
    class_name: str = Field(description="Kelas saat ini, mis. X-IPA-1")
    status: AttendanceStatus = AttendanceStatus.BELUM_DIISI
    time: str = Field(default="-", description="Jam presensi terakhir atau '-'")
    photo: str = ""
    attendance: int = Field(default=0, ge=0, le=100, description="Persentase kehadiran (0-100)")
    late: int = Field(default=0, ge=0)
    absent: int = Field(default=0, ge=0)
    permission: int = Field(default=0, ge=0)
    # Riwayat kumulatif, hanya bertambah
    present_count: int = Field(default=0, ge=0)
    late_count: int = Field(default=0, ge=0)
    absent_count: int = Field(default=0, ge=0)
    permission_count: int = Field(default=0, ge=0)
    total_attendance_days: int = Field(default=0, ge=0)
    type: StudentType = StudentType.EXISTING
    violations: int = Field(default=0, ge=0)
    achievements: int = Field(default=0, ge=0)
    promotion_status: PromotionStatus = PromotionStatus.BELUM_DITETAPKAN
    graduation_status: GraduationStatus = GraduationStatus.BELUM_LULUS
    previous_class: str = ""
    next_class: str = ""


class StudentCreate(BaseModel):
    """Body untuk menambah siswa baru."""

    nis: str = Field(min_length=1, description="Nomor induk siswa")
    name: str = Field(min_length=1, description="Nama lengkap")
    class_name: str = Field(min_length=1, description="Kelas, mis. X-IPA-1")
    type: StudentType = Field(default=StudentType.NEW, description="new, transfer, existing")

    @field_validator("nis", "name", "class_name")
    @classmethod
    def _strip(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("tidak boleh kosong")
        return v


class StudentUpdate(BaseModel):
    """Body PATCH: hanya field yang dikirim yang diubah."""

    nis: str | None = Field(default=None, min_length=1)
    name: str | None = Field(default=None, min_length=1)
    class_name: str | None = Field(default=None, min_length=1)
    type: StudentType | None = None
    violations: int | None = Field(default=None, ge=0)
    achievements: int | None = Field(default=None, ge=0)


class StudentQuery(BaseModel):
    """Filter daftar siswa. None berarti tanpa filter."""

    class_name: str | None = None
    search: str | None = None
    type: StudentType | None = None
    promotion_status: PromotionStatus | None = None


class ClassUpdateRequest(BaseModel):
    student_id: int = Field(gt=0, description="ID siswa")
    class_name: str = Field(min_length=1, description="Kelas baru")


class PromotionUpdateRequest(BaseModel):
    student_id: int = Field(gt=0, description="ID siswa")
    promotion_status: PromotionStatus = Field(description="naik, tinggal, lulus, belum-ditetapkan")
    next_class: str | None = Field(default=None, description="Kelas tujuan; default kelas saat ini")


class AttendanceUpdateRequest(BaseModel):
    """Body untuk mengubah status presensi satu siswa."""

    student_id: int = Field(gt=0, description="ID siswa")
    new_status: AttendanceStatus = Field(description="hadir, terlambat, tidak-hadir, izin, sakit")
    time: str | None = Field(default=None, description="Jam presensi; default jam sekarang untuk hadir/terlambat")

    @field_validator("new_status")
    @classmethod
    def validate_status(cls, v: AttendanceStatus) -> AttendanceStatus:
        if v not in MARKABLE_STATUSES:
            raise ValueError(
                "status harus salah satu dari: " + ", ".join(s.value for s in MARKABLE_STATUSES)
            )
        return v


class RecordEntry(BaseModel):
    """Catatan pelanggaran atau prestasi."""

    id: int
    date: str
    type: str
    description: str
    points: int


class StudentDetail(Student):
    """Siswa beserta daftar pelanggaran dan prestasi terbaru."""

    recent_violations: list[RecordEntry] = []
    recent_achievements: list[RecordEntry] = []


class StudentListResponse(BaseModel):
    students: list[Student]


class StudentDetailListResponse(BaseModel):
    students: list[StudentDetail]


class ImportErrorItem(BaseModel):
    """Kesalahan pada satu baris berkas impor."""

    row: int = Field(description="Nomor baris di berkas (1 = header)")
    nis: str | None = None
    message: str


class StudentImportResponse(BaseModel):
    """Hasil impor massal siswa."""

    file_name: str
    total_rows: int
    created: int
    updated: int
    total_errors: int
    errors: list[ImportErrorItem]
