"""Operasi siswa: kenaikan kelas, pindah kelas, edit, detail dan impor massal."""
import logging
from io import BytesIO
from zipfile import BadZipFile

import pandas as pd

from simaka.repositories.base import SchoolStore
from simaka.schemas.student import (
    GraduationStatus,
    ImportErrorItem,
    PromotionStatus,
    RecordEntry,
    Student,
    StudentCreate,
    StudentDetail,
    StudentImportResponse,
    StudentType,
    StudentUpdate,
    initials,
)

logger = logging.getLogger(__name__)


class StudentImportError(ValueError):
    """Berkas impor tidak dapat dipakai sama sekali (format, kolom, isi kosong)."""


class DuplicateNisError(ValueError):
    def __init__(self, nis: str):
        self.nis = nis
        super().__init__(f"NIS {nis} sudah terdaftar")


# Contoh catatan; dipotong sesuai jumlah pelanggaran / prestasi siswa
_SAMPLE_VIOLATIONS = [
    RecordEntry(id=1, date="2025-10-15", type="Keterlambatan",
                description="Terlambat masuk kelas lebih dari 15 menit", points=2),
    RecordEntry(id=2, date="2025-09-22", type="Pelanggaran Seragam",
                description="Tidak memakai dasi sekolah", points=1),
    RecordEntry(id=3, date="2025-08-05", type="Perilaku",
                description="Bertindak tidak sopan terhadap guru", points=3),
]

_SAMPLE_ACHIEVEMENTS = [
    RecordEntry(id=1, date="2025-10-05", type="Akademik",
                description="Peringkat 1 ujian matematika", points=10),
    RecordEntry(id=2, date="2025-09-18", type="Olahraga",
                description="Juara 2 lomba renang antar kelas", points=8),
    RecordEntry(id=3, date="2025-08-30", type="Sikap",
                description="Siswa teladan bulan Agustus", points=5),
    RecordEntry(id=4, date="2025-07-15", type="Kesenian",
                description="Juara 1 lomba menyanyi tingkat sekolah", points=7),
]


async def set_promotion_status(
    store: SchoolStore,
    student_id: int,
    status: PromotionStatus,
    next_class: str | None = None,
) -> bool:
    """Menetapkan status kenaikan. Kelas saat ini disalin ke previous_class.

    next_class default ke kelas saat ini; status lulus juga menandai siswa lulus.
    """
    student = await store.students.get(student_id)
    if student is None:
        logger.warning("Kenaikan kelas: siswa %s tidak ditemukan", student_id)
        return False

    changes = {
        "promotion_status": status,
        "previous_class": student.class_name,
        "next_class": next_class or student.class_name,
    }
    if status == PromotionStatus.LULUS:
        changes["graduation_status"] = GraduationStatus.LULUS
    await store.students.update(student.model_copy(update=changes))
    logger.info("Siswa %s: status kenaikan %s", student_id, status.value)
    return True


async def set_class(store: SchoolStore, student_id: int, new_class: str) -> bool:
    student = await store.students.get(student_id)
    if student is None:
        logger.warning("Pindah kelas: siswa %s tidak ditemukan", student_id)
        return False
    await store.students.update(student.model_copy(update={"class_name": new_class}))
    return True


async def _ensure_nis_free(store: SchoolStore, nis: str) -> None:
    if await store.students.get_by_nis(nis) is not None:
        logger.warning("NIS %s sudah dipakai siswa lain", nis)
        raise DuplicateNisError(nis)


async def create_student(store: SchoolStore, data: StudentCreate) -> Student:
    """Menambah siswa. NIS harus unik; bentrok -> DuplicateNisError."""
    await _ensure_nis_free(store, data.nis)
    student = await store.students.add(data)
    logger.info("Siswa baru %s (%s) di kelas %s", student.id, student.name, student.class_name)
    return student


async def update_student(store: SchoolStore, student_id: int, changes: StudentUpdate) -> Student | None:
    """Edit sebagian. Penghitung presensi tidak dapat diubah lewat sini."""
    student = await store.students.get(student_id)
    if student is None:
        return None
    update = changes.model_dump(exclude_none=True)
    if update.get("nis", student.nis) != student.nis:
        await _ensure_nis_free(store, update["nis"])
    if "name" in update:
        update["photo"] = initials(update["name"])
    updated = student.model_copy(update=update)
    await store.students.update(updated)
    return updated


def with_details(student: Student) -> StudentDetail:
    return StudentDetail(
        **student.model_dump(),
        recent_violations=_SAMPLE_VIOLATIONS[: student.violations],
        recent_achievements=_SAMPLE_ACHIEVEMENTS[: student.achievements],
    )


# ── Impor massal ─────────────────────────────────────────────────────

REQUIRED_COLUMNS = {"NIS", "Nama", "Kelas"}


def _val(row, col):
    """Nilai sel sebagai string bersih, atau None bila kosong/NaN."""
    v = row.get(col)
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return None
    s = str(v).strip()
    return s if s else None


def read_import_frame(file_name: str, content: bytes) -> pd.DataFrame:
    """Membaca .xlsx atau .csv menjadi DataFrame berkolom teks."""
    lower = file_name.lower()
    if not lower.endswith((".xlsx", ".csv")):
        raise StudentImportError("Berkas harus berekstensi .xlsx atau .csv")
    try:
        if lower.endswith(".xlsx"):
            df = pd.read_excel(BytesIO(content), engine="openpyxl", dtype=str)
        else:
            df = pd.read_csv(BytesIO(content), dtype=str)
    except (ValueError, OSError, BadZipFile) as exc:
        raise StudentImportError("Berkas tidak dapat dibaca. Pastikan formatnya benar.") from exc

    if df.empty:
        raise StudentImportError("Berkas kosong.")
    df.columns = [str(c).strip() for c in df.columns]
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise StudentImportError(f"Kolom wajib tidak ada: {', '.join(sorted(missing))}")
    return df


async def import_students(store: SchoolStore, file_name: str, content: bytes) -> StudentImportResponse:
    """Membuat atau memperbarui siswa per baris. NIS yang sudah ada diperbarui."""
    df = read_import_frame(file_name, content)
    errors: list[ImportErrorItem] = []
    created = updated = 0

    for idx, row in df.iterrows():
        row_num = int(idx) + 2  # +2: header + indeks 0
        nis = _val(row, "NIS")
        name = _val(row, "Nama")
        class_name = _val(row, "Kelas")

        missing = [col for col, v in (("NIS", nis), ("Nama", name), ("Kelas", class_name)) if not v]
        if missing:
            errors.append(ImportErrorItem(
                row=row_num, nis=nis, message=f"Kolom wajib kosong: {', '.join(missing)}",
            ))
            continue

        raw_type = _val(row, "Tipe")
        try:
            student_type = StudentType(raw_type.lower()) if raw_type else StudentType.NEW
        except ValueError:
            errors.append(ImportErrorItem(
                row=row_num, nis=nis,
                message=f"Tipe '{raw_type}' tidak valid (new, transfer, existing)",
            ))
            continue

        existing = await store.students.get_by_nis(nis)
        if existing is not None:
            await store.students.update(existing.model_copy(update={
                "name": name,
                "class_name": class_name,
                "type": student_type,
                "photo": initials(name),
            }))
            updated += 1
        else:
            await store.students.add(
                StudentCreate(nis=nis, name=name, class_name=class_name, type=student_type)
            )
            created += 1

    logger.info(
        "Impor '%s': %d baris, %d dibuat, %d diperbarui, %d galat",
        file_name, len(df), created, updated, len(errors),
    )
    return StudentImportResponse(
        file_name=file_name,
        total_rows=len(df),
        created=created,
        updated=updated,
        total_errors=len(errors),
        errors=errors,
    )
