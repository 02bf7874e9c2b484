"""Endpoint siswa: daftar, tambah, edit, hapus, detail, pindah kelas, kenaikan dan impor."""
from enum import Enum
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Path, Query, UploadFile, status

from simaka.api.deps import get_store
from simaka.repositories.base import SchoolStore
from simaka.schemas.student import (
    ClassUpdateRequest,
    PromotionStatus,
    PromotionUpdateRequest,
    Student,
    StudentCreate,
    StudentDetail,
    StudentDetailListResponse,
    StudentImportResponse,
    StudentListResponse,
    StudentQuery,
    StudentType,
    StudentUpdate,
)
from simaka.services import student_service
from simaka.services.student_service import DuplicateNisError, StudentImportError

router = APIRouter(prefix="/students", tags=["students"])

StudentId = Annotated[int, Path(gt=0, description="ID siswa (bilangan bulat positif)")]

NOT_FOUND = "Siswa tidak ditemukan"


def _enum_filter(enum_cls: type[Enum], value: str | None, field: str):
    """'all' atau kosong berarti tanpa filter; nilai di luar enumerasi -> 422."""
    if not value or value == "all":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Nilai {field} tidak valid: '{value}'. Pilihan: "
            + ", ".join(e.value for e in enum_cls),
        )


def build_student_query(
    class_name: str | None = Query(None, description="Kelas, 'all' untuk semua"),
    search: str | None = Query(None, description="Cari nama atau NIS"),
    type: str | None = Query(None, description="new, transfer, existing"),
    promotion_status: str | None = Query(None, description="naik, tinggal, lulus, belum-ditetapkan"),
) -> StudentQuery:
    return StudentQuery(
        class_name=None if not class_name or class_name == "all" else class_name.strip(),
        search=search.strip() if search and search.strip() else None,
        type=_enum_filter(StudentType, type, "type"),
        promotion_status=_enum_filter(PromotionStatus, promotion_status, "promotion_status"),
    )


@router.get(
    "",
    response_model=StudentListResponse,
    summary="Daftar siswa",
    responses={422: {"description": "Filter enumerasi tidak valid"}},
)
async def list_students(
    query: StudentQuery = Depends(build_student_query),
    store: SchoolStore = Depends(get_store),
):
    return StudentListResponse(students=await store.students.find(query))


@router.post(
    "",
    response_model=Student,
    status_code=status.HTTP_201_CREATED,
    summary="Tambah siswa",
    responses={409: {"description": "NIS sudah terdaftar"}},
)
async def create_student(data: StudentCreate, store: SchoolStore = Depends(get_store)):
    """Siswa baru mulai dengan status belum-diisi, jam '-' dan semua penghitung 0."""
    try:
        return await student_service.create_student(store, data)
    except DuplicateNisError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.get("/details", response_model=StudentDetailListResponse, summary="Siswa beserta catatan")
async def list_student_details(store: SchoolStore = Depends(get_store)):
    students = await store.students.find()
    return StudentDetailListResponse(students=[student_service.with_details(s) for s in students])


@router.post(
    "/import",
    response_model=StudentImportResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Impor siswa dari Excel/CSV",
    description=(
        "Unggah berkas .xlsx atau .csv dengan kolom NIS, Nama, Kelas dan (opsional) Tipe. "
        "NIS yang sudah terdaftar diperbarui; lainnya dibuat sebagai siswa baru."
    ),
    responses={400: {"description": "Berkas tidak dapat dibaca atau kolom wajib hilang"}},
)
async def import_students(
    file: UploadFile = File(..., description="Berkas .xlsx atau .csv"),
    store: SchoolStore = Depends(get_store),
):
    file_name = file.filename or "tanpa_nama"
    content = await file.read()
    try:
        return await student_service.import_students(store, file_name, content)
    except StudentImportError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.put(
    "/class",
    summary="Pindah kelas",
    responses={404: {"description": NOT_FOUND}},
)
async def update_class(body: ClassUpdateRequest, store: SchoolStore = Depends(get_store)):
    if not await student_service.set_class(store, body.student_id, body.class_name):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return {"success": True, "message": "Kelas siswa berhasil diperbarui"}


@router.put(
    "/promotion",
    summary="Tetapkan status kenaikan kelas",
    responses={404: {"description": NOT_FOUND}},
)
async def update_promotion(body: PromotionUpdateRequest, store: SchoolStore = Depends(get_store)):
    ok = await student_service.set_promotion_status(
        store, body.student_id, body.promotion_status, body.next_class
    )
    if not ok:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return {"success": True, "message": "Status kenaikan kelas berhasil diperbarui"}


@router.get("/{student_id}", response_model=StudentDetail, responses={404: {"description": NOT_FOUND}})
async def get_student(student_id: StudentId, store: SchoolStore = Depends(get_store)):
    student = await store.students.get(student_id)
    if student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return student_service.with_details(student)


@router.patch(
    "/{student_id}",
    response_model=Student,
    responses={404: {"description": NOT_FOUND}, 409: {"description": "NIS sudah terdaftar"}},
)
async def update_student(
    student_id: StudentId,
    body: StudentUpdate,
    store: SchoolStore = Depends(get_store),
):
    """Hanya field yang dikirim (tidak null) yang diubah."""
    try:
        student = await student_service.update_student(store, student_id, body)
    except DuplicateNisError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return student


@router.delete("/{student_id}", responses={404: {"description": NOT_FOUND}})
async def delete_student(student_id: StudentId, store: SchoolStore = Depends(get_store)):
    if not await store.students.delete(student_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return {"success": True, "message": "Siswa berhasil dihapus"}
