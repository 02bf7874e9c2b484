"""Endpoint guru dan jadwal mengajar."""
import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Path, status

from simaka.api.deps import get_store
from simaka.repositories.base import SchoolStore
from simaka.schemas.teacher import (
    ScheduleItemIn,
    ScheduleResponse,
    ScheduleUpdateRequest,
    TeacherCreate,
    TeacherListResponse,
    TeacherResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/teachers", tags=["teachers"])

TeacherId = Annotated[int, Path(gt=0, description="ID guru")]

NOT_FOUND = "Guru tidak ditemukan"


@router.get("", response_model=TeacherListResponse, summary="Daftar guru")
async def list_teachers(store: SchoolStore = Depends(get_store)):
    return TeacherListResponse(teachers=await store.teachers.find())


@router.post("", response_model=TeacherResponse, status_code=status.HTTP_201_CREATED, summary="Tambah guru")
async def create_teacher(data: TeacherCreate, store: SchoolStore = Depends(get_store)):
    teacher = await store.teachers.add(data)
    logger.info("Guru baru %s (%s)", teacher.id, teacher.name)
    return TeacherResponse(teacher=teacher)


@router.get("/{teacher_id}", response_model=TeacherResponse, responses={404: {"description": NOT_FOUND}})
async def get_teacher(teacher_id: TeacherId, store: SchoolStore = Depends(get_store)):
    teacher = await store.teachers.get(teacher_id)
    if teacher is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return TeacherResponse(teacher=teacher)


@router.delete("/{teacher_id}", responses={404: {"description": NOT_FOUND}})
async def delete_teacher(teacher_id: TeacherId, store: SchoolStore = Depends(get_store)):
    if not await store.teachers.delete(teacher_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return {"success": True, "message": "Guru berhasil dihapus"}


@router.get(
    "/{teacher_id}/schedule",
    response_model=ScheduleResponse,
    responses={404: {"description": NOT_FOUND}},
)
async def get_schedule(teacher_id: TeacherId, store: SchoolStore = Depends(get_store)):
    teacher = await store.teachers.get(teacher_id)
    if teacher is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return ScheduleResponse(schedule=teacher.schedule)


@router.put(
    "/{teacher_id}/schedule",
    response_model=ScheduleResponse,
    summary="Ganti jadwal guru",
    responses={404: {"description": NOT_FOUND}},
)
async def replace_schedule(
    teacher_id: TeacherId,
    body: list[ScheduleItemIn] | ScheduleUpdateRequest = Body(...),
    store: SchoolStore = Depends(get_store),
):
    """Body berupa daftar slot atau {"schedule": [...]}. Jadwal bentrok tetap diterima."""
    items = body.schedule if isinstance(body, ScheduleUpdateRequest) else body
    teacher = await store.teachers.replace_schedule(teacher_id, items)
    if teacher is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    logger.info("Jadwal guru %s diganti (%d slot)", teacher_id, len(teacher.schedule))
    return ScheduleResponse(schedule=teacher.schedule)
