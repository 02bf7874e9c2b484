"""Router API."""
from fastapi import APIRouter

from simaka.api.endpoints import attendance, auth, reports, settings, students, teachers

router = APIRouter()
router.include_router(auth.router)
router.include_router(students.router)
router.include_router(attendance.router)
router.include_router(reports.router)
router.include_router(teachers.router)
router.include_router(settings.router)


@router.get(
    "/",
    tags=["api"],
    summary="Akar API v1",
    response_description="Pesan sambutan dan tautan dokumentasi",
)
async def api_root():
    return {"message": "SIMAKA API v1", "docs": "/docs", "redoc": "/redoc"}
