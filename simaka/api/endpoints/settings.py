"""Endpoint pengaturan sekolah."""
from fastapi import APIRouter, Depends

from simaka.api.deps import get_store
from simaka.repositories.base import SchoolStore
from simaka.schemas.settings import SchoolSettings, SchoolSettingsUpdate, SettingsUpdateResponse

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SchoolSettings, summary="Pengaturan sekolah")
async def get_settings(store: SchoolStore = Depends(get_store)):
    return await store.settings.get()


@router.put("", response_model=SettingsUpdateResponse, summary="Perbarui pengaturan")
async def update_settings(body: SchoolSettingsUpdate, store: SchoolStore = Depends(get_store)):
    """Pembaruan sebagian; field yang tidak dikirim tetap."""
    updated = await store.settings.update(body)
    return SettingsUpdateResponse(message="Pengaturan berhasil disimpan", settings=updated)
