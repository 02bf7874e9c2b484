"""Skema pengaturan sekolah."""
from pydantic import BaseModel, ConfigDict


class SchoolSettings(BaseModel):
    """Pengaturan tunggal sekolah; nilai bawaan dipakai bila belum pernah disimpan."""

    model_config = ConfigDict(from_attributes=True)

    school_name: str = "Educore"
    academic_year: str = "2025/2026"
    semester: str = "Ganjil"
    start_time: str = "07:00"
    end_time: str = "15:00"
    notifications: bool = True
    language: str = "id"
    theme: str = "light"


class SchoolSettingsUpdate(BaseModel):
    """Pembaruan sebagian: hanya field yang dikirim yang ditimpa."""

    school_name: str | None = None
    academic_year: str | None = None
    semester: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    notifications: bool | None = None
    language: str | None = None
    theme: str | None = None


class SettingsUpdateResponse(BaseModel):
    success: bool = True
    message: str
    settings: SchoolSettings
