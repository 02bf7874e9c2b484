"""Skema guru dan jadwal mengajar."""
from pydantic import BaseModel, ConfigDict, Field


class ScheduleItemIn(BaseModel):
    """Slot jadwal dari client; id boleh kosong dan akan dibuatkan."""

    id: int | None = Field(default=None, description="ID slot; dibuat otomatis bila kosong")
    day: str = Field(min_length=1, description="Hari, mis. Senin")
    start_time: str = Field(min_length=1, description="Jam mulai HH:MM")
    end_time: str = Field(min_length=1, description="Jam selesai HH:MM")
    class_name: str = Field(min_length=1, description="Kelas yang diajar")
    room: str = Field(min_length=1, description="Ruang")
    description: str = Field(default="", description="Materi yang diajarkan")


class ScheduleItem(ScheduleItemIn):
    """Slot jadwal tersimpan. Tidak ada pemeriksaan bentrok jadwal."""

    model_config = ConfigDict(from_attributes=True)

    id: int


class Teacher(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(gt=0)
    name: str
    subject: str
    photo: str = ""
    schedule: list[ScheduleItem] = []


class TeacherCreate(BaseModel):
    name: str = Field(min_length=1, description="Nama guru")
    subject: str = Field(min_length=1, description="Mata pelajaran")
    schedule: list[ScheduleItemIn] = Field(default_factory=list)


class ScheduleUpdateRequest(BaseModel):
    """Body alternatif: {"schedule": [...]}."""

    schedule: list[ScheduleItemIn]


class TeacherListResponse(BaseModel):
    teachers: list[Teacher]


class TeacherResponse(BaseModel):
    success: bool = True
    teacher: Teacher


class ScheduleResponse(BaseModel):
    success: bool = True
    schedule: list[ScheduleItem]
