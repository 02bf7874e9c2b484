"""Antarmuka penyimpanan. Adapter: SQL (produksi), memori (uji) dan file JSON."""
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass

from simaka.schemas.auth import User, UserCreate
from simaka.schemas.settings import SchoolSettings, SchoolSettingsUpdate
from simaka.schemas.student import Student, StudentCreate, StudentQuery
from simaka.schemas.teacher import ScheduleItem, ScheduleItemIn, Teacher, TeacherCreate


class StudentRepository(ABC):
    """Koleksi siswa yang diakses lewat ID numerik."""

    @abstractmethod
    async def find(self, query: StudentQuery | None = None) -> list[Student]:
        ...

    @abstractmethod
    async def get(self, student_id: int) -> Student | None:
        ...

    @abstractmethod
    async def get_by_nis(self, nis: str) -> Student | None:
        ...

    @abstractmethod
    async def add(self, data: StudentCreate) -> Student:
        """Menyimpan siswa baru dengan ID yang belum pernah dipakai."""

    @abstractmethod
    async def update(self, student: Student) -> bool:
        """Menimpa rekaman dengan ID yang sama. False bila tidak ada."""

    @abstractmethod
    async def delete(self, student_id: int) -> bool:
        ...


class TeacherRepository(ABC):
    @abstractmethod
    async def find(self) -> list[Teacher]:
        ...

    @abstractmethod
    async def get(self, teacher_id: int) -> Teacher | None:
        ...

    @abstractmethod
    async def add(self, data: TeacherCreate) -> Teacher:
        ...

    @abstractmethod
    async def replace_schedule(self, teacher_id: int, items: list[ScheduleItemIn]) -> Teacher | None:
        """Mengganti seluruh jadwal apa adanya. None bila guru tidak ada."""

    @abstractmethod
    async def delete(self, teacher_id: int) -> bool:
        ...


class SettingsRepository(ABC):
    @abstractmethod
    async def get(self) -> SchoolSettings:
        ...

    @abstractmethod
    async def update(self, changes: SchoolSettingsUpdate) -> SchoolSettings:
        ...


class UserRepository(ABC):
    @abstractmethod
    async def count(self) -> int:
        ...

    @abstractmethod
    async def get(self, user_id: int) -> User | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        ...

    @abstractmethod
    async def add(self, data: UserCreate, password_hash: str) -> User:
        ...


@dataclass
class SchoolStore:
    """Kumpulan repositori yang diinjeksikan ke router dan service."""

    students: StudentRepository
    teachers: TeacherRepository
    settings: SettingsRepository
    users: UserRepository


def student_matches(student: Student, query: StudentQuery | None) -> bool:
    """Filter di memori, setara dengan WHERE pada adapter SQL."""
    if query is None:
        return True
    if query.class_name and student.class_name != query.class_name:
        return False
    if query.type and student.type != query.type:
        return False
    if query.promotion_status and student.promotion_status != query.promotion_status:
        return False
    if query.search:
        needle = query.search.casefold()
        if needle not in student.name.casefold() and needle not in student.nis.casefold():
            return False
    return True


def assign_schedule_ids(items: list[ScheduleItemIn]) -> list[ScheduleItem]:
    """Slot tanpa ID diberi epoch milidetik + indeks."""
    now_ms = int(time.time() * 1000)
    return [
        ScheduleItem(**{**item.model_dump(), "id": item.id or now_ms + index})
        for index, item in enumerate(items)
    ]
