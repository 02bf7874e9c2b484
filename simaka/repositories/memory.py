"""Adapter penyimpanan di memori proses (uji dan pengembangan)."""
import logging
from typing import Callable

from simaka.repositories.base import (
    SchoolStore,
    SettingsRepository,
    StudentRepository,
    TeacherRepository,
    UserRepository,
    assign_schedule_ids,
    student_matches,
)
from simaka.schemas.auth import User, UserCreate
from simaka.schemas.settings import SchoolSettings, SchoolSettingsUpdate
from simaka.schemas.student import Student, StudentCreate, StudentQuery, initials
from simaka.schemas.teacher import ScheduleItemIn, Teacher, TeacherCreate

logger = logging.getLogger(__name__)


def _noop() -> None:
    return None


class MemoryStudentRepository(StudentRepository):
    """Siswa dalam dict berurutan sesuai waktu penambahan.

    ID baru = max(ID tertinggi yang ada, ID terakhir yang pernah diberikan) + 1,
    sehingga ID siswa yang dihapus tidak dipakai ulang selama proses hidup.
    """

    def __init__(
        self,
        students: list[Student] | None = None,
        on_change: Callable[[], None] = _noop,
        last_id: int = 0,
    ):
        self._students: dict[int, Student] = {s.id: s for s in students or []}
        self._last_id = max(max(self._students, default=0), last_id)
        self._on_change = on_change

    async def find(self, query: StudentQuery | None = None) -> list[Student]:
        return [s for s in self._students.values() if student_matches(s, query)]

    async def get(self, student_id: int) -> Student | None:
        return self._students.get(student_id)

    async def get_by_nis(self, nis: str) -> Student | None:
        return next((s for s in self._students.values() if s.nis == nis), None)

    async def add(self, data: StudentCreate) -> Student:
        new_id = max(max(self._students, default=0), self._last_id) + 1
        student = Student(
            id=new_id,
            nis=data.nis,
            name=data.name,
            class_name=data.class_name,
            type=data.type,
            photo=initials(data.name),
        )
        self._students[new_id] = student
        self._last_id = new_id
        logger.debug("Siswa %s ditambahkan (NIS %s)", new_id, data.nis)
        self._on_change()
        return student

    async def update(self, student: Student) -> bool:
        if student.id not in self._students:
            return False
        self._students[student.id] = student
        self._on_change()
        return True

    async def delete(self, student_id: int) -> bool:
        if self._students.pop(student_id, None) is None:
            return False
        self._on_change()
        return True

    def snapshot(self) -> list[Student]:
        return list(self._students.values())

    @property
    def last_id(self) -> int:
        return self._last_id


class MemoryTeacherRepository(TeacherRepository):
    def __init__(
        self,
        teachers: list[Teacher] | None = None,
        on_change: Callable[[], None] = _noop,
        last_id: int = 0,
    ):
        self._teachers: dict[int, Teacher] = {t.id: t for t in teachers or []}
        self._last_id = max(max(self._teachers, default=0), last_id)
        self._on_change = on_change

    async def find(self) -> list[Teacher]:
        return list(self._teachers.values())

    async def get(self, teacher_id: int) -> Teacher | None:
        return self._teachers.get(teacher_id)

    async def add(self, data: TeacherCreate) -> Teacher:
        new_id = max(max(self._teachers, default=0), self._last_id) + 1
        teacher = Teacher(
            id=new_id,
            name=data.name,
            subject=data.subject,
            photo=initials(data.name),
            schedule=assign_schedule_ids(data.schedule),
        )
        self._teachers[new_id] = teacher
        self._last_id = new_id
        self._on_change()
        return teacher

    async def replace_schedule(self, teacher_id: int, items: list[ScheduleItemIn]) -> Teacher | None:
        teacher = self._teachers.get(teacher_id)
        if teacher is None:
            return None
        teacher = teacher.model_copy(update={"schedule": assign_schedule_ids(items)})
        self._teachers[teacher_id] = teacher
        self._on_change()
        return teacher

    async def delete(self, teacher_id: int) -> bool:
        if self._teachers.pop(teacher_id, None) is None:
            return False
        self._on_change()
        return True

    def snapshot(self) -> list[Teacher]:
        return list(self._teachers.values())

    @property
    def last_id(self) -> int:
        return self._last_id


class MemorySettingsRepository(SettingsRepository):
    def __init__(self, current: SchoolSettings | None = None, on_change: Callable[[], None] = _noop):
        self._settings = current or SchoolSettings()
        self._on_change = on_change

    async def get(self) -> SchoolSettings:
        return self._settings.model_copy()

    async def update(self, changes: SchoolSettingsUpdate) -> SchoolSettings:
        self._settings = self._settings.model_copy(update=changes.model_dump(exclude_none=True))
        self._on_change()
        return self._settings.model_copy()

    def snapshot(self) -> SchoolSettings:
        return self._settings


class MemoryUserRepository(UserRepository):
    def __init__(self, users: list[User] | None = None):
        self._users: dict[int, User] = {u.id: u for u in users or []}

    async def count(self) -> int:
        return len(self._users)

    async def get(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        email = email.lower()
        return next((u for u in self._users.values() if u.email == email), None)

    async def add(self, data: UserCreate, password_hash: str) -> User:
        new_id = max(self._users, default=0) + 1
        user = User(
            id=new_id,
            email=data.email.lower(),
            name=data.name,
            role=data.role,
            teacher_id=data.teacher_id,
            password_hash=password_hash,
        )
        self._users[new_id] = user
        return user


def create_memory_store(
    students: list[Student] | None = None,
    teachers: list[Teacher] | None = None,
    school_settings: SchoolSettings | None = None,
    users: list[User] | None = None,
) -> SchoolStore:
    """Store yang seluruhnya di memori; tiap pemanggilan mendapat data sendiri."""
    return SchoolStore(
        students=MemoryStudentRepository(students),
        teachers=MemoryTeacherRepository(teachers),
        settings=MemorySettingsRepository(school_settings),
        users=MemoryUserRepository(users),
    )
