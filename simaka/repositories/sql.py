"""Adapter SQLAlchemy (PostgreSQL) untuk SchoolStore; satu sesi per request."""
import logging

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from simaka.models import ScheduleItemRow, SchoolSettingsRow, StudentRow, TeacherRow, UserRow
from simaka.repositories.base import (
    SchoolStore,
    SettingsRepository,
    StudentRepository,
    TeacherRepository,
    UserRepository,
    assign_schedule_ids,
)
from simaka.schemas.auth import User, UserCreate
from simaka.schemas.settings import SchoolSettings, SchoolSettingsUpdate
from simaka.schemas.student import Student, StudentCreate, StudentQuery, initials
from simaka.schemas.teacher import ScheduleItem, ScheduleItemIn, Teacher, TeacherCreate

logger = logging.getLogger(__name__)

SETTINGS_ROW_ID = 1


class SqlStudentRepository(StudentRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(self, query: StudentQuery | None = None) -> list[Student]:
        q = select(StudentRow).order_by(StudentRow.id)
        if query is not None:
            if query.class_name:
                q = q.where(StudentRow.class_name == query.class_name)
            if query.type:
                q = q.where(StudentRow.type == query.type.value)
            if query.promotion_status:
                q = q.where(StudentRow.promotion_status == query.promotion_status.value)
            if query.search:
                pattern = f"%{query.search}%"
                q = q.where(or_(StudentRow.name.ilike(pattern), StudentRow.nis.ilike(pattern)))
        result = await self.db.execute(q)
        return [Student.model_validate(row) for row in result.scalars().all()]

    async def get(self, student_id: int) -> Student | None:
        row = await self.db.get(StudentRow, student_id)
        return Student.model_validate(row) if row else None

    async def get_by_nis(self, nis: str) -> Student | None:
        result = await self.db.execute(select(StudentRow).where(StudentRow.nis == nis))
        row = result.scalar_one_or_none()
        return Student.model_validate(row) if row else None

    async def add(self, data: StudentCreate) -> Student:
        # Identity(always=True): PostgreSQL tidak pernah memakai ulang ID
        row = StudentRow(
            nis=data.nis,
            name=data.name,
            class_name=data.class_name,
            type=data.type.value,
            photo=initials(data.name),
        )
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        logger.debug("Siswa %s ditambahkan (NIS %s)", row.id, row.nis)
        return Student.model_validate(row)

    async def update(self, student: Student) -> bool:
        row = await self.db.get(StudentRow, student.id)
        if row is None:
            return False
        for field, value in student.model_dump(mode="json", exclude={"id"}).items():
            setattr(row, field, value)
        await self.db.flush()
        return True

    async def delete(self, student_id: int) -> bool:
        row = await self.db.get(StudentRow, student_id)
        if row is None:
            return False
        await self.db.delete(row)
        await self.db.flush()
        return True


def _teacher_from_row(row: TeacherRow) -> Teacher:
    return Teacher(
        id=row.id,
        name=row.name,
        subject=row.subject,
        photo=row.photo,
        schedule=[
            ScheduleItem(
                id=item.item_id,
                day=item.day,
                start_time=item.start_time,
                end_time=item.end_time,
                class_name=item.class_name,
                room=item.room,
                description=item.description,
            )
            for item in row.schedule_items
        ],
    )


def _schedule_rows(items: list[ScheduleItemIn]) -> list[ScheduleItemRow]:
    return [
        ScheduleItemRow(
            item_id=item.id,
            position=position,
            day=item.day,
            start_time=item.start_time,
            end_time=item.end_time,
            class_name=item.class_name,
            room=item.room,
            description=item.description,
        )
        for position, item in enumerate(assign_schedule_ids(items))
    ]


class SqlTeacherRepository(TeacherRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(self) -> list[Teacher]:
        result = await self.db.execute(select(TeacherRow).order_by(TeacherRow.id))
        return [_teacher_from_row(row) for row in result.scalars().all()]

    async def get(self, teacher_id: int) -> Teacher | None:
        row = await self.db.get(TeacherRow, teacher_id)
        return _teacher_from_row(row) if row else None

    async def add(self, data: TeacherCreate) -> Teacher:
        row = TeacherRow(
            name=data.name,
            subject=data.subject,
            photo=initials(data.name),
            schedule_items=_schedule_rows(data.schedule),
        )
        self.db.add(row)
        await self.db.flush()
        return _teacher_from_row(row)

    async def replace_schedule(self, teacher_id: int, items: list[ScheduleItemIn]) -> Teacher | None:
        row = await self.db.get(TeacherRow, teacher_id)
        if row is None:
            return None
        # delete-orphan menghapus slot lama
        row.schedule_items = _schedule_rows(items)
        await self.db.flush()
        return _teacher_from_row(row)

    async def delete(self, teacher_id: int) -> bool:
        row = await self.db.get(TeacherRow, teacher_id)
        if row is None:
            return False
        await self.db.delete(row)
        await self.db.flush()
        return True


class SqlSettingsRepository(SettingsRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_or_create(self) -> SchoolSettingsRow:
        row = await self.db.get(SchoolSettingsRow, SETTINGS_ROW_ID)
        if row is None:
            row = SchoolSettingsRow(id=SETTINGS_ROW_ID, **SchoolSettings().model_dump())
            self.db.add(row)
            await self.db.flush()
        return row

    async def get(self) -> SchoolSettings:
        return SchoolSettings.model_validate(await self._get_or_create())

    async def update(self, changes: SchoolSettingsUpdate) -> SchoolSettings:
        row = await self._get_or_create()
        for field, value in changes.model_dump(exclude_none=True).items():
            setattr(row, field, value)
        await self.db.flush()
        return SchoolSettings.model_validate(row)


class SqlUserRepository(UserRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def count(self) -> int:
        return (await self.db.execute(select(func.count()).select_from(UserRow))).scalar() or 0

    async def get(self, user_id: int) -> User | None:
        row = await self.db.get(UserRow, user_id)
        return User.model_validate(row) if row else None

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(UserRow).where(UserRow.email == email.lower()))
        row = result.scalar_one_or_none()
        return User.model_validate(row) if row else None

    async def add(self, data: UserCreate, password_hash: str) -> User:
        row = UserRow(
            email=data.email.lower(),
            name=data.name,
            role=data.role.value,
            teacher_id=data.teacher_id,
            password_hash=password_hash,
        )
        self.db.add(row)
        await self.db.flush()
        return User.model_validate(row)


def create_sql_store(db: AsyncSession) -> SchoolStore:
    return SchoolStore(
        students=SqlStudentRepository(db),
        teachers=SqlTeacherRepository(db),
        settings=SqlSettingsRepository(db),
        users=SqlUserRepository(db),
    )
