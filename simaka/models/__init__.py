"""Model SQLAlchemy (tabel database)."""
from simaka.models.student import StudentRow
from simaka.models.teacher import ScheduleItemRow, TeacherRow
from simaka.models.school_settings import SchoolSettingsRow
from simaka.models.user import UserRow

__all__ = [
    "StudentRow",
    "TeacherRow",
    "ScheduleItemRow",
    "SchoolSettingsRow",
    "UserRow",
]
