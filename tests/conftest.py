import pytest
from fastapi.testclient import TestClient

from simaka.api.deps import get_store
from simaka.main import app
from simaka.repositories.memory import create_memory_store
from simaka.schemas.student import (
    AttendanceStatus,
    PromotionStatus,
    Student,
    StudentType,
)


def make_student(student_id: int, **overrides) -> Student:
    data = {
        "id": student_id,
        "nis": f"1000{student_id}",
        "name": f"Siswa {student_id}",
        "class_name": "X-IPA-1",
        "attendance": 100,
    }
    data.update(overrides)
    return Student(**data)


@pytest.fixture
def students() -> list[Student]:
    return [
        make_student(1, name="Andi Pratama", status=AttendanceStatus.HADIR, type=StudentType.NEW),
        make_student(2, name="Rina Lestari", status=AttendanceStatus.TERLAMBAT, late=1),
        make_student(
            3,
            name="Dimas Saputra",
            class_name="XI-IPS-1",
            status=AttendanceStatus.TIDAK_HADIR,
            absent=1,
            attendance=99,
            type=StudentType.TRANSFER,
            promotion_status=PromotionStatus.NAIK,
        ),
    ]


@pytest.fixture
def store(students):
    return create_memory_store(students=students)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
