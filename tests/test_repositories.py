import asyncio
import json

from conftest import make_student
from simaka.models import TeacherRow
from simaka.repositories.file import JsonFileStore
from simaka.repositories.memory import create_memory_store
from simaka.repositories.sql import _schedule_rows, _teacher_from_row
from simaka.schemas.settings import SchoolSettingsUpdate
from simaka.schemas.student import AttendanceStatus, StudentCreate, StudentQuery
from simaka.schemas.teacher import ScheduleItemIn, TeacherCreate


def test_memory_store_instances_are_isolated():
    a = create_memory_store(students=[make_student(1)])
    b = create_memory_store()
    asyncio.run(a.students.add(StudentCreate(nis="9", name="Nina", class_name="X")))
    assert len(asyncio.run(a.students.find())) == 2
    assert asyncio.run(b.students.find()) == []


def test_memory_search_is_case_insensitive_substring():
    store = create_memory_store(students=[make_student(1, name="Rina Lestari")])
    assert len(asyncio.run(store.students.find(StudentQuery(search="LEST")))) == 1
    assert asyncio.run(store.students.find(StudentQuery(search="budi"))) == []


def test_update_unknown_student_returns_false():
    store = create_memory_store()
    assert asyncio.run(store.students.update(make_student(5))) is False


def test_file_store_starts_empty_and_persists(tmp_path):
    path = tmp_path / "data.json"
    store = JsonFileStore(path)
    assert not path.exists()

    created = asyncio.run(store.students.add(StudentCreate(nis="1", name="Andi", class_name="X-IPA-1")))
    asyncio.run(store.settings.update(SchoolSettingsUpdate(semester="Genap")))
    asyncio.run(store.teachers.add(TeacherCreate(
        name="Siti Nurhaliza",
        subject="Bahasa Indonesia",
        schedule=[ScheduleItemIn(
            id=1, day="Senin", start_time="07:00", end_time="09:30",
            class_name="XII-IPA-1", room="Ruang 201",
        )],
    )))

    blob = json.loads(path.read_text(encoding="utf-8"))
    assert set(blob) == {"students", "settings", "teachers", "last_student_id", "last_teacher_id"}
    assert blob["students"][0]["class_name"] == "X-IPA-1"
    assert blob["settings"]["semester"] == "Genap"

    reloaded = JsonFileStore(path)
    student = asyncio.run(reloaded.students.get(created.id))
    assert student.name == "Andi"
    assert asyncio.run(reloaded.settings.get()).semester == "Genap"
    assert asyncio.run(reloaded.teachers.find())[0].schedule[0].room == "Ruang 201"


def test_file_store_reads_camel_case_blob(tmp_path):
    path = tmp_path / "legacy.json"
    path.write_text(json.dumps({
        "students": [{
            "id": 7,
            "nis": "777",
            "name": "Bayu Kusuma",
            "class": "XI-IPA-1",
            "status": "terlambat",
            "time": "07.20",
            "photo": "BK",
            "attendance": 100,
            "late": 1,
            "absent": 0,
            "permission": 0,
            "type": "transfer",
            "promotionStatus": "naik",
            "previousClass": "X-IPA-1",
            "nextClass": "XI-IPA-1",
        }],
        "settings": {"schoolName": "SMA Namira", "academicYear": "2024/2025", "startTime": "06:45"},
    }), encoding="utf-8")

    store = JsonFileStore(path)
    student = asyncio.run(store.students.get(7))

    assert student.class_name == "XI-IPA-1"
    assert student.status == AttendanceStatus.TERLAMBAT
    assert student.promotion_status.value == "naik"
    assert student.previous_class == "X-IPA-1"
    school_settings = asyncio.run(store.settings.get())
    assert school_settings.school_name == "SMA Namira"
    assert school_settings.academic_year == "2024/2025"
    assert school_settings.start_time == "06:45"

    # ID berikutnya melanjutkan dari ID tertinggi yang dimuat
    new = asyncio.run(store.students.add(StudentCreate(nis="8", name="Ayu", class_name="X")))
    assert new.id == 8

    # pengaturan lama tetap ada setelah blob ditulis ulang
    assert json.loads(path.read_text(encoding="utf-8"))["settings"]["school_name"] == "SMA Namira"


def test_file_store_does_not_reuse_deleted_id_after_restart(tmp_path):
    path = tmp_path / "data.json"
    store = JsonFileStore(path)
    asyncio.run(store.students.add(StudentCreate(nis="1", name="Andi", class_name="X")))
    second = asyncio.run(store.students.add(StudentCreate(nis="2", name="Rina", class_name="X")))
    asyncio.run(store.students.delete(second.id))

    reloaded = JsonFileStore(path)
    new = asyncio.run(reloaded.students.add(StudentCreate(nis="3", name="Dimas", class_name="X")))
    assert new.id == 3


def test_sql_schedule_rows_keep_order_and_client_ids():
    items = [
        ScheduleItemIn(id=None, day="Rabu", start_time="07:00", end_time="09:30",
                       class_name="X-IPA-1", room="Ruang 303"),
        ScheduleItemIn(id=42, day="Senin", start_time="07:00", end_time="09:30",
                       class_name="X-IPA-1", room="Ruang 303"),
    ]
    row = TeacherRow(id=3, name="Ahmad Fauzi", subject="Fisika", photo="AF", schedule_items=_schedule_rows(items))

    teacher = _teacher_from_row(row)

    assert [s.day for s in teacher.schedule] == ["Rabu", "Senin"]
    assert [r.position for r in row.schedule_items] == [0, 1]
    assert teacher.schedule[1].id == 42
    assert teacher.schedule[0].id > 1_000_000_000_000
