import asyncio
import itertools
import random
from datetime import datetime, timezone

import pytest

from conftest import make_student
from simaka.schemas.student import MARKABLE_STATUSES, AttendanceStatus, StudentType
from simaka.services.attendance_service import (
    apply_status_transition,
    attendance_percentage,
    compute_attendance_stats,
    compute_category_stats,
    current_time_label,
    js_round,
    transition_attendance,
)


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.5, 2), (2.5, 3), (2.4999, 2), (-2.5, -2), (899.5, 900)],
)
def test_js_round_half_up(value, expected):
    assert js_round(value) == expected


def test_transition_moves_counter_between_statuses():
    student = make_student(1, status=AttendanceStatus.TERLAMBAT, late=2)

    updated = apply_status_transition(student, AttendanceStatus.TIDAK_HADIR, "-")

    assert updated.late == 1
    assert updated.absent == 1
    assert updated.attendance == 99
    assert updated.status == AttendanceStatus.TIDAK_HADIR
    assert updated.time == "-"


def test_transition_does_not_mutate_input():
    student = make_student(1)
    apply_status_transition(student, AttendanceStatus.SAKIT, "-")
    assert student.status == AttendanceStatus.BELUM_DIISI
    assert student.permission == 0


def test_izin_and_sakit_share_permission_counter():
    student = make_student(1)
    izin = apply_status_transition(student, AttendanceStatus.IZIN, "-")
    sakit = apply_status_transition(izin, AttendanceStatus.SAKIT, "-")

    assert izin.permission == 1
    assert sakit.permission == 1
    assert sakit.permission_count == 2


def test_decrement_is_floored_at_zero():
    student = make_student(1, status=AttendanceStatus.TIDAK_HADIR, absent=0)
    updated = apply_status_transition(student, AttendanceStatus.HADIR, "07.00")
    assert updated.absent == 0
    assert updated.attendance == 100


def test_counters_never_negative_over_random_sequences():
    rng = random.Random(7)
    student = make_student(1)
    for _ in range(500):
        student = apply_status_transition(student, rng.choice(MARKABLE_STATUSES), "-")
        assert student.late >= 0
        assert student.absent >= 0
        assert student.permission >= 0
        assert 0 <= student.attendance <= 100
        # Tepat satu penghitung keadaan boleh bernilai 1 setelah start dari nol
        assert student.late + student.absent + student.permission <= 1


@pytest.mark.parametrize("status", MARKABLE_STATUSES)
def test_repeated_transition_is_idempotent(status):
    once = apply_status_transition(make_student(1), status, "07.10")
    twice = apply_status_transition(once, status, "07.25")

    assert (twice.late, twice.absent, twice.permission, twice.attendance, twice.status) == (
        once.late, once.absent, once.permission, once.attendance, once.status
    )
    assert twice.time == "07.25"


def test_late_is_not_debited_from_attendance():
    for late in (0, 5, 40):
        assert attendance_percentage(absent=3, permission=2) == 95
        student = make_student(1, status=AttendanceStatus.HADIR, late=late, absent=3, permission=2)
        updated = apply_status_transition(student, AttendanceStatus.HADIR, "07.00")
        assert updated.attendance == 95


def test_attendance_percentage_is_clamped():
    assert attendance_percentage(absent=150, permission=10) == 0
    assert attendance_percentage(absent=0, permission=0) == 100


def test_cumulative_history_grows_on_every_transition():
    student = make_student(1)
    for status in (AttendanceStatus.HADIR, AttendanceStatus.HADIR, AttendanceStatus.TERLAMBAT):
        student = apply_status_transition(student, status, "07.00")

    assert student.present_count == 2
    assert student.late_count == 1
    assert student.total_attendance_days == 3


def test_stats_rate_for_ten_students():
    statuses = (
        [AttendanceStatus.HADIR] * 7
        + [AttendanceStatus.TERLAMBAT] * 2
        + [AttendanceStatus.TIDAK_HADIR]
    )
    students = [make_student(i + 1, status=s) for i, s in enumerate(statuses)]

    stats = compute_attendance_stats(students)

    assert stats.total_students == 10
    assert (stats.present, stats.late, stats.absent, stats.permission) == (7, 2, 1, 0)
    assert stats.attendance_rate == 90.0


def test_stats_rate_rounds_to_one_decimal():
    statuses = [AttendanceStatus.HADIR, AttendanceStatus.HADIR, AttendanceStatus.IZIN]
    stats = compute_attendance_stats([make_student(i + 1, status=s) for i, s in enumerate(statuses)])
    assert stats.attendance_rate == 66.7


def test_stats_empty_collection_is_all_zero():
    stats = compute_attendance_stats([])
    assert stats.model_dump() == {
        "total_students": 0,
        "present": 0,
        "absent": 0,
        "late": 0,
        "permission": 0,
        "attendance_rate": 0,
    }


def test_stats_buckets_sum_to_total_when_every_student_is_marked():
    statuses = itertools.islice(itertools.cycle(MARKABLE_STATUSES), 23)
    students = [make_student(i + 1, status=s) for i, s in enumerate(statuses)]

    stats = compute_attendance_stats(students)

    assert stats.present + stats.late + stats.absent + stats.permission == stats.total_students


def test_unmarked_students_fall_in_no_bucket():
    stats = compute_attendance_stats([make_student(1), make_student(2, status=AttendanceStatus.HADIR)])
    assert stats.total_students == 2
    assert stats.present == 1
    assert stats.attendance_rate == 50.0


def test_category_stats():
    students = [
        make_student(1, type=StudentType.NEW),
        make_student(2, type=StudentType.NEW),
        make_student(3, type=StudentType.TRANSFER),
        make_student(4),
    ]
    cats = compute_category_stats(students)
    assert (cats.total_students, cats.new_students, cats.transfer_students, cats.existing_students) == (
        4, 2, 1, 1
    )


def test_current_time_label_uses_local_clock():
    now = datetime(2025, 10, 20, 0, 5, tzinfo=timezone.utc)
    assert current_time_label(AttendanceStatus.HADIR, now) == "07.05"
    assert current_time_label(AttendanceStatus.TERLAMBAT, now) == "07.05"
    assert current_time_label(AttendanceStatus.IZIN, now) == "-"


def test_transition_attendance_persists_and_recomputes(store):
    result = asyncio.run(transition_attendance(store, 1, AttendanceStatus.TIDAK_HADIR, "-"))

    assert result.student.absent == 1
    assert result.stats.absent == 2
    assert result.stats.present == 0
    assert result.categories.total_students == 3
    saved = asyncio.run(store.students.get(1))
    assert saved.status == AttendanceStatus.TIDAK_HADIR


def test_transition_attendance_unknown_id(store):
    assert asyncio.run(transition_attendance(store, 404, AttendanceStatus.HADIR, "07.00")) is None
