from conftest import make_student
from simaka.schemas.report import (
    ClassReportData,
    PromotionReport,
    ReportType,
    SummaryReport,
)
from simaka.schemas.student import AttendanceStatus, PromotionStatus
from simaka.services.report_service import (
    build_report,
    build_student_report_rows,
    compute_class_reports,
    compute_performance_stats,
    compute_promotion_stats,
)


def test_class_rollup_two_classes():
    students = [
        make_student(1, class_name="A", status=AttendanceStatus.HADIR, attendance=100),
        make_student(2, class_name="A", status=AttendanceStatus.TIDAK_HADIR, absent=1, attendance=99),
        make_student(3, class_name="B", status=AttendanceStatus.HADIR, attendance=100),
    ]

    a, b = compute_class_reports(students)

    assert (a.class_name, a.total_students, a.present, a.absent) == ("A", 2, 1, 1)
    assert a.attendance_sum == 199
    assert a.average_attendance == 99.5
    assert (b.class_name, b.total_students, b.present) == ("B", 1, 1)
    assert b.average_attendance == 100


def test_class_rollup_sorted_by_class_name():
    students = [make_student(1, class_name="XII-IPS-2"), make_student(2, class_name="X-IPA-1")]
    assert [r.class_name for r in compute_class_reports(students)] == ["X-IPA-1", "XII-IPS-2"]


def test_class_rollup_counts_promotions_and_history():
    students = [
        make_student(1, class_name="A", promotion_status=PromotionStatus.NAIK, present_count=3,
                     total_attendance_days=4, late_count=1),
        make_student(2, class_name="A", promotion_status=PromotionStatus.LULUS, present_count=2,
                     total_attendance_days=2),
        make_student(3, class_name="A", promotion_status=PromotionStatus.TINGGAL),
    ]
    (row,) = compute_class_reports(students)
    assert (row.promoted, row.graduated, row.retained) == (1, 1, 1)
    assert row.total_present == 5
    assert row.total_late == 1
    assert row.total_attendance_days == 6


def test_class_rollup_empty():
    assert compute_class_reports([]) == []


def test_promotion_stats():
    students = [
        make_student(1, promotion_status=PromotionStatus.NAIK),
        make_student(2, promotion_status=PromotionStatus.NAIK),
        make_student(3, promotion_status=PromotionStatus.TINGGAL),
        make_student(4, promotion_status=PromotionStatus.LULUS),
        make_student(5),
    ]
    stats = compute_promotion_stats(students)
    assert stats.model_dump() == {
        "total": 5,
        "promoted": 2,
        "retained": 1,
        "graduated": 1,
        "undecided": 1,
    }


def test_performance_buckets_and_rankings():
    students = [
        make_student(1, attendance=100),
        make_student(2, attendance=95, late=4),
        make_student(3, attendance=90, absent=10),
        make_student(4, attendance=80, late=4),
        make_student(5, attendance=60, absent=40, late=1),
    ]

    perf = compute_performance_stats(students)

    assert (perf.perfect_attendance, perf.high_attendance, perf.medium_attendance, perf.low_attendance) == (
        1, 2, 1, 1
    )
    # nilai sama mempertahankan urutan koleksi
    assert [s.id for s in perf.most_late[:3]] == [2, 4, 5]
    assert [s.id for s in perf.most_absent[:2]] == [5, 3]


def test_performance_top_five_only():
    students = [make_student(i, late=i) for i in range(1, 9)]
    assert [s.id for s in compute_performance_stats(students).most_late] == [8, 7, 6, 5, 4]


def test_student_rows_use_cumulative_counts():
    student = make_student(
        1,
        present_count=10,
        late_count=2,
        absent_count=1,
        permission_count=3,
        total_attendance_days=16,
        status=AttendanceStatus.IZIN,
        time="-",
    )
    (row,) = build_student_report_rows([student])
    assert (row.present, row.late, row.absent, row.permission) == (10, 2, 1, 3)
    assert row.total_attendance_days == 16
    assert row.current_status == AttendanceStatus.IZIN
    assert row.next_class == "-"


def test_build_report_dispatches_on_type(students):
    assert isinstance(build_report(ReportType.SUMMARY, students), SummaryReport)
    assert isinstance(build_report(ReportType.CLASS, students), ClassReportData)
    promo = build_report(ReportType.PROMOTION, students)
    assert isinstance(promo, PromotionReport)
    assert promo.promotion_stats.promoted == 1
    assert len(promo.detailed_stats) == 3


def test_summary_report_on_empty_collection():
    report = build_report(ReportType.SUMMARY, [])
    assert report.attendance_stats.attendance_rate == 0
    assert report.student_categories.total_students == 0
    assert report.promotion_stats.total == 0
