from types import SimpleNamespace

from academics.result_utils import (
    academic_result,
    mark_passes,
    pass_statistics,
    semester_summary,
)


def mark(student_id, semester, code, internal, external, max_marks=100):
    return SimpleNamespace(
        student_id=student_id,
        semester=semester,
        subject_code=code,
        internal_mark=internal,
        external_mark=external,
        marks_obtained=internal + external,
        max_marks=max_marks,
    )


def test_each_minimum_must_be_met():
    assert mark_passes(14, 26, 40)
    assert not mark_passes(13, 60, 73)
    assert not mark_passes(25, 20, 45)
    assert not mark_passes(19, 21, 39)


def test_academic_result():
    assert academic_result([]) == "N/A"
    assert academic_result([mark(1, 1, "CSE101", 20, 40)]) == "Pass"
    assert (
        academic_result([mark(1, 1, "CSE101", 20, 40), mark(1, 1, "CSE102", 10, 40)])
        == "Fail"
    )


def test_pass_statistics_counts_students_not_marks():
    marks = [
        mark(1, 1, "CSE101", 25, 50),
        mark(1, 1, "CSE102", 20, 40),
        mark(2, 1, "CSE101", 25, 50),
        mark(2, 1, "CSE102", 10, 30),
    ]

    stats = pass_statistics(marks)

    assert stats["passCount"] == 1
    assert stats["failCount"] == 1
    assert stats["passPercentage"] == 50.0
    assert stats["aggregatePercentage"] == 62.5


def test_pass_statistics_without_marks():
    assert pass_statistics([]) == {
        "passCount": 0,
        "failCount": 0,
        "passPercentage": 0,
        "aggregatePercentage": 0,
    }


def test_semester_summary_orders_semesters():
    summary = semester_summary(
        [
            mark(1, 2, "CSE201", 20, 40),
            mark(1, 1, "CSE101", 25, 50),
            mark(1, 1, "CSE102", 10, 40),
        ]
    )

    assert [row["semester"] for row in summary] == [1, 2]
    assert summary[0]["obtained"] == 125
    assert summary[0]["max"] == 200
    assert summary[0]["percentage"] == 62.5
    assert summary[0]["result"] == "Fail"
    assert summary[1]["result"] == "Pass"
