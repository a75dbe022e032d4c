from datetime import date

import pytest

from academics.models import StudentMark
from administration.data_utils import delete_student_data, restore_student_data
from administration.models import DeletedDataLog
from attendance.models import StudentAttendance
from students.models import Student, StudentFee

pytestmark = pytest.mark.django_db


@pytest.fixture
def history(students):
    """Two years of records for the 2022 BRIL CSE student"""
    student = students["BCSE202201"]
    for semester, code, internal, external in [
        (1, "CSE101", 25, 50),
        (1, "CSE102", 20, 45),
        (3, "CSE301", 22, 48),
    ]:
        StudentMark.objects.create(
            student=student,
            semester=semester,
            subject_code=code,
            subject_name=code,
            internal_mark=internal,
            external_mark=external,
            marks_obtained=internal + external,
        )
    for on, morning in [
        (date(2022, 8, 1), "Present"),
        (date(2023, 2, 1), "Absent"),
        (date(2023, 8, 1), "Present"),
    ]:
        StudentAttendance.objects.create(
            student=student, date=on, morning=morning, afternoon="Present"
        )
    for year in ("2022-2023", "2023-2024"):
        StudentFee.objects.create(
            student=student,
            academic_year=year,
            total_fees=120000,
            paid_amount=120000,
            due_amount=0,
            status="Paid",
        )
    StudentFee.objects.create(
        student=student,
        academic_year="2022-2023",
        semester=1,
        total_fees=760,
        paid_amount=760,
        status="Paid",
        fee_type=StudentFee.FeeType.EXAM,
    )
    return student


def test_delete_marks_for_a_semester(history):
    message = delete_student_data("bcse202201", "marks", semester="1", deleted_by="CHAIRMAN01")

    assert message == "2 marks record(s) for Semester 1 have been moved to the removed data log."
    assert list(history.marks.values_list("subject_code", flat=True)) == ["CSE301"]

    entry = DeletedDataLog.objects.get()
    assert entry.data_type == "Marks"
    assert entry.scope == "Semester 1"
    assert entry.deleted_by == "CHAIRMAN01"
    assert [row["subjectCode"] for row in entry.deleted_data] == ["CSE101", "CSE102"]


def test_delete_marks_for_an_academic_year(history):
    message = delete_student_data("BCSE202201", "marks", academic_year="2023-2024")

    assert message.startswith("1 marks record(s) for Academic Year 2023-2024")
    assert history.marks.count() == 2


def test_attendance_scope_uses_date_windows(history):
    delete_student_data("BCSE202201", "attendance", academic_year="2022-2023", semester="2")

    assert sorted(history.attendance.values_list("date", flat=True)) == [
        date(2022, 8, 1),
        date(2023, 8, 1),
    ]

    delete_student_data("BCSE202201", "attendance", academic_year="2022-2023")
    assert list(history.attendance.values_list("date", flat=True)) == [date(2023, 8, 1)]


def test_fee_tabs_are_kept_apart(history):
    delete_student_data("BCSE202201", "fees", semester="3")

    assert list(
        history.fees.filter(fee_type="Tuition").values_list("academic_year", flat=True)
    ) == ["2022-2023"]
    assert history.fees.filter(fee_type="Exam").count() == 1

    delete_student_data("BCSE202201", "examFees", academic_year="2022-2023")
    assert DeletedDataLog.objects.filter(data_type="Exam Fees").count() == 1
    assert not history.fees.filter(fee_type="Exam").exists()


@pytest.mark.parametrize(
    "admission_number, tab, academic_year, semester, error",
    [
        ("BCSE202201", "marks", None, None, "Cannot delete all data at once"),
        ("BCSE209999", "marks", None, "1", "Student with admission number BCSE209999 not found."),
        ("BCSE202201", "fees", "2030-2031", None, "No fees records found to delete"),
        ("BCSE202201", "placements", None, "1", "Unknown data type 'placements'."),
        ("BCSE202201", "marks", None, "one", "Semester must be a number."),
    ],
)
def test_delete_errors(history, admission_number, tab, academic_year, semester, error):
    with pytest.raises(ValueError, match=error):
        delete_student_data(admission_number, tab, academic_year, semester)


def test_restore_puts_rows_back_and_drops_the_entry(history):
    delete_student_data("BCSE202201", "marks", semester="1")
    entry = DeletedDataLog.objects.get()

    message = restore_student_data([entry.id])

    assert message == "2 records from 1 log entries have been restored."
    assert history.marks.count() == 3
    assert history.marks.get(subject_code="CSE102").marks_obtained == 65
    assert not DeletedDataLog.objects.exists()


def test_restore_recreates_a_removed_student(history):
    delete_student_data("BCSE202201", "fees", academic_year="2022-2023")
    entry = DeletedDataLog.objects.get()
    history.delete()

    restore_student_data([entry.id])

    student = Student.objects.get(admission_number="BCSE202201")
    assert student.student_name == "Diya Reddy"
    assert student.college_code == "BRIL"
    fee = student.fees.get()
    assert fee.academic_year == "2022-2023"
    assert fee.status == "Paid"


def test_restore_without_entries(db):
    with pytest.raises(ValueError, match="No valid log entries found to restore."):
        restore_student_data([12345])


def test_delete_and_log_views(login, chairman, history):
    client = login(chairman)

    response = client.post(
        "/administration/delete-data/",
        {"admissionNumber": "BCSE202201", "tab": "marks", "semester": "3", "reason": "typo"},
        content_type="application/json",
    )
    assert response.json()["success"] is True

    entries = client.get("/administration/deleted-log/").json()["entries"]
    assert len(entries) == 1
    assert entries[0]["reason"] == "typo"
    assert entries[0]["deletedBy"] == "CHAIRMAN01"

    response = client.post(
        "/administration/restore/",
        {"logIds": [entries[0]["id"]]},
        content_type="application/json",
    )
    assert response.json()["message"] == "1 records from 1 log entries have been restored."


def test_clear_log(login, principal, history):
    delete_student_data("BCSE202201", "marks", semester="1")
    delete_student_data("BCSE202201", "marks", semester="3")

    response = login(principal).post("/administration/deleted-log/")

    assert response.json() == {"success": True, "cleared": 2}
    assert not DeletedDataLog.objects.exists()


def test_faculty_cannot_delete(login, faculty_user, history):
    response = login(faculty_user).post(
        "/administration/delete-data/", {"admissionNumber": "BCSE202201", "tab": "marks"}
    )

    assert response.json() == {"success": False, "error": "Access denied"}
