import pytest

from django.core.files.uploadedfile import SimpleUploadedFile

from academics import views as academics_views
from academics.data_utils import (
    add_student_mark,
    delete_syllabus,
    filter_marks,
    get_subjects,
    list_syllabi,
    save_syllabus,
)
from academics.models import StudentMark, Syllabus
from students.models import Student

pytestmark = pytest.mark.django_db


def record_mark(admission_number, semester, code, name, internal, external):
    return add_student_mark(
        {
            "admissionNumber": admission_number,
            "semester": semester,
            "subjectCode": code,
            "subjectName": name,
            "internalMark": internal,
            "externalMark": external,
        }
    )


@pytest.fixture
def marks(students):
    record_mark("BCSE202201", 7, "CSE701", "Cloud Computing", 25, 50)
    record_mark("BCSE202201", 7, "CSE702", "Compiler Design", 22, 40)
    record_mark("BCSE202202", 7, "CSE701", "Cloud Computing", 10, 50)
    record_mark("BECE202401", 3, "ECE301", "Signals", 20, 30)
    return students


def test_add_mark_creates_unknown_student(db):
    mark = add_student_mark(
        {
            "admissionNumber": "gece202301",
            "studentName": "Karthik Rao",
            "programCode": "ece",
            "semester": "3",
            "subjectCode": "ece301",
            "internalMark": "20",
            "externalMark": "35",
        }
    )

    student = Student.objects.get(admission_number="GECE202301")
    assert student.college_code == "BRIG"
    assert student.program_code == "ECE"
    assert mark.subject_code == "ECE301"
    assert mark.subject_name == "ECE301"
    assert mark.marks_obtained == 55


def test_add_mark_updates_in_place(marks):
    record_mark("BCSE202201", 7, "CSE701", "Cloud Computing", 28, 60)

    mark = StudentMark.objects.get(student__admission_number="BCSE202201", subject_code="CSE701")
    assert mark.marks_obtained == 88
    assert StudentMark.objects.filter(subject_code="CSE701").count() == 2


@pytest.mark.parametrize(
    "data, error",
    [
        ({"admissionNumber": "BCSE202201", "subjectCode": "CSE701"}, "are required"),
        (
            {"admissionNumber": "BCSE202201", "subjectCode": "CSE701", "semester": "7", "internalMark": "x"},
            "Marks and semester must be numeric.",
        ),
    ],
)
def test_add_mark_validation(students, data, error):
    with pytest.raises(ValueError, match=error):
        add_student_mark(data)


def test_get_subjects(marks):
    assert get_subjects("CSE", "7") == ["Cloud Computing", "Compiler Design"]
    assert get_subjects("ECE") == ["Signals"]
    assert get_subjects("All", "All Semesters") == [
        "Cloud Computing",
        "Compiler Design",
        "Signals",
    ]


def test_filter_marks_uses_the_batch_in_that_semester(marks):
    assert filter_marks(semester="7", college="BRIL").count() == 3
    assert filter_marks(semester="3", college="BRIL").count() == 1
    assert filter_marks(subject="cloud computing").count() == 2


def test_result_sheet_view(login, hod, marks):
    body = login(hod).get("/academics/results/").json()

    results = {row["admissionNumber"]: row["result"] for row in body["students"]}
    assert results == {"BCSE202201": "Pass", "BCSE202202": "Fail"}
    assert body["statistics"]["passCount"] == 1
    assert body["statistics"]["passPercentage"] == 50.0


def test_export_results_csv(login, chairman, marks):
    response = login(chairman).get("/academics/results/export/csv/", {"subject": "Signals"})

    lines = response.content.decode().strip().splitlines()
    assert response["Content-Disposition"] == 'attachment; filename="results.csv"'
    assert lines[0].startswith("Admission Number,Student Name,Semester")
    assert lines[1].startswith("BECE202401,Meera Iyer,3,ECE301")


def test_students_cannot_see_result_sheet(login, student_user):
    assert login(student_user).get("/academics/results/").status_code == 403


def test_marksheet_download(login, student_user, marks, monkeypatch):
    record_mark("KCSE202001", 8, "CSE801", "Project", 30, 60)
    monkeypatch.setattr(academics_views, "generate_marksheet_pdf", lambda *args: b"%PDF-1.4")

    response = login(student_user).get("/academics/marksheet/KCSE202001/8/")

    assert response.status_code == 200
    assert response["Content-Disposition"] == (
        'attachment; filename="marksheet_KCSE202001_sem8.pdf"'
    )


def test_marksheet_errors(login, student_user, marks, monkeypatch):
    client = login(student_user)

    assert client.get("/academics/marksheet/BCSE202201/7/").status_code == 403
    assert client.get("/academics/marksheet/KCSE202001/1/").status_code == 404

    def broken(*args):
        raise OSError("wkhtmltopdf not found")

    record_mark("KCSE202001", 8, "CSE801", "Project", 30, 60)
    monkeypatch.setattr(academics_views, "generate_marksheet_pdf", broken)
    assert client.get("/academics/marksheet/KCSE202001/8/").status_code == 500


def test_syllabus_replaces_file_with_same_name(hod):
    save_syllabus("cse", SimpleUploadedFile("r22.pdf", b"%PDF old"), hod)
    syllabus = save_syllabus("CSE", SimpleUploadedFile("r22.pdf", b"%PDF new"), hod)

    assert Syllabus.objects.count() == 1
    assert syllabus.syllabus_id == "CSE-r22.pdf"
    with syllabus.file.open("rb") as f:
        assert f.read() == b"%PDF new"

    listed = list_syllabi("cse")
    assert [s["fileName"] for s in listed] == ["r22.pdf"]
    assert listed[0]["uploadedBy"] == "DHARMARAJ"


def test_delete_syllabus(hod):
    save_syllabus("ECE", SimpleUploadedFile("ece-r22.pdf", b"%PDF"), hod)

    assert delete_syllabus("ECE-ece-r22.pdf") is True
    assert delete_syllabus("ECE-ece-r22.pdf") is False
    assert not Syllabus.objects.exists()


def test_upload_syllabus_view_only_accepts_pdf(login, faculty_user):
    client = login(faculty_user)

    response = client.post(
        "/academics/syllabus/upload/",
        {"department": "CSE", "file": SimpleUploadedFile("notes.docx", b"doc")},
    )
    assert response.json() == {"success": False, "error": "Only PDF files are allowed."}

    response = client.post(
        "/academics/syllabus/upload/",
        {"department": "CSE", "file": SimpleUploadedFile("r22.pdf", b"%PDF")},
    )
    body = response.json()
    assert body["success"] is True
    assert body["syllabus"]["id"] == "CSE-r22.pdf"


def test_students_cannot_upload_syllabus(login, student_user):
    response = login(student_user).post(
        "/academics/syllabus/upload/",
        {"department": "CSE", "file": SimpleUploadedFile("r22.pdf", b"%PDF")},
    )

    assert response.json() == {"success": False, "error": "Access denied"}
