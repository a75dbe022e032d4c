from datetime import date

import pytest

from django.core.files.uploadedfile import SimpleUploadedFile

from attendance import data_utils
from attendance.data_utils import search_student_attendance, upsert_attendance, verify_location
from attendance.models import FacultyAttendance, GpsAnchor, StudentAttendance
from base.models import Profile
from faculty.models import Faculty

pytestmark = pytest.mark.django_db

ROOM = {"lat": 17.329173, "lng": 78.602754}
FAR_AWAY = {"lat": 17.429173, "lng": 78.602754}


@pytest.fixture
def faculty_member(db):
    return Faculty.objects.create(
        faculty_id="BCSE01032020-001",
        faculty_name="Prof. B. Verma",
        college_code="BRIL",
        program_code="CSE",
    )


def test_add_student_attendance_batch(login, faculty_user, students):
    response = login(faculty_user).post(
        "/attendance/student/add/",
        {
            "records": [
                {"admissionNumber": "BCSE202201", "date": "2025-09-12", "morning": "Present", "afternoon": "Absent"},
                {"admissionNumber": "BCSE209999", "date": "2025-09-12", "morning": "Present", "afternoon": "Present"},
                {"admissionNumber": "BCSE202202", "date": "12/09/2025", "morning": "Present", "afternoon": "Present"},
            ]
        },
        content_type="application/json",
    )

    body = response.json()
    assert body["success"] is True
    assert body["saved"] == 1
    assert body["errors"] == [
        "Record 2: student BCSE209999 not found",
        "Record 3: invalid date or session values",
    ]
    assert body["message"] == "Saved 1 records with 2 errors"


def test_add_faculty_attendance_overwrites_the_day(login, principal, faculty_member):
    client = login(principal)
    record = {"facultyId": "bcse01032020-001", "date": "2025-09-15", "morning": "Present", "afternoon": "Present"}

    client.post("/attendance/faculty/add/", record, content_type="application/json")
    client.post(
        "/attendance/faculty/add/",
        {**record, "afternoon": "Absent"},
        content_type="application/json",
    )

    stored = FacultyAttendance.objects.get()
    assert (stored.morning, stored.afternoon) == ("Present", "Absent")


def test_students_cannot_add_attendance(login, student_user):
    response = login(student_user).post("/attendance/student/add/", {})

    assert response.json() == {"success": False, "error": "Access denied"}


def test_import_keeps_present_sessions(login, hod, students, sample_attendance):
    csv_content = (
        b"Admission Number,Date,Morning,Afternoon\n"
        b"BCSE202201,2025-09-15,Absent,Present\n"
        b"BCSE202202,2025-09-16,Present,Maybe\n"
        b"KCSE202001,2025-09-16,Present,Present\n"
    )

    response = login(hod).post(
        "/attendance/import/",
        {"file": SimpleUploadedFile("attendance.csv", csv_content)},
    )

    body = response.json()
    assert body["imported_count"] == 1
    assert body["errors"] == [
        "Row 3: Sessions must be 'Present' or 'Absent'",
        "Row 4: Student KCSE202001 belongs to KNRR",
    ]
    record = StudentAttendance.objects.get(student__admission_number="BCSE202201", date=date(2025, 9, 15))
    assert (record.morning, record.afternoon) == ("Present", "Present")


def test_upsert_without_merge_replaces_sessions(students):
    student = students["BCSE202201"]
    upsert_attendance(StudentAttendance, "student", student, date(2025, 9, 1), "Present", "Present")
    upsert_attendance(StudentAttendance, "student", student, date(2025, 9, 1), "Absent", "Present")

    record = StudentAttendance.objects.get(student=student)
    assert record.morning == "Absent"


def test_search_uses_each_students_semester_window(students):
    student = students["BCSE202201"]
    for on in (date(2025, 6, 30), date(2025, 7, 1), date(2025, 9, 15)):
        StudentAttendance.objects.create(student=student, date=on, morning="Present", afternoon="Present")

    rows = search_student_attendance(semester="7", college="BRIL", department="CSE")

    row = next(r for r in rows if r["admissionNumber"] == "BCSE202201")
    assert row["totalDays"] == 2
    assert row["windowStart"] == "2025-07-01"
    assert row["windowEnd"] == "2025-12-31"
    assert row["rule"] == "Excellent"


def test_search_finds_a_past_semester_of_a_batch(students):
    student = students["BCSE202201"]
    StudentAttendance.objects.create(
        student=student, date=date(2023, 8, 1), morning="Present", afternoon="Present"
    )

    rows = search_student_attendance(semester="3", year="2022-2023", college="BRIL", department="CSE")

    assert [r["admissionNumber"] for r in rows] == ["BCSE202201", "BCSE202202"]
    assert rows[0]["totalDays"] == 1
    assert rows[0]["windowStart"] == "2023-07-01"
    assert rows[0]["windowEnd"] == "2023-12-31"


def test_search_by_name_and_admission_number(login, chairman, students, sample_attendance):
    client = login(chairman)

    by_name = client.get("/attendance/search/", {"college": "BRIL", "name": "DIYA"}).json()
    assert [r["admissionNumber"] for r in by_name["results"]] == ["BCSE202201"]

    by_number = client.get("/attendance/search/", {"admissionNumber": "bcse202202"}).json()
    assert [r["admissionNumber"] for r in by_number["results"]] == ["BCSE202202"]
    assert by_number["results"][0]["totalDays"] == 1


def test_search_is_capped(students, monkeypatch):
    monkeypatch.setattr(data_utils, "SEARCH_LIMIT", 2)

    assert len(search_student_attendance(college="BRIL")) == 2


def test_attendance_export_csv(login, chairman, students, sample_attendance):
    response = login(chairman).get("/attendance/export/csv/", {"college": "BRIL", "department": "CSE"})

    lines = response.content.decode().strip().splitlines()
    assert lines[0].startswith("Admission Number,Student Name")
    assert lines[1] == "BCSE202201,Diya Reddy,BRIL,CSE,01,2,1,1,0,75.0"


def test_first_fix_of_the_day_is_anchored(hod):
    first = verify_location(hod, ROOM["lat"], ROOM["lng"], today=date(2025, 9, 15))
    second = verify_location(hod, FAR_AWAY["lat"], FAR_AWAY["lng"], today=date(2025, 9, 15))

    assert first["withinRange"] is True
    assert first["anchored"] is False
    assert second["anchored"] is True
    assert second["lat"] == ROOM["lat"]
    assert second["withinRange"] is True
    assert GpsAnchor.objects.count() == 1


def test_verify_location_view_needs_coordinates(login, hod):
    response = login(hod).post("/attendance/verify-location/", {"lat": "17.3"})

    assert response.status_code == 400
    assert response.json()["error"] == "Missing parameters"


def test_online_attendance_requires_approval(login, faculty_user, faculty_member):
    response = login(faculty_user).post("/attendance/online/", {"session": "morning", **ROOM})

    assert response.json()["error"] == "Online attendance access has not been approved."


def test_online_attendance_marks_one_session(login, faculty_user, faculty_member):
    Profile.objects.filter(user=faculty_user).update(attendance_status=Profile.Status.APPROVED)
    client = login(faculty_user)

    response = client.post("/attendance/online/", {"session": "afternoon", **ROOM})

    assert response.json()["message"] == "Afternoon attendance marked."
    record = FacultyAttendance.objects.get(faculty=faculty_member, date=date.today())
    assert (record.morning, record.afternoon) == ("Absent", "Present")


def test_online_attendance_out_of_range(login, faculty_user, faculty_member):
    Profile.objects.filter(user=faculty_user).update(attendance_status=Profile.Status.APPROVED)

    body = login(faculty_user).post("/attendance/online/", {"session": "morning", **FAR_AWAY}).json()

    assert body["success"] is False
    assert body["withinRange"] is False
    assert not FacultyAttendance.objects.exists()


def test_attendance_rule_view(login, student_user):
    body = login(student_user).get("/attendance/rules/", {"percentage": "66.5"}).json()

    assert body["band"] == "Condonation"
    assert body["detained"] is False


@pytest.mark.parametrize("value", ["nan", "inf", "-inf", "abc"])
def test_attendance_rule_rejects_invalid_percentages(login, student_user, value):
    response = login(student_user).get("/attendance/rules/", {"percentage": value})

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Invalid percentage"}
