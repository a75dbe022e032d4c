from datetime import date

import pytest

from attendance.models import StudentAttendance
from base.constants import College, Role
from base.models import Profile
from base.views import create_user_with_profile
from students.models import Student


@pytest.fixture(autouse=True)
def campus_settings(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "media"
    settings.DEMO_MODE = False
    settings.LATEST_ATTENDANCE_DATE = "2025-09-15"
    settings.ROOM_LATITUDE = 17.329173
    settings.ROOM_LONGITUDE = 78.602754
    settings.LOCATION_RADIUS_METERS = 100
    return settings.MEDIA_ROOT


@pytest.fixture
def make_user(db):
    def _make_user(username, role, college=None, department="", **kwargs):
        kwargs.setdefault("status", Profile.Status.APPROVED)
        return create_user_with_profile(
            username=username,
            password="password123",
            role=role,
            name=kwargs.pop("name", username.title()),
            college=college,
            department=department,
            **kwargs,
        )

    return _make_user


@pytest.fixture
def chairman(make_user):
    return make_user("CHAIRMAN01", Role.CHAIRMAN)


@pytest.fixture
def principal(make_user):
    return make_user("PRINCIPAL01", Role.PRINCIPAL, College.BRIL)


@pytest.fixture
def hod(make_user):
    return make_user("DHARMARAJ", Role.HOD, College.BRIL, "CSE")


@pytest.fixture
def faculty_user(make_user):
    return make_user("BCSE01032020-001", Role.FACULTY, College.BRIL, "CSE")


@pytest.fixture
def student_user(make_user):
    return make_user("KCSE202001", Role.STUDENT, College.KNRR, "CSE")


@pytest.fixture
def login(client):
    def _login(user):
        client.force_login(user)
        return client

    return _login


@pytest.fixture
def students(db):
    rows = [
        ("KCSE202001", College.KNRR, "CSE", "Aarav Kapoor"),
        ("BCSE202201", College.BRIL, "CSE", "Diya Reddy"),
        ("BCSE202202", College.BRIL, "CSE", "Rohan Sharma"),
        ("BECE202401", College.BRIL, "ECE", "Meera Iyer"),
        ("GCSE202501", College.BRIG, "CSE", "Kiara Rao"),
    ]
    return {
        admission_number: Student.objects.create(
            admission_number=admission_number,
            college_code=college,
            program_code=department,
            roll_no=admission_number[-2:],
            student_name=name,
        )
        for admission_number, college, department, name in rows
    }


@pytest.fixture
def sample_attendance(students):
    """Two September days for the 2022 BRIL CSE batch"""
    student = students["BCSE202201"]
    StudentAttendance.objects.create(
        student=student, date=date(2025, 9, 12), morning="Present", afternoon="Present"
    )
    StudentAttendance.objects.create(
        student=student, date=date(2025, 9, 15), morning="Present", afternoon="Absent"
    )
    StudentAttendance.objects.create(
        student=students["BCSE202202"],
        date=date(2025, 9, 15),
        morning="Present",
        afternoon="Present",
    )
    return student
