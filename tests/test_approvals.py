import pytest

from django.contrib.auth.models import User

from administration.data_utils import (
    approve_attendance_access,
    get_attendance_requests,
    get_login_requests,
    reject_login,
)
from base.models import Profile

pytestmark = pytest.mark.django_db


@pytest.fixture
def pending_accounts(make_user):
    pending = Profile.Status.PENDING
    return {
        "student": make_user("BCSE202201", "Student", "BRIL", "CSE", status=pending),
        "other_college": make_user("KCSE202201", "Student", "KNRR", "CSE", status=pending),
        "faculty": make_user("BCSE01072021-002", "Faculty", "BRIL", "CSE", status=pending),
        "principal": make_user("PRINCIPAL02", "Principal", "KNRR", status=pending),
    }


def request_ids(requests):
    return sorted(r["id"] for r in requests)


def test_chairman_decides_on_staff_roles_only(chairman, pending_accounts):
    assert request_ids(get_login_requests(chairman)) == [
        "BCSE01072021-002",
        "PRINCIPAL02",
    ]


def test_principal_sees_own_college_without_principals(principal, pending_accounts):
    assert request_ids(get_login_requests(principal)) == [
        "BCSE01072021-002",
        "BCSE202201",
    ]


def test_hod_sees_students_of_own_department(hod, pending_accounts):
    assert request_ids(get_login_requests(hod)) == ["BCSE202201"]


def test_status_filter_includes_decided_requests(hod, pending_accounts):
    assert get_login_requests(hod, Profile.Status.APPROVED) == []
    assert request_ids(get_login_requests(hod, None)) == ["BCSE202201"]


def test_approve_login_request_view(login, hod, pending_accounts):
    client = login(hod)

    response = client.post("/administration/login-requests/bcse202201/approve/")

    assert response.json() == {
        "success": True,
        "message": "Access approved for BCSE202201.",
    }
    profile = Profile.objects.get(user__username="BCSE202201")
    assert profile.is_approved
    assert profile.approved_by == "DHARMARAJ"


def test_hod_cannot_approve_another_college(login, hod, pending_accounts):
    response = login(hod).post("/administration/login-requests/KCSE202201/approve/")

    assert response.json() == {"success": False, "error": "Access request not found."}
    assert not Profile.objects.get(user__username="KCSE202201").is_approved


def test_reject_removes_the_account(login, principal, pending_accounts):
    response = login(principal).post(
        "/administration/login-requests/BCSE01072021-002/reject/"
    )

    assert response.json()["message"] == (
        "Access request from BCSE01072021-002 has been rejected."
    )
    assert not User.objects.filter(username="BCSE01072021-002").exists()


def test_only_pending_requests_can_be_rejected(hod, make_user):
    make_user("BCSE202202", "Student", "BRIL", "CSE")

    with pytest.raises(ValueError, match="Only pending requests can be rejected."):
        reject_login(hod, "BCSE202202")


def test_students_cannot_list_requests(login, student_user):
    response = login(student_user).get("/administration/login-requests/")

    assert response.status_code == 403


def test_attendance_access_flow(login, make_user, faculty_user):
    student = make_user("BCSE202203", "Student", "BRIL", "CSE")

    response = login(student).post("/administration/attendance-access/")
    assert response.json()["message"] == "Online attendance access requested."
    assert request_ids(get_attendance_requests(faculty_user)) == ["BCSE202203"]

    response = login(faculty_user).post(
        "/administration/attendance-access/BCSE202203/approve/"
    )
    assert response.json()["message"] == "Online attendance approved for BCSE202203."

    profile = Profile.objects.get(user=student)
    assert profile.attendance_status == Profile.Status.APPROVED
    assert profile.attendance_approved_by == "BCSE01032020-001"
    assert get_attendance_requests(faculty_user) == []


def test_attendance_requests_follow_department(hod, make_user):
    student = make_user("BECE202203", "Student", "BRIL", "ECE")
    Profile.objects.filter(user=student).update(attendance_status=Profile.Status.PENDING)

    assert get_attendance_requests(hod) == []


def test_staff_cannot_approve_attendance_access(make_user, student_user):
    staff = make_user("KSTF15042020-001", "Staff", "KNRR", "ADMIN")

    with pytest.raises(ValueError, match="not allowed to approve attendance access"):
        approve_attendance_access(staff, student_user.username)


def test_attendance_approval_is_limited_to_visible_requests(login, principal, make_user):
    student = make_user("KCSE202203", "Student", "KNRR", "CSE")
    Profile.objects.filter(user=student).update(attendance_status=Profile.Status.PENDING)

    response = login(principal).post("/administration/attendance-access/KCSE202203/approve/")

    assert response.json() == {"success": False, "error": "Access request not found."}
    assert Profile.objects.get(user=student).attendance_status == Profile.Status.PENDING
