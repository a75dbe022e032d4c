import pytest

from django.contrib.auth.models import User

from base.models import Profile

pytestmark = pytest.mark.django_db


def student_registration(**overrides):
    data = {
        "register_id": "bcse202201",
        "name": "Diya Reddy",
        "email": "diya@edu.com",
        "mobile_number": "9876543210",
        "father_mobile_number": "9876543211",
        "role": "Student",
        "college": "BRIL",
        "department": "cse",
        "password1": "secret-pass-1",
        "password2": "secret-pass-1",
    }
    data.update(overrides)
    return data


def test_student_registration_waits_for_approval(client):
    response = client.post("/register/", student_registration())

    body = response.json()
    assert body["success"] is True
    assert body["id"] == "BCSE202201"
    assert body["message"] == "Registration successful. Your account is pending approval."

    profile = Profile.objects.get(user__username="BCSE202201")
    assert profile.status == Profile.Status.PENDING
    assert profile.department == "CSE"
    assert profile.user.groups.filter(name="Student").exists()


def test_pending_account_cannot_log_in(client):
    client.post("/register/", student_registration())

    response = client.post(
        "/login/", {"username": "bcse202201", "password": "secret-pass-1"}
    )

    assert response.status_code == 403
    assert response.json()["error"] == "Your account is awaiting approval."


def test_chairman_registration_is_approved_immediately(client):
    response = client.post(
        "/register/",
        {
            "register_id": "chair02",
            "name": "Dr. Chair",
            "role": "Chairman",
            "password1": "secret-pass-1",
            "password2": "secret-pass-1",
        },
    )

    assert response.json()["message"] == "Registration successful."
    assert Profile.objects.get(user__username="CHAIR02").is_approved


@pytest.mark.parametrize(
    "overrides, error",
    [
        ({"password2": "other"}, "Passwords do not match."),
        ({"college": ""}, "Please select a college."),
        ({"father_mobile_number": ""}, "Father's mobile number is required."),
        ({"mobile_number": "12345"}, "Invalid Mobile Number. Must be 10 digits."),
        ({"register_id": "KCSE202201"}, "Register ID must start with 'B' for BRIL."),
    ],
)
def test_registration_errors(client, overrides, error):
    response = client.post("/register/", student_registration(**overrides))

    assert response.status_code == 400
    assert response.json()["error"] == error
    assert not User.objects.filter(username="BCSE202201").exists()


def test_duplicate_register_id(client, make_user):
    make_user("BCSE202201", "Student", "BRIL", "CSE")

    response = client.post("/register/", student_registration())

    assert response.json()["error"] == "User ID 'BCSE202201' already exists."


def test_login_uppercases_the_register_id(client, hod):
    response = client.post("/login/", {"username": "dharmaraj", "password": "password123"})

    body = response.json()
    assert body["success"] is True
    assert body["user"]["role"] == "HOD"
    assert body["user"]["college"] == "BRIL"
    assert body["user"]["department"] == "CSE"


def test_login_with_wrong_password(client, hod):
    response = client.post("/login/", {"username": "DHARMARAJ", "password": "nope"})

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid Credentials!"
