import pytest

from students.models import StudentFee

pytestmark = pytest.mark.django_db

CARD = {"card_number": "4111111111111111", "expiry": "12/99", "cvv": "123"}


def pay(client, **data):
    return client.post("/students/fees/pay/", {**CARD, **data}, content_type="application/json")


def test_search_by_name(login, chairman, students):
    body = login(chairman).get("/students/search/", {"name": "reddy"}).json()

    assert [s["admissionNumber"] for s in body["results"]] == ["BCSE202201"]


def test_hod_search_is_limited_to_own_department(login, hod, students):
    body = login(hod).get("/students/search/", {"college": "KNRR"}).json()

    assert [s["admissionNumber"] for s in body["results"]] == ["BCSE202201", "BCSE202202"]


def test_search_by_semester_uses_current_batch(login, chairman, students):
    body = login(chairman).get("/students/search/", {"semester": "1"}).json()

    assert [s["admissionNumber"] for s in body["results"]] == ["GCSE202501"]


def test_student_sees_only_own_details(login, student_user, students, sample_attendance):
    client = login(student_user)

    response = client.get("/students/KCSE202001/")
    assert response.json()["student"]["studentName"] == "Aarav Kapoor"
    assert response.json()["student"]["academicResult"] == "N/A"

    assert client.get("/students/BCSE202201/").status_code == 403
    assert client.get("/students/search/").status_code == 403


def test_details_include_attendance_summary(login, principal, students, sample_attendance):
    student = login(principal).get("/students/bcse202201/").json()["student"]

    summary = student["attendanceSummary"]
    assert summary["totalDays"] == 2
    assert summary["fullDays"] == 1
    assert summary["halfDays"] == 1
    assert summary["percentage"] == 75.0
    assert summary["rule"]["band"] == "Minimum Required"


def test_unknown_student(login, chairman, db):
    response = login(chairman).get("/students/BCSE209999/")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Student not found"}


def test_filtered_details_respect_date_range(login, chairman, students, sample_attendance):
    body = login(chairman).get(
        "/students/filtered/",
        {"college": "BRIL", "department": "CSE", "startDate": "2025-09-15"},
    ).json()

    rows = {r["admissionNumber"]: r for r in body["results"]}
    assert rows["BCSE202201"]["totalDays"] == 1
    assert rows["BCSE202201"]["percentage"] == 50.0
    assert rows["BCSE202202"]["percentage"] == 100.0


def test_student_report_pdf(login, chairman, students, sample_attendance):
    response = login(chairman).get("/students/BCSE202201/report/")

    assert response.status_code == 200
    assert response["Content-Type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")


def test_tuition_payments_accumulate(login, student_user, students):
    client = login(student_user)

    response = pay(
        client,
        admission_number="KCSE202001",
        fee_type="Tuition",
        academic_year="2025-2026",
        amount=50000,
    )
    body = response.json()
    assert body["message"] == "Payment of ₹50,000 successful for Tuition Fees!"
    assert body["fee"]["status"] == "Partial"
    assert body["fee"]["dueAmount"] == 70000

    body = pay(
        client,
        admission_number="KCSE202001",
        fee_type="Tuition",
        academic_year="2025-2026",
        amount=70000,
    ).json()
    assert body["fee"]["status"] == "Paid"
    assert body["fee"]["paidAmount"] == 120000
    assert StudentFee.objects.filter(student=students["KCSE202001"]).count() == 1


def test_exam_fee_defaults_to_subject_count(login, student_user, students):
    body = pay(
        login(student_user),
        admission_number="KCSE202001",
        fee_type="Exam",
        academic_year="2025-2026",
        semester=8,
        subject_count=2,
    ).json()

    assert body["message"] == "Payment of ₹460 successful for Exam Fees!"
    assert body["fee"]["semester"] == 8
    assert body["fee"]["status"] == "Paid"


@pytest.mark.parametrize(
    "overrides, error",
    [
        ({"card_number": "4111111111111112"}, "Invalid card number."),
        ({"expiry": "01/20"}, "Card has expired."),
        ({"fee_type": "Exam"}, "Semester is required for exam fees."),
        ({"admission_number": "BCSE202201"}, "Access denied"),
    ],
)
def test_payment_errors(login, student_user, students, overrides, error):
    data = {
        "admission_number": "KCSE202001",
        "fee_type": "Tuition",
        "academic_year": "2025-2026",
        "amount": 1000,
        **overrides,
    }

    body = pay(login(student_user), **data).json()

    assert body == {"success": False, "error": error}
    assert not StudentFee.objects.exists()


def test_add_fee_and_search(login, chairman, students):
    client = login(chairman)

    response = client.post(
        "/students/fees/add/",
        {
            "admissionNumber": "BCSE202201",
            "academicYear": "2025-2026",
            "totalFees": "120000",
            "paidAmount": "120000",
        },
    )
    assert response.json()["message"] == "Fee details for BCSE202201 saved successfully."

    results = client.get("/students/fees/search/", {"academicYear": "2025"}).json()["results"]
    assert len(results) == 1
    assert results[0]["status"] == "Paid"
    assert results[0]["studentName"] == "Diya Reddy"


def test_fee_export_is_closed_to_faculty(login, faculty_user, students):
    assert login(faculty_user).get("/students/fees/export/csv/").status_code == 403


def test_placement_flow(login, hod, students):
    client = login(hod)

    response = client.post(
        "/students/placements/add/",
        {
            "admissionNumber": "bcse202201",
            "companyName": "Infosys",
            "hrName": "Priya Sharma",
            "year": "4",
            "semester": "7",
            "academicYear": "2025-2026",
        },
    )
    assert response.json()["success"] is True

    results = client.get("/students/placements/search/", {"company": "info"}).json()["results"]
    assert [r["admissionNumber"] for r in results] == ["BCSE202201"]
    assert results[0]["isPlaced"] is True

    response = client.get("/students/placements/export/csv/")
    lines = response.content.decode().strip().splitlines()
    assert lines[0].startswith("S.NO,COLLEGE CODE,ADMISSION NUMBER")
    assert lines[1].startswith("1,BRIL,BCSE202201,Diya Reddy,CSE,4,7th,")


def test_fee_export_excel(login, principal, students):
    response = login(principal).get("/students/fees/export/excel/")

    assert response["Content-Disposition"] == 'attachment; filename="student_fees.xlsx"'
    assert response.content[:2] == b"PK"
