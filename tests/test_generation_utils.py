from datetime import date

from students.generation_utils import (
    GRADUATED,
    NOT_AVAILABLE,
    academic_year_for_semester,
    academic_year_start,
    academic_years_for_admission,
    admission_year,
    admission_year_for_semester,
    apply_exam_payment,
    apply_tuition_payment,
    current_semester,
    exam_fee,
    fee_status,
    roll_no_from_admission,
    semesters_for_academic_year,
)


def test_admission_year_and_roll_no():
    assert admission_year("KCSE202001") == 2020
    assert admission_year("bece202401") == 2024
    assert admission_year("no-year") is None
    assert roll_no_from_admission("bcse202207") == "07"


def test_current_semester_switches_in_july():
    assert current_semester("BCSE202201", date(2025, 9, 15)) == 7
    assert current_semester("BCSE202201", date(2025, 3, 1)) == 6
    assert current_semester("BCSE202501", date(2025, 7, 1)) == 1
    assert current_semester("BCSE202501", date(2026, 1, 10)) == 2


def test_current_semester_outside_the_course():
    assert current_semester("KCSE202001", date(2025, 9, 15)) == GRADUATED
    assert current_semester("BCSE202601", date(2025, 9, 15)) == NOT_AVAILABLE
    assert current_semester("12345", date(2025, 9, 15)) == NOT_AVAILABLE


def test_batch_sitting_a_semester():
    reference = date(2025, 9, 15)
    assert admission_year_for_semester(1, reference) == 2025
    assert admission_year_for_semester(3, reference) == 2024
    assert admission_year_for_semester(7, reference) == 2022


def test_academic_year_helpers():
    assert academic_year_start("2024-2025") == 2024
    assert academic_year_start("2024") == 2024
    assert academic_year_start("All Years") is None
    assert academic_year_for_semester(2022, 1) == "2022-2023"
    assert academic_year_for_semester(2022, 4) == "2023-2024"
    assert semesters_for_academic_year(2022, "2024-2025") == (5, 6)
    assert academic_years_for_admission("BCSE202201") == [
        "2022-2023",
        "2023-2024",
        "2024-2025",
        "2025-2026",
    ]
    assert academic_years_for_admission("ADMIN") == []


def test_fee_status():
    assert fee_status(0, 120000) == "Paid"
    assert fee_status(60000, 60000) == "Partial"
    assert fee_status(120000, 0) == "Due"


def test_exam_fee_by_subject_count():
    assert exam_fee(0) == 0
    assert exam_fee(1) == 360
    assert exam_fee(2) == 460
    assert exam_fee(3, late_fee=100) == 660
    assert exam_fee(6) == 760
    assert exam_fee(0, all_subjects=True) == 760


def test_tuition_payments_accumulate():
    paid, due, status = apply_tuition_payment(120000, 0, 50000)
    assert (paid, due, status) == (50000, 70000, "Partial")

    paid, due, status = apply_tuition_payment(120000, paid, 80000)
    assert (paid, due, status) == (130000, 0, "Paid")


def test_exam_payment():
    assert apply_exam_payment(460, 200) == (260, "Partial")
    assert apply_exam_payment(460, 460) == (0, "Paid")
