from datetime import date

from base.validators import (
    department_from_id,
    is_valid_email,
    is_valid_mobile,
    luhn_check,
    validate_card_details,
    validate_expiry,
    validate_register_id,
)

TODAY = date(2025, 9, 15)


def test_luhn_accepts_known_test_card():
    assert luhn_check("4111 1111 1111 1111")
    assert luhn_check("4111-1111-1111-1111")


def test_luhn_rejects_bad_checksum_and_short_numbers():
    assert not luhn_check("4111111111111112")
    assert not luhn_check("1234")
    assert not luhn_check("")


def test_mobile_must_be_ten_digits_starting_six_to_nine():
    assert is_valid_mobile("9876543210")
    assert not is_valid_mobile("5876543210")
    assert not is_valid_mobile("98765")


def test_email_format():
    assert is_valid_email("aarav.k@edu.com")
    assert not is_valid_email("aarav.k@edu")
    assert not is_valid_email("aarav k@edu.com")


def test_expiry_checks():
    assert validate_expiry("12/30", TODAY) is None
    assert validate_expiry("09/25", TODAY) is None
    assert validate_expiry("08/25", TODAY) == "Card has expired."
    assert validate_expiry("13/30", TODAY) == "Invalid expiry month."
    assert validate_expiry("1230", TODAY) == "Expiry must be in MM/YY format."


def test_card_details_report_first_error():
    assert validate_card_details("4111111111111111", "12/30", "123", today=TODAY) is None
    assert (
        validate_card_details("4111111111111112", "12/30", "123", today=TODAY)
        == "Invalid card number."
    )
    assert validate_card_details("4111111111111111", "12/30", "12", today=TODAY) == "Invalid CVV."
    assert (
        validate_card_details(
            "4111111111111111", "12/30", "123", mobile="12345", today=TODAY
        )
        == "Invalid Mobile Number. Must be 10 digits."
    )


def test_student_register_id_is_normalised():
    register_id, error = validate_register_id(" bcse202201 ", "Student", "BRIL", "CSE")
    assert register_id == "BCSE202201"
    assert error is None


def test_register_id_needs_college_prefix():
    _, error = validate_register_id("KCSE202201", "Student", "BRIL", "CSE")
    assert error == "Register ID must start with 'B' for BRIL."


def test_faculty_register_id_format():
    assert validate_register_id("BCSE01032020-001", "Faculty", "BRIL", "CSE")[1] is None
    _, error = validate_register_id("BCSE0103-001", "Faculty", "BRIL", "CSE")
    assert error == "Invalid Register ID format for Faculty."


def test_staff_and_chairman_register_ids():
    assert validate_register_id("KSTF15042020-001", "Staff", "KNRR")[1] is None
    assert validate_register_id("CHAIRMAN01", "Chairman", "")[1] is None
    assert validate_register_id("", "Chairman", "")[1] == "Register ID is required."


def test_department_from_id():
    assert department_from_id("BCSE202201") == "CSE"
    assert department_from_id("GECE15022020-001") == "ECE"
    assert department_from_id("CHAIRMAN") is None
