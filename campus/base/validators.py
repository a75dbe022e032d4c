"""
Format checks for register IDs, contact details and card payments.
"""

import re
from datetime import date
from typing import Optional, Tuple

from .constants import Role, college_prefix

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MOBILE_RE = re.compile(r"^[6-9]\d{9}$")
CVV_RE = re.compile(r"^\d{3,4}$")
EXPIRY_RE = re.compile(r"^\d{2}/\d{2}$")
DEPARTMENT_FROM_ID_RE = re.compile(r"^[A-Z]([A-Z]{2,4})\d+")


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_RE.match(value or ""))


def is_valid_mobile(value: str) -> bool:
    return bool(MOBILE_RE.match(value or ""))


def is_valid_cvv(value: str) -> bool:
    return bool(CVV_RE.match(value or ""))


def luhn_check(card_number: str) -> bool:
    """Validate a card number with the Luhn checksum"""
    digits = re.sub(r"[\s-]", "", card_number or "")
    if not digits.isdigit() or not 13 <= len(digits) <= 19:
        return False

    total = 0
    for index, char in enumerate(reversed(digits)):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def validate_expiry(value: str, today: Optional[date] = None) -> Optional[str]:
    """Return an error message for a bad MM/YY expiry, or None when valid"""
    if not EXPIRY_RE.match(value or ""):
        return "Expiry must be in MM/YY format."

    month, year = (int(part) for part in value.split("/"))
    if not 1 <= month <= 12:
        return "Invalid expiry month."

    today = today or date.today()
    if (2000 + year, month) < (today.year, today.month):
        return "Card has expired."
    return None


def validate_card_details(
    card_number: str,
    expiry: str,
    cvv: str,
    email: str = "",
    mobile: str = "",
    today: Optional[date] = None,
) -> Optional[str]:
    """Validate a card payment form; returns the first error found"""
    if not luhn_check(card_number):
        return "Invalid card number."

    expiry_error = validate_expiry(expiry, today)
    if expiry_error:
        return expiry_error

    if not is_valid_cvv(cvv):
        return "Invalid CVV."
    if email and not is_valid_email(email):
        return "Invalid Email Address format."
    if mobile and not is_valid_mobile(mobile):
        return "Invalid Mobile Number. Must be 10 digits."
    return None


def register_id_pattern(role: str, college: str, department: str) -> Optional[str]:
    """Regex a register ID must match for the given role, or None if free-form"""
    prefix = college_prefix(college)
    dept = re.escape(department or "")

    if role == Role.STUDENT:
        return rf"^{prefix}{dept}\d{{4}}\d{{2}}$"
    if role in (Role.FACULTY, Role.HOD):
        return rf"^{prefix}{dept}\d{{8}}-\d{{3}}$"
    if role == Role.STAFF:
        return rf"^{prefix}STF\d{{8}}-\d{{3}}$"
    return None


def validate_register_id(
    register_id: str, role: str, college: str, department: str = ""
) -> Tuple[str, Optional[str]]:
    """Normalise a register ID and check it against the role's format"""
    register_id = (register_id or "").strip().upper()
    if not register_id:
        return register_id, "Register ID is required."

    prefix = college_prefix(college)
    if prefix and not register_id.startswith(prefix):
        return register_id, f"Register ID must start with '{prefix}' for {college}."

    pattern = register_id_pattern(role, college, department)
    if pattern and not re.match(pattern, register_id):
        return register_id, f"Invalid Register ID format for {role}."

    return register_id, None


def department_from_id(user_id: str) -> Optional[str]:
    match = DEPARTMENT_FROM_ID_RE.match((user_id or "").upper())
    return match.group(1) if match else None
