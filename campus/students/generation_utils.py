"""
Admission-number parsing, semester/academic-year bucketing and fee arithmetic.

Everything here is pure so the same rules back the views, uploads, deletions
and the seed command.
"""

import re
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple, Union

from base.constants import (
    ALL_SUBJECTS_COUNT,
    EXAM_FEE_BY_SUBJECTS,
    EXAM_FEE_FULL,
)

ADMISSION_YEAR_RE = re.compile(r"[a-zA-Z]+(\d{4})")
CURRENT_SEMESTER_RE = re.compile(r"[a-zA-Z]{2,4}(\d{4})")
ACADEMIC_YEAR_RE = re.compile(r"^(\d{4})-(\d{4})$")

GRADUATED = "Graduated"
NOT_AVAILABLE = "N/A"

Number = Union[int, float, Decimal]


# ==================== ADMISSION NUMBERS ====================


def admission_year(admission_number: str) -> Optional[int]:
    """Year embedded after the letter prefix, e.g. KCSE202001 -> 2020"""
    match = ADMISSION_YEAR_RE.search(admission_number or "")
    return int(match.group(1)) if match else None


def roll_no_from_admission(admission_number: str) -> str:
    return (admission_number or "").strip().upper()[-2:]


def current_semester(
    admission_number: str, today: Optional[date] = None
) -> Union[int, str]:
    """Semester a student is in today, "Graduated" past the eighth, or "N/A"."""
    match = CURRENT_SEMESTER_RE.search(admission_number or "")
    if not match:
        return NOT_AVAILABLE

    today = today or date.today()
    diff = today.year - int(match.group(1))
    if today.month >= 7:
        semester = diff * 2 + 1
    else:
        semester = (diff - 1) * 2 + 2

    if semester > 8:
        return GRADUATED
    if semester > 0:
        return semester
    return NOT_AVAILABLE


def admission_year_for_semester(semester: int, reference_date: date) -> int:
    """Admission batch currently sitting in a semester on the reference date"""
    return reference_date.year - (int(semester) - 1) // 2


# ==================== ACADEMIC YEARS ====================


def academic_year_label(start_year: int) -> str:
    return f"{start_year}-{start_year + 1}"


def academic_year_start(academic_year: str) -> Optional[int]:
    match = ACADEMIC_YEAR_RE.match((academic_year or "").strip())
    if match:
        return int(match.group(1))
    head = (academic_year or "").split("-")[0].strip()
    return int(head) if head.isdigit() else None


def academic_year_for_semester(admission_yr: int, semester: int) -> str:
    """Academic year in which a batch sits the given semester"""
    return academic_year_label(admission_yr + (int(semester) - 1) // 2)


def semesters_for_academic_year(
    admission_yr: int, academic_year: str
) -> Tuple[int, int]:
    """Odd and even semester a batch sits during an academic year"""
    offset = academic_year_start(academic_year) - admission_yr
    return offset * 2 + 1, offset * 2 + 2


def academic_years_for_admission(admission_number: str, count: int = 4):
    start = admission_year(admission_number)
    if start is None:
        return []
    return [academic_year_label(start + i) for i in range(count)]


# ==================== FEES ====================


def fee_status(due_amount: Number, paid_amount: Number) -> str:
    if due_amount <= 0:
        return "Paid"
    if paid_amount > 0:
        return "Partial"
    return "Due"


def exam_fee(subject_count: int, late_fee: Number = 0, all_subjects: bool = False):
    """Exam fee for a number of subjects plus any late fee"""
    count = ALL_SUBJECTS_COUNT if all_subjects else int(subject_count)
    base_fee = EXAM_FEE_BY_SUBJECTS.get(count, EXAM_FEE_FULL)
    return base_fee + (late_fee or 0)


def apply_tuition_payment(
    total_fees: Number, previous_paid: Number, amount: Number
) -> Tuple[Number, Number, str]:
    """New cumulative paid, due and status after a tuition payment"""
    paid = previous_paid + amount
    due = max(0, total_fees - paid)
    status = "Paid" if due <= 0 else "Partial"
    return paid, due, status


def apply_exam_payment(exam_fee_total: Number, amount: Number) -> Tuple[Number, str]:
    if amount < exam_fee_total:
        return exam_fee_total - amount, "Partial"
    return 0, "Paid"
