"""
College-wide constants shared by every app.
"""

from django.db import models


class Role(models.TextChoices):
    CHAIRMAN = "Chairman"
    PRINCIPAL = "Principal"
    HOD = "HOD"
    FACULTY = "Faculty"
    STAFF = "Staff"
    STUDENT = "Student"


class College(models.TextChoices):
    ALL = "ALL", "All Colleges Overview"
    BRIL = "BRIL"
    BRIG = "BRIG"
    KNRR = "KNRR"


COLLEGE_CODES = {
    College.BRIL: "B",
    College.BRIG: "G",
    College.KNRR: "K",
}

DEPARTMENTS = ["CSE", "ECE", "EEE", "MECH", "CIVIL", "HS", "CSM", "CSD", "CSC"]

STAFF_DEPARTMENT = "ADMIN"

# JNTUH pass thresholds, per subject
INTERNAL_MIN = 14
EXTERNAL_MIN = 21
TOTAL_MIN = 40

DEFAULT_MAX_MARKS = 100

ATTENDANCE_RULE_BANDS = [
    (100, "Excellent"),
    (95, "Very Good"),
    (90, "Good"),
    (85, "Satisfactory"),
    (75, "Minimum Required"),
    (65, "Condonation"),
    (60, "Medical Condonation"),
    (0, "Severe Shortage"),
]

DETENTION_THRESHOLD = 65

# Exam fee by number of subjects; four or more pay the full-semester fee.
EXAM_FEE_BY_SUBJECTS = {0: 0, 1: 360, 2: 460, 3: 560}
EXAM_FEE_FULL = 760
ALL_SUBJECTS_COUNT = 4

# Annual tuition by program
FEE_STRUCTURE = {
    "CSE": 120000,
    "ECE": 100000,
    "EEE": 90000,
    "MECH": 85000,
    "CIVIL": 80000,
    "HS": 60000,
    "CSM": 125000,
    "CSD": 125000,
    "CSC": 120000,
}

SEARCH_LIMIT = 100

ALL_YEARS = "All Years"
ALL_SEMESTERS = "All Semesters"
ALL_SUBJECTS = "All Subjects"


def college_prefix(college: str) -> str:
    """Single-letter register prefix for a college, empty for unknown colleges."""
    return COLLEGE_CODES.get(college, "")


def college_for_prefix(prefix: str):
    for college, code in COLLEGE_CODES.items():
        if code == prefix:
            return college
    return None
