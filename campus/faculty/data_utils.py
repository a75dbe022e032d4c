"""
Lookups, filters and attendance summaries for faculty and administrative staff.
"""

from typing import Any, Dict, List, Optional

from attendance.summary import attendance_rule_band, detailed_metrics
from base.constants import College
from students.data_utils import normalize_filter, parse_date, serialize_attendance
from .models import Faculty, Staff

FACULTY_CSV_HEADERS = [
    "Faculty ID",
    "Faculty Name",
    "College",
    "Department",
    "Gender",
    "Total Days",
    "Present Days",
    "Absent Days",
    "Half Days",
]

STAFF_CSV_HEADERS = [
    "Staff ID",
    "Staff Name",
    "College",
    "Department",
    "Gender",
    "Total Days",
    "Present Days",
    "Absent Days",
    "Half Days",
]


def filter_faculty(college=None, department=None):
    queryset = Faculty.objects.all()
    college = normalize_filter(college)
    if college and college != College.ALL:
        queryset = queryset.filter(college_code=college)
    department = normalize_filter(department)
    if department:
        queryset = queryset.filter(program_code__iexact=department)
    return queryset


def filter_staff(college=None):
    queryset = Staff.objects.all()
    college = normalize_filter(college)
    if college and college != College.ALL:
        queryset = queryset.filter(college_code=college)
    return queryset


def get_faculty_or_none(faculty_id: str) -> Optional[Faculty]:
    try:
        return Faculty.objects.get(faculty_id__iexact=(faculty_id or "").strip())
    except Faculty.DoesNotExist:
        return None


def get_staff_or_none(staff_id: str) -> Optional[Staff]:
    try:
        return Staff.objects.get(staff_id__iexact=(staff_id or "").strip())
    except Staff.DoesNotExist:
        return None


def serialize_faculty(faculty: Faculty) -> Dict[str, Any]:
    return {
        "facultyId": faculty.faculty_id,
        "facultyName": faculty.faculty_name,
        "collegeCode": faculty.college_code,
        "programCode": faculty.program_code,
        "gender": faculty.gender,
    }


def serialize_staff(staff: Staff) -> Dict[str, Any]:
    return {
        "staffId": staff.staff_id,
        "staffName": staff.staff_name,
        "collegeCode": staff.college_code,
        "programCode": staff.program_code,
        "gender": staff.gender,
    }


def _details(person, serialized):
    records = list(person.attendance.all())
    metrics = detailed_metrics(records)
    return {
        **serialized,
        "attendance": [serialize_attendance(a) for a in records],
        "attendanceSummary": {
            **metrics,
            "rule": attendance_rule_band(metrics["percentage"]),
        },
    }


def get_faculty_details(faculty_id: str) -> Optional[Dict[str, Any]]:
    faculty = get_faculty_or_none(faculty_id)
    if faculty is None:
        return None
    return _details(faculty, serialize_faculty(faculty))


def get_staff_details(staff_id: str) -> Optional[Dict[str, Any]]:
    staff = get_staff_or_none(staff_id)
    if staff is None:
        return None
    return _details(staff, serialize_staff(staff))


def _range_summary(person, serialized, start_date, end_date):
    start_date = parse_date(start_date)
    end_date = parse_date(end_date)
    records = person.attendance.all()
    if start_date:
        records = records.filter(date__gte=start_date)
    if end_date:
        records = records.filter(date__lte=end_date)

    metrics = detailed_metrics(records)
    return {
        **serialized,
        "totalDays": metrics["totalDays"],
        "presentDays": metrics["presentDays"],
        "absentDays": metrics["absentDays"],
        "halfDays": metrics["halfDays"],
    }


def get_filtered_faculty_details(
    faculty_id: str, start_date=None, end_date=None
) -> List[Dict[str, Any]]:
    """Attendance totals for one faculty member over an inclusive date range"""
    if not faculty_id or faculty_id.lower() == "all":
        return []
    faculty = get_faculty_or_none(faculty_id)
    if faculty is None:
        return []
    return [_range_summary(faculty, serialize_faculty(faculty), start_date, end_date)]


def get_filtered_staff_details(
    staff_id: str, start_date=None, end_date=None
) -> List[Dict[str, Any]]:
    if not staff_id or staff_id.lower() == "all":
        return []
    staff = get_staff_or_none(staff_id)
    if staff is None:
        return []
    return [_range_summary(staff, serialize_staff(staff), start_date, end_date)]


def csv_row(row: Dict[str, Any], id_key: str, name_key: str) -> List[Any]:
    return [
        row[id_key],
        row[name_key],
        row["collegeCode"],
        row["programCode"],
        row["gender"],
        row["totalDays"],
        row["presentDays"],
        row["absentDays"],
        row["halfDays"],
    ]
