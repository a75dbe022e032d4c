"""
Attendance writes, row imports, semester-window searches and GPS anchoring.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from django.conf import settings

from base.constants import SEARCH_LIMIT
from students.data_utils import (
    filter_students,
    get_student_or_none,
    normalize_filter,
    parse_date,
    serialize_student,
)
from students.generation_utils import admission_year
from .models import GpsAnchor, Session, StudentAttendance
from .summary import (
    attendance_percentage,
    attendance_rule_band,
    count_days,
    haversine_distance,
    merge_session,
    semester_window,
    FULL_DAY,
    HALF_DAY,
    ABSENT_DAY,
)

logger = logging.getLogger(__name__)

ATTENDANCE_CSV_HEADERS = [
    "Admission Number",
    "Student Name",
    "College",
    "Department",
    "Roll No",
    "Total Days",
    "Full Days",
    "Half Days",
    "Absent Days",
    "Percentage",
]

_SESSION_ALIASES = {
    "present": Session.PRESENT,
    "p": Session.PRESENT,
    "absent": Session.ABSENT,
    "a": Session.ABSENT,
}


def normalize_session(value: str) -> Optional[str]:
    return _SESSION_ALIASES.get((value or "").strip().lower())


def upsert_attendance(model, person_field: str, person, on_date, morning, afternoon, merge=False):
    """Create or update one day; with merge an Absent keeps the stored session"""
    record = model.objects.filter(**{person_field: person, "date": on_date}).first()
    if record is None:
        return model.objects.create(
            **{person_field: person},
            date=on_date,
            morning=morning,
            afternoon=afternoon,
        )

    if merge:
        record.morning = merge_session(record.morning, morning)
        record.afternoon = merge_session(record.afternoon, afternoon)
    else:
        record.morning = morning
        record.afternoon = afternoon
    record.save()
    return record


def process_attendance_row(
    row: Dict[str, str], row_num: int, college: Optional[str] = None
) -> Tuple[bool, Optional[str]]:
    """Process a single student attendance row from CSV/Excel"""
    admission_number = row.get("admissionnumber", "").upper()
    date_str = row.get("date", "")
    morning = normalize_session(row.get("morning", ""))
    afternoon = normalize_session(row.get("afternoon", ""))

    # Skip empty rows
    if not any([admission_number, date_str, row.get("morning"), row.get("afternoon")]):
        return False, None

    if not all([admission_number, date_str]):
        return False, f"Row {row_num}: Missing required fields"

    if morning is None or afternoon is None:
        return False, f"Row {row_num}: Sessions must be 'Present' or 'Absent'"

    attendance_date = parse_date(date_str)
    if not attendance_date:
        return False, f"Row {row_num}: Invalid date format '{date_str}'"

    student = get_student_or_none(admission_number)
    if student is None:
        return False, f"Row {row_num}: Student {admission_number} not found"

    if college and student.college_code != college:
        return False, f"Row {row_num}: Student {admission_number} belongs to {student.college_code}"

    upsert_attendance(
        StudentAttendance,
        "student",
        student,
        attendance_date,
        morning,
        afternoon,
        merge=True,
    )
    return True, None


def search_student_attendance(
    semester=None, start_date=None, end_date=None, name=None, admission_number=None, **filters
) -> List[Dict[str, Any]]:
    """
    Attendance summary per student. The population is never narrowed by
    semester: a semester only selects each student's own semester window,
    and explicit start/end dates narrow (or replace) it.
    """
    semester = normalize_filter(semester)
    start_date = parse_date(start_date)
    end_date = parse_date(end_date)

    queryset = filter_students(**filters)

    name = normalize_filter(name)
    if name:
        queryset = queryset.filter(student_name__icontains=name)

    admission_number = normalize_filter(admission_number)
    if admission_number:
        queryset = queryset.filter(admission_number__iexact=admission_number)

    results = []
    students = queryset.prefetch_related("attendance")[:SEARCH_LIMIT]
    for student in students:
        window_start, window_end = start_date, end_date
        batch = admission_year(student.admission_number)
        if semester and semester.isdigit() and batch is not None:
            sem_start, sem_end = semester_window(batch, int(semester))
            window_start = max(sem_start, start_date) if start_date else sem_start
            window_end = min(sem_end, end_date) if end_date else sem_end

        records = [
            a
            for a in student.attendance.all()
            if (window_start is None or a.date >= window_start)
            and (window_end is None or a.date <= window_end)
        ]
        counts = count_days(records)
        percentage = attendance_percentage(
            counts[FULL_DAY], counts[HALF_DAY], counts["total"]
        )
        results.append(
            {
                **serialize_student(student),
                "totalDays": counts["total"],
                "fullDays": counts[FULL_DAY],
                "halfDays": counts[HALF_DAY],
                "absentDays": counts[ABSENT_DAY],
                "percentage": percentage,
                "rule": attendance_rule_band(percentage)["band"],
                "windowStart": window_start.isoformat() if window_start else None,
                "windowEnd": window_end.isoformat() if window_end else None,
            }
        )
    return results


def get_attendance_csv_rows(**kwargs) -> List[List[Any]]:
    return [
        [
            row["admissionNumber"],
            row["studentName"],
            row["collegeCode"],
            row["programCode"],
            row["rollNo"],
            row["totalDays"],
            row["fullDays"],
            row["halfDays"],
            row["absentDays"],
            row["percentage"],
        ]
        for row in search_student_attendance(**kwargs)
    ]


def verify_location(user, latitude: float, longitude: float, today: Optional[date] = None):
    """Anchor the user's first fix of the day and measure it against the room"""
    today = today or date.today()
    anchor, created = GpsAnchor.objects.get_or_create(
        user=user,
        date=today,
        defaults={"latitude": latitude, "longitude": longitude},
    )
    distance = haversine_distance(
        anchor.latitude,
        anchor.longitude,
        settings.ROOM_LATITUDE,
        settings.ROOM_LONGITUDE,
    )
    logger.info(
        "Location check for %s: %.1fm from room (anchored=%s)",
        user.username,
        distance,
        not created,
    )
    return {
        "distance": distance,
        "lat": anchor.latitude,
        "lng": anchor.longitude,
        "anchored": not created,
        "withinRange": distance <= settings.LOCATION_RADIUS_METERS,
    }
