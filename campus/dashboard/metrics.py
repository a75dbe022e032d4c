"""
Dashboard aggregation.

Attendance metrics are taken for a single day. Fee, placement and academic
metrics cover the filtered student population.
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, Optional

from django.db.models import QuerySet

from academics.data_utils import filter_marks
from academics.result_utils import pass_statistics
from attendance.models import FacultyAttendance, StaffAttendance, StudentAttendance
from attendance.summary import FULL_DAY, HALF_DAY, classify_day
from faculty.data_utils import filter_faculty, filter_staff, get_faculty_or_none, get_staff_or_none
from students.data_utils import filter_students, get_reference_date, normalize_filter, parse_date
from students.generation_utils import academic_year_label, academic_year_start, fee_status
from students.models import StudentFee

logger = logging.getLogger(__name__)


def empty_dashboard() -> Dict[str, Any]:
    return {
        "studentAttendance": empty_attendance(),
        "studentAcademics": {
            "passPercentage": 0,
            "passCount": 0,
            "failCount": 0,
            "aggregatePercentage": 0,
        },
        "facultyMetrics": empty_attendance(),
        "staffMetrics": empty_attendance(),
        "placementMetrics": {
            "totalStudents": 0,
            "placedStudents": 0,
            "notPlacedStudents": 0,
            "placementPercentage": 0,
        },
        "studentFees": {
            "totalFees": 0,
            "paidAmount": 0,
            "dueAmount": 0,
            "paidCount": 0,
            "partialCount": 0,
            "dueCount": 0,
        },
    }


def empty_attendance() -> Dict[str, Any]:
    return {
        "total": 0,
        "present": 0,
        "absent": 0,
        "fullDay": 0,
        "halfDay": 0,
        "overallPercentage": 0,
    }


def attendance_metrics(population: Iterable[Any], model, person_field: str, on_date: date):
    """
    Day metrics for a population; people without a record that day count
    as absent.
    """
    if isinstance(population, QuerySet):
        total = population.count()
    else:
        population = list(population)
        total = len(population)
    records = model.objects.filter(
        **{f"{person_field}__in": population, "date": on_date}
    )
    full_day = half_day = 0
    for record in records:
        kind = classify_day(record.morning, record.afternoon)
        if kind == FULL_DAY:
            full_day += 1
        elif kind == HALF_DAY:
            half_day += 1

    present = full_day + half_day
    return {
        "total": total,
        "present": present,
        "absent": total - present,
        "fullDay": full_day,
        "halfDay": half_day,
        "overallPercentage": (
            round((full_day + 0.5 * half_day) / total * 100, 1) if total else 0
        ),
    }


def fee_metrics(students, year=None) -> Dict[str, Any]:
    """Fee totals for one academic year and per-student payment status counts"""
    fees = StudentFee.objects.filter(student__in=students)
    start = academic_year_start(year) if year else None
    if start is not None:
        fees = fees.filter(academic_year=academic_year_label(start))

    total_fees = 0.0
    paid_amount = 0.0
    per_student: Dict[int, Dict[str, float]] = {}
    for fee in fees:
        total_fees += float(fee.total_fees)
        paid_amount += float(fee.paid_amount)
        sums = per_student.setdefault(fee.student_id, {"due": 0.0, "paid": 0.0})
        sums["due"] += float(fee.due_amount)
        sums["paid"] += float(fee.paid_amount)

    counts = {"Paid": 0, "Partial": 0, "Due": 0}
    for sums in per_student.values():
        counts[fee_status(sums["due"], sums["paid"])] += 1

    return {
        "totalFees": total_fees,
        "paidAmount": paid_amount,
        "dueAmount": total_fees - paid_amount,
        "paidCount": counts["Paid"],
        "partialCount": counts["Partial"],
        "dueCount": counts["Due"],
    }


def placement_metrics(students) -> Dict[str, Any]:
    total = students.count()
    placed = students.filter(is_placed=True).count()
    return {
        "totalStudents": total,
        "placedStudents": placed,
        "notPlacedStudents": total - placed,
        "placementPercentage": round(placed / total * 100, 1) if total else 0,
    }


def get_dashboard_data(
    college=None,
    year=None,
    department=None,
    roll_no=None,
    semester=None,
    subject=None,
    on_date=None,
    faculty_id=None,
    staff_id=None,
    reference_date: Optional[date] = None,
) -> Dict[str, Any]:
    """Aggregated dashboard metrics for the given filters"""
    on_date = parse_date(on_date) or get_reference_date()
    data = empty_dashboard()

    faculty_id = normalize_filter(faculty_id)
    if faculty_id:
        faculty = get_faculty_or_none(faculty_id)
        if faculty is not None:
            data["facultyMetrics"] = attendance_metrics(
                [faculty], FacultyAttendance, "faculty", on_date
            )
        return data

    staff_id = normalize_filter(staff_id)
    if staff_id:
        staff = get_staff_or_none(staff_id)
        if staff is not None:
            data["staffMetrics"] = attendance_metrics(
                [staff], StaffAttendance, "staff", on_date
            )
        return data

    filters = {
        "college": college,
        "year": year,
        "department": department,
        "roll_no": roll_no,
        "reference_date": reference_date,
    }
    students = filter_students(semester=semester, **filters)

    data["studentAttendance"] = attendance_metrics(
        students, StudentAttendance, "student", on_date
    )
    data["studentFees"] = fee_metrics(students, normalize_filter(year))
    data["placementMetrics"] = placement_metrics(students)
    data["studentAcademics"] = pass_statistics(
        filter_marks(semester=semester, subject=subject, **filters)
    )
    data["facultyMetrics"] = attendance_metrics(
        filter_faculty(college, department), FacultyAttendance, "faculty", on_date
    )
    data["staffMetrics"] = attendance_metrics(
        filter_staff(college), StaffAttendance, "staff", on_date
    )

    logger.debug(
        "Dashboard for %s/%s/%s on %s: %s students",
        college,
        year,
        department,
        on_date,
        data["studentAttendance"]["total"],
    )
    return data
