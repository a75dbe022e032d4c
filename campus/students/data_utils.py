"""
Data utilities for student-related operations.
Contains the population filter, searches, detail assembly, CSV rows and the
fee/placement write paths.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from academics.result_utils import academic_result, semester_summary
from attendance.summary import attendance_rule_band, detailed_metrics
from base.constants import (
    ALL_SEMESTERS,
    ALL_SUBJECTS,
    ALL_YEARS,
    FEE_STRUCTURE,
    SEARCH_LIMIT,
    College,
)
from .generation_utils import (
    admission_year_for_semester,
    academic_year_start,
    apply_exam_payment,
    apply_tuition_payment,
    current_semester,
    fee_status,
)
from .models import PlacementDetails, Student, StudentFee

logger = logging.getLogger(__name__)

FEE_CSV_HEADERS = [
    "Admission Number",
    "Student Name",
    "College",
    "Department",
    "Academic Year",
    "Total Fees",
    "Paid Amount",
    "Due Amount",
    "Status",
]

PLACEMENT_CSV_HEADERS = [
    "S.NO",
    "COLLEGE CODE",
    "ADMISSION NUMBER",
    "STUDENT NAME",
    "COURSE/BRANCH",
    "YEAR",
    "SEMESTER",
    "STUDENT MOBIL.",
    "COMPANY/ORG NAME",
    "COMPANY WEBSITE",
    "HR NAME",
    "HR MOBILE NUMBER",
    "HR EMAIL ID",
]

_ALL_VALUES = {"", "all", ALL_YEARS.lower(), ALL_SEMESTERS.lower(), ALL_SUBJECTS.lower()}


# ==================== FILTERS ====================


def normalize_filter(value):
    """Treat blanks and the various "All ..." choices as no filter"""
    if value is None:
        return None
    value = str(value).strip()
    if value.lower() in _ALL_VALUES:
        return None
    return value


def parse_date(value) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def get_reference_date() -> date:
    """Latest day with attendance on record; anchors semester bucketing"""
    return parse_date(settings.LATEST_ATTENDANCE_DATE) or date.today()


def filter_students(
    college=None,
    year=None,
    department=None,
    roll_no=None,
    semester=None,
    reference_date: Optional[date] = None,
) -> QuerySet:
    """Students matching the dashboard population filters"""
    queryset = Student.objects.all()

    college = normalize_filter(college)
    if college and college != College.ALL:
        queryset = queryset.filter(college_code=college)

    year = normalize_filter(year)
    if year:
        start = academic_year_start(year)
        if start is not None:
            queryset = queryset.filter(admission_number__regex=rf"^[A-Za-z]+{start}")

    department = normalize_filter(department)
    if department:
        queryset = queryset.filter(program_code__iexact=department)

    roll_no = normalize_filter(roll_no)
    if roll_no:
        queryset = queryset.filter(roll_no=roll_no)

    semester = normalize_filter(semester)
    if semester and semester.isdigit():
        batch = admission_year_for_semester(
            int(semester), reference_date or get_reference_date()
        )
        queryset = queryset.filter(admission_number__regex=rf"^[A-Za-z]+{batch}")

    return queryset


# ==================== SERIALIZERS ====================


def serialize_student(student: Student, today: Optional[date] = None) -> Dict[str, Any]:
    return {
        "admissionNumber": student.admission_number,
        "studentName": student.student_name,
        "collegeCode": student.college_code,
        "programCode": student.program_code,
        "rollNo": student.roll_no,
        "gender": student.gender,
        "isPlaced": student.is_placed,
        "mobileNumber": student.mobile_number,
        "fatherMobileNumber": student.father_mobile_number,
        "profileImage": student.profile_image.url if student.profile_image else None,
        "currentSemester": current_semester(student.admission_number, today),
    }


def serialize_mark(mark) -> Dict[str, Any]:
    return {
        "semester": mark.semester,
        "subjectCode": mark.subject_code,
        "subjectName": mark.subject_name,
        "marksObtained": mark.marks_obtained,
        "maxMarks": mark.max_marks,
        "examType": mark.exam_type,
        "internalMark": mark.internal_mark,
        "externalMark": mark.external_mark,
    }


def serialize_attendance(record) -> Dict[str, Any]:
    return {
        "date": record.date.isoformat(),
        "morning": record.morning,
        "afternoon": record.afternoon,
    }


def serialize_fee(fee: StudentFee) -> Dict[str, Any]:
    return {
        "admissionNumber": fee.student.admission_number,
        "academicYear": fee.academic_year,
        "semester": fee.semester,
        "totalFees": float(fee.total_fees),
        "paidAmount": float(fee.paid_amount),
        "dueAmount": float(fee.due_amount),
        "status": fee.status,
        "paymentDate": fee.payment_date.isoformat() if fee.payment_date else None,
        "admissionType": fee.admission_type,
        "feeType": fee.fee_type,
    }


def serialize_placement(placement: Optional[PlacementDetails]):
    if placement is None:
        return None
    return {
        "admissionNumber": placement.student.admission_number,
        "companyName": placement.company_name,
        "companyWebsite": placement.company_website,
        "hrName": placement.hr_name,
        "hrMobileNumber": placement.hr_mobile_number,
        "hrEmail": placement.hr_email,
        "studentMobileNumber": placement.student_mobile_number,
        "year": placement.year,
        "semester": placement.semester,
        "academicYear": placement.academic_year,
    }


def get_placement_or_none(student: Student) -> Optional[PlacementDetails]:
    try:
        return student.placement
    except PlacementDetails.DoesNotExist:
        return None


# ==================== SEARCHES ====================


def get_student_or_none(admission_number: str) -> Optional[Student]:
    try:
        return Student.objects.get(admission_number__iexact=(admission_number or "").strip())
    except Student.DoesNotExist:
        return None


def search_students(
    name=None, admission_number=None, placement_status=None, **filters
) -> List[Dict[str, Any]]:
    queryset = filter_students(**filters)

    name = normalize_filter(name)
    if name:
        queryset = queryset.filter(student_name__icontains=name)

    admission_number = normalize_filter(admission_number)
    if admission_number:
        queryset = queryset.filter(admission_number__iexact=admission_number)

    if placement_status == "placed":
        queryset = queryset.filter(is_placed=True)
    elif placement_status == "not-placed":
        queryset = queryset.filter(is_placed=False)

    return [serialize_student(s) for s in queryset[:SEARCH_LIMIT]]


def get_student_details(
    admission_number: str, today: Optional[date] = None
) -> Optional[Dict[str, Any]]:
    """Student record with marks, attendance, fees and placement"""
    student = get_student_or_none(admission_number)
    if student is None:
        return None

    marks = list(student.marks.all())
    attendance = list(student.attendance.all())
    fees = student.fees.select_related("student").order_by("-payment_date")
    metrics = detailed_metrics(attendance)

    return {
        **serialize_student(student, today),
        "marks": [serialize_mark(m) for m in marks],
        "semesterSummary": semester_summary(marks),
        "academicResult": academic_result(marks),
        "attendance": [serialize_attendance(a) for a in attendance],
        "attendanceSummary": {
            **metrics,
            "rule": attendance_rule_band(metrics["percentage"]),
        },
        "fees": [serialize_fee(f) for f in fees],
        "placementDetails": serialize_placement(get_placement_or_none(student)),
    }


def get_filtered_student_details(
    start_date=None, end_date=None, **filters
) -> List[Dict[str, Any]]:
    """Attendance within an inclusive date range plus the academic result"""
    start_date = parse_date(start_date)
    end_date = parse_date(end_date)

    rows = []
    for student in filter_students(**filters).prefetch_related("attendance", "marks"):
        records = [
            a
            for a in student.attendance.all()
            if (start_date is None or a.date >= start_date)
            and (end_date is None or a.date <= end_date)
        ]
        rows.append(
            {
                **serialize_student(student),
                **detailed_metrics(records),
                "academicResult": academic_result(student.marks.all()),
            }
        )
    return rows


def search_student_fees(
    academic_year=None, fee_type=StudentFee.FeeType.TUITION, **filters
) -> List[Dict[str, Any]]:
    students = filter_students(**filters)
    queryset = StudentFee.objects.filter(student__in=students).select_related(
        "student"
    )
    academic_year = normalize_filter(academic_year)
    if academic_year:
        queryset = queryset.filter(academic_year__startswith=academic_year)
    if fee_type:
        queryset = queryset.filter(fee_type=fee_type)

    return [
        {
            **serialize_fee(fee),
            "studentName": fee.student.student_name,
            "collegeCode": fee.student.college_code,
            "programCode": fee.student.program_code,
            "currentSemester": current_semester(fee.student.admission_number),
        }
        for fee in queryset.order_by("student__admission_number", "academic_year")
    ]


def get_fee_csv_rows(academic_year=None, **filters) -> List[List[Any]]:
    return [
        [
            row["admissionNumber"],
            row["studentName"],
            row["collegeCode"],
            row["programCode"],
            row["academicYear"],
            row["totalFees"],
            row["paidAmount"],
            row["dueAmount"],
            row["status"],
        ]
        for row in search_student_fees(academic_year=academic_year, **filters)
    ]


def search_placements(
    name=None, admission_number=None, company=None, **filters
) -> List[Dict[str, Any]]:
    queryset = filter_students(**filters).filter(is_placed=True)

    name = normalize_filter(name)
    if name:
        queryset = queryset.filter(student_name__icontains=name)
    admission_number = normalize_filter(admission_number)
    if admission_number:
        queryset = queryset.filter(admission_number__iexact=admission_number)
    company = normalize_filter(company)
    if company:
        queryset = queryset.filter(placement__company_name__icontains=company)

    results = []
    for student in queryset.select_related("placement")[:SEARCH_LIMIT]:
        results.append(
            {
                **serialize_student(student),
                "placementDetails": serialize_placement(get_placement_or_none(student)),
            }
        )
    return results


def get_placement_csv_rows(**filters) -> List[List[Any]]:
    rows = []
    for index, result in enumerate(search_placements(**filters), 1):
        placement = result["placementDetails"] or {}
        semester = placement.get("semester") or ""
        rows.append(
            [
                index,
                result["collegeCode"],
                result["admissionNumber"],
                result["studentName"],
                result["programCode"],
                placement.get("year", ""),
                f"{semester}th" if semester else "",
                placement.get("studentMobileNumber") or result["mobileNumber"],
                placement.get("companyName", ""),
                placement.get("companyWebsite", ""),
                placement.get("hrName", ""),
                placement.get("hrMobileNumber", ""),
                placement.get("hrEmail", ""),
            ]
        )
    return rows


# ==================== WRITES ====================


def fee_lookup(student: Student, academic_year: str, fee_type: str, semester=None):
    """Tuition is kept per academic year, exam fees per semester"""
    lookup = {
        "student": student,
        "academic_year": academic_year,
        "fee_type": fee_type,
    }
    if fee_type == StudentFee.FeeType.EXAM:
        lookup["semester"] = semester
    return lookup


def add_student_fee(data: Dict[str, Any]) -> str:
    """Create or replace a fee record for a student and academic year"""
    student = get_student_or_none(data.get("admissionNumber"))
    if student is None:
        raise ValueError(
            f"Student with admission number {data.get('admissionNumber')} not found."
        )

    fee_type = data.get("feeType") or StudentFee.FeeType.TUITION
    semester = int(data["semester"]) if data.get("semester") else None
    total = float(data.get("totalFees") or 0)
    paid = float(data.get("paidAmount") or 0)
    due = data.get("dueAmount")
    due = max(0.0, total - paid) if due in (None, "") else float(due)

    fee, created = StudentFee.objects.update_or_create(
        **fee_lookup(student, data["academicYear"], fee_type, semester),
        defaults={
            "semester": semester,
            "total_fees": total,
            "paid_amount": paid,
            "due_amount": due,
            "status": data.get("status") or fee_status(due, paid),
            "payment_date": data.get("paymentDate") or timezone.now(),
            "admission_type": data.get("admissionType") or "",
        },
    )
    logger.info(
        "%s %s fee for %s (%s)",
        "Created" if created else "Updated",
        fee_type,
        student.admission_number,
        fee.academic_year,
    )
    return f"Fee details for {student.admission_number} saved successfully."


def record_online_payment(
    student: Student,
    fee_type: str,
    academic_year: str,
    amount: float,
    semester=None,
    subject_count: int = 0,
    exam_fee_total: Optional[float] = None,
) -> StudentFee:
    """Apply a card payment to the student's tuition or exam fee record"""
    if amount <= 0:
        raise ValueError("Payment amount must be greater than zero.")

    with transaction.atomic():
        lookup = fee_lookup(student, academic_year, fee_type, semester)
        existing = StudentFee.objects.select_for_update().filter(**lookup).first()

        if fee_type == StudentFee.FeeType.TUITION:
            total = (
                float(existing.total_fees)
                if existing
                else FEE_STRUCTURE.get(student.program_code, 0)
            )
            previous_paid = float(existing.paid_amount) if existing else 0
            paid, due, status = apply_tuition_payment(total, previous_paid, amount)
        else:
            total = float(exam_fee_total or 0)
            due, status = apply_exam_payment(total, amount)
            paid = amount

        fee, _ = StudentFee.objects.update_or_create(
            **lookup,
            defaults={
                "semester": semester,
                "total_fees": total,
                "paid_amount": paid,
                "due_amount": due,
                "status": status,
                "payment_date": timezone.now(),
            },
        )

    logger.info(
        "Online %s payment of %s for %s (%s): %s",
        fee_type,
        amount,
        student.admission_number,
        academic_year,
        status,
    )
    return fee


def add_student_placement(data: Dict[str, Any]) -> str:
    admission_number = (data.get("admissionNumber") or "").strip().upper()
    student = get_student_or_none(admission_number)
    if student is None:
        raise ValueError(f"Student with admission number {admission_number} not found.")

    with transaction.atomic():
        student.is_placed = True
        if data.get("studentMobileNumber"):
            student.mobile_number = data["studentMobileNumber"]
        student.save()

        PlacementDetails.objects.update_or_create(
            student=student,
            defaults={
                "company_name": data.get("companyName", ""),
                "company_website": data.get("companyWebsite", ""),
                "hr_name": data.get("hrName", ""),
                "hr_mobile_number": data.get("hrMobileNumber", ""),
                "hr_email": data.get("hrEmail", ""),
                "student_mobile_number": data.get("studentMobileNumber", ""),
                "year": str(data.get("year", "")),
                "semester": str(data.get("semester", "")),
                "academic_year": data.get("academicYear", ""),
            },
        )

    logger.info("Recorded placement for %s", admission_number)
    return f"Placement details for {admission_number} saved successfully."
