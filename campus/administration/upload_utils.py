"""
Bulk CSV/Excel uploads.

Every row is applied inside one transaction; a single bad row rolls the whole
upload back and the caller gets the first few row errors.
"""

import logging
from typing import Any, Dict, List, Optional

from django.db import transaction

from academics.data_utils import get_or_create_student
from academics.models import StudentMark
from attendance.data_utils import process_attendance_row
from base.constants import DEFAULT_MAX_MARKS, College, college_prefix
from base.file_utils import dataframe_rows
from students.data_utils import add_student_fee, get_student_or_none

logger = logging.getLogger(__name__)

MAX_REPORTED_ERRORS = 5


def _number(value: str, default: Optional[float] = None) -> Optional[float]:
    if value in (None, ""):
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _first(row: Dict[str, str], *keys: str) -> str:
    for key in keys:
        if row.get(key):
            return row[key]
    return ""


def process_marks_row(row: Dict[str, str], row_num: int, college: Optional[str]) -> Optional[str]:
    """Validate and upsert one marks row, returning an error string on failure"""
    row_college = row.get("collegecode", "").upper()
    admission_number = row.get("admissionnumber", "").upper()
    if not row_college or not admission_number:
        return f"Row {row_num}: Missing 'College Code' or 'AdmissionNumber'."

    if college:
        if row_college != college:
            return (
                f"Row {row_num}: Row College Code '{row_college}' mismatches selected '{college}'."
            )
        prefix = college_prefix(college)
        if prefix and not admission_number.startswith(prefix):
            return f"Row {row_num}: Admission Number '{admission_number}' needs prefix '{prefix}'."

    semester = _number(row.get("semester"))
    if not row.get("studentname") or semester is None:
        return f"Row {row_num}: Missing/invalid required fields (e.g., Student Name, Semester)."

    subject_code = row.get("subjectcode", "").upper()
    if not subject_code:
        return f"Row {row_num}: Missing 'SubjectCode'."

    internal = int(_number(row.get("internalmark"), 0))
    external = int(_number(row.get("externalmark"), 0))
    total = _number(_first(row, "totalmarks", "marksobtained"))
    max_marks = _number(_first(row, "outofmarks(max)", "maxmarks"))

    student = get_or_create_student(
        admission_number,
        row["studentname"],
        row_college,
        row.get("programcode", ""),
    )
    StudentMark.objects.update_or_create(
        student=student,
        subject_code=subject_code,
        semester=int(semester),
        defaults={
            "subject_name": row.get("subjectname") or subject_code,
            "internal_mark": internal,
            "external_mark": external,
            "marks_obtained": int(total) if total is not None else internal + external,
            "max_marks": int(max_marks) if max_marks is not None else DEFAULT_MAX_MARKS,
            "exam_type": row.get("examtype", ""),
        },
    )
    return None


def process_fee_row(row: Dict[str, str], row_num: int, college: Optional[str]) -> Optional[str]:
    admission_number = row.get("admissionnumber", "").upper()
    academic_year = row.get("academicyear", "")
    if not admission_number or not academic_year:
        return f"Row {row_num}: Missing 'AdmissionNumber' or 'Academic Year'."

    student = get_student_or_none(admission_number)
    if student is None:
        return f"Row {row_num}: Student {admission_number} not found."
    if college and student.college_code != college:
        return f"Row {row_num}: Student {admission_number} belongs to {student.college_code}."

    for key in ("totalfees", "paidamount", "dueamount"):
        if row.get(key) and _number(row[key]) is None:
            return f"Row {row_num}: '{row[key]}' is not a valid amount."

    add_student_fee(
        {
            "admissionNumber": admission_number,
            "academicYear": academic_year,
            "semester": row.get("semester"),
            "totalFees": row.get("totalfees"),
            "paidAmount": row.get("paidamount"),
            "dueAmount": row.get("dueamount"),
            "status": row.get("status"),
            "paymentDate": row.get("paymentdate") or None,
            "admissionType": row.get("admissiontype"),
            "feeType": row.get("feetype"),
        }
    )
    return None


def process_attendance_upload_row(row, row_num, college):
    success, error = process_attendance_row(row, row_num, college)
    return None if success else error


ROW_PROCESSORS = {
    "marks": process_marks_row,
    "fees": process_fee_row,
    "studentAttendance": process_attendance_upload_row,
}


def failure_message(errors: List[str]) -> str:
    message = f"Upload failed with {len(errors)} validation error(s):\n- "
    message += "\n- ".join(errors[:MAX_REPORTED_ERRORS])
    if len(errors) > MAX_REPORTED_ERRORS:
        message += "\n..."
    return message


def upload_data(df, data_type: str, college: Optional[str] = None) -> Dict[str, Any]:
    """Apply an uploaded sheet of the given data type, all rows or none"""
    total_rows = len(df.index)
    processor = ROW_PROCESSORS.get(data_type)
    if processor is None:
        return {
            "success": False,
            "message": f"Data type '{data_type}' is not supported for Excel upload yet.",
            "stats": {"totalRows": total_rows, "processed": 0, "errors": total_rows},
        }

    college = None if college in (None, "", College.ALL) else college
    errors = []
    processed = 0
    with transaction.atomic():
        for row_num, row in dataframe_rows(df):
            if not any(row.values()):
                continue
            try:
                error = processor(row, row_num, college)
            except ValueError as e:
                error = f"Row {row_num}: {e}"
            if error:
                errors.append(error)
            else:
                processed += 1
        if errors:
            transaction.set_rollback(True)

    if errors:
        logger.info("Rejected %s upload: %s row errors", data_type, len(errors))
        return {
            "success": False,
            "message": failure_message(errors),
            "stats": {"totalRows": total_rows, "processed": 0, "errors": len(errors)},
        }

    logger.info("Uploaded %s %s rows", processed, data_type)
    return {
        "success": True,
        "message": f"Successfully processed {processed} of {total_rows} rows.",
        "stats": {"totalRows": total_rows, "processed": processed, "errors": 0},
    }
