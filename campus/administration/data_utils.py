"""
Removed-data log and account approvals.

Deleting student data never drops rows outright: the rows are snapshotted
into a DeletedDataLog entry first, and can be restored from it later.
"""

import logging
from typing import Any, Dict, List

from django.contrib.auth.models import User
from django.db import transaction

from academics.data_utils import get_or_create_student
from academics.models import StudentMark
from attendance.models import StudentAttendance
from attendance.summary import academic_year_window, intersect_windows, semester_window
from base.constants import Role
from base.models import Profile
from base.views import get_profile, get_user_role
from students.data_utils import (
    fee_lookup,
    get_student_or_none,
    normalize_filter,
    parse_date,
    serialize_attendance,
    serialize_fee,
    serialize_mark,
)
from students.generation_utils import (
    academic_year_for_semester,
    academic_year_start,
    admission_year,
    semesters_for_academic_year,
)
from students.models import StudentFee
from .models import DeletedDataLog

logger = logging.getLogger(__name__)

# tab -> log data type
DATA_TABS = {
    "marks": DeletedDataLog.DataType.MARKS,
    "attendance": DeletedDataLog.DataType.ATTENDANCE,
    "fees": DeletedDataLog.DataType.FEES,
    "examFees": DeletedDataLog.DataType.EXAM_FEES,
}

FEE_TYPES = {
    "fees": StudentFee.FeeType.TUITION,
    "examFees": StudentFee.FeeType.EXAM,
}

ATTENDANCE_APPROVER_ROLES = [Role.CHAIRMAN, Role.PRINCIPAL, Role.HOD, Role.FACULTY]


# ==================== REMOVED DATA ====================


def _records_in_scope(student, tab, academic_year, semester):
    batch = admission_year(student.admission_number)

    if tab == "marks":
        marks = student.marks.all()
        if semester:
            return marks.filter(semester=int(semester))
        if batch is None:
            return marks.none()
        return marks.filter(semester__in=semesters_for_academic_year(batch, academic_year))

    if tab == "attendance":
        if batch is None:
            return student.attendance.none()
        window = None
        if academic_year:
            window = academic_year_window(academic_year_start(academic_year))
        if semester:
            sem_window = semester_window(batch, int(semester))
            window = intersect_windows(window, sem_window) if window else sem_window
        if window is None:
            return student.attendance.none()
        return student.attendance.filter(date__range=window)

    fees = student.fees.filter(fee_type=FEE_TYPES[tab])
    if semester:
        if batch is None:
            return fees.none()
        return fees.filter(academic_year=academic_year_for_semester(batch, int(semester)))
    return fees.filter(academic_year=academic_year)


def _snapshot(tab, records) -> List[Dict[str, Any]]:
    if tab == "marks":
        return [serialize_mark(r) for r in records]
    if tab == "attendance":
        return [serialize_attendance(r) for r in records]
    return [serialize_fee(r) for r in records]


def delete_student_data(
    admission_number: str,
    tab: str,
    academic_year=None,
    semester=None,
    deleted_by: str = "",
    reason: str = "",
) -> str:
    """Move one student's records in a year/semester scope into the removed data log"""
    if tab not in DATA_TABS:
        raise ValueError(f"Unknown data type '{tab}'.")

    student = get_student_or_none(admission_number)
    if student is None:
        raise ValueError(f"Student with admission number {admission_number} not found.")

    academic_year = normalize_filter(academic_year)
    semester = normalize_filter(semester)
    if semester and not semester.isdigit():
        raise ValueError("Semester must be a number.")
    if academic_year and academic_year_start(academic_year) is None:
        raise ValueError(f"Invalid academic year '{academic_year}'.")

    if semester:
        scope = f"Semester {semester}"
    elif academic_year:
        scope = f"Academic Year {academic_year}"
    else:
        raise ValueError(
            "Cannot delete all data at once. Please select an academic year or semester."
        )

    with transaction.atomic():
        records = list(_records_in_scope(student, tab, academic_year, semester))
        if not records:
            raise ValueError(f"No {tab} records found to delete for the selected scope.")

        DeletedDataLog.objects.create(
            student_name=student.student_name,
            admission_number=student.admission_number,
            data_type=DATA_TABS[tab],
            scope=scope,
            deleted_by=deleted_by,
            reason=reason or "",
            deleted_data=_snapshot(tab, records),
        )
        for record in records:
            record.delete()

    logger.info(
        "%s removed %s %s record(s) of %s (%s)",
        deleted_by,
        len(records),
        tab,
        student.admission_number,
        scope,
    )
    return (
        f"{len(records)} {tab} record(s) for {scope} have been moved to the removed data log."
    )


def serialize_log_entry(entry: DeletedDataLog) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "studentName": entry.student_name,
        "admissionNumber": entry.admission_number,
        "dataType": entry.data_type,
        "scope": entry.scope,
        "deletedBy": entry.deleted_by,
        "timestamp": entry.timestamp.isoformat(),
        "reason": entry.reason,
        "deletedData": entry.deleted_data,
    }


def get_deleted_data_log() -> List[Dict[str, Any]]:
    return [serialize_log_entry(e) for e in DeletedDataLog.objects.all()]


def clear_deleted_data_log() -> int:
    count, _ = DeletedDataLog.objects.all().delete()
    logger.info("Cleared %s removed data log entries", count)
    return count


def _restore_row(student, data_type, item):
    if data_type == DeletedDataLog.DataType.MARKS:
        StudentMark.objects.update_or_create(
            student=student,
            subject_code=item["subjectCode"],
            semester=item["semester"],
            defaults={
                "subject_name": item.get("subjectName", ""),
                "marks_obtained": item.get("marksObtained", 0),
                "max_marks": item.get("maxMarks", 100),
                "exam_type": item.get("examType", ""),
                "internal_mark": item.get("internalMark", 0),
                "external_mark": item.get("externalMark", 0),
            },
        )
    elif data_type == DeletedDataLog.DataType.ATTENDANCE:
        StudentAttendance.objects.update_or_create(
            student=student,
            date=parse_date(item["date"]),
            defaults={"morning": item["morning"], "afternoon": item["afternoon"]},
        )
    else:
        StudentFee.objects.update_or_create(
            **fee_lookup(student, item["academicYear"], item["feeType"], item.get("semester")),
            defaults={
                "semester": item.get("semester"),
                "total_fees": item.get("totalFees", 0),
                "paid_amount": item.get("paidAmount", 0),
                "due_amount": item.get("dueAmount", 0),
                "status": item.get("status", StudentFee.Status.DUE),
                "payment_date": item.get("paymentDate"),
                "admission_type": item.get("admissionType", ""),
            },
        )


def restore_student_data(log_ids) -> str:
    """Re-insert the rows of the selected log entries and drop those entries"""
    entries = list(DeletedDataLog.objects.filter(id__in=log_ids or []))
    if not entries:
        raise ValueError("No valid log entries found to restore.")

    restored = 0
    with transaction.atomic():
        for entry in entries:
            student = get_or_create_student(entry.admission_number, entry.student_name)
            for item in entry.deleted_data:
                _restore_row(student, entry.data_type, item)
                restored += 1
        DeletedDataLog.objects.filter(id__in=[e.id for e in entries]).delete()

    logger.info("Restored %s records from %s log entries", restored, len(entries))
    return f"{restored} records from {len(entries)} log entries have been restored."


# ==================== APPROVALS ====================


def serialize_request(profile: Profile) -> Dict[str, Any]:
    user = profile.user
    return {
        "id": user.username,
        "name": user.get_full_name() or user.username,
        "email": user.email,
        "role": profile.role,
        "college": profile.college,
        "department": profile.department,
        "mobileNumber": profile.mobile_number,
        "status": profile.status,
        "approvedBy": profile.approved_by,
        "attendanceStatus": profile.attendance_status,
        "attendanceApprovedBy": profile.attendance_approved_by,
        "createdAt": profile.created_at.isoformat(),
    }


def visible_login_requests(approver):
    """Profiles whose login access the approver may decide on"""
    role = get_user_role(approver)
    profiles = Profile.objects.select_related("user")

    if role == Role.CHAIRMAN:
        return profiles.filter(
            role__in=[Role.PRINCIPAL, Role.HOD, Role.FACULTY, Role.STAFF]
        )

    own = get_profile(approver)
    if own is None:
        return profiles.none()
    if role == Role.PRINCIPAL:
        return profiles.filter(college=own.college).exclude(
            role__in=[Role.PRINCIPAL, Role.CHAIRMAN]
        )
    if role == Role.HOD:
        return profiles.filter(
            role=Role.STUDENT, college=own.college, department=own.department
        )
    return profiles.none()


def get_login_requests(approver, status=Profile.Status.PENDING) -> List[Dict[str, Any]]:
    queryset = visible_login_requests(approver)
    if status:
        queryset = queryset.filter(status=status)
    return [serialize_request(p) for p in queryset.order_by("-created_at")]


def _find_request(approver, username: str) -> Profile:
    profile = visible_login_requests(approver).filter(
        user__username__iexact=(username or "").strip()
    ).first()
    if profile is None:
        raise ValueError("Access request not found.")
    return profile


def approve_login(approver, username: str) -> str:
    profile = _find_request(approver, username)
    profile.status = Profile.Status.APPROVED
    profile.approved_by = approver.username
    profile.save(update_fields=["status", "approved_by"])
    logger.info("%s approved login for %s", approver.username, profile.user.username)
    return f"Access approved for {profile.user.username}."


def reject_login(approver, username: str) -> str:
    """Rejecting a pending request removes the account"""
    profile = _find_request(approver, username)
    if profile.is_approved:
        raise ValueError("Only pending requests can be rejected.")
    username = profile.user.username
    User.objects.filter(pk=profile.user_id).delete()
    logger.info("%s rejected login for %s", approver.username, username)
    return f"Access request from {username} has been rejected."


def request_attendance_access(user) -> str:
    profile = get_profile(user)
    if profile is None:
        raise ValueError("Profile not found.")
    if profile.attendance_status == Profile.Status.APPROVED:
        return "Online attendance access is already approved."
    profile.attendance_status = Profile.Status.PENDING
    profile.save(update_fields=["attendance_status"])
    return "Online attendance access requested."


def visible_attendance_requests(approver):
    role = get_user_role(approver)
    profiles = Profile.objects.select_related("user").exclude(attendance_status="")
    if role == Role.CHAIRMAN:
        return profiles
    own = get_profile(approver)
    if own is None or role not in ATTENDANCE_APPROVER_ROLES:
        return profiles.none()
    profiles = profiles.filter(college=own.college)
    if role in (Role.HOD, Role.FACULTY):
        profiles = profiles.filter(department=own.department)
    return profiles


def get_attendance_requests(approver) -> List[Dict[str, Any]]:
    return [
        serialize_request(p)
        for p in visible_attendance_requests(approver).filter(
            attendance_status=Profile.Status.PENDING
        )
    ]


def approve_attendance_access(approver, username: str) -> str:
    if get_user_role(approver) not in ATTENDANCE_APPROVER_ROLES:
        raise ValueError("You are not allowed to approve attendance access.")

    profile = (
        visible_attendance_requests(approver)
        .filter(user__username__iexact=(username or "").strip())
        .first()
    )
    if profile is None:
        raise ValueError("Access request not found.")

    profile.attendance_status = Profile.Status.APPROVED
    profile.attendance_approved_by = approver.username
    profile.save(update_fields=["attendance_status", "attendance_approved_by"])
    logger.info(
        "%s approved online attendance for %s", approver.username, profile.user.username
    )
    return f"Online attendance approved for {profile.user.username}."
