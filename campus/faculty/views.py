import logging

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.contrib.auth.decorators import login_required

from base.constants import Role
from base.views import (
    MANAGEMENT_ROLES,
    get_request_data,
    get_user_role,
    get_user_scope,
    tabular_export_response,
)
from .data_utils import (
    FACULTY_CSV_HEADERS,
    STAFF_CSV_HEADERS,
    csv_row,
    filter_faculty,
    filter_staff,
    get_faculty_details,
    get_filtered_faculty_details,
    get_filtered_staff_details,
    get_staff_details,
    serialize_faculty,
    serialize_staff,
)
from .models import Faculty, Staff

logger = logging.getLogger(__name__)


def can_view_person(user, person_id: str) -> bool:
    """Faculty and staff may only look themselves up"""
    role = get_user_role(user)
    if role == Role.STUDENT:
        return False
    if role in (Role.FACULTY, Role.STAFF):
        return user.username.upper() == (person_id or "").upper()
    return True


# ==================== FACULTY ====================


@login_required
def faculty_list(request: HttpRequest):
    if get_user_role(request.user) not in MANAGEMENT_ROLES:
        return HttpResponse("Access denied", status=403)

    college, department = get_user_scope(
        request.user, request.GET.get("college"), request.GET.get("department")
    )
    faculty = filter_faculty(college, department)
    return JsonResponse(
        {"success": True, "results": [serialize_faculty(f) for f in faculty]}
    )


@login_required
def faculty_details(request: HttpRequest, faculty_id: str):
    if not can_view_person(request.user, faculty_id):
        return HttpResponse("Access denied", status=403)

    details = get_faculty_details(faculty_id)
    if details is None:
        return JsonResponse({"success": False, "error": "Faculty not found"}, status=404)
    return JsonResponse({"success": True, "faculty": details})


@login_required
def filtered_faculty_details(request: HttpRequest):
    faculty_id = request.GET.get("facultyId", "")
    if not can_view_person(request.user, faculty_id):
        return HttpResponse("Access denied", status=403)

    rows = get_filtered_faculty_details(
        faculty_id, request.GET.get("startDate"), request.GET.get("endDate")
    )
    return JsonResponse({"success": True, "results": rows})


@login_required
def export_faculty_attendance(request: HttpRequest, file_format: str = "csv"):
    faculty_id = request.GET.get("facultyId", "")
    if not can_view_person(request.user, faculty_id):
        return HttpResponse("Access denied", status=403)

    rows = get_filtered_faculty_details(
        faculty_id, request.GET.get("startDate"), request.GET.get("endDate")
    )
    return tabular_export_response(
        file_format,
        "faculty_attendance",
        FACULTY_CSV_HEADERS,
        [csv_row(r, "facultyId", "facultyName") for r in rows],
        sheet_name="Faculty Attendance",
    )


@login_required
def add_faculty(request: HttpRequest):
    if get_user_role(request.user) not in MANAGEMENT_ROLES:
        return JsonResponse({"success": False, "error": "Access denied"})
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    data = get_request_data(request)
    if not all([data.get("facultyId"), data.get("facultyName"), data.get("collegeCode")]):
        return JsonResponse({"success": False, "error": "All fields are required"})

    faculty, created = Faculty.objects.update_or_create(
        faculty_id=data["facultyId"].strip().upper(),
        defaults={
            "faculty_name": data["facultyName"],
            "college_code": data["collegeCode"],
            "program_code": (data.get("programCode") or "").upper(),
            "gender": data.get("gender") or "M",
        },
    )
    logger.info("%s faculty %s", "Created" if created else "Updated", faculty.faculty_id)
    return JsonResponse({"success": True, "faculty": serialize_faculty(faculty)})


# ==================== STAFF ====================


@login_required
def staff_list(request: HttpRequest):
    if get_user_role(request.user) not in MANAGEMENT_ROLES:
        return HttpResponse("Access denied", status=403)

    college, _ = get_user_scope(request.user, request.GET.get("college"))
    staff = filter_staff(college)
    return JsonResponse(
        {"success": True, "results": [serialize_staff(s) for s in staff]}
    )


@login_required
def staff_details(request: HttpRequest, staff_id: str):
    if not can_view_person(request.user, staff_id):
        return HttpResponse("Access denied", status=403)

    details = get_staff_details(staff_id)
    if details is None:
        return JsonResponse({"success": False, "error": "Staff not found"}, status=404)
    return JsonResponse({"success": True, "staff": details})


@login_required
def filtered_staff_details(request: HttpRequest):
    staff_id = request.GET.get("staffId", "")
    if not can_view_person(request.user, staff_id):
        return HttpResponse("Access denied", status=403)

    rows = get_filtered_staff_details(
        staff_id, request.GET.get("startDate"), request.GET.get("endDate")
    )
    return JsonResponse({"success": True, "results": rows})


@login_required
def export_staff_attendance(request: HttpRequest, file_format: str = "csv"):
    staff_id = request.GET.get("staffId", "")
    if not can_view_person(request.user, staff_id):
        return HttpResponse("Access denied", status=403)

    rows = get_filtered_staff_details(
        staff_id, request.GET.get("startDate"), request.GET.get("endDate")
    )
    return tabular_export_response(
        file_format,
        "staff_attendance",
        STAFF_CSV_HEADERS,
        [csv_row(r, "staffId", "staffName") for r in rows],
        sheet_name="Staff Attendance",
    )


@login_required
def add_staff(request: HttpRequest):
    if get_user_role(request.user) not in MANAGEMENT_ROLES:
        return JsonResponse({"success": False, "error": "Access denied"})
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    data = get_request_data(request)
    if not all([data.get("staffId"), data.get("staffName"), data.get("collegeCode")]):
        return JsonResponse({"success": False, "error": "All fields are required"})

    staff, created = Staff.objects.update_or_create(
        staff_id=data["staffId"].strip().upper(),
        defaults={
            "staff_name": data["staffName"],
            "college_code": data["collegeCode"],
            "gender": data.get("gender") or "M",
        },
    )
    logger.info("%s staff %s", "Created" if created else "Updated", staff.staff_id)
    return JsonResponse({"success": True, "staff": serialize_staff(staff)})
