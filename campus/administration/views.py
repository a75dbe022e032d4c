import logging

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.contrib.auth.decorators import login_required

from base.constants import Role
from base.file_utils import read_file_to_dataframe
from base.views import (
    DATA_ENTRY_ROLES,
    MANAGEMENT_ROLES,
    get_population_filters,
    get_request_data,
    get_user_role,
)
from .data_utils import (
    ATTENDANCE_APPROVER_ROLES,
    approve_attendance_access,
    approve_login,
    clear_deleted_data_log,
    delete_student_data,
    get_attendance_requests,
    get_deleted_data_log,
    get_login_requests,
    reject_login,
    request_attendance_access,
    restore_student_data,
)
from .upload_utils import upload_data

logger = logging.getLogger(__name__)


def json_action(func, *args):
    """Run a service call and wrap its message or ValueError as JSON"""
    try:
        message = func(*args)
    except ValueError as e:
        return JsonResponse({"success": False, "error": str(e)})
    return JsonResponse({"success": True, "message": message})


# ==================== DATA MANAGEMENT ====================


@login_required
def bulk_upload(request: HttpRequest):
    """Upload marks, fees or student attendance from CSV or Excel"""
    if get_user_role(request.user) not in DATA_ENTRY_ROLES:
        return JsonResponse({"success": False, "error": "Access denied"})
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    file = request.FILES.get("file")
    if not file:
        return JsonResponse({"success": False, "error": "No file provided"})

    df, error = read_file_to_dataframe(file)
    if error:
        return JsonResponse({"success": False, "error": error})

    college = get_population_filters(request)["college"]
    if request.POST.get("college") and get_user_role(request.user) == Role.CHAIRMAN:
        college = request.POST["college"]

    result = upload_data(df, request.POST.get("dataType", ""), college)
    return JsonResponse(result)


@login_required
def delete_data(request: HttpRequest):
    if get_user_role(request.user) not in MANAGEMENT_ROLES:
        return JsonResponse({"success": False, "error": "Access denied"})
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    data = get_request_data(request)
    return json_action(
        delete_student_data,
        data.get("admissionNumber", ""),
        data.get("tab", ""),
        data.get("academicYear"),
        data.get("semester"),
        request.user.username,
        data.get("reason", ""),
    )


@login_required
def deleted_log(request: HttpRequest):
    """List (GET) or clear (POST) the removed data log"""
    if get_user_role(request.user) not in MANAGEMENT_ROLES:
        return HttpResponse("Access denied", status=403)

    if request.method == "POST":
        count = clear_deleted_data_log()
        return JsonResponse({"success": True, "cleared": count})
    return JsonResponse({"success": True, "entries": get_deleted_data_log()})


@login_required
def restore_data(request: HttpRequest):
    if get_user_role(request.user) not in MANAGEMENT_ROLES:
        return JsonResponse({"success": False, "error": "Access denied"})
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    log_ids = get_request_data(request).get("logIds") or []
    if not isinstance(log_ids, list):
        log_ids = [log_ids]
    return json_action(restore_student_data, log_ids)


# ==================== APPROVALS ====================


@login_required
def login_requests(request: HttpRequest):
    if get_user_role(request.user) not in MANAGEMENT_ROLES:
        return HttpResponse("Access denied", status=403)
    return JsonResponse(
        {
            "success": True,
            "requests": get_login_requests(
                request.user, request.GET.get("status", "pending")
            ),
        }
    )


@login_required
def decide_login_request(request: HttpRequest, username: str, action: str):
    if get_user_role(request.user) not in MANAGEMENT_ROLES:
        return JsonResponse({"success": False, "error": "Access denied"})
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    if action == "approve":
        return json_action(approve_login, request.user, username)
    return json_action(reject_login, request.user, username)


@login_required
def approve_login_request(request: HttpRequest, username: str):
    return decide_login_request(request, username, "approve")


@login_required
def reject_login_request(request: HttpRequest, username: str):
    return decide_login_request(request, username, "reject")


@login_required
def attendance_access(request: HttpRequest):
    """Request online attendance access (POST) or list pending requests (GET)"""
    if request.method == "POST":
        return json_action(request_attendance_access, request.user)

    if get_user_role(request.user) not in ATTENDANCE_APPROVER_ROLES:
        return HttpResponse("Access denied", status=403)
    return JsonResponse({"success": True, "requests": get_attendance_requests(request.user)})


@login_required
def approve_attendance_request(request: HttpRequest, username: str):
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})
    return json_action(approve_attendance_access, request.user, username)
