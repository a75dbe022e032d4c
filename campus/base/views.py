import csv
import json
import logging

import pandas as pd

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.contrib.auth.models import Group, User
from django.contrib.auth import login, authenticate, logout
from django.contrib.auth.decorators import login_required
from django.db import transaction

from .constants import College, Role
from .forms import RegistrationForm
from .models import Profile

logger = logging.getLogger(__name__)

MANAGEMENT_ROLES = [Role.CHAIRMAN, Role.PRINCIPAL, Role.HOD]
DATA_ENTRY_ROLES = MANAGEMENT_ROLES + [Role.FACULTY, Role.STAFF]

ROLE_ORDER = [
    Role.CHAIRMAN,
    Role.PRINCIPAL,
    Role.HOD,
    Role.FACULTY,
    Role.STAFF,
    Role.STUDENT,
]


def get_user_role(user):
    if user.is_superuser:
        return Role.CHAIRMAN.value
    names = set(user.groups.values_list("name", flat=True))
    for role in ROLE_ORDER:
        if role.value in names:
            return role.value
    return Role.STUDENT.value


def get_profile(user):
    try:
        return user.profile
    except Profile.DoesNotExist:
        return None


def get_user_scope(user, college=None, department=None):
    """Restrict the requested college/department to what the user may see"""
    role = get_user_role(user)
    profile = get_profile(user)
    if role == Role.CHAIRMAN or profile is None:
        return college or College.ALL.value, department
    if role == Role.PRINCIPAL:
        return profile.college, department
    return profile.college, profile.department or department


def get_request_data(request: HttpRequest):
    """Form fields or a JSON body, whichever the client sent"""
    if request.content_type == "application/json":
        try:
            return json.loads(request.body or b"{}")
        except json.JSONDecodeError:
            return {}
    return request.POST.dict()


def create_user_with_profile(
    username,
    password,
    role,
    name="",
    email="",
    college=None,
    department="",
    mobile_number="",
    father_mobile_number="",
    status=Profile.Status.PENDING,
):
    user = User.objects.create_user(
        username=username, password=password, email=email or "", first_name=name
    )
    group, _ = Group.objects.get_or_create(name=role)
    user.groups.add(group)
    Profile.objects.create(
        user=user,
        role=role,
        college=college or None,
        department=department or "",
        mobile_number=mobile_number or "",
        father_mobile_number=father_mobile_number or "",
        status=status,
    )
    return user


def login_view(request: HttpRequest):
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    data = get_request_data(request)
    username = (data.get("username") or "").strip().upper()
    password = data.get("password") or ""

    user = authenticate(request, username=username, password=password)
    if user is None:
        return JsonResponse(
            {"success": False, "error": "Invalid Credentials!"}, status=401
        )

    profile = get_profile(user)
    if profile is not None and not profile.is_approved:
        return JsonResponse(
            {"success": False, "error": "Your account is awaiting approval."},
            status=403,
        )

    login(request, user)
    logger.info("User %s logged in", user.username)
    return JsonResponse(
        {
            "success": True,
            "user": {
                "id": user.username,
                "name": user.get_full_name() or user.username,
                "role": get_user_role(user),
                "college": profile.college if profile else None,
                "department": profile.department if profile else "",
            },
        }
    )


@login_required
def logout_view(request: HttpRequest):
    logout(request)
    return JsonResponse({"success": True})


def register(request: HttpRequest):
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    form = RegistrationForm(get_request_data(request))
    if not form.is_valid():
        errors = [str(e) for e in form.non_field_errors()] or [
            f"{field}: {errs[0]}" for field, errs in form.errors.items()
        ]
        return JsonResponse({"success": False, "error": errors[0]}, status=400)

    data = form.cleaned_data
    status = (
        Profile.Status.APPROVED
        if data["role"] == Role.CHAIRMAN
        else Profile.Status.PENDING
    )
    with transaction.atomic():
        create_user_with_profile(
            username=data["register_id"],
            password=data["password1"],
            role=data["role"],
            name=data["name"],
            email=data["email"],
            college=data["college"],
            department=data["department"],
            mobile_number=data["mobile_number"],
            father_mobile_number=data["father_mobile_number"],
            status=status,
        )

    logger.info("Registered %s as %s", data["register_id"], data["role"])
    return JsonResponse(
        {
            "success": True,
            "message": (
                "Registration successful."
                if status == Profile.Status.APPROVED
                else "Registration successful. Your account is pending approval."
            ),
            "id": data["register_id"],
        }
    )


def health(request: HttpRequest):
    return HttpResponse("ok")


# ==================== HELPER FUNCTIONS ====================


def get_population_filters(request: HttpRequest):
    """Dashboard/search filters from the query string, limited to the user's scope"""
    params = request.GET
    college, department = get_user_scope(
        request.user, params.get("college"), params.get("department")
    )
    return {
        "college": college,
        "year": params.get("year"),
        "department": department,
        "roll_no": params.get("rollNo"),
        "semester": params.get("semester"),
    }


def create_export_response(file_format: str, filename: str) -> HttpResponse:
    """Create HTTP response for file export"""
    content_types = {
        "csv": "text/csv",
        "excel": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "json": "application/json",
        "pdf": "application/pdf",
    }

    response = HttpResponse(content_type=content_types.get(file_format, "text/plain"))
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


def tabular_export_response(
    file_format: str, basename: str, headers, rows, sheet_name: str = "Sheet1"
) -> HttpResponse:
    """CSV or Excel download of a header row plus data rows"""
    if file_format == "csv":
        response = create_export_response("csv", f"{basename}.csv")
        writer = csv.writer(response)
        writer.writerow(headers)
        writer.writerows(rows)
    elif file_format == "excel":
        df = pd.DataFrame(rows, columns=headers)
        response = create_export_response("excel", f"{basename}.xlsx")
        with pd.ExcelWriter(response, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    else:
        return HttpResponse("Invalid format", status=400)
    return response
