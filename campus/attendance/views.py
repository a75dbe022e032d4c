import logging
import math
from datetime import date

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.contrib.auth.decorators import login_required

from base.constants import Role
from base.file_utils import dataframe_rows, read_file_to_dataframe
from base.models import Profile
from base.views import (
    DATA_ENTRY_ROLES,
    get_population_filters,
    get_profile,
    get_request_data,
    get_user_role,
    tabular_export_response,
)
from faculty.data_utils import get_faculty_or_none, get_staff_or_none
from students.data_utils import get_student_or_none, parse_date
from .data_utils import (
    ATTENDANCE_CSV_HEADERS,
    get_attendance_csv_rows,
    normalize_session,
    process_attendance_row,
    search_student_attendance,
    upsert_attendance,
    verify_location,
)
from .models import FacultyAttendance, Session, StaffAttendance, StudentAttendance
from .summary import attendance_rule_band

logger = logging.getLogger(__name__)

PERSON_LOOKUPS = {
    "student": (get_student_or_none, StudentAttendance, "admissionNumber"),
    "faculty": (get_faculty_or_none, FacultyAttendance, "facultyId"),
    "staff": (get_staff_or_none, StaffAttendance, "staffId"),
}


# ==================== HELPER FUNCTIONS ====================


def save_attendance_records(kind: str, records):
    """Upsert a batch of attendance dicts; returns (saved, errors)"""
    lookup, model, id_key = PERSON_LOOKUPS[kind]
    saved = 0
    errors = []
    for index, record in enumerate(records, 1):
        person = lookup(record.get(id_key, ""))
        on_date = parse_date(record.get("date"))
        morning = normalize_session(record.get("morning", ""))
        afternoon = normalize_session(record.get("afternoon", ""))

        if person is None:
            errors.append(f"Record {index}: {kind} {record.get(id_key)} not found")
            continue
        if on_date is None or morning is None or afternoon is None:
            errors.append(f"Record {index}: invalid date or session values")
            continue

        upsert_attendance(model, kind, person, on_date, morning, afternoon)
        saved += 1
    return saved, errors


def get_own_record(user):
    """The attendance owner (student/faculty/staff) behind a login"""
    role = get_user_role(user)
    if role == Role.STUDENT:
        return "student", get_student_or_none(user.username)
    if role == Role.STAFF:
        return "staff", get_staff_or_none(user.username)
    return "faculty", get_faculty_or_none(user.username)


# ==================== VIEW FUNCTIONS ====================


@login_required
def add_attendance(request: HttpRequest, kind: str):
    """Record student, faculty or staff attendance (single record or a list)"""
    if get_user_role(request.user) not in DATA_ENTRY_ROLES:
        return JsonResponse({"success": False, "error": "Access denied"})
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})
    if kind not in PERSON_LOOKUPS:
        return JsonResponse({"success": False, "error": "Unknown attendance type"})

    data = get_request_data(request)
    records = data.get("records") if isinstance(data.get("records"), list) else [data]
    saved, errors = save_attendance_records(kind, records)
    logger.info("Saved %s %s attendance records", saved, kind)

    response_data = {"success": saved > 0 or not errors, "saved": saved, "errors": errors[:10]}
    if errors:
        response_data["message"] = f"Saved {saved} records with {len(errors)} errors"
    return JsonResponse(response_data)


@login_required
def add_student_attendance(request: HttpRequest):
    return add_attendance(request, "student")


@login_required
def add_faculty_attendance(request: HttpRequest):
    return add_attendance(request, "faculty")


@login_required
def add_staff_attendance(request: HttpRequest):
    return add_attendance(request, "staff")


@login_required
def import_attendance(request: HttpRequest):
    """Import student attendance from CSV or Excel file"""
    role = get_user_role(request.user)
    if role not in DATA_ENTRY_ROLES:
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
    college = None if college in (None, "ALL") else college

    imported_count = 0
    errors = []
    for row_num, row in dataframe_rows(df):
        success, row_error = process_attendance_row(row, row_num, college)
        if success:
            imported_count += 1
        elif row_error:
            errors.append(row_error)

    logger.info("Imported %s attendance rows (%s errors)", imported_count, len(errors))
    response_data = {
        "success": True,
        "imported_count": imported_count,
        "errors": errors[:10],
    }
    if errors:
        response_data["message"] = (
            f"Imported {imported_count} records with {len(errors)} errors"
        )
    return JsonResponse(response_data)


@login_required
def attendance_search(request: HttpRequest):
    if get_user_role(request.user) == Role.STUDENT:
        return HttpResponse("Access denied", status=403)

    filters = get_population_filters(request)
    filters.pop("semester")
    results = search_student_attendance(
        semester=request.GET.get("semester"),
        start_date=request.GET.get("startDate"),
        end_date=request.GET.get("endDate"),
        name=request.GET.get("name"),
        admission_number=request.GET.get("admissionNumber"),
        **filters,
    )
    return JsonResponse({"success": True, "results": results})


@login_required
def export_attendance(request: HttpRequest, file_format: str = "csv"):
    """Export the attendance search in CSV or Excel format"""
    if get_user_role(request.user) == Role.STUDENT:
        return HttpResponse("Access denied", status=403)

    filters = get_population_filters(request)
    filters.pop("semester")
    rows = get_attendance_csv_rows(
        semester=request.GET.get("semester"),
        start_date=request.GET.get("startDate"),
        end_date=request.GET.get("endDate"),
        name=request.GET.get("name"),
        admission_number=request.GET.get("admissionNumber"),
        **filters,
    )
    return tabular_export_response(
        file_format,
        "student_attendance",
        ATTENDANCE_CSV_HEADERS,
        rows,
        sheet_name="Attendance",
    )


@login_required
def export_attendance_csv(request: HttpRequest):
    """Export attendance data to CSV (wrapper)"""
    return export_attendance(request, "csv")


@login_required
def export_attendance_excel(request: HttpRequest):
    """Export attendance data to Excel (wrapper)"""
    return export_attendance(request, "excel")


@login_required
def verify_location_view(request: HttpRequest):
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    data = get_request_data(request)
    try:
        latitude = float(data["lat"])
        longitude = float(data["lng"])
    except (KeyError, TypeError, ValueError):
        return JsonResponse({"success": False, "error": "Missing parameters"}, status=400)

    return JsonResponse({"success": True, **verify_location(request.user, latitude, longitude)})


@login_required
def online_attendance(request: HttpRequest):
    """Self check-in for one session, gated by approval and room distance"""
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    profile = get_profile(request.user)
    if profile is None or profile.attendance_status != Profile.Status.APPROVED:
        return JsonResponse(
            {"success": False, "error": "Online attendance access has not been approved."}
        )

    data = get_request_data(request)
    session = (data.get("session") or "").lower()
    if session not in ("morning", "afternoon"):
        return JsonResponse({"success": False, "error": "Session must be morning or afternoon"})

    try:
        location = verify_location(request.user, float(data["lat"]), float(data["lng"]))
    except (KeyError, TypeError, ValueError):
        return JsonResponse({"success": False, "error": "Missing parameters"}, status=400)

    if not location["withinRange"]:
        return JsonResponse(
            {
                "success": False,
                "error": f"You are {location['distance']:.0f}m away from the campus.",
                **location,
            }
        )

    kind, person = get_own_record(request.user)
    if person is None:
        return JsonResponse({"success": False, "error": "Attendance profile not found"})

    model = PERSON_LOOKUPS[kind][1]
    today = date.today()
    record = model.objects.filter(**{kind: person, "date": today}).first()
    sessions = {
        "morning": record.morning if record else Session.ABSENT,
        "afternoon": record.afternoon if record else Session.ABSENT,
    }
    sessions[session] = Session.PRESENT
    upsert_attendance(model, kind, person, today, sessions["morning"], sessions["afternoon"])

    return JsonResponse(
        {"success": True, "message": f"{session.title()} attendance marked.", **location}
    )


@login_required
def attendance_rule(request: HttpRequest):
    try:
        percentage = float(request.GET.get("percentage", ""))
    except ValueError:
        return JsonResponse({"success": False, "error": "Invalid percentage"})
    if not math.isfinite(percentage):
        return JsonResponse({"success": False, "error": "Invalid percentage"})
    return JsonResponse({"success": True, **attendance_rule_band(percentage)})
