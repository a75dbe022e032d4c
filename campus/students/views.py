import logging

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.contrib.auth.decorators import login_required

from base.constants import Role
from base.views import (
    DATA_ENTRY_ROLES,
    MANAGEMENT_ROLES,
    get_population_filters,
    get_request_data,
    get_user_role,
    tabular_export_response,
)
from .data_utils import (
    FEE_CSV_HEADERS,
    PLACEMENT_CSV_HEADERS,
    add_student_fee,
    add_student_placement,
    get_fee_csv_rows,
    get_filtered_student_details,
    get_placement_csv_rows,
    get_student_details,
    get_student_or_none,
    record_online_payment,
    search_placements,
    search_student_fees,
    search_students,
    serialize_fee,
)
from .forms import OnlinePaymentForm, ProfileImageForm
from .generation_utils import exam_fee
from .pdf_utils import generate_student_report_pdf

logger = logging.getLogger(__name__)


# ==================== HELPER FUNCTIONS ====================


def can_view_student(user, admission_number: str) -> bool:
    """Students may only see their own record"""
    if get_user_role(user) != Role.STUDENT:
        return True
    return user.username.upper() == (admission_number or "").upper()


# ==================== VIEW FUNCTIONS ====================


@login_required
def student_search(request: HttpRequest):
    if get_user_role(request.user) == Role.STUDENT:
        return HttpResponse("Access denied", status=403)

    results = search_students(
        name=request.GET.get("name"),
        admission_number=request.GET.get("admissionNumber"),
        placement_status=request.GET.get("placementStatus"),
        **get_population_filters(request),
    )
    return JsonResponse({"success": True, "results": results})


@login_required
def student_details(request: HttpRequest, admission_number: str):
    if not can_view_student(request.user, admission_number):
        return HttpResponse("Access denied", status=403)

    details = get_student_details(admission_number)
    if details is None:
        return JsonResponse(
            {"success": False, "error": "Student not found"}, status=404
        )
    return JsonResponse({"success": True, "student": details})


@login_required
def filtered_student_details(request: HttpRequest):
    if get_user_role(request.user) == Role.STUDENT:
        return HttpResponse("Access denied", status=403)

    rows = get_filtered_student_details(
        start_date=request.GET.get("startDate"),
        end_date=request.GET.get("endDate"),
        **get_population_filters(request),
    )
    return JsonResponse({"success": True, "results": rows})


@login_required
def download_student_report(request: HttpRequest, admission_number: str):
    if not can_view_student(request.user, admission_number):
        return HttpResponse("Access denied", status=403)

    student = get_student_or_none(admission_number)
    if student is None:
        return HttpResponse("Student not found", status=404)

    buffer = generate_student_report_pdf(student, get_student_details(admission_number))
    response = HttpResponse(buffer, content_type="application/pdf")
    response["Content-Disposition"] = (
        f'attachment; filename="{student.admission_number}_report.pdf"'
    )
    return response


@login_required
def profile_image(request: HttpRequest, admission_number: str):
    """Upload (POST) or fetch (GET) a student's profile image"""
    if not can_view_student(request.user, admission_number):
        return HttpResponse("Access denied", status=403)

    student = get_student_or_none(admission_number)
    if student is None:
        return JsonResponse({"success": False, "error": "Student not found"})

    if request.method == "POST":
        form = ProfileImageForm(request.POST, request.FILES, instance=student)
        if not form.is_valid() or not request.FILES.get("profile_image"):
            return JsonResponse({"success": False, "error": "Please upload a valid image"})
        form.save()
        logger.info("Updated profile image for %s", student.admission_number)

    return JsonResponse(
        {
            "success": True,
            "url": student.profile_image.url if student.profile_image else None,
        }
    )


# ==================== FEES ====================


@login_required
def fee_search(request: HttpRequest):
    if get_user_role(request.user) == Role.STUDENT:
        return HttpResponse("Access denied", status=403)

    results = search_student_fees(
        academic_year=request.GET.get("academicYear"),
        fee_type=request.GET.get("feeType", "Tuition"),
        **get_population_filters(request),
    )
    return JsonResponse({"success": True, "results": results})


@login_required
def export_fees(request: HttpRequest, file_format: str = "csv"):
    role = get_user_role(request.user)
    if role not in MANAGEMENT_ROLES + [Role.STAFF]:
        return HttpResponse("Access denied", status=403)

    rows = get_fee_csv_rows(
        academic_year=request.GET.get("academicYear"),
        **get_population_filters(request),
    )
    return tabular_export_response(
        file_format, "student_fees", FEE_CSV_HEADERS, rows, sheet_name="Fees"
    )


@login_required
def export_fees_csv(request: HttpRequest):
    """Export fee data to CSV (wrapper)"""
    return export_fees(request, "csv")


@login_required
def export_fees_excel(request: HttpRequest):
    """Export fee data to Excel (wrapper)"""
    return export_fees(request, "excel")


@login_required
def add_fee(request: HttpRequest):
    if get_user_role(request.user) not in DATA_ENTRY_ROLES:
        return JsonResponse({"success": False, "error": "Access denied"})
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    data = get_request_data(request)
    if not data.get("admissionNumber") or not data.get("academicYear"):
        return JsonResponse(
            {"success": False, "error": "Admission number and academic year are required"}
        )
    try:
        message = add_student_fee(data)
    except ValueError as e:
        return JsonResponse({"success": False, "error": str(e)})
    return JsonResponse({"success": True, "message": message})


@login_required
def online_payment(request: HttpRequest):
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    form = OnlinePaymentForm(get_request_data(request))
    if not form.is_valid():
        errors = [str(e) for e in form.non_field_errors()] or [
            f"{field}: {errs[0]}" for field, errs in form.errors.items()
        ]
        return JsonResponse({"success": False, "error": errors[0]})

    data = form.cleaned_data
    if not can_view_student(request.user, data["admission_number"]):
        return JsonResponse({"success": False, "error": "Access denied"})

    student = get_student_or_none(data["admission_number"])
    if student is None:
        return JsonResponse({"success": False, "error": "Student not found"})

    exam_fee_total = None
    amount = data.get("amount")
    if data["fee_type"] == "Exam":
        exam_fee_total = exam_fee(
            data.get("subject_count") or 0,
            data.get("late_fee") or 0,
            data.get("all_subjects"),
        )
        amount = amount or exam_fee_total

    try:
        fee = record_online_payment(
            student,
            data["fee_type"],
            data["academic_year"],
            amount,
            semester=data.get("semester"),
            exam_fee_total=exam_fee_total,
        )
    except ValueError as e:
        return JsonResponse({"success": False, "error": str(e)})

    label = "Tuition Fees" if data["fee_type"] == "Tuition" else "Exam Fees"
    return JsonResponse(
        {
            "success": True,
            "message": f"Payment of ₹{amount:,.0f} successful for {label}!",
            "fee": serialize_fee(fee),
        }
    )


# ==================== PLACEMENTS ====================


@login_required
def placement_search(request: HttpRequest):
    if get_user_role(request.user) == Role.STUDENT:
        return HttpResponse("Access denied", status=403)

    results = search_placements(
        name=request.GET.get("name"),
        admission_number=request.GET.get("admissionNumber"),
        company=request.GET.get("company"),
        **get_population_filters(request),
    )
    return JsonResponse({"success": True, "results": results})


@login_required
def export_placements(request: HttpRequest, file_format: str = "csv"):
    if get_user_role(request.user) == Role.STUDENT:
        return HttpResponse("Access denied", status=403)

    rows = get_placement_csv_rows(
        name=request.GET.get("name"),
        admission_number=request.GET.get("admissionNumber"),
        company=request.GET.get("company"),
        **get_population_filters(request),
    )
    return tabular_export_response(
        file_format, "placements", PLACEMENT_CSV_HEADERS, rows, sheet_name="Placements"
    )


@login_required
def export_placements_csv(request: HttpRequest):
    """Export placements to CSV (wrapper)"""
    return export_placements(request, "csv")


@login_required
def export_placements_excel(request: HttpRequest):
    """Export placements to Excel (wrapper)"""
    return export_placements(request, "excel")


@login_required
def add_placement(request: HttpRequest):
    if get_user_role(request.user) not in DATA_ENTRY_ROLES:
        return JsonResponse({"success": False, "error": "Access denied"})
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    try:
        message = add_student_placement(get_request_data(request))
    except ValueError as e:
        return JsonResponse({"success": False, "error": str(e)})
    return JsonResponse({"success": True, "message": message})
