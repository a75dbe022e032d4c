import logging

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.contrib.auth.decorators import login_required

from base.constants import Role
from base.views import (
    DATA_ENTRY_ROLES,
    MANAGEMENT_ROLES,
    get_population_filters,
    get_profile,
    get_request_data,
    get_user_role,
    tabular_export_response,
)
from students.data_utils import get_student_or_none, serialize_mark
from students.views import can_view_student
from .data_utils import (
    RESULT_CSV_HEADERS,
    add_student_mark,
    delete_syllabus,
    get_result_csv_rows,
    get_result_sheet,
    get_subjects,
    list_syllabi,
    save_syllabus,
    serialize_syllabus,
)
from .forms import SyllabusUploadForm
from .result_utils import generate_marksheet_pdf

logger = logging.getLogger(__name__)


@login_required
def add_mark(request: HttpRequest):
    if get_user_role(request.user) not in DATA_ENTRY_ROLES:
        return JsonResponse({"success": False, "error": "Access denied"})
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    try:
        mark = add_student_mark(get_request_data(request))
    except ValueError as e:
        return JsonResponse({"success": False, "error": str(e)})

    return JsonResponse(
        {
            "success": True,
            "message": f"Marks saved for {mark.student.admission_number}.",
            "mark": serialize_mark(mark),
        }
    )


@login_required
def subjects(request: HttpRequest):
    department = request.GET.get("department")
    if not department:
        profile = get_profile(request.user)
        department = profile.department if profile else None
    return JsonResponse(
        {
            "success": True,
            "subjects": get_subjects(department, request.GET.get("semester")),
        }
    )


@login_required
def result_sheet(request: HttpRequest):
    if get_user_role(request.user) == Role.STUDENT:
        return HttpResponse("Access denied", status=403)

    filters = get_population_filters(request)
    data = get_result_sheet(subject=request.GET.get("subject"), **filters)
    return JsonResponse({"success": True, **data})


@login_required
def export_results(request: HttpRequest, file_format: str = "csv"):
    if get_user_role(request.user) == Role.STUDENT:
        return HttpResponse("Access denied", status=403)

    rows = get_result_csv_rows(
        subject=request.GET.get("subject"), **get_population_filters(request)
    )
    return tabular_export_response(
        file_format, "results", RESULT_CSV_HEADERS, rows, sheet_name="Results"
    )


@login_required
def export_results_csv(request: HttpRequest):
    return export_results(request, "csv")


@login_required
def export_results_excel(request: HttpRequest):
    return export_results(request, "excel")


@login_required
def download_marksheet(request: HttpRequest, admission_number: str, semester: int):
    """Semester marksheet PDF for one student"""
    if not can_view_student(request.user, admission_number):
        return HttpResponse("Access denied", status=403)

    student = get_student_or_none(admission_number)
    if student is None:
        return HttpResponse("Student not found", status=404)

    marks = student.marks.filter(semester=semester).order_by("subject_code")
    if not marks.exists():
        return HttpResponse(
            f"No marks recorded for semester {semester}.", status=404
        )

    try:
        pdf_buffer = generate_marksheet_pdf(student, semester, marks)
    except OSError:
        # pdfkit raises OSError when wkhtmltopdf is missing or fails
        logger.error("Marksheet generation failed for %s", admission_number, exc_info=True)
        return HttpResponse("Error generating marksheet PDF", status=500)

    response = HttpResponse(pdf_buffer, content_type="application/pdf")
    filename = f"marksheet_{student.admission_number}_sem{semester}.pdf"
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


# ==================== SYLLABUS ====================


@login_required
def syllabus_list(request: HttpRequest):
    return JsonResponse(
        {"success": True, "syllabi": list_syllabi(request.GET.get("department"))}
    )


@login_required
def upload_syllabus(request: HttpRequest):
    if get_user_role(request.user) not in MANAGEMENT_ROLES + [Role.FACULTY]:
        return JsonResponse({"success": False, "error": "Access denied"})
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    form = SyllabusUploadForm(request.POST, request.FILES)
    if not form.is_valid():
        field, errors = next(iter(form.errors.items()))
        return JsonResponse({"success": False, "error": errors[0]})

    syllabus = save_syllabus(
        form.cleaned_data["department"], form.cleaned_data["file"], request.user
    )
    return JsonResponse(
        {
            "success": True,
            "message": "Syllabus uploaded successfully.",
            "syllabus": serialize_syllabus(syllabus),
        }
    )


@login_required
def remove_syllabus(request: HttpRequest, syllabus_id: str):
    if get_user_role(request.user) not in MANAGEMENT_ROLES + [Role.FACULTY]:
        return JsonResponse({"success": False, "error": "Access denied"})
    if request.method != "POST":
        return JsonResponse({"success": False, "error": "Invalid request method"})

    if not delete_syllabus(syllabus_id):
        return JsonResponse({"success": False, "error": "Syllabus not found"}, status=404)
    return JsonResponse({"success": True})
