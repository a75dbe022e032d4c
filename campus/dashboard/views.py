from django.http import HttpRequest, HttpResponse, JsonResponse
from django.contrib.auth.decorators import login_required

from base.constants import College, Role
from base.views import get_population_filters, get_user_role
from .metrics import get_dashboard_data
from .pdf_utils import generate_dashboard_report_pdf


def get_dashboard_filters(request: HttpRequest):
    """Population filters plus the dashboard-only subject, date and person ids"""
    filters = get_population_filters(request)
    filters.update(
        {
            "subject": request.GET.get("subject"),
            "on_date": request.GET.get("date"),
            "faculty_id": request.GET.get("facultyId"),
            "staff_id": request.GET.get("staffId"),
        }
    )
    return filters


@login_required
def dashboard_home(request: HttpRequest):
    """Aggregated metrics for the user's scope"""
    if get_user_role(request.user) == Role.STUDENT:
        return HttpResponse("Access denied", status=403)

    filters = get_dashboard_filters(request)
    return JsonResponse(
        {
            "success": True,
            "role": get_user_role(request.user),
            "data": get_dashboard_data(**filters),
        }
    )


@login_required
def college_comparison(request: HttpRequest):
    """Side-by-side dashboard metrics for every college"""
    if get_user_role(request.user) != Role.CHAIRMAN:
        return HttpResponse("Access denied", status=403)

    filters = get_dashboard_filters(request)
    filters.update({"faculty_id": None, "staff_id": None})
    comparison = {}
    for college in College:
        if college == College.ALL:
            continue
        filters["college"] = college.value
        comparison[college.value] = get_dashboard_data(**filters)
    return JsonResponse({"success": True, "colleges": comparison})


@login_required
def download_dashboard_report(request: HttpRequest):
    if get_user_role(request.user) == Role.STUDENT:
        return HttpResponse("Access denied", status=403)

    filters = get_dashboard_filters(request)
    buffer = generate_dashboard_report_pdf(get_dashboard_data(**filters), filters)
    response = HttpResponse(buffer, content_type="application/pdf")
    response["Content-Disposition"] = 'attachment; filename="dashboard_report.pdf"'
    return response
