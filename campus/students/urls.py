from django.urls import path
from . import views

app_name = "students"

urlpatterns = [
    path("search/", views.student_search, name="search"),
    path("filtered/", views.filtered_student_details, name="filtered_details"),
    # Fees
    path("fees/search/", views.fee_search, name="fee_search"),
    path("fees/add/", views.add_fee, name="add_fee"),
    path("fees/pay/", views.online_payment, name="online_payment"),
    path("fees/export/csv/", views.export_fees_csv, name="export_fees_csv"),
    path("fees/export/excel/", views.export_fees_excel, name="export_fees_excel"),
    # Placements
    path("placements/search/", views.placement_search, name="placement_search"),
    path("placements/add/", views.add_placement, name="add_placement"),
    path(
        "placements/export/csv/",
        views.export_placements_csv,
        name="export_placements_csv",
    ),
    path(
        "placements/export/excel/",
        views.export_placements_excel,
        name="export_placements_excel",
    ),
    # Individual students
    path("<str:admission_number>/", views.student_details, name="details"),
    path(
        "<str:admission_number>/report/",
        views.download_student_report,
        name="download_report",
    ),
    path(
        "<str:admission_number>/profile-image/",
        views.profile_image,
        name="profile_image",
    ),
]
