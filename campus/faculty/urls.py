from django.urls import path
from . import views

app_name = "faculty"

urlpatterns = [
    path("", views.faculty_list, name="faculty_list"),
    path("add/", views.add_faculty, name="add_faculty"),
    path("filtered/", views.filtered_faculty_details, name="filtered_faculty"),
    path(
        "export/<str:file_format>/",
        views.export_faculty_attendance,
        name="export_faculty_attendance",
    ),
    path("staff/", views.staff_list, name="staff_list"),
    path("staff/add/", views.add_staff, name="add_staff"),
    path("staff/filtered/", views.filtered_staff_details, name="filtered_staff"),
    path(
        "staff/export/<str:file_format>/",
        views.export_staff_attendance,
        name="export_staff_attendance",
    ),
    path("staff/<str:staff_id>/", views.staff_details, name="staff_details"),
    path("<str:faculty_id>/", views.faculty_details, name="faculty_details"),
]
