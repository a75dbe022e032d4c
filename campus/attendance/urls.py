from django.urls import path
from . import views

app_name = "attendance"

urlpatterns = [
    path("student/add/", views.add_student_attendance, name="add_student_attendance"),
    path("faculty/add/", views.add_faculty_attendance, name="add_faculty_attendance"),
    path("staff/add/", views.add_staff_attendance, name="add_staff_attendance"),
    path("import/", views.import_attendance, name="import_attendance"),
    path("search/", views.attendance_search, name="search"),
    path("export/csv/", views.export_attendance_csv, name="export_attendance_csv"),
    path("export/excel/", views.export_attendance_excel, name="export_attendance_excel"),
    path("verify-location/", views.verify_location_view, name="verify_location"),
    path("online/", views.online_attendance, name="online_attendance"),
    path("rules/", views.attendance_rule, name="attendance_rule"),
]
