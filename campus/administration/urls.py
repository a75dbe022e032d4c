from django.urls import path
from . import views

app_name = "administration"

urlpatterns = [
    path("upload/", views.bulk_upload, name="bulk_upload"),
    path("delete-data/", views.delete_data, name="delete_data"),
    path("deleted-log/", views.deleted_log, name="deleted_log"),
    path("restore/", views.restore_data, name="restore_data"),
    path("login-requests/", views.login_requests, name="login_requests"),
    path(
        "login-requests/<str:username>/approve/",
        views.approve_login_request,
        name="approve_login_request",
    ),
    path(
        "login-requests/<str:username>/reject/",
        views.reject_login_request,
        name="reject_login_request",
    ),
    path("attendance-access/", views.attendance_access, name="attendance_access"),
    path(
        "attendance-access/<str:username>/approve/",
        views.approve_attendance_request,
        name="approve_attendance_request",
    ),
]
