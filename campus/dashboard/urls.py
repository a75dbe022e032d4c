from django.urls import path
from . import views

app_name = "dashboard"

urlpatterns = [
    path("", views.dashboard_home, name="dashboard_home"),
    path("comparison/", views.college_comparison, name="college_comparison"),
    path("report/", views.download_dashboard_report, name="dashboard_report"),
]
