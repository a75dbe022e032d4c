from django.urls import path
from . import views

app_name = "academics"

urlpatterns = [
    path("marks/add/", views.add_mark, name="add_mark"),
    path("subjects/", views.subjects, name="subjects"),
    path("results/", views.result_sheet, name="result_sheet"),
    path("results/export/csv/", views.export_results_csv, name="export_results_csv"),
    path("results/export/excel/", views.export_results_excel, name="export_results_excel"),
    path(
        "marksheet/<str:admission_number>/<int:semester>/",
        views.download_marksheet,
        name="download_marksheet",
    ),
    path("syllabus/", views.syllabus_list, name="syllabus_list"),
    path("syllabus/upload/", views.upload_syllabus, name="upload_syllabus"),
    path("syllabus/<str:syllabus_id>/delete/", views.remove_syllabus, name="delete_syllabus"),
]
