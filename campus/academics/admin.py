from django.contrib import admin

from .models import StudentMark, Syllabus


@admin.register(StudentMark)
class StudentMarkAdmin(admin.ModelAdmin):
    list_display = (
        "student",
        "semester",
        "subject_code",
        "subject_name",
        "internal_mark",
        "external_mark",
        "marks_obtained",
    )
    list_filter = ("semester", "student__college_code", "student__program_code")
    search_fields = ("student__admission_number", "subject_code", "subject_name")
    ordering = ("student", "semester", "subject_code")

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("student")


@admin.register(Syllabus)
class SyllabusAdmin(admin.ModelAdmin):
    list_display = ("department", "file_name", "uploaded_by", "uploaded_at")
    list_filter = ("department",)
    search_fields = ("file_name",)
