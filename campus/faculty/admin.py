from django.contrib import admin

from .models import Faculty, Staff


@admin.register(Faculty)
class FacultyAdmin(admin.ModelAdmin):
    list_display = ("faculty_id", "faculty_name", "college_code", "program_code")
    list_filter = ("college_code", "program_code")
    search_fields = ("faculty_id", "faculty_name")


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ("staff_id", "staff_name", "college_code")
    list_filter = ("college_code",)
    search_fields = ("staff_id", "staff_name")
