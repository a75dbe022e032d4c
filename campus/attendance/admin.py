from django.contrib import admin

from .models import FacultyAttendance, GpsAnchor, StaffAttendance, StudentAttendance


@admin.register(StudentAttendance)
class StudentAttendanceAdmin(admin.ModelAdmin):
    list_display = ("student", "date", "morning", "afternoon")
    list_filter = ("date", "morning", "afternoon", "student__college_code")
    search_fields = ("student__admission_number", "student__student_name")
    date_hierarchy = "date"


admin.site.register(
    [
        FacultyAttendance,
        StaffAttendance,
        GpsAnchor,
    ]
)
