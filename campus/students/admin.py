from django.contrib import admin

from .models import PlacementDetails, Student, StudentFee


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = (
        "admission_number",
        "student_name",
        "college_code",
        "program_code",
        "roll_no",
        "is_placed",
    )
    list_filter = ("college_code", "program_code", "is_placed", "gender")
    search_fields = ("admission_number", "student_name")


@admin.register(StudentFee)
class StudentFeeAdmin(admin.ModelAdmin):
    list_display = (
        "student",
        "academic_year",
        "semester",
        "fee_type",
        "total_fees",
        "paid_amount",
        "due_amount",
        "status",
    )
    list_filter = ("fee_type", "status", "academic_year")
    search_fields = ("student__admission_number", "student__student_name")

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("student")


@admin.register(PlacementDetails)
class PlacementDetailsAdmin(admin.ModelAdmin):
    list_display = ("student", "company_name", "hr_name", "academic_year")
    search_fields = ("student__admission_number", "company_name")
