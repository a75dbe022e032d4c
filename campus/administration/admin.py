from django.contrib import admin

from .models import DeletedDataLog


@admin.register(DeletedDataLog)
class DeletedDataLogAdmin(admin.ModelAdmin):
    list_display = ("admission_number", "student_name", "data_type", "scope", "deleted_by", "timestamp")
    list_filter = ("data_type", "timestamp")
    search_fields = ("admission_number", "student_name", "deleted_by")
    readonly_fields = ("deleted_data", "timestamp")
