from django.contrib import admin

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "college", "department", "status", "approved_by")
    list_filter = ("role", "college", "status", "attendance_status")
    search_fields = ("user__username", "user__first_name", "department")
    actions = ["approve_profiles"]

    def approve_profiles(self, request, queryset):
        updated = queryset.filter(status=Profile.Status.PENDING).update(
            status=Profile.Status.APPROVED, approved_by=request.user.username
        )
        self.message_user(request, f"{updated} accounts approved.")

    approve_profiles.short_description = "Approve selected accounts"  # type: ignore
