from django.db import models
from django.contrib.auth.models import User

from .constants import College, Role


class Profile(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending"
        APPROVED = "approved"

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="profile")
    role = models.CharField(max_length=20, choices=Role.choices)
    college = models.CharField(
        max_length=10, choices=College.choices, blank=True, null=True
    )
    department = models.CharField(max_length=10, blank=True)
    mobile_number = models.CharField(max_length=15, blank=True)
    father_mobile_number = models.CharField(max_length=15, blank=True)
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.PENDING
    )
    approved_by = models.CharField(max_length=50, blank=True)
    attendance_status = models.CharField(
        max_length=10, choices=Status.choices, blank=True
    )
    attendance_approved_by = models.CharField(max_length=50, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    @property
    def is_approved(self):
        return self.status == self.Status.APPROVED

    def __str__(self):
        return f"{self.user.username} ({self.role})"
