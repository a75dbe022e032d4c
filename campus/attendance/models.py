from django.db import models
from django.contrib.auth.models import User


class Session(models.TextChoices):
    PRESENT = "Present"
    ABSENT = "Absent"


class BaseAttendance(models.Model):
    date = models.DateField()
    morning = models.CharField(
        max_length=10, choices=Session.choices, default=Session.ABSENT
    )
    afternoon = models.CharField(
        max_length=10, choices=Session.choices, default=Session.ABSENT
    )

    class Meta:
        abstract = True


class StudentAttendance(BaseAttendance):
    student = models.ForeignKey(
        "students.Student", on_delete=models.CASCADE, related_name="attendance"
    )

    class Meta:
        unique_together = ("student", "date")
        ordering = ["-date"]

    def __str__(self):
        return f"{self.student} - {self.date} - {self.morning}/{self.afternoon}"


class FacultyAttendance(BaseAttendance):
    faculty = models.ForeignKey(
        "faculty.Faculty", on_delete=models.CASCADE, related_name="attendance"
    )

    class Meta:
        unique_together = ("faculty", "date")
        ordering = ["-date"]

    def __str__(self):
        return f"{self.faculty} - {self.date} - {self.morning}/{self.afternoon}"


class StaffAttendance(BaseAttendance):
    staff = models.ForeignKey(
        "faculty.Staff", on_delete=models.CASCADE, related_name="attendance"
    )

    class Meta:
        unique_together = ("staff", "date")
        ordering = ["-date"]

    def __str__(self):
        return f"{self.staff} - {self.date} - {self.morning}/{self.afternoon}"


class GpsAnchor(models.Model):
    """First location fix a user reports on a given day"""

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="gps_anchors")
    date = models.DateField()
    latitude = models.FloatField()
    longitude = models.FloatField()

    class Meta:
        unique_together = ("user", "date")

    def __str__(self):
        return f"{self.user.username} - {self.date}"
