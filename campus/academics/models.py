from django.db import models
from django.contrib.auth.models import User

from base.constants import DEFAULT_MAX_MARKS


class StudentMark(models.Model):
    student = models.ForeignKey(
        "students.Student", on_delete=models.CASCADE, related_name="marks"
    )
    semester = models.PositiveSmallIntegerField()
    subject_code = models.CharField(max_length=20)
    subject_name = models.CharField(max_length=150)
    marks_obtained = models.PositiveIntegerField(default=0)
    max_marks = models.PositiveIntegerField(default=DEFAULT_MAX_MARKS)
    exam_type = models.CharField(max_length=30, blank=True)
    internal_mark = models.PositiveIntegerField(default=0)
    external_mark = models.PositiveIntegerField(default=0)

    class Meta:
        unique_together = ("student", "subject_code", "semester")
        ordering = ["semester", "subject_code"]

    def __str__(self):
        return f"{self.student} - Sem {self.semester} - {self.subject_name}"


def syllabus_file_path(instance, filename):
    return f"syllabus/{instance.department}/{filename}"


class Syllabus(models.Model):
    department = models.CharField(max_length=10)
    file_name = models.CharField(max_length=255)
    file = models.FileField(upload_to=syllabus_file_path)
    uploaded_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True
    )
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("department", "file_name")
        verbose_name_plural = "syllabi"
        ordering = ["department", "file_name"]

    @property
    def syllabus_id(self):
        return f"{self.department}-{self.file_name}"

    def __str__(self):
        return self.syllabus_id
