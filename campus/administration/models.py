from django.db import models


class DeletedDataLog(models.Model):
    class DataType(models.TextChoices):
        MARKS = "Marks"
        ATTENDANCE = "Attendance"
        FEES = "Fees"
        EXAM_FEES = "Exam Fees"

    student_name = models.CharField(max_length=150)
    admission_number = models.CharField(max_length=30)
    data_type = models.CharField(max_length=20, choices=DataType.choices)
    scope = models.CharField(max_length=50)
    deleted_by = models.CharField(max_length=150)
    timestamp = models.DateTimeField(auto_now_add=True)
    reason = models.TextField(blank=True)
    deleted_data = models.JSONField(default=list)

    class Meta:
        ordering = ["-timestamp", "-id"]

    def __str__(self):
        return f"{self.data_type} of {self.admission_number} ({self.scope})"
