from django.db import models

from base.constants import College, STAFF_DEPARTMENT
from students.models import Genders


class Faculty(models.Model):
    faculty_id = models.CharField(max_length=30, unique=True)
    faculty_name = models.CharField(max_length=150)
    college_code = models.CharField(max_length=10, choices=College.choices)
    program_code = models.CharField(max_length=10)
    gender = models.CharField(max_length=1, choices=Genders.choices, default=Genders.MALE)

    class Meta:
        verbose_name_plural = "faculty"
        ordering = ["faculty_id"]

    def save(self, *args, **kwargs):
        self.faculty_id = self.faculty_id.strip().upper()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.faculty_name} ({self.faculty_id})"


class Staff(models.Model):
    staff_id = models.CharField(max_length=30, unique=True)
    staff_name = models.CharField(max_length=150)
    college_code = models.CharField(max_length=10, choices=College.choices)
    gender = models.CharField(max_length=1, choices=Genders.choices, default=Genders.MALE)

    class Meta:
        verbose_name_plural = "staff"
        ordering = ["staff_id"]

    @property
    def program_code(self):
        return STAFF_DEPARTMENT

    def save(self, *args, **kwargs):
        self.staff_id = self.staff_id.strip().upper()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.staff_name} ({self.staff_id})"
