from django.db import models

from base.constants import College


class Genders(models.TextChoices):
    MALE = "M", "Male"
    FEMALE = "F", "Female"


def student_profile_image_path(instance, filename):
    return f"students/{instance.admission_number}/profile/{filename}"


class Student(models.Model):
    college_code = models.CharField(max_length=10, choices=College.choices)
    program_code = models.CharField(max_length=10)
    admission_number = models.CharField(max_length=30, unique=True)
    roll_no = models.CharField(max_length=10, blank=True)
    student_name = models.CharField(max_length=150)
    gender = models.CharField(max_length=1, choices=Genders.choices, default=Genders.MALE)
    is_placed = models.BooleanField(default=False)
    mobile_number = models.CharField(max_length=15, blank=True)
    father_mobile_number = models.CharField(max_length=15, blank=True)
    profile_image = models.ImageField(
        upload_to=student_profile_image_path, null=True, blank=True
    )

    class Meta:
        ordering = ["admission_number"]

    def save(self, *args, **kwargs):
        self.admission_number = self.admission_number.strip().upper()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.student_name} ({self.admission_number})"


class StudentFee(models.Model):
    class Status(models.TextChoices):
        PAID = "Paid"
        PARTIAL = "Partial"
        DUE = "Due"

    class FeeType(models.TextChoices):
        TUITION = "Tuition"
        EXAM = "Exam"

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="fees")
    academic_year = models.CharField(max_length=9)  # e.g., "2024-2025"
    semester = models.PositiveSmallIntegerField(null=True, blank=True)
    total_fees = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    paid_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    due_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.DUE
    )
    payment_date = models.DateTimeField(null=True, blank=True)
    admission_type = models.CharField(max_length=30, blank=True)
    fee_type = models.CharField(
        max_length=10, choices=FeeType.choices, default=FeeType.TUITION
    )

    def __str__(self):
        return f"{self.student} - {self.academic_year} - {self.fee_type} - {self.status}"


class PlacementDetails(models.Model):
    student = models.OneToOneField(
        Student, on_delete=models.CASCADE, related_name="placement"
    )
    company_name = models.CharField(max_length=200)
    company_website = models.CharField(max_length=200, blank=True)
    hr_name = models.CharField(max_length=150, blank=True)
    hr_mobile_number = models.CharField(max_length=15, blank=True)
    hr_email = models.CharField(max_length=150, blank=True)
    student_mobile_number = models.CharField(max_length=15, blank=True)
    year = models.CharField(max_length=10, blank=True)
    semester = models.CharField(max_length=10, blank=True)
    academic_year = models.CharField(max_length=9, blank=True)

    class Meta:
        verbose_name_plural = "placement details"

    def __str__(self):
        return f"{self.student} - {self.company_name}"
