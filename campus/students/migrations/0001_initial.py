from django.db import migrations, models
import django.db.models.deletion
import students.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Student",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("college_code", models.CharField(choices=[("ALL", "All Colleges Overview"), ("BRIL", "Bril"), ("BRIG", "Brig"), ("KNRR", "Knrr")], max_length=10)),
                ("program_code", models.CharField(max_length=10)),
                ("admission_number", models.CharField(max_length=30, unique=True)),
                ("roll_no", models.CharField(blank=True, max_length=10)),
                ("student_name", models.CharField(max_length=150)),
                ("gender", models.CharField(choices=[("M", "Male"), ("F", "Female")], default="M", max_length=1)),
                ("is_placed", models.BooleanField(default=False)),
                ("mobile_number", models.CharField(blank=True, max_length=15)),
                ("father_mobile_number", models.CharField(blank=True, max_length=15)),
                ("profile_image", models.ImageField(blank=True, null=True, upload_to=students.models.student_profile_image_path)),
            ],
            options={
                "ordering": ["admission_number"],
            },
        ),
        migrations.CreateModel(
            name="StudentFee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("academic_year", models.CharField(max_length=9)),
                ("semester", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("total_fees", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("paid_amount", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("due_amount", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("status", models.CharField(choices=[("Paid", "Paid"), ("Partial", "Partial"), ("Due", "Due")], default="Due", max_length=10)),
                ("payment_date", models.DateTimeField(blank=True, null=True)),
                ("admission_type", models.CharField(blank=True, max_length=30)),
                ("fee_type", models.CharField(choices=[("Tuition", "Tuition"), ("Exam", "Exam")], default="Tuition", max_length=10)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="fees", to="students.student")),
            ],
        ),
        migrations.CreateModel(
            name="PlacementDetails",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("company_name", models.CharField(max_length=200)),
                ("company_website", models.CharField(blank=True, max_length=200)),
                ("hr_name", models.CharField(blank=True, max_length=150)),
                ("hr_mobile_number", models.CharField(blank=True, max_length=15)),
                ("hr_email", models.CharField(blank=True, max_length=150)),
                ("student_mobile_number", models.CharField(blank=True, max_length=15)),
                ("year", models.CharField(blank=True, max_length=10)),
                ("semester", models.CharField(blank=True, max_length=10)),
                ("academic_year", models.CharField(blank=True, max_length=9)),
                ("student", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="placement", to="students.student")),
            ],
            options={
                "verbose_name_plural": "placement details",
            },
        ),
    ]
