from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


SESSION_CHOICES = [("Present", "Present"), ("Absent", "Absent")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("students", "0001_initial"),
        ("faculty", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="StudentAttendance",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("morning", models.CharField(choices=SESSION_CHOICES, default="Absent", max_length=10)),
                ("afternoon", models.CharField(choices=SESSION_CHOICES, default="Absent", max_length=10)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="attendance", to="students.student")),
            ],
            options={
                "ordering": ["-date"],
                "unique_together": {("student", "date")},
            },
        ),
        migrations.CreateModel(
            name="FacultyAttendance",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("morning", models.CharField(choices=SESSION_CHOICES, default="Absent", max_length=10)),
                ("afternoon", models.CharField(choices=SESSION_CHOICES, default="Absent", max_length=10)),
                ("faculty", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="attendance", to="faculty.faculty")),
            ],
            options={
                "ordering": ["-date"],
                "unique_together": {("faculty", "date")},
            },
        ),
        migrations.CreateModel(
            name="StaffAttendance",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("morning", models.CharField(choices=SESSION_CHOICES, default="Absent", max_length=10)),
                ("afternoon", models.CharField(choices=SESSION_CHOICES, default="Absent", max_length=10)),
                ("staff", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="attendance", to="faculty.staff")),
            ],
            options={
                "ordering": ["-date"],
                "unique_together": {("staff", "date")},
            },
        ),
        migrations.CreateModel(
            name="GpsAnchor",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("latitude", models.FloatField()),
                ("longitude", models.FloatField()),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="gps_anchors", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "unique_together": {("user", "date")},
            },
        ),
    ]
