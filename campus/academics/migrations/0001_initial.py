from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion

import academics.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("students", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="StudentMark",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("semester", models.PositiveSmallIntegerField()),
                ("subject_code", models.CharField(max_length=20)),
                ("subject_name", models.CharField(max_length=150)),
                ("marks_obtained", models.PositiveIntegerField(default=0)),
                ("max_marks", models.PositiveIntegerField(default=100)),
                ("exam_type", models.CharField(blank=True, max_length=30)),
                ("internal_mark", models.PositiveIntegerField(default=0)),
                ("external_mark", models.PositiveIntegerField(default=0)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="marks", to="students.student")),
            ],
            options={
                "ordering": ["semester", "subject_code"],
                "unique_together": {("student", "subject_code", "semester")},
            },
        ),
        migrations.CreateModel(
            name="Syllabus",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("department", models.CharField(max_length=10)),
                ("file_name", models.CharField(max_length=255)),
                ("file", models.FileField(upload_to=academics.models.syllabus_file_path)),
                ("uploaded_at", models.DateTimeField(auto_now_add=True)),
                ("uploaded_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name_plural": "syllabi",
                "ordering": ["department", "file_name"],
                "unique_together": {("department", "file_name")},
            },
        ),
    ]
