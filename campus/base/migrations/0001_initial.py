from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("role", models.CharField(choices=[("Chairman", "Chairman"), ("Principal", "Principal"), ("HOD", "Hod"), ("Faculty", "Faculty"), ("Staff", "Staff"), ("Student", "Student")], max_length=20)),
                ("college", models.CharField(blank=True, choices=[("ALL", "All Colleges Overview"), ("BRIL", "Bril"), ("BRIG", "Brig"), ("KNRR", "Knrr")], max_length=10, null=True)),
                ("department", models.CharField(blank=True, max_length=10)),
                ("mobile_number", models.CharField(blank=True, max_length=15)),
                ("father_mobile_number", models.CharField(blank=True, max_length=15)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved")], default="pending", max_length=10)),
                ("approved_by", models.CharField(blank=True, max_length=50)),
                ("attendance_status", models.CharField(blank=True, choices=[("pending", "Pending"), ("approved", "Approved")], max_length=10)),
                ("attendance_approved_by", models.CharField(blank=True, max_length=50)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="profile", to=settings.AUTH_USER_MODEL)),
            ],
        ),
    ]
