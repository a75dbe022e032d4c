from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DeletedDataLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("student_name", models.CharField(max_length=150)),
                ("admission_number", models.CharField(max_length=30)),
                ("data_type", models.CharField(choices=[("Marks", "Marks"), ("Attendance", "Attendance"), ("Fees", "Fees"), ("Exam Fees", "Exam Fees")], max_length=20)),
                ("scope", models.CharField(max_length=50)),
                ("deleted_by", models.CharField(max_length=150)),
                ("timestamp", models.DateTimeField(auto_now_add=True)),
                ("reason", models.TextField(blank=True)),
                ("deleted_data", models.JSONField(default=list)),
            ],
            options={
                "ordering": ["-timestamp", "-id"],
            },
        ),
    ]
