from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Faculty",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("faculty_id", models.CharField(max_length=30, unique=True)),
                ("faculty_name", models.CharField(max_length=150)),
                ("college_code", models.CharField(choices=[("ALL", "All Colleges Overview"), ("BRIL", "Bril"), ("BRIG", "Brig"), ("KNRR", "Knrr")], max_length=10)),
                ("program_code", models.CharField(max_length=10)),
                ("gender", models.CharField(choices=[("M", "Male"), ("F", "Female")], default="M", max_length=1)),
            ],
            options={
                "verbose_name_plural": "faculty",
                "ordering": ["faculty_id"],
            },
        ),
        migrations.CreateModel(
            name="Staff",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("staff_id", models.CharField(max_length=30, unique=True)),
                ("staff_name", models.CharField(max_length=150)),
                ("college_code", models.CharField(choices=[("ALL", "All Colleges Overview"), ("BRIL", "Bril"), ("BRIG", "Brig"), ("KNRR", "Knrr")], max_length=10)),
                ("gender", models.CharField(choices=[("M", "Male"), ("F", "Female")], default="M", max_length=1)),
            ],
            options={
                "verbose_name_plural": "staff",
                "ordering": ["staff_id"],
            },
        ),
    ]
