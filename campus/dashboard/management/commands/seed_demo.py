import logging
import os
import random
import shutil
from datetime import timedelta

from django.conf import settings
from django.contrib.auth.models import Group, User
from django.core.management.base import BaseCommand
from django.db import transaction

from academics.models import StudentMark, Syllabus
from administration.models import DeletedDataLog
from attendance.models import FacultyAttendance, GpsAnchor, StaffAttendance, StudentAttendance
from base.constants import FEE_STRUCTURE, College, Role, college_prefix
from base.models import Profile
from faculty.models import Faculty, Staff
from students.data_utils import get_reference_date
from students.generation_utils import (
    academic_year_label,
    admission_year,
    current_semester,
    fee_status,
)
from students.models import PlacementDetails, Student, StudentFee

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    # username, name, email, role, college, department
    ("CHAIRMAN01", "Dr. Chairman", "chairman@edu.com", Role.CHAIRMAN, None, ""),
    ("PRINCIPAL01", "Dr. P. Rao", "principal.bril@edu.com", Role.PRINCIPAL, College.BRIL, ""),
    ("DHARMARAJ", "Dr. Dharmaraj", "dharmaraj.hod@edu.com", Role.HOD, College.BRIL, "CSE"),
    ("BCSE01032020-001", "Prof. B. Verma", "faculty.biet@edu.com", Role.FACULTY, College.BRIL, "CSE"),
    ("GECE15022020-001", "Prof. G. Reddy", "faculty.bgiit@edu.com", Role.FACULTY, College.BRIG, "ECE"),
    ("KSTF15042020-001", "Mr. A. Kumar", "staff.knrcer@edu.com", Role.STAFF, College.KNRR, "ADMIN"),
    ("KCSE202001", "Aarav Kapoor", "aarav.k@edu.com", Role.STUDENT, College.KNRR, "CSE"),
]

DEMO_DEPARTMENTS = ["CSE", "ECE"]
DEMO_BATCHES = [2022, 2023, 2024, 2025]
STUDENTS_PER_CLASS = 5
ATTENDANCE_DAYS = 20

FIRST_NAMES = [
    "Aarav", "Vivaan", "Aditya", "Diya", "Ananya", "Ishaan", "Saanvi", "Kiara",
    "Arjun", "Meera", "Rohan", "Priya", "Karthik", "Sneha", "Rahul", "Lakshmi",
]
LAST_NAMES = ["Kapoor", "Reddy", "Sharma", "Rao", "Verma", "Naidu", "Iyer", "Gupta"]

SUBJECTS = [
    "Mathematics",
    "Data Structures",
    "Digital Logic",
    "Programming Lab",
]

FACULTY_JOINING_DATES = {
    College.BRIL: "01032020",
    College.BRIG: "15022020",
    College.KNRR: "01032020",
}

COMPANIES = ["TCS", "Infosys", "Wipro", "Accenture", "Deloitte"]


def ensure_groups():
    groups = {}
    for role in Role:
        group, _ = Group.objects.get_or_create(name=role.value)
        groups[role.value] = group
    return groups


def get_or_create_user(username, name, email, role, college, department, groups):
    user, created = User.objects.get_or_create(
        username=username,
        defaults={"first_name": name, "email": email},
    )
    if created:
        user.set_password(DEMO_PASSWORD)
        user.save()
    user.groups.add(groups[role])
    Profile.objects.update_or_create(
        user=user,
        defaults={
            "role": role,
            "college": college,
            "department": department,
            "status": Profile.Status.APPROVED,
            "approved_by": "system",
            "attendance_status": Profile.Status.APPROVED,
            "attendance_approved_by": "system",
        },
    )
    return user


def clear_media_directory():
    """Remove uploaded profile images and syllabi"""
    media_root = settings.MEDIA_ROOT
    for folder in ("students", "syllabus"):
        path = os.path.join(media_root, folder)
        if os.path.isdir(path):
            try:
                shutil.rmtree(path)
            except OSError:
                logger.warning("Could not clear %s", path, exc_info=True)


def weekdays_until(end, count):
    days = []
    day = end
    while len(days) < count:
        if day.weekday() < 6:
            days.append(day)
        day -= timedelta(days=1)
    return sorted(days)


def random_sessions(rng):
    roll = rng.random()
    if roll < 0.75:
        return "Present", "Present"
    if roll < 0.85:
        return "Present", "Absent"
    if roll < 0.9:
        return "Absent", "Present"
    return "Absent", "Absent"


class Command(BaseCommand):
    help = "Seed demo data for demo mode. Safe to re-run."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Reset demo-related objects first, then seed",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if not settings.DEMO_MODE:
            self.stdout.write(self.style.WARNING("DEMO_MODE is not enabled in settings."))

        rng = random.Random(42)
        reference_date = get_reference_date()
        groups = ensure_groups()

        if options.get("reset"):
            clear_media_directory()
            DeletedDataLog.objects.all().delete()
            Syllabus.objects.all().delete()
            GpsAnchor.objects.all().delete()
            Student.objects.all().delete()
            Faculty.objects.all().delete()
            Staff.objects.all().delete()

        for username, name, email, role, college, department in DEMO_USERS:
            get_or_create_user(username, name, email, role, college, department, groups)

        days = weekdays_until(reference_date, ATTENDANCE_DAYS)

        self.stdout.write("Seeding students...")
        students = self.seed_students(rng)
        self.seed_marks(rng, students, reference_date)
        self.seed_student_attendance(rng, students, days)
        self.seed_fees(rng, students, reference_date)
        self.seed_placements(rng, students)

        self.stdout.write("Seeding faculty and staff...")
        self.seed_faculty_and_staff(rng, days)

        self.stdout.write(self.style.SUCCESS("Demo data ready."))

    def seed_students(self, rng):
        students = []
        for college in (College.BRIL, College.BRIG, College.KNRR):
            prefix = college_prefix(college)
            for department in DEMO_DEPARTMENTS:
                for batch in DEMO_BATCHES:
                    for number in range(1, STUDENTS_PER_CLASS + 1):
                        admission_number = f"{prefix}{department}{batch}{number:02d}"
                        student, _ = Student.objects.get_or_create(
                            admission_number=admission_number,
                            defaults={
                                "college_code": college,
                                "program_code": department,
                                "roll_no": f"{number:02d}",
                                "student_name": (
                                    f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
                                ),
                                "gender": rng.choice(["M", "F"]),
                                "mobile_number": f"9{rng.randint(100000000, 999999999)}",
                                "father_mobile_number": f"8{rng.randint(100000000, 999999999)}",
                            },
                        )
                        students.append(student)

        # login account of the demo student
        student, _ = Student.objects.get_or_create(
            admission_number="KCSE202001",
            defaults={
                "college_code": College.KNRR,
                "program_code": "CSE",
                "roll_no": "01",
                "student_name": "Aarav Kapoor",
                "gender": "M",
            },
        )
        students.append(student)
        return students

    def seed_marks(self, rng, students, reference_date):
        for student in students:
            semester_now = current_semester(student.admission_number, reference_date)
            if not isinstance(semester_now, int):
                semester_now = 9
            for semester in range(1, semester_now):
                for index, subject in enumerate(SUBJECTS, 1):
                    internal = rng.randint(10, 30)
                    external = rng.randint(15, 70)
                    StudentMark.objects.update_or_create(
                        student=student,
                        subject_code=f"{student.program_code}{semester}0{index}",
                        semester=semester,
                        defaults={
                            "subject_name": subject,
                            "internal_mark": internal,
                            "external_mark": external,
                            "marks_obtained": internal + external,
                            "max_marks": 100,
                            "exam_type": "Regular",
                        },
                    )

    def seed_student_attendance(self, rng, students, days):
        for student in students:
            for day in days:
                morning, afternoon = random_sessions(rng)
                StudentAttendance.objects.update_or_create(
                    student=student,
                    date=day,
                    defaults={"morning": morning, "afternoon": afternoon},
                )

    def seed_fees(self, rng, students, reference_date):
        for student in students:
            total = FEE_STRUCTURE.get(student.program_code, 0)
            batch = admission_year(student.admission_number)
            for year in range(batch, min(batch + 4, reference_date.year + 1)):
                if year == reference_date.year and reference_date.month < 7:
                    break
                paid = rng.choice([total, total, total // 2, 0])
                due = total - paid
                StudentFee.objects.update_or_create(
                    student=student,
                    academic_year=academic_year_label(year),
                    fee_type=StudentFee.FeeType.TUITION,
                    defaults={
                        "total_fees": total,
                        "paid_amount": paid,
                        "due_amount": due,
                        "status": fee_status(due, paid),
                        "admission_type": rng.choice(["Convener", "Management"]),
                    },
                )

    def seed_placements(self, rng, students):
        for student in students:
            if admission_year(student.admission_number) != DEMO_BATCHES[0]:
                continue
            if rng.random() < 0.4:
                continue
            student.is_placed = True
            student.save()
            company = rng.choice(COMPANIES)
            PlacementDetails.objects.update_or_create(
                student=student,
                defaults={
                    "company_name": company,
                    "company_website": f"https://www.{company.lower()}.com",
                    "hr_name": f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
                    "hr_mobile_number": f"7{rng.randint(100000000, 999999999)}",
                    "hr_email": f"hr@{company.lower()}.com",
                    "student_mobile_number": student.mobile_number,
                    "year": "4",
                    "semester": "7",
                    "academic_year": academic_year_label(DEMO_BATCHES[0] + 3),
                },
            )

    def seed_faculty_and_staff(self, rng, days):
        for college in (College.BRIL, College.BRIG, College.KNRR):
            prefix = college_prefix(college)
            for department in DEMO_DEPARTMENTS:
                for number in range(1, 4):
                    faculty, _ = Faculty.objects.get_or_create(
                        faculty_id=f"{prefix}{department}{FACULTY_JOINING_DATES[college]}-{number:03d}",
                        defaults={
                            "faculty_name": f"Prof. {rng.choice(LAST_NAMES)}",
                            "college_code": college,
                            "program_code": department,
                            "gender": rng.choice(["M", "F"]),
                        },
                    )
                    for day in days:
                        morning, afternoon = random_sessions(rng)
                        FacultyAttendance.objects.update_or_create(
                            faculty=faculty,
                            date=day,
                            defaults={"morning": morning, "afternoon": afternoon},
                        )

            for number in range(1, 3):
                staff, _ = Staff.objects.get_or_create(
                    staff_id=f"{prefix}STF15042020-{number:03d}",
                    defaults={
                        "staff_name": f"Mr. {rng.choice(LAST_NAMES)}",
                        "college_code": college,
                        "gender": rng.choice(["M", "F"]),
                    },
                )
                for day in days:
                    morning, afternoon = random_sessions(rng)
                    StaffAttendance.objects.update_or_create(
                        staff=staff,
                        date=day,
                        defaults={"morning": morning, "afternoon": afternoon},
                    )
