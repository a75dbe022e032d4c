import logging
from typing import Any, Dict, List, Optional

from django.db import transaction

from base.constants import College, college_for_prefix
from students.data_utils import filter_students, get_student_or_none, normalize_filter, serialize_mark
from students.generation_utils import roll_no_from_admission
from students.models import Student
from .models import StudentMark, Syllabus
from .result_utils import academic_result, pass_statistics

logger = logging.getLogger(__name__)

RESULT_CSV_HEADERS = [
    "Admission Number",
    "Student Name",
    "Semester",
    "Subject Code",
    "Subject Name",
    "Internal",
    "External",
    "Total",
    "Max Marks",
    "Result",
]


def _int(value, default=0) -> int:
    if value in (None, ""):
        return default
    return int(float(value))


def get_or_create_student(
    admission_number: str,
    student_name: str = "",
    college: Optional[str] = None,
    department: str = "",
) -> Student:
    """Look a student up, creating a bare record for unknown admission numbers"""
    admission_number = (admission_number or "").strip().upper()
    student = get_student_or_none(admission_number)
    if student is not None:
        return student

    if not college:
        college = college_for_prefix(admission_number[:1]) or College.BRIL
    student = Student.objects.create(
        admission_number=admission_number,
        student_name=student_name or admission_number,
        college_code=college,
        program_code=(department or "").upper(),
        roll_no=roll_no_from_admission(admission_number),
    )
    logger.info("Created student %s while recording marks", admission_number)
    return student


def add_student_mark(data: Dict[str, Any]) -> StudentMark:
    """Upsert one subject mark; unknown students are created on the fly"""
    admission_number = (data.get("admissionNumber") or "").strip().upper()
    subject_code = (data.get("subjectCode") or "").strip().upper()
    if not admission_number or not subject_code or not data.get("semester"):
        raise ValueError("Admission number, subject code and semester are required.")

    try:
        semester = _int(data.get("semester"))
        internal = _int(data.get("internalMark"))
        external = _int(data.get("externalMark"))
        max_marks = _int(data.get("maxMarks"), 100)
        obtained = _int(data.get("marksObtained"), internal + external)
    except (TypeError, ValueError):
        raise ValueError("Marks and semester must be numeric.")

    with transaction.atomic():
        student = get_or_create_student(
            admission_number,
            data.get("studentName", ""),
            data.get("collegeCode"),
            data.get("programCode", ""),
        )
        mark, created = StudentMark.objects.update_or_create(
            student=student,
            subject_code=subject_code,
            semester=semester,
            defaults={
                "subject_name": data.get("subjectName") or subject_code,
                "marks_obtained": obtained,
                "max_marks": max_marks,
                "exam_type": data.get("examType", ""),
                "internal_mark": internal,
                "external_mark": external,
            },
        )

    logger.info(
        "%s mark %s sem %s for %s",
        "Created" if created else "Updated",
        subject_code,
        semester,
        admission_number,
    )
    return mark


def get_subjects(department=None, semester=None) -> List[str]:
    """Distinct subject names taught in a department and semester"""
    queryset = StudentMark.objects.all()
    department = normalize_filter(department)
    if department:
        queryset = queryset.filter(student__program_code__iexact=department)
    semester = normalize_filter(semester)
    if semester and semester.isdigit():
        queryset = queryset.filter(semester=int(semester))
    return sorted(set(queryset.values_list("subject_name", flat=True)))


def filter_marks(semester=None, subject=None, **filters):
    """Marks of the filtered student population, narrowed by semester and subject"""
    queryset = StudentMark.objects.filter(
        student__in=filter_students(semester=semester, **filters)
    ).select_related("student")
    semester = normalize_filter(semester)
    if semester and semester.isdigit():
        queryset = queryset.filter(semester=int(semester))
    subject = normalize_filter(subject)
    if subject:
        queryset = queryset.filter(subject_name__iexact=subject)
    return queryset


def get_result_sheet(semester=None, subject=None, **filters) -> Dict[str, Any]:
    marks = list(filter_marks(semester, subject, **filters))
    by_student: Dict[str, List[StudentMark]] = {}
    for mark in marks:
        by_student.setdefault(mark.student.admission_number, []).append(mark)

    students = [
        {
            "admissionNumber": admission_number,
            "studentName": rows[0].student.student_name,
            "marks": [serialize_mark(m) for m in rows],
            "result": academic_result(rows),
        }
        for admission_number, rows in sorted(by_student.items())
    ]
    return {"students": students, "statistics": pass_statistics(marks)}


def get_result_csv_rows(semester=None, subject=None, **filters) -> List[List[Any]]:
    return [
        [
            mark.student.admission_number,
            mark.student.student_name,
            mark.semester,
            mark.subject_code,
            mark.subject_name,
            mark.internal_mark,
            mark.external_mark,
            mark.marks_obtained,
            mark.max_marks,
            academic_result([mark]),
        ]
        for mark in filter_marks(semester, subject, **filters).order_by(
            "student__admission_number", "semester", "subject_code"
        )
    ]


# ==================== SYLLABUS ====================


def serialize_syllabus(syllabus: Syllabus) -> Dict[str, Any]:
    return {
        "id": syllabus.syllabus_id,
        "department": syllabus.department,
        "fileName": syllabus.file_name,
        "url": syllabus.file.url if syllabus.file else None,
        "uploadedBy": syllabus.uploaded_by.username if syllabus.uploaded_by else None,
        "uploadedAt": syllabus.uploaded_at.isoformat() if syllabus.uploaded_at else None,
    }


def save_syllabus(department: str, file, user=None) -> Syllabus:
    """Store a syllabus PDF, replacing any file of the same name"""
    department = department.upper()
    existing = Syllabus.objects.filter(department=department, file_name=file.name).first()
    if existing is not None:
        existing.file.delete(save=False)
        existing.file = file
        existing.uploaded_by = user
        existing.save()
        syllabus = existing
    else:
        syllabus = Syllabus.objects.create(
            department=department,
            file_name=file.name,
            file=file,
            uploaded_by=user,
        )
    logger.info("Stored syllabus %s", syllabus.syllabus_id)
    return syllabus


def list_syllabi(department=None) -> List[Dict[str, Any]]:
    queryset = Syllabus.objects.select_related("uploaded_by")
    department = normalize_filter(department)
    if department:
        queryset = queryset.filter(department__iexact=department)
    return [serialize_syllabus(s) for s in queryset]


def delete_syllabus(syllabus_id: str) -> bool:
    department, _, file_name = (syllabus_id or "").partition("-")
    syllabus = Syllabus.objects.filter(
        department__iexact=department, file_name=file_name
    ).first()
    if syllabus is None:
        return False
    syllabus.file.delete(save=False)
    syllabus.delete()
    logger.info("Deleted syllabus %s", syllabus_id)
    return True
