import html as html_lib
from collections import OrderedDict
from typing import Any, Callable, Dict, Iterable, List

import pdfkit
from django.conf import settings

from base.constants import EXTERNAL_MIN, INTERNAL_MIN, TOTAL_MIN

PASS = "Pass"
FAIL = "Fail"
NOT_AVAILABLE = "N/A"

PDF_OPTIONS = {
    "page-size": "A4",
    "margin-top": "0.5in",
    "margin-right": "0.5in",
    "margin-bottom": "0.5in",
    "margin-left": "0.5in",
}


# ==================== PASS RULES ====================


def mark_passes(internal: int, external: int, total: int) -> bool:
    """JNTUH rule: internal, external and total minimums must all be met"""
    return (
        (internal or 0) >= INTERNAL_MIN
        and (external or 0) >= EXTERNAL_MIN
        and (total or 0) >= TOTAL_MIN
    )


def student_passes(marks: Iterable[Any]) -> bool:
    return all(
        mark_passes(m.internal_mark, m.external_mark, m.marks_obtained) for m in marks
    )


def academic_result(marks: Iterable[Any]) -> str:
    marks = list(marks)
    if not marks:
        return NOT_AVAILABLE
    return PASS if student_passes(marks) else FAIL


def pass_statistics(
    marks: Iterable[Any], key: Callable[[Any], Any] = lambda m: m.student_id
) -> Dict[str, Any]:
    """Pass/fail counts over students and the aggregate percentage over marks"""
    by_student: Dict[Any, List[Any]] = OrderedDict()
    total_obtained = 0
    total_max = 0
    for mark in marks:
        by_student.setdefault(key(mark), []).append(mark)
        total_obtained += mark.marks_obtained or 0
        total_max += mark.max_marks or 0

    assessed = len(by_student)
    pass_count = sum(1 for rows in by_student.values() if student_passes(rows))

    return {
        "passCount": pass_count,
        "failCount": assessed - pass_count,
        "passPercentage": round(pass_count / assessed * 100, 1) if assessed else 0,
        "aggregatePercentage": (
            round(total_obtained / total_max * 100, 1) if total_max else 0
        ),
    }


def semester_summary(marks: Iterable[Any]) -> List[Dict[str, Any]]:
    """Per-semester totals with the semester's result"""
    by_semester: Dict[int, List[Any]] = OrderedDict()
    for mark in sorted(marks, key=lambda m: (m.semester, m.subject_code)):
        by_semester.setdefault(mark.semester, []).append(mark)

    summary = []
    for semester, rows in by_semester.items():
        obtained = sum(m.marks_obtained or 0 for m in rows)
        maximum = sum(m.max_marks or 0 for m in rows)
        summary.append(
            {
                "semester": semester,
                "subjects": len(rows),
                "obtained": obtained,
                "max": maximum,
                "percentage": round(obtained / maximum * 100, 2) if maximum else 0,
                "result": academic_result(rows),
            }
        )
    return summary


# ==================== MARKSHEET PDF ====================


def generate_marksheet_html(student, semester, marks):
    """Generate HTML content for a semester marksheet PDF"""
    marks = list(marks)
    total_max = sum(m.max_marks for m in marks)
    total_obtained = sum(m.marks_obtained for m in marks)
    percentage = (total_obtained / total_max * 100) if total_max > 0 else 0
    result_status = academic_result(marks)
    esc = html_lib.escape

    html = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <title>Marksheet - {esc(student.student_name)}</title>
        <style>
            body {{
                font-family: Arial, sans-serif;
                margin: 0;
                padding: 20px;
                line-height: 1.6;
            }}
            .header {{
                text-align: center;
                border: 3px solid #333;
                padding: 20px;
                margin-bottom: 30px;
            }}
            .college-name {{
                font-size: 26px;
                font-weight: bold;
                margin-bottom: 10px;
            }}
            .detail-label {{
                font-weight: bold;
                width: 170px;
                display: inline-block;
            }}
            table {{
                width: 100%;
                border-collapse: collapse;
                margin: 20px 0 30px;
            }}
            th, td {{
                border: 1px solid #333;
                padding: 8px;
                text-align: center;
            }}
            th {{
                background-color: #f0f0f0;
            }}
            .fail {{
                color: #b91c1c;
                font-weight: bold;
            }}
            .summary div {{
                margin-bottom: 4px;
            }}
        </style>
    </head>
    <body>
        <div class="header">
            <div class="college-name">{esc(settings.COLLEGE_GROUP_NAME)}</div>
            <div>{esc(student.college_code)} - {esc(student.program_code)}</div>
            <div><strong>MEMORANDUM OF GRADES - SEMESTER {semester}</strong></div>
        </div>

        <div><span class="detail-label">Student Name:</span>{esc(student.student_name)}</div>
        <div><span class="detail-label">Admission No:</span>{esc(student.admission_number)}</div>
        <div><span class="detail-label">Roll No:</span>{esc(student.roll_no)}</div>

        <table>
            <thead>
                <tr>
                    <th>S.No.</th>
                    <th>Subject Code</th>
                    <th>Subject</th>
                    <th>Internal</th>
                    <th>External</th>
                    <th>Total</th>
                    <th>Max</th>
                    <th>Result</th>
                </tr>
            </thead>
            <tbody>
    """

    for i, mark in enumerate(marks, 1):
        passed = mark_passes(mark.internal_mark, mark.external_mark, mark.marks_obtained)
        html += f"""
                <tr>
                    <td>{i}</td>
                    <td>{esc(mark.subject_code)}</td>
                    <td>{esc(mark.subject_name)}</td>
                    <td>{mark.internal_mark}</td>
                    <td>{mark.external_mark}</td>
                    <td>{mark.marks_obtained}</td>
                    <td>{mark.max_marks}</td>
                    <td class="{'' if passed else 'fail'}">{PASS if passed else FAIL}</td>
                </tr>
        """

    html += f"""
            </tbody>
        </table>

        <div class="summary">
            <div><strong>Total Marks:</strong> {total_max}</div>
            <div><strong>Obtained Marks:</strong> {total_obtained}</div>
            <div><strong>Percentage:</strong> {percentage:.2f}%</div>
            <div><strong>Result:</strong> {result_status}</div>
        </div>
    </body>
    </html>
    """

    return html


def get_pdfkit_configuration():
    if settings.WKHTMLTOPDF_PATH:
        return pdfkit.configuration(wkhtmltopdf=settings.WKHTMLTOPDF_PATH)
    return None


def generate_marksheet_pdf(student, semester, marks):
    """Generate a semester marksheet PDF for a student"""
    html_content = generate_marksheet_html(student, semester, marks)
    return pdfkit.from_string(
        html_content,
        False,
        options=PDF_OPTIONS,
        configuration=get_pdfkit_configuration(),
    )
