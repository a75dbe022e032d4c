import logging
import os
from datetime import datetime
from io import BytesIO

from django.conf import settings
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
    Image,
)

logger = logging.getLogger(__name__)

PRIMARY_COLOR = colors.HexColor("#1E3A8A")  # Deep Blue
SECONDARY_COLOR = colors.HexColor("#F1F5F9")  # Slate-100
DARK_TEXT = colors.HexColor("#1F2937")
LIGHT_TEXT = colors.HexColor("#9CA3AF")
BORDER_COLOR = colors.HexColor("#E5E7EB")
FAIL_COLOR = colors.HexColor("#B91C1C")


def build_styles():
    styles = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "CollegeTitle",
            parent=styles["Heading1"],
            fontSize=20,
            spaceAfter=4,
            textColor=PRIMARY_COLOR,
            fontName="Helvetica-Bold",
            leading=24,
        ),
        "subtitle": ParagraphStyle(
            "CollegeSubtitle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=LIGHT_TEXT,
            spaceAfter=4,
            leading=14,
        ),
        "section": ParagraphStyle(
            "SectionHeader",
            parent=styles["Heading2"],
            fontSize=13,
            textColor=PRIMARY_COLOR,
            fontName="Helvetica-Bold",
            spaceAfter=8,
            spaceBefore=14,
        ),
        "name": ParagraphStyle(
            "StudentName",
            parent=styles["Heading1"],
            fontSize=18,
            textColor=DARK_TEXT,
            fontName="Helvetica-Bold",
            spaceAfter=4,
            leading=22,
        ),
        "contact": ParagraphStyle(
            "Contact",
            parent=styles["Normal"],
            fontSize=9,
            textColor=DARK_TEXT,
            leading=13,
        ),
        "footer": ParagraphStyle(
            "Footer",
            parent=styles["Normal"],
            fontSize=8,
            alignment=1,
            textColor=LIGHT_TEXT,
            leading=12,
        ),
    }


def divider():
    table = Table([[""]], colWidths=[7 * inch])
    table.setStyle(
        TableStyle(
            [
                ("LINEABOVE", (0, 0), (-1, -1), 2, PRIMARY_COLOR),
                ("TOPPADDING", (0, 0), (-1, -1), 0),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 0),
            ]
        )
    )
    return table


def data_table(rows, col_widths, header=True):
    """Banded grid table; the first row is a header when requested"""
    table = Table(rows, colWidths=col_widths, repeatRows=1 if header else 0)
    style = [
        ("TEXTCOLOR", (0, 0), (-1, -1), DARK_TEXT),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 5),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
        ("GRID", (0, 0), (-1, -1), 0.5, BORDER_COLOR),
        ("ROWBACKGROUNDS", (0, 0), (-1, -1), [colors.white, SECONDARY_COLOR]),
    ]
    if header:
        style += [
            ("BACKGROUND", (0, 0), (-1, 0), PRIMARY_COLOR),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ]
    table.setStyle(TableStyle(style))
    return table


def profile_image_flowable(student, style):
    if student.profile_image:
        image_path = os.path.join(settings.MEDIA_ROOT, str(student.profile_image))
        if os.path.exists(image_path):
            profile_img = Image(image_path, width=1.1 * inch, height=1.1 * inch)
            profile_img.hAlign = "CENTER"
            return profile_img
    return Paragraph(
        '<para align="center" fontSize="8" textColor="#9CA3AF">No Photo</para>', style
    )


def generate_student_report_pdf(student, details):
    """
    Generate the printable student report: profile, semester results,
    attendance summary and fee history.

    Args:
        student: Student model instance
        details: Dictionary returned by data_utils.get_student_details

    Returns:
        BytesIO buffer containing the PDF
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        topMargin=0.6 * inch,
        bottomMargin=0.6 * inch,
        leftMargin=0.6 * inch,
        rightMargin=0.6 * inch,
    )
    styles = build_styles()
    story = []

    story.append(Paragraph(settings.COLLEGE_GROUP_NAME, styles["title"]))
    story.append(
        Paragraph(
            f"{student.college_code} | Department of {student.program_code}",
            styles["subtitle"],
        )
    )
    story.append(divider())
    story.append(Spacer(1, 0.2 * inch))

    profile_table = Table(
        [
            [
                profile_image_flowable(student, styles["contact"]),
                Paragraph(f"<b>{student.student_name}</b>", styles["name"]),
            ],
            [
                "",
                Paragraph(
                    f"Admission No: {student.admission_number}<br/>"
                    f"Roll No: {student.roll_no or 'N/A'}<br/>"
                    f"Current Semester: {details['currentSemester']}<br/>"
                    f"Mobile: {student.mobile_number or 'N/A'}",
                    styles["contact"],
                ),
            ],
        ],
        colWidths=[1.5 * inch, 5.5 * inch],
    )
    profile_table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), SECONDARY_COLOR),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("SPAN", (0, 0), (0, 1)),
                ("LEFTPADDING", (0, 0), (-1, -1), 12),
                ("TOPPADDING", (0, 0), (-1, -1), 10),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 10),
                ("BOX", (0, 0), (-1, -1), 0.5, BORDER_COLOR),
            ]
        )
    )
    story.append(profile_table)

    # --- Academic results ---
    story.append(Paragraph("Academic Performance", styles["section"]))
    if details["marks"]:
        rows = [["Sem", "Code", "Subject", "Int", "Ext", "Total", "Max"]]
        for mark in details["marks"]:
            rows.append(
                [
                    mark["semester"],
                    mark["subjectCode"],
                    Paragraph(mark["subjectName"], styles["contact"]),
                    mark["internalMark"],
                    mark["externalMark"],
                    mark["marksObtained"],
                    mark["maxMarks"],
                ]
            )
        story.append(
            data_table(
                rows,
                [0.5 * inch, 0.9 * inch, 2.9 * inch, 0.6 * inch, 0.6 * inch, 0.7 * inch, 0.7 * inch],
            )
        )
        story.append(Spacer(1, 0.1 * inch))

        summary_rows = [["Semester", "Subjects", "Obtained", "Max", "%", "Result"]]
        for semester in details["semesterSummary"]:
            summary_rows.append(
                [
                    semester["semester"],
                    semester["subjects"],
                    semester["obtained"],
                    semester["max"],
                    f"{semester['percentage']:.2f}",
                    semester["result"],
                ]
            )
        summary_table = data_table(summary_rows, [1.2 * inch] * 5 + [1 * inch])
        for index, semester in enumerate(details["semesterSummary"], 1):
            if semester["result"] == "Fail":
                summary_table.setStyle(
                    TableStyle([("TEXTCOLOR", (5, index), (5, index), FAIL_COLOR)])
                )
        story.append(summary_table)
    else:
        story.append(Paragraph("No marks recorded.", styles["contact"]))

    # --- Attendance ---
    story.append(Paragraph("Attendance Summary", styles["section"]))
    summary = details["attendanceSummary"]
    story.append(
        data_table(
            [
                ["Total Days", "Full Days", "Half Days", "Absent", "Percentage", "Status"],
                [
                    summary["totalDays"],
                    summary["fullDays"],
                    summary["halfDays"],
                    summary["absentDays"],
                    f"{summary['percentage']:.2f}%",
                    summary["rule"]["band"],
                ],
            ],
            [1.1 * inch] * 5 + [1.5 * inch],
        )
    )

    # --- Fees ---
    story.append(Paragraph("Fee Details", styles["section"]))
    if details["fees"]:
        rows = [["Academic Year", "Type", "Total", "Paid", "Due", "Status"]]
        for fee in details["fees"]:
            rows.append(
                [
                    fee["academicYear"],
                    fee["feeType"],
                    f"{fee['totalFees']:,.2f}",
                    f"{fee['paidAmount']:,.2f}",
                    f"{fee['dueAmount']:,.2f}",
                    fee["status"],
                ]
            )
        story.append(data_table(rows, [1.3 * inch, 0.9 * inch] + [1.2 * inch] * 4))
    else:
        story.append(Paragraph("No fee records.", styles["contact"]))

    placement = details.get("placementDetails")
    if placement:
        story.append(Paragraph("Placement", styles["section"]))
        story.append(
            Paragraph(
                f"Placed at <b>{placement['companyName']}</b> "
                f"({placement['academicYear'] or 'N/A'})",
                styles["contact"],
            )
        )

    story.append(Spacer(1, 0.3 * inch))
    story.append(divider())
    story.append(Spacer(1, 0.1 * inch))
    story.append(
        Paragraph(
            "This report is generated by the college management system.",
            styles["footer"],
        )
    )
    story.append(
        Paragraph(
            f"Generated on: {datetime.now().strftime('%d %B %Y')}", styles["footer"]
        )
    )

    doc.build(story)
    buffer.seek(0)
    logger.info("Generated report PDF for %s", student.admission_number)
    return buffer
