from datetime import datetime
from io import BytesIO

from django.conf import settings
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer

from students.pdf_utils import build_styles, data_table, divider


def _money(value):
    return f"Rs. {value:,.2f}"


def generate_dashboard_report_pdf(data, filters):
    """
    Printable snapshot of the dashboard metrics.

    Args:
        data: Dictionary returned by metrics.get_dashboard_data
        filters: The filter values the metrics were computed with

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
    scope = " | ".join(f"{key}: {value}" for key, value in filters.items() if value)
    story.append(Paragraph(f"Dashboard Report {scope}", styles["subtitle"]))
    story.append(divider())
    story.append(Spacer(1, 0.15 * inch))

    # Attendance
    story.append(Paragraph("Attendance", styles["section"]))
    rows = [["Group", "Total", "Present", "Absent", "Full Day", "Half Day", "%"]]
    for label, key in (
        ("Students", "studentAttendance"),
        ("Faculty", "facultyMetrics"),
        ("Staff", "staffMetrics"),
    ):
        metrics = data[key]
        rows.append(
            [
                label,
                metrics["total"],
                metrics["present"],
                metrics["absent"],
                metrics["fullDay"],
                metrics["halfDay"],
                metrics["overallPercentage"],
            ]
        )
    story.append(data_table(rows, [1.5 * inch] + [0.9 * inch] * 6))

    # Academics
    academics = data["studentAcademics"]
    story.append(Paragraph("Academics", styles["section"]))
    story.append(
        data_table(
            [
                ["Pass Count", "Fail Count", "Pass %", "Aggregate %"],
                [
                    academics["passCount"],
                    academics["failCount"],
                    academics["passPercentage"],
                    academics["aggregatePercentage"],
                ],
            ],
            [1.75 * inch] * 4,
        )
    )

    # Fees
    fees = data["studentFees"]
    story.append(Paragraph("Fees", styles["section"]))
    story.append(
        data_table(
            [
                ["Total", "Paid", "Due", "Paid", "Partial", "Due"],
                [
                    _money(fees["totalFees"]),
                    _money(fees["paidAmount"]),
                    _money(fees["dueAmount"]),
                    fees["paidCount"],
                    fees["partialCount"],
                    fees["dueCount"],
                ],
            ],
            [1.4 * inch] * 3 + [0.7 * inch] * 3,
        )
    )

    # Placements
    placement = data["placementMetrics"]
    story.append(Paragraph("Placements", styles["section"]))
    story.append(
        data_table(
            [
                ["Students", "Placed", "Not Placed", "Placement %"],
                [
                    placement["totalStudents"],
                    placement["placedStudents"],
                    placement["notPlacedStudents"],
                    placement["placementPercentage"],
                ],
            ],
            [1.75 * inch] * 4,
        )
    )

    story.append(Spacer(1, 0.3 * inch))
    story.append(
        Paragraph(
            f"Generated on {datetime.now().strftime('%d %b %Y, %I:%M %p')}",
            styles["footer"],
        )
    )

    doc.build(story)
    buffer.seek(0)
    return buffer
