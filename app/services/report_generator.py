"""
Achievements Report Generator
app/services/report_generator.py

Renders a faculty member's achievement records as a PDF of grid tables.
"""

import io
import logging
from datetime import date
from typing import List, Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from app.models.appraisal import AppraisalBase

logger = logging.getLogger(__name__)

MISSING = "-"


def _text(value) -> str:
    if value is None or value == "":
        return MISSING
    return str(value)


def _date(value: Optional[date]) -> str:
    return value.isoformat() if value else MISSING


def _section_rows(appraisal: AppraisalBase):
    """(title, headers, body) for each achievement table, in print order."""
    yield (
        "Awards",
        ["Name", "Area", "Organization", "Date"],
        [[a.name, _text(a.area), _text(a.organization), _date(a.date_obtained)]
         for a in appraisal.awards],
    )
    yield (
        "Courses",
        ["Year", "Semester", "Course Code", "Section", "Title", "Credit", "Students", "Eval Avg"],
        [[c.academic_year, c.semester, _text(c.course_code), _text(c.section), c.course_title,
          _text(c.credit), _text(c.students_count),
          f"{c.students_eval_avg:.2f}" if c.students_eval_avg is not None else MISSING]
         for c in appraisal.courses],
    )
    yield (
        "Research Activities",
        ["Title", "Type", "Kind", "Journal/Publisher", "Participation", "Publication Date"],
        [[r.title, r.type, r.kind, _text(r.journal_or_publisher), _text(r.participation),
          _date(r.publication_date)]
         for r in appraisal.research_activities],
    )
    yield (
        "Scientific Activities",
        ["Title", "Type", "Date", "Participation", "Organizing Authority", "Venue"],
        [[s.title, s.type, _date(s.activity_date), _text(s.participation),
          _text(s.organizing_auth), _text(s.venue)]
         for s in appraisal.scientific_activities],
    )
    for title, services in (
        ("Community Services", appraisal.community_services),
        ("University Services", appraisal.university_services),
    ):
        yield (
            title,
            ["Committee/Task", "Authority", "Participation", "Date From", "Date To"],
            [[s.committee_or_task, _text(s.authority), _text(s.participation),
              _date(s.date_from), _date(s.date_to)]
             for s in services],
        )


def _grid_table(headers: List[str], body: Sequence[List[str]]) -> Table:
    if not body:
        body = [["No records"] + [""] * (len(headers) - 1)]
    table = Table([headers] + list(body), repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.Color(240 / 255, 240 / 255, 240 / 255)),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]))
    return table


def achievements_filename(appraisal: AppraisalBase) -> str:
    return f"{appraisal.faculty.name}-achievements.pdf"


def generate_achievements_report(appraisal: AppraisalBase, subject_label: str = "Instructor") -> bytes:
    """
    Build the achievements PDF for one appraisal.

    Args:
        appraisal: Appraisal with its achievement collections
        subject_label: Heading for the faculty name ("Instructor" or "HOD")

    Returns:
        PDF document bytes
    """
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=20,
        leftMargin=20,
        topMargin=20,
        bottomMargin=30,
        title=f"{appraisal.faculty.name} achievements",
    )

    styles = getSampleStyleSheet()
    name_style = ParagraphStyle("SubjectName", parent=styles["Heading2"], fontSize=14, spaceAfter=4)
    info_style = ParagraphStyle("SubjectInfo", parent=styles["Normal"], fontSize=12, spaceAfter=4)
    section_style = ParagraphStyle("SectionTitle", parent=styles["Heading3"], fontSize=12, spaceBefore=6)

    department = appraisal.faculty.department.name if appraisal.faculty.department else MISSING

    elements = [
        Paragraph(f"{subject_label}: {appraisal.faculty.name}", name_style),
        Paragraph(f"Department: {department}", info_style),
        Paragraph(f"Appraisal Cycle: {appraisal.cycle.academic_year}", info_style),
        Spacer(1, 8),
    ]
    for title, headers, body in _section_rows(appraisal):
        elements.append(Paragraph(title, section_style))
        elements.append(_grid_table(headers, body))
        elements.append(Spacer(1, 10))

    doc.build(elements)
    logger.info(f"Generated achievements report for appraisal {appraisal.id}")
    return buffer.getvalue()
