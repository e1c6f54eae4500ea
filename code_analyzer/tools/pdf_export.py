"""PDF export of an analysis report (ReportLab platypus)."""

from pathlib import Path
from typing import List, Optional, Tuple, Union
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Flowable, Paragraph, Preformatted, SimpleDocTemplate, Spacer

from ..models import Report


DEFAULT_PDF_NAME = "code-analysis-report.pdf"


def _styles() -> dict:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("ReportTitle", parent=base["Title"], fontSize=24, spaceAfter=20),
        "heading": ParagraphStyle(
            "ReportHeading", parent=base["Heading2"], fontSize=18, spaceAfter=10,
            textColor=colors.HexColor("#1976d2"),
        ),
        "sub_heading": ParagraphStyle(
            "ReportSubHeading", parent=base["Heading4"], fontSize=14, spaceAfter=5,
            textColor=colors.HexColor("#666666"),
        ),
        "text": ParagraphStyle("ReportText", parent=base["BodyText"], fontSize=12, spaceAfter=5),
        "priority": ParagraphStyle(
            "ReportPriority", parent=base["BodyText"], fontSize=12, spaceAfter=5,
            textColor=colors.HexColor("#d32f2f"),
        ),
        "code": ParagraphStyle(
            "ReportCode", parent=base["Code"], fontName="Courier", fontSize=10,
            backColor=colors.HexColor("#f5f5f5"), borderPadding=10, spaceBefore=5, spaceAfter=15,
        ),
    }


def _issue_flowables(
    styles: dict,
    heading: str,
    priority_label: str,
    line: Optional[int],
    fields: List[Tuple[str, Optional[str]]],
    code: Optional[str],
) -> List[Flowable]:
    story: List[Flowable] = [
        Paragraph(escape(heading), styles["sub_heading"]),
        Paragraph(escape(priority_label), styles["priority"]),
    ]
    if line:
        story.append(Paragraph(f"Line: {line}", styles["text"]))
    for label, value in fields:
        if value:
            story.append(Paragraph(f"{label}: {escape(value)}", styles["text"]))
    if code:
        story.append(Preformatted(code, styles["code"]))
    story.append(Spacer(1, 10))
    return story


def build_story(report: Report) -> List[Flowable]:
    """Build the flowables for a report: summary first, then one section per bucket."""
    styles = _styles()
    summary = report.summary

    story: List[Flowable] = [
        Paragraph("Code Analysis Report", styles["title"]),
        Paragraph("Analysis Summary", styles["heading"]),
    ]
    for label, value in (
        ("Total Issues", summary.total_issues),
        ("Critical Errors", summary.critical_count),
        ("Warnings", summary.warning_count),
        ("Optimization Suggestions", summary.optimization_count),
        ("Security Issues", summary.security_count),
        ("Overall Code Quality", summary.overall_code_quality.value),
    ):
        story.append(Paragraph(f"{label}: {value}", styles["text"]))
    story.append(Spacer(1, 20))

    if report.critical_errors:
        story.append(Paragraph("Critical Errors", styles["heading"]))
        for issue in report.critical_errors:
            story += _issue_flowables(
                styles, issue.type, f"Priority: {issue.priority.value}", issue.line,
                [
                    ("Description", issue.description),
                    ("Impact", issue.impact),
                    ("Fix Recommendation", issue.fix_recommendation),
                ],
                issue.code_example,
            )

    if report.warnings:
        story.append(Paragraph("Warnings", styles["heading"]))
        for issue in report.warnings:
            story += _issue_flowables(
                styles, issue.type, f"Priority: {issue.priority.value}", issue.line,
                [
                    ("Description", issue.description),
                    ("Best Practice", issue.best_practice),
                    ("Fix Recommendation", issue.fix_recommendation),
                ],
                issue.code_example,
            )

    if report.optimizations:
        story.append(Paragraph("Optimizations", styles["heading"]))
        for issue in report.optimizations:
            story += _issue_flowables(
                styles, issue.type, f"Priority: {issue.priority.value}", issue.line,
                [
                    ("Description", issue.description),
                    ("Performance Impact", issue.performance_impact),
                    ("Suggestion", issue.suggestion),
                ],
                issue.code_example,
            )

    if report.security:
        story.append(Paragraph("Security Issues", styles["heading"]))
        for issue in report.security:
            story += _issue_flowables(
                styles, issue.vulnerability, f"Risk Level: {issue.risk_level.value}", issue.line,
                [
                    ("Description", issue.description),
                    ("Impact", issue.impact),
                    ("Mitigation", issue.mitigation),
                ],
                issue.secure_code_example,
            )

    return story


def export_pdf(report: Report, path: Union[str, Path] = DEFAULT_PDF_NAME) -> Path:
    """
    Render a report to a paginated A4 PDF.

    Args:
        report: Final analysis report
        path: Output file path

    Returns:
        Path of the written file
    """
    path = Path(path)
    doc = SimpleDocTemplate(
        str(path),
        pagesize=A4,
        leftMargin=30,
        rightMargin=30,
        topMargin=30,
        bottomMargin=30,
        title="Code Analysis Report",
    )
    doc.build(build_story(report))
    return path
