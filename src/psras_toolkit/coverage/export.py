"""
Module: coverage.export

Purpose:
    Write coverage backlogs and audit results to files for the
    administrative view and CI: CSV, Markdown and PDF.

Key Functions:
    - write_backlog_csv(): Backlog rows as CSV
    - write_audit_markdown(): Audit report as Markdown
    - render_backlog_pdf(): Backlog table as a paginated A4 PDF

Dependencies:
    - csv (std)
    - reportlab: PDF generation
"""

from __future__ import annotations

import csv
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from psras_toolkit import __version__

from .audit import AuditResult, AuditStatus
from .models import CoverageReport, CoverageRow, CoverageStatus

logger = logging.getLogger(__name__)

__all__ = ["render_backlog_pdf", "render_audit_markdown", "write_audit_markdown", "write_backlog_csv"]

CSV_HEADER = ["Criterion ID", "Label", "Tags", "Current", "Target", "Gap", "Status"]

# PDF layout (points)
A4_WIDTH, A4_HEIGHT = A4
MARGIN = 40
LINE_HEIGHT = 14
TITLE_FONT_SIZE = 14
BODY_FONT_SIZE = 8
FOOTER_FONT_SIZE = 7
LABEL_MAX_CHARS = 60

# x offsets of the table columns
_COLUMNS = (
    ("Status", 0),
    ("Criterion", 52),
    ("Label", 130),
    ("Current", 420),
    ("Target", 460),
    ("Gap", 500),
)

_STATUS_RGB = {
    CoverageStatus.MISSING: (0.75, 0.1, 0.1),
    CoverageStatus.PARTIAL: (0.8, 0.5, 0.0),
    CoverageStatus.OK: (0.1, 0.55, 0.2),
}

LIST_LIMIT = 20


def write_backlog_csv(report: CoverageReport, output_path: Path) -> Path:
    """
    Write backlog rows (in priority order) as CSV.

    Returns:
        The written path
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for row in report.rows:
            writer.writerow([
                row.criterion_id,
                row.label,
                " ".join(row.tags),
                row.current_count,
                row.target_count,
                row.gap,
                row.status.value,
            ])
    logger.info(f"Wrote {len(report.rows)} backlog rows to {output_path}")
    return output_path


def _fmt_rate(value: float) -> str:
    return f"{value:.1f}%"


def render_audit_markdown(result: AuditResult, generated_at: Optional[datetime] = None) -> str:
    """Render the audit as a Markdown document."""
    timestamp = (generated_at or datetime.now(timezone.utc)).isoformat()
    lines: List[str] = [
        "# Coverage Audit Report",
        "",
        f"Generated: {timestamp}",
        "",
        "## Coverage Summary",
        "",
        f"- **Total Criteria**: {result.total_criteria}",
        f"- **Total Questions**: {result.total_questions}",
        f"- **Total Citations**: {result.total_citations}",
        "",
        "## Compliance Statistics",
        "",
        f"- **Criteria Compliance**: {result.compliant_criteria}/{result.total_criteria} "
        f"({_fmt_rate(result.criteria_compliance_rate)})",
        f"- **Citation Compliance**: "
        f"{result.total_questions - result.questions_with_insufficient_citations}/{result.total_questions} "
        f"({_fmt_rate(result.citation_compliance_rate)})",
        "",
    ]

    if result.has_failures:
        lines += ["## Failures", ""]
        missing = result.by_status(AuditStatus.MISSING)
        if missing:
            lines += [f"### Missing Questions ({len(missing)} criteria)", ""]
            lines += [f"- **{c.criterion_id}**: {c.label} (0 questions)" for c in missing[:LIST_LIMIT]]
            if len(missing) > LIST_LIMIT:
                lines.append(f"- ... and {len(missing) - LIST_LIMIT} more")
            lines.append("")

        insufficient = result.by_status(AuditStatus.INSUFFICIENT)
        if insufficient:
            lines += [f"### Insufficient Questions ({len(insufficient)} criteria)", ""]
            lines += [
                f"- **{c.criterion_id}**: {c.label} ({c.question_count}/{result.min_questions} questions)"
                for c in insufficient[:LIST_LIMIT]
            ]
            if len(insufficient) > LIST_LIMIT:
                lines.append(f"- ... and {len(insufficient) - LIST_LIMIT} more")
            lines.append("")

        if result.question_issues:
            lines += [f"### Citation Issues ({result.questions_with_insufficient_citations} questions)", ""]
            lines += [
                f"- **{qi.question_id}**: {'; '.join(qi.issues)}"
                for qi in result.question_issues[:LIST_LIMIT]
            ]
            if len(result.question_issues) > LIST_LIMIT:
                lines.append(f"- ... and {len(result.question_issues) - LIST_LIMIT} more")
            lines.append("")

        lines += [
            "## Suggested Fixes",
            "",
            "1. Generate questions for criteria with 0 questions",
            f"2. Top-up questions for criteria with < {result.min_questions} questions",
            "3. Add citations to questions missing references",
            "4. Verify citation formatting (instrument + cite)",
            "",
        ]
    else:
        lines += [
            "## All Checks Pass",
            "",
            f"- All criteria have >= {result.min_questions} questions",
            f"- All questions have >= {result.min_citations} citations",
            "",
        ]

    worst = result.worst_offenders()
    if worst:
        lines += ["## Criteria Needing Attention", ""]
        lines += [
            f"- **{c.criterion_id}**: {c.label} - {c.question_count} questions, "
            f"{c.citation_non_compliant} citation issues"
            for c in worst
        ]
        lines.append("")

    return "\n".join(lines)


def write_audit_markdown(result: AuditResult, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_audit_markdown(result), encoding="utf-8")
    logger.info(f"Wrote audit report to {output_path}")
    return output_path


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


def _draw_header(c: canvas.Canvas, report: CoverageReport, y: float) -> float:
    c.setFont("Helvetica-Bold", TITLE_FONT_SIZE)
    c.drawString(MARGIN, y, "Coverage Backlog (sorted by priority)")
    y -= LINE_HEIGHT * 1.5

    summary = report.summary
    c.setFont("Helvetica", BODY_FONT_SIZE)
    c.drawString(
        MARGIN,
        y,
        f"Missing: {summary.missing}    Partial: {summary.partial}    "
        f"OK: {summary.ok}    Target: {report.target_count} questions per criterion",
    )
    y -= LINE_HEIGHT * 1.5
    return _draw_column_titles(c, y)


def _draw_column_titles(c: canvas.Canvas, y: float) -> float:
    c.setFont("Helvetica-Bold", BODY_FONT_SIZE)
    for title, offset in _COLUMNS:
        c.drawString(MARGIN + offset, y, title)
    c.line(MARGIN, y - 3, A4_WIDTH - MARGIN, y - 3)
    return y - LINE_HEIGHT


def _draw_row(c: canvas.Canvas, row: CoverageRow, y: float) -> None:
    c.saveState()
    c.setFont("Helvetica-Bold", BODY_FONT_SIZE)
    c.setFillColorRGB(*_STATUS_RGB[row.status])
    c.drawString(MARGIN, y, row.status.value)
    c.restoreState()

    c.setFont("Helvetica", BODY_FONT_SIZE)
    values = (
        row.criterion_id,
        _truncate(row.label, LABEL_MAX_CHARS),
        str(row.current_count),
        str(row.target_count),
        str(row.gap),
    )
    for (_, offset), value in zip(_COLUMNS[1:], values):
        c.drawString(MARGIN + offset, y, value)


def _draw_footer(c: canvas.Canvas, page_number: int) -> None:
    text = f"psras_toolkit {__version__} - page {page_number}"
    c.saveState()
    c.setFont("Helvetica", FOOTER_FONT_SIZE)
    c.setFillColorRGB(0.4, 0.4, 0.4)
    text_width = c.stringWidth(text, "Helvetica", FOOTER_FONT_SIZE)
    c.drawString((A4_WIDTH - text_width) / 2, 15, text)
    c.restoreState()


def render_backlog_pdf(report: CoverageReport, output_path: Path) -> int:
    """
    Render the backlog as an A4 PDF table.

    Args:
        report: Coverage report to render
        output_path: Path to write the PDF

    Returns:
        Number of pages written
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    c = canvas.Canvas(str(output_path), pagesize=A4)
    c.setTitle("Coverage Backlog")

    page = 1
    y = _draw_header(c, report, A4_HEIGHT - MARGIN)
    if report.is_empty:
        c.setFont("Helvetica", BODY_FONT_SIZE)
        c.drawString(MARGIN, y, "No criteria available.")

    for row in report.rows:
        if y < MARGIN + LINE_HEIGHT:
            _draw_footer(c, page)
            c.showPage()
            page += 1
            y = _draw_column_titles(c, A4_HEIGHT - MARGIN)
        _draw_row(c, row, y)
        y -= LINE_HEIGHT

    _draw_footer(c, page)
    c.showPage()
    c.save()
    logger.info(f"Rendered backlog PDF with {page} page(s) to {output_path}")
    return page
