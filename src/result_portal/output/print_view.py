"""
Module: output.print_view

Purpose:
    Render a printable result sheet for one student as an A4 PDF.
    A read-only projection of the record; it cannot be imported back.

Key Functions:
    - render_result_sheet(): Create the PDF

Dependencies:
    - reportlab: PDF generation
    - output.detail: Display formatting shared with the view command
"""

from __future__ import annotations

import logging
from pathlib import Path

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from result_portal.core.models import StudentRecord

from .detail import RecordDetail, describe_record

logger = logging.getLogger(__name__)

# Constants
A4_WIDTH, A4_HEIGHT = A4
MARGIN = 50
LINE_HEIGHT = 18
TITLE_SIZE = 20
HEADING_SIZE = 14
BODY_SIZE = 11

TEXT_COLOR = colors.HexColor("#222222")
MUTED_COLOR = colors.HexColor("#666666")
RULE_COLOR = colors.HexColor("#999999")

TONE_COLORS = {
    "success": colors.HexColor("#388e3c"),
    "warn": colors.HexColor("#f57c00"),
    "danger": colors.HexColor("#d32f2f"),
}

# Subject table columns (x offsets from the left margin)
COL_INDEX = 8
COL_SUBJECT = 48
COL_MARKS = 360


def _field(c: canvas.Canvas, x: float, y: float, label: str, value: str, color=TEXT_COLOR) -> None:
    c.setFillColor(MUTED_COLOR)
    c.setFont("Helvetica", BODY_SIZE - 1)
    c.drawString(x, y, label)
    c.setFillColor(color)
    c.setFont("Helvetica-Bold", BODY_SIZE + 1)
    c.drawString(x, y - LINE_HEIGHT, value)


def _table_header(c: canvas.Canvas, y: float) -> float:
    c.setStrokeColor(RULE_COLOR)
    c.setFillColor(TEXT_COLOR)
    c.setFont("Helvetica-Bold", BODY_SIZE)
    c.drawString(MARGIN + COL_INDEX, y, "#")
    c.drawString(MARGIN + COL_SUBJECT, y, "Subject")
    c.drawString(MARGIN + COL_MARKS, y, "Marks")
    c.line(MARGIN, y - 6, A4_WIDTH - MARGIN, y - 6)
    return y - LINE_HEIGHT - 2


def _draw_sheet(c: canvas.Canvas, detail: RecordDetail) -> int:
    """Draw the sheet, returning the number of pages used."""
    pages = 1
    y = A4_HEIGHT - MARGIN - TITLE_SIZE

    c.setFillColor(TEXT_COLOR)
    c.setFont("Helvetica-Bold", TITLE_SIZE)
    c.drawString(MARGIN, y, "Student Result")
    y -= LINE_HEIGHT * 2

    half = (A4_WIDTH - 2 * MARGIN) / 2
    _field(c, MARGIN, y, "Name", detail.name)
    _field(c, MARGIN + half, y, "Roll No.", detail.roll)
    y -= LINE_HEIGHT * 3

    c.setFillColor(TEXT_COLOR)
    c.setFont("Helvetica-Bold", HEADING_SIZE)
    c.drawString(MARGIN, y, "Subjects")
    y -= LINE_HEIGHT * 1.5
    y = _table_header(c, y)

    c.setFont("Helvetica", BODY_SIZE)
    if not detail.subjects:
        c.drawString(MARGIN + COL_INDEX, y, "No subjects")
        y -= LINE_HEIGHT
    for line in detail.subjects:
        if y < MARGIN + LINE_HEIGHT:
            c.showPage()
            pages += 1
            y = _table_header(c, A4_HEIGHT - MARGIN - LINE_HEIGHT)
            c.setFont("Helvetica", BODY_SIZE)
        c.setFillColor(TEXT_COLOR)
        c.drawString(MARGIN + COL_INDEX, y, str(line.index))
        c.drawString(MARGIN + COL_SUBJECT, y, line.name)
        c.drawString(MARGIN + COL_MARKS, y, line.marks)
        y -= LINE_HEIGHT

    # Summary block needs room for label + value
    if y < MARGIN + LINE_HEIGHT * 3:
        c.showPage()
        pages += 1
        y = A4_HEIGHT - MARGIN - LINE_HEIGHT
    y -= LINE_HEIGHT
    third = (A4_WIDTH - 2 * MARGIN) / 3
    _field(c, MARGIN, y, "Total", detail.total)
    _field(c, MARGIN + third, y, "Percentage", detail.percentage)
    _field(c, MARGIN + 2 * third, y, "Grade", detail.grade, TONE_COLORS.get(detail.tone, TEXT_COLOR))
    return pages


def render_result_sheet(record: StudentRecord, output_path: Path) -> Path:
    """
    Render a printable result sheet for ``record``.

    Args:
        record: Student record to print
        output_path: PDF file to write

    Returns:
        Path of the written PDF

    Example:
        >>> render_result_sheet(record, Path("out/R9.pdf"))
        PosixPath('out/R9.pdf')
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    detail = describe_record(record)

    c = canvas.Canvas(str(output_path), pagesize=A4)
    c.setTitle(f"Result - {record.name}")
    pages = _draw_sheet(c, detail)
    c.showPage()
    c.save()

    logger.info(f"Rendered result sheet for {record.roll} ({pages} page(s)) to {output_path}")
    return output_path
