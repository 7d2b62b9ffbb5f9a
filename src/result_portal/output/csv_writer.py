"""
Module: output.csv_writer

Purpose:
    Export records as CSV for spreadsheets.

Format:
    Name,Roll,Total,Percentage,Grade,Subjects
    "Alexa Roy","R9","240","80","A","Math:80|Science:70|English:90"

    - Header row unquoted; every data field quoted, inner quotes doubled
    - Subjects rendered as name:marks joined by "|" in one field
    - Rows separated by "\n", no trailing newline
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Iterable

from result_portal.core.models import StudentRecord, SubjectEntry

from .detail import format_number

logger = logging.getLogger(__name__)

CSV_HEADER = ("Name", "Roll", "Total", "Percentage", "Grade", "Subjects")
CSV_FILENAME = "students.csv"


def _subject_cell(subject: SubjectEntry) -> str:
    marks = "" if subject.marks is None else format_number(subject.marks)
    return f"{subject.name}:{marks}"


def _row(record: StudentRecord) -> list[str]:
    totals = record.totals
    return [
        record.name,
        record.roll,
        format_number(totals.total),
        format_number(totals.percentage),
        record.grade,
        "|".join(_subject_cell(s) for s in record.subjects),
    ]


def records_to_csv(records: Iterable[StudentRecord]) -> str:
    """
    Render records as CSV text.

    Args:
        records: Records in the order they should appear

    Returns:
        CSV text without a trailing newline
    """
    buffer = io.StringIO()
    header = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    header.writerow(CSV_HEADER)
    body = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for record in records:
        body.writerow(_row(record))
    return buffer.getvalue().rstrip("\n")


def write_csv(records: Iterable[StudentRecord], path: Path) -> Path:
    """
    Write a CSV export.

    Args:
        records: Records to export
        path: Output file, or a directory to receive ``students.csv``

    Returns:
        Path of the written file
    """
    if path.is_dir():
        path = path / CSV_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)
    text = records_to_csv(records)
    path.write_text(text, encoding="utf-8", newline="")
    logger.info(f"Wrote CSV export to {path}")
    return path
