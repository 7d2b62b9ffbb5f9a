"""
Read-only detail view of a single record, shared by the "view" command
and the printable result sheet.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from result_portal.core.models import StudentRecord
from result_portal.core.scoring import grade_tone

PLACEHOLDER = "-"


def format_number(value: Union[int, float]) -> str:
    """Render a number without a trailing ".0" when it is integral."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class SubjectLine:
    index: int
    name: str
    marks: str


@dataclass(frozen=True)
class RecordDetail:
    name: str
    roll: str
    subjects: Tuple[SubjectLine, ...]
    total: str
    percentage: str
    grade: str
    tone: str

    def lines(self) -> list[str]:
        """Plain-text rendering, one line per field or subject."""
        out = [f"Name:       {self.name}", f"Roll No.:   {self.roll}", ""]
        if self.subjects:
            out.append(f"{'#':>3}  {'Subject':<24} Marks")
            out.extend(f"{s.index:>3}  {s.name:<24} {s.marks}" for s in self.subjects)
        else:
            out.append("No subjects")
        out += ["", f"Total:      {self.total}", f"Percentage: {self.percentage}", f"Grade:      {self.grade}"]
        return out


def describe_record(record: StudentRecord) -> RecordDetail:
    """
    Prepare a record for display.

    Empty subject names and empty marks are shown as "-".
    """
    subjects = tuple(
        SubjectLine(
            index=i,
            name=s.name or PLACEHOLDER,
            marks=PLACEHOLDER if s.marks is None else format_number(s.marks),
        )
        for i, s in enumerate(record.subjects, start=1)
    )
    totals = record.totals
    grade = record.grade
    return RecordDetail(
        name=record.name,
        roll=record.roll,
        subjects=subjects,
        total=format_number(totals.total),
        percentage=f"{format_number(totals.percentage)}%",
        grade=grade,
        tone=grade_tone(grade),
    )
