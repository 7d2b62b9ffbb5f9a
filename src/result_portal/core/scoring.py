"""
Module: core.scoring

Purpose:
    Pure scoring functions turning subject entries into a total, a
    percentage and a letter grade. No side effects.

Key Functions:
    - compute_totals(subjects): Total and percentage over countable entries
    - compute_grade(percentage): Letter grade from the threshold ladder
    - grade_tone(grade): Badge tone used when rendering a grade
    - round_half_up(value, places): Rounding used for all percentages

Used By:
    - core.models.records.StudentRecord (calculated properties)
    - projection.pipeline (average percentage)
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import TYPE_CHECKING, Iterable, Literal, Union

if TYPE_CHECKING:
    from .models.subjects import SubjectEntry


GradeTone = Literal["success", "warn", "danger"]

# Evaluated highest-first, lower bound inclusive
GRADE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (90, "A+"),
    (80, "A"),
    (70, "B+"),
    (60, "B"),
    (50, "C"),
    (40, "D"),
)
FAILING_GRADE = "F"


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round half-up on the exact binary value of ``value``.

    Matches JavaScript's ``Number.prototype.toFixed`` so percentages agree
    with files written by other portal clients.

    Example:
        >>> round_half_up(80.125)
        80.13
        >>> round_half_up(1.005)   # 1.005 is stored as 1.00499...
        1.0
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass(frozen=True, slots=True)
class Totals:
    """
    Result of compute_totals.

    Attributes:
        total: Sum of marks over countable entries
        percentage: total / (countable * 100) * 100, rounded to 2 places
        countable: Number of entries that contributed
    """

    total: Union[int, float]
    percentage: float
    countable: int


def compute_totals(subjects: Iterable[SubjectEntry]) -> Totals:
    """
    Compute total and percentage from subject entries.

    Only countable entries (non-empty name and numeric marks) are used.
    With no countable entries the total and percentage are both 0.

    Example:
        >>> from result_portal.core.models.subjects import SubjectEntry
        >>> t = compute_totals([SubjectEntry("Math", 80), SubjectEntry("Science", 70)])
        >>> (t.total, t.percentage)
        (150, 75.0)
    """
    valid = [s for s in subjects if s.is_countable]
    total = sum(s.marks for s in valid)
    if not valid:
        return Totals(total=0, percentage=0.0, countable=0)
    max_marks = len(valid) * 100
    percentage = round_half_up((total / max_marks) * 100)
    return Totals(total=total, percentage=percentage, countable=len(valid))


def compute_grade(percentage: float) -> str:
    """
    Map a percentage onto the letter-grade ladder.

    ≥90 A+, ≥80 A, ≥70 B+, ≥60 B, ≥50 C, ≥40 D, otherwise F.
    """
    for threshold, grade in GRADE_THRESHOLDS:
        if percentage >= threshold:
            return grade
    return FAILING_GRADE


def grade_tone(grade: str) -> GradeTone:
    """Badge tone for a grade: top grades succeed, F fails, the rest warn."""
    if grade in ("A+", "A"):
        return "success"
    if grade == FAILING_GRADE:
        return "danger"
    return "warn"
