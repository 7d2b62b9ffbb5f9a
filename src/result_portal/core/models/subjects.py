"""
Module: subjects

Purpose:
    Provides the SubjectEntry dataclass - one subject name with its mark
    for a single student. Marks are either a number bounded to [0, 100]
    or empty (None). Only "countable" entries contribute to totals.

Key Functions:
    - clamp_marks(value): Bound a numeric mark to [0, 100]
    - SubjectEntry.from_input(name, marks): Trim and clamp raw input
    - SubjectEntry.is_countable: Non-empty name and numeric marks

Dependencies:
    - dataclasses (std)
    - math (std)

Used By:
    - core.models.records.StudentRecord
    - core.scoring
    - registry.normalizer
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

Mark = Union[int, float]

MIN_MARKS = 0
MAX_MARKS = 100


def is_number(value: object) -> bool:
    """
    True for real, finite numbers.

    Booleans are excluded even though ``bool`` subclasses ``int``, and so
    are integers too large to convert to float.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def clamp_marks(value: Mark) -> Mark:
    """
    Bound a mark to [0, 100], preserving int/float type.

    Example:
        >>> clamp_marks(120)
        100
        >>> clamp_marks(-3.5)
        0
    """
    return min(MAX_MARKS, max(MIN_MARKS, value))


@dataclass(frozen=True, slots=True)
class SubjectEntry:
    """
    A subject and the marks obtained in it.

    Attributes:
        name: Trimmed subject name (may be empty)
        marks: Mark in [0, 100], or None when no mark was entered

    Invariants:
        - marks is None or a finite number within [0, 100]

    Example:
        >>> SubjectEntry("Math", 80).is_countable
        True
        >>> SubjectEntry("Math", None).is_countable
        False
    """

    name: str
    marks: Optional[Mark] = None

    def __post_init__(self) -> None:
        """Validate marks on construction."""
        if self.marks is None:
            return
        if not is_number(self.marks):
            raise ValueError(f"Marks must be a finite number: {self.marks!r}")
        if not MIN_MARKS <= self.marks <= MAX_MARKS:
            raise ValueError(f"Marks out of range [0, 100]: {self.marks}")

    @classmethod
    def from_input(cls, name: object, marks: object) -> SubjectEntry:
        """
        Build an entry from loosely typed input.

        Names are converted to trimmed strings. Numeric marks are clamped;
        anything else (strings, booleans, NaN, None) becomes empty marks.
        """
        text = str(name).strip() if name is not None else ""
        value = clamp_marks(marks) if is_number(marks) else None
        return cls(name=text, marks=value)

    @property
    def is_countable(self) -> bool:
        """Whether this entry contributes to total and percentage."""
        return self.name != "" and self.marks is not None

    @property
    def is_blank(self) -> bool:
        """Neither a name nor a mark - such entries are never stored."""
        return self.name == "" and self.marks is None
