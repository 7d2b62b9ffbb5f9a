"""
Module: records

Purpose:
    Provides the StudentRecord dataclass - one student's examination
    result. Derived values (total, percentage, grade) are calculated from
    the subject entries on access and are never stored on the instance,
    so they cannot go stale after an edit or merge.

Key Functions:
    - StudentRecord.total / percentage / grade: Calculated properties
    - StudentRecord.roll_key: Case-insensitive roll used for uniqueness
    - new_record_id(): Mint a globally unique record id
    - now_millis(): Current time as epoch milliseconds

Dependencies:
    - core.scoring
    - core.models.subjects

Used By:
    - registry (store, normalizer, reconciler)
    - projection.pipeline
    - output
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Tuple, Union

from ..scoring import Totals, compute_grade, compute_totals
from .subjects import SubjectEntry

Timestamp = Union[int, float]


def new_record_id() -> str:
    """Mint a new opaque record identifier."""
    return uuid.uuid4().hex


def now_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True, slots=True)
class StudentRecord:
    """
    A student's examination result (immutable).

    Edits produce a new instance via ``dataclasses.replace``; the store
    swaps it into the same position.

    Attributes:
        id: Opaque unique identifier, assigned by the system
        name: Non-empty trimmed student name
        roll: Non-empty trimmed roll number, unique ignoring case
        subjects: Ordered subject entries
        created_at: Epoch milliseconds of first creation

    Invariants:
        - id, name and roll are non-empty
        - total/percentage/grade always reflect ``subjects``

    Example:
        >>> r = StudentRecord(
        ...     id="abc", name="Alexa Roy", roll="R9",
        ...     subjects=(SubjectEntry("Math", 80), SubjectEntry("English", 90)),
        ...     created_at=1000,
        ... )
        >>> (r.total, r.percentage, r.grade)
        (170, 85.0, 'A')
    """

    id: str
    name: str
    roll: str
    subjects: Tuple[SubjectEntry, ...] = field(default_factory=tuple)
    created_at: Timestamp = 0

    def __post_init__(self) -> None:
        """Validate identity fields on construction."""
        if not self.id:
            raise ValueError("Record id cannot be empty")
        if not self.name.strip():
            raise ValueError("Student name cannot be empty")
        if not self.roll.strip():
            raise ValueError("Roll number cannot be empty")
        if not isinstance(self.subjects, tuple):
            # Allow lists at construction while keeping the instance hashable
            object.__setattr__(self, "subjects", tuple(self.subjects))

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def totals(self) -> Totals:
        return compute_totals(self.subjects)

    @property
    def total(self) -> Union[int, float]:
        return self.totals.total

    @property
    def percentage(self) -> float:
        return self.totals.percentage

    @property
    def grade(self) -> str:
        return compute_grade(self.percentage)

    @property
    def roll_key(self) -> str:
        """Merge/uniqueness key: lower-cased roll."""
        return self.roll.lower()

    def __repr__(self) -> str:
        return f"StudentRecord({self.roll!r}, {self.name!r}, {self.percentage}%)"
