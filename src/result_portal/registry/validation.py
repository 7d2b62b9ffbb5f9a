"""
Submission validation for the entry form.

Checks run before a record is created or edited. Failures are reported as
field-level errors and block the mutation; nothing is changed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from result_portal.core.models import StudentRecord, SubjectEntry

ROLL_REQUIRED = "Roll number is required and must be unique."
ROLL_DUPLICATE = "This roll number already exists."
NAME_REQUIRED = "Name is required."
SUBJECTS_REQUIRED = "Please add at least one subject or marks."


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class SubmissionError(Exception):
    """A create/update was rejected by validation."""

    def __init__(self, errors: Sequence[FieldError]):
        super().__init__("; ".join(e.message for e in errors))
        self.errors = list(errors)

    def for_field(self, name: str) -> Optional[FieldError]:
        return next((e for e in self.errors if e.field == name), None)


def is_roll_unique(
    records: Iterable[StudentRecord],
    roll: str,
    exclude_id: Optional[str] = None,
) -> bool:
    """
    True unless another record already uses ``roll`` (ignoring case).

    The record with ``exclude_id`` is skipped so an edit can keep its own roll.
    """
    key = roll.lower()
    return all(r.roll_key != key or r.id == exclude_id for r in records)


def validate_submission(
    records: Iterable[StudentRecord],
    name: str,
    roll: str,
    subjects: Sequence[SubjectEntry],
    editing_id: Optional[str] = None,
) -> List[FieldError]:
    """
    Validate a form submission against the current record set.

    Args:
        records: Current records (for the uniqueness check)
        name: Trimmed student name
        roll: Trimmed roll number
        subjects: Entries collected from the form
        editing_id: Id of the record being edited, None when creating

    Returns:
        Field errors; empty when the submission is valid
    """
    errors: List[FieldError] = []
    if not name:
        errors.append(FieldError("name", NAME_REQUIRED))
    if not roll:
        errors.append(FieldError("roll", ROLL_REQUIRED))
    elif not is_roll_unique(records, roll, editing_id):
        errors.append(FieldError("roll", ROLL_DUPLICATE))
    if len(subjects) == 0:
        errors.append(FieldError("subjects", SUBJECTS_REQUIRED))
    return errors
