"""
Module: registry.normalizer

Purpose:
    Coerce loosely shaped input into well-formed StudentRecords, or reject
    it. Used for every record entering the system from outside: imported
    files, the persisted slot and the entry form.

Key Functions:
    - normalize_record(raw): Mapping -> StudentRecord, or None on rejection
    - normalize_all(items): Normalize a batch, dropping rejected entries
    - collect_subjects(rows): Form rows (name, marks text) -> SubjectEntries

Rules:
    - name and roll are trimmed; either empty -> rejected
    - subjects absent or not a list -> no subjects
    - numeric marks clamped to [0, 100]; anything else -> empty marks
    - total/percentage/grade in the input are ignored (recalculated)
    - a non-empty string id and a numeric createdAt are reused,
      otherwise a fresh id / the current time is used
    - any error while coercing rejects that one record only
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from result_portal.core.models import (
    StudentRecord,
    SubjectEntry,
    clamp_marks,
    is_number,
    new_record_id,
    now_millis,
)

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    """
    Trimmed display form of a loosely typed value.

    Falsy values (including NaN) become "". Booleans are lower-case and
    integral floats drop their ".0", the way exported files from other
    portal clients spell them.
    """
    if isinstance(value, float) and math.isnan(value):
        return ""
    if not value:
        return ""
    if isinstance(value, bool):
        return "true"
    if isinstance(value, float):
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def _coerce_subjects(raw: Any) -> Tuple[SubjectEntry, ...]:
    if not isinstance(raw, list):
        return ()
    entries = []
    for item in raw:
        if not isinstance(item, Mapping):
            raise TypeError(f"Subject entry must be an object, got {type(item).__name__}")
        entry = SubjectEntry.from_input(_text(item.get("name")), item.get("marks"))
        if not entry.is_blank:
            entries.append(entry)
    return tuple(entries)


def normalize_record(raw: Any) -> Optional[StudentRecord]:
    """
    Validate and coerce one raw record.

    Args:
        raw: Decoded JSON value (expected to be an object)

    Returns:
        A StudentRecord, or None if the input cannot be a valid record

    Example:
        >>> r = normalize_record({"name": " Alexa ", "roll": "R9",
        ...                       "subjects": [{"name": "Math", "marks": 120}]})
        >>> (r.name, r.subjects[0].marks, r.grade)
        ('Alexa', 100, 'A+')
    """
    try:
        if not isinstance(raw, Mapping):
            return None
        name = _text(raw.get("name"))
        roll = _text(raw.get("roll"))
        if not name or not roll:
            return None

        subjects = _coerce_subjects(raw.get("subjects"))

        record_id = raw.get("id")
        if not (isinstance(record_id, str) and record_id):
            record_id = new_record_id()

        created_at = raw.get("createdAt")
        if not is_number(created_at):
            created_at = now_millis()

        return StudentRecord(
            id=record_id,
            name=name,
            roll=roll,
            subjects=subjects,
            created_at=created_at,
        )
    except (TypeError, ValueError, AttributeError, ArithmeticError) as e:
        logger.debug(f"Rejected malformed record: {e}")
        return None


def normalize_all(items: Iterable[Any]) -> List[StudentRecord]:
    """
    Normalize a batch, silently dropping entries that fail.

    The number of dropped entries is logged at WARNING level.
    """
    records: List[StudentRecord] = []
    dropped = 0
    for item in items:
        record = normalize_record(item)
        if record is None:
            dropped += 1
            continue
        records.append(record)
    if dropped:
        logger.warning(f"Dropped {dropped} malformed record(s) during normalization")
    return records


# ─────────────────────────────────────────────────────────────────────────────
# Form Entry
# ─────────────────────────────────────────────────────────────────────────────

def _parse_mark(value: Any) -> Optional[float]:
    """Parse typed marks; integral values come back as int."""
    if value is None or isinstance(value, bool):
        return None
    if is_number(value):
        number = value
    elif isinstance(value, (int, float)):
        return None
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        if not is_number(number):
            return None
    number = clamp_marks(number)
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def collect_subjects(rows: Sequence[Tuple[Any, Any]]) -> Tuple[SubjectEntry, ...]:
    """
    Build subject entries from form rows.

    Each row is ``(name, marks)`` as typed by the user. Rows with neither a
    name nor a number are skipped; typed marks are clamped to [0, 100].

    Example:
        >>> [(s.name, s.marks) for s in collect_subjects([("Math", "85"), ("", ""), ("Art", "abc")])]
        [('Math', 85), ('Art', None)]
    """
    entries = []
    for name, marks in rows:
        entry = SubjectEntry(name=_text(name), marks=_parse_mark(marks))
        if not entry.is_blank:
            entries.append(entry)
    return tuple(entries)
