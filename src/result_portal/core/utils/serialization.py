"""
Serialization Utilities

Turns StudentRecord instances into the JSON wire shape shared by the
persisted slot, the JSON export and the JSON import.

Wire shape (one object per record, keys in this order):
    id, name, roll, subjects[{name, marks}], total, percentage, grade, createdAt

- Derived values are written for the benefit of readers of the file but
  are recalculated on the way back in (see registry.normalizer).
- Empty marks are written as "" so files stay interchangeable with the
  other portal clients.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from ..models.records import StudentRecord
from ..models.subjects import SubjectEntry


# ─────────────────────────────────────────────────────────────────────────────
# Record Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_subject(subject: SubjectEntry) -> dict[str, Any]:
    """Serialize a SubjectEntry; empty marks become ""."""
    return {
        "name": subject.name,
        "marks": "" if subject.marks is None else subject.marks,
    }


def serialize_record(record: StudentRecord) -> dict[str, Any]:
    """
    Serialize a StudentRecord to a dictionary in wire order.

    Args:
        record: Record to serialize

    Returns:
        Dictionary suitable for JSON serialization
    """
    totals = record.totals
    return {
        "id": record.id,
        "name": record.name,
        "roll": record.roll,
        "subjects": [serialize_subject(s) for s in record.subjects],
        "total": totals.total,
        "percentage": totals.percentage,
        "grade": record.grade,
        "createdAt": record.created_at,
    }


def serialize_records(records: Iterable[StudentRecord]) -> list[dict[str, Any]]:
    return [serialize_record(r) for r in records]


def dumps_records(records: Iterable[StudentRecord], *, pretty: bool = False) -> str:
    """
    Encode records as a JSON array.

    Args:
        records: Records to encode, in display order
        pretty: Two-space indentation (export) instead of compact (slot)

    Returns:
        JSON text
    """
    payload = serialize_records(records)
    if pretty:
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


# ─────────────────────────────────────────────────────────────────────────────
# Export Files
# ─────────────────────────────────────────────────────────────────────────────

def export_filename(moment: datetime | None = None) -> str:
    """
    Default file name for a JSON export.

    Example:
        >>> export_filename(datetime(2026, 3, 1, 9, 5, 7, tzinfo=timezone.utc))
        'students-2026-03-01-09-05-07.json'
    """
    moment = moment or datetime.now(timezone.utc)
    stamp = moment.astimezone(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S")
    return f"students-{stamp}.json"


def save_records_json(records: Iterable[StudentRecord], path: Path) -> Path:
    """
    Write a pretty-printed JSON export.

    Args:
        records: Records to export
        path: Output file, or a directory to receive a timestamped file

    Returns:
        Path of the written file
    """
    if path.is_dir():
        path = path / export_filename()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_records(records, pretty=True), encoding="utf-8")
    return path
