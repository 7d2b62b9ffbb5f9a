"""
Module: registry.reconciler

Purpose:
    Merge an incoming batch of records into the existing set, keyed by
    lower-cased roll number. Identity (id) and provenance (created_at) of
    an existing record always survive a merge.

Key Functions:
    - merge_fields(): Overlay fields onto a record, skipping protected ones
    - merge_by_roll(): Merge two record sequences by roll
    - parse_import_payload(): Decode an import file's text
    - reconcile_import(): Parse, normalize and merge in one step

Key Classes:
    - ImportFailed: The whole import was rejected; nothing changed
    - ImportReport: Counts describing a successful import

Ordering:
    Existing records keep their relative order (updated in place), new
    records are appended in incoming order.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

from result_portal.core.models import StudentRecord
from result_portal.core.schemas.validator import ValidationError, validate_import_payload

from .normalizer import normalize_record

logger = logging.getLogger(__name__)

PROTECTED_FIELDS: Tuple[str, ...] = ("id", "created_at")

_RECORD_FIELDS = frozenset(f.name for f in fields(StudentRecord))


class ImportFailed(Exception):
    """The import payload was unusable; the store was not touched."""
    pass


@dataclass(frozen=True)
class ImportReport:
    """
    Outcome of a successful import.

    Attributes:
        received: Entries in the file
        accepted: Entries that normalized into records
        dropped: Entries rejected by the normalizer
        added: Accepted records with a roll not seen before
        updated: Accepted records merged into an existing roll
    """
    received: int
    accepted: int
    dropped: int
    added: int
    updated: int

    def summary(self) -> str:
        text = f"Imported {self.accepted} record(s): {self.added} added, {self.updated} updated"
        if self.dropped:
            text += f", {self.dropped} skipped"
        return text


def merge_fields(
    base: StudentRecord,
    overlay: Union[StudentRecord, Mapping[str, Any]],
    protected: Sequence[str] = PROTECTED_FIELDS,
) -> StudentRecord:
    """
    Shallow-overlay fields onto ``base``.

    Args:
        base: Record providing defaults and the protected fields
        overlay: Another record, or a mapping of field name -> new value
        protected: Field names always taken from ``base``

    Returns:
        New StudentRecord

    Raises:
        ValueError: If the overlay names a field the record does not store
            (derived values such as ``total`` cannot be patched)
    """
    if isinstance(overlay, StudentRecord):
        changes: Dict[str, Any] = {name: getattr(overlay, name) for name in _RECORD_FIELDS}
    else:
        changes = dict(overlay)
        unknown = set(changes) - _RECORD_FIELDS
        if unknown:
            raise ValueError(f"Unknown record fields: {sorted(unknown)}")

    for name in protected:
        changes.pop(name, None)
    if "subjects" in changes:
        changes["subjects"] = tuple(changes["subjects"])
    return replace(base, **changes)


def merge_by_roll(
    existing: Sequence[StudentRecord],
    incoming: Sequence[StudentRecord],
) -> List[StudentRecord]:
    """
    Merge ``incoming`` into ``existing`` keyed by lower-cased roll.

    A matching record takes every field from the incoming one except
    ``id`` and ``created_at``. Unmatched incoming records are appended as-is.

    Every existing record is kept, even when two of them already share a
    roll key; an incoming record merges into the first of them.

    Example:
        >>> merged = merge_by_roll([old_r01], [new_r01, new_r02])
        >>> merged[0].id == old_r01.id
        True
    """
    merged = list(existing)
    position: Dict[str, int] = {}
    for i, record in enumerate(merged):
        position.setdefault(record.roll_key, i)

    for record in incoming:
        i = position.get(record.roll_key)
        if i is not None:
            merged[i] = merge_fields(merged[i], record)
        else:
            position[record.roll_key] = len(merged)
            merged.append(record)

    return merged


def parse_import_payload(text: str) -> List[Any]:
    """
    Decode the text of an import file.

    Raises:
        ImportFailed: If the text is not JSON or not a JSON array
    """
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError and over-long integer literals
        raise ImportFailed(f"Invalid JSON: {e}") from e
    try:
        validate_import_payload(data)
    except ValidationError as e:
        raise ImportFailed(f"Invalid file: {e}") from e
    return data


def reconcile_import(
    existing: Sequence[StudentRecord],
    text: str,
) -> Tuple[List[StudentRecord], ImportReport]:
    """
    Parse ``text``, normalize each entry and merge into ``existing``.

    Whole-file problems raise ImportFailed before anything is merged.
    Malformed individual entries are dropped and counted.

    Returns:
        (merged records, report)
    """
    items = parse_import_payload(text)

    accepted: List[StudentRecord] = []
    for item in items:
        record = normalize_record(item)
        if record is not None:
            accepted.append(record)

    known = {r.roll_key for r in existing}
    updated = 0
    added = 0
    for record in accepted:
        if record.roll_key in known:
            updated += 1
        else:
            added += 1
            known.add(record.roll_key)

    merged = merge_by_roll(existing, accepted)
    report = ImportReport(
        received=len(items),
        accepted=len(accepted),
        dropped=len(items) - len(accepted),
        added=added,
        updated=updated,
    )
    if report.dropped:
        logger.warning(f"Skipped {report.dropped} malformed record(s) during import")
    logger.info(report.summary())
    return merged, report
