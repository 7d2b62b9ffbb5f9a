"""
Module: registry.store

Purpose:
    In-memory, ordered collection of StudentRecords keyed by id, with an
    explicit load/save lifecycle against a key-value storage slot.

    The store is deliberately dumb: it does not check roll uniqueness or
    any other business rule. Callers validate before add/update (see
    registry.validation) and call persist() after every mutation.

Key Classes:
    - RecordStore: add/update/remove/find_by_id/clear + persist/restore

Used By:
    - registry.controller.ResultPortal
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple

from result_portal.core.models import StudentRecord
from result_portal.core.schemas.validator import ValidationError, validate_records_document
from result_portal.core.utils.serialization import dumps_records

from .normalizer import normalize_all
from .reconciler import PROTECTED_FIELDS, merge_fields
from .storage import STUDENTS_KEY, KeyValueStorage

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Ordered record collection backed by a storage slot.

    Example:
        >>> store = RecordStore(MemoryStorage())
        >>> store.restore()
        0
        >>> store.add(record)
        >>> store.persist()
        True
    """

    def __init__(self, storage: KeyValueStorage, key: str = STUDENTS_KEY) -> None:
        self.storage = storage
        self.key = key
        self._records: List[StudentRecord] = []

    # ─────────────────────────────────────────────────────────────────────────
    # Collection
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def records(self) -> Tuple[StudentRecord, ...]:
        """Snapshot of all records in insertion order."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[StudentRecord]:
        return iter(self.records)

    def _index_of(self, record_id: str) -> int:
        for i, record in enumerate(self._records):
            if record.id == record_id:
                return i
        return -1

    def find_by_id(self, record_id: str) -> Optional[StudentRecord]:
        index = self._index_of(record_id)
        return self._records[index] if index != -1 else None

    def add(self, record: StudentRecord) -> None:
        """Append a record. The caller guarantees a unique roll."""
        self._records.append(record)

    def update(self, record_id: str, patch: Mapping[str, Any]) -> Optional[StudentRecord]:
        """
        Overlay ``patch`` onto the record with ``record_id`` in place.

        ``id`` and ``created_at`` are never changed. Derived scores follow
        automatically because they are calculated from subjects.

        Returns:
            The updated record, or None if no record has that id
        """
        index = self._index_of(record_id)
        if index == -1:
            logger.warning(f"Update skipped, no record with id {record_id}")
            return None
        updated = merge_fields(self._records[index], patch, protected=PROTECTED_FIELDS)
        self._records[index] = updated
        return updated

    def remove(self, record_id: str) -> bool:
        """Remove a record; returns False if it was not present."""
        index = self._index_of(record_id)
        if index == -1:
            return False
        del self._records[index]
        return True

    def clear(self) -> None:
        self._records.clear()

    def replace_all(self, records: Iterable[StudentRecord]) -> None:
        """Swap in a complete record set (used after an import merge)."""
        self._records = list(records)

    # ─────────────────────────────────────────────────────────────────────────
    # Persistence
    # ─────────────────────────────────────────────────────────────────────────

    def persist(self) -> bool:
        """
        Write all records to the storage slot.

        Returns:
            True if the slot was written. Failures are logged, not raised.
        """
        ok = self.storage.set(self.key, dumps_records(self._records))
        if ok:
            logger.debug(f"Persisted {len(self._records)} record(s) to {self.key}")
        return ok

    def restore(self) -> int:
        """
        Load records from the storage slot, replacing memory contents.

        A missing, unparsable or wrongly shaped slot yields an empty store;
        individual bad entries are dropped. Never raises.

        Returns:
            Number of records loaded
        """
        self._records = []
        raw = self.storage.get(self.key)
        if raw is None:
            return 0
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            # ValueError covers JSONDecodeError and over-long integer literals
            logger.warning(f"Stored records are corrupted, starting empty: {e}")
            return 0
        if not isinstance(data, list):
            logger.warning("Stored records are not a list, starting empty")
            return 0

        try:
            validate_records_document(data, strict=True)
        except ValidationError as e:
            logger.warning(
                f"Stored records do not match the records schema at "
                f"'{e.path or '<root>'}', normalizing: {e}"
            )
        self._records = normalize_all(data)
        logger.info(f"Restored {len(self._records)} record(s)")
        return len(self._records)
