"""
Module: registry.controller

Purpose:
    The command surface a user interface binds to. Each command runs
    synchronously to completion: validate → mutate the store → persist.
    List rendering goes through the projection pipeline.

Key Classes:
    - ResultPortal: Owns the RecordStore and the list view state
    - ViewState: Current query, sort, page and page size
    - RecordNotFound: Command referenced an unknown record id
    - PersistenceError: A mutation could not be saved

Dependencies:
    - registry.store, registry.normalizer, registry.validation,
      registry.reconciler
    - projection: List views
    - output: Detail view, CSV, PDF

Used By:
    - app.cli: Command-line front end
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from result_portal.core.models import StudentRecord, SubjectEntry, new_record_id, now_millis
from result_portal.core.utils.serialization import save_records_json
from result_portal.output import RecordDetail, describe_record, render_result_sheet, write_csv
from result_portal.projection import (
    DEFAULT_PAGE_SIZE,
    PageWindow,
    Projection,
    SortMode,
    ViewRequest,
    page_window,
    project,
)

from .reconciler import ImportFailed, ImportReport, reconcile_import
from .store import RecordStore
from .validation import SubmissionError, validate_submission

logger = logging.getLogger(__name__)


class RecordNotFound(LookupError):
    """No record with the requested id."""

    def __init__(self, record_id: str):
        super().__init__(f"No student record with id {record_id!r}")
        self.record_id = record_id


class PersistenceError(Exception):
    """The store changed in memory but could not be written to storage."""

    def __init__(self, key: str):
        super().__init__(f"Could not save records to {key!r}; changes are not persisted")
        self.key = key


@dataclass
class ViewState:
    """Mutable list state owned by the controller."""
    query: str = ""
    sort: SortMode = SortMode.CREATED_AT_DESC
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_pages: int = 1


class ResultPortal:
    """
    Commands over a record store.

    Every mutating command persists the store before returning and raises
    PersistenceError if the write fails.

    Example:
        >>> portal = ResultPortal(RecordStore(JsonFileStorage(data_dir)))
        >>> portal.load()
        >>> record = portal.submit("Alexa Roy", "R9", collect_subjects([("Math", "80")]))
        >>> portal.render_list().stats.summary()
        '1 students • Avg: 80.00%'
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self.view_state = ViewState()

    def load(self) -> int:
        """Initialise from persistence."""
        return self.store.restore()

    def _require(self, record_id: str) -> StudentRecord:
        record = self.store.find_by_id(record_id)
        if record is None:
            raise RecordNotFound(record_id)
        return record

    def _persist(self) -> None:
        if not self.store.persist():
            logger.error(f"Failed to persist {len(self.store)} record(s) to {self.store.key}")
            raise PersistenceError(self.store.key)

    # ─────────────────────────────────────────────────────────────────────────
    # Mutating Commands
    # ─────────────────────────────────────────────────────────────────────────

    def submit(
        self,
        name: str,
        roll: str,
        subjects: Sequence[SubjectEntry],
        editing_id: Optional[str] = None,
    ) -> StudentRecord:
        """
        Create a record, or update ``editing_id`` in place.

        Raises:
            SubmissionError: Name/roll missing, roll taken, or no subjects
            RecordNotFound: ``editing_id`` does not exist
            PersistenceError: The change could not be saved
        """
        name = name.strip()
        roll = roll.strip()
        subjects = tuple(subjects)
        if editing_id is not None:
            self._require(editing_id)

        errors = validate_submission(self.store.records, name, roll, subjects, editing_id)
        if errors:
            raise SubmissionError(errors)

        if editing_id is not None:
            record = self.store.update(
                editing_id, {"name": name, "roll": roll, "subjects": subjects}
            )
            logger.info(f"Updated record {roll} ({editing_id})")
        else:
            record = StudentRecord(
                id=new_record_id(),
                name=name,
                roll=roll,
                subjects=subjects,
                created_at=now_millis(),
            )
            self.store.add(record)
            logger.info(f"Created record {roll} ({record.id})")

        self._persist()
        return record  # type: ignore[return-value]

    def delete_record(self, record_id: str) -> StudentRecord:
        record = self._require(record_id)
        self.store.remove(record_id)
        self._persist()
        logger.info(f"Deleted record {record.roll} ({record_id})")
        return record

    def clear_all(self) -> int:
        """Remove every record; returns how many were removed."""
        count = len(self.store)
        self.store.clear()
        self._persist()
        self.view_state.page = 1
        logger.info(f"Cleared {count} record(s)")
        return count

    def import_text(self, text: str) -> ImportReport:
        """
        Import a JSON array of records, merging by roll.

        Raises:
            ImportFailed: The text is not a JSON array; nothing changed
            PersistenceError: The merge could not be saved
        """
        merged, report = reconcile_import(self.store.records, text)
        self.store.replace_all(merged)
        self._persist()
        return report

    def import_file(self, path: Path) -> ImportReport:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ImportFailed(f"Could not read {path}: {e}") from e
        return self.import_text(text)

    # ─────────────────────────────────────────────────────────────────────────
    # Read-only Commands
    # ─────────────────────────────────────────────────────────────────────────

    def view(self, record_id: str) -> RecordDetail:
        return describe_record(self._require(record_id))

    def print_record(self, record_id: str, output_path: Path) -> Path:
        return render_result_sheet(self._require(record_id), output_path)

    def export_json(self, path: Path) -> Path:
        written = save_records_json(self.store.records, path)
        logger.info(f"Exported {len(self.store)} record(s) to {written}")
        return written

    def export_csv(self, path: Path) -> Path:
        return write_csv(self.store.records, path)

    # ─────────────────────────────────────────────────────────────────────────
    # List View
    # ─────────────────────────────────────────────────────────────────────────

    def set_query(self, query: str) -> None:
        self.view_state.query = query

    def set_sort(self, sort: object) -> None:
        self.view_state.sort = SortMode.parse(sort)

    def set_page(self, page: int) -> None:
        self.view_state.page = max(1, page)

    def set_page_size(self, page_size: int) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be positive: {page_size}")
        self.view_state.page_size = page_size
        self.view_state.page = 1

    def render_list(self) -> Projection:
        """Project the store with the current view state (clamping the page)."""
        state = self.view_state
        projection = project(
            self.store.records,
            ViewRequest(
                query=state.query,
                sort=state.sort,
                page=state.page,
                page_size=state.page_size,
            ),
        )
        state.page = projection.page
        state.total_pages = projection.total_pages
        return projection

    def pagination(self) -> Optional[PageWindow]:
        """Controls for the most recently rendered page."""
        return page_window(self.view_state.page, self.view_state.total_pages)
