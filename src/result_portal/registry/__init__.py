"""
Module: registry

Purpose:
    Record management: storage slots, the record store, normalization of
    external data, submission validation, import reconciliation and the
    command controller.

Key Functions:
    - normalize_record(), collect_subjects()
    - merge_by_roll(), reconcile_import()
    - is_roll_unique(), validate_submission()

Key Classes:
    - RecordStore, JsonFileStorage, MemoryStorage
    - ResultPortal (commands)
    - SubmissionError, ImportFailed, RecordNotFound, PersistenceError
"""

from .storage import STUDENTS_KEY, THEME_KEY, JsonFileStorage, KeyValueStorage, MemoryStorage
from .normalizer import collect_subjects, normalize_all, normalize_record
from .reconciler import (
    PROTECTED_FIELDS,
    ImportFailed,
    ImportReport,
    merge_by_roll,
    merge_fields,
    parse_import_payload,
    reconcile_import,
)
from .store import RecordStore
from .validation import FieldError, SubmissionError, is_roll_unique, validate_submission
from .controller import PersistenceError, RecordNotFound, ResultPortal, ViewState

__all__ = [
    "STUDENTS_KEY",
    "THEME_KEY",
    "KeyValueStorage",
    "JsonFileStorage",
    "MemoryStorage",
    "collect_subjects",
    "normalize_all",
    "normalize_record",
    "PROTECTED_FIELDS",
    "ImportFailed",
    "ImportReport",
    "merge_by_roll",
    "merge_fields",
    "parse_import_payload",
    "reconcile_import",
    "RecordStore",
    "FieldError",
    "SubmissionError",
    "is_roll_unique",
    "validate_submission",
    "PersistenceError",
    "RecordNotFound",
    "ResultPortal",
    "ViewState",
]
