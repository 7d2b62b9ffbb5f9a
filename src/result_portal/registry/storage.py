"""
Module: registry.storage

Purpose:
    Durable key-value slots holding string values - the persistence
    contract behind the record store and the preferences store.

Key Classes:
    - KeyValueStorage: Protocol every slot backend implements
    - JsonFileStorage: One file per key under a directory, atomic writes
    - MemoryStorage: Dict-backed slots for tests and throwaway sessions

Used By:
    - registry.store.RecordStore
    - app.preferences.PreferencesStore
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)

STUDENTS_KEY = "srp_students_v1"
THEME_KEY = "srp_theme"

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStorage(Protocol):
    """String slots addressed by fixed keys."""

    def get(self, key: str) -> Optional[str]:
        """Return the slot value, or None if absent or unreadable."""
        ...

    def set(self, key: str, value: str) -> bool:
        """Store a value; returns False if the write failed."""
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryStorage:
    """In-memory slots. Nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> bool:
        self.data[key] = value
        return True

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStorage:
    """
    File-backed slots: ``<root>/<key>.json`` per key.

    Reads never raise - a missing or unreadable file is an absent slot.
    Writes go to a temp file first and are renamed into place so an
    interrupted write cannot corrupt the previous value.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.root / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read slot {key}: {e}")
            return None

    def set(self, key: str, value: str) -> bool:
        path = self._path(key)
        temp_path = path.with_suffix(".tmp")
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(value, encoding="utf-8")
            # Atomic rename (overwrites existing)
            temp_path.replace(path)
            return True
        except OSError as e:
            logger.warning(f"Failed to save slot {key}: {e}")
            try:
                if temp_path.exists():
                    temp_path.unlink()
            except OSError:
                pass
            return False

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to delete slot {key}: {e}")
