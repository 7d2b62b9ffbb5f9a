"""
Theme preference persistence.

The theme is kept in its own slot, separate from the records. A stored
"light" or "dark" wins; anything else (including a missing or corrupt
slot) falls back to the configured default, which is dark unless changed.
"""
from __future__ import annotations

import json
import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from result_portal.registry import THEME_KEY, KeyValueStorage

logger = logging.getLogger(__name__)

LIGHT = "light"
DARK = "dark"


class PreferencesStore(QObject):
    """Slot-backed store for the light/dark theme preference."""

    themeChanged = Signal(str)

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = THEME_KEY,
        default: str = DARK,
    ) -> None:
        super().__init__()
        if default not in (LIGHT, DARK):
            raise ValueError(f"Unknown theme: {default!r}")
        self.storage = storage
        self.key = key
        self.default = default

    def _read(self) -> Optional[str]:
        raw = self.storage.get(self.key)
        if raw is None:
            return None
        try:
            value = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning(f"Ignoring corrupt theme slot {self.key}")
            return None
        return value if isinstance(value, str) else None

    def get_theme(self) -> str:
        value = self._read()
        return value if value in (LIGHT, DARK) else self.default

    def set_theme(self, mode: str) -> str:
        """Persist ``mode`` ("light" or "dark") and notify listeners."""
        if mode not in (LIGHT, DARK):
            raise ValueError(f"Unknown theme: {mode!r}")
        if not self.storage.set(self.key, json.dumps(mode)):
            logger.warning(f"Theme {mode} applied but not saved")
        self.themeChanged.emit(mode)
        return mode

    def toggle_theme(self) -> str:
        return self.set_theme(DARK if self.get_theme() == LIGHT else LIGHT)
