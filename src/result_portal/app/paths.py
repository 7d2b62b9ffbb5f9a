"""
Path utilities for handling source-checkout vs installed data locations.

Source checkout: Uses local workspace/ directory
Installed: Uses the platform application-data directory (QStandardPaths)
"""
from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtCore import QCoreApplication, QStandardPaths

APP_NAME = "Result Portal"

# src/result_portal/app/paths.py -> repository root
_REPO_ROOT = Path(__file__).resolve().parents[3]


def is_frozen() -> bool:
    """Check if running as a frozen (PyInstaller) application."""
    return getattr(sys, "frozen", False) or hasattr(sys, "_MEIPASS")


def is_source_checkout() -> bool:
    """True when running from a clone of the repository rather than an install."""
    return not is_frozen() and (_REPO_ROOT / "pyproject.toml").exists()


def get_app_data_dir() -> Path:
    """
    Get the directory holding the record and theme slots.

    Installed: ~/.local/share/Result Portal (Linux),
               ~/Library/Application Support/Result Portal (macOS)
               or %LOCALAPPDATA%/Result Portal (Windows)
    Source checkout: workspace/
    """
    if is_source_checkout():
        return Path.cwd() / "workspace"

    if not QCoreApplication.applicationName():
        QCoreApplication.setApplicationName(APP_NAME)
    return Path(QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.AppLocalDataLocation
    ))
