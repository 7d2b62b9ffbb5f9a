"""
Module: app.config

Purpose:
    Runtime configuration for the front ends: where slots live, which
    keys they use, and list/theme defaults. Immutable and validated on
    construction.

Key Classes:
    - PortalConfig

Used By:
    - app.cli
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from result_portal.projection import DEFAULT_PAGE_SIZE
from result_portal.registry import STUDENTS_KEY, THEME_KEY

from .paths import get_app_data_dir

THEMES = ("dark", "light")


@dataclass(frozen=True)
class PortalConfig:
    """
    Configuration for one portal session (immutable).

    Attributes:
        data_dir: Directory holding the storage slots
        students_key: Slot for the record list
        theme_key: Slot for the theme preference
        default_page_size: Rows per page in list views
        default_theme: Theme used when none is stored

    Example:
        >>> config = PortalConfig.resolve(Path("/tmp/portal"))
        >>> config.students_key
        'srp_students_v1'
    """

    data_dir: Path
    students_key: str = STUDENTS_KEY
    theme_key: str = THEME_KEY
    default_page_size: int = DEFAULT_PAGE_SIZE
    default_theme: str = "dark"

    def __post_init__(self) -> None:
        if not self.students_key or not self.theme_key:
            raise ValueError("Storage keys must be non-empty")
        if self.students_key == self.theme_key:
            raise ValueError(f"Storage keys must differ: {self.students_key}")
        if self.default_page_size < 1:
            raise ValueError(f"default_page_size must be positive: {self.default_page_size}")
        if self.default_theme not in THEMES:
            raise ValueError(f"default_theme must be one of {THEMES}: {self.default_theme}")

    @classmethod
    def resolve(cls, data_dir: Optional[Path] = None) -> PortalConfig:
        """Configuration for ``data_dir``, or the platform default location."""
        return cls(data_dir=data_dir if data_dir is not None else get_app_data_dir())
