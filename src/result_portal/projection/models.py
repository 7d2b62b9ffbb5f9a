"""
Module: projection.models

Purpose:
    Immutable results of a list projection.

Key Classes:
    - ProjectedRow: A record with its 1-based position in the filtered list
    - ProjectionStats: Count and average percentage of the filtered set
    - Projection: Rows of the current page plus paging and stats
    - PageWindow: Prev/next targets and numbered page buttons
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from result_portal.core.models import StudentRecord


@dataclass(frozen=True)
class ProjectedRow:
    serial: int
    record: StudentRecord


@dataclass(frozen=True)
class ProjectionStats:
    """
    Aggregates over the filtered (not paginated) records.

    Attributes:
        count: Number of filtered records (always > 0)
        average: Mean percentage, rounded to 2 places
    """
    count: int
    average: float

    def summary(self) -> str:
        return f"{self.count} students • Avg: {self.average:.2f}%"


@dataclass(frozen=True)
class Projection:
    """
    One page of the record list.

    Attributes:
        rows: Records on the current page, in sorted order
        page: Effective page after clamping
        total_pages: At least 1
        filtered_count: Records matching the query
        stats: None when no record matches
    """
    rows: Tuple[ProjectedRow, ...]
    page: int
    total_pages: int
    filtered_count: int
    stats: Optional[ProjectionStats]

    @property
    def records(self) -> Tuple[StudentRecord, ...]:
        return tuple(row.record for row in self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class PageWindow:
    """
    Pagination controls for the current page.

    Attributes:
        current: Current page
        prev_page: Target of the Prev control
        next_page: Target of the Next control
        pages: Numbered pages to offer
    """
    current: int
    total_pages: int
    prev_page: int
    next_page: int
    pages: Tuple[int, ...]

    @property
    def has_prev(self) -> bool:
        return self.current > 1

    @property
    def has_next(self) -> bool:
        return self.current < self.total_pages
