"""
Module: projection

Purpose:
    List projection for the record table: filter by query, sort by mode,
    paginate, and aggregate statistics over the filtered records.

Key Functions:
    - project(): Records + ViewRequest -> Projection
    - page_window(): Pagination controls

Key Classes:
    - ViewRequest, SortMode, Projection, ProjectionStats, PageWindow
"""

from .config import DEFAULT_PAGE_SIZE, ViewRequest
from .models import PageWindow, ProjectedRow, Projection, ProjectionStats
from .pipeline import compute_stats, filter_records, page_window, project, sort_records
from .sort_mode import SortMode

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "ViewRequest",
    "SortMode",
    "Projection",
    "ProjectedRow",
    "ProjectionStats",
    "PageWindow",
    "project",
    "page_window",
    "filter_records",
    "sort_records",
    "compute_stats",
]
