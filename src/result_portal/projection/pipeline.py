"""
Module: projection.pipeline

Purpose:
    Turn the full record set and a ViewRequest into exactly what the list
    view shows. Filter → Sort → Paginate → Aggregate. Pure: the input
    records are never modified.

Key Functions:
    - project(): Main entry point
    - filter_records(): Substring match on name or roll
    - sort_records(): Stable sort with the mode's comparator
    - compute_stats(): Count and average over filtered records
    - page_window(): Numbered page controls around the current page

Used By:
    - registry.controller.ResultPortal.render_list
    - app.cli (list command)
"""

from __future__ import annotations

import logging
import math
from functools import cmp_to_key
from typing import List, Optional, Sequence

from result_portal.core.models import StudentRecord
from result_portal.core.scoring import round_half_up

from .config import ViewRequest
from .models import PageWindow, ProjectedRow, Projection, ProjectionStats
from .sort_mode import SortMode, comparator_for

logger = logging.getLogger(__name__)

PAGE_WINDOW_SIZE = 5


def filter_records(records: Sequence[StudentRecord], query: str) -> List[StudentRecord]:
    """Records whose name or roll contains ``query`` (case-insensitive)."""
    needle = query.lower()
    if not needle:
        return list(records)
    return [
        r for r in records
        if needle in r.name.lower() or needle in r.roll.lower()
    ]


def sort_records(records: Sequence[StudentRecord], mode: SortMode) -> List[StudentRecord]:
    """Stable sort; equal records keep their existing relative order."""
    return sorted(records, key=cmp_to_key(comparator_for(mode)))


def compute_stats(records: Sequence[StudentRecord]) -> Optional[ProjectionStats]:
    """Count and mean percentage, or None for an empty set."""
    if not records:
        return None
    average = sum(r.percentage for r in records) / len(records)
    return ProjectionStats(count=len(records), average=round_half_up(average))


def total_pages_for(count: int, page_size: int) -> int:
    return max(1, math.ceil(count / page_size))


def project(records: Sequence[StudentRecord], request: ViewRequest) -> Projection:
    """
    Build the visible page of the record list.

    Args:
        records: All records, in store order
        request: Query, ordering and paging

    Returns:
        Projection whose page is clamped to [1, total_pages]

    Example:
        >>> view = project(store.records, ViewRequest(query="alex"))
        >>> [row.record.name for row in view.rows]
        ['Alexa Roy']
    """
    filtered = filter_records(records, request.query)
    ordered = sort_records(filtered, request.sort)

    total_pages = total_pages_for(len(ordered), request.page_size)
    page = min(request.page, total_pages)
    start = (page - 1) * request.page_size
    window = ordered[start:start + request.page_size]

    rows = tuple(
        ProjectedRow(serial=start + i + 1, record=record)
        for i, record in enumerate(window)
    )
    logger.debug(
        f"Projected {len(rows)} of {len(ordered)} record(s), page {page}/{total_pages}"
    )
    return Projection(
        rows=rows,
        page=page,
        total_pages=total_pages,
        filtered_count=len(ordered),
        stats=compute_stats(ordered),
    )


def page_window(current: int, total_pages: int, size: int = PAGE_WINDOW_SIZE) -> Optional[PageWindow]:
    """
    Pagination controls: Prev, up to ``size`` numbered pages, Next.

    The numbered run starts ``size // 2`` pages before the current page and
    is cut off at the last page. No controls are needed for a single page.

    Example:
        >>> page_window(4, 10).pages
        (2, 3, 4, 5, 6)
        >>> page_window(1, 1) is None
        True
    """
    if total_pages <= 1:
        return None
    current = min(max(1, current), total_pages)
    start = max(1, current - size // 2)
    end = min(total_pages, start + size - 1)
    return PageWindow(
        current=current,
        total_pages=total_pages,
        prev_page=max(1, current - 1),
        next_page=min(total_pages, current + 1),
        pages=tuple(range(start, end + 1)),
    )
