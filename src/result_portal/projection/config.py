"""
Module: projection.config

Purpose:
    Immutable description of what the record list should show: search
    query, ordering, page number and page size. Validated on construction.

Key Classes:
    - ViewRequest

Used By:
    - projection.pipeline.project
    - registry.controller.ResultPortal
"""

from __future__ import annotations

from dataclasses import dataclass

from .sort_mode import SortMode

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class ViewRequest:
    """
    Parameters of one list projection (immutable).

    Attributes:
        query: Case-insensitive substring matched against name or roll
        sort: Ordering of the filtered records
        page: 1-based page; values past the end are clamped to the last page
        page_size: Rows per page

    Invariants:
        - page >= 1
        - page_size >= 1

    Example:
        >>> request = ViewRequest(query="alex", sort=SortMode.NAME_ASC)
        >>> request.page, request.page_size
        (1, 10)
    """

    query: str = ""
    sort: SortMode = SortMode.CREATED_AT_DESC
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        """Validate paging on construction."""
        if self.page < 1:
            raise ValueError(f"page must be at least 1: {self.page}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive: {self.page_size}")
        if not isinstance(self.sort, SortMode):
            object.__setattr__(self, "sort", SortMode.parse(self.sort))

    @property
    def needle(self) -> str:
        """Lower-cased query used for matching."""
        return self.query.lower()
