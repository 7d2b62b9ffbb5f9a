"""
Module: projection.sort_mode

Purpose:
    Enum of list orderings, each mapped to an explicit comparator.

Key Classes:
    - SortMode: Tagged sort modes; values are the wire/CLI keys

Key Functions:
    - comparator_for(mode): Comparator function for a mode
    - collation_key(text): Case- and accent-insensitive name ordering

Used By:
    - projection.config: ViewRequest
    - projection.pipeline: sort_records
"""

from __future__ import annotations

import unicodedata
from enum import Enum
from typing import Callable, Dict

from result_portal.core.models import StudentRecord

Comparator = Callable[[StudentRecord, StudentRecord], int]


class SortMode(Enum):
    """
    Orderings available for the record list.

    Attributes:
        CREATED_AT_DESC: Newest first (default)
        PERCENTAGE_DESC: Highest percentage first
        PERCENTAGE_ASC: Lowest percentage first
        NAME_ASC: Name A-Z
        NAME_DESC: Name Z-A

    Example:
        >>> SortMode.parse("name_asc")
        <SortMode.NAME_ASC: 'name_asc'>
        >>> SortMode.parse("bogus")
        <SortMode.CREATED_AT_DESC: 'createdAt_desc'>
    """

    CREATED_AT_DESC = "createdAt_desc"
    PERCENTAGE_DESC = "percentage_desc"
    PERCENTAGE_ASC = "percentage_asc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"

    @classmethod
    def default(cls) -> SortMode:
        return cls.CREATED_AT_DESC

    @classmethod
    def parse(cls, value: object) -> SortMode:
        """Accept a mode or its key; unknown values give the default."""
        if isinstance(value, SortMode):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.default()


def collation_key(text: str) -> tuple[str, str, str]:
    """
    Sort key approximating a locale-aware string comparison.

    Primary: letters without accents, case-folded. Then accents, then case
    (lower before upper), so ordering is total and deterministic.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), text.casefold(), text.swapcase())


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def _created_at_desc(a: StudentRecord, b: StudentRecord) -> int:
    return _cmp(b.created_at, a.created_at)


def _percentage_desc(a: StudentRecord, b: StudentRecord) -> int:
    return _cmp(b.percentage, a.percentage)


def _percentage_asc(a: StudentRecord, b: StudentRecord) -> int:
    return _cmp(a.percentage, b.percentage)


def _name_asc(a: StudentRecord, b: StudentRecord) -> int:
    return _cmp(collation_key(a.name), collation_key(b.name))


def _name_desc(a: StudentRecord, b: StudentRecord) -> int:
    return _cmp(collation_key(b.name), collation_key(a.name))


COMPARATORS: Dict[SortMode, Comparator] = {
    SortMode.CREATED_AT_DESC: _created_at_desc,
    SortMode.PERCENTAGE_DESC: _percentage_desc,
    SortMode.PERCENTAGE_ASC: _percentage_asc,
    SortMode.NAME_ASC: _name_asc,
    SortMode.NAME_DESC: _name_desc,
}


def comparator_for(mode: SortMode) -> Comparator:
    return COMPARATORS.get(mode, COMPARATORS[SortMode.default()])
