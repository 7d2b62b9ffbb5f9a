"""
Unit Tests for SortMode

Tests for mode parsing and name collation.
"""

import pytest

from result_portal.projection import SortMode, sort_records
from result_portal.projection.sort_mode import collation_key, comparator_for


class TestSortModeParse:
    """Tests for SortMode.parse."""

    @pytest.mark.parametrize("mode", list(SortMode))
    def test_parse_when_wire_key_then_mode(self, mode):
        assert SortMode.parse(mode.value) is mode

    @pytest.mark.parametrize("value", ["bogus", "", None, 3])
    def test_parse_when_unknown_then_default(self, value):
        assert SortMode.parse(value) is SortMode.CREATED_AT_DESC

    def test_parse_when_mode_then_same_mode(self):
        assert SortMode.parse(SortMode.NAME_ASC) is SortMode.NAME_ASC

    def test_comparator_for_when_every_mode_then_callable(self):
        for mode in SortMode:
            assert callable(comparator_for(mode))


class TestCollation:
    """Tests for name ordering."""

    def test_collation_when_case_differs_then_case_insensitive(self, make_record):
        records = [make_record(roll="1", name="bob"), make_record(roll="2", name="Alice"), make_record(roll="3", name="Carl")]
        ordered = sort_records(records, SortMode.NAME_ASC)
        assert [r.name for r in ordered] == ["Alice", "bob", "Carl"]

    def test_collation_when_accented_then_sorted_with_base_letter(self, make_record):
        records = [make_record(roll="1", name="Zoe"), make_record(roll="2", name="Émile"), make_record(roll="3", name="Fred")]
        ordered = sort_records(records, SortMode.NAME_ASC)
        assert [r.name for r in ordered] == ["Émile", "Fred", "Zoe"]

    def test_collation_when_only_case_differs_then_deterministic(self):
        assert collation_key("anna") < collation_key("Anna")
        assert collation_key("anna") != collation_key("Anna")
