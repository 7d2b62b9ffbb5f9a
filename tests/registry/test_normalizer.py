"""
Unit Tests for Record Normalization

Tests for normalize_record, normalize_all and collect_subjects.
"""

import logging

import pytest

from result_portal.registry import collect_subjects, normalize_all, normalize_record


class TestNormalizeRecord:
    """Tests for normalize_record."""

    def test_normalize_when_valid_then_trimmed_and_clamped(self):
        record = normalize_record(
            {"name": " Alexa ", "roll": " R9 ", "subjects": [{"name": "Math", "marks": 120}]}
        )
        assert record.name == "Alexa"
        assert record.roll == "R9"
        assert record.subjects[0].marks == 100
        assert record.grade == "A+"

    @pytest.mark.parametrize("raw", [None, [], "Alexa", 42])
    def test_normalize_when_not_object_then_none(self, raw):
        assert normalize_record(raw) is None

    @pytest.mark.parametrize(
        "raw",
        [
            {"roll": "R1"},
            {"name": "A"},
            {"name": "   ", "roll": "R1"},
            {"name": "A", "roll": ""},
        ],
    )
    def test_normalize_when_name_or_roll_missing_then_none(self, raw):
        assert normalize_record(raw) is None

    def test_normalize_when_subjects_not_list_then_no_subjects(self):
        record = normalize_record({"name": "A", "roll": "R1", "subjects": "Math"})
        assert record.subjects == ()

    def test_normalize_when_subject_not_object_then_none(self):
        """A subject entry that is not an object rejects the whole record."""
        raw = {"name": "A", "roll": "R1", "subjects": [{"name": "Math", "marks": 50}, "Art"]}
        assert normalize_record(raw) is None

    def test_normalize_when_marks_not_number_then_empty_marks(self):
        record = normalize_record(
            {"name": "A", "roll": "R1", "subjects": [{"name": "Math", "marks": "85"}]}
        )
        assert record.subjects[0].marks is None
        assert record.total == 0

    def test_normalize_when_blank_subject_then_dropped(self):
        record = normalize_record(
            {"name": "A", "roll": "R1", "subjects": [{"name": "", "marks": ""}, {"name": "Art"}]}
        )
        assert [s.name for s in record.subjects] == ["Art"]

    def test_normalize_when_id_and_created_at_given_then_reused(self):
        record = normalize_record({"id": "abc", "name": "A", "roll": "R1", "createdAt": 1000})
        assert record.id == "abc"
        assert record.created_at == 1000

    @pytest.mark.parametrize("record_id", ["", 5, None])
    def test_normalize_when_id_unusable_then_fresh_id(self, record_id):
        record = normalize_record({"id": record_id, "name": "A", "roll": "R1"})
        assert isinstance(record.id, str)
        assert len(record.id) == 32

    @pytest.mark.parametrize("created_at", ["yesterday", None, True, 10**400])
    def test_normalize_when_created_at_unusable_then_current_time(self, created_at):
        record = normalize_record({"name": "A", "roll": "R1", "createdAt": created_at})
        assert record.created_at > 1_600_000_000_000

    def test_normalize_when_derived_values_supplied_then_recalculated(self):
        record = normalize_record(
            {
                "name": "A",
                "roll": "R1",
                "subjects": [{"name": "Math", "marks": 50}],
                "total": 999,
                "percentage": 99.9,
                "grade": "A+",
            }
        )
        assert record.total == 50
        assert record.percentage == 50.0
        assert record.grade == "C"

    def test_normalize_when_marks_too_large_for_float_then_empty_marks(self):
        record = normalize_record(
            {"name": "A", "roll": "R1", "subjects": [{"name": "Math", "marks": 10**400}]}
        )
        assert record.subjects[0].marks is None
        assert record.total == 0

    @pytest.mark.parametrize(
        "name, roll, expected",
        [
            (True, "R1", ("true", "R1")),
            ("A", 1.0, ("A", "1")),
            ("A", 2.5, ("A", "2.5")),
            ("A", 7, ("A", "7")),
            ("A", float("inf"), ("A", "Infinity")),
        ],
    )
    def test_normalize_when_name_or_roll_not_string_then_spelled_like_exported_files(
        self, name, roll, expected
    ):
        """Booleans are lower-case and integral floats lose their ".0"."""
        record = normalize_record({"name": name, "roll": roll})
        assert (record.name, record.roll) == expected

    @pytest.mark.parametrize("roll", [False, 0, 0.0, float("nan")])
    def test_normalize_when_roll_falsy_non_string_then_none(self, roll):
        assert normalize_record({"name": "A", "roll": roll}) is None


class TestNormalizeAll:
    """Tests for normalize_all."""

    def test_normalize_all_when_some_invalid_then_dropped_and_logged(self, caplog):
        items = [{"name": "A", "roll": "R1"}, {"name": ""}, 5, {"name": "B", "roll": "R2"}]

        with caplog.at_level(logging.WARNING):
            records = normalize_all(items)

        assert [r.roll for r in records] == ["R1", "R2"]
        assert "Dropped 2 malformed record(s)" in caplog.text

    def test_normalize_all_when_all_valid_then_no_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            normalize_all([{"name": "A", "roll": "R1"}])
        assert caplog.text == ""


class TestCollectSubjects:
    """Tests for collect_subjects (form entry path)."""

    def test_collect_when_typed_rows_then_parsed(self):
        subjects = collect_subjects([("Math", "85"), ("", ""), ("Art", "abc")])
        assert [(s.name, s.marks) for s in subjects] == [("Math", 85), ("Art", None)]

    def test_collect_when_decimal_marks_then_float(self):
        assert collect_subjects([("Bio", "72.5")])[0].marks == 72.5

    def test_collect_when_marks_out_of_range_then_clamped(self):
        subjects = collect_subjects([(" Sci ", "120"), ("Chem", "-5")])
        assert [(s.name, s.marks) for s in subjects] == [("Sci", 100), ("Chem", 0)]

    def test_collect_when_name_missing_but_marks_given_then_kept(self):
        """Kept but not counted towards the total."""
        subjects = collect_subjects([("", "40")])
        assert [(s.name, s.marks) for s in subjects] == [("", 40)]
        assert subjects[0].is_countable is False

    @pytest.mark.parametrize("text", ["nan", "inf", "  "])
    def test_collect_when_marks_not_finite_then_empty(self, text):
        assert collect_subjects([("Math", text)])[0].marks is None

    def test_collect_when_numeric_input_then_integral_becomes_int(self):
        marks = collect_subjects([("Math", 85.0)])[0].marks
        assert marks == 85
        assert isinstance(marks, int)
