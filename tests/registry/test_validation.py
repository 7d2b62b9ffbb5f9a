"""
Unit Tests for Submission Validation

Tests for roll uniqueness and form submission checks.
"""

from result_portal.core.models import SubjectEntry
from result_portal.registry import FieldError, SubmissionError, is_roll_unique, validate_submission
from result_portal.registry.validation import (
    NAME_REQUIRED,
    ROLL_DUPLICATE,
    ROLL_REQUIRED,
    SUBJECTS_REQUIRED,
)

SUBJECTS = (SubjectEntry("Math", 80),)


class TestIsRollUnique:
    """Tests for is_roll_unique."""

    def test_unique_when_no_records_then_true(self):
        assert is_roll_unique([], "R01") is True

    def test_unique_when_same_roll_different_case_then_false(self, make_record):
        assert is_roll_unique([make_record(roll="R01")], "r01") is False

    def test_unique_when_excluding_own_id_then_true(self, make_record):
        assert is_roll_unique([make_record(roll="R01")], "R01", exclude_id="id-r01") is True

    def test_unique_when_excluding_other_id_then_false(self, make_record):
        records = [make_record(roll="R01"), make_record(roll="R02")]
        assert is_roll_unique(records, "R01", exclude_id="id-r02") is False


class TestValidateSubmission:
    """Tests for validate_submission."""

    def test_validate_when_valid_then_no_errors(self, make_record):
        assert validate_submission([make_record()], "Alexa", "R9", SUBJECTS) == []

    def test_validate_when_everything_missing_then_error_per_field(self):
        errors = validate_submission([], "", "", ())
        assert errors == [
            FieldError("name", NAME_REQUIRED),
            FieldError("roll", ROLL_REQUIRED),
            FieldError("subjects", SUBJECTS_REQUIRED),
        ]

    def test_validate_when_roll_taken_then_duplicate_error(self, make_record):
        errors = validate_submission([make_record(roll="R01")], "Alexa", "r01", SUBJECTS)
        assert errors == [FieldError("roll", ROLL_DUPLICATE)]

    def test_validate_when_editing_own_roll_then_no_errors(self, make_record):
        errors = validate_submission(
            [make_record(roll="R01")], "Alexa", "R01", SUBJECTS, editing_id="id-r01"
        )
        assert errors == []

    def test_validate_when_only_uncountable_subjects_then_accepted(self):
        """At least one entry is required, countable or not."""
        assert validate_submission([], "A", "R1", (SubjectEntry("Art", None),)) == []


class TestSubmissionError:
    """Tests for SubmissionError."""

    def test_error_when_created_then_message_joins_errors(self):
        error = SubmissionError([FieldError("name", NAME_REQUIRED), FieldError("roll", ROLL_REQUIRED)])
        assert str(error) == f"{NAME_REQUIRED}; {ROLL_REQUIRED}"

    def test_for_field_when_present_then_returns_error(self):
        error = SubmissionError([FieldError("roll", ROLL_DUPLICATE)])
        assert error.for_field("roll").message == ROLL_DUPLICATE
        assert error.for_field("name") is None
