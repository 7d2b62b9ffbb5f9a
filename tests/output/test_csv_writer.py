"""
Unit Tests for CSV Export

Tests for the CSV text layout and file writing.
"""

from result_portal.core.models import StudentRecord, SubjectEntry
from result_portal.output import records_to_csv, write_csv


def _record(**overrides) -> StudentRecord:
    values = dict(
        id="abc",
        name="Alexa Roy",
        roll="R9",
        subjects=(SubjectEntry("Math", 80), SubjectEntry("Science", 70), SubjectEntry("English", 90)),
        created_at=1000,
    )
    values.update(overrides)
    return StudentRecord(**values)


class TestRecordsToCsv:
    """Tests for records_to_csv."""

    def test_csv_when_record_then_header_and_quoted_row(self):
        text = records_to_csv([_record()])
        assert text == (
            "Name,Roll,Total,Percentage,Grade,Subjects\n"
            '"Alexa Roy","R9","240","80","A","Math:80|Science:70|English:90"'
        )

    def test_csv_when_no_records_then_header_only(self):
        assert records_to_csv([]) == "Name,Roll,Total,Percentage,Grade,Subjects"

    def test_csv_when_quotes_in_name_then_doubled(self):
        text = records_to_csv([_record(name='Alexa "Lex" Roy')])
        assert '"Alexa ""Lex"" Roy"' in text

    def test_csv_when_marks_empty_then_blank_after_colon(self):
        text = records_to_csv([_record(subjects=(SubjectEntry("Art", None), SubjectEntry("Math", 82.5)))])
        assert text.endswith('"Art:|Math:82.5"')

    def test_csv_when_several_records_then_input_order(self):
        text = records_to_csv([_record(roll="R2"), _record(roll="R1")])
        rolls = [line.split(",")[1] for line in text.split("\n")[1:]]
        assert rolls == ['"R2"', '"R1"']


class TestWriteCsv:
    """Tests for write_csv."""

    def test_write_when_directory_then_students_csv(self, tmp_path):
        path = write_csv([_record()], tmp_path)

        assert path == tmp_path / "students.csv"
        assert path.read_text(encoding="utf-8").startswith("Name,Roll")

    def test_write_when_file_path_then_written_there(self, tmp_path):
        target = tmp_path / "exports" / "class-a.csv"

        path = write_csv([_record()], target)

        assert path == target
        assert not path.read_text(encoding="utf-8").endswith("\n")
