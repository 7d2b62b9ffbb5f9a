"""
Unit Tests for the Command-Line Interface

Drives main() end to end against a temporary data directory.
"""

import dataclasses
import json
import logging

import pytest

from result_portal.app import cli
from result_portal.app.cli import main, parse_subject


@pytest.fixture(autouse=True)
def reset_logging():
    """main() attaches a console handler; detach it after each test."""
    yield
    logger = logging.getLogger("result_portal")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def run(tmp_path, capsys):
    """Run the CLI against tmp_path, returning (exit code, stdout, stderr)."""
    def _run(*args: str):
        code = main(["--data-dir", str(tmp_path), *args])
        captured = capsys.readouterr()
        return code, captured.out, captured.err
    return _run


def _add_alexa(run):
    return run(
        "add", "--name", "Alexa Roy", "--roll", "R9",
        "--subject", "Math=80", "--subject", "Science=70", "--subject", "English=90",
    )


def _stored_ids(tmp_path):
    return [r["id"] for r in json.loads((tmp_path / "srp_students_v1.json").read_text(encoding="utf-8"))]


class TestParseSubject:
    """Tests for parse_subject."""

    @pytest.mark.parametrize(
        "text,expected",
        [("Math=80", ("Math", "80")), ("A=B=5", ("A=B", "5")), ("Art", ("Art", "")), ("Art=", ("Art", ""))],
    )
    def test_parse_when_text_then_name_and_marks(self, text, expected):
        assert parse_subject(text) == expected


class TestRecordCommands:
    """Tests for add/edit/delete/show."""

    def test_add_when_valid_then_saved(self, run, tmp_path):
        code, out, _ = _add_alexa(run)

        assert code == 0
        assert out.startswith("Added R9")
        assert "80% A" in out
        assert len(_stored_ids(tmp_path)) == 1

    def test_add_when_roll_taken_then_exit_1(self, run):
        _add_alexa(run)

        code, _, err = run("add", "--name", "Bob", "--roll", "r9", "--subject", "Math=50")

        assert code == 1
        assert "roll: This roll number already exists." in err

    def test_add_when_no_subjects_then_exit_1(self, run):
        code, _, err = run("add", "--name", "Bob", "--roll", "R10")
        assert code == 1
        assert "subjects:" in err

    def test_add_when_records_cannot_be_saved_then_exit_1(self, tmp_path, capsys):
        """A data directory path that is really a file makes every save fail."""
        blocked = tmp_path / "not-a-dir"
        blocked.write_text("", encoding="utf-8")

        code = main([
            "--data-dir", str(blocked),
            "add", "--name", "Bob", "--roll", "R10", "--subject", "Math=50",
        ])

        captured = capsys.readouterr()
        assert code == 1
        assert "Added" not in captured.out
        assert "Error: Could not save records" in captured.err

    def test_edit_when_name_given_then_other_fields_kept(self, run, tmp_path):
        _add_alexa(run)
        record_id = _stored_ids(tmp_path)[0]

        code, out, _ = run("edit", record_id, "--name", "Alexa R.")

        assert code == 0
        assert "Updated R9" in out
        code, out, _ = run("show", record_id)
        assert "Alexa R." in out
        assert "Percentage: 80%" in out

    def test_edit_when_subjects_given_then_replaced(self, run, tmp_path):
        _add_alexa(run)
        record_id = _stored_ids(tmp_path)[0]

        code, out, _ = run("edit", record_id, "--subject", "Math=30")

        assert code == 0
        assert "30% F" in out

    def test_edit_when_unknown_id_then_exit_1(self, run):
        code, _, err = run("edit", "missing", "--name", "X")
        assert code == 1
        assert "No student record" in err

    def test_delete_when_present_then_removed(self, run, tmp_path):
        _add_alexa(run)
        record_id = _stored_ids(tmp_path)[0]

        code, out, _ = run("delete", record_id)

        assert code == 0
        assert out.startswith("Deleted R9")
        assert _stored_ids(tmp_path) == []

    def test_delete_when_missing_then_exit_1(self, run):
        code, _, err = run("delete", "missing")
        assert code == 1
        assert err.startswith("Error:")


class TestListCommand:
    """Tests for list."""

    def test_list_when_empty_then_no_records(self, run):
        code, out, _ = run("list")
        assert code == 0
        assert "No records found" in out

    def test_list_when_query_then_filtered_with_stats(self, run):
        _add_alexa(run)
        run("add", "--name", "Bob", "--roll", "R10", "--subject", "Math=40")

        code, out, _ = run("list", "--query", "alex")

        assert code == 0
        assert "Alexa Roy" in out
        assert "Bob" not in out
        assert "1 students • Avg: 80.00%" in out

    def test_list_when_many_pages_then_page_controls(self, run):
        for i in range(12):
            run("add", "--name", f"Student {i}", "--roll", f"R{i}", "--subject", "Math=50")

        code, out, _ = run("list", "--page-size", "5", "--page", "9")

        assert code == 0
        assert "Page 3 of 3: 1 2 [3]" in out

    def test_list_when_page_size_invalid_then_exit_1(self, run):
        code, _, err = run("list", "--page-size", "0")
        assert code == 1
        assert "page_size" in err


class TestFileCommands:
    """Tests for export, import, print and clear."""

    def test_export_json_when_directory_then_timestamped_file(self, run, tmp_path):
        _add_alexa(run)
        out_dir = tmp_path / "exports"
        out_dir.mkdir()

        code, out, _ = run("export-json", str(out_dir))

        assert code == 0
        files = list(out_dir.glob("students-*.json"))
        assert len(files) == 1
        assert json.loads(files[0].read_text(encoding="utf-8"))[0]["roll"] == "R9"

    def test_export_csv_when_file_then_written(self, run, tmp_path):
        _add_alexa(run)
        target = tmp_path / "class.csv"

        code, _, _ = run("export-csv", str(target))

        assert code == 0
        assert target.read_text(encoding="utf-8").startswith("Name,Roll,Total")

    def test_import_when_valid_file_then_report(self, run, tmp_path):
        source = tmp_path / "incoming.json"
        source.write_text(json.dumps([{"name": "Bob", "roll": "R10"}, 5]), encoding="utf-8")

        code, out, _ = run("import", str(source))

        assert code == 0
        assert "1 added, 0 updated, 1 skipped" in out

    def test_import_when_not_array_then_exit_1(self, run, tmp_path):
        source = tmp_path / "incoming.json"
        source.write_text('{"students": []}', encoding="utf-8")

        code, _, err = run("import", str(source))

        assert code == 1
        assert "Invalid file" in err

    def test_print_when_record_then_pdf(self, run, tmp_path):
        _add_alexa(run)
        target = tmp_path / "R9.pdf"

        code, _, _ = run("print", _stored_ids(tmp_path)[0], str(target))

        assert code == 0
        assert target.read_bytes().startswith(b"%PDF")

    def test_clear_when_not_confirmed_then_refused(self, run, tmp_path):
        _add_alexa(run)

        code, _, err = run("clear")

        assert code == 1
        assert "--yes" in err
        assert len(_stored_ids(tmp_path)) == 1

    def test_clear_when_confirmed_then_all_removed(self, run, tmp_path):
        _add_alexa(run)

        code, out, _ = run("clear", "--yes")

        assert code == 0
        assert "Deleted 1 record(s)" in out
        assert _stored_ids(tmp_path) == []


class TestThemeCommand:
    """Tests for theme."""

    def test_theme_when_unset_then_dark(self, run):
        assert run("theme")[1].strip() == "dark"

    def test_theme_when_set_and_toggled_then_persisted(self, run):
        assert run("theme", "light")[1].strip() == "light"
        assert run("theme")[1].strip() == "light"
        assert run("theme", "toggle")[1].strip() == "dark"

    def test_theme_when_config_default_light_then_used_until_set(self, run, monkeypatch):
        resolve = cli.PortalConfig.resolve

        def light_default(data_dir=None):
            return dataclasses.replace(resolve(data_dir), default_theme="light")

        monkeypatch.setattr(cli.PortalConfig, "resolve", staticmethod(light_default))

        assert run("theme")[1].strip() == "light"
        assert run("theme", "dark")[1].strip() == "dark"
        assert run("theme")[1].strip() == "dark"
