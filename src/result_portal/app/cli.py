"""
Command-line front end for the result portal.

Usage:
    # Add a student with three subjects
    result-portal add --name "Alexa Roy" --roll R9 \\
        --subject Math=80 --subject Science=70 --subject English=90

    # Search, sort and page through records
    result-portal list --query alex --sort percentage_desc --page 2

    # Merge a previously exported file
    result-portal import students-2024-01-01-10-00-00.json

    # Use a specific data directory
    result-portal --data-dir ./data list
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from result_portal import __version__
from result_portal.core.models import SubjectEntry
from result_portal.output import format_number
from result_portal.projection import Projection, SortMode
from result_portal.registry import (
    ImportFailed,
    JsonFileStorage,
    PersistenceError,
    RecordNotFound,
    RecordStore,
    ResultPortal,
    SubmissionError,
    collect_subjects,
)

from .config import PortalConfig
from .logging_utils import configure_logging
from .preferences import DARK, LIGHT, PreferencesStore

logger = logging.getLogger(__name__)


def parse_subject(text: str) -> Tuple[str, str]:
    """Split ``NAME=MARKS``; the last "=" separates the marks."""
    name, sep, marks = text.rpartition("=")
    if not sep:
        return text, ""
    return name, marks


def _subjects_from(values: Optional[Sequence[str]]) -> Tuple[SubjectEntry, ...]:
    return collect_subjects([parse_subject(v) for v in values or ()])


def _print_projection(projection: Projection, portal: ResultPortal) -> None:
    if projection.is_empty:
        print("No records found")
        return
    print(f"{'#':>3}  {'Name':<24} {'Roll':<10} {'Total':>7} {'%':>7}  {'Grade':<5} Id")
    for row in projection.rows:
        record = row.record
        print(
            f"{row.serial:>3}  {record.name:<24} {record.roll:<10} "
            f"{format_number(record.total):>7} {format_number(record.percentage):>7}  "
            f"{record.grade:<5} {record.id}"
        )
    if projection.stats is not None:
        print(projection.stats.summary())
    window = portal.pagination()
    if window is not None:
        pages = " ".join(
            f"[{p}]" if p == window.current else str(p) for p in window.pages
        )
        print(f"Page {window.current} of {window.total_pages}: {pages}")


# ─────────────────────────────────────────────────────────────────────────────
# Commands
# ─────────────────────────────────────────────────────────────────────────────

def cmd_add(portal: ResultPortal, args: argparse.Namespace) -> int:
    record = portal.submit(args.name, args.roll, _subjects_from(args.subject))
    print(f"Added {record.roll} ({record.id}): {format_number(record.percentage)}% {record.grade}")
    return 0


def cmd_edit(portal: ResultPortal, args: argparse.Namespace) -> int:
    current = portal.store.find_by_id(args.id)
    if current is None:
        raise RecordNotFound(args.id)
    name = current.name if args.name is None else args.name
    roll = current.roll if args.roll is None else args.roll
    subjects = current.subjects if args.subject is None else _subjects_from(args.subject)
    record = portal.submit(name, roll, subjects, editing_id=args.id)
    print(f"Updated {record.roll} ({record.id}): {format_number(record.percentage)}% {record.grade}")
    return 0


def cmd_delete(portal: ResultPortal, args: argparse.Namespace) -> int:
    record = portal.delete_record(args.id)
    print(f"Deleted {record.roll} ({record.id})")
    return 0


def cmd_list(portal: ResultPortal, args: argparse.Namespace) -> int:
    portal.set_query(args.query)
    portal.set_sort(args.sort)
    portal.set_page_size(args.page_size)
    portal.set_page(args.page)
    _print_projection(portal.render_list(), portal)
    return 0


def cmd_show(portal: ResultPortal, args: argparse.Namespace) -> int:
    for line in portal.view(args.id).lines():
        print(line)
    return 0


def cmd_print(portal: ResultPortal, args: argparse.Namespace) -> int:
    path = portal.print_record(args.id, Path(args.output))
    print(f"Wrote {path}")
    return 0


def cmd_export_json(portal: ResultPortal, args: argparse.Namespace) -> int:
    path = portal.export_json(Path(args.path))
    print(f"Exported {len(portal.store)} record(s) to {path}")
    return 0


def cmd_export_csv(portal: ResultPortal, args: argparse.Namespace) -> int:
    path = portal.export_csv(Path(args.path))
    print(f"Exported {len(portal.store)} record(s) to {path}")
    return 0


def cmd_import(portal: ResultPortal, args: argparse.Namespace) -> int:
    report = portal.import_file(Path(args.file))
    print(report.summary())
    return 0


def cmd_clear(portal: ResultPortal, args: argparse.Namespace) -> int:
    if not args.yes:
        print("Refusing to delete all records without --yes", file=sys.stderr)
        return 1
    count = portal.clear_all()
    print(f"Deleted {count} record(s)")
    return 0


def cmd_theme(preferences: PreferencesStore, args: argparse.Namespace) -> int:
    if args.mode == "toggle":
        preferences.toggle_theme()
    elif args.mode is not None:
        preferences.set_theme(args.mode)
    print(preferences.get_theme())
    return 0


# ─────────────────────────────────────────────────────────────────────────────
# Parser
# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="result-portal",
        description="Manage student examination results",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--data-dir", type=Path, help="Directory holding saved records")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    subject_help = "Subject as NAME=MARKS (repeatable)"

    p = sub.add_parser("add", help="Add a student record")
    p.add_argument("--name", required=True)
    p.add_argument("--roll", required=True)
    p.add_argument("--subject", action="append", metavar="NAME=MARKS", help=subject_help)
    p.set_defaults(handler=cmd_add)

    p = sub.add_parser("edit", help="Edit a student record")
    p.add_argument("id")
    p.add_argument("--name")
    p.add_argument("--roll")
    p.add_argument(
        "--subject", action="append", metavar="NAME=MARKS",
        help=subject_help + "; replaces all subjects when given",
    )
    p.set_defaults(handler=cmd_edit)

    p = sub.add_parser("delete", help="Delete a student record")
    p.add_argument("id")
    p.set_defaults(handler=cmd_delete)

    p = sub.add_parser("list", help="List records")
    p.add_argument("--query", default="", help="Match name or roll (case-insensitive)")
    p.add_argument(
        "--sort", default=SortMode.default().value,
        choices=[mode.value for mode in SortMode],
    )
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--page-size", type=int, default=None)
    p.set_defaults(handler=cmd_list)

    p = sub.add_parser("show", help="Show one record")
    p.add_argument("id")
    p.set_defaults(handler=cmd_show)

    p = sub.add_parser("print", help="Render a printable result sheet (PDF)")
    p.add_argument("id")
    p.add_argument("output", help="PDF file to write")
    p.set_defaults(handler=cmd_print)

    p = sub.add_parser("export-json", help="Export all records as JSON")
    p.add_argument("path", nargs="?", default=".", help="File or directory (default: .)")
    p.set_defaults(handler=cmd_export_json)

    p = sub.add_parser("export-csv", help="Export all records as CSV")
    p.add_argument("path", nargs="?", default=".", help="File or directory (default: .)")
    p.set_defaults(handler=cmd_export_csv)

    p = sub.add_parser("import", help="Merge records from a JSON file")
    p.add_argument("file")
    p.set_defaults(handler=cmd_import)

    p = sub.add_parser("clear", help="Delete all records")
    p.add_argument("--yes", action="store_true", help="Confirm deleting everything")
    p.set_defaults(handler=cmd_clear)

    p = sub.add_parser("theme", help="Show or change the theme preference")
    p.add_argument("mode", nargs="?", choices=[LIGHT, DARK, "toggle"])
    p.set_defaults(handler=cmd_theme)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``result-portal`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    config = PortalConfig.resolve(args.data_dir)
    storage = JsonFileStorage(config.data_dir)
    logger.debug(f"Using data directory {config.data_dir}")

    if args.handler is cmd_theme:
        preferences = PreferencesStore(storage, config.theme_key, default=config.default_theme)
        return cmd_theme(preferences, args)

    portal = ResultPortal(RecordStore(storage, config.students_key))
    portal.load()
    if getattr(args, "page_size", None) is None and args.command == "list":
        args.page_size = config.default_page_size

    try:
        return args.handler(portal, args)
    except SubmissionError as e:
        for error in e.errors:
            print(f"{error.field}: {error.message}", file=sys.stderr)
        return 1
    except (RecordNotFound, ImportFailed, PersistenceError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
