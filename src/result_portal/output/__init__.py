"""
Module: output

Purpose:
    Presentation-neutral output of records: detail view, CSV export and
    printable PDF result sheets.
"""

from .csv_writer import CSV_FILENAME, records_to_csv, write_csv
from .detail import RecordDetail, SubjectLine, describe_record, format_number
from .print_view import render_result_sheet

__all__ = [
    "CSV_FILENAME",
    "RecordDetail",
    "SubjectLine",
    "describe_record",
    "format_number",
    "records_to_csv",
    "write_csv",
    "render_result_sheet",
]
