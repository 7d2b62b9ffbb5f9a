"""Serialization helpers for the record wire format."""

from .serialization import (
    dumps_records,
    export_filename,
    save_records_json,
    serialize_record,
    serialize_records,
    serialize_subject,
)

__all__ = [
    "dumps_records",
    "export_filename",
    "save_records_json",
    "serialize_record",
    "serialize_records",
    "serialize_subject",
]
