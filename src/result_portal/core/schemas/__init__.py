"""JSON schemas and validation for imported and persisted documents."""

from .validator import ValidationError, validate_import_payload, validate_records_document

__all__ = ["ValidationError", "validate_import_payload", "validate_records_document"]
