"""
Schema Validation Utilities

Validates JSON documents exchanged with the outside world: imported files
and the persisted/exported record document.

Imported files only need to be an array; their entries are normalized one
by one. Record documents have two levels:
- basic structural checks that always run and fail fast
- full JSON Schema validation (``strict=True``) using ``jsonschema``
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


# Loaded lazily and cached by name
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _validate_with_schema(data: Any, schema_name: str) -> None:
    schema = _load_schema(schema_name)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e
    except RecursionError as e:
        raise ValidationError("Document is nested too deeply", path="") from e


def validate_import_payload(data: Any) -> None:
    """
    Validate the top level of an imported document.

    Only the container is checked: it must be a JSON array. Individual
    entries are handled by the normalizer, which drops bad ones, so there
    is no strict level here.

    Args:
        data: Decoded JSON value

    Raises:
        ValidationError: If the payload is not an array
    """
    if not isinstance(data, list):
        raise ValidationError(
            f"Expected a JSON array of student records, got {type(data).__name__}",
            path="",
        )


def validate_records_document(data: Any, *, strict: bool = False) -> None:
    """
    Validate a persisted or exported records document.

    Args:
        data: Decoded JSON value
        strict: If True, use jsonschema; if False, do basic checks only

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, list):
        raise ValidationError("Records document must be a JSON array", path="")

    required = ["id", "name", "roll", "subjects", "createdAt"]
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValidationError(f"Record {i} must be an object", path=f"{i}")
        missing = [f for f in required if f not in item]
        if missing:
            raise ValidationError(
                f"Record {i} missing required fields: {missing}",
                path=f"{i}",
                errors=[f"Missing field: {f}" for f in missing],
            )
        if not isinstance(item["subjects"], list):
            raise ValidationError("subjects must be a list", path=f"{i}.subjects")

    if strict:
        _validate_with_schema(data, "student_records")
