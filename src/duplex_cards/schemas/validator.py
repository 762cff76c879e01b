"""
Schema Validation Utilities

Validates decoded deck JSON against ``deck.schema.json``.
All schema violations are collected so a broken deck file can be fixed
in one pass.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


DECK_SCHEMA_NAME = "deck"

# Load schemas lazily
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


def validate_deck(data: Any) -> None:
    """
    Validate deck data against the deck schema.

    Args:
        data: Decoded deck JSON (English keys)

    Raises:
        ValidationError: If data is invalid. ``path`` points at the first
            offending element; ``errors`` lists every violation.
    """
    schema = _load_schema(DECK_SCHEMA_NAME)
    validator = jsonschema.Draft202012Validator(schema)
    violations = sorted(validator.iter_errors(data), key=lambda e: e.path)
    if not violations:
        return

    first = violations[0]
    raise ValidationError(
        f"Schema validation failed: {first.message}",
        path=".".join(str(p) for p in first.absolute_path),
        errors=[
            f"{'.'.join(str(p) for p in e.absolute_path) or '<root>'}: {e.message}"
            for e in violations
        ],
    )
