"""Validation of JSON exhibit files."""

from __future__ import annotations

import json
from pathlib import Path

import jsonschema

_SCHEMA_PATH = Path(__file__).with_name("exhibit_schema.json")


def _load_exhibit_schema() -> dict:
    """Load the exhibit schema shipped with the package."""
    with open(_SCHEMA_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_exhibit_schema(data: dict) -> tuple[bool, list[str] | None]:
    """
    Validate exhibit block data against the exhibit schema.

    Args:
        data: Block data loaded from a JSON file

    Returns:
        Tuple of (is_valid, errors)
    """
    try:
        jsonschema.validate(instance=data, schema=_load_exhibit_schema())
        return (True, None)
    except jsonschema.ValidationError as e:
        return (False, [e.message])
    except jsonschema.SchemaError as e:
        return (False, [f"Invalid schema: {e.message}"])
