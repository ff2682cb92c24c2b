"""JSON Schema checks for raw customer payloads."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from revenue_insights.application.errors import InvalidPayloadError

SCHEMAS_DIR = Path(__file__).parent / "schemas"
CUSTOMER_RECORD_SCHEMA = "customer_record.schema.json"
CUSTOMER_DETAIL_SCHEMA = "customer_detail.schema.json"

_schema_cache: dict[str, dict[str, Any]] = {}


def load_schema(schema_name: str) -> dict[str, Any]:
    if schema_name not in _schema_cache:
        schema_path = SCHEMAS_DIR / schema_name
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema file not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _schema_cache[schema_name] = json.load(f)
    return _schema_cache[schema_name]


def validate_payload(data: Any, schema_name: str) -> None:
    """Validate a raw payload, raising InvalidPayloadError on any violation."""
    schema = load_schema(schema_name)
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise InvalidPayloadError(f"JSON validation failed: {e.message}") from e
    except jsonschema.SchemaError as e:
        raise InvalidPayloadError(f"Schema error: {e.message}") from e
