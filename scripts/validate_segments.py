#!/usr/bin/env python3
"""Validation script for segment taxonomy JSON files.

Scans config/segments/*.json and validates each file against the segments schema
shipped with the ingestion adapter. Exits with error code if any invalid files are found.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import jsonschema

SCHEMA_RELATIVE_PATH = Path("src/revenue_insights/adapters/ingestion/schemas/segments.schema.json")


def find_repo_root() -> Path:
    """Find the repository root by looking for pyproject.toml."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / "pyproject.toml").exists():
            return parent
    return Path.cwd()


def validate_json_file(file_path: Path, schema: dict) -> tuple[bool, str | None]:
    """Validate a JSON file against a schema."""
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        return False, f"Invalid JSON: {e}"

    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        return False, f"Validation error: {e.message}"

    names = [segment["name"] for segment in data["segments"]]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        return False, f"Duplicate segment names: {', '.join(duplicates)}"
    for segment in data["segments"]:
        low, high = segment.get("min", 0), segment.get("max")
        if high is not None and low > high:
            return False, f"Segment {segment['name']} has min {low} above max {high}"
    return True, None


def main() -> int:
    repo_root = find_repo_root()
    schema_path = repo_root / SCHEMA_RELATIVE_PATH
    if not schema_path.exists():
        print(f"ERROR: Schema not found: {schema_path}", file=sys.stderr)
        return 1
    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    errors: list[str] = []
    for config_file in sorted((repo_root / "config" / "segments").glob("*.json")):
        valid, error = validate_json_file(config_file, schema)
        if not valid:
            errors.append(f"{config_file}: {error}")
        else:
            print(f"OK {config_file}")

    if errors:
        print("\nValidation errors:", file=sys.stderr)
        for error in errors:
            print(f"  {error}", file=sys.stderr)
        return 1

    print("\nAll segment files validated successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
