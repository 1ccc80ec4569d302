"""
Schema Validation Utilities

Validates structured atlas metadata (the .json export) before it is
loaded back into a LayoutResult.

Two levels:
- Basic checks (always): required fields, schema version, power-of-two
  atlas size, placed parts inside the atlas
- Strict checks (opt-in): full JSON Schema validation with jsonschema
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


ATLAS_SCHEMA_VERSION = 1

_PART_FIELDS = ("name", "layer", "mode", "left", "top", "width", "height", "anchor", "placed")

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


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_power_of_two(value: Any) -> bool:
    return isinstance(value, int) and value > 0 and (value & (value - 1)) == 0


def validate_atlas_metadata(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate structured atlas metadata.

    Args:
        data: Dictionary produced by serialize_layout (or read from JSON)
        strict: If True, also validate against atlas.schema.json

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Atlas metadata must be an object")

    required = ["schema_version", "document", "atlas", "parts"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing]
        )

    version = data.get("schema_version")
    if version != ATLAS_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported atlas schema version: {version} (expected {ATLAS_SCHEMA_VERSION})",
            path="schema_version"
        )

    atlas = data["atlas"]
    if not isinstance(atlas, dict):
        raise ValidationError("atlas must be an object", path="atlas")
    for key in ("width", "height"):
        if not _is_power_of_two(atlas.get(key)):
            raise ValidationError(
                f"Atlas {key} must be a power of two: {atlas.get(key)!r}",
                path=f"atlas.{key}"
            )

    parts = data["parts"]
    if not isinstance(parts, list):
        raise ValidationError("parts must be a list", path="parts")
    for i, part in enumerate(parts):
        _validate_part(part, atlas, f"parts[{i}]")

    if strict:
        schema = _load_schema("atlas")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message]
            ) from e


def _validate_part(data: Any, atlas: dict[str, Any], path: str) -> None:
    """Validate a single part entry."""
    if not isinstance(data, dict):
        raise ValidationError("Part must be an object", path=path)

    missing = [f for f in _PART_FIELDS if f not in data]
    if missing:
        raise ValidationError(
            f"Part missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing]
        )

    mode = data["mode"]
    if mode not in ("atlas", "metadata"):
        raise ValidationError(f"Invalid part mode: {mode!r}", path=f"{path}.mode")

    for key in ("left", "top", "width", "height"):
        if not _is_int(data[key]):
            raise ValidationError(f"{key} must be an integer", path=f"{path}.{key}")
    if data["width"] < 0 or data["height"] < 0:
        raise ValidationError("width and height must be non-negative", path=path)

    placed = data["placed"]
    if placed is None:
        return
    if mode != "atlas":
        raise ValidationError("Metadata-only parts cannot be placed", path=f"{path}.placed")

    if not isinstance(placed, dict):
        raise ValidationError("placed must be an object or null", path=f"{path}.placed")
    x, y = placed.get("x"), placed.get("y")
    width, height = data["width"], data["height"]
    if not (_is_int(x) and _is_int(y)):
        raise ValidationError("placed.x and placed.y must be integers", path=f"{path}.placed")
    if x < 0 or y < 0 or x + width > atlas["width"] or y + height > atlas["height"]:
        raise ValidationError(
            f"Part {data['name']!r} at ({x}, {y}) size {width}x{height} "
            f"lies outside the {atlas['width']}x{atlas['height']} atlas",
            path=f"{path}.placed"
        )
