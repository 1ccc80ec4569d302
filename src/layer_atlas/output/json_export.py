"""
Module: output.json_export

Purpose:
    Structured-data export of a LayoutResult, and the reverse
    transform used to reload a saved layout.

    Every part of the document is emitted in source order. Packed parts
    carry their placement; metadata-only and empty parts carry
    "placed": null so consumers keep their rectangle and anchor.

Key Functions:
    - serialize_layout(): LayoutResult -> dict
    - layout_to_json(): LayoutResult -> JSON text
    - deserialize_layout(): dict -> LayoutResult

Dependencies:
    - json (std)
    - core.schemas.validator: Validation before deserialization

Used By:
    - output.writer: Writes <document><metadata_suffix>.json
"""

from __future__ import annotations

import json
from typing import Any

from layer_atlas.core.models import AtlasPart, DocumentMetadata
from layer_atlas.core.schemas.validator import ATLAS_SCHEMA_VERSION, validate_atlas_metadata
from layer_atlas.layout.models import AtlasSize, LayoutResult


def serialize_layout(result: LayoutResult) -> dict[str, Any]:
    """
    Serialize a LayoutResult to a dictionary.

    The output can be written to JSON and will pass schema validation.

    Args:
        result: Finalized layout

    Returns:
        Dictionary suitable for JSON serialization
    """
    return {
        "schema_version": ATLAS_SCHEMA_VERSION,
        "document": result.document.to_dict(),
        "atlas": {**result.atlas.to_dict(), "margin": result.margin},
        "parts": [part.to_dict() for part in result.parts],
    }


def layout_to_json(result: LayoutResult, *, indent: int = 2) -> str:
    """Render a LayoutResult as JSON text (trailing newline included)."""
    return json.dumps(serialize_layout(result), indent=indent, ensure_ascii=False) + "\n"


def deserialize_layout(data: dict[str, Any], *, validate: bool = True) -> LayoutResult:
    """
    Deserialize a LayoutResult from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate the data first

    Returns:
        LayoutResult instance (attempts is not stored and reads as 0)

    Raises:
        ValidationError: If validate=True and data is invalid
        KeyError: If a required field is missing and validate=False
    """
    if validate:
        validate_atlas_metadata(data, strict=True)

    atlas = data["atlas"]
    return LayoutResult(
        document=DocumentMetadata.from_dict(data["document"]),
        atlas=AtlasSize(int(atlas["width"]), int(atlas["height"])),
        parts=tuple(AtlasPart.from_dict(p) for p in data["parts"]),
        margin=int(atlas.get("margin", 0)),
    )
