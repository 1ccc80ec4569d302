"""
Schema Definitions

JSON Schema for the structured atlas metadata export.
"""

from .validator import ATLAS_SCHEMA_VERSION, ValidationError, validate_atlas_metadata

__all__ = [
    "ATLAS_SCHEMA_VERSION",
    "ValidationError",
    "validate_atlas_metadata",
]
