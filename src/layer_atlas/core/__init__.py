"""
Layer Atlas Core Package

Shared data models, schema validation and serialization helpers.
These models are the single source of truth for every other subpackage.
"""

from .models import Anchor, AtlasPart, DocumentMetadata, InclusionMode, PartRect

__all__ = [
    "Anchor",
    "AtlasPart",
    "DocumentMetadata",
    "InclusionMode",
    "PartRect",
]
