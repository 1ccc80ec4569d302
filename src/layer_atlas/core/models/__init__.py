"""
Core Models Package

Immutable, validated data models shared by the layout driver, the
source providers and the exporters.

All models in this package are frozen dataclasses. The layout driver
never mutates a part; it returns placed copies, so a part list can be
handed to several layout runs without interference.
"""

from .bounds import PartRect
from .document import DocumentMetadata
from .parts import (
    Anchor,
    AtlasPart,
    InclusionMode,
    build_part,
    classify_layer,
    parse_part_name,
)

__all__ = [
    "PartRect",
    "DocumentMetadata",
    "Anchor",
    "AtlasPart",
    "InclusionMode",
    "build_part",
    "classify_layer",
    "parse_part_name",
]
