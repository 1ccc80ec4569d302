"""
Module: sources

Purpose:
    Source providers that describe a layered document and give the
    renderer access to layer pixels.

Key Classes:
    - SourceProvider: Abstract document access
    - ManifestSourceProvider: JSON manifest + layer PNGs
    - RawRegion: One raw layer
    - SourceError: Unreadable source

Key Functions:
    - build_parts(): Provider layers -> AtlasParts
"""

from .provider import (
    ManifestSourceProvider,
    RawRegion,
    SourceError,
    SourceProvider,
    build_parts,
)

__all__ = [
    "ManifestSourceProvider",
    "RawRegion",
    "SourceError",
    "SourceProvider",
    "build_parts",
]
