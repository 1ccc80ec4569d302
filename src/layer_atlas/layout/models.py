"""
Module: layout.models

Purpose:
    Data models for atlas layout output.
    Immutable dataclasses describing the converged atlas.

Key Classes:
    - AtlasSize: Power-of-two atlas canvas dimensions
    - LayoutResult: Final layout output

Dependencies:
    - dataclasses (std)
    - core.models: AtlasPart, DocumentMetadata

Used By:
    - layout.driver: Creates LayoutResults
    - output: Exporters and renderer consume them
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from layer_atlas.core.models import AtlasPart, DocumentMetadata


@dataclass(frozen=True)
class AtlasSize:
    """
    Atlas canvas dimensions.

    Example:
        >>> AtlasSize(128, 64).area
        8192
    """

    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    def to_dict(self) -> dict[str, int]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output.

    Holds the full part list in source order, including metadata-only
    and degenerate parts, so exporters can emit everything the document
    described.

    Attributes:
        document: Source document metadata
        atlas: Converged atlas size (both sides powers of two)
        parts: All parts, with placed_origin set on packed parts
        margin: Safety margin the layout was computed with
        attempts: Number of packing passes the driver ran

    Example:
        >>> result = build_layout(parts, document, config)
        >>> result.placed_count
        12
    """

    document: DocumentMetadata
    atlas: AtlasSize
    parts: tuple[AtlasPart, ...]
    margin: int = 0
    attempts: int = 0

    def iter_placed(self) -> Iterator[AtlasPart]:
        """Iterate over parts that received a placement, in source order."""
        for part in self.parts:
            if part.placed_origin is not None:
                yield part

    @property
    def placed_count(self) -> int:
        """Number of parts that received a placement."""
        return sum(1 for _ in self.iter_placed())

    @property
    def is_empty(self) -> bool:
        """True if nothing was packed."""
        return self.placed_count == 0

    @property
    def utilization(self) -> float:
        """Fraction of the atlas covered by packed part pixels."""
        used = sum(p.rect.area for p in self.iter_placed())
        return used / self.atlas.area
