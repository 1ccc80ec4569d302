"""
Module: document

Purpose:
    Provides the DocumentMetadata dataclass - the immutable description of
    the layered source document an atlas was built from.

Dependencies:
    - dataclasses (std)

Used By:
    - sources.provider: Captured once per build
    - layout.models.LayoutResult
    - output.json_export
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class DocumentMetadata:
    """
    Source document description (immutable).

    Attributes:
        name: Document name without extension, used for output file names
        width: Document width in pixels
        height: Document height in pixels
        resolution: Resolution in pixels per inch
        path: Originating folder or file path ("" when unknown)

    Example:
        >>> doc = DocumentMetadata("menu", 1024, 768)
        >>> doc.resolution
        72.0
    """

    name: str
    width: int
    height: int
    resolution: float = 72.0
    path: str = ""

    def __post_init__(self) -> None:
        """Validate document on construction."""
        if not self.name:
            raise ValueError("Document name must be non-empty")
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Document size must be non-negative: {self.width}x{self.height}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON."""
        return {
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "resolution": self.resolution,
            "path": self.path,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocumentMetadata:
        """Deserialize from dictionary."""
        return cls(
            name=data["name"],
            width=int(data["width"]),
            height=int(data["height"]),
            resolution=float(data.get("resolution", 72.0)),
            path=data.get("path", ""),
        )
