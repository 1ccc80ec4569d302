"""
Module: bounds

Purpose:
    Provides the PartRect dataclass - an integer pixel rectangle in the
    source document's coordinate space. Handles construction from raw
    layer edges and clamping against the document canvas.

Key Functions:
    - PartRect.from_edges(): Build from (left, top, right, bottom)
    - PartRect.clamp_to(): Clip overhanging geometry to the document
    - PartRect.overlaps(other): Check for overlap with another rectangle
    - PartRect.expanded(margin): Grow by a margin on every side
    - PartRect.to_dict() / PartRect.from_dict(): Serialization

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.parts.AtlasPart
    - layout.driver
    - output.renderer
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple


@dataclass(frozen=True, slots=True)
class PartRect:
    """
    Integer rectangle in document pixels.

    The region covers [left, left + width) x [top, top + height).
    Width and height may be zero for degenerate layers; they are
    never negative once clamped.

    Attributes:
        left: X-coordinate of the left edge
        top: Y-coordinate of the top edge
        width: Width in pixels
        height: Height in pixels

    Example:
        >>> rect = PartRect.from_edges(-10, 0, 50, 40).clamp_to(100, 100)
        >>> rect
        PartRect(left=0, top=0, width=40, height=40)
    """

    left: int
    top: int
    width: int
    height: int

    @classmethod
    def from_edges(cls, left: int, top: int, right: int, bottom: int) -> PartRect:
        """Build a rectangle from near and far edges (width = right - left)."""
        return cls(int(left), int(top), int(right) - int(left), int(bottom) - int(top))

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def right(self) -> int:
        """X-coordinate of the right edge (exclusive)."""
        return self.left + self.width

    @property
    def bottom(self) -> int:
        """Y-coordinate of the bottom edge (exclusive)."""
        return self.top + self.height

    @property
    def is_empty(self) -> bool:
        """True when the rectangle covers no pixels."""
        return self.width <= 0 or self.height <= 0

    @property
    def area(self) -> int:
        """Pixel area, 0 for empty rectangles."""
        if self.is_empty:
            return 0
        return self.width * self.height

    # ─────────────────────────────────────────────────────────────────────────
    # Transformations
    # ─────────────────────────────────────────────────────────────────────────

    def clamp_to(self, doc_width: int, doc_height: int) -> PartRect:
        """
        Clip this rectangle to a document of the given size.

        Negative near edges are moved to 0 and the overhang is removed from
        the size. Far edges past the document are pulled back to the document
        edge. Both axes use the same rule.

        Args:
            doc_width: Document width in pixels
            doc_height: Document height in pixels

        Returns:
            New clamped PartRect with non-negative width and height
        """
        left, top, width, height = self.left, self.top, self.width, self.height

        if left < 0:
            width += left
            left = 0
        if top < 0:
            height += top
            top = 0
        if left + width > doc_width:
            width = doc_width - left
        if top + height > doc_height:
            height = doc_height - top

        return PartRect(left, top, max(0, width), max(0, height))

    def expanded(self, margin: int) -> PartRect:
        """Return a rectangle grown by margin pixels on every side."""
        return PartRect(
            self.left - margin,
            self.top - margin,
            self.width + 2 * margin,
            self.height + 2 * margin,
        )

    def moved_to(self, x: int, y: int) -> PartRect:
        """Return a rectangle of the same size with its top-left at (x, y)."""
        return PartRect(x, y, self.width, self.height)

    # ─────────────────────────────────────────────────────────────────────────
    # Query Methods
    # ─────────────────────────────────────────────────────────────────────────

    def overlaps(self, other: PartRect) -> bool:
        """
        Check if this rectangle shares at least one pixel with another.

        Touching rectangles (one.right == other.left) do NOT overlap.
        """
        if self.is_empty or other.is_empty:
            return False
        return not (
            self.right <= other.left
            or other.right <= self.left
            or self.bottom <= other.top
            or other.bottom <= self.top
        )

    def as_box(self) -> Tuple[int, int, int, int]:
        """Return (left, top, right, bottom) as used by PIL crop boxes."""
        return (self.left, self.top, self.right, self.bottom)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, int]:
        """Serialize to dictionary for JSON."""
        return {
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PartRect:
        """
        Deserialize from dictionary.

        Raises:
            KeyError: If a required field is missing
        """
        return cls(
            left=int(data["left"]),
            top=int(data["top"]),
            width=int(data["width"]),
            height=int(data["height"]),
        )
