"""
Module: parts

Purpose:
    Provides the AtlasPart dataclass - one placeable region of the source
    document with its anchor metadata and (once the layout driver has run)
    its placement inside the atlas. Also owns the layer naming convention:

        base-name[.pin-x,pin-y]

        .foo   comment layer, dropped entirely
        _foo   metadata-only, exported but never packed or rendered

Key Functions:
    - classify_layer(): Resolve the InclusionMode of a layer once
    - parse_part_name(): Split a layer name into base name and Anchor
    - build_part(): Construct a clamped AtlasPart from raw layer data
    - AtlasPart.placed_at(): Record the driver's placement (write once)

Dependencies:
    - dataclasses (std)
    - re (std)
    - .bounds.PartRect

Used By:
    - sources.provider.build_parts
    - layout.driver
    - output.json_export, output.xml_export, output.renderer
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Tuple

from .bounds import PartRect

logger = logging.getLogger(__name__)


COMMENT_MARKER = "."
METADATA_MARKER = "_"

DEFAULT_ANCHOR_X = 0.5
DEFAULT_ANCHOR_Y = 0.5

_FLOAT = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"
# Non-greedy base so "a.b.0.5,0.5" resolves to base "a.b"
_NAME_WITH_ANCHOR = re.compile(rf"^(?P<base>.+?)\.(?P<x>{_FLOAT}),(?P<y>{_FLOAT})$")


class InclusionMode(str, Enum):
    """How a layer takes part in the atlas."""
    ATLAS = "atlas"        # Packed, rendered and exported
    METADATA = "metadata"  # Exported only (underscore names, background layer)
    COMMENT = "comment"    # Dropped before becoming a part

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Anchor:
    """
    Normalized pin point within a part's own bounds.

    Attributes:
        x: Horizontal pin in [0, 1] (0 = left edge)
        y: Vertical pin in [0, 1] (0 = top edge)
    """

    x: float = DEFAULT_ANCHOR_X
    y: float = DEFAULT_ANCHOR_Y

    def to_dict(self) -> dict[str, float]:
        """Serialize to dictionary for JSON."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Anchor:
        """Deserialize from dictionary."""
        return cls(float(data["x"]), float(data["y"]))


def classify_layer(
    name: str,
    *,
    is_background: bool = False,
    include_background: bool = False,
) -> InclusionMode:
    """
    Resolve the inclusion mode of a layer from its name and flags.

    Args:
        name: Raw layer name
        is_background: Whether the layer is the document background
        include_background: Global switch to pack the background layer

    Returns:
        InclusionMode for the layer

    Example:
        >>> classify_layer(".notes")
        <InclusionMode.COMMENT: 'comment'>
        >>> classify_layer("_hitbox")
        <InclusionMode.METADATA: 'metadata'>
    """
    if name.startswith(COMMENT_MARKER):
        return InclusionMode.COMMENT
    if name.startswith(METADATA_MARKER):
        return InclusionMode.METADATA
    if is_background and not include_background:
        return InclusionMode.METADATA
    return InclusionMode.ATLAS


def parse_part_name(name: str) -> Tuple[str, Anchor]:
    """
    Split a layer name into its base name and anchor.

    A trailing ``.<x>,<y>`` suffix of two numbers sets the anchor. Names
    without a parseable suffix keep their full text and the centered
    default anchor. Anchor values are clamped into [0, 1].

    Args:
        name: Raw layer name, e.g. "continue:active.0.5,0.5"

    Returns:
        Tuple of (base_name, Anchor)

    Example:
        >>> parse_part_name("foo.0.25,0.75")
        ('foo', Anchor(x=0.25, y=0.75))
        >>> parse_part_name("foo.bar")
        ('foo.bar', Anchor(x=0.5, y=0.5))
    """
    match = _NAME_WITH_ANCHOR.match(name)
    if match is None:
        return name, Anchor()

    x = float(match.group("x"))
    y = float(match.group("y"))
    clamped_x = min(1.0, max(0.0, x))
    clamped_y = min(1.0, max(0.0, y))
    if (clamped_x, clamped_y) != (x, y):
        logger.debug(f"Anchor of {name!r} clamped to ({clamped_x}, {clamped_y})")
    return match.group("base"), Anchor(clamped_x, clamped_y)


@dataclass(frozen=True, slots=True)
class AtlasPart:
    """
    One region of the source document (immutable).

    Attributes:
        name: Base name (anchor suffix removed)
        rect: Rectangle in document pixels, already clamped
        anchor: Normalized pin point
        mode: InclusionMode resolved at construction (ATLAS or METADATA)
        source_index: Index of the originating layer in provider order
        is_background: Whether the layer is the document background
        is_visible: Layer visibility in the source document
        placed_origin: Top-left in the atlas, set by the layout driver

    Invariants:
        - name is non-empty
        - rect width/height are non-negative
        - mode is never COMMENT
        - placed_origin is only set on ATLAS parts

    Example:
        >>> part = AtlasPart("btn", PartRect(20, 5, 64, 32), Anchor(), InclusionMode.ATLAS, 0)
        >>> part.placed_at(1, 1).placed_origin
        (1, 1)
    """

    name: str
    rect: PartRect
    anchor: Anchor
    mode: InclusionMode
    source_index: int
    is_background: bool = False
    is_visible: bool = True
    placed_origin: Optional[Tuple[int, int]] = None

    def __post_init__(self) -> None:
        """Validate part on construction."""
        if not self.name:
            raise ValueError("Part name must be non-empty")
        if self.rect.width < 0 or self.rect.height < 0:
            raise ValueError(f"Part {self.name!r} has negative size: {self.rect}")
        if self.mode is InclusionMode.COMMENT:
            raise ValueError(f"Comment layer {self.name!r} cannot become a part")
        if self.placed_origin is not None and self.mode is not InclusionMode.ATLAS:
            raise ValueError(f"Metadata-only part {self.name!r} cannot be placed")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def include_in_atlas(self) -> bool:
        """True if this part is packed and rendered."""
        return self.mode is InclusionMode.ATLAS

    @property
    def is_degenerate(self) -> bool:
        """True if the clamped rectangle has no pixels to place."""
        return self.rect.is_empty

    @property
    def is_placed(self) -> bool:
        """True once the layout driver has assigned a position."""
        return self.placed_origin is not None

    @property
    def width(self) -> int:
        return self.rect.width

    @property
    def height(self) -> int:
        return self.rect.height

    @property
    def placed_rect(self) -> Optional[PartRect]:
        """Rectangle occupied in the atlas, or None if not placed."""
        if self.placed_origin is None:
            return None
        return self.rect.moved_to(*self.placed_origin)

    def placed_at(self, x: int, y: int) -> AtlasPart:
        """
        Return a copy of this part placed at (x, y) in the atlas.

        Raises:
            ValueError: If the part is already placed or not an atlas part
        """
        if self.placed_origin is not None:
            raise ValueError(f"Part {self.name!r} is already placed at {self.placed_origin}")
        return replace(self, placed_origin=(int(x), int(y)))

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON."""
        placed = None
        if self.placed_origin is not None:
            placed = {"x": self.placed_origin[0], "y": self.placed_origin[1]}
        return {
            "name": self.name,
            "layer": self.source_index,
            "mode": self.mode.value,
            **self.rect.to_dict(),
            "anchor": self.anchor.to_dict(),
            "background": self.is_background,
            "visible": self.is_visible,
            "placed": placed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AtlasPart:
        """Deserialize from dictionary."""
        placed = data.get("placed")
        return cls(
            name=data["name"],
            rect=PartRect.from_dict(data),
            anchor=Anchor.from_dict(data["anchor"]),
            mode=InclusionMode(data["mode"]),
            source_index=int(data["layer"]),
            is_background=bool(data.get("background", False)),
            is_visible=bool(data.get("visible", True)),
            placed_origin=(int(placed["x"]), int(placed["y"])) if placed else None,
        )


def build_part(
    name: str,
    bounds: Tuple[int, int, int, int],
    *,
    doc_width: int,
    doc_height: int,
    source_index: int,
    is_background: bool = False,
    is_visible: bool = True,
    include_background: bool = False,
) -> Optional[AtlasPart]:
    """
    Construct an AtlasPart from raw layer data.

    Args:
        name: Raw layer name including any anchor suffix
        bounds: Raw (left, top, right, bottom) edges in document pixels
        doc_width: Document width used for clamping
        doc_height: Document height used for clamping
        source_index: Layer index in provider order
        is_background: Background layer flag
        is_visible: Layer visibility flag
        include_background: Global switch to pack the background layer

    Returns:
        AtlasPart, or None for comment layers and unnamed layers
    """
    if not name:
        logger.warning(f"Skipping unnamed layer at index {source_index}")
        return None

    mode = classify_layer(
        name, is_background=is_background, include_background=include_background
    )
    if mode is InclusionMode.COMMENT:
        logger.debug(f"Skipping comment layer {name!r}")
        return None

    base_name, anchor = parse_part_name(name)
    rect = PartRect.from_edges(*bounds).clamp_to(doc_width, doc_height)

    return AtlasPart(
        name=base_name,
        rect=rect,
        anchor=anchor,
        mode=mode,
        source_index=source_index,
        is_background=is_background,
        is_visible=is_visible,
    )
