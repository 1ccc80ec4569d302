"""
Module: layout.driver

Purpose:
    Atlas layout driver. Decides the atlas canvas size and assigns every
    packable part a non-overlapping position inside it.

    Strategy:
    1. Sort packable parts widest first (stable).
    2. Start from the smallest power-of-two canvas that holds the largest
       padded part on each axis.
    3. Pack every part from scratch. If any part does not fit, discard the
       whole attempt, double the smaller canvas side (width on ties) and
       try again.

Key Functions:
    - build_layout(): Main entry point
    - next_power_of_two(): Canvas size rounding

Key Classes:
    - AtlasLayoutError: Raised when the atlas would exceed its size cap

Dependencies:
    - layout.packer: Packer contract
    - layout.config: AtlasConfig
    - core.models: AtlasPart, DocumentMetadata

Used By:
    - controller: Build pipeline
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from layer_atlas.core.models import AtlasPart, DocumentMetadata

from .config import AtlasConfig
from .models import AtlasSize, LayoutResult
from .packer import Packer, create_packer

logger = logging.getLogger(__name__)


class AtlasLayoutError(Exception):
    """Parts could not be packed within the configured atlas size."""

    def __init__(
        self,
        message: str,
        parts: Sequence[str] = (),
        atlas_size: Optional[AtlasSize] = None,
    ):
        super().__init__(message)
        self.parts = tuple(parts)
        self.atlas_size = atlas_size


def next_power_of_two(value: int) -> int:
    """
    Smallest power of two >= value (1 for anything <= 1).

    Example:
        >>> next_power_of_two(100)
        128
        >>> next_power_of_two(64)
        64
    """
    if value <= 1:
        return 1
    return 1 << (int(value) - 1).bit_length()


def _grow(width: int, height: int) -> Tuple[int, int]:
    """Double the smaller side, or the width when both are equal."""
    if height < width:
        return width, height * 2
    return width * 2, height


def _attempt_pack(
    packer: Packer,
    width: int,
    height: int,
    boxes: Sequence[Tuple[int, int]],
) -> Tuple[Optional[List[Tuple[int, int]]], int]:
    """
    Pack all boxes onto a fresh width x height canvas.

    Returns:
        (positions, -1) on success, or (None, index of the first box that
        did not fit) on failure
    """
    packer.reset(width, height)
    positions: List[Tuple[int, int]] = []
    for index, (box_w, box_h) in enumerate(boxes):
        position = packer.try_place(box_w, box_h)
        if position is None:
            return None, index
        positions.append(position)
    return positions, -1


def build_layout(
    parts: Iterable[AtlasPart],
    document: DocumentMetadata,
    config: Optional[AtlasConfig] = None,
    packer: Optional[Packer] = None,
) -> LayoutResult:
    """
    Compute the atlas layout for a list of parts.

    Only atlas parts with a non-empty rectangle are packed. Metadata-only
    and degenerate parts are carried through unchanged so exporters still
    see them.

    Args:
        parts: Parts in source order (none may be placed yet)
        document: Source document metadata
        config: Atlas configuration (defaults to AtlasConfig())
        packer: Packer to use (defaults to the configured rectpack algorithm)

    Returns:
        LayoutResult with power-of-two atlas size and placed parts

    Raises:
        ValueError: If a part is already placed or layer indices repeat
        AtlasLayoutError: If the parts cannot fit within config.max_atlas_size

    Example:
        >>> result = build_layout(parts, document, AtlasConfig(safety_margin=1))
        >>> result.atlas
        AtlasSize(width=256, height=128)
    """
    config = config or AtlasConfig()
    packer = packer or create_packer(config.packer)
    margin = config.safety_margin
    limit = config.max_atlas_size
    parts = tuple(parts)

    _check_inputs(parts)

    placement_set = []
    for index, part in enumerate(parts):
        if not part.include_in_atlas:
            continue
        if part.is_degenerate:
            logger.debug(f"Skipping empty part {part.name!r} ({part.width}x{part.height})")
            continue
        placement_set.append(index)

    if not placement_set:
        logger.info("No parts to pack, using a 1x1 atlas")
        return LayoutResult(document, AtlasSize(1, 1), parts, margin=margin, attempts=0)

    # sorted() is stable, so equal widths keep source order
    order = sorted(placement_set, key=lambda i: -parts[i].width)
    boxes = [(parts[i].width + 2 * margin, parts[i].height + 2 * margin) for i in order]

    oversized = [
        parts[i].name for i, (box_w, box_h) in zip(order, boxes)
        if box_w > limit or box_h > limit
    ]
    if oversized:
        raise AtlasLayoutError(
            f"Parts larger than the {limit}px atlas limit: {', '.join(oversized)}",
            parts=oversized,
        )

    width = next_power_of_two(max(box_w for box_w, _ in boxes))
    height = next_power_of_two(max(box_h for _, box_h in boxes))

    attempts = 0
    while True:
        attempts += 1
        positions, failed = _attempt_pack(packer, width, height, boxes)
        if positions is not None:
            break

        failed_part = parts[order[failed]]
        logger.debug(
            f"Attempt {attempts}: {failed_part.name!r} does not fit in {width}x{height}"
        )
        width, height = _grow(width, height)
        if width > limit or height > limit:
            raise AtlasLayoutError(
                f"Atlas would exceed {limit}x{limit} after {attempts} attempts; "
                f"{failed_part.name!r} did not fit",
                parts=(failed_part.name,),
                atlas_size=AtlasSize(width, height),
            )

    placed = list(parts)
    for index, (x, y) in zip(order, positions):
        placed[index] = parts[index].placed_at(x + margin, y + margin)

    logger.info(
        f"Packed {len(order)} parts into {width}x{height} "
        f"after {attempts} attempt{'s' if attempts != 1 else ''}"
    )
    return LayoutResult(
        document=document,
        atlas=AtlasSize(width, height),
        parts=tuple(placed),
        margin=margin,
        attempts=attempts,
    )


def _check_inputs(parts: Sequence[AtlasPart]) -> None:
    """Reject already-placed parts and repeated layer indices."""
    seen = set()
    for part in parts:
        if part.is_placed:
            raise ValueError(f"Part {part.name!r} is already placed")
        if part.source_index in seen:
            raise ValueError(f"Duplicate layer index {part.source_index} ({part.name!r})")
        seen.add(part.source_index)
