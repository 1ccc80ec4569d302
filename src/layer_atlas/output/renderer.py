"""
Module: output.renderer

Purpose:
    Render a LayoutResult to an atlas image using Pillow.
    Every packed part's document rectangle is copied from its layer
    and pasted at its atlas placement on a transparent canvas.

Key Functions:
    - render_atlas(): LayoutResult + SourceProvider -> PIL image
    - save_atlas(): Write the atlas PNG

Dependencies:
    - PIL: Image compositing
    - sources.provider: Layer pixel access

Used By:
    - controller: Build pipeline
"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from layer_atlas.layout.models import LayoutResult
from layer_atlas.sources.provider import SourceProvider

logger = logging.getLogger(__name__)


def render_atlas(layout: LayoutResult, provider: SourceProvider) -> Image.Image:
    """
    Composite all packed parts into an atlas image.

    Args:
        layout: Finalized layout
        provider: Source document the layout was built from

    Returns:
        RGBA image of the atlas size

    Raises:
        SourceError: If a layer cannot be read

    Example:
        >>> atlas = render_atlas(layout, provider)
        >>> atlas.size
        (256, 128)
    """
    atlas = Image.new("RGBA", (layout.atlas.width, layout.atlas.height), (0, 0, 0, 0))

    for part in layout.iter_placed():
        region = provider.crop_region(part.source_index, part.rect)
        if region.mode != "RGBA":
            region = region.convert("RGBA")
        atlas.paste(region, part.placed_origin)
        logger.debug(f"Rendered {part.name!r} at {part.placed_origin}")

    if layout.is_empty:
        logger.warning("Empty layout, rendering a blank atlas")
    return atlas


def save_atlas(image: Image.Image, output_path: Path) -> Path:
    """
    Write an atlas image as PNG.

    Args:
        image: Atlas image
        output_path: Destination path (parent is created if missing)

    Returns:
        The written path
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_path, format="PNG")
    logger.info(f"Saved atlas {image.width}x{image.height} to {output_path}")
    return output_path
