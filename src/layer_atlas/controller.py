"""
Module: controller

Purpose:
    Orchestrate the complete atlas building pipeline.
    Load → Parts → Layout → Render → Export

Key Functions:
    - build_atlas(): Main entry point for building an atlas

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - sources: Source providers and part construction
    - layout: Layout driver
    - output: Renderer and metadata writer

Used By:
    - layer_atlas.cli: Command line entry point
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .layout import AtlasConfig, AtlasLayoutError, LayoutResult, Packer, build_layout
from .output import atlas_image_path, render_atlas, save_atlas, write_metadata
from .sources import ManifestSourceProvider, SourceError, SourceProvider, build_parts

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        atlas_image: Path to the atlas PNG
        json_path: Path to the structured export (if written)
        xml_path: Path to the markup export (if written)
        layout: Layout the files were produced from
        elapsed: Wall-clock build time in seconds
        warnings: Any warnings during build

    Example:
        >>> result = build_atlas(Path("menu.atlas.json"), Path("out"))
        >>> print(f"{result.layout.placed_count} parts in {result.layout.atlas}")
    """
    atlas_image: Path
    json_path: Optional[Path]
    xml_path: Optional[Path]
    layout: LayoutResult
    elapsed: float
    warnings: tuple[str, ...] = ()


def build_atlas(
    source: Union[SourceProvider, Path],
    output_dir: Path,
    config: Optional[AtlasConfig] = None,
    *,
    packer: Optional[Packer] = None,
) -> BuildResult:
    """
    Build an atlas from start to finish.

    Pipeline:
    1. Open the source document (a manifest path or a provider)
    2. Build parts from its layers
    3. Compute the layout
    4. Render the atlas image
    5. Write the metadata exports

    Args:
        source: SourceProvider, or path to a layer manifest
        output_dir: Directory for the atlas image and metadata
        config: Atlas configuration (defaults to AtlasConfig())
        packer: Packer override (defaults to config.packer)

    Returns:
        BuildResult with paths and layout

    Raises:
        BuildError: If any step fails
    """
    config = config or AtlasConfig()
    warnings: List[str] = []
    start_time = time.perf_counter()

    # 1. Open source
    try:
        provider = source if isinstance(source, SourceProvider) else ManifestSourceProvider(source)
        document, parts = build_parts(provider, config)
    except (SourceError, ValueError) as e:
        raise BuildError(f"Failed to read source: {e}") from e

    logger.info(f"Loaded {len(parts)} parts from {document.name!r} ({document.width}x{document.height})")

    empty = [p.name for p in parts if p.include_in_atlas and p.is_degenerate]
    if empty:
        warnings.append(f"Empty parts not packed: {', '.join(empty)}")

    # 2. Layout
    phase_start = time.perf_counter()
    try:
        layout = build_layout(parts, document, config, packer)
    except AtlasLayoutError as e:
        raise BuildError(f"Layout failed: {e}") from e
    logger.info(
        f"Layout {layout.atlas.width}x{layout.atlas.height} "
        f"({layout.utilization:.0%} used) in {time.perf_counter() - phase_start:.3f}s"
    )

    # 3. Render
    image_path = atlas_image_path(layout, output_dir, config)
    try:
        save_atlas(render_atlas(layout, provider), image_path)
    except SourceError as e:
        raise BuildError(f"Failed to render atlas: {e}") from e
    except OSError as e:
        raise BuildError(f"Failed to write {image_path}: {e}") from e

    # 4. Metadata
    try:
        files = write_metadata(layout, output_dir, config)
    except OSError as e:
        raise BuildError(f"Failed to write metadata: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Atlas build completed in {elapsed:.2f}s")

    return BuildResult(
        atlas_image=image_path,
        json_path=files.json_path,
        xml_path=files.xml_path,
        layout=layout,
        elapsed=elapsed,
        warnings=tuple(warnings),
    )
