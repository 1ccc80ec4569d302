"""
Module: output.writer

Purpose:
    File output for atlas metadata. The exporters are pure; this module
    owns file naming and all reads/writes.

        <document><atlas_suffix>.png      atlas image (see renderer)
        <document><metadata_suffix>.json  structured export
        <document><metadata_suffix>.xml   markup export

Key Functions:
    - atlas_image_path(): Output path of the atlas PNG
    - write_metadata(): Write the enabled metadata exports
    - load_layout_json(): Read a saved structured export back

Dependencies:
    - output.json_export, output.xml_export
    - layout.config: AtlasConfig

Used By:
    - controller: Build pipeline
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from layer_atlas.layout.config import AtlasConfig
from layer_atlas.layout.models import LayoutResult

from .json_export import deserialize_layout, layout_to_json
from .xml_export import layout_to_xml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetadataFiles:
    """Paths of the metadata files written for one layout."""
    json_path: Optional[Path] = None
    xml_path: Optional[Path] = None


def atlas_image_name(document_name: str, config: AtlasConfig) -> str:
    """Atlas image file name, e.g. "menu@2x.png"."""
    return f"{config.atlas_name(document_name)}.png"


def atlas_image_path(layout: LayoutResult, output_dir: Path, config: AtlasConfig) -> Path:
    """Path of the atlas image for a layout."""
    return output_dir / atlas_image_name(layout.document.name, config)


def write_metadata(
    layout: LayoutResult,
    output_dir: Path,
    config: AtlasConfig,
) -> MetadataFiles:
    """
    Write the structured and markup exports enabled in config.

    Args:
        layout: Finalized layout
        output_dir: Destination directory (created if missing)
        config: Atlas configuration (suffixes and export switches)

    Returns:
        MetadataFiles with the paths that were written

    Raises:
        OSError: If a file cannot be written
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    base = config.metadata_name(layout.document.name)

    json_path = None
    if config.write_json:
        json_path = output_dir / f"{base}.json"
        json_path.write_text(layout_to_json(layout), encoding="utf-8")
        logger.info(f"Wrote {json_path}")

    xml_path = None
    if config.write_xml:
        xml_path = output_dir / f"{base}.xml"
        image_name = atlas_image_name(layout.document.name, config)
        xml_path.write_text(layout_to_xml(layout, image_name), encoding="utf-8")
        logger.info(f"Wrote {xml_path}")

    return MetadataFiles(json_path=json_path, xml_path=xml_path)


def load_layout_json(path: Path, *, validate: bool = True) -> LayoutResult:
    """
    Load a structured export written by write_metadata.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If validate=True and the content is invalid
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return deserialize_layout(data, validate=validate)
