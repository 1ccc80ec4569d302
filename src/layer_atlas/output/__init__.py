"""
Module: output

Purpose:
    Output generation for atlas builds.
    Atlas image rendering and metadata exports.

Key Functions:
    - render_atlas(): Composite packed parts with Pillow
    - serialize_layout() / layout_to_json(): Structured export
    - layout_to_xml(): Starling TextureAtlas markup export
    - write_metadata(): Write the enabled exports to disk
"""

from .json_export import deserialize_layout, layout_to_json, serialize_layout
from .renderer import render_atlas, save_atlas
from .writer import (
    MetadataFiles,
    atlas_image_name,
    atlas_image_path,
    load_layout_json,
    write_metadata,
)
from .xml_export import build_texture_atlas, layout_to_xml

__all__ = [
    "deserialize_layout",
    "layout_to_json",
    "serialize_layout",
    "render_atlas",
    "save_atlas",
    "MetadataFiles",
    "atlas_image_name",
    "atlas_image_path",
    "load_layout_json",
    "write_metadata",
    "build_texture_atlas",
    "layout_to_xml",
]
