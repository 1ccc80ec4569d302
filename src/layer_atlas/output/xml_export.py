"""
Module: output.xml_export

Purpose:
    Markup export of a LayoutResult in the Starling/Sparrow TextureAtlas
    format:

        <TextureAtlas imagePath="menu.png">
            <SubTexture name="play" x="1" y="1" width="64" height="32"
                        pivotX="-20" pivotY="-5" layer="3" />
        </TextureAtlas>

    pivotX/pivotY are the negated original top-left of the part, i.e. the
    offset from the part back to the document origin. The normalized anchor
    is not part of this format.

Key Functions:
    - build_texture_atlas(): LayoutResult -> ElementTree element
    - layout_to_xml(): LayoutResult -> markup text

Dependencies:
    - xml.etree.ElementTree (std)

Used By:
    - output.writer: Writes <document><metadata_suffix>.xml
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from layer_atlas.layout.models import LayoutResult

INDENT = "    "


def build_texture_atlas(result: LayoutResult, image_path: str) -> ET.Element:
    """
    Build the TextureAtlas element for a layout.

    One SubTexture per packed part, in source order. Metadata-only and
    empty parts are skipped.

    Args:
        result: Finalized layout
        image_path: Atlas image file name, e.g. "menu.png"

    Returns:
        Root TextureAtlas element
    """
    root = ET.Element("TextureAtlas", {"imagePath": image_path})
    for part in result.iter_placed():
        x, y = part.placed_origin
        ET.SubElement(root, "SubTexture", {
            "name": part.name,
            "x": str(x),
            "y": str(y),
            "width": str(part.width),
            "height": str(part.height),
            "pivotX": str(-part.rect.left),
            "pivotY": str(-part.rect.top),
            "layer": str(part.source_index),
        })
    return root


def layout_to_xml(result: LayoutResult, image_path: str) -> str:
    """
    Render the markup export as text.

    Example:
        >>> print(layout_to_xml(result, "menu.png"))
        <TextureAtlas imagePath="menu.png">
            <SubTexture name="play" x="1" y="1" ... />
        </TextureAtlas>
    """
    root = build_texture_atlas(result, image_path)
    ET.indent(root, space=INDENT)
    return ET.tostring(root, encoding="unicode") + "\n"
