"""
Module: sources.provider

Purpose:
    Abstract interface for layered source documents, and the standard
    manifest-based implementation. Providers expose document metadata,
    the ordered list of raw layer regions, and pixel access for rendering.

Key Classes:
    - SourceProvider: Abstract base class for document access
    - ManifestSourceProvider: JSON manifest + one PNG per layer
    - RawRegion: One layer as reported by a provider
    - SourceError: Exception for unreadable sources

Key Functions:
    - build_parts(): Turn a provider's layers into AtlasParts

Dependencies:
    - PIL: Layer images and alpha bounds
    - json (std)
    - core.models: DocumentMetadata, AtlasPart, build_part

Used By:
    - controller: Build pipeline
    - output.renderer: Pixel access
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from PIL import Image

from layer_atlas.core.models import AtlasPart, DocumentMetadata, PartRect, build_part
from layer_atlas.layout.config import AtlasConfig

logger = logging.getLogger(__name__)


class SourceError(Exception):
    """Source document or layer could not be read."""
    pass


def _is_int_list(value: Any, length: int) -> bool:
    return (
        isinstance(value, list)
        and len(value) == length
        and all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    )


@dataclass(frozen=True)
class RawRegion:
    """
    One layer as reported by a source provider.

    Attributes:
        name: Raw layer name (may carry markers and an anchor suffix)
        bounds: (left, top, right, bottom) in document pixels, possibly
            extending past the document
        is_background: Background layer flag
        is_visible: Visibility in the source document
    """

    name: str
    bounds: Tuple[int, int, int, int]
    is_background: bool = False
    is_visible: bool = True


class SourceProvider(ABC):
    """
    Abstract interface for a layered source document.

    Region indices are the positions in ``regions()`` and are used as
    the parts' source_index.
    """

    @abstractmethod
    def document(self) -> DocumentMetadata:
        """Return the document description."""

    @abstractmethod
    def regions(self) -> List[RawRegion]:
        """Return all layers in document order."""

    @abstractmethod
    def crop_region(self, index: int, rect: PartRect) -> Image.Image:
        """
        Copy a document-space rectangle out of one layer.

        Args:
            index: Layer index in regions() order
            rect: Rectangle in document pixels

        Returns:
            RGBA image of rect's size

        Raises:
            SourceError: If the layer cannot be read
        """


class ManifestSourceProvider(SourceProvider):
    """
    Provider reading a JSON manifest that lists one image per layer.

    Manifest format:
        {
          "document": {"name": "menu", "width": 1024, "height": 768,
                       "resolution": 72},
          "layers": [
            {"name": "play.0.5,1", "image": "layers/play.png",
             "offset": [0, 0], "bounds": [l, t, r, b],
             "background": false, "visible": true}
          ]
        }

    Image paths are relative to the manifest. "offset" is where the
    layer image's top-left sits in the document (default [0, 0]). When
    "bounds" is omitted it is computed from the non-transparent pixels
    of the layer image.

    Example:
        >>> provider = ManifestSourceProvider(Path("menu.atlas.json"))
        >>> provider.document().name
        'menu'
    """

    def __init__(self, manifest_path: Path) -> None:
        self._manifest_path = Path(manifest_path)
        self._root = self._manifest_path.parent
        self._data = self._read_manifest()
        self._layers: List[Dict[str, Any]] = self._data["layers"]
        self._images: Dict[int, Image.Image] = {}
        self._regions: Optional[List[RawRegion]] = None

    def _read_manifest(self) -> Dict[str, Any]:
        try:
            data = json.loads(self._manifest_path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise SourceError(f"Manifest not found: {self._manifest_path}") from e
        except json.JSONDecodeError as e:
            raise SourceError(f"Manifest {self._manifest_path} is not valid JSON: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("document"), dict):
            raise SourceError(f"Manifest {self._manifest_path} has no document section")
        if not isinstance(data.get("layers", []), list):
            raise SourceError(f"Manifest {self._manifest_path}: layers must be a list")
        data.setdefault("layers", [])
        for index, layer in enumerate(data["layers"]):
            self._check_layer(index, layer)
        return data

    def _check_layer(self, index: int, layer: Any) -> None:
        """Raise SourceError for a layer entry that cannot be read."""
        where = f"Manifest {self._manifest_path}: layer {index}"
        if not isinstance(layer, dict):
            raise SourceError(f"{where} must be an object, got {type(layer).__name__}")
        if "offset" in layer and not _is_int_list(layer["offset"], 2):
            raise SourceError(f"{where}: offset must be [x, y] integers")
        bounds = layer.get("bounds")
        if bounds is not None and not _is_int_list(bounds, 4):
            raise SourceError(f"{where}: bounds must be [left, top, right, bottom] integers")
        if "image" in layer and not isinstance(layer["image"], str):
            raise SourceError(f"{where}: image must be a path string")

    def document(self) -> DocumentMetadata:
        doc = self._data["document"]
        try:
            width = int(doc["width"])
            height = int(doc["height"])
        except (KeyError, TypeError, ValueError) as e:
            raise SourceError(f"Manifest document needs integer width and height: {e}") from e

        # "menu.atlas.json" -> "menu"
        name = doc.get("name") or self._manifest_path.name.split(".")[0]
        return DocumentMetadata(
            name=name,
            width=width,
            height=height,
            resolution=float(doc.get("resolution", 72.0)),
            path=doc.get("path", self._root.as_posix()),
        )

    def regions(self) -> List[RawRegion]:
        if self._regions is None:
            self._regions = [
                self._region_for(index, layer) for index, layer in enumerate(self._layers)
            ]
        return self._regions

    def crop_region(self, index: int, rect: PartRect) -> Image.Image:
        offset_x, offset_y = self._offset(index)
        image = self._image(index)
        local = rect.moved_to(rect.left - offset_x, rect.top - offset_y)
        # PIL pads out-of-range areas with transparent pixels
        return image.crop(local.as_box())

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _region_for(self, index: int, layer: Dict[str, Any]) -> RawRegion:
        name = str(layer.get("name", ""))
        bounds = layer.get("bounds")
        if bounds is None:
            bounds = self._alpha_bounds(index)

        return RawRegion(
            name=name,
            bounds=tuple(int(v) for v in bounds),
            is_background=bool(layer.get("background", False)),
            is_visible=bool(layer.get("visible", True)),
        )

    def _offset(self, index: int) -> Tuple[int, int]:
        offset = self._layers[index].get("offset", (0, 0))
        return int(offset[0]), int(offset[1])

    def _alpha_bounds(self, index: int) -> Tuple[int, int, int, int]:
        """Document-space bounds of the layer's non-transparent pixels."""
        offset_x, offset_y = self._offset(index)
        bbox = self._image(index).getchannel("A").getbbox()
        if bbox is None:
            logger.debug(f"Layer {index} is fully transparent")
            return (offset_x, offset_y, offset_x, offset_y)
        left, top, right, bottom = bbox
        return (left + offset_x, top + offset_y, right + offset_x, bottom + offset_y)

    def _image(self, index: int) -> Image.Image:
        if index not in self._images:
            layer = self._layers[index]
            if "image" not in layer:
                raise SourceError(f"Layer {layer.get('name', index)!r} has no image")
            path = self._root / layer["image"]
            try:
                with Image.open(path) as img:
                    self._images[index] = img.convert("RGBA")
            except (FileNotFoundError, OSError) as e:
                raise SourceError(f"Could not read layer image {path}: {e}") from e
        return self._images[index]


def build_parts(
    provider: SourceProvider,
    config: Optional[AtlasConfig] = None,
) -> Tuple[DocumentMetadata, List[AtlasPart]]:
    """
    Build the part list for a source document.

    Comment layers are dropped; every other layer becomes a part whose
    source_index is its position in provider.regions().

    Args:
        provider: Source document
        config: Atlas configuration (include_background is read)

    Returns:
        Tuple of (DocumentMetadata, parts in layer order)
    """
    config = config or AtlasConfig()
    document = provider.document()

    parts: List[AtlasPart] = []
    for index, region in enumerate(provider.regions()):
        part = build_part(
            region.name,
            region.bounds,
            doc_width=document.width,
            doc_height=document.height,
            source_index=index,
            is_background=region.is_background,
            is_visible=region.is_visible,
            include_background=config.include_background,
        )
        if part is not None:
            parts.append(part)

    logger.info(f"Read {len(parts)} parts from {document.name!r}")
    return document, parts
