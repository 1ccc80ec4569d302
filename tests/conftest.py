import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pytest
from PIL import Image

# Add src to sys.path so we can import layer_atlas
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from layer_atlas.core.models import (  # noqa: E402
    Anchor,
    AtlasPart,
    DocumentMetadata,
    InclusionMode,
    PartRect,
)
from layer_atlas.layout.packer import Packer  # noqa: E402


class ShelfPacker(Packer):
    """Left-to-right, top-to-bottom shelf packer with call recording."""

    def __init__(self) -> None:
        self.resets: List[Tuple[int, int]] = []
        self.requests: List[Tuple[int, int]] = []
        self._size = None

    def reset(self, width: int, height: int) -> None:
        self.resets.append((width, height))
        self._size = (width, height)
        self._x = 0
        self._y = 0
        self._row = 0

    def try_place(self, box_width: int, box_height: int) -> Optional[Tuple[int, int]]:
        self.requests.append((box_width, box_height))
        width, height = self._size
        if self._x + box_width > width:
            self._x = 0
            self._y += self._row
            self._row = 0
        if self._x + box_width > width or self._y + box_height > height:
            return None
        position = (self._x, self._y)
        self._x += box_width
        self._row = max(self._row, box_height)
        return position


@pytest.fixture
def shelf_packer() -> ShelfPacker:
    """Deterministic shelf packer that records resets and requests."""
    return ShelfPacker()


@pytest.fixture
def document() -> DocumentMetadata:
    """A 100x100 source document."""
    return DocumentMetadata(name="menu", width=100, height=100, resolution=72.0, path="/art")


@pytest.fixture
def make_part():
    """Factory for AtlasParts with sensible defaults."""
    def _create(
        name: str,
        width: int,
        height: int,
        index: int,
        *,
        left: int = 0,
        top: int = 0,
        mode: InclusionMode = InclusionMode.ATLAS,
        anchor: Anchor = Anchor(),
    ) -> AtlasPart:
        return AtlasPart(
            name=name,
            rect=PartRect(left, top, width, height),
            anchor=anchor,
            mode=mode,
            source_index=index,
        )
    return _create


@pytest.fixture
def layered_manifest(tmp_path: Path) -> Path:
    """
    A 100x80 document with four layers written to tmp_path:

        0  "background"   full-size white background layer
        1  "red.0,1"      red 20x10 block at (10, 5)
        2  "_hitbox"      blue 30x30 block at (50, 40), metadata-only
        3  ".notes"       comment layer
    """
    size = (100, 80)

    background = Image.new("RGBA", size, (255, 255, 255, 255))
    background.save(tmp_path / "background.png")

    red = Image.new("RGBA", size, (0, 0, 0, 0))
    red.paste((255, 0, 0, 255), (10, 5, 30, 15))
    red.save(tmp_path / "red.png")

    blue = Image.new("RGBA", size, (0, 0, 0, 0))
    blue.paste((0, 0, 255, 255), (50, 40, 80, 70))
    blue.save(tmp_path / "blue.png")

    manifest = {
        "document": {"name": "menu", "width": size[0], "height": size[1], "resolution": 144},
        "layers": [
            {"name": "background", "image": "background.png", "background": True},
            {"name": "red.0,1", "image": "red.png"},
            {"name": "_hitbox", "image": "blue.png"},
            {"name": ".notes", "image": "blue.png", "visible": False},
        ],
    }
    path = tmp_path / "menu.atlas.json"
    path.write_text(json.dumps(manifest), encoding="utf-8")
    return path
