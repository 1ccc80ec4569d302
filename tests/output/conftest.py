import pytest

from layer_atlas.core.models import Anchor, AtlasPart, InclusionMode, PartRect
from layer_atlas.layout import AtlasSize, LayoutResult


@pytest.fixture
def layout(document) -> LayoutResult:
    """
    A finalized 64x32 layout:

        0  play      atlas, placed at (1, 1), original top-left (20, 5)
        1  _helper   metadata-only
        2  flat      atlas but empty, never placed
        3  stop      atlas, placed at (33, 1), anchor (0, 1)
    """
    parts = (
        AtlasPart("play", PartRect(20, 5, 30, 20), Anchor(0.5, 0.5), InclusionMode.ATLAS, 0)
        .placed_at(1, 1),
        AtlasPart("_helper", PartRect(0, 0, 10, 10), Anchor(0.0, 0.0), InclusionMode.METADATA, 1),
        AtlasPart("flat", PartRect(40, 40, 0, 8), Anchor(), InclusionMode.ATLAS, 2),
        AtlasPart("stop", PartRect(60, 70, 20, 10), Anchor(0.0, 1.0), InclusionMode.ATLAS, 3)
        .placed_at(33, 1),
    )
    return LayoutResult(document, AtlasSize(64, 32), parts, margin=1, attempts=2)


@pytest.fixture
def empty_layout(document) -> LayoutResult:
    return LayoutResult(document, AtlasSize(1, 1), (), margin=1, attempts=0)
