"""
Unit tests for PartRect.
"""

import pytest

from layer_atlas.core.models import PartRect


class TestFromEdges:
    """Tests for PartRect.from_edges()."""

    def test_from_edges_when_well_formed_then_width_is_difference(self):
        """Width and height should be far edge minus near edge."""
        rect = PartRect.from_edges(10, 20, 50, 35)

        assert rect == PartRect(10, 20, 40, 15)
        assert rect.right == 50
        assert rect.bottom == 35

    def test_from_edges_when_inverted_then_negative_size_kept_until_clamped(self):
        """Inverted edges give a negative size that clamping floors to 0."""
        rect = PartRect.from_edges(50, 50, 40, 40)

        assert rect.width == -10
        assert rect.clamp_to(100, 100).width == 0
        assert rect.clamp_to(100, 100).height == 0


class TestClampTo:
    """Tests for clamping rectangles to the document."""

    def test_clamp_when_left_overhangs_then_width_reduced(self):
        """
        left=-10, right=50 in a 100x100 document -> left=0, width=50.

        The raw width is 60 and the 10px overhang is removed from it.
        """
        # Arrange
        rect = PartRect.from_edges(-10, 0, 50, 40)

        # Act
        clamped = rect.clamp_to(100, 100)

        # Assert
        assert clamped == PartRect(0, 0, 50, 40)

    def test_clamp_when_top_overhangs_then_height_reduced(self):
        """Negative top should shift the same way on the vertical axis."""
        clamped = PartRect.from_edges(5, -15, 25, 30).clamp_to(100, 100)

        assert clamped == PartRect(5, 0, 20, 30)

    def test_clamp_when_right_edge_past_document_then_pulled_back(self):
        """Right edge should end at the document width."""
        clamped = PartRect.from_edges(80, 0, 130, 10).clamp_to(100, 100)

        assert clamped == PartRect(80, 0, 20, 10)

    def test_clamp_when_bottom_edge_past_document_then_measured_from_top(self):
        """
        Bottom overhang compares top + height against the document height.

        A 30px tall part at top=60 in a 100px document fits (60 + 30 <= 100)
        and must not shrink, even though height + height < 100 as well.
        A 50px tall part at top=60 overhangs by 10 and shrinks to 40.
        """
        fits = PartRect(0, 60, 10, 30).clamp_to(100, 100)
        overhangs = PartRect(0, 60, 10, 50).clamp_to(100, 100)

        assert fits.height == 30
        assert overhangs.height == 40
        assert overhangs.bottom == 100

    def test_clamp_when_entirely_outside_then_empty(self):
        """A layer completely off-canvas should clamp to zero size."""
        clamped = PartRect.from_edges(-50, 10, -20, 20).clamp_to(100, 100)

        assert clamped.width == 0
        assert clamped.is_empty

    def test_clamp_when_inside_then_unchanged(self):
        rect = PartRect(10, 10, 20, 20)

        assert rect.clamp_to(100, 100) == rect


class TestQueries:
    """Tests for overlap and containment queries."""

    def test_overlaps_when_touching_then_false(self):
        """Adjacent rectangles share an edge but no pixels."""
        a = PartRect(0, 0, 10, 10)
        b = PartRect(10, 0, 10, 10)

        assert not a.overlaps(b)
        assert not b.overlaps(a)

    def test_overlaps_when_sharing_pixels_then_true(self):
        a = PartRect(0, 0, 10, 10)
        b = PartRect(9, 9, 10, 10)

        assert a.overlaps(b)

    def test_expanded_when_margin_then_grows_on_every_side(self):
        assert PartRect(5, 5, 10, 4).expanded(2) == PartRect(3, 3, 14, 8)

    def test_as_box_when_called_then_edges_returned(self):
        assert PartRect(5, 6, 10, 4).as_box() == (5, 6, 15, 10)

    def test_area_when_empty_then_zero(self):
        assert PartRect(0, 0, 0, 10).area == 0
        assert PartRect(0, 0, 3, 10).area == 30

    def test_roundtrip_dict(self):
        rect = PartRect(1, 2, 3, 4)

        assert PartRect.from_dict(rect.to_dict()) == rect

    def test_from_dict_when_field_missing_then_raises(self):
        with pytest.raises(KeyError):
            PartRect.from_dict({"left": 0, "top": 0, "width": 1})
