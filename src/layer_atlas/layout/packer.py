"""
Module: layout.packer

Purpose:
    Rectangle packer contract used by the layout driver, plus the default
    adapter backed by the rectpack library. The driver only relies on the
    contract: reset to a canvas size, then ask for free positions one box
    at a time until a box does not fit.

Key Classes:
    - Packer: Abstract packer contract
    - RectpackPacker: rectpack-backed implementation

Key Functions:
    - create_packer(): Build a packer from its configured name

Dependencies:
    - rectpack: MaxRects / Skyline / Guillotine algorithms

Used By:
    - layout.driver: Repeated packing attempts
    - layout.config: Validates packer names
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from rectpack import guillotine, maxrects, skyline


PACKER_ALGORITHMS = {
    "maxrects-bl": maxrects.MaxRectsBl,
    "maxrects-bssf": maxrects.MaxRectsBssf,
    "maxrects-baf": maxrects.MaxRectsBaf,
    "maxrects-blsf": maxrects.MaxRectsBlsf,
    "skyline-bl": skyline.SkylineBl,
    "skyline-blwm": skyline.SkylineBlWm,
    "skyline-mwf": skyline.SkylineMwf,
    "skyline-mwfl": skyline.SkylineMwfl,
    "guillotine-bssf-sas": guillotine.GuillotineBssfSas,
    "guillotine-baf-sas": guillotine.GuillotineBafSas,
}
DEFAULT_PACKER = "maxrects-bl"


class Packer(ABC):
    """
    Contract for a single-canvas rectangle packer.

    After ``reset(width, height)`` every accepted box lies inside
    [0, width) x [0, height) and does not overlap any other box accepted
    since that reset. No state survives a reset.
    """

    @abstractmethod
    def reset(self, width: int, height: int) -> None:
        """
        Forget all placements and start over on a width x height canvas.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
        """

    @abstractmethod
    def try_place(self, box_width: int, box_height: int) -> Optional[Tuple[int, int]]:
        """
        Find a free position for a box.

        Args:
            box_width: Box width in pixels
            box_height: Box height in pixels

        Returns:
            Top-left (x, y) of the accepted box, or None if it does not fit
        """


class RectpackPacker(Packer):
    """
    Packer backed by one rectpack online packing algorithm.

    A fresh algorithm instance is created on every reset, with rotation
    disabled so parts keep their orientation in the atlas.

    Example:
        >>> packer = RectpackPacker("skyline-bl")
        >>> packer.reset(64, 64)
        >>> packer.try_place(32, 32)
        (0, 0)
    """

    def __init__(self, algorithm: str = DEFAULT_PACKER) -> None:
        if algorithm not in PACKER_ALGORITHMS:
            raise ValueError(
                f"Unknown packer {algorithm!r} (choose from {sorted(PACKER_ALGORITHMS)})"
            )
        self.algorithm = algorithm
        self._bin = None

    def reset(self, width: int, height: int) -> None:
        self._bin = PACKER_ALGORITHMS[self.algorithm](width, height, rot=False)

    def try_place(self, box_width: int, box_height: int) -> Optional[Tuple[int, int]]:
        if self._bin is None:
            raise RuntimeError("Packer used before reset()")
        rect = self._bin.add_rect(box_width, box_height)
        if rect is None:
            return None
        return (rect.x, rect.y)

    def __repr__(self) -> str:
        return f"RectpackPacker({self.algorithm!r})"


def create_packer(name: str = DEFAULT_PACKER) -> Packer:
    """
    Build a packer by its configured name.

    Raises:
        ValueError: If the name is not a known algorithm
    """
    return RectpackPacker(name)
