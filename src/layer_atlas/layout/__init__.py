"""
Module: layout

Purpose:
    Atlas layout engine.
    Converts a list of parts into a power-of-two atlas layout.

Key Functions:
    - build_layout(): Main entry point for layout
    - next_power_of_two(): Canvas size rounding
    - create_packer(): Build a packer by name

Key Classes:
    - AtlasConfig: Configuration for an atlas build
    - Packer: Packer contract
    - RectpackPacker: Default packer
    - AtlasSize, LayoutResult: Layout output

Dependencies:
    - rectpack: Default packing algorithms
    - layer_atlas.core.models: AtlasPart, DocumentMetadata

Used By:
    - layer_atlas.controller: Build pipeline
    - layer_atlas.output: Exporters and renderer
"""

from .config import AtlasConfig, load_config
from .driver import AtlasLayoutError, build_layout, next_power_of_two
from .models import AtlasSize, LayoutResult
from .packer import PACKER_ALGORITHMS, Packer, RectpackPacker, create_packer

__all__ = [
    # Config
    "AtlasConfig",
    "load_config",
    # Models
    "AtlasSize",
    "LayoutResult",
    # Packer
    "PACKER_ALGORITHMS",
    "Packer",
    "RectpackPacker",
    "create_packer",
    # Driver
    "AtlasLayoutError",
    "build_layout",
    "next_power_of_two",
]
