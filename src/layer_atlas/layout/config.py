"""
Module: layout.config

Purpose:
    Configuration for an atlas build. One explicit, immutable value is
    passed to the layout driver, renderer and writer instead of
    process-wide settings.

Key Classes:
    - AtlasConfig: Immutable atlas configuration

Key Functions:
    - load_config(): Read an AtlasConfig from a JSON file

Dependencies:
    - dataclasses (std)
    - json (std)
    - layout.packer: Packer name registry

Used By:
    - layout.driver: Margin, packer choice, size cap
    - output.writer: Output suffixes
    - cli: Built from command line flags
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .packer import DEFAULT_PACKER, PACKER_ALGORITHMS

logger = logging.getLogger(__name__)


# Largest texture side accepted by common GPUs
DEFAULT_MAX_ATLAS_SIZE = 16384
DEFAULT_SAFETY_MARGIN = 1


@dataclass(frozen=True)
class AtlasConfig:
    """
    Configuration for building an atlas (immutable).

    Attributes:
        atlas_suffix: Appended to the document name for the atlas image
        metadata_suffix: Appended to the document name for .json/.xml files
        safety_margin: Empty pixels guaranteed around every packed part
        include_background: Pack the background layer instead of treating
            it as metadata-only
        packer: Name of the packing algorithm (see PACKER_ALGORITHMS)
        max_atlas_size: Largest allowed atlas side in pixels
        write_json: Write the structured-data export
        write_xml: Write the markup export

    Example:
        >>> config = AtlasConfig(atlas_suffix="@2x", safety_margin=2)
        >>> config.atlas_name("menu")
        'menu@2x'
    """

    # Output naming
    atlas_suffix: str = ""
    metadata_suffix: str = ""

    # Layout
    safety_margin: int = DEFAULT_SAFETY_MARGIN
    include_background: bool = False
    packer: str = DEFAULT_PACKER
    max_atlas_size: int = DEFAULT_MAX_ATLAS_SIZE

    # Exports
    write_json: bool = True
    write_xml: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        for name in ("safety_margin", "max_atlas_size"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer: {value!r}")
        for name in ("atlas_suffix", "metadata_suffix", "packer"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string: {getattr(self, name)!r}")
        if self.safety_margin < 0:
            raise ValueError(f"safety_margin must be non-negative: {self.safety_margin}")
        if self.max_atlas_size <= 0:
            raise ValueError(f"max_atlas_size must be positive: {self.max_atlas_size}")
        if self.packer not in PACKER_ALGORITHMS:
            raise ValueError(
                f"Unknown packer {self.packer!r} (choose from {sorted(PACKER_ALGORITHMS)})"
            )

    def atlas_name(self, document_name: str) -> str:
        """Base file name (no extension) of the atlas image."""
        return f"{document_name}{self.atlas_suffix}"

    def metadata_name(self, document_name: str) -> str:
        """Base file name (no extension) of the metadata exports."""
        return f"{document_name}{self.metadata_suffix}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AtlasConfig:
        """
        Build a config from a dictionary, ignoring unknown keys.

        Raises:
            ValueError: If a known value is invalid
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {unknown}")
        return cls(**{key: value for key, value in data.items() if key in known})


def load_config(path: Path) -> AtlasConfig:
    """
    Load an AtlasConfig from a JSON file.

    Args:
        path: Path to a JSON object with AtlasConfig field names

    Returns:
        AtlasConfig instance

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON object or a value is invalid
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")

    return AtlasConfig.from_dict(data)
