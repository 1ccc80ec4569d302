"""
Command line entry point for building an atlas from a layer manifest.

    layer-atlas menu.atlas.json -o build/ --margin 2 --atlas-suffix @atlas
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .controller import BuildError, build_atlas
from .layout import PACKER_ALGORITHMS, AtlasConfig, load_config

logger = logging.getLogger("layer_atlas")

# Flags whose values may start with "-", e.g. --metadata-suffix -meta
SUFFIX_FLAGS = ("--atlas-suffix", "--metadata-suffix")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="layer-atlas",
        description="Pack the layers of a document into a power-of-two texture atlas.",
    )
    parser.add_argument("manifest", type=Path, help="Layer manifest (JSON)")
    parser.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output directory (default: the manifest's directory)",
    )
    parser.add_argument("--config", type=Path, default=None, help="JSON config file")
    parser.add_argument("--atlas-suffix", default=None, help="Suffix for the atlas image name")
    parser.add_argument("--metadata-suffix", default=None, help="Suffix for .json/.xml names")
    parser.add_argument("--margin", type=int, default=None, help="Safety margin in pixels")
    parser.add_argument(
        "--include-background", action="store_true", default=None,
        help="Pack the background layer too",
    )
    parser.add_argument(
        "--packer", choices=sorted(PACKER_ALGORITHMS), default=None,
        help="Packing algorithm",
    )
    parser.add_argument("--max-size", type=int, default=None, help="Largest atlas side in pixels")
    parser.add_argument("--no-json", action="store_true", help="Skip the .json export")
    parser.add_argument("--no-xml", action="store_true", help="Skip the .xml export")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _attach_suffix_values(argv: List[str]) -> List[str]:
    """Rewrite "--atlas-suffix -x" as "--atlas-suffix=-x" so argparse keeps the value."""
    result: List[str] = []
    args = iter(argv)
    for arg in args:
        if arg in SUFFIX_FLAGS:
            value = next(args, None)
            result.append(arg if value is None else f"{arg}={value}")
        else:
            result.append(arg)
    return result


def _resolve_config(args: argparse.Namespace) -> AtlasConfig:
    """Config file values, overridden by any flags given on the command line."""
    config = load_config(args.config) if args.config else AtlasConfig()

    overrides = {
        "atlas_suffix": args.atlas_suffix,
        "metadata_suffix": args.metadata_suffix,
        "safety_margin": args.margin,
        "include_background": args.include_background,
        "packer": args.packer,
        "max_atlas_size": args.max_size,
    }
    if args.no_json:
        overrides["write_json"] = False
    if args.no_xml:
        overrides["write_xml"] = False

    return replace(config, **{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = _build_parser().parse_args(_attach_suffix_values(list(argv)))

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _resolve_config(args)
    except (OSError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    output_dir = args.output or args.manifest.resolve().parent

    try:
        result = build_atlas(args.manifest, output_dir, config)
    except BuildError as e:
        logger.error(str(e))
        return 1

    for warning in result.warnings:
        logger.warning(warning)
    logger.info(f"Atlas: {result.atlas_image}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
