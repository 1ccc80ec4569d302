"""Top-level package for Layer Atlas.

Packs the named regions of a layered document into a single power-of-two
texture atlas and exports placement metadata.

Provides subpackages:
- layer_atlas.core – part/document models and export schema validation
- layer_atlas.layout – packer contract and the atlas layout driver
- layer_atlas.sources – source providers that feed regions in
- layer_atlas.output – renderer and metadata exporters
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("layer-atlas")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
