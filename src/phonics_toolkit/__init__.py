"""Top-level package for the Phonics Check toolkit.

Provides subpackages:
- phonics_toolkit.ingest – spreadsheet and PDF word list ingestion
- phonics_toolkit.export – template-based marking sheet export
- phonics_toolkit.core – term set and assessment models, errors, JSON
- phonics_toolkit.common – shared thresholds, grapheme and path helpers
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In dev mode, read directly from pyproject.toml
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

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("phonics-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__copyright__ = "Copyright 2026 phonics-toolkit contributors"
__all__: list[str] = ["__version__"]
