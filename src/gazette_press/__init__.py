"""Top-level package for the gazette print-production engine.

Provides subpackages:
- gazette_press.core – immutable data models and the error taxonomy
- gazette_press.common – unit conversions shared by layout and output
- gazette_press.press – validation, optimisation, placement, composition
- gazette_press.cli – command-line entry point
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

    try:
        from importlib.metadata import version as pkg_version, PackageNotFoundError
    except ImportError:
        return "0.0.0"
    try:
        return pkg_version("gazette_press")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
