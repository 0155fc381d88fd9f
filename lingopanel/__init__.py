# lingopanel/__init__.py
"""
LingoPanel - English text translation in the browser

A small translation application using NiceGUI and the Gemini API.
"""

from pathlib import Path


def _get_version() -> str:
    """
    Read the version from pyproject.toml.

    Returns:
        str: version string (e.g. "0.1.0")
    """
    try:
        import tomllib  # Python 3.11+ standard library

        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                data = tomllib.load(f)
            return data.get("project", {}).get("version", "0.0.0")
    except (ImportError, OSError, ValueError):
        pass

    # Fallback: hardcoded version
    return "0.1.0"


__version__ = _get_version()
__app_name__ = "LingoPanel"
