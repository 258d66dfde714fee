"""Version display for tormag CLI."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Get the current tormag version.

    Tries importlib.metadata first (for installed package),
    falls back to __version__ in __init__.py.
    """
    try:
        return version("tormag")
    except PackageNotFoundError:
        # Fallback for development/editable installs
        from tormag import __version__

        return __version__


def get_version_string() -> str:
    """Get formatted version string for display.

    Returns:
        Formatted string like "tormag v0.1.0"
    """
    return f"tormag v{get_version()}"
