"""Core console configuration and theme for tormag UI."""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme

# =============================================================================
# Theme Configuration
# =============================================================================

TORMAG_THEME = Theme(
    {
        # Status colors
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        # Text styles
        "title": "bold white",
        "dim": "dim",
        "highlight": "bold magenta",
        # Torrent fields
        "path": "cyan",
        "infohash": "yellow",
        "tracker": "blue",
        "magnet": "green",
    }
)

# =============================================================================
# Console Instances
# =============================================================================

# Primary console for normal output
console = Console(theme=TORMAG_THEME, stderr=False)

# Error console for stderr output
err_console = Console(theme=TORMAG_THEME, stderr=True)
