"""tormag UI - Rich console output components.

Modules:
    core: Console instances and theme
    messages: Simple print helpers
    tables: Torrent summary table
    banner: Version display
"""

from __future__ import annotations

from tormag.ui.banner import get_version, get_version_string
from tormag.ui.core import TORMAG_THEME, console, err_console
from tormag.ui.messages import print_error
from tormag.ui.tables import print_torrent_table

__all__ = [
    "TORMAG_THEME",
    "console",
    "err_console",
    "get_version",
    "get_version_string",
    "print_error",
    "print_torrent_table",
]
