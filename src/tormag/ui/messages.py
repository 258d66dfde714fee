"""Simple message printing helpers for tormag UI."""

from __future__ import annotations

from rich.markup import escape

from tormag.ui.core import err_console


def print_error(message: str) -> None:
    """Print an error message with X to stderr.

    Example:
        >>> print_error("release.torrent: Root dictionary is empty")
          ✗ release.torrent: Root dictionary is empty
    """
    err_console.print(f"  [error]✗[/] {escape(message)}")
