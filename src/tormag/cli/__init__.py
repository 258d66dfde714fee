"""tormag CLI - command-line interface built with Typer and Rich.

Commands:
- magnet: print magnet links for torrent files
- info: show infohash, name and trackers of a torrent
"""

from __future__ import annotations

from tormag.cli._app import create_main_callback, make_app
from tormag.cli._context import RuntimeContext, get_runtime_context
from tormag.cli.core import register_core_commands

app = make_app()
create_main_callback(app)
register_core_commands(app)


def main() -> None:
    """Entry point for the tormag console script."""
    app()


__all__ = [
    "RuntimeContext",
    "app",
    "get_runtime_context",
    "main",
]
