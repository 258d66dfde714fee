"""App configuration and main callback for the tormag CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from tormag.cli._context import RuntimeContext
from tormag.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


# =============================================================================
# Version Callback
# =============================================================================


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from tormag.ui.banner import get_version_string
        from tormag.ui.core import console

        console.print(get_version_string(), highlight=False)
        raise typer.Exit()


# =============================================================================
# App Factory
# =============================================================================


MAIN_EPILOG = """
[bold cyan]Examples:[/]
  tormag magnet release.torrent        [dim]# Print the magnet link[/]
  tormag magnet *.torrent              [dim]# One link per file[/]
  tormag info release.torrent          [dim]# Infohash, name and trackers[/]
  tormag info --json release.torrent   [dim]# Same, as JSON[/]
"""


def make_app() -> typer.Typer:
    """Create and configure the main Typer application."""
    return typer.Typer(
        name="tormag",
        help="Turn .torrent files into magnet links",
        epilog=MAIN_EPILOG,
        rich_markup_mode="rich",
        pretty_exceptions_enable=True,
        pretty_exceptions_show_locals=False,
        no_args_is_help=True,
        add_completion=False,
        context_settings={"help_option_names": ["-h", "--help"]},
    )


# =============================================================================
# Main Callback Factory
# =============================================================================


def create_main_callback(app: typer.Typer) -> None:
    """Register the main callback on the app."""

    @app.callback()
    def main_callback(
        ctx: typer.Context,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                "-V",
                callback=version_callback,
                is_eager=True,
                help="Show version and exit.",
            ),
        ] = False,
        verbose: Annotated[
            bool,
            typer.Option(
                "--verbose",
                "-v",
                help="Enable verbose (DEBUG) logging.",
            ),
        ] = False,
        max_size: Annotated[
            int | None,
            typer.Option(
                "--max-size",
                min=1,
                help="Largest torrent file accepted, in bytes (default: TORMAG_MAX_FILE_SIZE).",
            ),
        ] = None,
        env_file: Annotated[
            Path | None,
            typer.Option(
                "--env-file",
                exists=True,
                dir_okay=False,
                help="Read TORMAG_* settings from this file (default: ./.env if present).",
            ),
        ] = None,
    ) -> None:
        """Turn .torrent files into magnet links.

        Reads a torrent's metainfo, hashes its [cyan]info[/] dictionary and
        builds a [cyan]magnet:?xt=urn:btih:…[/] link with its trackers.
        """
        from tormag.env_settings import get_env_settings, load_env_file
        from tormag.logging_setup import configure_logging

        load_env_file(env_file)
        try:
            env = get_env_settings()
        except ValidationError as e:
            error = ConfigurationError(f"Invalid environment settings: {e}")
            raise typer.BadParameter(str(error)) from e

        configure_logging(env, verbose=verbose)

        ctx.obj = RuntimeContext(
            max_file_size=max_size if max_size is not None else env.max_file_size,
            verbose=verbose,
        )
        logger.debug("Size ceiling: %d bytes", ctx.obj.max_file_size)
