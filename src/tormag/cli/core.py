"""Core commands: magnet, info."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer

from tormag.cli._context import get_runtime_context
from tormag.torrent import ParseOutcome, ParseResult, parse_torrent_file

logger = logging.getLogger(__name__)


def result_to_dict(result: ParseResult) -> dict[str, Any]:
    """Serialize a ParseResult for ``--json`` output."""
    payload: dict[str, Any] = {
        "path": str(result.path) if result.path else None,
        "outcome": result.outcome.value,
        "message": result.message or None,
        "name": None,
        "infohash": None,
        "trackers": [],
        "magnet": None,
    }
    metainfo = result.metainfo
    if metainfo is not None:
        payload["name"] = metainfo.name
        payload["infohash"] = metainfo.info_hash_hex
        payload["trackers"] = metainfo.announce_urls
        payload["magnet"] = metainfo.magnet or None
    return payload


def cmd_magnet(paths: list[Path], max_size: int) -> int:
    """Print one magnet link per torrent; return 1 if any file failed."""
    from tormag.ui.core import console
    from tormag.ui.messages import print_error

    failures = 0
    for path in paths:
        result = parse_torrent_file(path, max_size)
        if not result.magnet:
            failures += 1
            print_error(f"{path}: [{result.outcome.value}] {result.message}")
            continue
        console.print(result.magnet, soft_wrap=True, markup=False, emoji=False, highlight=False)

    if failures:
        logger.debug("%d of %d torrent(s) failed", failures, len(paths))
    return 1 if failures else 0


def cmd_info(path: Path, max_size: int, json_output: bool) -> int:
    """Show details for one torrent; return 0 only when it decoded with an info dictionary."""
    from tormag.ui.core import console
    from tormag.ui.tables import print_torrent_table

    result = parse_torrent_file(path, max_size)
    if json_output:
        console.print(
            json.dumps(result_to_dict(result), indent=2),
            soft_wrap=True,
            markup=False,
            emoji=False,
            highlight=False,
        )
    else:
        print_torrent_table(result)
    return 0 if result.outcome is ParseOutcome.OK else 1


def register_core_commands(app: typer.Typer) -> None:
    """Register core commands on the main app."""

    @app.command("magnet")
    def magnet_command(
        ctx: typer.Context,
        paths: Annotated[
            list[Path],
            typer.Argument(help="One or more .torrent files."),
        ],
    ) -> None:
        """🧲 Print the magnet link for each torrent file.

        [bold]Examples:[/]
          tormag magnet release.torrent
          tormag magnet a.torrent b.torrent

        Files that cannot be read or are not valid torrents are reported on
        stderr and make the command exit with status 1.
        """
        runtime = get_runtime_context(ctx)
        raise typer.Exit(cmd_magnet(paths, runtime.max_file_size))

    @app.command("info")
    def info_command(
        ctx: typer.Context,
        path: Annotated[
            Path,
            typer.Argument(help="Path to a .torrent file."),
        ],
        json_output: Annotated[
            bool,
            typer.Option("--json", help="Print JSON instead of a table."),
        ] = False,
    ) -> None:
        """🔎 Show infohash, name, trackers and magnet link of a torrent.

        [bold]Examples:[/]
          tormag info release.torrent
          tormag info --json release.torrent
        """
        runtime = get_runtime_context(ctx)
        raise typer.Exit(cmd_info(path, runtime.max_file_size, json_output))
