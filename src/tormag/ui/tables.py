"""Table formatting components for tormag UI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from tormag.ui.core import console

if TYPE_CHECKING:
    from tormag.torrent import ParseResult


_OUTCOME_STYLES = {
    "ok": "success",
    "missing_info": "warning",
    "io_failure": "error",
    "invalid_format": "error",
}


def print_torrent_table(result: ParseResult) -> None:
    """Print a summary table for one parsed torrent.

    Example:
        >>> print_torrent_table(parse_torrent_file(Path("release.torrent")))
        ┏━━━━━━━━━━┳━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━┓
        ┃ Field    ┃ Value                                    ┃
        ┡━━━━━━━━━━╇━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━┩
        │ Outcome  │ ok                                       │
        │ Infohash │ 3f7c...                                  │
        └──────────┴──────────────────────────────────────────┘
    """
    title = result.path.name if result.path else "Torrent"
    table = Table(title=escape(title), show_header=True, header_style="bold")
    table.add_column("Field", style="dim")
    table.add_column("Value", overflow="fold")

    style = _OUTCOME_STYLES.get(result.outcome.value, "dim")
    table.add_row("Outcome", f"[{style}]{result.outcome.value}[/]")
    if result.message:
        table.add_row("Message", escape(result.message))

    metainfo = result.metainfo
    if metainfo is not None:
        table.add_row("Name", escape(metainfo.name or "-"))
        table.add_row("Infohash", f"[infohash]{metainfo.info_hash_hex or '-'}[/]")
        trackers = metainfo.announce_urls
        table.add_row(
            f"Trackers ({len(trackers)})",
            "\n".join(f"[tracker]{escape(url)}[/]" for url in trackers) or "-",
        )
        if metainfo.magnet:
            table.add_row("Magnet", f"[magnet]{escape(metainfo.magnet)}[/]")

    console.print(table)
