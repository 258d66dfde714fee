"""Runtime context for CLI commands.

Initialized once in the main callback and available to all commands via
ctx.obj.
"""

from __future__ import annotations

from dataclasses import dataclass

from tormag.bencode.decoder import MAX_TORRENT_SIZE


@dataclass
class RuntimeContext:
    """Typed runtime context available to all commands via ctx.obj.

    Example:
        @app.command()
        def my_command(ctx: typer.Context) -> None:
            runtime = get_runtime_context(ctx)
            result = parse_torrent_file(path, runtime.max_file_size)
    """

    max_file_size: int = MAX_TORRENT_SIZE
    verbose: bool = False


def get_runtime_context(ctx: object) -> RuntimeContext:
    """Return the RuntimeContext stored on a Typer context, or defaults."""
    obj = getattr(ctx, "obj", None)
    if isinstance(obj, RuntimeContext):
        return obj
    return RuntimeContext()
