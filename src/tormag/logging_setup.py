"""
Logging configuration for tormag.

All records go through the ``tormag`` logger. The console handler writes to
stderr through the shared Rich error console, so log lines never interleave
with magnet links or JSON printed on stdout.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rich.logging import RichHandler

if TYPE_CHECKING:
    from tormag.env_settings import EnvSettings

LOGGER_NAME = "tormag"

FILE_FORMAT = logging.Formatter(
    "%(asctime)s | %(levelname)-5s | [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def build_console_handler(level: int) -> RichHandler:
    """Create the stderr handler; torrent names and URLs are printed verbatim."""
    from tormag.ui.core import err_console

    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    return handler


def build_file_handler(log_file: Path) -> logging.FileHandler:
    """Create a DEBUG file handler, creating parent directories as needed."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(FILE_FORMAT)
    return handler


def configure_logging(settings: EnvSettings, *, verbose: bool = False) -> logging.Logger:
    """
    Attach handlers to the ``tormag`` logger from environment settings.

    The console shows ``settings.log_level`` and above, or everything when
    ``verbose``. If ``settings.log_file`` is set, that file receives every
    record down to DEBUG regardless of the console level. Handlers from an
    earlier call are closed and replaced.

    Args:
        settings: Loaded environment settings
        verbose: Show DEBUG records on the console

    Returns:
        The ``tormag`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_level = logging.getLevelNamesMapping()[settings.log_level]
    if verbose:
        console_level = logging.DEBUG
    logger.addHandler(build_console_handler(console_level))

    if settings.log_file is not None:
        logger.addHandler(build_file_handler(settings.log_file))
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(console_level)

    return logger
