"""
tormag exception hierarchy.

Provides typed exceptions for the decode/hash/magnet pipeline.

Exception Hierarchy:
    TormagError (base)
    ├── ConfigurationError - Invalid settings
    └── TorrentError - Metainfo processing failures
        ├── TorrentReadError - File missing, unreadable, empty or too large
        ├── TorrentFormatError - Root absent, not a dictionary, or empty
        └── MissingInfoError - No usable "info" dictionary

These are raised inside the library. The facade in ``tormag.torrent`` turns
them into a ``ParseResult`` so callers never have to catch them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class TormagError(Exception):
    """Base exception for all tormag errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """
        Initialize tormag exception.

        Args:
            message: Human-readable error message
            details: Optional structured error details for logging/debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(TormagError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details=details)
        self.field = field


# =============================================================================
# Torrent Errors
# =============================================================================


class TorrentError(TormagError):
    """Torrent metainfo processing failure."""

    def __init__(
        self,
        message: str,
        *,
        torrent_path: Path | str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if torrent_path:
            details["torrent_path"] = str(torrent_path)
        super().__init__(message, details=details)
        self.torrent_path = torrent_path


class TorrentReadError(TorrentError):
    """Torrent could not be read: missing, unreadable, empty or over the size ceiling."""

    def __init__(
        self,
        message: str,
        *,
        size: int | None = None,
        max_size: int | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.get("details") or {}
        if size is not None:
            details["size"] = size
        if max_size is not None:
            details["max_size"] = max_size
        kwargs["details"] = details
        super().__init__(message, **kwargs)
        self.size = size
        self.max_size = max_size


class TorrentFormatError(TorrentError):
    """Decoded root is absent, not a dictionary, or empty."""

    def __init__(self, message: str, *, reason: str | None = None, **kwargs: Any) -> None:
        details = kwargs.get("details") or {}
        if reason:
            details["reason"] = reason
        kwargs["details"] = details
        super().__init__(message, **kwargs)
        self.reason = reason


class MissingInfoError(TorrentError):
    """Metainfo has no usable "info" dictionary to hash."""

    pass
