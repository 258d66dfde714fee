"""tormag - BitTorrent metainfo decoder and magnet link builder."""

from tormag.exceptions import (
    ConfigurationError,
    MissingInfoError,
    TorrentError,
    TorrentFormatError,
    TorrentReadError,
    TormagError,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Base exception
    "TormagError",
    # Configuration
    "ConfigurationError",
    # Torrent processing
    "TorrentError",
    "TorrentReadError",
    "TorrentFormatError",
    "MissingInfoError",
]
