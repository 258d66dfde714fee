"""
Torrent file loading and magnet link generation.

This is the entry point for callers that just want "file in, magnet out".
Errors never escape as exceptions here: every outcome is reported through
:class:`ParseResult` so a caller can tell "not a torrent" apart from
"torrent without an info dictionary" and from success.

Usage:
    from tormag.torrent import parse_torrent_file, torrent_to_magnet

    result = parse_torrent_file(Path("release.torrent"))
    if result.ok:
        print(result.metainfo.magnet)

    magnet = torrent_to_magnet(Path("release.torrent"))  # "" on failure
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from pathlib import Path

from tormag.bencode.decoder import MAX_TORRENT_SIZE, check_buffer_size, decode
from tormag.bencode.lookup import find
from tormag.bencode.nodes import BencodeDict, BencodeString
from tormag.exceptions import MissingInfoError, TorrentError, TorrentFormatError, TorrentReadError
from tormag.infohash import find_info, hash_info
from tormag.magnet import build_magnet, collect_announce_urls, sort_unique

logger = logging.getLogger(__name__)


class ParseOutcome(str, Enum):
    """Outcome of loading a torrent file."""

    OK = "ok"
    IO_FAILURE = "io_failure"  # Missing, unreadable, empty or too large
    INVALID_FORMAT = "invalid_format"  # Root absent, not a dict, or empty
    MISSING_INFO = "missing_info"  # Decoded, but no usable info dictionary


_OUTCOME_BY_ERROR: dict[type[TorrentError], ParseOutcome] = {
    TorrentReadError: ParseOutcome.IO_FAILURE,
    TorrentFormatError: ParseOutcome.INVALID_FORMAT,
    MissingInfoError: ParseOutcome.MISSING_INFO,
}


def _decode_text(value: bytes) -> str:
    return value.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class TorrentMetainfo:
    """A decoded torrent together with the bytes it was decoded from."""

    data: bytes
    root: BencodeDict

    @cached_property
    def info_hash(self) -> bytes | None:
        """Raw 20-byte SHA-1 of the info dictionary."""
        return hash_info(self.data, self.root)

    @property
    def info_hash_hex(self) -> str | None:
        digest = self.info_hash
        return digest.hex() if digest is not None else None

    @property
    def has_info(self) -> bool:
        return self.info_hash is not None

    @property
    def announce_urls(self) -> list[str]:
        """Tracker URLs in the order they appear in the magnet URI."""
        return [_decode_text(url) for url in sort_unique(collect_announce_urls(self.root))]

    @property
    def name(self) -> str | None:
        """Suggested name from the info dictionary (``name.utf-8`` preferred)."""
        info = find_info(self.root)
        if info is None:
            return None
        for key in ("name.utf-8", "name"):
            value = find(info, key)
            if isinstance(value, BencodeString) and value.value:
                return _decode_text(value.value)
        return None

    @cached_property
    def magnet(self) -> str:
        """Magnet URI, or an empty string when there is no info-hash."""
        return build_magnet(self.root, self.data)


@dataclass(frozen=True)
class ParseResult:
    """Discriminated result of loading a torrent."""

    outcome: ParseOutcome
    metainfo: TorrentMetainfo | None = None
    message: str = ""
    path: Path | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is ParseOutcome.OK

    @property
    def magnet(self) -> str:
        if self.metainfo is None:
            return ""
        return self.metainfo.magnet


def read_torrent_file(torrent_path: Path, max_size: int = MAX_TORRENT_SIZE) -> bytes:
    """
    Read a torrent file into memory.

    The size is checked before anything is read, so oversized files are
    rejected without loading them.

    Raises:
        TorrentReadError: File is missing, unreadable, empty or too large
    """
    try:
        size = torrent_path.stat().st_size
    except OSError as e:
        raise TorrentReadError(
            f"Cannot access torrent file: {e.strerror or e}", torrent_path=torrent_path
        ) from e

    try:
        check_buffer_size(size, max_size)
    except TorrentReadError as e:
        raise TorrentReadError(
            f"{torrent_path.name}: {e.message}",
            torrent_path=torrent_path,
            size=size,
            max_size=max_size,
        ) from e

    try:
        with open(torrent_path, "rb") as f:
            data = f.read(max_size + 1)
    except OSError as e:
        raise TorrentReadError(
            f"Cannot read torrent file: {e.strerror or e}", torrent_path=torrent_path
        ) from e

    # File may have changed between stat() and read()
    check_buffer_size(len(data), max_size)
    return data


def load_metainfo(data: bytes, max_size: int = MAX_TORRENT_SIZE) -> TorrentMetainfo:
    """
    Decode torrent bytes into a :class:`TorrentMetainfo`.

    Raises:
        TorrentReadError: Data is empty or larger than ``max_size``
        TorrentFormatError: Root is absent, not a dictionary, or empty
    """
    root = decode(data, max_size=max_size)
    return TorrentMetainfo(data=bytes(data), root=root)


def _result_from_error(error: TorrentError, path: Path | None) -> ParseResult:
    outcome = next(
        (value for cls, value in _OUTCOME_BY_ERROR.items() if isinstance(error, cls)),
        ParseOutcome.INVALID_FORMAT,
    )
    logger.warning("%s: %s", path or "<bytes>", error)
    logger.debug("Error details: %s", error.details)
    return ParseResult(outcome=outcome, message=str(error), path=path)


def _result_from_metainfo(metainfo: TorrentMetainfo, path: Path | None) -> ParseResult:
    if not metainfo.has_info:
        error = MissingInfoError("Torrent has no usable 'info' dictionary", torrent_path=path)
        logger.warning("%s: %s", path or "<bytes>", error)
        return ParseResult(
            outcome=ParseOutcome.MISSING_INFO,
            metainfo=metainfo,
            message=str(error),
            path=path,
        )
    logger.debug("Decoded %s: infohash %s", path or "<bytes>", metainfo.info_hash_hex)
    return ParseResult(outcome=ParseOutcome.OK, metainfo=metainfo, path=path)


def parse_torrent_bytes(
    data: bytes, max_size: int = MAX_TORRENT_SIZE, *, path: Path | None = None
) -> ParseResult:
    """
    Decode torrent bytes without raising.

    Args:
        data: Raw torrent bytes
        max_size: Size ceiling in bytes
        path: Source path, only used for reporting

    Returns:
        ParseResult describing the outcome
    """
    try:
        metainfo = load_metainfo(data, max_size)
    except TorrentError as e:
        return _result_from_error(e, path)
    return _result_from_metainfo(metainfo, path)


def parse_torrent_file(torrent_path: Path, max_size: int = MAX_TORRENT_SIZE) -> ParseResult:
    """
    Read and decode a torrent file without raising.

    Example:
        >>> result = parse_torrent_file(Path("release.torrent"))
        >>> result.outcome
        <ParseOutcome.OK: 'ok'>
    """
    try:
        data = read_torrent_file(torrent_path, max_size)
    except TorrentReadError as e:
        return _result_from_error(e, torrent_path)
    return parse_torrent_bytes(data, max_size, path=torrent_path)


def torrent_to_magnet(torrent_path: Path, max_size: int = MAX_TORRENT_SIZE) -> str:
    """Return the magnet URI for a torrent file, or an empty string on any failure."""
    return parse_torrent_file(torrent_path, max_size).magnet


def extract_infohash(torrent_path: Path, max_size: int = MAX_TORRENT_SIZE) -> str | None:
    """
    Extract the infohash (SHA1 of the info dict bytes) from a torrent file.

    Args:
        torrent_path: Path to .torrent file
        max_size: Size ceiling in bytes

    Returns:
        40-character hex string (lowercase) or None on error
    """
    result = parse_torrent_file(torrent_path, max_size)
    if result.metainfo is None:
        return None
    return result.metainfo.info_hash_hex
