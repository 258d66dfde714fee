"""
Magnet URI construction.

Output shape::

    magnet:?xt=urn:btih:<40 lowercase hex>[&tr=<percent-encoded url>]*

Tracker URLs come from ``announce`` and ``announce-list``, are sorted by raw
byte value with exact duplicates removed, and are percent-encoded byte by
byte: only ASCII letters and digits are kept as-is. This is stricter than
``urllib.parse.quote`` (``/``, ``:``, ``.``, ``-`` are all escaped).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from tormag.bencode.lookup import find
from tormag.bencode.nodes import BencodeList, BencodeString, BencodeValue
from tormag.infohash import hash_info

logger = logging.getLogger(__name__)

MAGNET_PREFIX = "magnet:?xt=urn:btih:"
TRACKER_PARAM = "&tr="

_UNRESERVED = frozenset(b"0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")


def _flatten_announce_list(node: BencodeList, urls: list[bytes]) -> None:
    for item in node.items:
        if isinstance(item, BencodeString):
            urls.append(item.value)
        elif isinstance(item, BencodeList):
            _flatten_announce_list(item, urls)


def collect_announce_urls(root: BencodeValue) -> list[bytes]:
    """
    Collect tracker URLs from ``announce`` and ``announce-list``.

    ``announce-list`` is normally a list of tiers (lists of strings); any
    nesting is flattened and entries that are neither strings nor lists are
    ignored. Order is not meaningful; see :func:`sort_unique`.
    """
    urls: list[bytes] = []

    announce = find(root, "announce")
    if isinstance(announce, BencodeString):
        urls.append(announce.value)

    announce_list = find(root, "announce-list")
    if isinstance(announce_list, BencodeList):
        _flatten_announce_list(announce_list, urls)

    return urls


def sort_unique(urls: Iterable[bytes]) -> list[bytes]:
    """Sort by byte value, then drop adjacent duplicates."""
    result: list[bytes] = []
    for url in sorted(urls):
        if not result or result[-1] != url:
            result.append(url)
    return result


def percent_encode(url: bytes) -> str:
    """
    Percent-encode every byte that is not an ASCII letter or digit.

    Example:
        >>> percent_encode(b"http://a.b:80/x")
        'http%3A%2F%2Fa%2Eb%3A80%2Fx'
    """
    return "".join(chr(b) if b in _UNRESERVED else f"%{b:02X}" for b in url)


def build_magnet(root: BencodeValue, data: bytes) -> str:
    """
    Build a magnet URI for a decoded torrent.

    Args:
        root: Decoded root dictionary
        data: The buffer ``root`` was decoded from

    Returns:
        Magnet URI, or an empty string if no info-hash can be computed
    """
    digest = hash_info(data, root)
    if digest is None:
        logger.debug("No info dictionary; not building magnet URI")
        return ""

    parts = [MAGNET_PREFIX, digest.hex()]
    for url in sort_unique(collect_announce_urls(root)):
        parts.append(TRACKER_PARAM)
        parts.append(percent_encode(url))
    return "".join(parts)
