"""
Recursive-descent bencode decoder.

Decodes a whole torrent buffer in one forward pass and records, for every
node, the byte span it was read from. The decoder is lenient in the ways
real-world torrent files need:

- A string whose declared length is <= 0 or larger than what is left in the
  buffer decodes to an empty string instead of aborting.
- Integers written in exponent form (``i1.5E3e``, ``i2D2e``) are parsed as
  floating point and truncated.
- An unrecognised type byte inside a list or dictionary is skipped.

Only an unusable root (absent, not a dictionary, or empty), or nesting
beyond MAX_NESTING_DEPTH, is an error.
"""

from __future__ import annotations

import logging
import math
import re

from tormag.bencode.cursor import ByteCursor
from tormag.bencode.nodes import (
    BencodeDict,
    BencodeInteger,
    BencodeList,
    BencodeString,
    BencodeValue,
)
from tormag.exceptions import TorrentFormatError, TorrentReadError

logger = logging.getLogger(__name__)

# Upper bound on input size, checked before any parsing.
MAX_TORRENT_SIZE = 5 * 1024 * 1024

# Containers nested deeper than this are rejected.
MAX_NESTING_DEPTH = 200

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Any run of more significant digits than this is out of int64 range.
_INT64_DIGITS = len(str(INT64_MAX))

_INT_PREFIX = re.compile(rb"\s*([+-]?)0*(\d+)")
_FLOAT_PREFIX = re.compile(rb"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_EXPONENT_MARKERS = frozenset(b"dDeE")

_INTEGER = ord("i")
_LIST = ord("l")
_DICT = ord("d")
_END = ord("e")
_COLON = ord(":")
_DIGITS = range(ord("0"), ord("9") + 1)


def _clamp_int64(value: int) -> int:
    return max(INT64_MIN, min(INT64_MAX, value))


def parse_int_prefix(raw: bytes) -> int:
    """Parse the leading decimal integer of ``raw`` like C ``atoi``; 0 if there is none."""
    match = _INT_PREFIX.match(raw)
    if not match:
        return 0
    sign, digits = match.groups()
    negative = sign == b"-"
    if len(digits) > _INT64_DIGITS:
        return INT64_MIN if negative else INT64_MAX
    value = int(digits)
    return _clamp_int64(-value if negative else value)


def parse_float_prefix(raw: bytes) -> int:
    """
    Parse the leading float literal of ``raw`` like C ``atof`` and truncate it.

    ``d``/``D`` are accepted as exponent markers. Infinite results clamp to
    the 64-bit bound of their sign.
    """
    match = _FLOAT_PREFIX.match(raw.replace(b"d", b"e").replace(b"D", b"E"))
    if not match:
        return 0
    number = float(match.group(1))
    if math.isnan(number):
        return 0
    if math.isinf(number):
        return INT64_MAX if number > 0 else INT64_MIN
    return _clamp_int64(int(number))


def check_buffer_size(size: int, max_size: int = MAX_TORRENT_SIZE) -> None:
    """Reject empty buffers and buffers over the size ceiling."""
    if size <= 0:
        raise TorrentReadError("Torrent data is empty", size=size, max_size=max_size)
    if size > max_size:
        raise TorrentReadError(
            f"Torrent data is {size} bytes, larger than the {max_size} byte limit",
            size=size,
            max_size=max_size,
        )


class BencodeDecoder:
    """
    Decode a bencoded buffer into a tree of span-aware nodes.

    Example:
        >>> root = BencodeDecoder(b"d4:name3:abce").decode()
        >>> root.entries[b"name"].value
        b'abc'
    """

    def __init__(self, data: bytes, *, max_size: int = MAX_TORRENT_SIZE) -> None:
        check_buffer_size(len(data), max_size)
        self.cursor = ByteCursor(data)
        self._depth = 0

    def decode(self) -> BencodeDict:
        """
        Decode the whole buffer and return the root dictionary.

        Raises:
            TorrentFormatError: Root is absent, not a dictionary, or empty
        """
        root = self.decode_value()
        if root is None:
            raise TorrentFormatError("No bencoded value at start of data", reason="no_root")
        if not isinstance(root, BencodeDict):
            raise TorrentFormatError(
                f"Root value is a {type(root).__name__}, expected a dictionary",
                reason="root_not_dict",
            )
        if not root.entries:
            raise TorrentFormatError("Root dictionary is empty", reason="root_empty")
        if not self.cursor.at_end():
            logger.debug("Ignoring %d trailing bytes after root", self.cursor.remaining())
        return root

    def decode_value(self) -> BencodeValue | None:
        """Decode the value at the cursor, or return None if no value starts there."""
        lookahead = self.cursor.peek()
        if lookahead is None:
            return None
        if lookahead in _DIGITS:
            return self._decode_string()
        if lookahead == _INTEGER:
            return self._decode_integer()
        if lookahead in (_LIST, _DICT):
            return self._decode_container(lookahead)
        return None

    def _decode_container(self, lookahead: int) -> BencodeList | BencodeDict:
        if self._depth >= MAX_NESTING_DEPTH:
            raise TorrentFormatError(
                f"Containers nested deeper than {MAX_NESTING_DEPTH} levels at offset "
                f"{self.cursor.position}",
                reason="too_deep",
            )
        self._depth += 1
        try:
            if lookahead == _LIST:
                return self._decode_list()
            return self._decode_dict()
        finally:
            self._depth -= 1

    def _read_string(self) -> bytes:
        """Read ``<length>:<bytes>`` and return the bytes (empty on a bad length)."""
        length = parse_int_prefix(self.cursor.read_until(_COLON))
        if length <= 0 or length > self.cursor.remaining():
            if length != 0:
                logger.debug(
                    "Bad string length %d at offset %d (%d bytes left), using empty string",
                    length,
                    self.cursor.position,
                    self.cursor.remaining(),
                )
            return b""
        return self.cursor.read(length)

    def _decode_string(self) -> BencodeString:
        start = self.cursor.position
        value = self._read_string()
        return BencodeString(
            source_offset=start,
            source_length=self.cursor.position - start,
            value=value,
        )

    def _decode_integer(self) -> BencodeInteger:
        start = self.cursor.position
        self.cursor.advance()  # i
        digits = self.cursor.read_until(_END)
        if _EXPONENT_MARKERS.intersection(digits):
            logger.debug("Exponent-form integer %r at offset %d", digits, start)
            value = parse_float_prefix(digits)
        else:
            value = parse_int_prefix(digits)
        return BencodeInteger(
            source_offset=start,
            source_length=self.cursor.position - start,
            value=value,
        )

    def _decode_list(self) -> BencodeList:
        start = self.cursor.position
        self.cursor.advance()  # l
        items: list[BencodeValue] = []
        while not self.cursor.at_end() and self.cursor.peek() != _END:
            item = self.decode_value()
            if item is None:
                self._skip_unknown()
                continue
            items.append(item)
        self.cursor.advance()  # e
        return BencodeList(
            source_offset=start,
            source_length=self.cursor.position - start,
            items=tuple(items),
        )

    def _decode_dict(self) -> BencodeDict:
        start = self.cursor.position
        self.cursor.advance()  # d
        entries: dict[bytes, BencodeValue] = {}
        while not self.cursor.at_end() and self.cursor.peek() != _END:
            key = self._read_string()
            value = self.decode_value()
            if value is None:
                if self.cursor.peek() not in (None, _END):
                    self._skip_unknown()
                continue
            if key in entries:
                logger.debug("Duplicate dictionary key %r at offset %d", key, start)
            entries[key] = value
        self.cursor.advance()  # e
        return BencodeDict(
            source_offset=start,
            source_length=self.cursor.position - start,
            entries=entries,
        )

    def _skip_unknown(self) -> None:
        logger.debug(
            "Skipping unknown type byte %r at offset %d",
            bytes((self.cursor.peek() or 0,)),
            self.cursor.position,
        )
        self.cursor.advance()


def decode(data: bytes, *, max_size: int = MAX_TORRENT_SIZE) -> BencodeDict:
    """
    Decode a torrent buffer and return its root dictionary.

    Args:
        data: Raw bencoded bytes
        max_size: Size ceiling in bytes

    Returns:
        Root dictionary node

    Raises:
        TorrentReadError: Buffer is empty or larger than ``max_size``
        TorrentFormatError: Root is absent, not a dictionary, or empty
    """
    return BencodeDecoder(data, max_size=max_size).decode()
