"""
Info-hash computation.

The info-hash is the SHA-1 of the ``info`` dictionary exactly as it appears
in the torrent file. It is computed over the original bytes, never over a
re-encoding of the parsed tree, so files with unsorted keys or unusual
integer forms still hash to the value every other client computes.
"""

from __future__ import annotations

import hashlib
import logging

from tormag.bencode.lookup import find
from tormag.bencode.nodes import BencodeDict, BencodeValue

logger = logging.getLogger(__name__)

INFO_KEY = "info"


def find_info(root: BencodeValue) -> BencodeDict | None:
    """Return the ``info`` dictionary under ``root``, or None if absent or not a dictionary."""
    info = find(root, INFO_KEY)
    if not isinstance(info, BencodeDict):
        if info is not None:
            logger.debug("'info' is a %s, not a dictionary", type(info).__name__)
        return None
    return info


def hash_info(data: bytes, root: BencodeValue) -> bytes | None:
    """
    Compute the 20-byte SHA-1 info-hash.

    Args:
        data: The buffer ``root`` was decoded from
        root: Decoded root dictionary

    Returns:
        Raw digest, or None if there is no usable info dictionary
    """
    info = find_info(root)
    if info is None:
        return None
    return hashlib.sha1(info.raw(data)).digest()


def info_hash_hex(data: bytes, root: BencodeValue) -> str | None:
    """
    Compute the info-hash as 40 lowercase hex characters.

    Example:
        >>> info_hash_hex(data, root)
        'a1b2c3d4e5f6...'
    """
    digest = hash_info(data, root)
    return digest.hex() if digest is not None else None
