"""Bencode decoding with source-span tracking."""

from tormag.bencode.cursor import ByteCursor
from tormag.bencode.decoder import (
    MAX_TORRENT_SIZE,
    BencodeDecoder,
    check_buffer_size,
    decode,
)
from tormag.bencode.lookup import find
from tormag.bencode.nodes import (
    BencodeDict,
    BencodeInteger,
    BencodeList,
    BencodeString,
    BencodeValue,
)

__all__ = [
    "MAX_TORRENT_SIZE",
    "BencodeDecoder",
    "BencodeDict",
    "BencodeInteger",
    "BencodeList",
    "BencodeString",
    "BencodeValue",
    "ByteCursor",
    "check_buffer_size",
    "decode",
    "find",
]
