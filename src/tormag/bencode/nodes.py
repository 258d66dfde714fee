"""
Bencode value tree.

Each node knows the exact byte range of its own encoding in the source
buffer. ``buffer[node.source_offset:node.source_end]`` reproduces the bytes
the node was decoded from, which is what the info-hash is computed over.

Containers own their children outright; the tree has no shared or back
references and nodes are immutable once built.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class _Span:
    source_offset: int
    source_length: int

    @property
    def source_end(self) -> int:
        return self.source_offset + self.source_length

    def raw(self, buffer: bytes) -> bytes:
        """Return the original encoded bytes of this node."""
        return buffer[self.source_offset : self.source_end]


@dataclass(frozen=True)
class BencodeString(_Span):
    """Binary-safe byte string (not guaranteed to be UTF-8)."""

    value: bytes = b""


@dataclass(frozen=True)
class BencodeInteger(_Span):
    """Signed 64-bit integer."""

    value: int = 0


@dataclass(frozen=True)
class BencodeList(_Span):
    """Ordered sequence of values."""

    items: tuple[BencodeValue, ...] = ()

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class BencodeDict(_Span):
    """
    Mapping of byte-string keys to values.

    Keys keep the order they appeared in. Duplicate keys are resolved
    last-write-wins during decoding. ``entries`` is a read-only view.
    """

    entries: Mapping[bytes, BencodeValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __hash__(self) -> int:
        return hash((self.source_offset, self.source_length, tuple(self.entries.items())))

    def __len__(self) -> int:
        return len(self.entries)


BencodeValue = BencodeString | BencodeInteger | BencodeList | BencodeDict
