"""Dictionary key lookup."""

from __future__ import annotations

from tormag.bencode.nodes import BencodeDict, BencodeValue


def find(node: BencodeValue | None, key: str) -> BencodeValue | None:
    """
    Find ``key`` in a dictionary node, ignoring ASCII case.

    Bencode keys are case-sensitive, but some encoders write ``Announce`` or
    ``INFO``; those still match here. The first matching key in stored order
    wins.

    Args:
        node: Dictionary to search (anything else yields None)
        key: Key to look for

    Returns:
        The matching value, or None
    """
    if not key or not isinstance(node, BencodeDict):
        return None

    wanted = key.encode("utf-8").lower()
    for name, value in node.entries.items():
        if name.lower() == wanted:
            return value
    return None
