"""Shared pytest fixtures and sample torrents for tormag tests."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest import mock

import pytest

from tormag.env_settings import clear_env_settings_cache

# Minimal torrent: info = {name: "abc"}, announce = "http://tracker.test/"
MINIMAL_TORRENT = b"d4:infod4:name3:abce8:announce20:http://tracker.test/e"
MINIMAL_INFO = b"d4:name3:abce"
# sha1sum of MINIMAL_INFO
MINIMAL_INFOHASH = "0c3b1833b425f70628722acc387340ffe0214cf5"
MINIMAL_MAGNET = (
    "magnet:?xt=urn:btih:0c3b1833b425f70628722acc387340ffe0214cf5"
    "&tr=http%3A%2F%2Ftracker%2Etest%2F"
)

# A more typical single-file torrent with an announce-list
SINGLE_FILE_INFO = (
    b"d6:lengthi12345e4:name13:test-file.txt"
    b"12:piece lengthi16384e6:pieces20:01234567890123456789e"
)
SINGLE_FILE_INFOHASH = "767e4513709f3922f46f6763841b24e596c8da4c"
SINGLE_FILE_TORRENT = (
    b"d8:announce35:http://tracker.example.com/announce"
    b"13:announce-listll35:http://tracker.example.com/announce"
    b"el27:udp://backup.example.org:80ee"
    b"7:comment4:test"
    b"4:info" + SINGLE_FILE_INFO + b"e"
)


@pytest.fixture
def write_torrent(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes bytes to a .torrent file under tmp_path."""

    def _write(data: bytes, name: str = "test.torrent") -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def clean_env() -> Iterator[None]:
    """Run with no TORMAG_* variables and a fresh settings cache."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("TORMAG_")}
    with mock.patch.dict(os.environ, env, clear=True):
        clear_env_settings_cache()
        yield
    clear_env_settings_cache()
