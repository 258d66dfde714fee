"""Tests for the torrent file facade."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from unittest import mock

import pytest

from tests.conftest import (
    MINIMAL_INFO,
    MINIMAL_INFOHASH,
    MINIMAL_MAGNET,
    MINIMAL_TORRENT,
    SINGLE_FILE_INFOHASH,
    SINGLE_FILE_TORRENT,
)
from tormag.bencode.decoder import MAX_NESTING_DEPTH
from tormag.exceptions import TorrentFormatError, TorrentReadError
from tormag.torrent import (
    ParseOutcome,
    extract_infohash,
    load_metainfo,
    parse_torrent_bytes,
    parse_torrent_file,
    read_torrent_file,
    torrent_to_magnet,
)

WriteTorrent = Callable[..., Path]


class TestReadTorrentFile:
    """Tests for read_torrent_file()."""

    def test_reads_contents(self, write_torrent: WriteTorrent) -> None:
        path = write_torrent(MINIMAL_TORRENT)
        assert read_torrent_file(path) == MINIMAL_TORRENT

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(TorrentReadError) as exc_info:
            read_torrent_file(tmp_path / "missing.torrent")
        assert exc_info.value.details["torrent_path"].endswith("missing.torrent")

    def test_empty_file(self, write_torrent: WriteTorrent) -> None:
        with pytest.raises(TorrentReadError, match="empty"):
            read_torrent_file(write_torrent(b""))

    def test_oversized_file_not_read(self, write_torrent: WriteTorrent) -> None:
        """Files over the ceiling are rejected from their size alone."""
        path = write_torrent(MINIMAL_TORRENT)
        with (
            mock.patch("tormag.torrent.open", create=True) as mock_open,
            pytest.raises(TorrentReadError) as exc_info,
        ):
            read_torrent_file(path, max_size=10)
        mock_open.assert_not_called()
        assert exc_info.value.size == len(MINIMAL_TORRENT)
        assert exc_info.value.max_size == 10

    def test_file_at_ceiling_is_accepted(self, write_torrent: WriteTorrent) -> None:
        path = write_torrent(MINIMAL_TORRENT)
        assert read_torrent_file(path, max_size=len(MINIMAL_TORRENT)) == MINIMAL_TORRENT

    def test_directory_is_io_failure(self, tmp_path: Path) -> None:
        with pytest.raises(TorrentReadError):
            read_torrent_file(tmp_path, max_size=1 << 30)


class TestLoadMetainfo:
    """Tests for load_metainfo() and TorrentMetainfo."""

    def test_properties(self) -> None:
        metainfo = load_metainfo(SINGLE_FILE_TORRENT)
        assert metainfo.info_hash_hex == SINGLE_FILE_INFOHASH
        assert metainfo.name == "test-file.txt"
        assert metainfo.announce_urls == [
            "http://tracker.example.com/announce",
            "udp://backup.example.org:80",
        ]
        assert metainfo.magnet.startswith(f"magnet:?xt=urn:btih:{SINGLE_FILE_INFOHASH}&tr=")

    def test_prefers_utf8_name(self) -> None:
        data = b"d4:infod4:name3:abc10:name.utf-85:caf\xc3\xa9ee"
        assert load_metainfo(data).name == "café"

    def test_name_missing(self) -> None:
        data = b"d4:infod6:lengthi1eee"
        assert load_metainfo(data).name is None

    def test_invalid_root_raises(self) -> None:
        with pytest.raises(TorrentFormatError):
            load_metainfo(b"l4:spame")


class TestParseTorrentBytes:
    """Tests for parse_torrent_bytes()."""

    def test_ok(self) -> None:
        result = parse_torrent_bytes(MINIMAL_TORRENT)
        assert result.ok
        assert result.outcome is ParseOutcome.OK
        assert result.metainfo is not None
        assert result.metainfo.info_hash_hex == MINIMAL_INFOHASH
        assert result.magnet == MINIMAL_MAGNET
        assert result.message == ""

    @pytest.mark.parametrize("data", [b"l4:spame", b"4:spam", b"de", b"garbage"])
    def test_invalid_format(self, data: bytes) -> None:
        result = parse_torrent_bytes(data)
        assert result.outcome is ParseOutcome.INVALID_FORMAT
        assert result.metainfo is None
        assert result.magnet == ""
        assert result.message

    def test_empty_is_io_failure(self) -> None:
        result = parse_torrent_bytes(b"")
        assert result.outcome is ParseOutcome.IO_FAILURE

    def test_missing_info(self) -> None:
        result = parse_torrent_bytes(b"d8:announce20:http://tracker.test/e")
        assert result.outcome is ParseOutcome.MISSING_INFO
        assert not result.ok
        assert result.metainfo is not None
        assert result.metainfo.announce_urls == ["http://tracker.test/"]
        assert result.magnet == ""

    def test_info_not_dict_is_missing_info(self) -> None:
        result = parse_torrent_bytes(b"d4:infoi1ee")
        assert result.outcome is ParseOutcome.MISSING_INFO

    @pytest.mark.parametrize(
        "data",
        [
            b"d4:infod4:name3:abce4:sizei" + b"9" * 5000 + b"ee",
            b"d4:infod4:name3:abce4:junk" + b"9" * 5000 + b":xe",
        ],
        ids=["integer", "string-length"],
    )
    def test_huge_digit_runs_stay_lenient(self, data: bytes) -> None:
        result = parse_torrent_bytes(data)
        assert result.outcome is ParseOutcome.OK
        assert result.metainfo is not None
        assert result.metainfo.info_hash_hex == MINIMAL_INFOHASH

    def test_too_deep_message_names_limit(self) -> None:
        result = parse_torrent_bytes(b"d1:a" + b"l" * 500)
        assert result.outcome is ParseOutcome.INVALID_FORMAT
        assert f"nested deeper than {MAX_NESTING_DEPTH} levels" in result.message

    def test_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="tormag"):
            parse_torrent_bytes(b"de")
        assert "Root dictionary is empty" in caplog.text


class TestParseTorrentFile:
    """Tests for parse_torrent_file() and the convenience wrappers."""

    def test_ok(self, write_torrent: WriteTorrent) -> None:
        path = write_torrent(MINIMAL_TORRENT)
        result = parse_torrent_file(path)
        assert result.ok
        assert result.path == path
        assert result.magnet == MINIMAL_MAGNET

    def test_missing_file(self, tmp_path: Path) -> None:
        result = parse_torrent_file(tmp_path / "nope.torrent")
        assert result.outcome is ParseOutcome.IO_FAILURE
        assert result.metainfo is None

    def test_empty_file(self, write_torrent: WriteTorrent) -> None:
        result = parse_torrent_file(write_torrent(b""))
        assert result.outcome is ParseOutcome.IO_FAILURE

    def test_too_large(self, write_torrent: WriteTorrent) -> None:
        result = parse_torrent_file(write_torrent(MINIMAL_TORRENT), max_size=8)
        assert result.outcome is ParseOutcome.IO_FAILURE

    def test_not_a_dict(self, write_torrent: WriteTorrent) -> None:
        result = parse_torrent_file(write_torrent(b"li1ei2ee"))
        assert result.outcome is ParseOutcome.INVALID_FORMAT

    def test_torrent_to_magnet(self, write_torrent: WriteTorrent) -> None:
        assert torrent_to_magnet(write_torrent(MINIMAL_TORRENT)) == MINIMAL_MAGNET

    def test_torrent_to_magnet_failure_is_empty(self, tmp_path: Path) -> None:
        assert torrent_to_magnet(tmp_path / "missing.torrent") == ""

    def test_extract_infohash(self, write_torrent: WriteTorrent) -> None:
        assert extract_infohash(write_torrent(SINGLE_FILE_TORRENT)) == SINGLE_FILE_INFOHASH

    def test_extract_infohash_same_content_same_hash(self, write_torrent: WriteTorrent) -> None:
        """Different announce URLs, same info dict."""
        path1 = write_torrent(b"d8:announce9:http://t14:info" + MINIMAL_INFO + b"e", "a.torrent")
        path2 = write_torrent(b"d8:announce9:http://t24:info" + MINIMAL_INFO + b"e", "b.torrent")
        assert extract_infohash(path1) == extract_infohash(path2) == MINIMAL_INFOHASH

    def test_extract_infohash_invalid(self, write_torrent: WriteTorrent) -> None:
        assert extract_infohash(write_torrent(b"not a torrent")) is None
