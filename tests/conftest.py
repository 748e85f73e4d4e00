"""Shared torrent fixtures."""
import pytest

from benstruct.encoder import encode

ANNOUNCE = "http://tracker.example/announce"
PIECES = b"\x01" * 20 + b"\x02" * 20

# Info keys deliberately out of order: name, piece length, length, pieces.
NON_CANONICAL_INFO = (
    b"d4:name5:a.txt12:piece lengthi64e6:lengthi100e6:pieces20:"
    + b"\xaa" * 20
    + b"e"
)
NON_CANONICAL_TORRENT = b"d8:announce31:" + ANNOUNCE.encode() + b"4:info" + NON_CANONICAL_INFO + b"e"


@pytest.fixture
def single_file_dict():
    return {
        "announce": ANNOUNCE,
        "info": {
            "length": 100,
            "name": "a.txt",
            "piece length": 64,
            "pieces": PIECES,
        },
    }


@pytest.fixture
def single_file_raw(single_file_dict):
    return encode(single_file_dict)


@pytest.fixture
def multi_file_dict():
    return {
        "announce": ANNOUNCE,
        "announce-list": [[ANNOUNCE], [], ["udp://backup.example:80"]],
        "comment": "two files",
        "created by": "benstruct tests",
        "creation date": 1700000000,
        "info": {
            "files": [
                {"length": 50, "path": ["docs", "readme.txt"]},
                {"length": 30, "path": ["data.bin"]},
            ],
            "name": "bundle",
            "piece length": 32,
            "pieces": b"\x03" * 60,
            "private": 1,
        },
    }


@pytest.fixture
def multi_file_raw(multi_file_dict):
    return encode(multi_file_dict)


@pytest.fixture
def non_canonical_info():
    return NON_CANONICAL_INFO


@pytest.fixture
def non_canonical_raw():
    return NON_CANONICAL_TORRENT
