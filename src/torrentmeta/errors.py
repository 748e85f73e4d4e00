"""
Errors raised while turning a decoded torrent into TorrentMetainfo.

Every extraction failure is a BencodeValueError: the torrent-specific ones
below, plus WrongFieldType and InvalidEncoding raised by the typed accessors
of the value model.
"""
from benstruct.errors import BencodeValueError, InvalidEncoding, WrongFieldType

__all__ = [
    "MetainfoError",
    "NotADictionary",
    "MissingField",
    "WrongFieldType",
    "InvalidEncoding",
    "InvalidPieceHashLength",
    "EmptyFilePath",
    "InvalidFieldValue",
    "InfoSpanUnavailable",
]


class MetainfoError(BencodeValueError):
    """Base exception for torrent metainfo errors."""


class NotADictionary(MetainfoError):
    def __init__(self, actual: str):
        super().__init__(f"Torrent root must be a dictionary, got {actual}")
        self.actual = actual


class MissingField(MetainfoError):
    def __init__(self, field: str):
        super().__init__(f"Torrent missing required field '{field}'", field)


class InvalidPieceHashLength(MetainfoError):
    def __init__(self, length: int, hash_len: int):
        super().__init__(
            f"'info.pieces' is {length} bytes, not a multiple of {hash_len}",
            "info.pieces",
            {"length": length},
        )
        self.length = length


class EmptyFilePath(MetainfoError):
    def __init__(self, field: str):
        super().__init__(f"'{field}' is empty; a file needs at least one path segment", field)


class InvalidFieldValue(MetainfoError):
    def __init__(self, field: str, reason: str, value=None):
        super().__init__(f"'{field}' {reason}", field, {"value": value} if value is not None else None)
        self.reason = reason


class InfoSpanUnavailable(MetainfoError):
    """The original bytes of the info dictionary cannot be located."""

    def __init__(self, reason: str):
        super().__init__(f"Cannot locate raw 'info' bytes: {reason}", "info")
