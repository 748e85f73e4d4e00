"""
Exception hierarchy for bencode decoding and typed value access.
"""
from typing import Any, Dict, Optional


class BencodeError(Exception):
    """Base exception for all bencode errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


# --------------------------
# Decode-time errors
# --------------------------

class BencodeDecodeError(BencodeError):
    """Raised when the input is not valid bencode. Carries the byte offset."""

    def __init__(self, message: str, offset: int, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.offset = offset


class MalformedInteger(BencodeDecodeError):
    """Integer without digits, with junk in it, or without its 'e'."""


class MalformedByteString(BencodeDecodeError):
    """Byte string length not followed by ':'."""


class TruncatedByteString(BencodeDecodeError):
    """Fewer bytes remain than the byte string declares."""


class UnterminatedList(BencodeDecodeError):
    """Input ended inside a list."""


class UnterminatedDictionary(BencodeDecodeError):
    """Input ended inside a dictionary."""


class NonStringDictionaryKey(BencodeDecodeError):
    """Dictionary key is not a byte string, or is not valid UTF-8 text."""


class NestingTooDeep(BencodeDecodeError):
    """Lists/dictionaries nested deeper than the decoder allows."""


class InvalidToken(BencodeDecodeError):
    """Byte that cannot start a value."""


class UnexpectedEndOfInput(BencodeDecodeError):
    """Input ended where a value was expected."""


class TrailingData(BencodeDecodeError):
    """Bytes left over after the top-level value (strict mode)."""


class DuplicateDictionaryKey(BencodeDecodeError):
    """Same key twice in one dictionary (strict mode)."""


class UnsortedDictionaryKeys(BencodeDecodeError):
    """Dictionary keys not in ascending byte order (strict mode)."""


# --------------------------
# Value access errors
# --------------------------

class BencodeValueError(BencodeError):
    """Raised when a decoded value does not have the shape a reader asked for."""

    def __init__(self, message: str, field: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.field = field


class WrongFieldType(BencodeValueError):
    def __init__(self, field: Optional[str], expected: str, actual: str):
        where = f"'{field}'" if field else "value"
        super().__init__(f"Expected {where} to be {expected}, got {actual}", field)
        self.expected = expected
        self.actual = actual


class InvalidEncoding(BencodeValueError):
    def __init__(self, field: Optional[str], encoding: str = "utf-8"):
        where = f"'{field}'" if field else "value"
        super().__init__(f"{where} is not valid {encoding} text", field)
        self.encoding = encoding
