"""
Bencode decoder for BitTorrent metainfo and tracker responses.

The decoder is an index cursor over a fixed buffer, so every value it builds
can record the byte range it was parsed from. Those spans are what the info
hash is computed over.
"""
import logging
import re

from .errors import (
    DuplicateDictionaryKey,
    InvalidToken,
    MalformedByteString,
    MalformedInteger,
    NestingTooDeep,
    NonStringDictionaryKey,
    TrailingData,
    TruncatedByteString,
    UnexpectedEndOfInput,
    UnsortedDictionaryKeys,
    UnterminatedDictionary,
    UnterminatedList,
)
from .structure import INT_MAX, INT_MIN, BencodeDict, BencodeInt, BencodeList, BencodeString

logger = logging.getLogger(__name__)

# Each nesting level costs two Python frames (_parse_value + _parse_list/_parse_dict).
DEFAULT_MAX_DEPTH = 256

# Skipped between tokens in lenient mode, never inside byte string content.
WHITESPACE = b"\n\t"

_INT_RE = re.compile(rb"-?\d+")
_CANONICAL_INT_RE = re.compile(rb"0|-[1-9]\d*|[1-9]\d*")
_LENGTH_RE = re.compile(rb"\d+")

# Longest digit runs worth handing to int(); anything longer is out of range.
MAX_INT_DIGITS = len(str(INT_MAX))
MAX_LENGTH_DIGITS = 20


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into BencodeType values.

    Lenient mode (the default) accepts what real-world torrents contain:
    unsorted and duplicate dictionary keys (last value wins), leading zeros,
    newline/tab bytes between tokens, and trailing bytes after the value.
    Strict mode rejects all of these.
    """
    def __init__(self, data: bytes, strict: bool = False, max_depth: int = DEFAULT_MAX_DEPTH):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Can only decode bytes, not {type(data).__name__}")
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.data = bytes(data)
        self.strict = strict
        self.max_depth = max_depth
        self.i = 0  # cursor index

    def decode(self):
        """Main decode entry point. Decodes exactly one value."""
        result = self._parse_value(0)

        if self.i < len(self.data):
            if self.strict:
                raise TrailingData(
                    f"{len(self.data) - self.i} trailing bytes after value at index {self.i}",
                    offset=self.i,
                )
            logger.debug("Ignoring %d trailing bytes at index %d", len(self.data) - self.i, self.i)

        return result

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _peek(self) -> bytes:
        """Returns the next byte without consuming it, or b'' at end of input."""
        return self.data[self.i:self.i+1]

    def _skip_whitespace(self):
        if self.strict:
            return
        while self.i < len(self.data) and self.data[self.i] in WHITESPACE:
            self.i += 1

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self, depth: int):
        self._skip_whitespace()
        ch = self._peek()

        if not ch:
            raise UnexpectedEndOfInput(f"Unexpected end of input at index {self.i}", offset=self.i)

        if ch == b'i':
            return self._parse_int()

        if ch.isdigit(): # Bencode strings start with length, which is a digit
            return self._parse_string()

        if ch == b'l' or ch == b'd':
            if depth >= self.max_depth:
                raise NestingTooDeep(
                    f"Nesting deeper than {self.max_depth} levels at index {self.i}",
                    offset=self.i,
                    details={"max_depth": self.max_depth},
                )
            if ch == b'l':
                return self._parse_list(depth)
            return self._parse_dict(depth)

        if ch == b'e':
            raise InvalidToken(f"Unexpected terminator at index {self.i}", offset=self.i)

        raise InvalidToken(f"Invalid token at index {self.i}: {ch!r}", offset=self.i)

    def _parse_int(self):
        """Parses an integer from the Bencoded data."""
        start = self.i
        self.i += 1  # skip 'i'

        m = _INT_RE.match(self.data, self.i)
        if not m:
            raise MalformedInteger(f"Integer at index {start} has no digits", offset=start)

        if self.data[m.end():m.end()+1] != b'e':
            raise MalformedInteger(f"Integer at index {start} is not terminated by 'e'", offset=start)

        digits = m.group()
        if self.strict and not _CANONICAL_INT_RE.fullmatch(digits):
            raise MalformedInteger(f"Non-canonical integer {digits!r} at index {start}", offset=start)

        # Leading zeros (lenient mode) are dropped so int() only sees significant digits.
        significant = digits.lstrip(b"-").lstrip(b"0") or b"0"
        if len(significant) > MAX_INT_DIGITS:
            raise MalformedInteger(f"Integer at index {start} is out of 64-bit range", offset=start)
        try:
            num = -int(significant) if digits.startswith(b"-") else int(significant)
        except ValueError as exc:
            raise MalformedInteger(f"Invalid integer format at index {start}", offset=start) from exc
        if not INT_MIN <= num <= INT_MAX:
            raise MalformedInteger(f"Integer {num} at index {start} is out of 64-bit range", offset=start)

        self.i = m.end() + 1  # skip 'e'
        return BencodeInt(num, span=(start, self.i))

    def _parse_string(self):
        """Parses a byte string from the Bencoded data."""
        start = self.i

        # read length until ':'
        m = _LENGTH_RE.match(self.data, self.i)
        colon = m.end()
        if self.data[colon:colon+1] != b':':
            raise MalformedByteString(f"Expected ':' after string length at index {colon}", offset=colon)

        length_bytes = m.group()
        if self.strict and len(length_bytes) > 1 and length_bytes.startswith(b'0'):
            raise MalformedByteString(f"String length with leading zero at index {start}", offset=start)

        significant = length_bytes.lstrip(b"0") or b"0"
        if len(significant) > MAX_LENGTH_DIGITS:
            raise MalformedByteString(f"String length at index {start} is too long", offset=start)
        try:
            length = int(significant)
        except ValueError as exc:
            raise MalformedByteString(f"Invalid string length at index {start}", offset=start) from exc
        begin = colon + 1
        end = begin + length
        if end > len(self.data):
            raise TruncatedByteString(
                f"String at index {start} declares {length} bytes but only "
                f"{len(self.data) - begin} remain",
                offset=start,
                details={"declared": length, "available": len(self.data) - begin},
            )

        self.i = end
        return BencodeString(self.data[begin:end], span=(start, end))

    def _parse_list(self, depth: int):
        """Parses a list from the Bencoded data."""
        start = self.i
        self.i += 1  # skip 'l'
        items = []

        while True:
            self._skip_whitespace()
            ch = self._peek()
            if not ch:
                raise UnterminatedList(f"List starting at index {start} is not terminated", offset=start)
            if ch == b'e':
                break
            items.append(self._parse_value(depth + 1))

        self.i += 1  # skip 'e'
        return BencodeList(items, span=(start, self.i))

    def _parse_dict(self, depth: int):
        """Parses a dictionary from the Bencoded data."""
        start = self.i
        self.i += 1  # skip 'd'
        obj = {}
        last_key = None

        while True:
            self._skip_whitespace()
            ch = self._peek()
            if not ch:
                raise UnterminatedDictionary(
                    f"Dictionary starting at index {start} is not terminated", offset=start)
            if ch == b'e':
                break

            # keys MUST be strings
            key_pos = self.i
            if not ch.isdigit():
                raise NonStringDictionaryKey(
                    f"Dictionary key at index {key_pos} is not a byte string", offset=key_pos)
            key = self._parse_string().value
            try:
                key.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise NonStringDictionaryKey(
                    f"Dictionary key at index {key_pos} is not valid UTF-8: {key!r}",
                    offset=key_pos) from exc

            self._check_key_order(key, last_key, obj, key_pos)
            last_key = key

            self._skip_whitespace()
            if not self._peek():
                raise UnterminatedDictionary(
                    f"Dictionary starting at index {start} ends after key {key!r}", offset=start)
            obj[key] = self._parse_value(depth + 1)

        self.i += 1  # skip 'e'
        return BencodeDict(obj, span=(start, self.i))

    def _check_key_order(self, key: bytes, last_key, seen: dict, pos: int):
        if key in seen:
            if self.strict:
                raise DuplicateDictionaryKey(f"Duplicate key {key!r} at index {pos}", offset=pos)
            logger.debug("Duplicate key %r at index %d, last value wins", key, pos)
        elif last_key is not None and key < last_key:
            if self.strict:
                raise UnsortedDictionaryKeys(
                    f"Key {key!r} at index {pos} sorts before {last_key!r}", offset=pos)
            logger.debug("Unsorted key %r at index %d", key, pos)


def decode(data: bytes, strict: bool = False, max_depth: int = DEFAULT_MAX_DEPTH):
    """
    Convenience function to decode Bencoded data.
    """
    return BencodeDecoder(data, strict=strict, max_depth=max_depth).decode()
