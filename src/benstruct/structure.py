"""
Data structures for representing Bencoded types.

Values are immutable once built. Each one may carry the half-open byte range
(``span``) it was decoded from; spans take no part in equality.
"""
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterator, Optional, Tuple, Union

from .errors import InvalidEncoding, WrongFieldType

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
]

Span = Tuple[int, int]

# Integers are signed 64-bit.
INT_MIN = -2**63
INT_MAX = 2**63 - 1


def key_bytes(key: Union[bytes, str]) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    raise TypeError(f"Dictionary keys must be bytes or str, not {type(key).__name__}")


class BencodeType:
    """Base class for all Bencode data types."""
    __slots__ = ("value", "span")

    kind = "value"

    def __init__(self, value, span: Optional[Span] = None):
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "span", span)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if not isinstance(other, BencodeType):
            return NotImplemented
        return type(self) is type(other) and self.value == other.value

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"

    # --------------------------
    # Typed accessors
    # --------------------------

    def _wrong(self, field: Optional[str], expected: str):
        return WrongFieldType(field, expected, self.kind)

    def as_int(self, field: Optional[str] = None) -> int:
        raise self._wrong(field, BencodeInt.kind)

    def as_bytes(self, field: Optional[str] = None) -> bytes:
        raise self._wrong(field, BencodeString.kind)

    def as_text(self, field: Optional[str] = None, encoding: str = "utf-8") -> str:
        raise self._wrong(field, BencodeString.kind)

    def as_list(self, field: Optional[str] = None) -> Tuple["BencodeType", ...]:
        raise self._wrong(field, BencodeList.kind)

    def as_dict(self, field: Optional[str] = None) -> "BencodeDict":
        raise self._wrong(field, BencodeDict.kind)

    def to_python(self) -> Any:
        """Strips the wrappers: returns plain int / bytes / list / dict."""
        return self.value


class BencodeInt(BencodeType):
    """Represents a Bencoded integer."""
    __slots__ = ()

    kind = "integer"

    def __init__(self, value: int, span: Optional[Span] = None):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        if not INT_MIN <= value <= INT_MAX:
            raise ValueError(f"BencodeInt {value} is outside the signed 64-bit range.")
        super().__init__(value, span)

    def __hash__(self):
        return hash((BencodeInt, self.value))

    def as_int(self, field=None):
        return self.value


class BencodeString(BencodeType):
    """Represents a Bencoded byte string."""
    __slots__ = ()

    kind = "byte string"

    def __init__(self, value: bytes, span: Optional[Span] = None):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeString requires bytes.")
        super().__init__(bytes(value), span)

    def __hash__(self):
        return hash((BencodeString, self.value))

    @property
    def length(self) -> int:
        return len(self.value)

    def as_bytes(self, field=None):
        return self.value

    def as_text(self, field=None, encoding="utf-8"):
        try:
            return self.value.decode(encoding)
        except UnicodeDecodeError as exc:
            raise InvalidEncoding(field, encoding) from exc


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    __slots__ = ()

    kind = "list"

    def __init__(self, value, span: Optional[Span] = None):
        if not isinstance(value, (list, tuple)):
            raise TypeError("BencodeList requires a list.")
        items = tuple(value)
        for item in items:
            if not isinstance(item, BencodeType):
                raise TypeError("BencodeList items must be Bencode values.")
        super().__init__(items, span)

    def __hash__(self):
        return hash((BencodeList, self.value))

    def __len__(self):
        return len(self.value)

    def __iter__(self) -> Iterator[BencodeType]:
        return iter(self.value)

    def __getitem__(self, index):
        return self.value[index]

    def as_list(self, field=None):
        return self.value

    def to_python(self):
        return [item.to_python() for item in self.value]


class BencodeDict(BencodeType):
    """
    Represents a Bencoded dictionary.

    Keys are stored as bytes in the order they were given; lookups accept
    str or bytes. Every key must be valid UTF-8 text.
    """
    __slots__ = ()

    kind = "dictionary"

    def __init__(self, value: Mapping, span: Optional[Span] = None):
        if not isinstance(value, Mapping):
            raise TypeError("BencodeDict requires a dict.")
        items = {}
        for k, v in value.items():
            key = key_bytes(k)
            try:
                key.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ValueError(f"BencodeDict key {key!r} is not valid UTF-8.") from exc
            if not isinstance(v, BencodeType):
                raise TypeError("BencodeDict values must be Bencode values.")
            items[key] = v
        super().__init__(MappingProxyType(items), span)

    def __eq__(self, other):
        if not isinstance(other, BencodeType):
            return NotImplemented
        return type(other) is BencodeDict and dict(self.value) == dict(other.value)

    __hash__ = None

    def __repr__(self):
        return f"BencodeDict({dict(self.value)!r})"

    def __len__(self):
        return len(self.value)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.value)

    def __contains__(self, key):
        return key_bytes(key) in self.value

    def __getitem__(self, key) -> BencodeType:
        return self.value[key_bytes(key)]

    def get(self, key, default=None):
        return self.value.get(key_bytes(key), default)

    def keys(self):
        return self.value.keys()

    def items(self):
        return self.value.items()

    def as_dict(self, field=None):
        return self

    def to_python(self):
        return {k: v.to_python() for k, v in self.value.items()}
