"""
Bencode encoder for BitTorrent metainfo and tracker responses.

Output is always canonical: dictionary keys are emitted in ascending raw
byte order. Because the decoder accepts unsorted keys by default,
``encode(decode(data)) == data`` only holds when ``data`` was canonical to
begin with. Never hash a re-encoded info dictionary; hash its original bytes
(see ``torrentmeta.infohash``).

Plain Python values (int, str, bytes, list/tuple, dict) are accepted
alongside BencodeType trees. A BencodeType tree always encodes; plain values
are checked the same way BencodeInt/BencodeDict check them on construction.
"""
from .structure import INT_MAX, INT_MIN, BencodeDict, BencodeInt, BencodeList, BencodeString, key_bytes


def encode(obj) -> bytes:
    """Encodes a Python object or BencodeType into bencoded bytes."""
    out = []
    _encode_into(obj, out)
    return b"".join(out)


def _encode_into(obj, out: list):
    if isinstance(obj, (int, BencodeInt)):
        out.append(encode_int(obj if isinstance(obj, int) else obj.value))
    elif isinstance(obj, str):
        out.append(encode_str(obj))
    elif isinstance(obj, BencodeString):
        out.append(encode_bytes(obj.value))
    elif isinstance(obj, (bytes, bytearray, memoryview)):
        out.append(encode_bytes(bytes(obj)))
    elif isinstance(obj, (list, tuple, BencodeList)):
        out.append(b"l")
        for item in obj:
            _encode_into(item, out)
        out.append(b"e")
    elif isinstance(obj, (dict, BencodeDict)):
        out.append(b"d")
        for key, value in _sorted_items(obj):
            out.append(encode_bytes(key))
            _encode_into(value, out)
        out.append(b"e")
    else:
        raise TypeError(f"Cannot bencode object of type {type(obj)}")


def _sorted_items(d):
    """Returns (key bytes, value) pairs in ascending raw byte order."""
    items = {}
    for k, v in d.items():
        key = key_bytes(k)
        if key in items:
            raise ValueError(f"Dictionary has key {key!r} more than once after normalisation")
        items[key] = v
    return sorted(items.items(), key=lambda kv: kv[0])


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    n = int(n)
    if not INT_MIN <= n <= INT_MAX:
        raise ValueError(f"Integer {n} is outside the signed 64-bit range")
    return f"i{n}e".encode()


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return str(len(b)).encode() + b":" + b


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    return encode_bytes(s.encode())
