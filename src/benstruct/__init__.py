"""
Bencode package for encoding and decoding BitTorrent data.
"""
from .decoder import DEFAULT_MAX_DEPTH, BencodeDecoder, decode
from .encoder import encode
from .errors import (
    BencodeDecodeError,
    BencodeError,
    BencodeValueError,
    InvalidEncoding,
    WrongFieldType,
)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

__all__ = [
    'decode', 'encode', 'BencodeDecoder', 'DEFAULT_MAX_DEPTH',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict',
    'BencodeError', 'BencodeDecodeError', 'BencodeValueError', 'WrongFieldType', 'InvalidEncoding',
]
