"""
Torrent metainfo package: typed metadata, info hash and announce URLs.
"""
from .announce import build_announce_url
from .errors import (
    EmptyFilePath,
    InfoSpanUnavailable,
    InvalidEncoding,
    InvalidFieldValue,
    InvalidPieceHashLength,
    MetainfoError,
    MissingField,
    NotADictionary,
    WrongFieldType,
)
from .infohash import compute_info_hash, info_bytes
from .metainfo import extract_metainfo, parse_torrent
from .models import FileEntry, InfoDict, MultiFileLayout, SingleFileLayout, TorrentMetainfo

__all__ = [
    'TorrentMetainfo', 'InfoDict', 'FileEntry', 'SingleFileLayout', 'MultiFileLayout',
    'extract_metainfo', 'parse_torrent', 'compute_info_hash', 'info_bytes', 'build_announce_url',
    'MetainfoError', 'NotADictionary', 'MissingField', 'WrongFieldType', 'InvalidEncoding',
    'InvalidPieceHashLength', 'EmptyFilePath', 'InvalidFieldValue', 'InfoSpanUnavailable',
]
