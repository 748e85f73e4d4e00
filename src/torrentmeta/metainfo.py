"""
Extraction of typed torrent metadata from a decoded bencode tree.
"""
import logging
from typing import Optional

from benstruct import decode
from benstruct.decoder import DEFAULT_MAX_DEPTH
from benstruct.structure import BencodeDict

from .errors import (
    EmptyFilePath,
    InvalidFieldValue,
    InvalidPieceHashLength,
    MissingField,
    NotADictionary,
)
from .infohash import compute_info_hash
from .models import (
    PIECE_HASH_LEN,
    FileEntry,
    InfoDict,
    MultiFileLayout,
    SingleFileLayout,
    TorrentMetainfo,
)

logger = logging.getLogger(__name__)


def _require(d: BencodeDict, key: str, path: str):
    value = d.get(key)
    if value is None:
        raise MissingField(path)
    return value


def _optional_text(d: BencodeDict, key: str, path: str) -> Optional[str]:
    value = d.get(key)
    return value.as_text(path) if value is not None else None


def _length(d: BencodeDict, path: str) -> int:
    length = _require(d, "length", path).as_int(path)
    if length < 0:
        raise InvalidFieldValue(path, "must not be negative", length)
    return length


def split_pieces(blob: bytes):
    """Splits the concatenated piece hashes into 20-byte chunks, in order."""
    if len(blob) % PIECE_HASH_LEN:
        raise InvalidPieceHashLength(len(blob), PIECE_HASH_LEN)
    return tuple(blob[i:i+PIECE_HASH_LEN] for i in range(0, len(blob), PIECE_HASH_LEN))


def _extract_files(files_b):
    files = []
    for idx, f_entry in enumerate(files_b.as_list("info.files")):
        where = f"info.files[{idx}]"
        entry = f_entry.as_dict(where)

        length = _length(entry, f"{where}.length")

        segments = _require(entry, "path", f"{where}.path").as_list(f"{where}.path")
        if not segments:
            raise EmptyFilePath(f"{where}.path")
        parts = tuple(seg.as_text(f"{where}.path[{j}]") for j, seg in enumerate(segments))

        files.append(FileEntry(length=length, path=parts))
    return tuple(files)


def _extract_announce_list(value):
    # Empty tiers carry no trackers and are dropped.
    tiers = []
    for t, tier in enumerate(value.as_list("announce-list")):
        urls = tuple(
            u.as_text(f"announce-list[{t}][{j}]")
            for j, u in enumerate(tier.as_list(f"announce-list[{t}]"))
        )
        if urls:
            tiers.append(urls)
    return tuple(tiers) or None


def extract_info(info: BencodeDict) -> InfoDict:
    """Maps the info dictionary onto InfoDict, validating every field it reads."""
    piece_length = _require(info, "piece length", "info.piece length").as_int("info.piece length")
    if piece_length <= 0:
        raise InvalidFieldValue("info.piece length", "must be positive", piece_length)

    pieces = split_pieces(_require(info, "pieces", "info.pieces").as_bytes("info.pieces"))
    name = _optional_text(info, "name", "info.name")

    if "files" in info:
        layout = MultiFileLayout(files=_extract_files(info["files"]))
    else:
        layout = SingleFileLayout(length=_length(info, "info.length"))

    private_b = info.get("private")
    private = bool(private_b.as_int("info.private")) if private_b is not None else False

    return InfoDict(
        piece_length=piece_length,
        name=name,
        pieces=pieces,
        layout=layout,
        private=private,
    )


def extract_metainfo(root, info_hash: Optional[bytes] = None) -> TorrentMetainfo:
    """
    Maps a decoded top-level dictionary onto TorrentMetainfo.

    The tree is only read. ``info_hash`` is stored as given; compute it from
    the raw bytes with ``compute_info_hash`` (or use ``parse_torrent``).
    """
    if not isinstance(root, BencodeDict):
        raise NotADictionary(getattr(root, "kind", type(root).__name__))

    announce = _require(root, "announce", "announce").as_text("announce")
    info = extract_info(_require(root, "info", "info").as_dict("info"))

    announce_list_b = root.get("announce-list")
    creation_b = root.get("creation date")

    meta = TorrentMetainfo(
        announce=announce,
        info=info,
        info_hash=info_hash,
        announce_list=_extract_announce_list(announce_list_b) if announce_list_b is not None else None,
        comment=_optional_text(root, "comment", "comment"),
        created_by=_optional_text(root, "created by", "created by"),
        creation_date=creation_b.as_int("creation date") if creation_b is not None else None,
    )
    logger.debug("Extracted %r", meta)
    return meta


def parse_torrent(raw: bytes, strict: bool = False, max_depth: int = DEFAULT_MAX_DEPTH) -> TorrentMetainfo:
    """
    Decode a .torrent file's bytes into TorrentMetainfo with its info hash.

    The hash is taken over the original info bytes, not over a re-encoding.
    """
    root = decode(raw, strict=strict, max_depth=max_depth)
    return extract_metainfo(root, info_hash=compute_info_hash(raw, root))
