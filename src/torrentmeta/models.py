"""
Typed, read-only torrent metadata.
"""
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

# SHA-1 digest size: one per piece, and the info hash itself.
PIECE_HASH_LEN = 20
INFO_HASH_LEN = 20


class FileEntry(BaseModel):
    """One file of a multi-file torrent."""

    model_config = ConfigDict(frozen=True)

    length: int = Field(..., ge=0, description="File length in bytes")
    path: Tuple[str, ...] = Field(..., min_length=1, description="Path segments")

    @property
    def full_path(self) -> str:
        return "/".join(self.path)


class SingleFileLayout(BaseModel):
    model_config = ConfigDict(frozen=True)

    length: int = Field(..., ge=0, description="File length in bytes")


class MultiFileLayout(BaseModel):
    model_config = ConfigDict(frozen=True)

    files: Tuple[FileEntry, ...] = Field(default_factory=tuple, description="File list")


class InfoDict(BaseModel):
    """The parts of the info dictionary this library understands."""

    model_config = ConfigDict(frozen=True)

    piece_length: int = Field(..., gt=0, description="Piece length in bytes")
    name: Optional[str] = Field(None, description="Suggested file or directory name")
    pieces: Tuple[bytes, ...] = Field(default_factory=tuple, description="Piece hashes")
    layout: Union[SingleFileLayout, MultiFileLayout]
    private: bool = Field(default=False, description="BEP 27 private flag")


class TorrentMetainfo(BaseModel):
    """
    Torrent metainfo extracted from a decoded .torrent file.

    ``info_hash`` is only set when the metainfo was built together with the
    raw torrent bytes (``TorrentMetainfo.from_bytes``); the hash cannot be
    recovered from the decoded tree alone.
    """

    model_config = ConfigDict(frozen=True)

    announce: str = Field(..., description="Announce URL")
    info: InfoDict
    info_hash: Optional[bytes] = Field(
        None, min_length=INFO_HASH_LEN, max_length=INFO_HASH_LEN, description="SHA-1 of raw info bytes"
    )
    announce_list: Optional[Tuple[Tuple[str, ...], ...]] = Field(None, description="Announce tiers")
    comment: Optional[str] = None
    created_by: Optional[str] = None
    creation_date: Optional[int] = None

    @classmethod
    def from_bytes(cls, raw: bytes, strict: bool = False) -> "TorrentMetainfo":
        """Decode ``raw``, extract the metainfo and hash the original info bytes."""
        from .metainfo import parse_torrent

        return parse_torrent(raw, strict=strict)

    @property
    def info_hash_hex(self) -> Optional[str]:
        return self.info_hash.hex() if self.info_hash is not None else None

    @property
    def is_multi_file(self) -> bool:
        return isinstance(self.info.layout, MultiFileLayout)

    @property
    def files(self) -> Tuple[FileEntry, ...]:
        layout = self.info.layout
        if isinstance(layout, MultiFileLayout):
            return layout.files
        return (FileEntry(length=layout.length, path=(self.info.name or "",)),)

    @property
    def total_length(self) -> int:
        return sum(f.length for f in self.files)

    @property
    def num_pieces(self) -> int:
        return len(self.info.pieces)

    @property
    def last_piece_length(self) -> int:
        return (self.total_length % self.info.piece_length) or self.info.piece_length

    def __repr__(self):
        return (
            f"TorrentMetainfo(name={self.info.name!r}, files={len(self.files)}, "
            f"pieces={self.num_pieces}, multi={self.is_multi_file}, announce={self.announce!r})"
        )
