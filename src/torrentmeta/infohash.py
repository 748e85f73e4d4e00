"""
Info hash computation.

The info hash is the SHA-1 of the info dictionary's bytes *exactly as they
appear in the .torrent file*. Re-encoding the decoded dictionary is not
equivalent: a torrent whose info keys are not sorted would re-encode to
different bytes and therefore a different hash than every other client.
"""
import hashlib
import logging

from benstruct.structure import BencodeDict

from .errors import InfoSpanUnavailable, MissingField, NotADictionary

logger = logging.getLogger(__name__)


def info_bytes(raw: bytes, root) -> bytes:
    """
    Slice the exact bencoded 'info' dictionary out of ``raw``.

    ``root`` must be the tree decoded from ``raw``: the slice boundaries come
    from the span the decoder recorded on the info value.
    """
    if not isinstance(root, BencodeDict):
        raise NotADictionary(getattr(root, "kind", type(root).__name__))

    info = root.get(b"info")
    if info is None:
        raise MissingField("info")
    info.as_dict("info")

    if info.span is None:
        raise InfoSpanUnavailable("the info value was not decoded from bytes")

    start, end = info.span
    if end > len(raw):
        raise InfoSpanUnavailable(f"span {start}:{end} lies outside {len(raw)} input bytes")

    chunk = bytes(raw[start:end])
    if chunk[:1] != b"d" or chunk[-1:] != b"e":
        raise InfoSpanUnavailable(f"bytes {start}:{end} do not frame a dictionary")
    return chunk


def compute_info_hash(raw: bytes, root) -> bytes:
    """Returns the 20-byte SHA-1 info hash of the torrent decoded from ``raw``."""
    digest = hashlib.sha1(info_bytes(raw, root)).digest()
    logger.debug("Computed info hash %s", digest.hex())
    return digest
