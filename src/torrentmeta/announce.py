"""
Tracker announce URL construction.

Only builds the request URL; sending it is up to the caller's transport.
"""
from typing import Optional

from .models import TorrentMetainfo

DEFAULT_PORT = 6881
PEER_ID_LEN = 20


def pct_encode(b: bytes) -> str:
    # Correct percent-encoding for trackers: %HH per byte
    return ''.join(f'%{byte:02X}' for byte in b)


def build_announce_url(
    meta: TorrentMetainfo,
    peer_id: bytes,
    port: int = DEFAULT_PORT,
    uploaded: int = 0,
    downloaded: int = 0,
    left: Optional[int] = None,
    event: Optional[str] = "started",
    compact: bool = True,
    url: Optional[str] = None,
) -> str:
    url = url if url else meta.announce
    if not url:
        raise ValueError("No announce URL provided")
    if meta.info_hash is None:
        raise ValueError("Torrent has no info hash; build it with TorrentMetainfo.from_bytes")
    if len(peer_id) != PEER_ID_LEN:
        raise ValueError(f"peer_id must be {PEER_ID_LEN} bytes, got {len(peer_id)}")

    params = {
        "info_hash": meta.info_hash,
        "peer_id": peer_id,
        "port": port,
        "uploaded": uploaded,
        "downloaded": downloaded,
        "left": meta.total_length if left is None else left,
        "compact": 1 if compact else 0,
    }
    if event:
        params["event"] = event

    encoded = {}
    for k, v in params.items():
        if isinstance(v, bytes):
            encoded[k] = pct_encode(v)
        else:
            encoded[k] = str(v)

    query = "&".join(f"{k}={v}" for k, v in encoded.items())
    sep = "&" if "?" in url else "?"
    return f"{url}{sep}{query}"
