"""
Stream URL utilities

Rewrites Google Drive share links into direct downloads and prefers HLS
playlists over raw transport-stream files.
"""
import logging
import re
from dataclasses import dataclass


logger = logging.getLogger(__name__)

DRIVE_DOWNLOAD_URL = "https://drive.google.com/uc?export=download&id={file_id}"

_DRIVE_FILE_RE = re.compile(r"https?://drive\.google\.com/file/d/([^/]+)")
_DRIVE_OPEN_RE = re.compile(r"https?://drive\.google\.com/open\?id=([^&]+)")
_HLS_RE = re.compile(r"\.m3u8(\?|$)", re.IGNORECASE)
_TS_RE = re.compile(r"\.ts(\?|$)", re.IGNORECASE)

HLS_SUFFIX = " (HLS)"


@dataclass(slots=True, frozen=True)
class StreamChoice:
    title: str
    url: str


def normalize_drive_url(url: str | None) -> str:
    """
    Convert a Google Drive share link into a direct-download link.

    Handles "file/d/<id>/..." and "open?id=<id>" links. Any other URL
    (Dropbox ?dl=1 links, plain hosts) is returned trimmed and unchanged.
    """
    trimmed = (url or "").strip()
    if not trimmed:
        return trimmed

    for pattern in (_DRIVE_FILE_RE, _DRIVE_OPEN_RE):
        match = pattern.search(trimmed)
        if match and match.group(1):
            direct = DRIVE_DOWNLOAD_URL.format(file_id=match.group(1))
            logger.info("Converted Drive link to direct download: %s", direct)
            return direct

    return trimmed


def pick_best_stream(title: str, original_url: str | None) -> StreamChoice | None:
    """
    Choose the playable URL for an entry.

    Args:
        title: Display title of the entry
        original_url: URL as read from the catalog file

    Returns:
        StreamChoice with an "(HLS)" title suffix for HLS and rewritten .ts
        URLs, the URL unchanged for other formats, or None for an empty URL
    """
    if not original_url:
        return None

    url = normalize_drive_url(original_url)

    if _HLS_RE.search(url):
        return StreamChoice(title=f"{title}{HLS_SUFFIX}", url=url)

    if _TS_RE.search(url):
        hls_url = _TS_RE.sub(r".m3u8\1", url, count=1)
        logger.debug("Rewrote transport stream %s to %s", url, hls_url)
        return StreamChoice(title=f"{title}{HLS_SUFFIX}", url=hls_url)

    return StreamChoice(title=title, url=url)
