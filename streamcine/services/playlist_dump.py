"""
Playlist Dump Service

Downloads an upstream M3U playlist and writes its entries as the
semicolon-separated channel file read by the TV catalog loader.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

import httpx

from streamcine.utils.file_operations import download_text, write_lines


logger = logging.getLogger(__name__)

PLAYLIST_HEADER = "index;nome;grupo;url"
PREVIEW_SIZE = 20

_ATTRIBUTE_RE = re.compile(r'([\w-]+)="([^"]*)"')


class PlaylistError(ValueError):
    """Raised when a downloaded playlist contains no usable entries"""


@dataclass(slots=True, frozen=True)
class PlaylistEntry:
    name: str
    group: str
    url: str


def parse_m3u(text: str) -> list[PlaylistEntry]:
    """
    Parse the #EXTINF entries of an M3U playlist.

    The entry name is the text after the attribute list, falling back to
    tvg-name and then tvg-id. The group comes from group-title or a
    preceding #EXTGRP line. The URL is the next non-comment line.

    Args:
        text: Playlist contents

    Returns:
        Entries in playlist order
    """
    entries = []
    pending: dict | None = None

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        if line.upper().startswith("#EXTINF"):
            attributes = dict(_ATTRIBUTE_RE.findall(line))
            _, _, title = _ATTRIBUTE_RE.sub("", line).partition(",")
            pending = {
                "name": title.strip() or attributes.get("tvg-name", "") or attributes.get("tvg-id", ""),
                "group": attributes.get("group-title", ""),
            }
            continue

        if line.upper().startswith("#EXTGRP:"):
            if pending is not None and not pending["group"]:
                pending["group"] = line.split(":", 1)[1].strip()
            continue

        if line.startswith("#"):
            continue

        if pending is None:
            logger.debug(f"Skipping URL without #EXTINF header: {line}")
            continue

        entries.append(PlaylistEntry(name=pending["name"], group=pending["group"], url=line))
        pending = None

    logger.info(f"Parsed {len(entries)} playlist entries")
    return entries


def _sanitize(value: str) -> str:
    return str(value).replace(";", ",")


def format_rows(entries: list[PlaylistEntry]) -> list[str]:
    """
    Render entries as channel-file lines, header first.

    Semicolons inside values become commas so every row keeps four fields.
    """
    lines = [PLAYLIST_HEADER]
    for index, entry in enumerate(entries):
        lines.append(f"{index};{_sanitize(entry.name)};{_sanitize(entry.group)};{_sanitize(entry.url)}")
    return lines


async def dump_playlist(
    url: str,
    output_path: Path,
    *,
    timeout: float = 120.0,
    max_retries: int = 3,
    preview: int = PREVIEW_SIZE,
    transport: httpx.AsyncBaseTransport | None = None
) -> list[PlaylistEntry]:
    """
    Download a playlist and write it as a channel catalog file.

    Args:
        url: Upstream M3U playlist URL
        output_path: Destination channel file

    Keyword Args:
        timeout: HTTP timeout in seconds
        max_retries: Download attempts for transient failures
        preview: Number of entries to log after writing
        transport: Optional httpx transport (used by tests)

    Returns:
        The parsed entries

    Raises:
        PlaylistError: If the playlist has no entries
        httpx.HTTPError: If the download fails
    """
    text = await download_text(url, timeout=timeout, max_retries=max_retries, transport=transport)

    entries = parse_m3u(text)
    if not entries:
        raise PlaylistError(f"No entries found in playlist {url}")

    await write_lines(output_path, format_rows(entries))
    logger.info(f"Channel file written to {output_path}")

    for index, entry in enumerate(entries[:preview]):
        logger.info(f"#{index} - {entry.name} | group: {entry.group} | url: {entry.url}")

    return entries
