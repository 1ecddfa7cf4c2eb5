"""
Episode name parsing

Splits a combined "Title [tag] S01E05" name into its parent title, season
and episode. The match is deliberately loose: anything that does not end
in an SxxEyy suffix is treated as a single-episode title.
"""
from __future__ import annotations

import re
from dataclasses import dataclass


EPISODE_NAME_PATTERN = re.compile(r"^(.+?)(?:\s*\[.*?\])?\s+S(\d+)E(\d+)$", re.IGNORECASE)


@dataclass(slots=True, frozen=True)
class MatchedName:
    parent_title: str
    season: int
    episode: int
    display_title: str


@dataclass(slots=True, frozen=True)
class UnmatchedName:
    parent_title: str
    display_title: str
    season: int = 1
    episode: int = 1


DecomposedName = MatchedName | UnmatchedName


def _parse_positive(digits: str) -> int:
    try:
        value = int(digits, 10)
    except ValueError:
        return 1
    return value or 1


def decompose_name(full_name: str, pad_width: int = 2) -> DecomposedName:
    """
    Decompose an episode name into parent title, season and episode.

    Args:
        full_name: Name column value, already trimmed
        pad_width: Zero-pad width of the episode number in the display title

    Returns:
        MatchedName when the SxxEyy suffix is present, otherwise an
        UnmatchedName carrying the whole string as title
    """
    match = EPISODE_NAME_PATTERN.match(full_name)
    if not match:
        return UnmatchedName(parent_title=full_name, display_title=full_name)

    parent_title = match.group(1).strip()
    season = _parse_positive(match.group(2))
    episode = _parse_positive(match.group(3))
    return MatchedName(
        parent_title=parent_title,
        season=season,
        episode=episode,
        display_title=f"E{episode:0{pad_width}d} - {parent_title}",
    )
