"""
Identifier utilities

Builds slugs and catalog identifiers, and parses incoming request ids into
a closed set of id kinds so handlers never sniff string prefixes themselves.
"""
from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from enum import Enum


TV_PREFIX = "catalog_tv_"
MOVIE_PREFIX = "catalog_movie_"
PERSONAL_MOVIE_PREFIX = "catalog_pmovie_"
SERIES_PREFIX = "catalog_series_"
SOAP_OPERA_PREFIX = "catalog_novela_"

ID_PREFIXES = [
    TV_PREFIX,
    MOVIE_PREFIX,
    PERSONAL_MOVIE_PREFIX,
    SERIES_PREFIX,
    SOAP_OPERA_PREFIX,
]

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


class EpisodicKind(str, Enum):
    """Which episodic catalog a container or episode id belongs to"""
    SERIES = "series"
    SOAP_OPERA = "soap_opera"


def slugify(text: str | None) -> str:
    """
    Normalize a display name into a grouping key.

    Accents are reduced to their base letters, every run of characters
    outside [a-z0-9] becomes a single hyphen and edge hyphens are removed.

    Args:
        text: Display name (None is treated as empty)

    Returns:
        Slug string, possibly empty
    """
    decomposed = unicodedata.normalize("NFD", (text or "").lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM_RE.sub("-", stripped).strip("-")


def entity_id(prefix: str, explicit_index: str, ordinal: int) -> str:
    """Build a flat-catalog id from the index column, falling back to the 1-based row ordinal."""
    return f"{prefix}{explicit_index or ordinal}"


def episode_id(container_id: str, season: int, episode: int, pad_width: int) -> str:
    return f"{container_id}_s{season:02d}e{episode:0{pad_width}d}"


@dataclass(slots=True, frozen=True)
class ChannelId:
    value: str


@dataclass(slots=True, frozen=True)
class MovieId:
    value: str


@dataclass(slots=True, frozen=True)
class PersonalMovieId:
    value: str


@dataclass(slots=True, frozen=True)
class ContainerId:
    value: str
    kind: EpisodicKind


@dataclass(slots=True, frozen=True)
class EpisodeId:
    value: str
    kind: EpisodicKind
    container_id: str


CatalogId = ChannelId | MovieId | PersonalMovieId | ContainerId | EpisodeId

_EPISODIC_PREFIXES = {
    SERIES_PREFIX: EpisodicKind.SERIES,
    SOAP_OPERA_PREFIX: EpisodicKind.SOAP_OPERA,
}


def parse_catalog_id(raw: str | None) -> CatalogId | None:
    """
    Parse a request id into its catalog id kind.

    Slugs never contain underscores, so an underscore after an episodic
    prefix separates the container slug from the episode suffix.

    Args:
        raw: Id received from the client

    Returns:
        Parsed id, or None when no catalog prefix matches
    """
    if not raw:
        return None

    if raw.startswith(TV_PREFIX) and len(raw) > len(TV_PREFIX):
        return ChannelId(raw)
    if raw.startswith(MOVIE_PREFIX) and len(raw) > len(MOVIE_PREFIX):
        return MovieId(raw)
    if raw.startswith(PERSONAL_MOVIE_PREFIX) and len(raw) > len(PERSONAL_MOVIE_PREFIX):
        return PersonalMovieId(raw)

    for prefix, kind in _EPISODIC_PREFIXES.items():
        if not raw.startswith(prefix):
            continue
        slug, separator, _ = raw[len(prefix):].partition("_")
        if not slug:
            return None
        if separator:
            return EpisodeId(raw, kind, f"{prefix}{slug}")
        return ContainerId(raw, kind)

    return None
