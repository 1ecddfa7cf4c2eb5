"""
Catalog Loaders

Turns the raw rows of each catalog file into channel, movie and episodic
entities. Rows without a name/title or URL are skipped; missing files and
columns produce empty values instead of errors.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from streamcine.models import Channel, Container, Episode, EpisodicCatalog, Movie
from streamcine.services.delimited_reader import read_delimited
from streamcine.utils.identifiers import (
    MOVIE_PREFIX,
    SERIES_PREFIX,
    SOAP_OPERA_PREFIX,
    TV_PREFIX,
    EpisodicKind,
    entity_id,
    episode_id,
    slugify,
)
from streamcine.utils.logging_helpers import log_catalog_loaded, log_episodic_loaded
from streamcine.utils.name_parsing import decompose_name


logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"\d+")


@dataclass(slots=True, frozen=True)
class EpisodicConfig:
    """Per-catalog settings for the shared series/soap-opera loader"""
    kind: EpisodicKind
    id_prefix: str
    pad_width: int
    fallback_prefix: str
    noun: str


SERIES_CONFIG = EpisodicConfig(
    kind=EpisodicKind.SERIES,
    id_prefix=SERIES_PREFIX,
    pad_width=2,
    fallback_prefix="s",
    noun="series",
)

SOAP_OPERA_CONFIG = EpisodicConfig(
    kind=EpisodicKind.SOAP_OPERA,
    id_prefix=SOAP_OPERA_PREFIX,
    pad_width=3,
    fallback_prefix="n",
    noun="soap opera",
)


def _field(parts: list[str], index: int | None) -> str:
    if index is None or index >= len(parts):
        return ""
    return parts[index].strip()


def _parse_year(value: str) -> int | None:
    """Parse the leading digits of a year column ("2019", "2019 (BR)"); None if absent or zero."""
    match = _LEADING_INT_RE.match(value)
    if not match:
        return None
    return int(match.group(0)) or None


def _claim_id(item_id: str, issued_ids: set[str], label: str) -> bool:
    """Record a flat entity id; False (and a warning) if an earlier row already took it."""
    if item_id in issued_ids:
        logger.warning(f"Duplicate id {item_id} for {label!r}; row skipped")
        return False
    issued_ids.add(item_id)
    return True


def load_channels(path: Path | str) -> list[Channel]:
    """
    Load live TV channels.

    Args:
        path: Channel catalog file

    Returns:
        Channels sorted by group, then name (case-insensitive)
    """
    records = read_delimited(path, ["nome", "url"])
    if records.is_empty:
        log_catalog_loaded(logger, "TV channels", 0)
        return []

    index_col = records.column("index")
    name_col = records.column("nome")
    group_col = records.column("grupo")
    url_col = records.column("url")
    logo_col = records.column("logo", "tvg-logo")

    channels = []
    issued_ids: set[str] = set()
    for ordinal, row in enumerate(records.rows, start=1):
        parts = records.split_row(row)

        name = _field(parts, name_col)
        url = _field(parts, url_col)
        if not name or not url:
            continue

        channel_id = entity_id(TV_PREFIX, _field(parts, index_col), ordinal)
        if not _claim_id(channel_id, issued_ids, name):
            continue

        channels.append(Channel(
            id=channel_id,
            name=name,
            group=_field(parts, group_col),
            url=url,
            logo=_field(parts, logo_col),
        ))

    channels.sort(key=lambda ch: (ch.group.lower(), ch.name.lower()))
    log_catalog_loaded(logger, "TV channels", len(channels))
    return channels


def load_movies(path: Path | str, id_prefix: str = MOVIE_PREFIX) -> list[Movie]:
    """
    Load movies from the main or the personal movie catalog.

    The main catalog is sorted by genre, then title; any other prefix
    (personal movies) is sorted by title only.

    Args:
        path: Movie catalog file
        id_prefix: Catalog id prefix for the generated ids

    Returns:
        Sorted movies
    """
    label = "movies" if id_prefix == MOVIE_PREFIX else "personal movies"
    records = read_delimited(path, ["titulo", "url"])
    if records.is_empty:
        log_catalog_loaded(logger, label, 0)
        return []

    index_col = records.column("index")
    title_col = records.column("titulo")
    year_col = records.column("ano")
    genre_col = records.column("genero")
    logo_col = records.column("logo")
    backdrop_col = records.column("fundo")
    synopsis_col = records.column("sinopse")
    url_col = records.column("url")

    movies = []
    issued_ids: set[str] = set()
    for ordinal, row in enumerate(records.rows, start=1):
        parts = records.split_row(row)

        title = _field(parts, title_col)
        url = _field(parts, url_col)
        if not title or not url:
            continue

        movie_id = entity_id(id_prefix, _field(parts, index_col), ordinal)
        if not _claim_id(movie_id, issued_ids, title):
            continue

        movies.append(Movie(
            id=movie_id,
            title=title,
            url=url,
            year=_parse_year(_field(parts, year_col)),
            genre=_field(parts, genre_col),
            logo=_field(parts, logo_col),
            backdrop=_field(parts, backdrop_col),
            synopsis=_field(parts, synopsis_col),
        ))

    if id_prefix == MOVIE_PREFIX:
        movies.sort(key=lambda m: (m.genre.lower(), m.title.lower()))
    else:
        movies.sort(key=lambda m: m.title.lower())

    log_catalog_loaded(logger, label, len(movies))
    return movies


def load_episodic(path: Path | str, config: EpisodicConfig) -> EpisodicCatalog:
    """
    Load a series or soap-opera catalog, grouping episodes by parent title.

    Each row's name is decomposed into parent title, season and episode.
    Rows whose parent titles share a slug join the same container; the
    container's group and logo come from the first row that has them.

    Args:
        path: Episode catalog file
        config: Prefix, padding and fallback settings of the catalog

    Returns:
        EpisodicCatalog with containers sorted by name and episodes sorted
        by (season, episode), keeping row order for ties
    """
    catalog = EpisodicCatalog()
    records = read_delimited(path, ["nome", "url"])
    if records.is_empty:
        log_episodic_loaded(logger, config.noun, 0, 0)
        return catalog

    name_col = records.column("nome")
    group_col = records.column("grupo")
    url_col = records.column("url")
    logo_col = records.column("logo", "tvg-logo")

    # slug -> id, name, group, logo; group and logo keep the first non-empty value
    containers_by_slug: dict[str, dict[str, str]] = {}

    for row in records.rows:
        parts = records.split_row(row)

        full_name = _field(parts, name_col)
        url = _field(parts, url_col)
        if not full_name or not url:
            continue

        group = _field(parts, group_col)
        logo = _field(parts, logo_col)
        name = decompose_name(full_name, config.pad_width)

        slug = slugify(name.parent_title)
        if not slug:
            slug = f"{config.fallback_prefix}{len(containers_by_slug) + 1}"

        container = containers_by_slug.get(slug)
        if container is None:
            container = {
                "id": f"{config.id_prefix}{slug}",
                "name": name.parent_title,
                "group": group,
                "logo": logo,
            }
            containers_by_slug[slug] = container
            catalog.episodes_by_container[container["id"]] = []
        else:
            container["logo"] = container["logo"] or logo
            container["group"] = container["group"] or group

        ep_id = episode_id(container["id"], name.season, name.episode, config.pad_width)
        if ep_id in catalog.episodes_by_id:
            logger.warning(f"Duplicate {config.noun} episode id {ep_id}; keeping the later row for direct lookups")

        episode = Episode(
            id=ep_id,
            container_id=container["id"],
            container_name=name.parent_title,
            season=name.season,
            episode=name.episode,
            title=name.display_title,
            url=url,
            group=group,
            logo=logo,
        )
        catalog.episodes_by_id[ep_id] = episode
        catalog.episodes_by_container[container["id"]].append(episode)

    containers = [Container(**fields) for fields in containers_by_slug.values()]
    catalog.containers = sorted(containers, key=lambda c: c.name.lower())
    for episodes in catalog.episodes_by_container.values():
        episodes.sort(key=lambda ep: (ep.season, ep.episode))

    log_episodic_loaded(logger, config.noun, len(catalog.containers), len(catalog.episodes_by_id))
    return catalog
