"""
Addon Service

Answers the catalog, meta and stream requests of the addon protocol from
the in-memory catalog store. Unknown types or ids always produce an empty
response, never an exception.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from streamcine.config import CustomSettings
from streamcine.models import Channel, Container, Episode, EpisodicCatalog, Movie
from streamcine.schemas import (
    BehaviorHints,
    CatalogResponse,
    Manifest,
    ManifestCatalog,
    ManifestResource,
    MetaDetail,
    MetaPreview,
    MetaResponse,
    Stream,
    StreamResponse,
    Video,
)
from streamcine.services.catalog_store import CatalogKind, CatalogStore
from streamcine.utils.identifiers import (
    ID_PREFIXES,
    CatalogId,
    ChannelId,
    ContainerId,
    EpisodeId,
    EpisodicKind,
    MovieId,
    PersonalMovieId,
    parse_catalog_id,
)
from streamcine.utils.logging_helpers import log_request, log_stream_selected
from streamcine.utils.stream_urls import pick_best_stream


logger = logging.getLogger(__name__)

TV = "tv"
MOVIE = "movie"
SERIES = "series"
MEDIA_TYPES = [TV, MOVIE, SERIES]

PERSONAL_GENRE = "Pedido"
SOAP_OPERA_GENRE = "Novela"


@dataclass(slots=True, frozen=True)
class CatalogDefinition:
    media_type: str
    catalog_id: str
    kind: CatalogKind
    title: str


CATALOGS = [
    CatalogDefinition(TV, "channels", CatalogKind.CHANNELS, "IPTV"),
    CatalogDefinition(MOVIE, "movies", CatalogKind.MOVIES, "Filmes"),
    CatalogDefinition(MOVIE, "personal_movies", CatalogKind.PERSONAL_MOVIES, "Pedidos"),
    CatalogDefinition(SERIES, "series", CatalogKind.SERIES, "Séries"),
    CatalogDefinition(SERIES, "soap_operas", CatalogKind.SOAP_OPERAS, "Novelas"),
]


def build_manifest(settings: CustomSettings) -> Manifest:
    """Describe the addon, its five catalogs and the id prefixes it serves."""
    return Manifest(
        id=settings.addon_id,
        version=settings.addon_version,
        name=settings.addon_name,
        description=settings.addon_description,
        logo=settings.default_poster,
        resources=[
            ManifestResource(name="catalog", types=MEDIA_TYPES),
            ManifestResource(name="meta", types=MEDIA_TYPES, id_prefixes=ID_PREFIXES),
            ManifestResource(name="stream", types=MEDIA_TYPES, id_prefixes=ID_PREFIXES),
        ],
        types=MEDIA_TYPES,
        catalogs=[
            ManifestCatalog(
                type=catalog.media_type,
                id=catalog.catalog_id,
                name=f"{settings.addon_name} {catalog.title}",
            )
            for catalog in CATALOGS
        ],
        behavior_hints=BehaviorHints(configurable=False, configuration_required=False),
    )


class AddonService:
    """Request handlers bound to one catalog store"""

    def __init__(self, store: CatalogStore, default_poster: str):
        self.store = store
        self.default_poster = default_poster

    # Catalog

    def list_catalog(self, media_type: str, catalog_id: str) -> CatalogResponse:
        """
        List the entries of one catalog.

        Args:
            media_type: tv, movie or series
            catalog_id: Catalog identifier from the manifest

        Returns:
            CatalogResponse, empty for unknown (type, id) pairs
        """
        definition = next(
            (c for c in CATALOGS if c.media_type == media_type and c.catalog_id == catalog_id),
            None,
        )
        if definition is None:
            logger.info(f"Unknown catalog requested: type={media_type} id={catalog_id}")
            return CatalogResponse(metas=[])

        if definition.kind is CatalogKind.CHANNELS:
            metas = [self._channel_preview(ch) for ch in self.store.channels()]
        elif definition.kind is CatalogKind.MOVIES:
            metas = [self._movie_preview(m, personal=False) for m in self.store.movies()]
        elif definition.kind is CatalogKind.PERSONAL_MOVIES:
            metas = [self._movie_preview(m, personal=True) for m in self.store.personal_movies()]
        elif definition.kind is CatalogKind.SERIES:
            metas = [self._container_preview(c, soap_opera=False) for c in self.store.series().containers]
        else:
            metas = [self._container_preview(c, soap_opera=True) for c in self.store.soap_operas().containers]

        logger.info(f"Catalog '{catalog_id}' requested: {len(metas)} entries")
        return CatalogResponse(metas=metas)

    # Meta

    def get_meta(self, media_type: str, item_id: str) -> MetaResponse:
        """
        Describe a single entry.

        Series and soap-opera episode ids resolve to their container, with
        every episode listed as a video.

        Args:
            media_type: Requested media type; must match the id's catalog
            item_id: Entry id

        Returns:
            MetaResponse with meta set to None when not found
        """
        log_request(logger, "Meta", media_type, item_id)
        parsed = self._parse_for_type(media_type, item_id)

        meta = None
        if isinstance(parsed, ChannelId):
            channel = _find_by_id(self.store.channels(), parsed.value)
            if channel:
                meta = self._channel_meta(channel)
        elif isinstance(parsed, MovieId):
            movie = _find_by_id(self.store.movies(), parsed.value)
            if movie:
                meta = self._movie_meta(movie, personal=False)
        elif isinstance(parsed, PersonalMovieId):
            movie = _find_by_id(self.store.personal_movies(), parsed.value)
            if movie:
                meta = self._movie_meta(movie, personal=True)
        elif isinstance(parsed, (ContainerId, EpisodeId)):
            meta = self._container_meta(parsed)

        if meta is None:
            logger.info(f"Meta not found: type={media_type} id={item_id}")
        return MetaResponse(meta=meta)

    # Stream

    def get_streams(self, media_type: str, item_id: str) -> StreamResponse:
        """
        Resolve the playable stream of an entry.

        A container id plays its first episode in (season, episode) order.

        Args:
            media_type: Requested media type; must match the id's catalog
            item_id: Entry id

        Returns:
            StreamResponse with zero or one stream
        """
        log_request(logger, "Stream", media_type, item_id)
        parsed = self._parse_for_type(media_type, item_id)

        title = url = None
        label = ""
        if isinstance(parsed, ChannelId):
            channel = _find_by_id(self.store.channels(), parsed.value)
            if channel:
                title, url, label = channel.name, channel.url, f"channel {channel.name}"
        elif isinstance(parsed, (MovieId, PersonalMovieId)):
            movies = self.store.movies() if isinstance(parsed, MovieId) else self.store.personal_movies()
            movie = _find_by_id(movies, parsed.value)
            if movie:
                title, url, label = movie.title, movie.url, f"movie {movie.title}"
        elif isinstance(parsed, (ContainerId, EpisodeId)):
            episode = self._resolve_episode(parsed)
            if episode:
                title, url = episode.title, episode.url
                label = f"{episode.container_name} S{episode.season:02d}E{episode.episode:02d}"

        if title is None:
            logger.info(f"Stream not found: type={media_type} id={item_id}")
            return StreamResponse(streams=[])

        choice = pick_best_stream(title, url)
        if choice is None:
            return StreamResponse(streams=[])

        log_stream_selected(logger, label, url, choice.url)
        return StreamResponse(streams=[Stream(title=choice.title, url=choice.url)])

    # Helpers

    def _parse_for_type(self, media_type: str, item_id: str) -> CatalogId | None:
        parsed = parse_catalog_id(item_id)
        if parsed is None:
            return None
        if _media_type_of(parsed) != media_type:
            logger.info(f"Id {item_id} does not belong to type {media_type}")
            return None
        return parsed

    def _episodic(self, kind: EpisodicKind) -> EpisodicCatalog:
        if kind is EpisodicKind.SERIES:
            return self.store.series()
        return self.store.soap_operas()

    def _resolve_episode(self, parsed: ContainerId | EpisodeId) -> Episode | None:
        catalog = self._episodic(parsed.kind)
        if isinstance(parsed, EpisodeId):
            episode = catalog.find_episode(parsed.value)
            if episode:
                return episode
        episodes = catalog.episodes_for(parsed.value)
        return episodes[0] if episodes else None

    def _container_meta(self, parsed: ContainerId | EpisodeId) -> MetaDetail | None:
        catalog = self._episodic(parsed.kind)
        soap_opera = parsed.kind is EpisodicKind.SOAP_OPERA

        if isinstance(parsed, ContainerId):
            container = catalog.find_container(parsed.value)
            if container is None:
                return None
            episodes = catalog.episodes_for(container.id)
        else:
            episode = catalog.find_episode(parsed.value)
            if episode is None:
                return None
            container = catalog.find_container(episode.container_id) or Container(
                id=episode.container_id,
                name=episode.container_name,
                group=episode.group,
                logo=episode.logo,
            )
            episodes = catalog.episodes_for(container.id) or [episode]

        preview = self._container_preview(container, soap_opera)
        return MetaDetail(
            id=preview.id,
            type=SERIES,
            name=preview.name,
            poster=preview.poster,
            poster_shape=preview.poster_shape,
            description=container.group or (SOAP_OPERA_GENRE if soap_opera else "Série"),
            genres=preview.genres,
            background=container.logo or self.default_poster,
            videos=[
                Video(id=ep.id, title=ep.title, season=ep.season, episode=ep.episode)
                for ep in episodes
            ],
        )

    def _channel_preview(self, channel: Channel) -> MetaPreview:
        return MetaPreview(
            id=channel.id,
            type=TV,
            name=channel.name,
            poster=channel.logo or self.default_poster,
            poster_shape="square",
            description=channel.group,
            genres=[channel.group] if channel.group else [],
        )

    def _channel_meta(self, channel: Channel) -> MetaDetail:
        return MetaDetail(
            id=channel.id,
            type=TV,
            name=channel.name,
            poster=channel.logo or self.default_poster,
            poster_shape="square",
            description=channel.group or "Canal de TV",
            genres=[channel.group] if channel.group else [],
            background=channel.logo or None,
        )

    def _movie_preview(self, movie: Movie, personal: bool) -> MetaPreview:
        return MetaPreview(
            id=movie.id,
            type=MOVIE,
            name=movie.title,
            poster=movie.logo or self.default_poster,
            poster_shape="poster",
            description=movie.synopsis,
            year=movie.year,
            genres=_movie_genres(movie, personal),
        )

    def _movie_meta(self, movie: Movie, personal: bool) -> MetaDetail:
        return MetaDetail(
            id=movie.id,
            type=MOVIE,
            name=movie.title,
            poster=movie.logo or self.default_poster,
            poster_shape="poster",
            description=movie.synopsis or ("Filme de pedidos" if personal else ""),
            year=movie.year,
            genres=_movie_genres(movie, personal),
            background=movie.backdrop or movie.logo or self.default_poster,
        )

    def _container_preview(self, container: Container, soap_opera: bool) -> MetaPreview:
        fallback = [SOAP_OPERA_GENRE] if soap_opera else []
        return MetaPreview(
            id=container.id,
            type=SERIES,
            name=container.name,
            poster=container.logo or self.default_poster,
            poster_shape="poster",
            description=container.group or (SOAP_OPERA_GENRE if soap_opera else ""),
            genres=[container.group] if container.group else fallback,
        )


def _find_by_id(items: list, item_id: str):
    for item in items:
        if item.id == item_id:
            return item
    return None


def _media_type_of(parsed: CatalogId) -> str:
    if isinstance(parsed, ChannelId):
        return TV
    if isinstance(parsed, (MovieId, PersonalMovieId)):
        return MOVIE
    return SERIES


def _movie_genres(movie: Movie, personal: bool) -> list[str]:
    if movie.genre:
        return [movie.genre]
    return [PERSONAL_GENRE] if personal else []
