"""
Catalog Store

Holds the five in-memory catalogs for the lifetime of the process.
Each catalog is loaded on first access and never reloaded; restarting the
process is the only way to pick up file changes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from streamcine.config import CustomSettings
from streamcine.models import Channel, EpisodicCatalog, Movie
from streamcine.services.catalog_loader import (
    SERIES_CONFIG,
    SOAP_OPERA_CONFIG,
    load_channels,
    load_episodic,
    load_movies,
)
from streamcine.utils.identifiers import PERSONAL_MOVIE_PREFIX


logger = logging.getLogger(__name__)


class CatalogKind(str, Enum):
    CHANNELS = "channels"
    MOVIES = "movies"
    PERSONAL_MOVIES = "personal_movies"
    SERIES = "series"
    SOAP_OPERAS = "soap_operas"


@dataclass(slots=True, frozen=True)
class CatalogPaths:
    """Locations of the five catalog files"""
    channels: Path
    movies: Path
    personal_movies: Path
    series: Path
    soap_operas: Path

    @classmethod
    def from_settings(cls, settings: CustomSettings) -> "CatalogPaths":
        return cls(
            channels=settings.catalog_path(settings.channels_file),
            movies=settings.catalog_path(settings.movies_file),
            personal_movies=settings.catalog_path(settings.personal_movies_file),
            series=settings.catalog_path(settings.series_file),
            soap_operas=settings.catalog_path(settings.soap_operas_file),
        )

    @classmethod
    def from_directory(cls, directory: Path | str) -> "CatalogPaths":
        """Use the default file names inside a single directory."""
        directory = Path(directory)
        return cls(
            channels=directory / "canais_tv.csv",
            movies=directory / "filmes.csv",
            personal_movies=directory / "filmes_pessoais.csv",
            series=directory / "series_episodios.csv",
            soap_operas=directory / "novelas.csv",
        )


class CatalogStore:
    """
    Lazily loaded, process-lifetime catalog cache.

    One instance is built at startup and handed to request handlers.
    A catalog whose loader raises stays unloaded and the error propagates
    to the caller.
    """

    def __init__(self, paths: CatalogPaths):
        self.paths = paths
        self._loaders: dict[CatalogKind, Callable[[], Any]] = {
            CatalogKind.CHANNELS: lambda: load_channels(paths.channels),
            CatalogKind.MOVIES: lambda: load_movies(paths.movies),
            CatalogKind.PERSONAL_MOVIES: lambda: load_movies(paths.personal_movies, PERSONAL_MOVIE_PREFIX),
            CatalogKind.SERIES: lambda: load_episodic(paths.series, SERIES_CONFIG),
            CatalogKind.SOAP_OPERAS: lambda: load_episodic(paths.soap_operas, SOAP_OPERA_CONFIG),
        }
        self._cache: dict[CatalogKind, Any] = {}
        self._loaded: dict[CatalogKind, bool] = {kind: False for kind in CatalogKind}

    def ensure_loaded(self, kind: CatalogKind) -> Any:
        """
        Load a catalog if it has not been loaded yet.

        Args:
            kind: Catalog to load

        Returns:
            The cached catalog contents
        """
        if not self._loaded[kind]:
            logger.info(f"Loading catalog '{kind.value}' from {getattr(self.paths, kind.value)}")
            self._cache[kind] = self._loaders[kind]()
            self._loaded[kind] = True
        return self._cache[kind]

    def channels(self) -> list[Channel]:
        return self.ensure_loaded(CatalogKind.CHANNELS)

    def movies(self) -> list[Movie]:
        return self.ensure_loaded(CatalogKind.MOVIES)

    def personal_movies(self) -> list[Movie]:
        return self.ensure_loaded(CatalogKind.PERSONAL_MOVIES)

    def series(self) -> EpisodicCatalog:
        return self.ensure_loaded(CatalogKind.SERIES)

    def soap_operas(self) -> EpisodicCatalog:
        return self.ensure_loaded(CatalogKind.SOAP_OPERAS)

    def preload(self) -> None:
        """Load every catalog up front."""
        for kind in CatalogKind:
            self.ensure_loaded(kind)

    def is_loaded(self, kind: CatalogKind) -> bool:
        return self._loaded[kind]

    def loaded_catalogs(self) -> list[str]:
        return [kind.value for kind in CatalogKind if self._loaded[kind]]
