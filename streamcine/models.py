"""
Catalog entity models

In-memory representations of the rows loaded from the catalog files.
"""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class Channel:
    """Live TV channel"""
    id: str
    name: str
    group: str
    url: str
    logo: str = ""


@dataclass(slots=True, frozen=True)
class Movie:
    """Movie from either the main catalog or the personal (requested) catalog"""
    id: str
    title: str
    url: str
    year: int | None = None
    genre: str = ""
    logo: str = ""
    backdrop: str = ""
    synopsis: str = ""


@dataclass(slots=True, frozen=True)
class Container:
    """Series or soap opera owning an ordered list of episodes.

    Group and logo come from the first row of the container that
    supplies them.
    """
    id: str
    name: str
    group: str = ""
    logo: str = ""


@dataclass(slots=True, frozen=True)
class Episode:
    """Single episode; refers back to its container by id"""
    id: str
    container_id: str
    container_name: str
    season: int
    episode: int
    title: str
    url: str
    group: str = ""
    logo: str = ""


@dataclass(slots=True)
class EpisodicCatalog:
    """Grouped result of loading a series or soap-opera file"""
    containers: list[Container] = field(default_factory=list)
    episodes_by_container: dict[str, list[Episode]] = field(default_factory=dict)
    episodes_by_id: dict[str, Episode] = field(default_factory=dict)

    def find_container(self, container_id: str) -> Container | None:
        for container in self.containers:
            if container.id == container_id:
                return container
        return None

    def episodes_for(self, container_id: str) -> list[Episode]:
        return self.episodes_by_container.get(container_id, [])

    def find_episode(self, episode_id: str) -> Episode | None:
        return self.episodes_by_id.get(episode_id)


__all__ = ["Channel", "Movie", "Container", "Episode", "EpisodicCatalog"]
