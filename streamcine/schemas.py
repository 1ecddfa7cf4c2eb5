from pydantic import BaseModel, ConfigDict, Field


class AddonModel(BaseModel):
    """Base for protocol payloads; fields serialize under their camelCase aliases"""
    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class MetaPreview(AddonModel):
    """Catalog entry summary"""
    id: str = Field(..., description="Catalog-prefixed entry ID")
    type: str = Field(..., description="Media type: tv, movie or series")
    name: str
    poster: str
    poster_shape: str = Field("poster", serialization_alias="posterShape")
    description: str | None = None
    year: int | None = None
    genres: list[str] = Field(default_factory=list)


class Video(AddonModel):
    """Single episode of a series or soap opera"""
    id: str
    title: str
    season: int
    episode: int


class MetaDetail(MetaPreview):
    """Full entry details; series carry their episodes as videos"""
    background: str | None = None
    videos: list[Video] | None = None


class Stream(AddonModel):
    """Playable stream descriptor"""
    title: str
    url: str


class CatalogResponse(AddonModel):
    metas: list[MetaPreview] = Field(default_factory=list)


class MetaResponse(AddonModel):
    meta: MetaDetail | None = None

    def to_payload(self) -> dict:
        # "meta": null is part of the not-found response
        return {"meta": self.meta.to_payload() if self.meta else None}


class StreamResponse(AddonModel):
    streams: list[Stream] = Field(default_factory=list)


class ManifestCatalog(AddonModel):
    type: str
    id: str
    name: str
    extra: list[dict] = Field(default_factory=list)


class ManifestResource(AddonModel):
    name: str
    types: list[str]
    id_prefixes: list[str] | None = Field(None, serialization_alias="idPrefixes")


class BehaviorHints(AddonModel):
    configurable: bool = False
    configuration_required: bool = Field(False, serialization_alias="configurationRequired")


class Manifest(AddonModel):
    """Addon manifest describing catalogs and supported resources"""
    id: str
    version: str
    name: str
    description: str
    logo: str
    resources: list[ManifestResource]
    types: list[str]
    catalogs: list[ManifestCatalog]
    behavior_hints: BehaviorHints = Field(default_factory=BehaviorHints, serialization_alias="behaviorHints")
