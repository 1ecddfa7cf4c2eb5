"""
Unit tests for catalog, meta and stream request handling.
"""
import pytest

from streamcine.config import settings
from streamcine.services.addon_service import CATALOGS, AddonService, build_manifest


DEFAULT_POSTER = "http://poster/default.png"


@pytest.fixture
def service(store) -> AddonService:
    return AddonService(store, DEFAULT_POSTER)


class TestListCatalog:
    """Catalog listings."""

    def test_channels(self, service):
        metas = service.list_catalog("tv", "channels").metas

        assert [m.name for m in metas] == ["Canal B", "Canal A"]
        assert metas[0].poster == DEFAULT_POSTER
        assert metas[0].poster_shape == "square"
        assert metas[0].genres == ["Esportes"]

    def test_movies(self, service):
        metas = service.list_catalog("movie", "movies").metas

        assert [m.id for m in metas] == ["catalog_movie_3", "catalog_movie_10", "catalog_movie_11"]
        assert metas[1].year == 1998
        assert metas[1].poster == "http://l/z.png"
        assert metas[0].year is None

    def test_personal_movies_default_genre(self, service):
        metas = service.list_catalog("movie", "personal_movies").metas

        assert [m.genres for m in metas] == [["Comédia"], ["Pedido"]]

    def test_series_and_soap_operas(self, service):
        series = service.list_catalog("series", "series").metas
        soap_operas = service.list_catalog("series", "soap_operas").metas

        assert len(series) == 4
        assert series[0].genres == []
        assert [m.id for m in soap_operas] == ["catalog_novela_avenida-brasil"]
        assert soap_operas[0].genres == ["Novelas Globo"]

    def test_unknown_catalog(self, service):
        assert service.list_catalog("tv", "movies").metas == []
        assert service.list_catalog("music", "channels").metas == []


class TestGetMeta:
    """Entry details."""

    def test_channel(self, service):
        meta = service.get_meta("tv", "catalog_tv_1").meta

        assert meta.name == "Canal A"
        assert meta.description == "Noticias"
        assert meta.background is None

    def test_movie_background_falls_back(self, service):
        zorro = service.get_meta("movie", "catalog_movie_10").meta
        alien = service.get_meta("movie", "catalog_movie_11").meta

        assert zorro.background == "http://b/z.jpg"
        assert alien.background == DEFAULT_POSTER

    def test_personal_movie(self, service):
        meta = service.get_meta("movie", "catalog_pmovie_1").meta

        assert meta.name == "Zeta"
        assert meta.description == "Filme de pedidos"
        assert meta.genres == ["Pedido"]

    def test_series_container_lists_episodes(self, service):
        meta = service.get_meta("series", "catalog_series_breaking-bad").meta

        assert meta.name == "Breaking Bad"
        assert meta.description == "Drama"
        assert meta.background == "http://logo/bb.png"
        assert [(v.season, v.episode) for v in meta.videos] == [(1, 1), (1, 2), (2, 1)]
        assert meta.videos[0].title == "E01 - Breaking Bad"

    def test_episode_id_resolves_to_container(self, service):
        meta = service.get_meta("series", "catalog_novela_avenida-brasil_s01e002").meta

        assert meta.id == "catalog_novela_avenida-brasil"
        assert meta.genres == ["Novelas Globo"]
        assert len(meta.videos) == 2

    def test_container_without_group_uses_fallback_description(self, service):
        assert service.get_meta("series", "catalog_series_s4").meta.description == "Série"

    def test_not_found(self, service):
        test_cases = [
            ("tv", "catalog_tv_999"),
            ("movie", "catalog_tv_1"),
            ("series", "catalog_series_unknown"),
            ("series", "catalog_series_dark_s09e09"),
            ("movie", "tt0111161"),
        ]
        for media_type, item_id in test_cases:
            assert service.get_meta(media_type, item_id).meta is None, f"Failed for: {item_id}"


class TestGetStreams:
    """Stream resolution."""

    def test_channel_ts_becomes_hls(self, service):
        streams = service.get_streams("tv", "catalog_tv_1").streams

        assert len(streams) == 1
        assert streams[0].url == "http://x/a.m3u8"
        assert streams[0].title == "Canal A (HLS)"

    def test_personal_movie_drive_link(self, service):
        streams = service.get_streams("movie", "catalog_pmovie_1").streams

        assert streams[0].url == "https://drive.google.com/uc?export=download&id=FILE1"
        assert streams[0].title == "Zeta"

    def test_container_plays_first_episode(self, service):
        streams = service.get_streams("series", "catalog_series_breaking-bad").streams

        assert streams[0].url == "http://x/bb101.m3u8"
        assert streams[0].title == "E01 - Breaking Bad (HLS)"

    def test_episode(self, service):
        streams = service.get_streams("series", "catalog_series_breaking-bad_s02e01").streams

        assert streams[0].url == "http://x/bb201.mp4"
        assert streams[0].title == "E01 - Breaking Bad"

    def test_not_found(self, service):
        assert service.get_streams("series", "catalog_series_nope").streams == []
        assert service.get_streams("tv", "catalog_movie_10").streams == []
        assert service.get_streams("tv", "garbage").streams == []


class TestManifest:
    """Addon manifest."""

    def test_catalogs_and_prefixes(self):
        manifest = build_manifest(settings).to_payload()

        assert [(c["type"], c["id"]) for c in manifest["catalogs"]] == [
            (c.media_type, c.catalog_id) for c in CATALOGS
        ]
        assert len(manifest["catalogs"]) == 5
        meta_resource = next(r for r in manifest["resources"] if r["name"] == "meta")
        assert "catalog_novela_" in meta_resource["idPrefixes"]
        assert manifest["behaviorHints"] == {"configurable": False, "configurationRequired": False}
