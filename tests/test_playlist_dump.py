"""
Tests for the M3U playlist dump tool.
"""
import asyncio

import httpx
import pytest

from streamcine.dump_playlist import main
from streamcine.services.catalog_loader import load_channels
from streamcine.services.playlist_dump import (
    PLAYLIST_HEADER,
    PlaylistEntry,
    PlaylistError,
    dump_playlist,
    format_rows,
    parse_m3u,
)
from streamcine.utils.file_operations import download_text


PLAYLIST = """#EXTM3U
#EXTINF:-1 tvg-id="globo.br" tvg-name="Globo HD" tvg-logo="http://l/g.png" group-title="Abertos; BR",Globo HD
http://p/live/1.ts
#EXTINF:-1 tvg-name="Sem Nome" group-title="Filmes",
http://p/movie/2.mp4
#EXTINF:-1,Canal; Especial
#EXTGRP:Esportes
http://p/live/3.ts
http://p/orphan.ts
"""


def _transport(*responses: httpx.Response) -> httpx.MockTransport:
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        return queue.pop(0)

    return httpx.MockTransport(handler)


class TestParseM3u:
    """#EXTINF entry parsing."""

    def test_entries(self):
        entries = parse_m3u(PLAYLIST)

        assert entries == [
            PlaylistEntry(name="Globo HD", group="Abertos; BR", url="http://p/live/1.ts"),
            PlaylistEntry(name="Sem Nome", group="Filmes", url="http://p/movie/2.mp4"),
            PlaylistEntry(name="Canal; Especial", group="Esportes", url="http://p/live/3.ts"),
        ]

    def test_empty_playlist(self):
        assert parse_m3u("#EXTM3U\n") == []


class TestFormatRows:
    """Channel-file rendering."""

    def test_semicolons_replaced(self):
        rows = format_rows(parse_m3u(PLAYLIST))

        assert rows[0] == PLAYLIST_HEADER
        assert rows[1] == "0;Globo HD;Abertos, BR;http://p/live/1.ts"
        assert rows[3] == "2;Canal, Especial;Esportes;http://p/live/3.ts"
        assert all(row.count(";") == 3 for row in rows)


class TestDumpPlaylist:
    """Download, parse and write."""

    def test_written_file_loads_as_channels(self, tmp_path):
        output = tmp_path / "out" / "canais.csv"
        transport = _transport(httpx.Response(200, text=PLAYLIST))

        entries = asyncio.run(dump_playlist("http://upstream/list.m3u", output, transport=transport))

        assert len(entries) == 3
        channels = load_channels(output)
        assert {ch.id for ch in channels} == {"catalog_tv_0", "catalog_tv_1", "catalog_tv_2"}
        assert [ch.group for ch in channels] == ["Abertos, BR", "Esportes", "Filmes"]

    def test_empty_playlist_raises(self, tmp_path):
        transport = _transport(httpx.Response(200, text="#EXTM3U\n"))

        with pytest.raises(PlaylistError):
            asyncio.run(dump_playlist("http://upstream/list.m3u", tmp_path / "c.csv", transport=transport))

        assert not (tmp_path / "c.csv").exists()

    def test_client_error_is_not_retried(self):
        transport = _transport(httpx.Response(404), httpx.Response(200, text=PLAYLIST))

        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(download_text("http://upstream/list.m3u", max_retries=3, transport=transport))

    def test_server_error_is_retried(self):
        transport = _transport(httpx.Response(503), httpx.Response(200, text="ok"))

        text = asyncio.run(download_text("http://upstream/list.m3u", max_retries=2, transport=transport))

        assert text == "ok"


class TestCli:
    """Command-line entry point."""

    def test_missing_url(self):
        assert main(["--url", ""]) == 2
