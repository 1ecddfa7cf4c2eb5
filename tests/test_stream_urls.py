"""
Unit tests for Drive link normalization and stream selection.
"""
from streamcine.utils.stream_urls import StreamChoice, normalize_drive_url, pick_best_stream


class TestNormalizeDriveUrl:
    """Google Drive share link rewriting."""

    def test_drive_links(self):
        test_cases = [
            (
                "https://drive.google.com/file/d/ABC123/view?x=1",
                "https://drive.google.com/uc?export=download&id=ABC123",
            ),
            (
                "http://drive.google.com/file/d/ABC123",
                "https://drive.google.com/uc?export=download&id=ABC123",
            ),
            (
                "https://drive.google.com/open?id=XYZ789&usp=sharing",
                "https://drive.google.com/uc?export=download&id=XYZ789",
            ),
        ]
        for url, expected in test_cases:
            assert normalize_drive_url(url) == expected, f"Failed for: {url}"

    def test_other_urls_pass_through(self):
        test_cases = [
            "https://www.dropbox.com/s/abc/movie.mp4?dl=1",
            "http://host/movie.mp4",
            "not a url",
        ]
        for url in test_cases:
            assert normalize_drive_url(url) == url

    def test_trims_and_handles_empty(self):
        assert normalize_drive_url("  http://host/a.mp4 ") == "http://host/a.mp4"
        assert normalize_drive_url("") == ""
        assert normalize_drive_url(None) == ""


class TestPickBestStream:
    """HLS preference for playback URLs."""

    def test_drive_link_is_converted(self):
        choice = pick_best_stream("Filme", "https://drive.google.com/file/d/ABC123/view?x=1")

        assert "id=ABC123" in choice.url
        assert choice.url.startswith("https://drive.google.com/uc?export=download")
        assert choice.title == "Filme"

    def test_transport_stream_becomes_hls(self):
        choice = pick_best_stream("Canal", "http://host/stream.ts?token=9")

        assert choice == StreamChoice(title="Canal (HLS)", url="http://host/stream.m3u8?token=9")

    def test_transport_stream_without_query(self):
        assert pick_best_stream("Canal", "http://host/live/1.TS").url == "http://host/live/1.m3u8"

    def test_hls_is_kept(self):
        choice = pick_best_stream("Canal", "http://host/index.m3u8?a=b")

        assert choice == StreamChoice(title="Canal (HLS)", url="http://host/index.m3u8?a=b")

    def test_other_formats_unchanged(self):
        assert pick_best_stream("Movie", "http://host/movie.mp4") == StreamChoice("Movie", "http://host/movie.mp4")
        assert pick_best_stream("Ts Path", "http://host.ts/dir/movie.mkv").url == "http://host.ts/dir/movie.mkv"

    def test_empty_url(self):
        assert pick_best_stream("Nothing", "") is None
        assert pick_best_stream("Nothing", None) is None
