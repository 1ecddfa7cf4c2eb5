"""
Command-line entry point for writing the TV channel file from an M3U playlist.

Usage:
    streamcine-dump-playlist --url http://provider/playlist.m3u
"""
import argparse
import asyncio
import logging
from pathlib import Path

import httpx

from streamcine.config import settings, setup_logging
from streamcine.services.playlist_dump import PREVIEW_SIZE, PlaylistError, dump_playlist


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Write a channel catalog file from an M3U playlist")
    parser.add_argument(
        "--url",
        default=settings.playlist_url,
        help="Upstream M3U playlist URL (default: PLAYLIST_URL setting)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=settings.catalog_path(settings.playlist_output_file),
        help="Destination file (default: DATA_DIR/PLAYLIST_OUTPUT_FILE)",
    )
    parser.add_argument(
        "--preview",
        type=int,
        default=PREVIEW_SIZE,
        help="Number of entries to log after writing",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)

    if not args.url:
        logger.error("No playlist URL given - use --url or set PLAYLIST_URL")
        return 2

    try:
        entries = asyncio.run(dump_playlist(
            args.url,
            args.output,
            timeout=settings.download_timeout_sec,
            max_retries=settings.download_max_retries,
            preview=args.preview,
        ))
    except (PlaylistError, httpx.HTTPError) as exc:
        logger.error(f"Failed to dump playlist: {exc}")
        return 1

    logger.info(f"Dumped {len(entries)} channels to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
