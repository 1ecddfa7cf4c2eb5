"""
File operation utilities

This module handles playlist downloads with retry logic and writing
catalog files to disk.
"""
import logging
from pathlib import Path
import asyncio

import aiofiles
import httpx


logger = logging.getLogger(__name__)


async def download_text(
    url: str,
    timeout: float = 120.0,
    max_retries: int = 3,
    backoff_factor: float = 2.0,
    transport: httpx.AsyncBaseTransport | None = None
) -> str:
    """
    Download a text resource from URL with exponential backoff retry logic

    Retries on transient network errors (timeouts, connection errors) and
    5xx responses. Does NOT retry on 4xx HTTP errors (client errors).

    Args:
        url: URL to download from
        timeout: HTTP timeout in seconds
        max_retries: Maximum number of retry attempts
        backoff_factor: Exponential backoff multiplier (wait = backoff_factor ^ attempt)
        transport: Optional httpx transport (used by tests)

    Returns:
        Response body decoded as text

    Raises:
        httpx.HTTPError: If download fails after all retries
    """
    logger.info(f"Downloading {url}...")

    last_error: Exception | None = None

    for attempt in range(max_retries):
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True) as client:
                response = await client.get(url)
                response.raise_for_status()

                size_kb = len(response.content) / 1024
                logger.info(f"Downloaded {size_kb:.1f} KB from {url}")

                return response.text

        except (httpx.TimeoutException, httpx.ConnectError) as e:
            # Transient network errors - retry
            last_error = e
            if attempt < max_retries - 1:
                wait_time = backoff_factor ** attempt
                logger.warning(
                    f"Download attempt {attempt + 1}/{max_retries} failed (transient error): {type(e).__name__}. "
                    f"Retrying in {wait_time:.1f}s..."
                )
                await asyncio.sleep(wait_time)
            else:
                logger.error(f"Download failed after {max_retries} attempts (transient error)")

        except httpx.HTTPStatusError as e:
            # HTTP errors - don't retry on 4xx (client error), retry on 5xx (server error)
            if 400 <= e.response.status_code < 500:
                logger.error(f"HTTP {e.response.status_code} (client error): {e}")
                raise

            last_error = e
            if attempt < max_retries - 1:
                wait_time = backoff_factor ** attempt
                logger.warning(
                    f"Download attempt {attempt + 1}/{max_retries} failed "
                    f"(HTTP {e.response.status_code} server error). "
                    f"Retrying in {wait_time:.1f}s..."
                )
                await asyncio.sleep(wait_time)
            else:
                logger.error(f"Download failed after {max_retries} attempts (HTTP {e.response.status_code})")

    # If we exhausted all retries, raise the last error
    if last_error:
        raise last_error

    raise RuntimeError(f"Failed to download {url} after {max_retries} attempts")


async def write_lines(file_path: Path, lines: list[str]) -> Path:
    """
    Write lines to a UTF-8 text file joined by newlines

    Args:
        file_path: Destination file; parent directories are created
        lines: Lines without trailing newlines

    Returns:
        The written path
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(file_path, 'w', encoding='utf-8') as f:
        await f.write("\n".join(lines))

    logger.info(f"Wrote {len(lines)} lines to {file_path}")
    return file_path
