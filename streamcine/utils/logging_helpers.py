"""
Structured logging helpers for consistent log formatting.

Keeps the recurring catalog, request and stream messages in one place.
"""
import logging


def log_catalog_loaded(logger: logging.Logger, label: str, count: int) -> None:
    """
    Log the size of a freshly loaded flat catalog.

    Args:
        logger: Logger instance
        label: Human-readable catalog name
        count: Number of entries kept
    """
    if count == 0:
        logger.warning(f"Loaded 0 {label} - catalog is empty")
    else:
        logger.info(f"Loaded {count} {label}")


def log_episodic_loaded(
    logger: logging.Logger,
    noun: str,
    containers_count: int,
    episodes_count: int
) -> None:
    """
    Log episodic catalog summary.

    Args:
        logger: Logger instance
        noun: "series" or "soap opera"
        containers_count: Number of detected containers
        episodes_count: Number of distinct episode ids
    """
    if containers_count == 0:
        logger.warning(f"Loaded 0 {noun} containers - catalog is empty")
    else:
        logger.info(f"Loaded {noun} catalog - Containers: {containers_count}, Episodes: {episodes_count}")


def log_request(logger: logging.Logger, resource: str, media_type: str, item_id: str) -> None:
    logger.info(f"{resource} requested: type={media_type} id={item_id}")


def log_stream_selected(
    logger: logging.Logger,
    label: str,
    original_url: str,
    final_url: str
) -> None:
    """
    Log the URL chosen for playback.

    Args:
        logger: Logger instance
        label: What is being played (channel name, movie title, episode)
        original_url: URL as read from the catalog file
        final_url: URL returned to the player
    """
    logger.info(f"Playing {label}")
    logger.debug(f"  Original URL: {original_url}")
    logger.info(f"  Final URL: {final_url}")
