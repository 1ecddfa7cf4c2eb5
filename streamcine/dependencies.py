"""
Dependency Providers

Hands the catalog store built at startup to request handlers. The store
lives on the application state instead of in module globals, so tests can
swap it through FastAPI dependency overrides.
"""
import logging

from fastapi import Depends, Request

from streamcine.config import settings
from streamcine.services.addon_service import AddonService
from streamcine.services.catalog_store import CatalogPaths, CatalogStore


logger = logging.getLogger(__name__)


def build_catalog_store() -> CatalogStore:
    """Create the catalog store from configured file locations."""
    paths = CatalogPaths.from_settings(settings)
    logger.debug(f"Catalog store paths: {paths}")
    return CatalogStore(paths)


def get_catalog_store(request: Request) -> CatalogStore:
    """
    Return the application's catalog store.

    Raises:
        RuntimeError: If the application lifespan did not create the store
    """
    store = getattr(request.app.state, "catalog_store", None)
    if store is None:
        raise RuntimeError("Catalog store not initialized. It is created during application startup.")
    return store


def get_addon_service(store: CatalogStore = Depends(get_catalog_store)) -> AddonService:
    return AddonService(store, settings.default_poster)
