from typing import Annotated
import logging

from fastapi import APIRouter, Depends

from streamcine.config import settings
from streamcine.dependencies import get_addon_service, get_catalog_store
from streamcine.services import AddonService, CatalogStore, build_manifest


logger = logging.getLogger(__name__)

main_router = APIRouter()


@main_router.get("/")
async def root() -> dict:
    """Root endpoint with service information"""
    return {
        "service": settings.addon_name,
        "version": settings.addon_version,
        "endpoints": {
            "manifest": "/manifest.json - Addon manifest",
            "catalog": "/catalog/{type}/{id}.json - Catalog entries",
            "meta": "/meta/{type}/{id}.json - Entry details",
            "stream": "/stream/{type}/{id}.json - Playable streams",
            "health": "/health - Health check"
        }
    }


@main_router.get("/health")
async def health_check(store: Annotated[CatalogStore, Depends(get_catalog_store)]) -> dict:
    """Health check endpoint"""
    return {
        "status": "ok",
        "catalogs_loaded": store.loaded_catalogs()
    }


@main_router.get("/manifest.json")
async def manifest() -> dict:
    """Addon manifest consumed by the player client"""
    return build_manifest(settings).to_payload()


@main_router.get("/catalog/{media_type}/{catalog_id}.json")
def catalog(
    media_type: str,
    catalog_id: str,
    service: Annotated[AddonService, Depends(get_addon_service)]
) -> dict:
    """List every entry of one catalog"""
    return service.list_catalog(media_type, catalog_id).to_payload()


@main_router.get("/meta/{media_type}/{item_id}.json")
def meta(
    media_type: str,
    item_id: str,
    service: Annotated[AddonService, Depends(get_addon_service)]
) -> dict:
    """Details of one entry; series include their episodes"""
    return service.get_meta(media_type, item_id).to_payload()


@main_router.get("/stream/{media_type}/{item_id}.json")
def stream(
    media_type: str,
    item_id: str,
    service: Annotated[AddonService, Depends(get_addon_service)]
) -> dict:
    """Playable stream for a channel, movie, container or episode"""
    return service.get_streams(media_type, item_id).to_payload()
