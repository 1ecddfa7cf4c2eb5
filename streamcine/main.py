from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from fastapi.middleware.cors import CORSMiddleware

from streamcine.config import settings, setup_logging
from streamcine.dependencies import build_catalog_store

from streamcine.routers import main_router


setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    logger.info(f"Starting {settings.addon_name} addon...")

    try:
        app.state.catalog_store = build_catalog_store()
        logger.info("Catalog store created")

        if settings.preload_catalogs:
            logger.info("Preloading catalogs...")
            app.state.catalog_store.preload()
            logger.info(f"Catalogs preloaded: {app.state.catalog_store.loaded_catalogs()}")

        logger.info(f"{settings.addon_name} addon started successfully")
    except Exception as e:
        logger.error(f"Failed to start {settings.addon_name} addon: {e}", exc_info=True)
        raise

    yield

    logger.info(f"{settings.addon_name} addon stopped")


app = FastAPI(
    title=settings.addon_name,
    version=settings.addon_version,
    lifespan=lifespan
)

# Player clients fetch the addon cross-origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(main_router)
