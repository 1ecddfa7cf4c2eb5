"""Run the StreamCine addon with uvicorn."""
import uvicorn

from streamcine.config import settings


if __name__ == "__main__":
    uvicorn.run(
        "streamcine.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
