"""CoverNest Server - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from covernest.config import settings
from covernest.database import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and initialize the database on startup."""
    logging.basicConfig(level=settings.log_level.upper())
    init_db()
    logger.info("%s started", settings.server_name)
    yield


app = FastAPI(
    title="CoverNest",
    description="Album cover resolution over a nested-set album tree",
    version="0.1.0",
    lifespan=lifespan,
)

# --- Register API routers ---
from covernest.api.albums import router as albums_router  # noqa: E402

API_PREFIX = "/api/v1"

app.include_router(albums_router, prefix=API_PREFIX)


@app.get("/")
def root():
    """Health check / server info."""
    return {
        "name": settings.server_name,
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/api/v1/health")
def health():
    return {"status": "ok"}


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
