"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from prometheus_client import make_asgi_app

from resizer.api.middleware import ResizeImageMiddleware
from resizer.cache.backend import CacheStore, build_cache_store
from resizer.config.settings import Settings, get_settings
from resizer.monitoring.logging import configure_logging
from resizer.services.resizer import ImageResizeService

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, cache: CacheStore | None = None) -> FastAPI:
    """Initialise the FastAPI application.

    The cache is owned by the application: it is built from settings unless
    one is injected, and closed when the app shuts down.
    """

    settings = settings or get_settings()
    configure_logging(settings)
    Path(settings.media_root).mkdir(parents=True, exist_ok=True)
    if cache is None:
        cache = build_cache_store(settings)
    service = ImageResizeService(
        cache,
        single_flight=settings.single_flight,
        max_dimension=settings.max_dimension,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info("Serving images from %s", settings.media_root)
        try:
            yield
        finally:
            cache.close()

    app = FastAPI(
        title="Image Resizer",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )
    app.state.resize_service = service
    app.add_middleware(
        ResizeImageMiddleware,
        service=service,
        media_root=settings.media_root,
        default_quality=settings.default_quality,
    )

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    app.mount("/metrics", make_asgi_app())
    app.mount("/", StaticFiles(directory=settings.media_root, check_dir=False), name="media")

    return app


app = create_app()
