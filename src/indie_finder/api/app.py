"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI

from .. import __version__
from ..context import ApplicationContext
from . import routes

log = structlog.stdlib.get_logger()


def create_app(context: ApplicationContext | None = None) -> FastAPI:
    """Create the API application.

    Args:
        context: Pre-built application context; a default one is created
            at startup when omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app_context = context or ApplicationContext()
        app.state.context = app_context
        log.info(
            "Indie Game Finder API started",
            version=__version__,
            api_base_url=app_context.config.api_base_url,
            mandatory_genre=app_context.config.mandatory_genre,
        )
        try:
            yield
        finally:
            await app_context.cleanup()
            log.info("Indie Game Finder API stopped")

    app = FastAPI(title="Indie Game Finder API", version=__version__, lifespan=lifespan)
    app.include_router(routes.router, prefix="/api", tags=["games"])

    @app.get("/health")
    async def health(context: ApplicationContext = Depends(routes.get_context)) -> dict:
        error_counts = context.error_service.get_error_count_by_category()
        return {
            "status": "ok",
            "version": __version__,
            "cache": context.cache.stats(),
            "errors": {category.value: count for category, count in error_counts.items()},
        }

    return app
