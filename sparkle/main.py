"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from sparkle import __version__
from sparkle.api.admin import router as admin_router
from sparkle.api.dependencies import get_news_feed_client
from sparkle.api.error_handlers import register_error_handlers
from sparkle.api.middleware import setup_middleware
from sparkle.api.routes import router
from sparkle.config.settings import get_settings
from sparkle.db.base import close_db, init_db
from sparkle.utils.logging import get_logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger = get_logger(__name__)

    setup_logging(log_level=settings.log_level, log_format=settings.log_format)

    logger.info(
        "application_starting",
        version=__version__,
        debug=settings.debug,
        news_terms=settings.news_search_terms,
    )

    await init_db()
    logger.info("database_initialized")

    yield

    await get_news_feed_client().close()
    await close_db()
    logger.info("application_shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Sparkle Ratings & News API",
        description=(
            "Ranked sparkling-water listings from community reviews, review "
            "moderation, and deduplicated sparkling-water news."
        ),
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    setup_middleware(app, allowed_origins=settings.cors_allowed_origins)
    register_error_handlers(app)

    app.include_router(router)
    app.include_router(admin_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "sparkle.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
