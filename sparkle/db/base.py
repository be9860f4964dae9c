"""Async SQLAlchemy engine and Base class."""

from functools import lru_cache
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from sparkle.config.settings import get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base class."""

    pass


def async_database_url(database_url: str) -> str:
    """Swap a plain SQLite URL for its aiosqlite equivalent."""
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


@lru_cache
def get_engine() -> AsyncEngine:
    """Get cached async SQLAlchemy engine.

    Returns:
        AsyncEngine for the configured catalog database
    """
    settings = get_settings()
    return create_async_engine(
        async_database_url(settings.database_url),
        echo=settings.debug,
    )


async def init_db() -> None:
    """Initialize database and create tables."""
    # Import models to register them with Base.metadata
    from sparkle.db.models import Brand, Product, Review  # noqa: F401

    engine = get_engine()
    database = engine.url.database
    if engine.url.get_backend_name() == "sqlite" and database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections."""
    engine = get_engine()
    await engine.dispose()
