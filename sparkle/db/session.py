"""Async session factory."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sparkle.db.base import get_engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get async session factory.

    Returns:
        Async session factory configured for the engine
    """
    return async_sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions.

    Yields:
        AsyncSession instance
    """
    async with get_session_factory()() as session:
        yield session
