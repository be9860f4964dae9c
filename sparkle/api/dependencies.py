"""FastAPI dependency injection."""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sparkle.config.settings import Settings, get_settings
from sparkle.db.session import get_async_session
from sparkle.news.cache import NewsCache
from sparkle.news.service import NewsService
from sparkle.services.catalog import CatalogService
from sparkle.services.news_feed import NewsFeedClient
from sparkle.services.ranking import RankingService


@lru_cache
def get_news_feed_client() -> NewsFeedClient:
    """Get cached news feed client instance."""
    settings = get_settings()
    return NewsFeedClient(
        base_url=settings.news_feed_base_url,
        timeout=settings.http_timeout_seconds,
        max_retries=settings.http_max_retries,
    )


@lru_cache
def get_news_service() -> NewsService:
    """Get the process-wide news service, which owns the news cache."""
    settings = get_settings()
    return NewsService(
        fetcher=get_news_feed_client(),
        cache=NewsCache(freshness_seconds=settings.news_freshness_seconds),
        search_terms=settings.news_search_terms,
        max_items=settings.news_max_items,
        similarity_threshold=settings.news_similarity_threshold,
        feed_timeout_seconds=settings.news_feed_timeout_seconds,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get async database session."""
    async for session in get_async_session():
        yield session


async def get_catalog_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> CatalogService:
    """Get catalog service instance."""
    return CatalogService(session=session)


async def get_ranking_service(
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> RankingService:
    """Get ranking service instance."""
    return RankingService(catalog=catalog, settings=settings)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
NewsServiceDep = Annotated[NewsService, Depends(get_news_service)]
DbSessionDep = Annotated[AsyncSession, Depends(get_db_session)]
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
RankingServiceDep = Annotated[RankingService, Depends(get_ranking_service)]
