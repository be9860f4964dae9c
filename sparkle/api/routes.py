"""API route definitions."""

import logging as std_logging

import structlog
from fastapi import APIRouter
from sqlalchemy import text

from sparkle import __version__
from sparkle.api.dependencies import (
    DbSessionDep,
    NewsServiceDep,
    RankingServiceDep,
    SettingsDep,
)
from sparkle.models.ratings import (
    AggregateRequest,
    AggregateResponse,
    RankingResponse,
    TierRankingResponse,
)
from sparkle.models.responses import HealthResponse, NewsResponse
from sparkle.ratings.aggregator import RatingAggregator, rank
from sparkle.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(
    session: DbSessionDep,
    news_service: NewsServiceDep,
) -> HealthResponse:
    """Check system health and service availability."""
    services = {}

    try:
        await session.execute(text("SELECT 1"))
        services["database"] = True
    except Exception as e:
        logger.warning("database_health_check_failed", error=str(e))
        services["database"] = False

    # Stale or cold news cache is degraded, not down: /news still answers
    services["news_cache"] = news_service.cache.is_fresh()

    status = "healthy" if all(services.values()) else "degraded"
    return HealthResponse(status=status, version=__version__, services=services)


@router.get("/news", response_model=NewsResponse, tags=["News"])
async def get_news(news_service: NewsServiceDep) -> NewsResponse:
    """Latest sparkling-water news, deduplicated across search feeds."""
    items = await news_service.get_news()
    age = news_service.cache.age()
    return NewsResponse(
        items=items,
        count=len(items),
        cache_age_seconds=round(age, 1) if age is not None else None,
    )


@router.get("/ratings/presets/{name}", response_model=RankingResponse, tags=["Ratings"])
async def get_ranking(name: str, ranking_service: RankingServiceDep) -> RankingResponse:
    """Ranked products for a listing page (best_overall, best_flavor, ...)."""
    ctx = structlog.contextvars.get_contextvars()
    request_id = ctx.get("request_id", "unknown")
    std_logging.info(f"ranking_request - {name} [request_id: {request_id}]")
    return await ranking_service.rank_preset(name)


@router.get("/ratings/carbonation", response_model=TierRankingResponse, tags=["Ratings"])
async def get_carbonation_ranking(ranking_service: RankingServiceDep) -> TierRankingResponse:
    """Products ranked within each carbonation level."""
    return await ranking_service.rank_by_carbonation()


@router.post("/ratings/aggregate", response_model=AggregateResponse, tags=["Ratings"])
async def aggregate_ratings(request: AggregateRequest, settings: SettingsDep) -> AggregateResponse:
    """Aggregate and rank ad-hoc ratings.

    Invalid ratings are rejected with a 400 rather than coerced.
    """
    aggregator = RatingAggregator(
        confidence=request.confidence,
        min_count=request.min_count,
        neutral_default=settings.rating_neutral_default,
        scale_min=settings.rating_scale_min,
        scale_max=settings.rating_scale_max,
    )
    aggregates = aggregator.aggregate_all(request.ratings, request.pool)

    return AggregateResponse(
        baseline=aggregator.baseline(request.ratings, request.pool),
        ranked=rank(aggregates, request.top_n),
        excluded=[agg for agg in aggregates if not agg.is_ranked],
    )
