"""Pydantic models for requests, responses, and data structures."""

from sparkle.models.news import NewsItem, RawFeedItem
from sparkle.models.ratings import (
    AggregateRequest,
    AggregateResponse,
    RankedProduct,
    RankingResponse,
    TierRankingResponse,
)
from sparkle.models.responses import HealthResponse, NewsResponse
from sparkle.models.reviews import ModerationResponse, PendingReview, PendingReviewList

__all__ = [
    "NewsItem",
    "RawFeedItem",
    "AggregateRequest",
    "AggregateResponse",
    "RankedProduct",
    "RankingResponse",
    "TierRankingResponse",
    "HealthResponse",
    "NewsResponse",
    "ModerationResponse",
    "PendingReview",
    "PendingReviewList",
]
