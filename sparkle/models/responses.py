"""API response models."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from sparkle.models.news import NewsItem


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NewsResponse(BaseModel):
    """Latest sparkling-water news."""

    items: list[NewsItem] = Field(default_factory=list)
    count: int = Field(..., ge=0)
    cache_age_seconds: float | None = Field(
        default=None, description="Age of the served snapshot; None when nothing is cached"
    )
    timestamp: datetime = Field(default_factory=_utcnow)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall health status")
    version: str = Field(..., description="Application version")
    services: dict[str, bool] = Field(
        default_factory=dict, description="Individual service health"
    )
    timestamp: datetime = Field(default_factory=_utcnow)

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "status": "healthy",
                "version": "0.1.0",
                "services": {"database": True, "news_cache": True},
            }
        }
