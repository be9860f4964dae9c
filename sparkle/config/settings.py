"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_NEWS_SEARCH_TERMS = [
    "sparkling water",
    "mineral water",
    "seltzer water",
    "bubbly water",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./data/sparkle.db",
        description="Database URL for the brand/product/review catalog",
    )

    # News Feed
    news_feed_base_url: str = Field(default="https://news.google.com")
    news_search_terms: list[str] = Field(
        default_factory=lambda: list(DEFAULT_NEWS_SEARCH_TERMS),
        min_length=1,
        description="Search phrases, fetched in this order (earlier terms win dedup ties)",
    )
    news_freshness_seconds: int = Field(default=1800, ge=1, le=86400)
    news_max_items: int = Field(default=10, ge=1, le=100)
    news_similarity_threshold: float = Field(default=0.35, gt=0.0, le=1.0)
    news_feed_timeout_seconds: float = Field(default=10.0, gt=0.0, le=120.0)

    # Ratings
    rating_neutral_default: float = Field(
        default=3.5, description="Baseline mean used when no ratings exist at all"
    )
    rating_scale_min: float = Field(default=1.0)
    rating_scale_max: float = Field(default=5.0)

    # API Settings
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000, ge=1, le=65535)
    debug: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "pretty", "console"] = Field(default="json")
    cors_allowed_origins: list[str] = Field(default_factory=lambda: ["*"])

    # HTTP Client Settings
    http_timeout_seconds: float = Field(default=15.0, ge=1.0, le=120.0)
    http_max_retries: int = Field(default=2, ge=1, le=10)

    @model_validator(mode="after")
    def check_rating_scale(self) -> "Settings":
        """Ensure the rating scale is ordered and contains the neutral default."""
        if self.rating_scale_min >= self.rating_scale_max:
            raise ValueError("rating_scale_min must be lower than rating_scale_max")
        if not self.rating_scale_min <= self.rating_neutral_default <= self.rating_scale_max:
            raise ValueError("rating_neutral_default must lie within the rating scale")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
