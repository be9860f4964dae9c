"""News item models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RawFeedItem(BaseModel):
    """An entry as parsed from a syndication feed, before deduplication."""

    title: str = Field(default="")
    link: str | None = Field(default=None)
    published_at: datetime | None = Field(default=None)
    source_name: str | None = Field(default=None)
    summary: str | None = Field(default=None)


class NewsItem(BaseModel):
    """A deduplicated news article served to pages."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Article headline")
    link: str = Field(..., description="Article URL, unique per item")
    published_at: datetime | None = Field(default=None, description="Publication time")
    source: str = Field(default="", description="Publisher name")
    description: str | None = Field(default=None, description="Short summary")
