"""Review moderation models."""

from datetime import datetime

from pydantic import BaseModel, Field

from sparkle.db.models.catalog import ModerationStatus


class PendingReview(BaseModel):
    """A review waiting for moderation."""

    id: int
    product_id: int
    product_name: str
    brand_name: str
    user_id: str
    overall_rating: int = Field(..., ge=1, le=5)
    review_text: str | None = None
    created_at: datetime


class PendingReviewList(BaseModel):
    """Paginated pending reviews."""

    items: list[PendingReview] = Field(default_factory=list)
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


class ModerationResponse(BaseModel):
    """Result of approving or rejecting a review."""

    id: int
    moderation_status: ModerationStatus
    counts_toward_ratings: bool
