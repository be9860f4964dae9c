"""Admin API endpoints for review moderation."""

from typing import Annotated

from fastapi import APIRouter, Query

from sparkle.api.dependencies import CatalogServiceDep
from sparkle.db.models.catalog import ModerationStatus, Review, review_counts
from sparkle.models.reviews import ModerationResponse, PendingReview, PendingReviewList
from sparkle.utils.exceptions import NotFoundError
from sparkle.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


def _pending_review(review: Review) -> PendingReview:
    return PendingReview(
        id=review.id,
        product_id=review.product_id,
        product_name=review.product.name,
        brand_name=review.product.brand.name,
        user_id=review.user_id,
        overall_rating=review.overall_rating,
        review_text=review.review_text,
        created_at=review.created_at,
    )


async def _moderate(
    catalog: CatalogServiceDep,
    review_id: int,
    status: ModerationStatus,
) -> ModerationResponse:
    review = await catalog.set_moderation_status(review_id, status)
    if review is None:
        raise NotFoundError(f"Review {review_id} not found", resource="review")
    return ModerationResponse(
        id=review.id,
        moderation_status=review.moderation_status,
        counts_toward_ratings=review_counts(review.review_text, review.moderation_status),
    )


@router.get("/reviews/pending", response_model=PendingReviewList)
async def list_pending_reviews(
    catalog: CatalogServiceDep,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    page_size: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 20,
) -> PendingReviewList:
    """List reviews with text that are waiting for moderation."""
    reviews, total = await catalog.list_pending_reviews(page=page, page_size=page_size)

    return PendingReviewList(
        items=[_pending_review(review) for review in reviews],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=(total + page_size - 1) // page_size,
    )


@router.post("/reviews/{review_id}/approve", response_model=ModerationResponse)
async def approve_review(review_id: int, catalog: CatalogServiceDep) -> ModerationResponse:
    """Approve a review; its rating starts counting toward aggregates."""
    return await _moderate(catalog, review_id, ModerationStatus.APPROVED)


@router.post("/reviews/{review_id}/reject", response_model=ModerationResponse)
async def reject_review(review_id: int, catalog: CatalogServiceDep) -> ModerationResponse:
    """Reject a review; a review with text then never counts."""
    return await _moderate(catalog, review_id, ModerationStatus.REJECTED)
