"""Catalog service: products, counting ratings and review moderation."""

from collections.abc import Iterable

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from sparkle.db.models.catalog import Brand, ModerationStatus, Product, Review
from sparkle.utils.logging import get_logger

logger = get_logger(__name__)

# SQL form of review_counts(): no text, or text that passed moderation
COUNTING_REVIEW = or_(
    Review.review_text.is_(None),
    func.trim(Review.review_text) == "",
    Review.moderation_status == ModerationStatus.APPROVED,
)


class CatalogService:
    """Read and moderate the brand/product/review catalog."""

    def __init__(self, session: AsyncSession):
        """Initialize catalog service.

        Args:
            session: Async database session
        """
        self.session = session

    async def get_products(self, product_ids: Iterable[int] | None = None) -> dict[str, Product]:
        """Products keyed by id (as string), with their brand loaded.

        Discontinued products and products of inactive brands are left out.
        """
        stmt = (
            select(Product)
            .join(Product.brand)
            .options(selectinload(Product.brand))
            .where(Product.is_discontinued.is_(False), Brand.is_active.is_(True))
            .order_by(Product.id)
        )
        if product_ids is not None:
            stmt = stmt.where(Product.id.in_(list(product_ids)))

        result = await self.session.execute(stmt)
        return {str(product.id): product for product in result.scalars().all()}

    async def get_counting_ratings(
        self, product_ids: Iterable[int] | None = None
    ) -> dict[str, list[int]]:
        """Counting ratings per product; every requested product gets an entry."""
        products = await self.get_products(product_ids)
        ratings: dict[str, list[int]] = {product_id: [] for product_id in products}
        if not ratings:
            return ratings

        stmt = (
            select(Review.product_id, Review.overall_rating)
            .where(COUNTING_REVIEW)
            .where(Review.product_id.in_([int(product_id) for product_id in ratings]))
            .order_by(Review.id)
        )
        result = await self.session.execute(stmt)
        for product_id, rating in result.all():
            ratings[str(product_id)].append(rating)
        return ratings

    async def get_rating_pool(self) -> list[int]:
        """Every counting rating in the catalog, used for the baseline mean."""
        result = await self.session.execute(select(Review.overall_rating).where(COUNTING_REVIEW))
        return list(result.scalars().all())

    async def list_pending_reviews(
        self,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[Review], int]:
        """Reviews with text awaiting moderation, oldest first.

        Returns:
            Tuple of (reviews on the page, total pending)
        """
        pending = and_(
            Review.moderation_status == ModerationStatus.PENDING,
            Review.review_text.is_not(None),
            func.trim(Review.review_text) != "",
        )

        total = await self.session.scalar(select(func.count(Review.id)).where(pending))

        stmt = (
            select(Review)
            .options(selectinload(Review.product).selectinload(Product.brand))
            .where(pending)
            .order_by(Review.created_at, Review.id)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total or 0

    async def set_moderation_status(
        self,
        review_id: int,
        status: ModerationStatus,
    ) -> Review | None:
        """Approve or reject a review. Returns None if it does not exist."""
        review = await self.session.get(Review, review_id)
        if review is None:
            return None

        review.moderation_status = status
        await self.session.commit()
        await self.session.refresh(review)

        logger.info("review_moderated", review_id=review_id, status=status.value)
        return review
