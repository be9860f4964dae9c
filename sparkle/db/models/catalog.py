"""Brand, product and review SQLAlchemy models."""

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sparkle.db.base import Base


class CarbonationLevel(str, enum.Enum):
    """How strongly a product is carbonated."""

    LIGHT = "light"
    MEDIUM = "medium"
    STRONG = "strong"


class ModerationStatus(str, enum.Enum):
    """Moderation state of a review's text."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Brand(Base):
    """A sparkling-water brand."""

    __tablename__ = "brands"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    products: Mapped[list["Product"]] = relationship(back_populates="brand")

    def __repr__(self) -> str:
        return f"<Brand(id={self.id}, slug='{self.slug}')>"


class Product(Base):
    """A single product (flavor/format) of a brand."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    brand_id: Mapped[int] = mapped_column(ForeignKey("brands.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False)
    carbonation_level: Mapped[CarbonationLevel] = mapped_column(
        Enum(CarbonationLevel), nullable=False, default=CarbonationLevel.MEDIUM
    )
    flavor_tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    is_discontinued: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    brand: Mapped[Brand] = relationship(back_populates="products")
    reviews: Mapped[list["Review"]] = relationship(back_populates="product")

    __table_args__ = (UniqueConstraint("brand_id", "slug", name="uq_product_brand_slug"),)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, slug='{self.slug}')>"


class Review(Base):
    """A user's rating of a product, optionally with text."""

    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(100), nullable=False)
    overall_rating: Mapped[int] = mapped_column(Integer, nullable=False)
    review_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    moderation_status: Mapped[ModerationStatus] = mapped_column(
        Enum(ModerationStatus), nullable=False, default=ModerationStatus.PENDING, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    product: Mapped[Product] = relationship(back_populates="reviews")

    __table_args__ = (
        CheckConstraint("overall_rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, product_id={self.product_id}, rating={self.overall_rating})>"


def review_counts(review_text: str | None, status: ModerationStatus) -> bool:
    """Whether a review's rating feeds aggregates.

    Rating-only reviews count immediately; reviews with text count once approved.
    """
    return not (review_text or "").strip() or status == ModerationStatus.APPROVED
