"""SQLAlchemy models."""

from sparkle.db.models.catalog import (
    Brand,
    CarbonationLevel,
    ModerationStatus,
    Product,
    Review,
    review_counts,
)

__all__ = ["Brand", "CarbonationLevel", "ModerationStatus", "Product", "Review", "review_counts"]
