"""Rating and ranking API models."""

from typing import Any

from pydantic import BaseModel, Field

from sparkle.ratings.aggregator import RatingAggregate


class RankedProduct(BaseModel):
    """A product in a ranked listing."""

    product_id: str
    name: str
    slug: str
    brand_name: str
    brand_slug: str
    carbonation_level: str
    rating_count: int = Field(..., ge=0)
    true_average: float | None = None
    bayesian_score: float | None = None
    stars: list[float] = Field(default_factory=list, description="Fill percentage per star")


class RankingResponse(BaseModel):
    """Ranked listing for a preset."""

    preset: str
    title: str
    confidence: float
    min_count: int
    top_n: int | None = None
    baseline: float
    products: list[RankedProduct] = Field(default_factory=list)


class TierRankingResponse(BaseModel):
    """Ranked listings grouped by tier."""

    preset: str
    baseline: float
    tiers: dict[str, list[RankedProduct]] = Field(default_factory=dict)


class AggregateRequest(BaseModel):
    """Ad-hoc aggregation request.

    Ratings are validated by the aggregator, not by the schema, so that bad
    values are reported with the offending product.
    """

    ratings: dict[str, list[Any]] = Field(..., description="Raw ratings per product id")
    pool: list[Any] | None = Field(
        default=None, description="Baseline pool; defaults to all submitted ratings"
    )
    confidence: float = Field(default=10, ge=0)
    min_count: int = Field(default=5, ge=0)
    top_n: int | None = Field(default=None, ge=1)

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "ratings": {"lime": [5, 4, 5, 5, 4], "berry": [5, 5, 5]},
                "confidence": 10,
                "min_count": 5,
                "top_n": 50,
            }
        }


class AggregateResponse(BaseModel):
    """Ad-hoc aggregation result."""

    baseline: float
    ranked: list[RatingAggregate] = Field(default_factory=list)
    excluded: list[RatingAggregate] = Field(
        default_factory=list, description="Products below the minimum rating count"
    )
