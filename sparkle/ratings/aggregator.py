"""Bayesian rating aggregation for ranked product listings."""

import math
from collections.abc import Hashable, Iterable, Mapping, Sequence
from numbers import Real
from typing import TypeVar

from pydantic import BaseModel, Field

from sparkle.utils.exceptions import InvalidRatingError
from sparkle.utils.logging import get_logger

logger = get_logger(__name__)

TierT = TypeVar("TierT", bound=Hashable)

# Neutral midpoint of the 1-5 scale, used as baseline when nothing has been rated yet
NEUTRAL_MIDPOINT_DEFAULT = 3.5
SCALE_MIN = 1.0
SCALE_MAX = 5.0


class RatingAggregate(BaseModel):
    """Aggregated ratings for a single product."""

    product_id: str = Field(..., description="Product identifier")
    rating_count: int = Field(..., ge=0, description="Number of ratings considered")
    true_average: float | None = Field(
        default=None, description="Plain mean of the product's ratings, for display"
    )
    bayesian_score: float | None = Field(
        default=None,
        description="Baseline-blended score used for ordering; None when below the minimum count",
    )

    @property
    def is_ranked(self) -> bool:
        """Whether the product has enough ratings to appear in rankings."""
        return self.bayesian_score is not None


def validate_ratings(
    ratings: Iterable[object],
    scale_min: float = SCALE_MIN,
    scale_max: float = SCALE_MAX,
    field: str | None = None,
) -> list[float]:
    """Check that every rating is a finite number inside the scale.

    Strings and booleans are rejected rather than coerced.

    Raises:
        InvalidRatingError: On the first offending value
    """
    validated: list[float] = []
    for value in ratings:
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidRatingError(value, scale_min, scale_max, field=field)
        number = float(value)
        if not math.isfinite(number) or not scale_min <= number <= scale_max:
            raise InvalidRatingError(value, scale_min, scale_max, field=field)
        validated.append(number)
    return validated


def compute_baseline(
    all_ratings: Iterable[object],
    neutral_default: float = NEUTRAL_MIDPOINT_DEFAULT,
    scale_min: float = SCALE_MIN,
    scale_max: float = SCALE_MAX,
) -> float:
    """Mean of every rating in the pool, or ``neutral_default`` for an empty pool."""
    pool = validate_ratings(all_ratings, scale_min, scale_max, field="pool")
    if not pool:
        return neutral_default
    return math.fsum(pool) / len(pool)


def aggregate(
    product_id: str,
    ratings: Sequence[object],
    baseline: float,
    confidence: float,
    min_count: int,
    scale_min: float = SCALE_MIN,
    scale_max: float = SCALE_MAX,
) -> RatingAggregate:
    """Aggregate one product's ratings.

    The Bayesian score is ``(C * baseline + sum) / (C + count)``, so a product
    with few ratings is pulled towards the baseline until it has enough
    evidence. Products below ``min_count`` report their count and true average
    but get no score, which keeps them out of rankings.

    Args:
        product_id: Product identifier
        ratings: The product's raw ratings
        baseline: Global mean rating
        confidence: Weight of the baseline, in "virtual ratings"
        min_count: Minimum number of ratings for a score

    Returns:
        Aggregate for the product
    """
    if confidence < 0:
        raise ValueError("confidence must be non-negative")

    values = validate_ratings(ratings, scale_min, scale_max, field=product_id)
    count = len(values)
    if count == 0:
        return RatingAggregate(product_id=product_id, rating_count=0)

    total = math.fsum(values)
    true_average = total / count

    if count < min_count:
        return RatingAggregate(
            product_id=product_id,
            rating_count=count,
            true_average=true_average,
        )

    return RatingAggregate(
        product_id=product_id,
        rating_count=count,
        true_average=true_average,
        bayesian_score=(confidence * baseline + total) / (confidence + count),
    )


def rank(
    aggregates: Iterable[RatingAggregate],
    top_n: int | None = None,
) -> list[RatingAggregate]:
    """Order scored aggregates best first.

    Unscored aggregates are dropped. Ties on score go to the product with more
    ratings; remaining ties keep their input order.
    """
    scored = [a for a in aggregates if a.is_ranked]
    scored.sort(key=lambda a: (a.bayesian_score, a.rating_count), reverse=True)
    if top_n is not None:
        return scored[:top_n]
    return scored


class RatingAggregator:
    """Aggregator configured with one page's ranking parameters."""

    def __init__(
        self,
        confidence: float = 10,
        min_count: int = 5,
        neutral_default: float = NEUTRAL_MIDPOINT_DEFAULT,
        scale_min: float = SCALE_MIN,
        scale_max: float = SCALE_MAX,
    ):
        """Initialize aggregator.

        Args:
            confidence: Weight of the baseline mean (C)
            min_count: Minimum ratings for a product to be ranked (M)
            neutral_default: Baseline used when the pool is empty
            scale_min: Lowest valid rating
            scale_max: Highest valid rating
        """
        if confidence < 0:
            raise ValueError("confidence must be non-negative")
        if min_count < 0:
            raise ValueError("min_count must be non-negative")

        self.confidence = confidence
        self.min_count = min_count
        self.neutral_default = neutral_default
        self.scale_min = scale_min
        self.scale_max = scale_max

    def baseline(
        self,
        ratings_by_product: Mapping[str, Sequence[object]],
        pool: Iterable[object] | None = None,
    ) -> float:
        """Baseline mean over ``pool``, or over every product's ratings.

        Without an explicit pool, an invalid rating is reported against its
        product id.
        """
        if pool is None:
            pool = [
                rating
                for product_id, ratings in ratings_by_product.items()
                for rating in validate_ratings(
                    ratings, self.scale_min, self.scale_max, field=product_id
                )
            ]
        return compute_baseline(pool, self.neutral_default, self.scale_min, self.scale_max)

    def aggregate_all(
        self,
        ratings_by_product: Mapping[str, Sequence[object]],
        pool: Iterable[object] | None = None,
    ) -> list[RatingAggregate]:
        """Aggregate every product in input order, scored or not."""
        baseline = self.baseline(ratings_by_product, pool)
        return [
            aggregate(
                product_id,
                ratings,
                baseline,
                self.confidence,
                self.min_count,
                self.scale_min,
                self.scale_max,
            )
            for product_id, ratings in ratings_by_product.items()
        ]

    def rank(
        self,
        ratings_by_product: Mapping[str, Sequence[object]],
        pool: Iterable[object] | None = None,
        top_n: int | None = None,
    ) -> list[RatingAggregate]:
        """Ranked list of products that meet the minimum count."""
        aggregates = self.aggregate_all(ratings_by_product, pool)
        ranked = rank(aggregates, top_n)
        logger.debug(
            "products_ranked",
            candidates=len(aggregates),
            ranked=len(ranked),
            confidence=self.confidence,
            min_count=self.min_count,
        )
        return ranked

    def rank_by_tier(
        self,
        ratings_by_product: Mapping[str, Sequence[object]],
        tier_of: Mapping[str, TierT],
        pool: Iterable[object] | None = None,
    ) -> dict[TierT, list[RatingAggregate]]:
        """Unbounded ranked list per tier.

        The baseline is shared across tiers. Products without a tier are skipped.
        """
        tiers: dict[TierT, list[RatingAggregate]] = {}
        for agg in self.aggregate_all(ratings_by_product, pool):
            tier = tier_of.get(agg.product_id)
            if tier is None:
                continue
            tiers.setdefault(tier, []).append(agg)
        return {tier: rank(aggs) for tier, aggs in tiers.items()}
