"""Rating aggregation and ranking."""

from sparkle.ratings.aggregator import (
    RatingAggregate,
    RatingAggregator,
    aggregate,
    compute_baseline,
    rank,
    validate_ratings,
)
from sparkle.ratings.presets import RANKING_PRESETS, RankingPreset, get_preset
from sparkle.ratings.stars import star_fill_percentages

__all__ = [
    "RatingAggregate",
    "RatingAggregator",
    "aggregate",
    "compute_baseline",
    "rank",
    "validate_ratings",
    "RANKING_PRESETS",
    "RankingPreset",
    "get_preset",
    "star_fill_percentages",
]
