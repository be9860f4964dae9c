"""Tests for rating aggregation."""

import math

import pytest

from sparkle.ratings.aggregator import (
    RatingAggregate,
    RatingAggregator,
    aggregate,
    compute_baseline,
    rank,
    validate_ratings,
)
from sparkle.ratings.presets import RANKING_PRESETS, get_preset
from sparkle.utils.exceptions import InvalidRatingError, NotFoundError, ValidationError


def scored(product_id: str, score: float, count: int) -> RatingAggregate:
    """Create a scored aggregate."""
    return RatingAggregate(
        product_id=product_id,
        rating_count=count,
        true_average=score,
        bayesian_score=score,
    )


class TestComputeBaseline:
    """Tests for compute_baseline."""

    def test_mean_of_pool(self):
        assert compute_baseline([1, 2, 3, 4, 5]) == 3.0

    def test_empty_pool_uses_neutral_default(self):
        assert compute_baseline([]) == 3.5

    def test_neutral_default_is_configurable(self):
        assert compute_baseline([], neutral_default=3.0) == 3.0

    def test_rejects_invalid_values(self):
        with pytest.raises(InvalidRatingError) as exc_info:
            compute_baseline([4, "5"])

        assert exc_info.value.field == "pool"


class TestValidateRatings:
    """Tests for validate_ratings."""

    def test_accepts_ints_and_floats(self):
        assert validate_ratings([1, 4.5, 5]) == [1.0, 4.5, 5.0]

    @pytest.mark.parametrize("value", ["5", None, True, float("nan"), float("inf"), 0, 5.5, -1])
    def test_rejects_invalid(self, value):
        with pytest.raises(InvalidRatingError):
            validate_ratings([4, value])

    def test_invalid_rating_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            validate_ratings(["four"])

    def test_custom_scale(self):
        assert validate_ratings([0, 10], scale_min=0, scale_max=10) == [0.0, 10.0]


class TestAggregate:
    """Tests for single-product aggregation."""

    def test_below_min_count_is_excluded_but_reports_average(self):
        result = aggregate("berry", [5, 5, 5], baseline=3.5, confidence=10, min_count=5)

        assert result.rating_count == 3
        assert result.true_average == 5.0
        assert result.bayesian_score is None
        assert not result.is_ranked

    def test_bayesian_score(self):
        ratings = [5, 5, 5, 5, 5, 5, 5, 4, 4, 4]  # sum 47
        result = aggregate("lime", ratings, baseline=3.5, confidence=10, min_count=5)

        assert result.rating_count == 10
        assert result.true_average == pytest.approx(4.7)
        assert result.bayesian_score == pytest.approx(4.1)

    def test_empty_ratings_never_fail(self):
        result = aggregate("new", [], baseline=3.5, confidence=10, min_count=0)

        assert result.rating_count == 0
        assert result.true_average is None
        assert result.bayesian_score is None

    def test_invalid_rating_names_product(self):
        with pytest.raises(InvalidRatingError) as exc_info:
            aggregate("lime", [5, "x"], baseline=3.5, confidence=10, min_count=1)

        assert exc_info.value.field == "lime"

    @pytest.mark.parametrize(
        "ratings",
        [[5, 5, 4, 5, 5], [1, 2, 1, 1, 2, 1], [3, 4, 5, 4, 3, 5, 4]],
    )
    def test_score_lies_between_average_and_baseline(self, ratings):
        baseline = 3.2
        result = aggregate("p", ratings, baseline=baseline, confidence=10, min_count=5)

        low, high = sorted([result.true_average, baseline])
        assert low < result.bayesian_score < high

    def test_score_equals_baseline_when_average_matches(self):
        result = aggregate("p", [4, 3, 4, 3, 4, 3], baseline=3.5, confidence=10, min_count=5)

        assert result.bayesian_score == pytest.approx(3.5)
        assert result.true_average == pytest.approx(3.5)

    def test_shrinkage_vanishes_with_more_evidence(self):
        baseline = 3.0
        gaps = []
        for repeats in (5, 50, 500, 5000):
            ratings = [5, 4] * repeats  # mean 4.5
            result = aggregate("p", ratings, baseline=baseline, confidence=10, min_count=5)
            gaps.append(result.true_average - result.bayesian_score)

        assert gaps == sorted(gaps, reverse=True)
        assert gaps[-1] < 0.002

    def test_one_perfect_rating_does_not_beat_many_good_ones(self):
        single = aggregate("single", [5], baseline=3.5, confidence=10, min_count=1)
        popular = aggregate("popular", [5, 4, 5, 5, 4] * 40, baseline=3.5, confidence=10, min_count=1)

        assert popular.bayesian_score > single.bayesian_score

    def test_negative_confidence_rejected(self):
        with pytest.raises(ValueError):
            aggregate("p", [5], baseline=3.5, confidence=-1, min_count=1)


class TestRank:
    """Tests for ranking order."""

    def test_sorted_by_score_descending(self):
        result = rank([scored("a", 3.9, 10), scored("b", 4.4, 10), scored("c", 4.1, 10)])

        assert [a.product_id for a in result] == ["b", "c", "a"]

    def test_ties_broken_by_rating_count(self):
        result = rank([scored("few", 4.2, 6), scored("many", 4.2, 60), scored("some", 4.2, 20)])

        assert [a.product_id for a in result] == ["many", "some", "few"]

    def test_full_ties_keep_input_order(self):
        result = rank([scored("first", 4.0, 8), scored("second", 4.0, 8)])

        assert [a.product_id for a in result] == ["first", "second"]

    def test_unscored_are_dropped(self):
        excluded = RatingAggregate(product_id="x", rating_count=2, true_average=5.0)
        result = rank([excluded, scored("a", 4.0, 10)])

        assert [a.product_id for a in result] == ["a"]

    def test_top_n(self):
        aggregates = [scored(str(i), 3.0 + i / 100, 10) for i in range(80)]

        result = rank(aggregates, top_n=50)

        assert len(result) == 50
        assert result[0].product_id == "79"


class TestRatingAggregator:
    """Tests for the configured aggregator."""

    @pytest.fixture
    def ratings(self):
        return {
            "lime": [5, 5, 4, 5, 4, 5],
            "berry": [5, 5, 5],
            "plain": [3, 3, 3, 2, 3],
            "new": [],
        }

    def test_baseline_defaults_to_all_submitted_ratings(self, ratings):
        aggregator = RatingAggregator()
        expected = (28 + 15 + 14) / 14

        assert aggregator.baseline(ratings) == pytest.approx(expected)

    def test_explicit_pool(self, ratings):
        aggregator = RatingAggregator()

        assert aggregator.baseline(ratings, pool=[2, 2]) == 2.0

    def test_invalid_rating_names_product_without_pool(self, ratings):
        ratings["berry"] = [5, "5"]

        with pytest.raises(InvalidRatingError) as exc_info:
            RatingAggregator().aggregate_all(ratings)

        assert exc_info.value.field == "berry"

    def test_invalid_explicit_pool_names_pool(self, ratings):
        with pytest.raises(InvalidRatingError) as exc_info:
            RatingAggregator().baseline(ratings, pool=[4, 7])

        assert exc_info.value.field == "pool"

    def test_aggregate_all_keeps_every_product(self, ratings):
        aggregates = RatingAggregator(confidence=10, min_count=5).aggregate_all(ratings)

        assert [a.product_id for a in aggregates] == ["lime", "berry", "plain", "new"]
        assert [a.is_ranked for a in aggregates] == [True, False, True, False]

    def test_rank(self, ratings):
        ranked = RatingAggregator(confidence=10, min_count=5).rank(ratings)

        assert [a.product_id for a in ranked] == ["lime", "plain"]

    def test_lower_min_count_admits_small_samples(self, ratings):
        ranked = RatingAggregator(confidence=3, min_count=3).rank(ratings)

        assert {a.product_id for a in ranked} == {"lime", "berry", "plain"}

    def test_rank_by_tier(self, ratings):
        tier_of = {"lime": "strong", "plain": "strong", "berry": "light"}

        tiers = RatingAggregator(confidence=3, min_count=3).rank_by_tier(ratings, tier_of)

        assert [a.product_id for a in tiers["strong"]] == ["lime", "plain"]
        assert [a.product_id for a in tiers["light"]] == ["berry"]
        assert "new" not in {a.product_id for tier in tiers.values() for a in tier}

    def test_rank_by_tier_is_unbounded(self):
        ratings = {str(i): [4, 5, 4] for i in range(70)}
        tier_of = {str(i): "medium" for i in range(70)}

        tiers = RatingAggregator(confidence=3, min_count=3).rank_by_tier(ratings, tier_of)

        assert len(tiers["medium"]) == 70

    def test_invalid_parameters(self):
        with pytest.raises(ValueError):
            RatingAggregator(confidence=-1)
        with pytest.raises(ValueError):
            RatingAggregator(min_count=-1)


class TestPresets:
    """Tests for ranking presets."""

    def test_best_overall(self):
        preset = get_preset("best_overall")

        assert (preset.confidence, preset.min_count, preset.top_n) == (10, 5, 50)

    def test_all_presets_use_observed_parameters(self):
        for preset in RANKING_PRESETS.values():
            assert preset.confidence in (3, 10)
            assert preset.min_count in (3, 5)

    def test_unknown_preset(self):
        with pytest.raises(NotFoundError) as exc_info:
            get_preset("best_vibes")

        assert "best_overall" in exc_info.value.details["available"]
