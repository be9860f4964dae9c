"""Ranked product listings built from the catalog."""

from sparkle.config.settings import Settings
from sparkle.db.models.catalog import CarbonationLevel, Product
from sparkle.models.ratings import RankedProduct, RankingResponse, TierRankingResponse
from sparkle.ratings.aggregator import RatingAggregate, RatingAggregator
from sparkle.ratings.presets import RankingPreset, get_preset
from sparkle.ratings.stars import star_fill_percentages
from sparkle.services.catalog import CatalogService
from sparkle.utils.logging import get_logger

logger = get_logger(__name__)

CARBONATION_PRESET = "strongest_carbonation"

# Strongest tier first
CARBONATION_TIER_ORDER = [CarbonationLevel.STRONG, CarbonationLevel.MEDIUM, CarbonationLevel.LIGHT]


class RankingService:
    """Builds ranked listings for the ratings pages."""

    def __init__(self, catalog: CatalogService, settings: Settings):
        self.catalog = catalog
        self.settings = settings

    def _aggregator(self, preset: RankingPreset) -> RatingAggregator:
        return RatingAggregator(
            confidence=preset.confidence,
            min_count=preset.min_count,
            neutral_default=self.settings.rating_neutral_default,
            scale_min=self.settings.rating_scale_min,
            scale_max=self.settings.rating_scale_max,
        )

    @staticmethod
    def _to_ranked_product(aggregate: RatingAggregate, product: Product) -> RankedProduct:
        return RankedProduct(
            product_id=aggregate.product_id,
            name=product.name,
            slug=product.slug,
            brand_name=product.brand.name,
            brand_slug=product.brand.slug,
            carbonation_level=product.carbonation_level.value,
            rating_count=aggregate.rating_count,
            true_average=aggregate.true_average,
            bayesian_score=aggregate.bayesian_score,
            stars=star_fill_percentages(aggregate.true_average or 0.0),
        )

    async def rank_preset(self, name: str) -> RankingResponse:
        """Ranked listing for a named preset.

        Raises:
            NotFoundError: If the preset does not exist
        """
        preset = get_preset(name)
        aggregator = self._aggregator(preset)

        products = await self.catalog.get_products()
        ratings = await self.catalog.get_counting_ratings()
        pool = await self.catalog.get_rating_pool()

        baseline = aggregator.baseline(ratings, pool)
        ranked = aggregator.rank(ratings, pool=pool, top_n=preset.top_n)

        logger.info("ranking_built", preset=name, candidates=len(ratings), ranked=len(ranked))
        return RankingResponse(
            preset=preset.name,
            title=preset.title,
            confidence=preset.confidence,
            min_count=preset.min_count,
            top_n=preset.top_n,
            baseline=baseline,
            products=[self._to_ranked_product(agg, products[agg.product_id]) for agg in ranked],
        )

    async def rank_by_carbonation(self) -> TierRankingResponse:
        """Products ranked within each carbonation level, strongest level first."""
        preset = get_preset(CARBONATION_PRESET)
        aggregator = self._aggregator(preset)

        products = await self.catalog.get_products()
        ratings = await self.catalog.get_counting_ratings()
        pool = await self.catalog.get_rating_pool()

        tier_of = {pid: product.carbonation_level for pid, product in products.items()}
        tiers = aggregator.rank_by_tier(ratings, tier_of, pool=pool)

        return TierRankingResponse(
            preset=preset.name,
            baseline=aggregator.baseline(ratings, pool),
            tiers={
                level.value: [
                    self._to_ranked_product(agg, products[agg.product_id])
                    for agg in tiers.get(level, [])
                ]
                for level in CARBONATION_TIER_ORDER
            },
        )
