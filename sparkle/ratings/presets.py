"""Ranking parameters for each listing page."""

from dataclasses import dataclass

from sparkle.utils.exceptions import NotFoundError


@dataclass(frozen=True)
class RankingPreset:
    """Confidence, minimum count and length of one ranked listing."""

    name: str
    confidence: float
    min_count: int
    top_n: int | None = None
    title: str = ""


RANKING_PRESETS: dict[str, RankingPreset] = {
    preset.name: preset
    for preset in (
        RankingPreset("best_overall", confidence=10, min_count=5, top_n=50, title="Best Overall"),
        RankingPreset("best_flavor", confidence=10, min_count=3, title="Best Flavor"),
        RankingPreset(
            "strongest_carbonation", confidence=3, min_count=3, title="Strongest Carbonation"
        ),
    )
}


def get_preset(name: str) -> RankingPreset:
    """Look up a preset by name.

    Raises:
        NotFoundError: If no preset has that name
    """
    try:
        return RANKING_PRESETS[name]
    except KeyError:
        raise NotFoundError(
            f"Unknown ranking preset '{name}'",
            resource="ranking_preset",
            details={"available": sorted(RANKING_PRESETS)},
        ) from None
