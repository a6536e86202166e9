"""
Estimation du délai avant la première vente sur Etsy.

Basée UNIQUEMENT sur le Launch Potential Score (0-10):
- score ≤ 3  (saturated)   → ~20 jours
- score ≤ 7  (competitive) → ~10 jours
- score > 7  (favorable)   → interpolation 5 jours (8.0) → 1 jour (10.0)

Les Etsy Ads réduisent le délai d'environ 40%.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .competition_estimator import round_half_up
from .scoring_config import TIER_COMPETITIVE_MAX, TIER_SATURATED_MAX

_BASE_EXPLANATION = (
    "This estimate is based on the product's launch potential score and reflects "
    "typical Etsy market behavior without paid advertising."
)

ADS_REDUCTION_FACTOR = 0.6  # 60% du délai organique


@dataclass(frozen=True)
class TimeToFirstSaleEstimate:
    """Délai estimé en jours, avec plage d'affichage."""
    min_days: int
    max_days: int
    expected_days: int
    range_label: str
    explanation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min": self.min_days,
            "max": self.max_days,
            "expected": self.expected_days,
            "range": self.range_label,
            "explanation": self.explanation,
        }


def _format_range(min_days: int, max_days: int) -> str:
    if min_days == max_days:
        return f"{min_days} {'day' if min_days == 1 else 'days'}"
    return f"{min_days}-{max_days} days"


def estimate_time_to_first_sale(score: float) -> TimeToFirstSaleEstimate:
    """
    Délai avant première vente à partir du score (clampé à [0, 10]).
    """
    score = max(0.0, min(10.0, score))

    if score <= TIER_SATURATED_MAX:
        return TimeToFirstSaleEstimate(
            min_days=18,
            max_days=25,
            expected_days=20,
            range_label="20 days",
            explanation=f"{_BASE_EXPLANATION} Market conditions indicate high saturation.",
        )

    if score <= TIER_COMPETITIVE_MAX:
        return TimeToFirstSaleEstimate(
            min_days=8,
            max_days=12,
            expected_days=10,
            range_label="10 days",
            explanation=(
                f"{_BASE_EXPLANATION} Competitive market conditions require "
                "strategic positioning."
            ),
        )

    # Interpolation linéaire: 8.0 → 5 jours, 10.0 → 1 jour
    days_at_8, days_at_10 = 5, 1
    interpolated = days_at_8 - (score - 8) / (10 - 8) * (days_at_8 - days_at_10)
    expected = int(max(1, min(5, round_half_up(interpolated))))
    min_days = max(1, expected - 1)
    max_days = min(5, expected + 1)

    return TimeToFirstSaleEstimate(
        min_days=min_days,
        max_days=max_days,
        expected_days=expected,
        range_label=_format_range(min_days, max_days),
        explanation=(
            f"{_BASE_EXPLANATION} Favorable market conditions suggest quick visibility."
        ),
    )


def estimate_time_to_first_sale_with_ads(without_ads: TimeToFirstSaleEstimate) -> TimeToFirstSaleEstimate:
    """Variante avec Etsy Ads: ×0.6 sur chaque borne, minimum 1 jour."""
    def reduce(days: int) -> int:
        return int(max(1, round_half_up(days * ADS_REDUCTION_FACTOR)))

    min_days = reduce(without_ads.min_days)
    max_days = reduce(without_ads.max_days)

    return TimeToFirstSaleEstimate(
        min_days=min_days,
        max_days=max_days,
        expected_days=reduce(without_ads.expected_days),
        range_label=_format_range(min_days, max_days),
        explanation=(
            "This estimate includes the impact of Etsy Ads, which typically accelerate "
            "the first sale by increasing product visibility. Actual results may vary "
            "with ad budget and optimization."
        ),
    )
