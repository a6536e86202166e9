"""
Etsmart Scoring Module
======================

Deterministic competitive-saturation and launch-potential scoring for Etsy products.

Components:
    - Query generation: 3-5 search variants per product
    - CompetitionEstimator: median of result counts → category adjustment → 0-100 score
    - LaunchPotentialScorer: 3-pillar matrix → 0-10 score, tier, verdict, narrative
    - Time to first sale: delay estimate derived from the launch score

PHILOSOPHIE:
    - Aucun état, aucun hasard: mêmes inputs → mêmes outputs
    - Toutes les tables sont dans scoring_config.py

Usage:
    from src.scoring import CompetitionEstimator, calculate_launch_potential_score

    estimate = CompetitionEstimator(client.fetch_result_count).estimate_competition(request)
    result = calculate_launch_potential_score(
        estimate.competition_score, "jewelry", "Silver Bracelet", "bracelet",
    )

    print(result.score, result.tier.value)
"""

from .scoring_models import (
    Badge,
    CompetitionEstimate,
    LaunchDecision,
    LaunchFactors,
    LaunchPotentialResult,
    Level,
    SaturationLevel,
    ScoringRequest,
    SignalSample,
    Tier,
)
from .scoring_config import (
    ScoringConfig,
    DEFAULT_CONFIG,
    MAX_COMPETITION_VOLUME,
    MIN_VALID_SAMPLES,
    GENERIC_JEWELRY_SCORE_CAP,
)
from .query_generator import generate_search_queries
from .competition_estimator import (
    CompetitionEstimator,
    InsufficientSignalError,
    ScoringError,
    SignalSource,
    calculate_median,
    collect_signal_samples,
    estimate_competition,
    get_category_coefficient,
)
from .launch_potential import (
    LaunchPotentialScorer,
    calculate_launch_potential_score,
)
from .time_to_first_sale import (
    TimeToFirstSaleEstimate,
    estimate_time_to_first_sale,
    estimate_time_to_first_sale_with_ads,
)

__all__ = [
    # Models
    "Badge",
    "CompetitionEstimate",
    "LaunchDecision",
    "LaunchFactors",
    "LaunchPotentialResult",
    "Level",
    "SaturationLevel",
    "ScoringRequest",
    "SignalSample",
    "Tier",
    # Configuration
    "ScoringConfig",
    "DEFAULT_CONFIG",
    "MAX_COMPETITION_VOLUME",
    "MIN_VALID_SAMPLES",
    "GENERIC_JEWELRY_SCORE_CAP",
    # Competition
    "generate_search_queries",
    "CompetitionEstimator",
    "InsufficientSignalError",
    "ScoringError",
    "SignalSource",
    "calculate_median",
    "collect_signal_samples",
    "estimate_competition",
    "get_category_coefficient",
    # Launch potential
    "LaunchPotentialScorer",
    "calculate_launch_potential_score",
    # Time to first sale
    "TimeToFirstSaleEstimate",
    "estimate_time_to_first_sale",
    "estimate_time_to_first_sale_with_ads",
]
