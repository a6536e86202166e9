"""
Etsmart Competition Estimator - Estimation multi-signaux de la concurrence.

Ce module estime le niveau de concurrence d'un produit sur Etsy à partir
de données publiques (nombre de résultats de recherche) et d'heuristiques
statistiques. Pas d'IA, 100% déterministe à échantillons fixés.

PIPELINE:
    1. Génération des requêtes (query_generator)
    2. Récupération des comptes (collaborateur externe, SignalSource)
    3. Normalisation: MÉDIANE des comptes valides (BCV)
    4. Ajustement catégorie: ACV = round(BCV × coefficient)
    5. Score 0-100, niveau de saturation, décision

POURQUOI LA MÉDIANE:
Une requête peut accidentellement matcher une catégorie très large.
La moyenne serait tirée par cet extrême, pas la médiane.

UTILISATION:
    from src.scoring import CompetitionEstimator, ScoringRequest

    estimator = CompetitionEstimator(signal_source=client.fetch_result_count)
    estimate = estimator.estimate_competition(request)

    print(estimate.competition_score)
    print(estimate.decision)
"""

import logging
import math
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Sequence

from .query_generator import generate_search_queries
from .scoring_config import ScoringConfig, DEFAULT_CONFIG
from .scoring_models import (
    CompetitionEstimate,
    LaunchDecision,
    SaturationLevel,
    ScoringRequest,
    SignalSample,
)

logger = logging.getLogger(__name__)

# fetch_result_count(query, market) -> nombre de résultats ou None
SignalSource = Callable[[str, str], Optional[int]]

ESTIMATE_EXPLANATION = (
    "Competition is estimated based on Etsy search result volumes across {count} "
    "keyword variations and adjusted using category benchmarks. Values are "
    "approximate and intended to support decision-making."
)


class ScoringError(Exception):
    """Erreur de base du moteur de scoring."""
    pass


class InsufficientSignalError(ScoringError):
    """Moins d'échantillons valides que le minimum requis."""

    def __init__(self, valid_count: int, required: int = DEFAULT_CONFIG.competition.min_valid_samples):
        self.valid_count = valid_count
        self.required = required
        super().__init__(
            f"Cannot estimate competition for this product: only {valid_count} "
            f"valid search signal(s), {required} required"
        )


def round_half_up(value: float, digits: int = 0) -> float:
    """Arrondi commercial (0.5 → au-dessus), indépendant du banker's rounding."""
    factor = 10 ** digits
    # arrondi à 1e-9 près pour absorber les erreurs binaires (5.95 * 10 = 59.4999...)
    return math.floor(round(value * factor, 9) + 0.5) / factor


def calculate_median(values: Iterable[float]) -> float:
    """
    Médiane d'une liste de nombres.

    Liste paire → moyenne des deux valeurs centrales. Liste vide → 0.
    L'ordre d'entrée n'a aucune importance.
    """
    ordered = sorted(values)
    if not ordered:
        return 0.0

    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return float(ordered[mid])


def filter_valid_samples(samples: Iterable[SignalSample]) -> List[SignalSample]:
    """Garde les échantillons valides avec un compte strictement positif."""
    return [s for s in samples if s.valid and s.result_count > 0]


def calculate_base_volume(
    samples: Sequence[SignalSample],
    min_valid_samples: int = DEFAULT_CONFIG.competition.min_valid_samples,
) -> float:
    """
    Calcule le BCV (Base Competition Volume).

    Raises:
        InsufficientSignalError: si moins de min_valid_samples valides.
    """
    valid = filter_valid_samples(samples)
    if len(valid) < min_valid_samples:
        raise InsufficientSignalError(len(valid), min_valid_samples)
    return calculate_median(s.result_count for s in valid)


def get_category_coefficient(category: str, config: Optional[ScoringConfig] = None) -> float:
    """
    Coefficient d'ajustement pour une catégorie.

    Recherche: correspondance exacte, puis partielle (insensible à la casse,
    dans les deux sens), puis valeur par défaut 1.00.
    """
    cfg = (config or DEFAULT_CONFIG).categories
    normalized = category.strip()

    if normalized in cfg.coefficients:
        return cfg.coefficients[normalized]

    lowered = normalized.lower()
    if lowered:
        for key, value in cfg.coefficients.items():
            key_lower = key.lower()
            if key_lower in lowered or lowered in key_lower:
                return value

    logger.debug(f"Catégorie non reconnue '{category}', coefficient par défaut")
    return cfg.default_coefficient


def adjust_volume(base_volume: float, coefficient: float) -> int:
    """ACV = round(BCV × coefficient)."""
    return int(round_half_up(base_volume * coefficient))


def calculate_competition_score(adjusted_volume: float, config: Optional[ScoringConfig] = None) -> float:
    """
    Score de concurrence 0-100, arrondi à 1 décimale.

    FORMULE:
    min(ACV / MAX_COMPETITION_VOLUME, 1.0) × 100
    """
    cfg = (config or DEFAULT_CONFIG).competition
    ratio = min(max(adjusted_volume, 0) / cfg.max_volume, 1.0)
    return round_half_up(ratio * 100, 1)


def get_saturation_level(score: float, config: Optional[ScoringConfig] = None) -> SaturationLevel:
    cfg = (config or DEFAULT_CONFIG).competition
    if score < cfg.saturation_low_below:
        return SaturationLevel.LOW
    if score < cfg.saturation_viable_below:
        return SaturationLevel.VIABLE
    if score < cfg.saturation_high_below:
        return SaturationLevel.HIGH
    return SaturationLevel.SATURATED


def get_decision(score: float, config: Optional[ScoringConfig] = None) -> LaunchDecision:
    cfg = (config or DEFAULT_CONFIG).competition
    if score < cfg.decision_launch_below:
        return LaunchDecision.LAUNCH
    if score < cfg.decision_caution_below:
        return LaunchDecision.LAUNCH_WITH_CAUTION
    return LaunchDecision.DO_NOT_LAUNCH


def collect_signal_samples(
    queries: Sequence[str],
    signal_source: SignalSource,
    market: str = "EN",
) -> List[SignalSample]:
    """
    Interroge la source de signal pour chaque requête.

    Un compte None (échec, timeout) ou nul donne un échantillon invalide;
    le pipeline ne s'arrête pas.
    """
    samples = []
    for query in queries:
        count = signal_source(query, market)
        valid = count is not None and count > 0
        if not valid:
            logger.debug(f"Signal invalide pour '{query}' ({market})")
        samples.append(SignalSample(
            keyword=query,
            result_count=count or 0,
            timestamp=datetime.now(timezone.utc),
            market=market,
            valid=valid,
        ))
    return samples


class CompetitionEstimator:
    """
    Estimateur de concurrence - déterministe à échantillons fixés.

    Sans état: peut être partagé entre threads.
    """

    def __init__(
        self,
        signal_source: Optional[SignalSource] = None,
        config: Optional[ScoringConfig] = None,
    ):
        """
        Args:
            signal_source: fetch_result_count(query, market). Requis uniquement
                pour estimate_competition().
            config: Configuration de scoring. Si None, utilise DEFAULT_CONFIG.
        """
        self.signal_source = signal_source
        self.config = config or DEFAULT_CONFIG
        self.config.validate()

    def estimate_competition(self, request: ScoringRequest) -> CompetitionEstimate:
        """
        Estimation complète: requêtes → signaux → score.

        Raises:
            ValueError: si aucune source de signal n'est configurée.
            InsufficientSignalError: si moins de 2 signaux valides.
        """
        if self.signal_source is None:
            raise ValueError("No signal source configured for live estimation")

        queries = generate_search_queries(request, self.config.queries)
        logger.info(f"Requêtes générées pour '{request.product_title}': {queries}")

        samples = collect_signal_samples(queries, self.signal_source, request.market)
        return self.estimate_from_samples(request, samples)

    def estimate_from_samples(
        self,
        request: ScoringRequest,
        samples: Sequence[SignalSample],
    ) -> CompetitionEstimate:
        """
        Estimation à partir d'échantillons déjà récupérés.

        Raises:
            InsufficientSignalError: si moins de 2 signaux valides.
        """
        cfg = self.config
        samples = list(samples)
        valid_samples = filter_valid_samples(samples)

        base_volume = calculate_base_volume(samples, cfg.competition.min_valid_samples)
        coefficient = get_category_coefficient(request.category, cfg)
        adjusted_volume = adjust_volume(base_volume, coefficient)

        competition_score = calculate_competition_score(adjusted_volume, cfg)
        saturation_level = get_saturation_level(competition_score, cfg)
        decision = get_decision(competition_score, cfg)

        logger.info(
            f"Concurrence '{request.product_title}': BCV={base_volume:.0f} "
            f"×{coefficient:.2f} → ACV={adjusted_volume} → "
            f"score={competition_score} ({saturation_level.value}, {decision.value})",
            extra={"score": competition_score},
        )

        return CompetitionEstimate(
            samples=samples,
            valid_samples=valid_samples,
            base_volume=base_volume,
            category_coefficient=coefficient,
            adjusted_volume=adjusted_volume,
            competition_score=competition_score,
            saturation_level=saturation_level,
            decision=decision,
            category=request.category,
            explanation=ESTIMATE_EXPLANATION.format(count=len(valid_samples)),
        )


def estimate_competition(
    request: ScoringRequest,
    signal_source: SignalSource,
    config: Optional[ScoringConfig] = None,
) -> CompetitionEstimate:
    """Raccourci fonctionnel pour CompetitionEstimator.estimate_competition."""
    return CompetitionEstimator(signal_source, config).estimate_competition(request)
