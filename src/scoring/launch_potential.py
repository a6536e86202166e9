"""
Etsmart Launch Potential Score - Matrice déterministe à 3 piliers (0-10).

ARCHITECTURE:
    1. Trois classifieurs indépendants → {low, medium, high}
       - Densité de concurrence (competition_score)
       - Saturation de niche (libellé de niche)
       - Spécificité produit (titre + description visuelle)
    2. Lookup matrice [saturation][spécificité][densité] → (min, max)
    3. Score de base = milieu de la plage
    4. Ajustements fins additifs
    5. Clamp [0, 10], arrondi à 1 décimale
    6. RÈGLE DURE: bijou générique → score ≤ 2.9

Chaque score est REPRODUCTIBLE: mêmes inputs → mêmes outputs.

UTILISATION:
    from src.scoring import calculate_launch_potential_score

    result = calculate_launch_potential_score(
        competition_score=40,
        niche="jewelry",
        product_title="Personalized Wedding Bracelet Engraved Gift",
        product_type="bracelet",
    )
    print(result.score, result.tier, result.verdict)
"""

import logging
import re
from typing import Dict, Optional, Tuple

from .competition_estimator import round_half_up
from .narrative import build_explanation, build_score_justification
from .scoring_config import ScoringConfig, DEFAULT_CONFIG
from .scoring_models import (
    Badge,
    CompetitionDensity,
    LaunchFactors,
    LaunchPotentialResult,
    Level,
    NicheSaturation,
    ProductSpecificity,
    Tier,
)

logger = logging.getLogger(__name__)


def _normalize_niche(niche: str) -> str:
    return "-".join(niche.lower().replace("_", " ").split())


class LaunchPotentialScorer:
    """
    Scorer du Launch Potential - 100% déterministe, sans état.

    Les classifieurs de piliers sont exposés individuellement pour
    pouvoir être testés et calibrés séparément.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        """
        Args:
            config: Configuration de scoring. Si None, utilise DEFAULT_CONFIG.
        """
        self.config = config or DEFAULT_CONFIG
        self.config.validate()

        # Vocabulaire bijoux compilé une fois (mot entier, pluriel accepté)
        keywords = "|".join(re.escape(k) for k in self.config.override.jewelry_keywords)
        self._jewelry_re = re.compile(rf"\b(?:{keywords})s?\b")
        # Objets non bijoux qui empruntent le vocabulaire (pendant light, key ring...)
        phrases = "|".join(
            r"\s+".join(re.escape(word) for word in phrase.split())
            for phrase in self.config.override.non_jewelry_phrases
        )
        self._non_jewelry_re = re.compile(rf"\b(?:{phrases})s?\b") if phrases else None

    # =========================================================================
    # PILIERS
    # =========================================================================

    def classify_competition_density(self, competition_score: float) -> CompetitionDensity:
        """Densité: low (<50), medium (<85), high (≥85)."""
        cfg = self.config.pillars
        if competition_score < cfg.density_low_below:
            return Level.LOW
        if competition_score < cfg.density_medium_below:
            return Level.MEDIUM
        return Level.HIGH

    def classify_niche_saturation(self, niche: str) -> NicheSaturation:
        """
        Saturation structurelle de la niche.

        Listes fixes testées dans l'ordre high → medium → low.
        Niche inconnue → medium (pas une erreur).
        """
        cfg = self.config.pillars
        normalized = _normalize_niche(niche)

        if normalized:
            if any(n in normalized for n in cfg.high_saturation_niches):
                return Level.HIGH
            if any(n in normalized for n in cfg.medium_saturation_niches):
                return Level.MEDIUM
            if any(n in normalized for n in cfg.low_saturation_niches):
                return Level.LOW

        logger.debug(f"Niche non reconnue '{niche}', saturation par défaut")
        return cfg.unknown_niche_saturation

    def count_specificity_hits(self, text: str) -> Tuple[int, int]:
        """Nombre de mots-clés (haute, moyenne spécificité) présents dans le texte."""
        cfg = self.config.pillars
        text = text.lower()
        high = sum(1 for k in cfg.high_specificity_keywords if k in text)
        medium = sum(1 for k in cfg.medium_specificity_keywords if k in text)
        return high, medium

    def is_generic_title(self, product_title: str, product_type: str) -> bool:
        """Titre nu: une couleur/un adjectif banal + le type, ou le type seul."""
        title = " ".join(product_title.lower().split())
        type_lower = " ".join(product_type.lower().split())
        if not title or not type_lower:
            return False
        escaped = re.escape(type_lower)
        return any(
            re.match(pattern.replace("{type}", escaped), title)
            for pattern in self.config.pillars.generic_title_patterns
        )

    def classify_product_specificity(
        self,
        product_title: str,
        product_type: str = "",
        product_visual_description: Optional[str] = None,
    ) -> ProductSpecificity:
        """
        Spécificité produit.

        RÈGLES (dans l'ordre):
        - titre générique sans aucun mot-clé → low
        - ≥2 mots-clés haute spécificité → high
        - ≥1 haute OU ≥2 moyenne → medium
        - sinon → low
        """
        combined = f"{product_title} {product_visual_description or ''}"
        high_hits, medium_hits = self.count_specificity_hits(combined)

        if self.is_generic_title(product_title, product_type) and high_hits == 0 and medium_hits == 0:
            return Level.LOW
        if high_hits >= 2:
            return Level.HIGH
        if high_hits >= 1 or medium_hits >= 2:
            return Level.MEDIUM
        return Level.LOW

    def assess_factors(
        self,
        competition_score: float,
        niche: str,
        product_title: str,
        product_type: str,
        product_visual_description: Optional[str] = None,
    ) -> LaunchFactors:
        return LaunchFactors(
            competition_density=self.classify_competition_density(competition_score),
            niche_saturation=self.classify_niche_saturation(niche),
            product_specificity=self.classify_product_specificity(
                product_title, product_type, product_visual_description
            ),
        )

    # =========================================================================
    # RÈGLE DURE: BIJOU GÉNÉRIQUE
    # =========================================================================

    def is_jewelry(self, niche: str, product_type: str) -> bool:
        text = f"{niche} {product_type}".lower().replace("-", " ")
        if self._non_jewelry_re is not None:
            text = self._non_jewelry_re.sub(" ", text)
        return bool(self._jewelry_re.search(text))

    def is_generic_jewelry(
        self,
        niche: str,
        product_type: str,
        product_title: str,
        product_visual_description: Optional[str] = None,
    ) -> bool:
        """Bijou (niche ou type) ET aucun mot-clé haute spécificité."""
        if not self.is_jewelry(niche, product_type):
            return False
        high_hits, _ = self.count_specificity_hits(
            f"{product_title} {product_visual_description or ''}"
        )
        return high_hits == 0

    # =========================================================================
    # MATRICE ET AJUSTEMENTS
    # =========================================================================

    def compute_adjustments(self, factors: LaunchFactors) -> Dict[str, float]:
        """Ajustements fins additifs (bonus positifs, pénalités négatives)."""
        cfg = self.config.matrix
        sat = factors.niche_saturation
        spec = factors.product_specificity
        dens = factors.competition_density

        adjustments = {"baseline": cfg.baseline_bonus}
        if sat == Level.LOW and spec == Level.HIGH and dens == Level.LOW:
            adjustments["ideal"] = cfg.ideal_bonus
        if dens == Level.LOW and sat == Level.LOW:
            adjustments["low_pressure"] = cfg.low_pressure_bonus
        if sat == Level.HIGH and spec == Level.LOW and dens == Level.HIGH:
            adjustments["worst_case"] = -cfg.worst_case_penalty
        if dens == Level.HIGH and sat == Level.HIGH:
            adjustments["high_pressure"] = -cfg.high_pressure_penalty
        return adjustments

    def score_factors(self, factors: LaunchFactors) -> Tuple[float, Tuple[float, float], Dict[str, float]]:
        """
        Score matriciel avant la règle dure.

        Returns:
            (score clampé et arrondi, plage de la matrice, ajustements)
        """
        cfg = self.config.matrix
        lo, hi = cfg.lookup(
            factors.niche_saturation,
            factors.product_specificity,
            factors.competition_density,
        )
        adjustments = self.compute_adjustments(factors)
        raw = (lo + hi) / 2 + sum(adjustments.values())
        score = max(cfg.min_score, min(cfg.max_score, raw))
        return round_half_up(score, 1), (lo, hi), adjustments

    def get_tier(self, score: float) -> Tier:
        """Bornes incluses dans la tranche basse: 3.0 → saturated, 7.0 → competitive."""
        cfg = self.config.tiers
        if score <= cfg.saturated_max:
            return Tier.SATURATED
        if score <= cfg.competitive_max:
            return Tier.COMPETITIVE
        return Tier.FAVORABLE

    def get_tier_and_verdict(self, score: float) -> Tuple[Tier, str, Badge]:
        tier = self.get_tier(score)
        cfg = self.config.tiers
        return tier, cfg.verdicts[tier.value], Badge(cfg.badges[tier.value])

    # =========================================================================
    # MÉTHODE PRINCIPALE
    # =========================================================================

    def score(
        self,
        competition_score: float,
        niche: str,
        product_title: str,
        product_type: str,
        product_visual_description: Optional[str] = None,
    ) -> LaunchPotentialResult:
        """
        Calcule le Launch Potential Score complet.

        Args:
            competition_score: Score de concurrence 0-100 (clampé si hors bornes).
            niche: Libellé de niche/catégorie.
            product_title: Titre du produit.
            product_type: Type de produit (ex: "bracelet", "mug").
            product_visual_description: Description visuelle libre (optionnelle).

        Returns:
            LaunchPotentialResult avec score, tranche, verdict et textes.
        """
        competition_score = max(0.0, min(100.0, competition_score))
        factors = self.assess_factors(
            competition_score, niche, product_title, product_type, product_visual_description
        )
        score, matrix_range, adjustments = self.score_factors(factors)

        override_applied = self.is_generic_jewelry(
            niche, product_type, product_title, product_visual_description
        )
        if override_applied:
            cap = self.config.override.score_cap
            if score > cap:
                logger.info(
                    f"Bijou générique détecté '{product_title}' → score plafonné "
                    f"{score} → {cap}",
                    extra={"score": cap, "niche": niche},
                )
            score = min(score, cap)

        tier, verdict, badge = self.get_tier_and_verdict(score)
        warning = self.config.override.warning_sentence if override_applied else None

        return LaunchPotentialResult(
            score=score,
            tier=tier,
            verdict=verdict,
            explanation=build_explanation(tier, factors, warning),
            score_justification=build_score_justification(score, tier, factors),
            badge=badge,
            factors=factors,
            override_applied=override_applied,
            matrix_range=matrix_range,
            adjustments=adjustments,
        )


def calculate_launch_potential_score(
    competition_score: float,
    niche: str,
    product_title: str,
    product_type: str,
    product_visual_description: Optional[str] = None,
    config: Optional[ScoringConfig] = None,
) -> LaunchPotentialResult:
    """Point d'entrée fonctionnel du Launch Potential Score."""
    return LaunchPotentialScorer(config).score(
        competition_score, niche, product_title, product_type, product_visual_description
    )
