"""
Etsmart Narrative - textes déterministes du Launch Potential Score.

Toutes les phrases sont sélectionnées dans des tables fixes:
mêmes (score, tranche, piliers) → texte identique à l'octet près.
"""

from typing import List, Optional, Tuple

from .scoring_models import LaunchFactors, Level, Tier

TIER_HEADLINES = {
    Tier.FAVORABLE: "Good launch opportunity with favorable market conditions.",
    Tier.COMPETITIVE: "Competitive market that requires a clear differentiation strategy.",
    Tier.SATURATED: "Difficult market conditions, launching this product is not recommended.",
}

TIER_RECOMMENDATIONS = {
    Tier.FAVORABLE: (
        "Launch quickly with well-optimized listings to capture demand before "
        "competitors move in."
    ),
    Tier.COMPETITIVE: (
        "Launch only with a distinct angle such as personalization or a niche "
        "theme, and invest in strong photos and keywords."
    ),
    Tier.SATURATED: (
        "Rework the concept toward a more specific product or pick a less crowded "
        "niche before investing in a launch."
    ),
}

# (pilier, niveau) → (phrase, polarité) ; polarité +1 atout, -1 frein, 0 neutre
FACTOR_PHRASES = {
    ("niche_saturation", Level.LOW): ("a weakly saturated niche", 1),
    ("niche_saturation", Level.MEDIUM): ("a moderately saturated niche", 0),
    ("niche_saturation", Level.HIGH): ("a highly saturated niche", -1),
    ("product_specificity", Level.HIGH): ("a highly specific product", 1),
    ("product_specificity", Level.MEDIUM): ("a moderately differentiated product", 0),
    ("product_specificity", Level.LOW): ("a generic product", -1),
    ("competition_density", Level.LOW): ("limited competition", 1),
    ("competition_density", Level.MEDIUM): ("moderate competition", 0),
    ("competition_density", Level.HIGH): ("intense competition", -1),
}

# Ordre d'énumération des piliers dans les textes
FACTOR_ORDER = ("niche_saturation", "product_specificity", "competition_density")

NO_STRENGTH_SENTENCE = "No pillar stands out as a clear strength."
NO_CHALLENGE_SENTENCE = "No major structural obstacle was detected."


def _join(phrases: List[str]) -> str:
    if len(phrases) <= 1:
        return "".join(phrases)
    return ", ".join(phrases[:-1]) + " and " + phrases[-1]


def classify_factor_phrases(factors: LaunchFactors) -> Tuple[List[str], List[str]]:
    """Sépare les piliers en atouts et freins, dans l'ordre fixe."""
    strengths, challenges = [], []
    for name in FACTOR_ORDER:
        phrase, polarity = FACTOR_PHRASES[(name, getattr(factors, name))]
        if polarity > 0:
            strengths.append(phrase)
        elif polarity < 0:
            challenges.append(phrase)
    return strengths, challenges


def build_explanation(
    tier: Tier,
    factors: LaunchFactors,
    warning: Optional[str] = None,
) -> str:
    """
    Explication courte: [avertissement] + titre de tranche + piliers décisifs.
    """
    parts = []
    if warning:
        parts.append(warning)
    parts.append(TIER_HEADLINES[tier])

    strengths, challenges = classify_factor_phrases(factors)
    drivers = strengths + challenges
    if drivers:
        parts.append(f"Key factors: {_join(drivers)}.")

    return " ".join(parts)


def build_score_justification(score: float, tier: Tier, factors: LaunchFactors) -> str:
    """
    Justification en 4 phrases: résumé, atouts, freins, recommandation.
    """
    strengths, challenges = classify_factor_phrases(factors)

    sentences = [
        f"The product scores {score:.1f}/10, which places it in the {tier.value} tier.",
        f"Its strengths are {_join(strengths)}." if strengths else NO_STRENGTH_SENTENCE,
        f"Its main challenges are {_join(challenges)}." if challenges else NO_CHALLENGE_SENTENCE,
        TIER_RECOMMENDATIONS[tier],
    ]
    return " ".join(sentences)
