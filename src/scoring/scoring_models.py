"""
Etsmart Scoring Models
======================

Dataclasses et enums partagés par le moteur de scoring.

Tous les modèles sont des valeurs dérivées, recalculées à chaque appel:
rien n'est persisté par le moteur.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Level(str, Enum):
    """Classification d'un pilier du Launch Potential Score."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def ordered(cls) -> Tuple["Level", "Level", "Level"]:
        return (cls.LOW, cls.MEDIUM, cls.HIGH)


# Alias pour la lisibilité des signatures
CompetitionDensity = Level
NicheSaturation = Level
ProductSpecificity = Level


class SaturationLevel(str, Enum):
    """Niveau de saturation dérivé du competition_score."""
    LOW = "low"
    VIABLE = "viable"
    HIGH = "high"
    SATURATED = "saturated"


class LaunchDecision(str, Enum):
    """Décision brute dérivée du competition_score."""
    LAUNCH = "launch"
    LAUNCH_WITH_CAUTION = "launch_with_caution"
    DO_NOT_LAUNCH = "do_not_launch"


class Tier(str, Enum):
    """Tranche du Launch Potential Score."""
    SATURATED = "saturated"
    COMPETITIVE = "competitive"
    FAVORABLE = "favorable"


class Badge(str, Enum):
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"


@dataclass(frozen=True)
class ScoringRequest:
    """
    Entrée immuable d'un appel de scoring.

    Fournie par l'étape amont de compréhension produit (hors moteur).
    """
    product_title: str
    product_type: str
    category: str
    keywords: Tuple[str, ...] = ()
    market: str = "EN"


@dataclass(frozen=True)
class SignalSample:
    """
    Une observation (requête, nombre de résultats).

    valid = la récupération a réussi ET a renvoyé un nombre positif plausible.
    """
    keyword: str
    result_count: int
    timestamp: datetime
    market: str
    valid: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "result_count": self.result_count,
            "timestamp": self.timestamp.isoformat(),
            "market": self.market,
            "valid": self.valid,
        }


@dataclass
class CompetitionEstimate:
    """
    Estimation de concurrence complète.

    Contient les données brutes, les calculs intermédiaires (BCV, ACV)
    et le score final avec la décision.
    """
    samples: List[SignalSample]
    valid_samples: List[SignalSample]
    base_volume: float               # BCV: médiane des comptes valides
    category_coefficient: float
    adjusted_volume: int             # ACV: BCV × coefficient, arrondi
    competition_score: float         # 0-100
    saturation_level: SaturationLevel
    decision: LaunchDecision
    category: str = ""
    explanation: str = ""

    @property
    def queries_used(self) -> int:
        return len(self.valid_samples)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "samples": [s.to_dict() for s in self.samples],
            "valid_samples": [s.to_dict() for s in self.valid_samples],
            "base_volume": self.base_volume,
            "category": self.category,
            "category_coefficient": self.category_coefficient,
            "adjusted_volume": self.adjusted_volume,
            "competition_score": self.competition_score,
            "saturation_level": self.saturation_level.value,
            "decision": self.decision.value,
            "queries_used": self.queries_used,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class LaunchFactors:
    """Les trois piliers qui indexent la matrice."""
    competition_density: Level
    niche_saturation: Level
    product_specificity: Level

    def to_dict(self) -> Dict[str, str]:
        return {
            "competition_density": self.competition_density.value,
            "niche_saturation": self.niche_saturation.value,
            "product_specificity": self.product_specificity.value,
        }


@dataclass
class LaunchPotentialResult:
    """
    Résultat du Launch Potential Score (0-10).

    Contient tout ce qu'il faut pour:
    1. Décider (score, tier, verdict, badge)
    2. Comprendre (factors, matrix_range, override_applied)
    3. Expliquer (explanation, score_justification)
    """
    score: float
    tier: Tier
    verdict: str
    explanation: str
    score_justification: str
    badge: Badge
    factors: LaunchFactors
    override_applied: bool = False
    matrix_range: Optional[Tuple[float, float]] = None
    adjustments: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "tier": self.tier.value,
            "verdict": self.verdict,
            "explanation": self.explanation,
            "score_justification": self.score_justification,
            "badge": self.badge.value,
            "factors": self.factors.to_dict(),
            "override_applied": self.override_applied,
            "matrix_range": list(self.matrix_range) if self.matrix_range else None,
            "adjustments": dict(self.adjustments),
        }
