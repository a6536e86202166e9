"""
Configuration des seuils, vocabulaires et tables pour le scoring Etsmart.

Ce fichier centralise TOUS les paramètres de calibration du moteur:
génération de requêtes, coefficients catégorie, score de concurrence,
piliers du Launch Potential Score et matrice 3×3×3.

PHILOSOPHIE:
- Tous les seuils sont explicites et documentés
- Aucun "magic number" dans le code principal
- Tables immuables (frozen dataclasses, tuples, MappingProxyType)
- Facilement ajustable sans modifier la logique de scoring
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from .scoring_models import CompetitionDensity, Level, NicheSaturation, ProductSpecificity


# =============================================================================
# CONSTANTES DE POLITIQUE (exposées nommément pour les tests)
# =============================================================================

# Plafond de volume: au-delà, le volume ne change plus la perception de saturation
MAX_COMPETITION_VOLUME = 20_000

# Nombre minimal d'échantillons valides pour estimer la concurrence
MIN_VALID_SAMPLES = 2

# Niveaux de saturation (competition_score 0-100)
SATURATION_LOW_BELOW = 30
SATURATION_VIABLE_BELOW = 55
SATURATION_HIGH_BELOW = 75

# Décision (competition_score 0-100)
DECISION_LAUNCH_BELOW = 40
DECISION_CAUTION_BELOW = 70

# Pilier densité de concurrence (plus permissif que la saturation brute)
DENSITY_LOW_BELOW = 50
DENSITY_MEDIUM_BELOW = 85

# Tranches du Launch Potential Score (bornes incluses dans la tranche basse)
TIER_SATURATED_MAX = 3.0
TIER_COMPETITIVE_MAX = 7.0

# Plafond appliqué aux bijoux génériques
GENERIC_JEWELRY_SCORE_CAP = 2.9

DEFAULT_CATEGORY_COEFFICIENT = 1.00


@dataclass(frozen=True)
class QueryConfig:
    """
    Vocabulaires de la génération de requêtes Etsy.

    LOGIQUE:
    Une seule requête biaise l'estimation (un mot-clé peut matcher une
    catégorie très large). On dérive 3 à 5 variantes du type de produit.
    """
    min_queries: int = 3
    max_queries: int = 5
    min_token_length: int = 3   # tokens de 1-2 lettres ignorés
    max_title_tokens: int = 4

    # Articles, liaisons et adjectifs marketing trop génériques
    stopwords: frozenset = frozenset({
        "the", "and", "for", "with", "from", "your", "our", "this", "that",
        "gift", "gifts", "decor", "best", "unique", "trending", "new", "hot",
        "sale", "free", "shipping", "beautiful", "perfect", "great", "cute",
        "quality", "premium", "amazing",
    })

    # Synonymes du type de produit (le premier est utilisé)
    synonyms: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({
        "mug": ("coffee cup", "tea cup", "ceramic mug"),
        "bracelet": ("wristband", "bangle", "cuff"),
        "necklace": ("pendant", "chain"),
        "earrings": ("studs", "drop earrings"),
        "ring": ("band", "stacking ring"),
        "poster": ("print", "art print", "wall art"),
        "pillow": ("cushion", "throw pillow"),
        "bag": ("tote bag", "handbag", "purse"),
        "t-shirt": ("shirt", "tee"),
        "candle": ("soy candle", "scented candle"),
        "sticker": ("decal", "vinyl sticker"),
    }))

    # Terme d'usage typique du type de produit
    usage_terms: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({
        "mug": "coffee",
        "bracelet": "jewelry",
        "necklace": "jewelry",
        "earrings": "jewelry",
        "ring": "jewelry",
        "poster": "wall decor",
        "pillow": "home decor",
        "bag": "accessories",
        "candle": "home fragrance",
        "t-shirt": "apparel",
    }))

    # Vocabulaire de style (ordre = priorité, un seul style retenu)
    style_terms: Tuple[str, ...] = (
        "minimalist", "vintage", "modern", "rustic", "bohemian", "boho",
        "retro", "gothic", "scandinavian",
    )


@dataclass(frozen=True)
class CategoryConfig:
    """
    Coefficients d'ajustement par catégorie Etsy.

    LOGIQUE ÉCONOMIQUE:
    - > 1.0: catégorie plus encombrée que ne le suggèrent les volumes bruts
      (mode, bijoux, produits digitaux)
    - < 1.0: moins de vendeurs mais plus gros (mobilier)

    Ordre de la table = ordre de recherche pour la correspondance partielle.
    """
    coefficients: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({
        "Jewelry": 1.30,
        "Apparel": 1.25,
        "Home Decor": 1.10,
        "Digital Products": 1.40,
        "Pet Supplies": 0.90,
        "Furniture": 0.80,
        "Office / Organization": 0.95,
        "Wedding": 1.20,
    }))
    default_coefficient: float = DEFAULT_CATEGORY_COEFFICIENT


@dataclass(frozen=True)
class CompetitionConfig:
    """
    Configuration du score de concurrence (0-100).

    FORMULE:
    competition_score = min(adjusted_volume / max_volume, 1.0) × 100
    """
    max_volume: int = MAX_COMPETITION_VOLUME
    min_valid_samples: int = MIN_VALID_SAMPLES

    saturation_low_below: float = SATURATION_LOW_BELOW
    saturation_viable_below: float = SATURATION_VIABLE_BELOW
    saturation_high_below: float = SATURATION_HIGH_BELOW

    decision_launch_below: float = DECISION_LAUNCH_BELOW
    decision_caution_below: float = DECISION_CAUTION_BELOW


@dataclass(frozen=True)
class PillarConfig:
    """
    Configuration des trois piliers du Launch Potential Score.

    PILIERS:
    1. Densité de concurrence: dérivée du competition_score
    2. Saturation de niche: listes fixes de niches connues
    3. Spécificité produit: vocabulaires + motifs "titre générique"
    """
    density_low_below: float = DENSITY_LOW_BELOW
    density_medium_below: float = DENSITY_MEDIUM_BELOW

    # Niches structurellement saturées / moyennes / ouvertes
    high_saturation_niches: Tuple[str, ...] = (
        "jewelry", "jewellery", "bijoux", "fashion", "mode", "wedding",
        "mariage", "personalized-gifts",
    )
    medium_saturation_niches: Tuple[str, ...] = (
        "home-decor", "decoration", "art", "illustrations", "baby", "bébé",
        "sport", "fitness", "pets", "kitchen", "custom",
    )
    low_saturation_niches: Tuple[str, ...] = (
        "wellness", "vintage", "crafts", "garden",
    )
    unknown_niche_saturation: Level = Level.MEDIUM

    # Personnalisation, gravure, thèmes de niche, occasion/audience
    high_specificity_keywords: Tuple[str, ...] = (
        "personalized", "personalised", "personnalisé", "custom", "engraved",
        "gravé", "monogram", "initial", "birthstone", "zodiac",
        "constellation", "themed", "handmade", "fait main", "medieval",
        "viking", "celtic", "gothic", "steampunk", "wedding", "bridal",
        "bridesmaid", "anniversary", "birthday", "gift", "christmas",
        "valentine", "mother's day", "father's day", "graduation",
        "baby shower", "newborn", "for her", "for him", "for mom",
        "for dad", "teacher", "nurse", "pet portrait", "pet memorial",
        "dog", "cat lover",
    )
    # Adjectifs génériques de style/déco
    medium_specificity_keywords: Tuple[str, ...] = (
        "decorative", "stylish", "modern", "minimalist", "rustic", "boho",
        "bohemian", "elegant", "aesthetic", "cozy", "vintage", "cadeau",
    )
    # Motifs "titre générique" ({type} = type de produit échappé).
    # Heuristique volontairement petite et remplaçable.
    generic_title_patterns: Tuple[str, ...] = (
        r"^(white|black|silver|gold|golden|red|blue|green|pink|grey|gray|brown)\s+{type}s?$",
        r"^(simple|basic|plain|classic|small|large)\s+{type}s?$",
        r"^{type}s?$",
    )


@dataclass(frozen=True)
class MatrixConfig:
    """
    Matrice 3×3×3 du Launch Potential Score.

    INDEX: [saturation_niche][spécificité_produit][densité_concurrence] → (min, max)

    MONOTONIE:
    - saturation qui baisse → plages qui montent
    - spécificité qui monte → plages qui montent
    - densité qui monte → plages qui baissent

    Le score de base est le milieu de la plage.
    """
    ranges: Mapping[Level, Mapping[Level, Mapping[Level, Tuple[float, float]]]] = field(
        default_factory=lambda: _freeze_matrix({
            Level.HIGH: {
                Level.LOW: {Level.LOW: (2.5, 4.0), Level.MEDIUM: (1.5, 3.0), Level.HIGH: (0.5, 2.0)},
                Level.MEDIUM: {Level.LOW: (3.5, 5.0), Level.MEDIUM: (2.5, 4.0), Level.HIGH: (1.5, 3.0)},
                Level.HIGH: {Level.LOW: (5.0, 6.5), Level.MEDIUM: (4.0, 5.5), Level.HIGH: (3.0, 4.5)},
            },
            Level.MEDIUM: {
                Level.LOW: {Level.LOW: (3.5, 5.0), Level.MEDIUM: (2.5, 4.0), Level.HIGH: (1.5, 3.0)},
                Level.MEDIUM: {Level.LOW: (5.0, 6.5), Level.MEDIUM: (4.0, 5.5), Level.HIGH: (3.0, 4.5)},
                Level.HIGH: {Level.LOW: (6.5, 8.0), Level.MEDIUM: (5.5, 7.0), Level.HIGH: (4.5, 6.0)},
            },
            Level.LOW: {
                Level.LOW: {Level.LOW: (5.0, 6.5), Level.MEDIUM: (4.0, 5.5), Level.HIGH: (3.0, 4.5)},
                Level.MEDIUM: {Level.LOW: (6.5, 8.0), Level.MEDIUM: (5.5, 7.0), Level.HIGH: (4.5, 6.0)},
                Level.HIGH: {Level.LOW: (8.0, 9.5), Level.MEDIUM: (7.0, 8.5), Level.HIGH: (6.0, 7.5)},
            },
        })
    )

    # Ajustements fins (additifs, avant clamp)
    baseline_bonus: float = 0.2
    ideal_bonus: float = 0.5          # saturation low ∧ spécificité high ∧ densité low
    low_pressure_bonus: float = 0.3   # densité low ∧ saturation low
    worst_case_penalty: float = 0.5   # saturation high ∧ spécificité low ∧ densité high
    high_pressure_penalty: float = 0.3  # densité high ∧ saturation high

    min_score: float = 0.0
    max_score: float = 10.0

    def lookup(
        self,
        niche_saturation: NicheSaturation,
        product_specificity: ProductSpecificity,
        competition_density: CompetitionDensity,
    ) -> Tuple[float, float]:
        return self.ranges[niche_saturation][product_specificity][competition_density]


@dataclass(frozen=True)
class OverrideConfig:
    """
    Règle dure: bijou générique → score plafonné.

    Le marché des bijoux génériques est structurellement saturé;
    la matrice seule ne le pénalise pas assez.
    """
    score_cap: float = GENERIC_JEWELRY_SCORE_CAP
    # Comparés par mot entier (pluriel en "s" accepté) sur niche et type
    jewelry_keywords: Tuple[str, ...] = (
        "jewelry", "jewellery", "bracelet", "necklace", "ring", "earring",
        "pendant", "charm", "chain", "bangle", "anklet", "choker", "brooch",
        "bijou", "bijoux", "collier", "bague", "broche", "pendentif",
    )
    # Retirés du texte avant la recherche du vocabulaire bijoux
    non_jewelry_phrases: Tuple[str, ...] = (
        "pendant light", "pendant lamp", "ring light", "key ring", "key chain",
        "napkin ring", "curtain ring", "shower ring", "charm pack",
    )
    warning_sentence: str = (
        "Warning: generic jewelry without personalization or a distinctive "
        "theme is one of the most saturated segments on Etsy, so this score is "
        "capped at 2.9."
    )


@dataclass(frozen=True)
class TierConfig:
    """Tranches, verdicts et badges du Launch Potential Score."""
    saturated_max: float = TIER_SATURATED_MAX
    competitive_max: float = TIER_COMPETITIVE_MAX

    verdicts: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({
        "saturated": "not recommended",
        "competitive": "possible with strategy",
        "favorable": "good launch opportunity",
    }))
    badges: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({
        "saturated": "red",
        "competitive": "yellow",
        "favorable": "green",
    }))


def _freeze_matrix(raw: Dict) -> Mapping:
    """Rend la matrice imbriquée immuable."""
    return MappingProxyType({
        saturation: MappingProxyType({
            specificity: MappingProxyType(dict(by_density))
            for specificity, by_density in by_specificity.items()
        })
        for saturation, by_specificity in raw.items()
    })


@dataclass
class ScoringConfig:
    """
    Configuration globale du scoring Etsmart.

    Agrège toutes les configurations de composantes.
    Point d'entrée unique pour la calibration.
    """
    queries: QueryConfig = field(default_factory=QueryConfig)
    categories: CategoryConfig = field(default_factory=CategoryConfig)
    competition: CompetitionConfig = field(default_factory=CompetitionConfig)
    pillars: PillarConfig = field(default_factory=PillarConfig)
    matrix: MatrixConfig = field(default_factory=MatrixConfig)
    override: OverrideConfig = field(default_factory=OverrideConfig)
    tiers: TierConfig = field(default_factory=TierConfig)

    def validate(self) -> bool:
        """
        Vérifie la cohérence de la configuration.

        Raises:
            ValueError: si un seuil ou la matrice est incohérent.
        """
        comp = self.competition
        if comp.max_volume <= 0:
            raise ValueError("max_volume doit être positif")
        if comp.min_valid_samples < 1:
            raise ValueError("min_valid_samples doit être >= 1")
        if not comp.saturation_low_below < comp.saturation_viable_below < comp.saturation_high_below:
            raise ValueError("Seuils de saturation non croissants")
        if not comp.decision_launch_below < comp.decision_caution_below:
            raise ValueError("Seuils de décision non croissants")
        if not self.pillars.density_low_below < self.pillars.density_medium_below:
            raise ValueError("Seuils de densité non croissants")
        if not self.tiers.saturated_max < self.tiers.competitive_max:
            raise ValueError("Tranches du score non croissantes")
        if not 1 <= self.queries.min_queries <= self.queries.max_queries:
            raise ValueError("Bornes du nombre de requêtes invalides")

        self._validate_matrix()
        return True

    def _validate_matrix(self) -> None:
        m = self.matrix
        levels = Level.ordered()

        for sat in levels:
            for spec in levels:
                for dens in levels:
                    try:
                        lo, hi = m.lookup(sat, spec, dens)
                    except KeyError:
                        raise ValueError(
                            f"Matrice incomplète: [{sat.value}][{spec.value}][{dens.value}]"
                        )
                    if not m.min_score <= lo <= hi <= m.max_score:
                        raise ValueError(
                            f"Plage invalide ({lo}, {hi}) en "
                            f"[{sat.value}][{spec.value}][{dens.value}]"
                        )

        def midpoint(sat, spec, dens):
            lo, hi = m.lookup(sat, spec, dens)
            return (lo + hi) / 2

        # Densité croissante → score non croissant
        for sat in levels:
            for spec in levels:
                mids = [midpoint(sat, spec, d) for d in levels]
                if any(a < b for a, b in zip(mids, mids[1:])):
                    raise ValueError(
                        f"Matrice non monotone en densité pour [{sat.value}][{spec.value}]"
                    )
        # Spécificité croissante → score non décroissant
        for sat in levels:
            for dens in levels:
                mids = [midpoint(sat, s, dens) for s in levels]
                if any(a > b for a, b in zip(mids, mids[1:])):
                    raise ValueError(
                        f"Matrice non monotone en spécificité pour [{sat.value}][*][{dens.value}]"
                    )
        # Saturation croissante → score non croissant
        for spec in levels:
            for dens in levels:
                mids = [midpoint(s, spec, dens) for s in levels]
                if any(a < b for a, b in zip(mids, mids[1:])):
                    raise ValueError(
                        f"Matrice non monotone en saturation pour [*][{spec.value}][{dens.value}]"
                    )


# Instance par défaut (Etsy, marché EN)
DEFAULT_CONFIG = ScoringConfig()
