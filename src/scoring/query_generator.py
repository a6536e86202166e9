"""
Etsmart Query Generator
=======================

Génère 3 à 5 requêtes de recherche Etsy pour un produit (sans IA).

LOGIQUE:
Un seul mot-clé peut matcher une catégorie très large et fausser le
volume de concurrence. On diversifie à partir du type de produit:

    1. type + mot le plus saillant du titre
    2. synonyme du type + ce même mot
    3. type + terme d'usage typique
    4. style détecté dans le titre + type (un seul style)
    5. complément "type + mot restant" jusqu'à 3 requêtes, puis le type seul

L'ordre de sortie est stable pour un même input.
"""

import re
from typing import List, Optional

from .scoring_config import QueryConfig, DEFAULT_CONFIG
from .scoring_models import ScoringRequest

_NON_WORD = re.compile(r"[^\w\s-]")
_WORD = re.compile(r"[\w-]+")


def extract_title_tokens(
    title: str,
    product_type: str = "",
    config: Optional[QueryConfig] = None,
) -> List[str]:
    """
    Extrait les mots significatifs du titre.

    Retire la ponctuation, les mots de moins de 3 lettres, les stopwords
    et les mots qui répètent le type de produit. Garde les 4 premiers.
    """
    cfg = config or DEFAULT_CONFIG.queries
    type_words = set(_WORD.findall(product_type.lower()))

    tokens: List[str] = []
    for word in _NON_WORD.sub(" ", title.lower()).split():
        word = word.strip("-")
        if len(word) < cfg.min_token_length:
            continue
        if word in cfg.stopwords or word in type_words or word in tokens:
            continue
        tokens.append(word)

    return tokens[:cfg.max_title_tokens]


def detect_style(title: str, config: Optional[QueryConfig] = None) -> Optional[str]:
    """Premier terme de style (ordre du vocabulaire) présent dans le titre."""
    cfg = config or DEFAULT_CONFIG.queries
    title_lower = title.lower()
    for style in cfg.style_terms:
        if style in title_lower:
            return style
    return None


def generate_search_queries(
    request: ScoringRequest,
    config: Optional[QueryConfig] = None,
) -> List[str]:
    """
    Génère les requêtes de recherche pour une demande de scoring.

    Args:
        request: Titre, type et catégorie du produit.
        config: Vocabulaires. Si None, utilise DEFAULT_CONFIG.queries.

    Returns:
        Liste de 1 à 5 requêtes distinctes et non vides. Un titre vide
        dégrade vers le type seul. Si le titre ET le type sont vides, la
        liste est vide.
    """
    cfg = config or DEFAULT_CONFIG.queries
    product_type = " ".join(request.product_type.lower().split())
    tokens = extract_title_tokens(request.product_title, product_type, cfg)
    main_token = tokens[0] if tokens else ""

    queries: List[str] = []

    def add(query: str) -> bool:
        query = " ".join(query.split())
        if not query or query in queries:
            return False
        queries.append(query)
        return True

    # Requête principale: type + caractéristique principale
    if main_token:
        add(f"{product_type} {main_token}")

    # Formulation alternative via synonyme
    synonyms = cfg.synonyms.get(product_type)
    if synonyms:
        add(f"{synonyms[0]} {main_token}")

    # Usage typique
    usage = cfg.usage_terms.get(product_type)
    if usage:
        add(f"{product_type} {usage}")

    # Style / intention
    style = detect_style(request.product_title, cfg)
    if style:
        add(f"{style} {product_type}")

    # Compléments: mots du titre puis mots-clés fournis par l'appelant
    candidates = list(tokens)
    for keyword in request.keywords:
        keyword = " ".join(keyword.lower().split())
        if keyword and keyword not in candidates and keyword != product_type:
            candidates.append(keyword)

    while len(queries) < cfg.min_queries:
        used_words = {w for q in queries for w in q.split()}
        remaining = [c for c in candidates if c not in used_words and c not in queries]
        if remaining:
            candidates.remove(remaining[0])
            add(f"{product_type} {remaining[0]}")
        else:
            # Dernier recours
            add(product_type)
            break

    return queries[:cfg.max_queries]
