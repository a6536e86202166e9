"""
Tests unitaires pour la génération de requêtes Etsy.

Ces tests vérifient:
1. Le nombre de requêtes (3 à 5, distinctes, non vides)
2. L'ordre stable des variantes
3. Les cas dégradés (titre vide, type inconnu)

Utilisation:
    pytest tests/test_query_generator.py -v
"""

import pytest

from src.scoring.query_generator import (
    detect_style,
    extract_title_tokens,
    generate_search_queries,
)
from src.scoring.scoring_config import QueryConfig
from src.scoring.scoring_models import ScoringRequest


class TestTitleTokens:
    """Extraction des mots significatifs du titre."""

    def test_drops_stopwords_short_words_and_type(self):
        tokens = extract_title_tokens("The Vintage Ceramic Coffee Mug for Mom", "mug")
        assert tokens == ["vintage", "ceramic", "coffee", "mom"]

    def test_punctuation_removed(self):
        tokens = extract_title_tokens("Boho, Macramé! Wall-Hanging", "")
        assert tokens == ["boho", "macramé", "wall-hanging"]

    def test_keeps_at_most_four_tokens(self):
        tokens = extract_title_tokens("alpha bravo charlie delta echo foxtrot", "")
        assert len(tokens) == 4

    def test_style_detection_uses_vocabulary_order(self):
        assert detect_style("Modern Minimalist Lamp") == "minimalist"
        assert detect_style("Plain Lamp") is None


class TestGenerateSearchQueries:
    """Génération des variantes de recherche."""

    def test_full_variant_set(self):
        request = ScoringRequest("Vintage Ceramic Coffee Mug", "mug", "Home Decor")
        assert generate_search_queries(request) == [
            "mug vintage",
            "coffee cup vintage",
            "mug coffee",
            "vintage mug",
        ]

    def test_generic_jewelry_title(self):
        request = ScoringRequest("Silver Bracelet", "bracelet", "Jewelry")
        assert generate_search_queries(request) == [
            "bracelet silver",
            "wristband silver",
            "bracelet jewelry",
        ]

    def test_unknown_type_padded_with_title_words_then_type(self):
        request = ScoringRequest("Blue Widget Holder", "widget", "Office")
        assert generate_search_queries(request) == [
            "widget blue",
            "widget holder",
            "widget",
        ]

    def test_caller_keywords_used_as_padding(self):
        request = ScoringRequest("Widget", "widget", "Office", keywords=("Desk Organizer",))
        queries = generate_search_queries(request)
        assert queries[0] == "widget desk organizer"
        assert "widget" in queries

    def test_empty_title_degrades_to_type(self):
        request = ScoringRequest("", "mug", "Home Decor")
        queries = generate_search_queries(request)
        assert len(queries) >= 1
        assert all("mug" in q or "cup" in q for q in queries)

    def test_empty_title_and_type_gives_no_query(self):
        assert generate_search_queries(ScoringRequest("", "", "Jewelry")) == []

    @pytest.mark.parametrize("title,product_type", [
        ("Personalized Engraved Silver Bracelet", "bracelet"),
        ("Boho Throw Pillow Cover", "pillow"),
        ("Minimalist Line Art Poster", "poster"),
        ("Soy Candle Lavender", "candle"),
    ])
    def test_count_and_uniqueness(self, title, product_type):
        queries = generate_search_queries(ScoringRequest(title, product_type, "Home Decor"))
        assert 3 <= len(queries) <= 5
        assert len(set(queries)) == len(queries)
        assert all(q.strip() == q and q for q in queries)

    def test_stable_output(self):
        request = ScoringRequest("Rustic Wooden Candle Holder", "candle", "Home Decor")
        assert generate_search_queries(request) == generate_search_queries(request)

    def test_max_queries_respected(self):
        config = QueryConfig(min_queries=1, max_queries=2)
        request = ScoringRequest("Vintage Ceramic Coffee Mug", "mug", "Home Decor")
        assert generate_search_queries(request, config) == ["mug vintage", "coffee cup vintage"]
