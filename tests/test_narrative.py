"""
Tests des textes déterministes (explication et justification).
"""

import re

from src.scoring.narrative import (
    NO_CHALLENGE_SENTENCE,
    NO_STRENGTH_SENTENCE,
    TIER_HEADLINES,
    TIER_RECOMMENDATIONS,
    build_explanation,
    build_score_justification,
    classify_factor_phrases,
)
from src.scoring.scoring_models import LaunchFactors, Level, Tier


def count_sentences(text: str) -> int:
    return len(re.findall(r"[.!?](?:\s|$)", text))


class TestFactorPhrases:

    def test_strengths_and_challenges_split(self):
        factors = LaunchFactors(
            competition_density=Level.LOW,
            niche_saturation=Level.HIGH,
            product_specificity=Level.HIGH,
        )
        strengths, challenges = classify_factor_phrases(factors)
        assert strengths == ["a highly specific product", "limited competition"]
        assert challenges == ["a highly saturated niche"]

    def test_all_medium_is_neutral(self):
        factors = LaunchFactors(Level.MEDIUM, Level.MEDIUM, Level.MEDIUM)
        assert classify_factor_phrases(factors) == ([], [])


class TestExplanation:

    def test_headline_and_drivers(self):
        factors = LaunchFactors(Level.LOW, Level.HIGH, Level.HIGH)
        text = build_explanation(Tier.COMPETITIVE, factors)
        assert text.startswith(TIER_HEADLINES[Tier.COMPETITIVE])
        assert "Key factors: a highly specific product, limited competition and a highly saturated niche." in text

    def test_warning_comes_first(self):
        factors = LaunchFactors(Level.MEDIUM, Level.HIGH, Level.LOW)
        text = build_explanation(Tier.SATURATED, factors, warning="Warning: capped.")
        assert text.startswith("Warning: capped. ")

    def test_at_most_three_sentences_without_warning(self):
        for level in Level.ordered():
            factors = LaunchFactors(level, level, level)
            for tier in Tier:
                assert 1 <= count_sentences(build_explanation(tier, factors)) <= 3


class TestScoreJustification:

    def test_four_sentences_for_every_combination(self):
        for dens in Level.ordered():
            for sat in Level.ordered():
                for spec in Level.ordered():
                    factors = LaunchFactors(dens, sat, spec)
                    for tier in Tier:
                        text = build_score_justification(5.0, tier, factors)
                        assert count_sentences(text) == 4

    def test_summary_and_recommendation(self):
        factors = LaunchFactors(Level.LOW, Level.LOW, Level.HIGH)
        text = build_score_justification(9.8, Tier.FAVORABLE, factors)
        assert text.startswith("The product scores 9.8/10, which places it in the favorable tier.")
        assert NO_CHALLENGE_SENTENCE in text
        assert text.endswith(TIER_RECOMMENDATIONS[Tier.FAVORABLE])

    def test_no_strength_sentence(self):
        factors = LaunchFactors(Level.HIGH, Level.HIGH, Level.LOW)
        text = build_score_justification(0.7, Tier.SATURATED, factors)
        assert NO_STRENGTH_SENTENCE in text
        assert "Its main challenges are a highly saturated niche, a generic product and intense competition." in text

    def test_identical_inputs_identical_text(self):
        factors = LaunchFactors(Level.MEDIUM, Level.LOW, Level.MEDIUM)
        first = build_score_justification(6.2, Tier.COMPETITIVE, factors)
        assert build_score_justification(6.2, Tier.COMPETITIVE, factors) == first
