"""
Integration tests for the product analysis pipeline.

The Etsy signal source is replaced by an in-memory table of result counts.
"""

import pytest

from src.orchestrator.pipeline import ProductAnalysisPipeline
from src.scoring.competition_estimator import InsufficientSignalError
from src.scoring.scoring_models import SaturationLevel, ScoringRequest, Tier


class FakeSignalSource:
    def __init__(self, counts, default=None):
        self.counts = counts
        self.default = default
        self.queries = []

    def __call__(self, query, market):
        self.queries.append(query)
        return self.counts.get(query, self.default)


class TestProductAnalysisPipeline:

    def test_generic_jewelry_analysis(self):
        source = FakeSignalSource({
            "bracelet silver": 4000,
            "wristband silver": 5000,
            "bracelet jewelry": 6000,
        })
        pipeline = ProductAnalysisPipeline(source)
        analysis = pipeline.analyze(ScoringRequest("Silver Bracelet", "bracelet", "Jewelry"))

        assert analysis.queries == source.queries
        assert analysis.competition.base_volume == 5000
        assert analysis.competition.competition_score == 32.5
        assert analysis.competition.saturation_level == SaturationLevel.VIABLE

        launch = analysis.launch_potential
        assert launch.override_applied
        assert launch.score <= 2.9
        assert launch.tier == Tier.SATURATED

        assert analysis.time_to_first_sale.range_label == "20 days"
        assert analysis.time_to_first_sale_with_ads.expected_days == 12

    def test_visual_description_feeds_specificity(self):
        source = FakeSignalSource({}, default=3000)
        pipeline = ProductAnalysisPipeline(source)

        plain = pipeline.analyze(ScoringRequest("Wooden Table Lamp", "lamp", "Home Decor"))
        described = pipeline.analyze(
            ScoringRequest("Wooden Table Lamp", "lamp", "Home Decor"),
            product_visual_description="custom engraved wooden base",
        )
        assert described.launch_potential.score > plain.launch_potential.score

    def test_insufficient_signal_propagates(self):
        pipeline = ProductAnalysisPipeline(FakeSignalSource({}, default=None))
        with pytest.raises(InsufficientSignalError):
            pipeline.analyze(ScoringRequest("Silver Bracelet", "bracelet", "Jewelry"))

    def test_to_dict(self):
        pipeline = ProductAnalysisPipeline(FakeSignalSource({}, default=3000))
        data = pipeline.analyze(ScoringRequest("Boho Throw Pillow", "pillow", "Home Decor")).to_dict()

        assert data["product_title"] == "Boho Throw Pillow"
        assert len(data["analysis_id"]) == 8
        assert set(data) >= {
            "queries",
            "competition",
            "launch_potential",
            "time_to_first_sale",
            "time_to_first_sale_with_ads",
            "analyzed_at",
        }
