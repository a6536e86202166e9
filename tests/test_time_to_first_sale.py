"""
Tests du délai estimé avant première vente.
"""

import pytest

from src.scoring.time_to_first_sale import (
    estimate_time_to_first_sale,
    estimate_time_to_first_sale_with_ads,
)


class TestTimeToFirstSale:

    @pytest.mark.parametrize("score", [0.0, 2.9, 3.0])
    def test_saturated_scores(self, score):
        estimate = estimate_time_to_first_sale(score)
        assert (estimate.min_days, estimate.max_days, estimate.expected_days) == (18, 25, 20)
        assert estimate.range_label == "20 days"
        assert "high saturation" in estimate.explanation

    @pytest.mark.parametrize("score", [3.1, 6.0, 7.0])
    def test_competitive_scores(self, score):
        estimate = estimate_time_to_first_sale(score)
        assert (estimate.min_days, estimate.max_days, estimate.expected_days) == (8, 12, 10)
        assert estimate.range_label == "10 days"

    @pytest.mark.parametrize("score,expected,label", [
        (8.0, 5, "4-5 days"),
        (9.0, 3, "2-4 days"),
        (10.0, 1, "1-2 days"),
    ])
    def test_favorable_scores_interpolated(self, score, expected, label):
        estimate = estimate_time_to_first_sale(score)
        assert estimate.expected_days == expected
        assert estimate.range_label == label

    def test_higher_score_never_slower(self):
        days = [estimate_time_to_first_sale(s / 10).expected_days for s in range(0, 101)]
        assert all(a >= b for a, b in zip(days, days[1:]))

    def test_out_of_range_score_clamped(self):
        assert estimate_time_to_first_sale(15).expected_days == 1
        assert estimate_time_to_first_sale(-2).expected_days == 20

    def test_to_dict_keys(self):
        data = estimate_time_to_first_sale(6.0).to_dict()
        assert set(data) == {"min", "max", "expected", "range", "explanation"}


class TestTimeToFirstSaleWithAds:

    def test_saturated_with_ads(self):
        estimate = estimate_time_to_first_sale_with_ads(estimate_time_to_first_sale(2.0))
        assert (estimate.min_days, estimate.max_days, estimate.expected_days) == (11, 15, 12)
        assert estimate.range_label == "11-15 days"
        assert "Etsy Ads" in estimate.explanation

    def test_competitive_with_ads(self):
        estimate = estimate_time_to_first_sale_with_ads(estimate_time_to_first_sale(5.0))
        assert (estimate.min_days, estimate.max_days, estimate.expected_days) == (5, 7, 6)

    def test_never_below_one_day(self):
        estimate = estimate_time_to_first_sale_with_ads(estimate_time_to_first_sale(10.0))
        assert estimate.min_days >= 1
        assert estimate.expected_days >= 1
