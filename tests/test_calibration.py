"""
Tests de l'infrastructure de calibration.
"""

import json

from src.scoring.calibration import (
    ETSY_CALIBRATION_CASES,
    CalibrationCase,
    CalibrationRunner,
)


class TestCalibrationRunner:

    def setup_method(self):
        self.runner = CalibrationRunner()

    def test_builtin_cases_pass(self):
        report = self.runner.run(ETSY_CALIBRATION_CASES)
        assert report.total_cases == len(ETSY_CALIBRATION_CASES)
        assert report.failed == 0, report.summary()
        assert report.pass_rate == 1.0

    def test_failed_case_reported(self):
        case = CalibrationCase(
            case_id="CAL_WRONG_EXPECTATION",
            inputs={
                "competition_score": 95,
                "niche": "fashion",
                "product_title": "Black T-Shirt",
                "product_type": "t-shirt",
            },
            expected_tier="favorable",
            expected_score_range=(8.0, 10.0),
            notes="deliberately wrong",
        )
        report = self.runner.run([case])

        assert report.failed == 1
        assert report.tier_confusion == {"favorable -> saturated": 1}
        summary = report.summary()
        assert "CAL_WRONG_EXPECTATION" in summary
        assert "deliberately wrong" in summary

        data = report.to_dict()
        assert data["failed_cases"][0]["actual_tier"] == "saturated"
        assert data["failed_cases"][0]["factors"]["niche_saturation"] == "high"

    def test_empty_run(self):
        report = self.runner.run([])
        assert report.total_cases == 0
        assert report.pass_rate == 0.0

    def test_save_report(self, tmp_path):
        report = self.runner.run(ETSY_CALIBRATION_CASES)
        path = tmp_path / "reports" / "calibration.json"
        self.runner.save_report(report, path)

        data = json.loads(path.read_text())
        assert data["total_cases"] == len(ETSY_CALIBRATION_CASES)
        assert data["failed_cases"] == []
