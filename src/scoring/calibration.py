"""
Etsmart Scoring Calibration Infrastructure
==========================================

Tools for validating the launch-potential matrix against known outcomes.

USAGE:
    from src.scoring.calibration import CalibrationRunner, CalibrationCase

    cases = [
        CalibrationCase(
            case_id="CAL_PERSONALIZED_MUG",
            inputs={
                "competition_score": 35,
                "niche": "kitchen",
                "product_title": "Personalized Dog Mom Mug",
                "product_type": "mug",
            },
            expected_tier="competitive",
            expected_score_range=(5.0, 7.0),
        ),
    ]

    runner = CalibrationRunner()
    report = runner.run(cases)
    print(report.summary())

This module does NOT modify the matrix or vocabularies.
It produces a diagnostic report that a human uses to tune scoring_config.py.
"""

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .launch_potential import LaunchPotentialScorer
from .scoring_config import ScoringConfig, DEFAULT_CONFIG
from .scoring_models import LaunchPotentialResult

logger = logging.getLogger(__name__)


@dataclass
class CalibrationCase:
    """
    A single calibration case: launch inputs + expected outcome.

    `inputs` holds the keyword arguments of LaunchPotentialScorer.score().
    """
    case_id: str
    inputs: Dict[str, Any]
    expected_tier: str                              # "saturated", "competitive", "favorable"
    expected_score_range: Tuple[float, float]       # inclusive (min, max)
    notes: str = ""
    tags: List[str] = field(default_factory=list)


@dataclass
class CaseResult:
    """Result of evaluating one calibration case."""
    case: CalibrationCase
    actual_result: LaunchPotentialResult
    score_in_range: bool
    tier_match: bool
    score_delta: float      # actual - midpoint of expected range

    @property
    def passed(self) -> bool:
        return self.score_in_range and self.tier_match


@dataclass
class CalibrationReport:
    """Aggregated calibration report."""
    run_at: str
    total_cases: int
    passed: int
    failed: int
    results: List[CaseResult]
    tier_confusion: Dict[str, int] = field(default_factory=dict)

    @property
    def pass_rate(self) -> float:
        return self.passed / self.total_cases if self.total_cases > 0 else 0.0

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [
            "=" * 60,
            "ETSMART CALIBRATION REPORT",
            "=" * 60,
            f"Run at:      {self.run_at}",
            f"Cases:       {self.total_cases}",
            f"Passed:      {self.passed} ({self.pass_rate:.0%})",
            f"Failed:      {self.failed}",
            "",
        ]

        if self.tier_confusion:
            lines.append("--- Tier Mismatches (expected -> actual) ---")
            for pair, count in sorted(self.tier_confusion.items()):
                lines.append(f"  {pair}: {count}")
            lines.append("")

        failed_cases = [r for r in self.results if not r.passed]
        if failed_cases:
            lines.append("--- Failed Cases ---")
            for r in failed_cases:
                lo, hi = r.case.expected_score_range
                lines.append(
                    f"  {r.case.case_id}: score={r.actual_result.score} "
                    f"expected=[{lo}-{hi}] "
                    f"tier={r.actual_result.tier.value} "
                    f"expected_tier={r.case.expected_tier}"
                )
                if r.case.notes:
                    lines.append(f"    notes: {r.case.notes}")
            lines.append("")

        lines.append("=" * 60)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable dict for JSON export."""
        return {
            "run_at": self.run_at,
            "total_cases": self.total_cases,
            "passed": self.passed,
            "failed": self.failed,
            "pass_rate": round(self.pass_rate, 3),
            "tier_confusion": dict(self.tier_confusion),
            "failed_cases": [
                {
                    "case_id": r.case.case_id,
                    "actual_score": r.actual_result.score,
                    "expected_range": list(r.case.expected_score_range),
                    "actual_tier": r.actual_result.tier.value,
                    "expected_tier": r.case.expected_tier,
                    "factors": r.actual_result.factors.to_dict(),
                    "score_delta": r.score_delta,
                    "notes": r.case.notes,
                }
                for r in self.results if not r.passed
            ],
        }


class CalibrationRunner:
    """
    Runs calibration cases against the launch-potential scorer.

    Does NOT modify any configuration.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.scorer = LaunchPotentialScorer(self.config)

    def run(self, cases: List[CalibrationCase]) -> CalibrationReport:
        """
        Run all calibration cases and produce a report.

        Raises:
            TypeError: if a case's inputs do not match the scorer signature.
        """
        results: List[CaseResult] = []
        confusion: Counter = Counter()

        for case in cases:
            result = self.scorer.score(**case.inputs)

            lo, hi = case.expected_score_range
            score_in_range = lo <= result.score <= hi
            tier_match = result.tier.value == case.expected_tier
            if not tier_match:
                confusion[f"{case.expected_tier} -> {result.tier.value}"] += 1

            results.append(CaseResult(
                case=case,
                actual_result=result,
                score_in_range=score_in_range,
                tier_match=tier_match,
                score_delta=round(result.score - (lo + hi) / 2, 2),
            ))

        passed = sum(1 for r in results if r.passed)
        report = CalibrationReport(
            run_at=datetime.now(timezone.utc).isoformat(),
            total_cases=len(results),
            passed=passed,
            failed=len(results) - passed,
            results=results,
            tier_confusion=dict(confusion),
        )
        logger.info(f"Calibration: {passed}/{len(results)} cases passed")
        return report

    def save_report(self, report: CalibrationReport, path: Path) -> None:
        """Save calibration report to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(report.to_dict(), f, indent=2)
        logger.info(f"Calibration report saved to {path}")


# ============================================================================
# BUILT-IN CALIBRATION CASES (Etsy, EN market)
# ============================================================================

ETSY_CALIBRATION_CASES: List[CalibrationCase] = [
    CalibrationCase(
        case_id="CAL_GENERIC_JEWELRY_01",
        inputs={
            "competition_score": 10,
            "niche": "jewelry",
            "product_title": "Gold Necklace",
            "product_type": "necklace",
        },
        expected_tier="saturated",
        expected_score_range=(0.0, 2.9),
        notes="Generic jewelry stays capped even with a quiet search page",
        tags=["anchor", "override"],
    ),
    CalibrationCase(
        case_id="CAL_PERSONALIZED_JEWELRY_01",
        inputs={
            "competition_score": 40,
            "niche": "jewelry",
            "product_title": "Personalized Wedding Bracelet Engraved Gift",
            "product_type": "bracelet",
        },
        expected_tier="competitive",
        expected_score_range=(5.0, 7.0),
        notes="Strong personalization lifts a saturated niche to competitive",
        tags=["anchor"],
    ),
    CalibrationCase(
        case_id="CAL_GARDEN_IDEAL_01",
        inputs={
            "competition_score": 20,
            "niche": "garden",
            "product_title": "Custom Engraved Garden Marker Gift for Mom",
            "product_type": "garden marker",
        },
        expected_tier="favorable",
        expected_score_range=(9.0, 10.0),
        notes="Open niche, specific product, quiet search results",
        tags=["anchor", "ideal"],
    ),
    CalibrationCase(
        case_id="CAL_FASHION_CROWDED_01",
        inputs={
            "competition_score": 95,
            "niche": "fashion",
            "product_title": "Black T-Shirt",
            "product_type": "t-shirt",
        },
        expected_tier="saturated",
        expected_score_range=(0.0, 1.0),
        notes="Worst case: generic apparel in a saturated niche",
        tags=["anchor", "worst_case"],
    ),
]
