"""
Etsmart Product Analysis Pipeline
=================================

Chains the scoring modules for one product:

1. Query generation
2. Signal collection (Etsy result counts)
3. Competition estimate (median → category → 0-100)
4. Launch potential (3-pillar matrix → 0-10)
5. Time to first sale (organic and with ads)

The pipeline holds no state between calls; a failure in stage 3
(InsufficientSignalError) propagates to the caller untouched.

Usage:
    from src.orchestrator.pipeline import ProductAnalysisPipeline

    pipeline = ProductAnalysisPipeline(signal_source=client.fetch_result_count)
    analysis = pipeline.analyze(request)
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..scoring.competition_estimator import CompetitionEstimator, SignalSource, collect_signal_samples
from ..scoring.launch_potential import LaunchPotentialScorer
from ..scoring.query_generator import generate_search_queries
from ..scoring.scoring_config import ScoringConfig, DEFAULT_CONFIG
from ..scoring.scoring_models import CompetitionEstimate, LaunchPotentialResult, ScoringRequest
from ..scoring.time_to_first_sale import (
    TimeToFirstSaleEstimate,
    estimate_time_to_first_sale,
    estimate_time_to_first_sale_with_ads,
)

logger = logging.getLogger(__name__)


@dataclass
class ProductAnalysis:
    """Complete analysis of one product."""
    analysis_id: str
    request: ScoringRequest
    queries: List[str]
    competition: CompetitionEstimate
    launch_potential: LaunchPotentialResult
    time_to_first_sale: TimeToFirstSaleEstimate
    time_to_first_sale_with_ads: TimeToFirstSaleEstimate
    analyzed_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "analysis_id": self.analysis_id,
            "product_title": self.request.product_title,
            "product_type": self.request.product_type,
            "category": self.request.category,
            "market": self.request.market,
            "queries": list(self.queries),
            "competition": self.competition.to_dict(),
            "launch_potential": self.launch_potential.to_dict(),
            "time_to_first_sale": self.time_to_first_sale.to_dict(),
            "time_to_first_sale_with_ads": self.time_to_first_sale_with_ads.to_dict(),
            "analyzed_at": self.analyzed_at.isoformat(),
        }


class ProductAnalysisPipeline:
    """End-to-end analysis of a product launch."""

    def __init__(
        self,
        signal_source: SignalSource,
        config: Optional[ScoringConfig] = None,
    ):
        self.signal_source = signal_source
        self.config = config or DEFAULT_CONFIG
        self.estimator = CompetitionEstimator(signal_source, self.config)
        self.launch_scorer = LaunchPotentialScorer(self.config)

    def analyze(
        self,
        request: ScoringRequest,
        product_visual_description: Optional[str] = None,
    ) -> ProductAnalysis:
        """
        Run every stage for one product.

        The request category doubles as the niche label for launch potential.

        Raises:
            InsufficientSignalError: fewer than 2 valid search signals.
        """
        analysis_id = str(uuid.uuid4())[:8]
        logger.info(
            f"[{analysis_id}] Analyzing '{request.product_title}' "
            f"({request.product_type}, {request.category}, {request.market})",
            extra={"stage": "start", "niche": request.category},
        )

        queries = generate_search_queries(request, self.config.queries)
        samples = collect_signal_samples(queries, self.signal_source, request.market)
        logger.info(
            f"[{analysis_id}] {sum(1 for s in samples if s.valid)}/{len(samples)} valid signals",
            extra={"stage": "signals"},
        )

        competition = self.estimator.estimate_from_samples(request, samples)

        launch = self.launch_scorer.score(
            competition_score=competition.competition_score,
            niche=request.category,
            product_title=request.product_title,
            product_type=request.product_type,
            product_visual_description=product_visual_description,
        )

        organic = estimate_time_to_first_sale(launch.score)
        with_ads = estimate_time_to_first_sale_with_ads(organic)

        logger.info(
            f"[{analysis_id}] Launch potential {launch.score}/10 ({launch.tier.value}), "
            f"competition {competition.competition_score}/100",
            extra={"stage": "done", "score": launch.score},
        )

        return ProductAnalysis(
            analysis_id=analysis_id,
            request=request,
            queries=queries,
            competition=competition,
            launch_potential=launch,
            time_to_first_sale=organic,
            time_to_first_sale_with_ads=with_ads,
            analyzed_at=datetime.now(timezone.utc),
        )
