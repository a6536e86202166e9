"""
Etsmart Scoring CLI
===================

Command-line interface for the scoring engine.

Commands:
    queries   - Show the search queries generated for a product
    estimate  - Estimate competition from live Etsy result counts
    score     - Compute the launch potential score from a competition score
    analyze   - Full analysis (estimate + launch potential + time to first sale)

Usage:
    python -m src.orchestrator.cli queries --title "Silver Bracelet" --type bracelet --category Jewelry
    python -m src.orchestrator.cli estimate --title "Vintage Coffee Mug" --type mug --category "Home Decor"
    python -m src.orchestrator.cli score --competition-score 40 --niche jewelry \\
        --title "Personalized Wedding Bracelet Engraved Gift" --type bracelet
    python -m src.orchestrator.cli analyze --title "Boho Throw Pillow" --type pillow --category "Home Decor" --json
"""

import argparse
import json
import logging
import sys

from ..data.config import get_settings
from ..data.etsy_search_client import EtsySearchClient
from ..scoring.competition_estimator import CompetitionEstimator, InsufficientSignalError
from ..scoring.launch_potential import LaunchPotentialScorer
from ..scoring.query_generator import generate_search_queries
from ..scoring.scoring_models import ScoringRequest
from .logging_config import setup_logging
from .pipeline import ProductAnalysisPipeline

logger = logging.getLogger(__name__)


def _request_from_args(args) -> ScoringRequest:
    return ScoringRequest(
        product_title=args.title,
        product_type=args.type,
        category=args.category,
        keywords=tuple(args.keyword or ()),
        market=args.market,
    )


def _print_launch(result):
    print(f"Launch Potential: {result.score}/10 [{result.badge.value}]")
    print(f"Tier: {result.tier.value} - {result.verdict}")
    print()
    print("Factors:")
    for name, level in result.factors.to_dict().items():
        print(f"  {name:22} {level}")
    print()
    print(result.explanation)
    print()
    print(result.score_justification)


def cmd_queries(args):
    """Show generated search queries."""
    queries = generate_search_queries(_request_from_args(args))

    if args.json:
        print(json.dumps(queries, indent=2))
        return 0

    print("Generated queries:")
    for i, query in enumerate(queries, 1):
        print(f"  {i}. {query}")
    return 0


def cmd_estimate(args):
    """Estimate competition from live Etsy data."""
    request = _request_from_args(args)
    client = EtsySearchClient(get_settings().etsy)

    try:
        estimate = CompetitionEstimator(client.fetch_result_count).estimate_competition(request)
    except InsufficientSignalError as e:
        print(f"ERROR: {e}")
        return 1

    if args.json:
        print(json.dumps(estimate.to_dict(), indent=2))
        return 0

    print("=" * 60)
    print(f"COMPETITION ESTIMATE: {request.product_title}")
    print("=" * 60)
    for sample in estimate.samples:
        status = "✓" if sample.valid else "✗"
        print(f"  {status} {sample.keyword:40} {sample.result_count:>10,}")
    print()
    print(f"Base volume (median): {estimate.base_volume:,.0f}")
    print(f"Category coefficient: ×{estimate.category_coefficient:.2f}")
    print(f"Adjusted volume:      {estimate.adjusted_volume:,}")
    print(f"Competition score:    {estimate.competition_score}/100")
    print(f"Saturation:           {estimate.saturation_level.value}")
    print(f"Decision:             {estimate.decision.value}")
    return 0


def cmd_score(args):
    """Compute the launch potential score."""
    result = LaunchPotentialScorer().score(
        competition_score=args.competition_score,
        niche=args.niche,
        product_title=args.title,
        product_type=args.type,
        product_visual_description=args.description,
    )

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return 0

    print("=" * 60)
    print(f"LAUNCH POTENTIAL: {args.title}")
    print("=" * 60)
    _print_launch(result)
    return 0


def cmd_analyze(args):
    """Full product analysis."""
    request = _request_from_args(args)
    client = EtsySearchClient(get_settings().etsy)
    pipeline = ProductAnalysisPipeline(client.fetch_result_count)

    try:
        analysis = pipeline.analyze(request, product_visual_description=args.description)
    except InsufficientSignalError as e:
        print(f"ERROR: {e}")
        return 1

    if args.json:
        print(json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False))
        return 0

    print("=" * 60)
    print(f"PRODUCT ANALYSIS: {request.product_title}")
    print("=" * 60)
    print(f"Competition: {analysis.competition.competition_score}/100 "
          f"({analysis.competition.saturation_level.value})")
    _print_launch(analysis.launch_potential)
    print()
    print(f"Time to first sale: {analysis.time_to_first_sale.range_label} "
          f"(with ads: {analysis.time_to_first_sale_with_ads.range_label})")
    return 0


def _add_product_args(parser, with_category: bool = True):
    parser.add_argument("--title", required=True, help="Product title")
    parser.add_argument("--type", required=True, help="Product type (e.g. mug, bracelet)")
    if with_category:
        parser.add_argument("--category", required=True, help="Etsy category / niche")
        parser.add_argument("--keyword", action="append", help="Extra keyword (repeatable)")
        parser.add_argument("--market", default="EN", help="Market language code (default: EN)")
    parser.add_argument("--json", action="store_true", help="Output as JSON")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="etsmart",
        description="Etsmart competition and launch potential scoring",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    queries_parser = subparsers.add_parser("queries", help="Show generated search queries")
    _add_product_args(queries_parser)

    estimate_parser = subparsers.add_parser("estimate", help="Estimate competition (live)")
    _add_product_args(estimate_parser)

    score_parser = subparsers.add_parser("score", help="Compute launch potential score")
    _add_product_args(score_parser, with_category=False)
    score_parser.add_argument(
        "--competition-score",
        type=float,
        required=True,
        help="Competition score 0-100",
    )
    score_parser.add_argument("--niche", required=True, help="Niche label")
    score_parser.add_argument("--description", help="Visual description of the product")

    analyze_parser = subparsers.add_parser("analyze", help="Full product analysis (live)")
    _add_product_args(analyze_parser)
    analyze_parser.add_argument("--description", help="Visual description of the product")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    if args.command is None:
        parser.print_help()
        return 1

    commands = {
        "queries": cmd_queries,
        "estimate": cmd_estimate,
        "score": cmd_score,
        "analyze": cmd_analyze,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
