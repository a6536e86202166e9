"""
Etsmart Orchestrator Module
===========================

Orchestration layer around the scoring engine.

Components:
    - ProductAnalysisPipeline: queries → signals → competition → launch potential
    - Logging configuration
    - CLI: Command-line interface

Usage:
    from src.orchestrator import ProductAnalysisPipeline

    pipeline = ProductAnalysisPipeline(signal_source=client.fetch_result_count)
    analysis = pipeline.analyze(request)
"""

from .pipeline import (
    ProductAnalysis,
    ProductAnalysisPipeline,
)
from .logging_config import (
    JSONFormatter,
    setup_logging,
)

__all__ = [
    # Pipeline
    "ProductAnalysis",
    "ProductAnalysisPipeline",
    # Logging
    "JSONFormatter",
    "setup_logging",
]
