"""
Etsmart Scoring API
===================

REST API for the competition and launch potential scoring engine.

Endpoints:
    GET  /api/health                 - Health check
    POST /api/competition-estimate   - Competition score from live Etsy result counts
    POST /api/launch-potential       - Launch potential score from a competition score
    POST /api/analyze                - Full analysis (estimate + launch potential + time to first sale)

Usage:
    uvicorn src.api.main:app --reload --port 8000

    Or with CLI:
    python -m src.api.main
"""

from dotenv import load_dotenv
load_dotenv()

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
from typing import List

from ..data.config import get_settings
from ..data.etsy_search_client import EtsySearchClient
from ..orchestrator.logging_config import setup_logging
from ..orchestrator.pipeline import ProductAnalysisPipeline
from ..scoring.competition_estimator import (
    CompetitionEstimator,
    InsufficientSignalError,
    SignalSource,
)
from ..scoring.launch_potential import LaunchPotentialScorer
from ..scoring.scoring_models import ScoringRequest
from .models import (
    AnalysisResponse,
    CompetitionEstimateModel,
    CompetitionEstimateRequest,
    CompetitionEstimateResponse,
    ErrorResponse,
    HealthResponse,
    LaunchPotentialModel,
    LaunchPotentialRequest,
    LaunchPotentialResponse,
)

logger = logging.getLogger(__name__)

REQUIRED_PRODUCT_FIELDS = ("productTitle", "productType", "category")

# Shared client (rate limiter state lives here)
_etsy_client: EtsySearchClient = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    setup_logging(settings.logging)
    logger.info(f"Starting {settings.app_name} API ({settings.environment})...")
    yield
    logger.info("Shutting down Etsmart scoring API...")


# Create FastAPI app
app = FastAPI(
    title="Etsmart Scoring API",
    description="Competition estimate and launch potential scoring for Etsy products",
    version=get_settings().app_version,
    lifespan=lifespan,
)

# CORS configuration
# In production, set CORS_ORIGINS env var (comma-separated)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# DEPENDENCIES
# ============================================================================

def get_signal_source() -> SignalSource:
    """Live Etsy result-count fetcher."""
    global _etsy_client
    if _etsy_client is None:
        _etsy_client = EtsySearchClient(get_settings().etsy)
    return _etsy_client.fetch_result_count


def get_launch_scorer() -> LaunchPotentialScorer:
    return LaunchPotentialScorer()


def _require_product_fields(body: CompetitionEstimateRequest) -> ScoringRequest:
    """Reject the request with 400 when a product field is missing or blank."""
    missing: List[str] = [
        name for name in REQUIRED_PRODUCT_FIELDS
        if not (getattr(body, name) or "").strip()
    ]
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required fields: {', '.join(missing)}",
        )

    return ScoringRequest(
        product_title=body.productTitle.strip(),
        product_type=body.productType.strip(),
        category=body.category.strip(),
        keywords=tuple(k for k in (body.keywords or []) if k and k.strip()),
        market=(body.market or "EN").strip() or "EN",
    )


@app.exception_handler(InsufficientSignalError)
async def insufficient_signal_handler(request: Request, exc: InsufficientSignalError):
    logger.warning(f"{request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(error=str(exc)).model_dump(),
    )


# ============================================================================
# HEALTH ENDPOINT
# ============================================================================

@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


# ============================================================================
# SCORING ENDPOINTS
# ============================================================================

@app.post(
    "/api/competition-estimate",
    response_model=CompetitionEstimateResponse,
    response_model_by_alias=False,
    responses={422: {"model": ErrorResponse}},
)
def competition_estimate(
    body: CompetitionEstimateRequest,
    signal_source: SignalSource = Depends(get_signal_source),
):
    """
    Estimate competition for a product from live Etsy result counts.

    Returns 400 when a product field is missing, 422 when fewer than
    2 search signals could be collected.
    """
    request = _require_product_fields(body)
    estimate = CompetitionEstimator(signal_source).estimate_competition(request)

    return CompetitionEstimateResponse(
        estimate=CompetitionEstimateModel(**estimate.to_dict()),
    )


@app.post(
    "/api/launch-potential",
    response_model=LaunchPotentialResponse,
    response_model_by_alias=False,
)
def launch_potential(
    body: LaunchPotentialRequest,
    scorer: LaunchPotentialScorer = Depends(get_launch_scorer),
):
    """Score the launch potential of a product (0-10)."""
    result = scorer.score(
        competition_score=body.competitionScore,
        niche=body.niche,
        product_title=body.productTitle,
        product_type=body.productType,
        product_visual_description=body.productVisualDescription,
    )

    return LaunchPotentialResponse(
        launch_potential=LaunchPotentialModel(**result.to_dict()),
    )


@app.post(
    "/api/analyze",
    response_model=AnalysisResponse,
    response_model_by_alias=False,
    responses={422: {"model": ErrorResponse}},
)
def analyze(
    body: CompetitionEstimateRequest,
    signal_source: SignalSource = Depends(get_signal_source),
):
    """Full analysis: competition, launch potential and time to first sale."""
    request = _require_product_fields(body)
    pipeline = ProductAnalysisPipeline(signal_source)
    analysis = pipeline.analyze(
        request,
        product_visual_description=body.productVisualDescription,
    )

    return AnalysisResponse(**analysis.to_dict())


if __name__ == "__main__":
    import uvicorn

    print("=" * 60)
    print("ETSMART SCORING API")
    print("=" * 60)
    print()
    print("Endpoints:")
    print("  GET  /api/health                - Health check")
    print("  POST /api/competition-estimate  - Competition estimate (0-100)")
    print("  POST /api/launch-potential      - Launch potential (0-10)")
    print("  POST /api/analyze               - Full product analysis")
    print()
    print("=" * 60)

    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
