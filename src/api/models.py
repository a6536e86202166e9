"""
Etsmart API Models
==================

Pydantic models for API request/response serialization.
Field names are camelCase (frontend contract); aliases are the snake_case
keys produced by the scoring dataclasses' to_dict().
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class CompetitionEstimateRequest(BaseModel):
    """Body of POST /api/competition-estimate and POST /api/analyze."""
    productTitle: Optional[str] = Field(None, alias="product_title")
    productType: Optional[str] = Field(None, alias="product_type")
    category: Optional[str] = None
    keywords: Optional[List[str]] = None
    market: Optional[str] = "EN"
    productVisualDescription: Optional[str] = Field(None, alias="product_visual_description")

    class Config:
        populate_by_name = True


class LaunchPotentialRequest(BaseModel):
    """Body of POST /api/launch-potential."""
    competitionScore: float = Field(alias="competition_score", ge=0, le=100)
    niche: str
    productTitle: str = Field(alias="product_title")
    productType: str = Field(alias="product_type")
    productVisualDescription: Optional[str] = Field(None, alias="product_visual_description")

    class Config:
        populate_by_name = True


class SignalSampleModel(BaseModel):
    """One search query with its result count."""
    keyword: str
    resultCount: int = Field(alias="result_count")
    timestamp: str
    market: str
    valid: bool

    class Config:
        populate_by_name = True


class CompetitionEstimateModel(BaseModel):
    """Competition estimate (0-100)."""
    samples: List[SignalSampleModel]
    validSamples: List[SignalSampleModel] = Field(alias="valid_samples")
    baseVolume: float = Field(alias="base_volume")
    category: str
    categoryCoefficient: float = Field(alias="category_coefficient")
    adjustedVolume: int = Field(alias="adjusted_volume")
    competitionScore: float = Field(alias="competition_score")
    saturationLevel: str = Field(alias="saturation_level")
    decision: str
    queriesUsed: int = Field(alias="queries_used")
    explanation: str

    class Config:
        populate_by_name = True


class LaunchFactorsModel(BaseModel):
    competitionDensity: str = Field(alias="competition_density")
    nicheSaturation: str = Field(alias="niche_saturation")
    productSpecificity: str = Field(alias="product_specificity")

    class Config:
        populate_by_name = True


class LaunchPotentialModel(BaseModel):
    """Launch potential score (0-10)."""
    score: float
    tier: str
    verdict: str
    explanation: str
    scoreJustification: str = Field(alias="score_justification")
    badge: str
    factors: LaunchFactorsModel
    overrideApplied: bool = Field(alias="override_applied")
    matrixRange: Optional[List[float]] = Field(None, alias="matrix_range")
    adjustments: Dict[str, float] = Field(default_factory=dict)

    class Config:
        populate_by_name = True


class TimeToFirstSaleModel(BaseModel):
    min: int
    max: int
    expected: int
    range: str
    explanation: str


class CompetitionEstimateResponse(BaseModel):
    success: bool = True
    estimate: CompetitionEstimateModel


class LaunchPotentialResponse(BaseModel):
    success: bool = True
    launchPotential: LaunchPotentialModel = Field(alias="launch_potential")

    class Config:
        populate_by_name = True


class AnalysisResponse(BaseModel):
    """Full product analysis."""
    success: bool = True
    analysisId: str = Field(alias="analysis_id")
    queries: List[str]
    competition: CompetitionEstimateModel
    launchPotential: LaunchPotentialModel = Field(alias="launch_potential")
    timeToFirstSale: TimeToFirstSaleModel = Field(alias="time_to_first_sale")
    timeToFirstSaleWithAds: TimeToFirstSaleModel = Field(alias="time_to_first_sale_with_ads")
    analyzedAt: str = Field(alias="analyzed_at")

    class Config:
        populate_by_name = True


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    environment: str
