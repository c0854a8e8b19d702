"""
API Endpoints for Search Share Insights

FastAPI app exposing the insights engine:
1. /api/calculate - Share of Search, Share of Voice and Growth Gap
2. /api/insights - full actionable insights bundle
3. /api/sample-data - built-in demo dataset
4. /health - liveness check

Request bodies use the camelCase wire format of the keyword collectors.
Records violating the engine contract are rejected with 422.
"""

import logging
import sys
from typing import List, Literal, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from searchshare import __version__
from searchshare.insights import generate_insights
from searchshare.models import BrandContext, BrandKeyword, InvalidKeywordDataError, RankedKeyword
from searchshare.sample_data import get_sample_data
from searchshare.scoring import calculate_growth_gap, calculate_sos, calculate_sov
from searchshare.utils.config import Settings, get_settings

# Configure logging to stdout
logging.basicConfig(
    level=get_settings().LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
    force=True,  # Override any existing config
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Search Share Insights",
    description="Share of Search, Share of Voice and prioritized SEO actions from keyword data",
    version=__version__,
)


# ============================================================================
# REQUEST MODELS
# ============================================================================

class WireModel(BaseModel):
    """Accepts camelCase (wire) and snake_case field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchIntentPayload(WireModel):
    main_intent: Literal["informational", "navigational", "commercial", "transactional"]
    probability: float = 0.5
    funnel_stage: Literal["awareness", "consideration", "decision", "retention"]


class RankedKeywordPayload(WireModel):
    keyword: str
    search_volume: int
    position: int
    url: Optional[str] = None
    category: Optional[str] = None
    keyword_difficulty: Optional[float] = None
    trend: Optional[float] = None
    search_intent: Optional[SearchIntentPayload] = None


class BrandKeywordPayload(WireModel):
    keyword: str
    search_volume: int
    is_own_brand: bool


class BrandContextPayload(WireModel):
    brand_name: str = ""
    industry: str = ""
    vertical: str = ""
    product_categories: List[str] = Field(default_factory=list)
    key_strengths: List[str] = Field(default_factory=list)
    seo_focus: List[str] = Field(default_factory=list)


class CalculateRequest(WireModel):
    brand_keywords: List[BrandKeywordPayload] = Field(default_factory=list)
    ranked_keywords: List[RankedKeywordPayload] = Field(default_factory=list)


class InsightsRequest(WireModel):
    ranked_keywords: List[RankedKeywordPayload] = Field(default_factory=list)
    brand_keywords: List[BrandKeywordPayload] = Field(default_factory=list)
    brand_context: Optional[BrandContextPayload] = None


# ============================================================================
# HELPERS
# ============================================================================

def check_request_size(ranked_count: int, brand_count: int, settings: Settings) -> None:
    if ranked_count > settings.MAX_RANKED_KEYWORDS:
        raise HTTPException(
            status_code=413,
            detail=f"Too many ranked keywords: {ranked_count} (max {settings.MAX_RANKED_KEYWORDS})",
        )
    if brand_count > settings.MAX_BRAND_KEYWORDS:
        raise HTTPException(
            status_code=413,
            detail=f"Too many brand keywords: {brand_count} (max {settings.MAX_BRAND_KEYWORDS})",
        )


def to_ranked_keywords(payloads: List[RankedKeywordPayload]) -> List[RankedKeyword]:
    return [RankedKeyword.from_dict(p.model_dump()) for p in payloads]


def to_brand_keywords(payloads: List[BrandKeywordPayload]) -> List[BrandKeyword]:
    return [BrandKeyword.from_dict(p.model_dump()) for p in payloads]


def reject_invalid(endpoint: str, error: InvalidKeywordDataError) -> HTTPException:
    logger.warning(f"Rejected {endpoint} request: {error}")
    return HTTPException(status_code=422, detail=str(error))


# ============================================================================
# ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    return {"service": "Search Share Insights", "version": __version__}


@app.get("/health")
async def health(settings: Settings = Depends(get_settings)):
    return {
        "status": "healthy",
        "version": __version__,
        "environment": settings.ENVIRONMENT,
    }


@app.post("/api/calculate")
def calculate(request: CalculateRequest, settings: Settings = Depends(get_settings)):
    """
    Calculate Share of Search, Share of Voice and the Growth Gap.

    Returns:
        {"sos": ..., "sov": ..., "gap": ...}
    """
    check_request_size(len(request.ranked_keywords), len(request.brand_keywords), settings)

    try:
        brand_keywords = to_brand_keywords(request.brand_keywords)
        ranked_keywords = to_ranked_keywords(request.ranked_keywords)
    except InvalidKeywordDataError as e:
        raise reject_invalid("/api/calculate", e)

    sos = calculate_sos(brand_keywords)
    sov = calculate_sov(ranked_keywords)
    gap = calculate_growth_gap(sos.share_of_search, sov.share_of_voice)

    logger.info(f"Calculated SOS {sos.share_of_search}%, SOV {sov.share_of_voice}%, gap {gap.gap}")
    return {"sos": sos.to_dict(), "sov": sov.to_dict(), "gap": gap.to_dict()}


@app.post("/api/insights")
def insights(request: InsightsRequest, settings: Settings = Depends(get_settings)):
    """Generate the full actionable insights bundle."""
    check_request_size(len(request.ranked_keywords), len(request.brand_keywords), settings)

    try:
        ranked_keywords = to_ranked_keywords(request.ranked_keywords)
        brand_keywords = to_brand_keywords(request.brand_keywords)
        brand_context = (
            BrandContext.from_dict(request.brand_context.model_dump()) if request.brand_context else None
        )
    except InvalidKeywordDataError as e:
        raise reject_invalid("/api/insights", e)

    result = generate_insights(
        ranked_keywords,
        brand_keywords,
        brand_context,
        quick_win_min_volume=settings.QUICK_WIN_MIN_VOLUME,
        hidden_gem_min_volume=settings.HIDDEN_GEM_MIN_VOLUME,
        hidden_gem_max_difficulty=settings.HIDDEN_GEM_MAX_DIFFICULTY,
    )
    return result.to_dict()


@app.get("/api/sample-data")
async def sample_data():
    return get_sample_data()
