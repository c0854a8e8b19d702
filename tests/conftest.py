"""
Pytest Configuration and Shared Fixtures

Provides common fixtures and configuration for all test modules.
"""

from typing import List

import pytest

from searchshare.models import BrandContext, BrandKeyword, RankedKeyword
from searchshare.sample_data import SAMPLE_BRAND_KEYWORDS, SAMPLE_RANKED_KEYWORDS


# ============================================================================
# Sample Data Fixtures
# ============================================================================

@pytest.fixture
def sample_brand_keywords() -> List[BrandKeyword]:
    """lavera vs. other natural cosmetics brands."""
    return list(SAMPLE_BRAND_KEYWORDS)


@pytest.fixture
def sample_ranked_keywords() -> List[RankedKeyword]:
    return list(SAMPLE_RANKED_KEYWORDS)


@pytest.fixture
def sample_payload():
    """Sample dataset in the camelCase wire format."""
    return {
        "brandKeywords": [k.to_dict() for k in SAMPLE_BRAND_KEYWORDS],
        "rankedKeywords": [k.to_dict() for k in SAMPLE_RANKED_KEYWORDS],
    }


# ============================================================================
# Brand Context Fixtures
# ============================================================================

@pytest.fixture
def tire_context() -> BrandContext:
    """Tire manufacturer profile."""
    return BrandContext(
        brand_name="Continental",
        industry="automotive",
        vertical="tires",
        product_categories=("winter tires", "summer tires"),
        key_strengths=("safety",),
        seo_focus=("winterreifen",),
    )


@pytest.fixture
def cosmetics_context() -> BrandContext:
    """Natural cosmetics brand profile."""
    return BrandContext(
        brand_name="lavera",
        industry="cosmetics",
        vertical="natural cosmetics",
        product_categories=("naturkosmetik",),
        key_strengths=("vegan",),
        seo_focus=("bio",),
    )


@pytest.fixture
def winter_tire_keywords() -> List[RankedKeyword]:
    """Category with weak rankings (content gap candidate)."""
    return [
        RankedKeyword("winterreifen 205 55 r16", 2000, 12, url="/w1", category="Winter Tires"),
        RankedKeyword("winterreifen test", 1500, 15, url="/w2", category="Winter Tires"),
        RankedKeyword("winterreifen günstig", 800, 18, url="/w3", category="Winter Tires"),
        RankedKeyword("winterreifen", 3000, 5, url="/w1", category="Winter Tires"),
    ]
