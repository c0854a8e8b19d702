"""
Visibility Model

CTR curve and the derived visibility metrics shared by every analysis:

1. **Share of Search (SOS)** - own brand search volume / all brand search volume
2. **Share of Voice (SOV)** - click-weighted visible volume / total keyword volume
3. **Growth Gap** - SOV - SOS, interpreted as growth potential or missing opportunities

All ratios return 0 for an empty or zero-volume input.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping

from ..models.keywords import BrandKeyword, RankedKeyword


# ============================================================================
# CTR CURVE (organic SERP click-through rate by position)
# ============================================================================

CTR_CURVE: Mapping[int, float] = MappingProxyType({
    1: 0.28,    # 28% CTR for position 1
    2: 0.15,
    3: 0.09,
    4: 0.06,
    5: 0.04,
    6: 0.03,
    7: 0.025,
    8: 0.02,
    9: 0.018,
    10: 0.015,
    11: 0.012,
    12: 0.01,
    13: 0.009,
    14: 0.008,
    15: 0.007,
    16: 0.006,
    17: 0.005,
    18: 0.004,
    19: 0.003,
    20: 0.002,
})

# Flat CTR for anything beyond page 2
DEFAULT_CTR = 0.001

# Growth gap interpretation thresholds (percentage points)
GAP_THRESHOLD_HIGH = 2
GAP_THRESHOLD_LOW = -2


def get_ctr_for_position(position: int) -> float:
    """
    Get estimated CTR for a SERP position.

    Args:
        position: SERP position

    Returns:
        CTR as decimal (0.0 - 0.28)
    """
    if position <= 0:
        return 0.0
    if position > 20:
        return DEFAULT_CTR
    return CTR_CURVE.get(position, DEFAULT_CTR)


def visible_volume(keyword: RankedKeyword) -> float:
    """Expected monthly clicks for a keyword at its current position."""
    return keyword.search_volume * get_ctr_for_position(keyword.position)


# ============================================================================
# ROUNDING
# ============================================================================

def round_half_up(value: float, digits: int = 1) -> float:
    """Round with ties going up (2.5 -> 3), unlike Python's banker's rounding."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """Round to the nearest integer with ties going up."""
    return int(math.floor(value + 0.5))


def safe_percentage(part: float, total: float) -> float:
    """part / total * 100, or 0 when total is zero."""
    if total <= 0:
        return 0.0
    return part / total * 100


# ============================================================================
# RESULTS
# ============================================================================

@dataclass
class SOSResult:
    """Share of Search result."""
    share_of_search: float
    brand_volume: int
    total_brand_volume: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shareOfSearch": self.share_of_search,
            "brandVolume": self.brand_volume,
            "totalBrandVolume": self.total_brand_volume,
        }


@dataclass
class KeywordVisibility:
    """Per-keyword row of the SOV breakdown."""
    keyword: str
    search_volume: int
    position: int
    ctr: float              # percent, one decimal
    visible_volume: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "searchVolume": self.search_volume,
            "position": self.position,
            "ctr": self.ctr,
            "visibleVolume": self.visible_volume,
        }


@dataclass
class SOVResult:
    """Share of Voice result."""
    share_of_voice: float
    visible_volume: int
    total_market_volume: int
    keyword_breakdown: List[KeywordVisibility] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shareOfVoice": self.share_of_voice,
            "visibleVolume": self.visible_volume,
            "totalMarketVolume": self.total_market_volume,
            "keywordBreakdown": [k.to_dict() for k in self.keyword_breakdown],
        }


@dataclass
class GrowthGapResult:
    """Growth gap (SOV - SOS) with interpretation."""
    gap: float
    interpretation: str     # growth_potential | missing_opportunities | balanced

    def to_dict(self) -> Dict[str, Any]:
        return {"gap": self.gap, "interpretation": self.interpretation}


# ============================================================================
# CALCULATIONS
# ============================================================================

def calculate_sos(brand_keywords: Iterable[BrandKeyword]) -> SOSResult:
    """
    Calculate Share of Search from brand keyword volumes.

    Args:
        brand_keywords: Own-brand and competitor brand terms

    Returns:
        SOSResult, share rounded to one decimal
    """
    brand_keywords = list(brand_keywords)
    brand_volume = sum(k.search_volume for k in brand_keywords if k.is_own_brand)
    total_brand_volume = sum(k.search_volume for k in brand_keywords)

    share = safe_percentage(brand_volume, total_brand_volume)

    return SOSResult(
        share_of_search=round_half_up(share),
        brand_volume=brand_volume,
        total_brand_volume=total_brand_volume,
    )


def calculate_sov(ranked_keywords: Iterable[RankedKeyword]) -> SOVResult:
    """
    Calculate Share of Voice from ranked keywords.

    The total uses the per-keyword rounded visible volumes, so the headline
    figure always matches the sum of the breakdown rows.

    Args:
        ranked_keywords: Keywords the brand ranks for

    Returns:
        SOVResult with per-keyword breakdown
    """
    ranked_keywords = list(ranked_keywords)

    breakdown = [
        KeywordVisibility(
            keyword=kw.keyword,
            search_volume=kw.search_volume,
            position=kw.position,
            ctr=round_half_up(get_ctr_for_position(kw.position) * 100),
            visible_volume=round_int(visible_volume(kw)),
        )
        for kw in ranked_keywords
    ]

    total_visible = sum(row.visible_volume for row in breakdown)
    total_market_volume = sum(kw.search_volume for kw in ranked_keywords)

    share = safe_percentage(total_visible, total_market_volume)

    return SOVResult(
        share_of_voice=round_half_up(share),
        visible_volume=total_visible,
        total_market_volume=total_market_volume,
        keyword_breakdown=breakdown,
    )


def calculate_growth_gap(sos: float, sov: float) -> GrowthGapResult:
    """
    Calculate growth gap between Share of Voice and Share of Search.

    Gap values of exactly +2 / -2 are balanced.

    Args:
        sos: Share of Search (percent)
        sov: Share of Voice (percent)

    Returns:
        GrowthGapResult
    """
    # Interpret the rounded gap; 4.4 - 2.4 is 2.0000000000000004 as a float
    gap = round_half_up(sov - sos)

    if gap > GAP_THRESHOLD_HIGH:
        interpretation = "growth_potential"
    elif gap < GAP_THRESHOLD_LOW:
        interpretation = "missing_opportunities"
    else:
        interpretation = "balanced"

    return GrowthGapResult(gap=gap, interpretation=interpretation)
