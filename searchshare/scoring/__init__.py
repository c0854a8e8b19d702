"""
Scoring Module

Visibility metrics built on the organic CTR curve:

1. **Share of Search** (0-100)
   Own brand search volume as a share of all brand search volume.

2. **Share of Voice** (0-100)
   Estimated clicks (volume x CTR at position) as a share of total volume.

3. **Growth Gap**
   SOV - SOS. Above +2 means growth potential, below -2 missing opportunities.

Example Usage:
    from searchshare.scoring import calculate_sos, calculate_sov, calculate_growth_gap

    sos = calculate_sos(brand_keywords)
    sov = calculate_sov(ranked_keywords)
    gap = calculate_growth_gap(sos.share_of_search, sov.share_of_voice)
    print(f"Gap: {gap.gap} ({gap.interpretation})")
"""

from .visibility import (
    CTR_CURVE,
    DEFAULT_CTR,
    GrowthGapResult,
    KeywordVisibility,
    SOSResult,
    SOVResult,
    calculate_growth_gap,
    calculate_sos,
    calculate_sov,
    get_ctr_for_position,
    round_half_up,
    round_int,
    safe_percentage,
    visible_volume,
)

__all__ = [
    "CTR_CURVE",
    "DEFAULT_CTR",
    "get_ctr_for_position",
    "visible_volume",
    "round_half_up",
    "round_int",
    "safe_percentage",
    # Results
    "SOSResult",
    "SOVResult",
    "KeywordVisibility",
    "GrowthGapResult",
    # Calculations
    "calculate_sos",
    "calculate_sov",
    "calculate_growth_gap",
]
