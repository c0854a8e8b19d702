"""
Quick Win Detection

Finds keywords ranked 4-20 where a realistic position improvement yields
meaningfully more clicks.

Target position ladder:
    position <= 3  -> 1
    position <= 5  -> 3
    position <= 10 -> 5
    position <= 15 -> 8
    otherwise      -> 10

Click uplift = clicks at target position - clicks at current position,
using the CTR curve. Opportunities under 50 clicks are discarded.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..classification.categories import get_category
from ..context.relevance import match_brand_context
from ..models.keywords import BrandContext, RankedKeyword, SearchIntentInfo
from ..scoring.visibility import get_ctr_for_position, round_int

logger = logging.getLogger(__name__)


QUICK_WIN_MIN_VOLUME = 100
QUICK_WIN_MIN_UPLIFT = 50
QUICK_WIN_POSITION_MIN = 4
QUICK_WIN_POSITION_MAX = 20


@dataclass
class QuickWinOpportunity:
    """A ranked keyword with near-term position improvement potential."""
    keyword: str
    current_position: int
    target_position: int
    search_volume: int
    current_clicks: int
    potential_clicks: int
    click_uplift: int
    uplift_percentage: int
    effort: str             # low | medium | high
    url: str
    category: str
    reasoning: str
    is_recommended: bool = False
    recommended_reason: Optional[str] = None
    search_intent: Optional[SearchIntentInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "currentPosition": self.current_position,
            "targetPosition": self.target_position,
            "searchVolume": self.search_volume,
            "currentClicks": self.current_clicks,
            "potentialClicks": self.potential_clicks,
            "clickUplift": self.click_uplift,
            "upliftPercentage": self.uplift_percentage,
            "effort": self.effort,
            "url": self.url,
            "category": self.category,
            "reasoning": self.reasoning,
            "isRecommended": self.is_recommended,
            "recommendedReason": self.recommended_reason,
            "searchIntent": self.search_intent.to_dict() if self.search_intent else None,
        }


def calculate_target_position(current_position: int) -> int:
    """More aggressive targets for keywords already close to the top."""
    if current_position <= 3:
        return 1
    if current_position <= 5:
        return 3
    if current_position <= 10:
        return 5
    if current_position <= 15:
        return 8
    return 10


def calculate_effort(current_position: int, target_position: int) -> str:
    gap = current_position - target_position
    if gap <= 3:
        return "low"
    if gap <= 7:
        return "medium"
    return "high"


def generate_quick_win_reasoning(
    keyword: RankedKeyword,
    target_position: int,
    click_uplift: int,
    uplift_percentage: int,
) -> str:
    """Combine position band, volume band and uplift into one explanation."""
    reasons = []
    position = keyword.position

    if 4 <= position <= 6:
        reasons.append(f"Already on page 1 (#{position}) - small optimization could push to top 3")
    elif 7 <= position <= 10:
        reasons.append(f"Bottom of page 1 (#{position}) - improving to top 5 dramatically increases visibility")
    elif 11 <= position <= 15:
        reasons.append(f"Top of page 2 (#{position}) - pushing to page 1 is crucial for traffic")
    else:
        reasons.append(f"Position #{position} has room for improvement with focused optimization")

    if keyword.search_volume >= 10000:
        reasons.append(f"High-volume keyword ({keyword.search_volume:,} monthly searches)")
    elif keyword.search_volume >= 1000:
        reasons.append(f"Good search volume with {keyword.search_volume:,} monthly searches")

    reasons.append(
        f"Moving to position #{target_position} could yield +{click_uplift:,} clicks "
        f"({uplift_percentage}% increase)"
    )

    return ". ".join(reasons) + "."


def calculate_quick_wins(
    ranked_keywords: Iterable[RankedKeyword],
    min_volume: int = QUICK_WIN_MIN_VOLUME,
    brand_context: Optional[BrandContext] = None,
) -> List[QuickWinOpportunity]:
    """
    Calculate quick win opportunities.

    Args:
        ranked_keywords: Relevant ranked keywords
        min_volume: Minimum monthly search volume
        brand_context: Optional brand profile for "recommended" labels

    Returns:
        Quick wins sorted by click uplift (highest first)
    """
    quick_wins = []

    for kw in ranked_keywords:
        if not QUICK_WIN_POSITION_MIN <= kw.position <= QUICK_WIN_POSITION_MAX:
            continue
        if kw.search_volume < min_volume:
            continue

        target_position = calculate_target_position(kw.position)
        current_clicks = round_int(kw.search_volume * get_ctr_for_position(kw.position))
        potential_clicks = round_int(kw.search_volume * get_ctr_for_position(target_position))
        click_uplift = potential_clicks - current_clicks

        if click_uplift < QUICK_WIN_MIN_UPLIFT:
            continue

        uplift_percentage = round_int(click_uplift / current_clicks * 100) if current_clicks > 0 else 0
        category = get_category(kw.keyword, kw.category)
        context_match = match_brand_context(kw.keyword, category, brand_context)

        quick_wins.append(QuickWinOpportunity(
            keyword=kw.keyword,
            current_position=kw.position,
            target_position=target_position,
            search_volume=kw.search_volume,
            current_clicks=current_clicks,
            potential_clicks=potential_clicks,
            click_uplift=click_uplift,
            uplift_percentage=uplift_percentage,
            effort=calculate_effort(kw.position, target_position),
            url=kw.url or "",
            category=category,
            reasoning=generate_quick_win_reasoning(kw, target_position, click_uplift, uplift_percentage),
            is_recommended=context_match.matches,
            recommended_reason=context_match.reason,
            search_intent=kw.search_intent,
        ))

    quick_wins.sort(key=lambda q: q.click_uplift, reverse=True)
    logger.debug(f"Found {len(quick_wins)} quick wins")
    return quick_wins
