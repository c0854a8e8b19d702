"""
Hidden Gem Detection

Finds low-competition, high-volume keywords the brand has not fully captured
(rank > 3) and ranks them by value / difficulty.

When no input record carries keyword difficulty, difficulty is inferred from
position alone and every gem is flagged as estimated. When some records carry
difficulty, only those records are considered.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..classification.categories import get_category
from ..context.relevance import match_brand_context
from ..models.keywords import BrandContext, RankedKeyword, SearchIntentInfo
from ..scoring.visibility import get_ctr_for_position, round_int

logger = logging.getLogger(__name__)


HIDDEN_GEM_MIN_VOLUME = 200
HIDDEN_GEM_MAX_DIFFICULTY = 40
HIDDEN_GEM_LIMIT = 20
RISING_TREND_THRESHOLD = 20     # percent YoY
FIRST_MOVER_POSITION = 50


@dataclass
class HiddenGem:
    """Low difficulty, high potential keyword."""
    keyword: str
    search_volume: int
    keyword_difficulty: float
    position: Optional[int]
    url: Optional[str]
    category: str
    opportunity: str        # first-mover | easy-win | rising-trend
    potential_clicks: int
    reasoning: str
    difficulty_estimated: bool = False
    is_recommended: bool = False
    recommended_reason: Optional[str] = None
    search_intent: Optional[SearchIntentInfo] = None

    @property
    def value_ratio(self) -> float:
        return self.search_volume / (self.keyword_difficulty + 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "searchVolume": self.search_volume,
            "keywordDifficulty": self.keyword_difficulty,
            "position": self.position,
            "url": self.url,
            "category": self.category,
            "opportunity": self.opportunity,
            "potentialClicks": self.potential_clicks,
            "reasoning": self.reasoning,
            "difficultyEstimated": self.difficulty_estimated,
            "isRecommended": self.is_recommended,
            "recommendedReason": self.recommended_reason,
            "searchIntent": self.search_intent.to_dict() if self.search_intent else None,
        }


def infer_keyword_difficulty(keyword: RankedKeyword) -> float:
    """
    Keyword difficulty, inferred from position when the provider omitted it.

    Already ranking in the top 10 suggests low-to-medium difficulty for the domain.
    """
    if keyword.keyword_difficulty is not None:
        return keyword.keyword_difficulty
    if keyword.position <= 5:
        return 25
    if keyword.position <= 10:
        return 30
    if keyword.position <= 15:
        return 35
    return 40


def determine_opportunity_type(position: Optional[int], trend: Optional[float]) -> str:
    if trend is not None and trend > RISING_TREND_THRESHOLD:
        return "rising-trend"
    if position is None or position > FIRST_MOVER_POSITION:
        return "first-mover"
    return "easy-win"


def target_position_for_difficulty(difficulty: float) -> int:
    if difficulty <= 20:
        return 1
    if difficulty <= 30:
        return 3
    return 5


def calculate_hidden_gems(
    ranked_keywords: Iterable[RankedKeyword],
    brand_context: Optional[BrandContext] = None,
    min_volume: int = HIDDEN_GEM_MIN_VOLUME,
    max_difficulty: float = HIDDEN_GEM_MAX_DIFFICULTY,
) -> List[HiddenGem]:
    """
    Find hidden gems.

    Args:
        ranked_keywords: Relevant ranked keywords
        brand_context: Optional brand profile; matching gems sort first
        min_volume: Minimum monthly search volume
        max_difficulty: Maximum keyword difficulty (real or inferred)

    Returns:
        Up to 20 gems, brand matches first, then by volume / (difficulty + 1)
    """
    ranked_keywords = list(ranked_keywords)
    has_real_difficulty = any(kw.keyword_difficulty is not None for kw in ranked_keywords)
    gems = []

    for kw in ranked_keywords:
        if has_real_difficulty:
            if kw.keyword_difficulty is None:
                continue
            difficulty = kw.keyword_difficulty
        else:
            difficulty = infer_keyword_difficulty(kw)

        if difficulty > max_difficulty:
            continue
        if kw.search_volume < min_volume:
            continue
        if kw.position <= 3:
            continue

        opportunity = determine_opportunity_type(kw.position, kw.trend)
        potential_clicks = round_int(
            kw.search_volume * get_ctr_for_position(target_position_for_difficulty(difficulty))
        )
        category = get_category(kw.keyword, kw.category)
        context_match = match_brand_context(kw.keyword, category, brand_context)

        kd_note = f"KD: {difficulty:g}" if has_real_difficulty else f"Est. KD: {difficulty:g}"
        if opportunity == "rising-trend":
            reasoning = f"Trending keyword (+{kw.trend:g}% YoY) with low competition ({kd_note})"
        elif opportunity == "first-mover":
            reasoning = f"You're not ranking yet, but low competition ({kd_note}) makes this achievable"
        else:
            reasoning = f"Currently #{kw.position}, easy to push to top 3 ({kd_note})"
        if context_match.matches:
            reasoning += f". {context_match.reason}"

        gems.append(HiddenGem(
            keyword=kw.keyword,
            search_volume=kw.search_volume,
            keyword_difficulty=difficulty,
            position=kw.position,
            url=kw.url,
            category=category,
            opportunity=opportunity,
            potential_clicks=potential_clicks,
            reasoning=reasoning,
            difficulty_estimated=not has_real_difficulty,
            is_recommended=context_match.matches,
            recommended_reason=context_match.reason,
            search_intent=kw.search_intent,
        ))

    gems.sort(key=lambda g: (not g.is_recommended, -g.value_ratio))
    logger.debug(f"Found {len(gems)} hidden gem candidates (real KD data: {has_real_difficulty})")
    return gems[:HIDDEN_GEM_LIMIT]
