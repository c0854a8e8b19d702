"""
Competitor Strength Estimation

There is no competitor ranking data in the input, so head-to-head figures
are modelled from the brand's own rankings:

- Estimated SOV = competitor brand search volume / all brand search volume
- You win on generic keywords where you rank 1-5, they win where you rank
  11-20, positions 6-10 are ties
- Sample keyword battles are rotated per competitor so each competitor shows
  a different slice of the same pools

Every result is flagged is_estimate=True and opposing positions are named
estimated_competitor_position.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence

from ..models.keywords import BrandKeyword, RankedKeyword
from ..scoring.visibility import get_ctr_for_position, round_half_up, round_int, safe_percentage
from .categories import calculate_category_sov

logger = logging.getLogger(__name__)


WINNING_MAX_POSITION = 5
TIE_MAX_POSITION = 10
LOSING_MIN_POSITION = 11
LOSING_MAX_POSITION = 20
BATTLE_WINDOW = 5
BATTLE_SAMPLES = 3
MAX_DOMINANT_CATEGORIES = 3


@dataclass
class HeadToHead:
    you_win: int
    they_win: int
    ties: int

    def to_dict(self) -> Dict[str, Any]:
        return {"youWin": self.you_win, "theyWin": self.they_win, "ties": self.ties}


@dataclass
class KeywordBattle:
    """One generic keyword with a modelled competitor position."""
    keyword: str
    search_volume: int
    your_position: int
    estimated_competitor_position: int
    winner: str             # you | competitor
    visibility_difference: int
    is_estimate: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "searchVolume": self.search_volume,
            "yourPosition": self.your_position,
            "estimatedCompetitorPosition": self.estimated_competitor_position,
            "winner": self.winner,
            "visibilityDifference": self.visibility_difference,
            "isEstimate": self.is_estimate,
        }


@dataclass
class CompetitorStrength:
    competitor: str
    competitor_index: int
    estimated_sov: float
    keywords_analyzed: int
    head_to_head: HeadToHead
    dominant_categories: List[str] = field(default_factory=list)
    top_winning_keywords: List[KeywordBattle] = field(default_factory=list)
    top_losing_keywords: List[KeywordBattle] = field(default_factory=list)
    is_estimate: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "competitor": self.competitor,
            "competitorIndex": self.competitor_index,
            "estimatedSOV": self.estimated_sov,
            "keywordsAnalyzed": self.keywords_analyzed,
            "headToHead": self.head_to_head.to_dict(),
            "dominantCategories": list(self.dominant_categories),
            "topWinningKeywords": [b.to_dict() for b in self.top_winning_keywords],
            "topLosingKeywords": [b.to_dict() for b in self.top_losing_keywords],
            "isEstimate": self.is_estimate,
        }


def is_branded_keyword(keyword: str, brand_names: Sequence[str]) -> bool:
    """True if the keyword contains any brand name, as a substring or a whole word."""
    kw_lower = keyword.lower()
    words = kw_lower.split()
    for brand in brand_names:
        brand_lower = brand.lower()
        if brand_lower in kw_lower or brand_lower in words:
            return True
    return False


def rotate_window(pool: List[RankedKeyword], offset: int) -> List[RankedKeyword]:
    """
    Take a window of 5 starting at offset, wrapping to the pool start,
    and keep the first 3.
    """
    wrapped = pool[offset:offset + BATTLE_WINDOW] + pool[:max(0, BATTLE_WINDOW - (len(pool) - offset))]
    return wrapped[:BATTLE_SAMPLES]


def _winning_battles(pool: List[RankedKeyword], offset: int, estimated_sov: float) -> List[KeywordBattle]:
    strength_factor = min(15, round_int(estimated_sov / 3))
    battles = []
    for i, kw in enumerate(rotate_window(pool, offset)):
        competitor_position = kw.position + strength_factor + i * 2 + 3
        battles.append(KeywordBattle(
            keyword=kw.keyword,
            search_volume=kw.search_volume,
            your_position=kw.position,
            estimated_competitor_position=competitor_position,
            winner="you",
            visibility_difference=round_int(
                kw.search_volume * (get_ctr_for_position(kw.position) - get_ctr_for_position(competitor_position))
            ),
        ))
    return battles


def _losing_battles(pool: List[RankedKeyword], offset: int, estimated_sov: float) -> List[KeywordBattle]:
    strength_bonus = min(8, round_int(estimated_sov / 5))
    battles = []
    for i, kw in enumerate(rotate_window(pool, offset)):
        competitor_position = max(1, kw.position - strength_bonus - i * 2)
        battles.append(KeywordBattle(
            keyword=kw.keyword,
            search_volume=kw.search_volume,
            your_position=kw.position,
            estimated_competitor_position=competitor_position,
            winner="competitor",
            visibility_difference=round_int(
                kw.search_volume * (get_ctr_for_position(competitor_position) - get_ctr_for_position(kw.position))
            ),
        ))
    return battles


def calculate_competitor_strength(
    brand_keywords: Iterable[BrandKeyword],
    ranked_keywords: Iterable[RankedKeyword],
) -> List[CompetitorStrength]:
    """
    Estimate competitor strength from brand search volume and own rankings.

    Args:
        brand_keywords: Own and competitor brand keywords
        ranked_keywords: Ranked keywords, already filtered for brand relevance

    Returns:
        One CompetitorStrength per competitor brand, by estimated SOV (highest first)
    """
    brand_keywords = list(brand_keywords)

    own_brand_names = [k.brand_name for k in brand_keywords if k.is_own_brand]

    # dict keeps first-seen order
    competitor_volumes: Dict[str, int] = {}
    for k in brand_keywords:
        if k.is_own_brand:
            continue
        competitor_volumes[k.brand_name] = competitor_volumes.get(k.brand_name, 0) + k.search_volume

    all_brand_names = own_brand_names + list(competitor_volumes)

    generic = [
        kw for kw in ranked_keywords
        if not is_branded_keyword(kw.keyword, all_brand_names)
    ]

    total_brand_volume = sum(k.search_volume for k in brand_keywords)

    winning_pool = sorted(
        (kw for kw in generic if kw.position <= WINNING_MAX_POSITION),
        key=lambda k: k.search_volume,
        reverse=True,
    )
    losing_pool = sorted(
        (kw for kw in generic if LOSING_MIN_POSITION <= kw.position <= LOSING_MAX_POSITION),
        key=lambda k: k.search_volume,
        reverse=True,
    )
    ties = sum(1 for kw in generic if WINNING_MAX_POSITION < kw.position <= TIE_MAX_POSITION)

    dominant_categories = [
        c.category for c in calculate_category_sov(generic) if c.is_weak
    ][:MAX_DOMINANT_CATEGORIES]

    pool_size = max(1, len(generic))
    results = []

    for index, (competitor, volume) in enumerate(competitor_volumes.items(), start=1):
        estimated_sov = round_half_up(safe_percentage(volume, total_brand_volume))

        results.append(CompetitorStrength(
            competitor=competitor[:1].upper() + competitor[1:],
            competitor_index=index,
            estimated_sov=estimated_sov,
            keywords_analyzed=len(generic),
            head_to_head=HeadToHead(you_win=len(winning_pool), they_win=len(losing_pool), ties=ties),
            dominant_categories=list(dominant_categories),
            top_winning_keywords=_winning_battles(winning_pool, (index * 2) % pool_size, estimated_sov),
            top_losing_keywords=_losing_battles(losing_pool, (index * 3 + 1) % pool_size, estimated_sov),
        ))

    results.sort(key=lambda c: c.estimated_sov, reverse=True)
    logger.debug(
        f"Estimated strength for {len(results)} competitors over {len(generic)} generic keywords"
    )
    return results
