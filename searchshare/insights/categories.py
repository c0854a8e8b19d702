"""
Category Share of Voice Breakdown

Groups ranked keywords by category and computes each category's SOV and
average position, classified as:

    leading      SOV >= 25% and avg position <= 5
    competitive  SOV >= 15% or avg position <= 8
    trailing     SOV >= 8% or avg position <= 12
    weak         everything else
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from ..classification.categories import get_category
from ..models.keywords import RankedKeyword
from ..scoring.visibility import round_half_up, round_int, safe_percentage, visible_volume


CATEGORY_SOV_LEADING = 25
CATEGORY_SOV_COMPETITIVE = 15
CATEGORY_SOV_TRAILING = 8
CATEGORY_AVG_POSITION_LEADING = 5
CATEGORY_AVG_POSITION_COMPETITIVE = 8
CATEGORY_AVG_POSITION_TRAILING = 12

STRONG_STATUSES = ("leading", "competitive")
WEAK_STATUSES = ("weak", "trailing")


@dataclass
class CategorySOV:
    category: str
    your_sov: float
    your_visible_volume: int
    total_category_volume: int
    keyword_count: int
    avg_position: float
    status: str
    top_keywords: List[str] = field(default_factory=list)

    @property
    def is_strong(self) -> bool:
        return self.status in STRONG_STATUSES

    @property
    def is_weak(self) -> bool:
        return self.status in WEAK_STATUSES

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "yourSOV": self.your_sov,
            "yourVisibleVolume": self.your_visible_volume,
            "totalCategoryVolume": self.total_category_volume,
            "keywordCount": self.keyword_count,
            "avgPosition": self.avg_position,
            "topKeywords": list(self.top_keywords),
            "status": self.status,
        }


def determine_category_status(sov: float, avg_position: float) -> str:
    if sov >= CATEGORY_SOV_LEADING and avg_position <= CATEGORY_AVG_POSITION_LEADING:
        return "leading"
    if sov >= CATEGORY_SOV_COMPETITIVE or avg_position <= CATEGORY_AVG_POSITION_COMPETITIVE:
        return "competitive"
    if sov >= CATEGORY_SOV_TRAILING or avg_position <= CATEGORY_AVG_POSITION_TRAILING:
        return "trailing"
    return "weak"


def calculate_category_sov(ranked_keywords: Iterable[RankedKeyword]) -> List[CategorySOV]:
    """
    Calculate the SOV breakdown by category.

    Returns:
        Categories sorted by total volume (largest first)
    """
    groups: Dict[str, List[RankedKeyword]] = {}
    for kw in ranked_keywords:
        groups.setdefault(get_category(kw.keyword, kw.category), []).append(kw)

    categories = []
    for category, keywords in groups.items():
        total_volume = sum(kw.search_volume for kw in keywords)
        visible = sum(visible_volume(kw) for kw in keywords)
        avg_position = round_half_up(sum(kw.position for kw in keywords) / len(keywords))
        sov = round_half_up(safe_percentage(visible, total_volume))

        top_keywords = [
            kw.keyword for kw in sorted(keywords, key=lambda k: k.search_volume, reverse=True)[:5]
        ]

        categories.append(CategorySOV(
            category=category,
            your_sov=sov,
            your_visible_volume=round_int(visible),
            total_category_volume=total_volume,
            keyword_count=len(keywords),
            avg_position=avg_position,
            status=determine_category_status(sov, avg_position),
            top_keywords=top_keywords,
        ))

    categories.sort(key=lambda c: c.total_category_volume, reverse=True)
    return categories
