"""
Keyword Cannibalization Detection

Finds keywords where two or more of the brand's own URLs rank, splitting
ranking strength between pages.

Recommendation:
    > 3 distinct URLs               -> consolidate
    best/worst position gap < 5     -> differentiate
    otherwise                       -> redirect

Impact score = visibility of one page at #1 - combined visibility of the
competing pages, floored at 0.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from ..models.keywords import RankedKeyword
from ..scoring.visibility import get_ctr_for_position, round_int, visible_volume

logger = logging.getLogger(__name__)


CONSOLIDATE_URL_COUNT = 3
DIFFERENTIATE_POSITION_GAP = 5


@dataclass
class CompetingUrl:
    url: str
    position: int
    visible_volume: int

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "position": self.position, "visibleVolume": self.visible_volume}


@dataclass
class CannibalizationIssue:
    """Multiple own URLs competing for one keyword."""
    keyword: str
    search_volume: int
    recommendation: str     # consolidate | differentiate | redirect
    impact_score: int
    competing_urls: List[CompetingUrl] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "searchVolume": self.search_volume,
            "competingUrls": [u.to_dict() for u in self.competing_urls],
            "recommendation": self.recommendation,
            "impactScore": self.impact_score,
        }


def get_cannibalization_recommendation(position_gap: int, url_count: int) -> str:
    if url_count > CONSOLIDATE_URL_COUNT:
        return "consolidate"
    if position_gap < DIFFERENTIATE_POSITION_GAP:
        return "differentiate"
    return "redirect"


def normalize_keyword(keyword: str) -> str:
    return keyword.lower().strip()


def detect_cannibalization(ranked_keywords: Iterable[RankedKeyword]) -> List[CannibalizationIssue]:
    """
    Detect keyword cannibalization.

    Args:
        ranked_keywords: Relevant ranked keywords; records without a URL are ignored

    Returns:
        Issues sorted by impact score (highest loss first)
    """
    groups: Dict[str, List[RankedKeyword]] = {}
    for kw in ranked_keywords:
        if not kw.url:
            continue
        groups.setdefault(normalize_keyword(kw.keyword), []).append(kw)

    issues = []

    for keyword, rankings in groups.items():
        unique_urls = set(r.url for r in rankings)
        if len(unique_urls) < 2:
            continue

        ordered = sorted(rankings, key=lambda r: r.position)
        best, worst = ordered[0], ordered[-1]
        position_gap = worst.position - best.position

        competing_urls = [
            CompetingUrl(url=r.url, position=r.position, visible_volume=round_int(visible_volume(r)))
            for r in ordered
        ]

        total_potential = best.search_volume * get_ctr_for_position(1)
        actual_visibility = sum(u.visible_volume for u in competing_urls)
        impact_score = max(0, round_int(total_potential - actual_visibility))

        issues.append(CannibalizationIssue(
            keyword=keyword,
            search_volume=best.search_volume,
            recommendation=get_cannibalization_recommendation(position_gap, len(unique_urls)),
            impact_score=impact_score,
            competing_urls=competing_urls,
        ))

    issues.sort(key=lambda i: i.impact_score, reverse=True)
    logger.debug(f"Detected {len(issues)} cannibalization issues")
    return issues
