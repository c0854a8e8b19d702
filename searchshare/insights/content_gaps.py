"""
Content Gap Analysis

Identifies categories whose aggregate ranking quality implies
under-investment in content. A category (excluding "Other", minimum 3
keywords) has a gap when any of:

1. Average position > 8
2. More than 40% of its keywords rank outside the top 10
3. At least 5 keywords sit on page 2 (positions 11-20)

Suggested new pages = ceil(weak keywords with volume >= 500 / 3), capped at 10.
Estimated traffic gain is a conservative 5% of the weak keyword volume.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from ..classification.categories import DEFAULT_CATEGORY, get_category
from ..models.keywords import RankedKeyword
from ..scoring.visibility import round_int

logger = logging.getLogger(__name__)


CONTENT_GAP_MIN_KEYWORDS = 3
CONTENT_GAP_AVG_POSITION = 8
CONTENT_GAP_WEAK_SHARE = 0.4
CONTENT_GAP_PAGE2_COUNT = 5
CONTENT_GAP_HIGH_VOLUME = 500
CONTENT_GAP_OPPORTUNITY_HIGH = 50000
CONTENT_GAP_OPPORTUNITY_MEDIUM = 10000
KEYWORDS_PER_NEW_PAGE = 3
MAX_NEW_PAGES = 10
TRAFFIC_GAIN_RATE = 0.05

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}

# Checked in order against the lower-cased category name
CONTENT_TYPES: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (("tire", "reifen"), (
        "Tire size guide", "Seasonal comparison article", "Product finder tool",
        "Installation FAQ", "Dealer locator page",
    )),
    (("beauty", "skin", "makeup"), (
        "How-to tutorial", "Product comparison", "Ingredient guide",
        "Routine builder", "Expert tips article",
    )),
    (("running", "training", "sport"), (
        "Training guide", "Product review", "Comparison article",
        "Beginner's guide", "Expert interview",
    )),
    (("tech", "phone", "laptop"), (
        "Buying guide", "Comparison table", "Setup tutorial",
        "Troubleshooting FAQ", "Feature spotlight",
    )),
    (("automotive", "car"), (
        "Buying guide", "Maintenance tips", "Comparison article",
        "How-to guide", "Cost calculator",
    )),
)
DEFAULT_CONTENT_TYPES = (
    "Comprehensive guide", "FAQ page", "How-to article", "Comparison content", "Expert roundup",
)


@dataclass
class WeakKeyword:
    keyword: str
    position: int
    volume: int
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return {"keyword": self.keyword, "position": self.position, "volume": self.volume, "url": self.url}


@dataclass
class ContentGap:
    """A category where the brand needs more or better content."""
    topic: str
    category: str
    your_coverage: int              # distinct ranking URLs
    avg_competitor_coverage: int    # coverage + suggested new pages
    total_volume: int
    priority: str                   # high | medium | low
    reasoning: str
    estimated_traffic_gain: int
    suggested_new_content: int
    top_missing_keywords: List[str] = field(default_factory=list)
    existing_urls: List[str] = field(default_factory=list)
    weak_keywords: List[WeakKeyword] = field(default_factory=list)
    suggested_content_types: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topic": self.topic,
            "category": self.category,
            "yourCoverage": self.your_coverage,
            "avgCompetitorCoverage": self.avg_competitor_coverage,
            "totalVolume": self.total_volume,
            "topMissingKeywords": list(self.top_missing_keywords),
            "priority": self.priority,
            "existingUrls": list(self.existing_urls),
            "weakKeywords": [w.to_dict() for w in self.weak_keywords],
            "reasoning": self.reasoning,
            "suggestedContentTypes": list(self.suggested_content_types),
            "suggestedNewContent": self.suggested_new_content,
            "estimatedTrafficGain": self.estimated_traffic_gain,
        }


def get_suggested_content_types(category: str) -> List[str]:
    category_lower = category.lower()
    for markers, content_types in CONTENT_TYPES:
        if any(marker in category_lower for marker in markers):
            return list(content_types)
    return list(DEFAULT_CONTENT_TYPES)


def generate_content_gap_reasoning(
    category: str,
    avg_position: float,
    weak_count: int,
    total_count: int,
    volume_opportunity: int,
) -> str:
    weak_percent = round_int(weak_count / total_count * 100) if total_count else 0
    reasons = []

    if avg_position > 12:
        reasons.append(
            f"Your average position is #{avg_position:.1f}, which means most traffic goes to competitors"
        )
    elif avg_position > 8:
        reasons.append(
            f"Your average position (#{avg_position:.1f}) puts you at the bottom of page 1 or page 2"
        )

    if weak_percent > 50:
        reasons.append(f'{weak_percent}% of your "{category}" keywords rank outside the top 10')

    if volume_opportunity > 10000:
        reasons.append(
            f"There's {volume_opportunity:,} monthly searches in keywords where you're underperforming"
        )

    reasons.append(f"Creating targeted content can help you capture more of this {category} traffic")
    return ". ".join(reasons) + "."


def _priority_for(volume_opportunity: int) -> str:
    if volume_opportunity > CONTENT_GAP_OPPORTUNITY_HIGH:
        return "high"
    if volume_opportunity > CONTENT_GAP_OPPORTUNITY_MEDIUM:
        return "medium"
    return "low"


def analyze_content_gaps(ranked_keywords: Iterable[RankedKeyword]) -> List[ContentGap]:
    """
    Analyze content gaps by category.

    Args:
        ranked_keywords: Ranked keywords, already filtered for brand relevance

    Returns:
        Gaps sorted by priority, then total category volume
    """
    groups: Dict[str, List[RankedKeyword]] = {}
    for kw in ranked_keywords:
        category = get_category(kw.keyword, kw.category)
        if category == DEFAULT_CATEGORY:
            continue
        groups.setdefault(category, []).append(kw)

    gaps = []

    for category, keywords in groups.items():
        if len(keywords) < CONTENT_GAP_MIN_KEYWORDS:
            continue

        avg_position = sum(kw.position for kw in keywords) / len(keywords)
        unique_urls = list(dict.fromkeys(kw.url for kw in keywords if kw.url))
        weak = [kw for kw in keywords if kw.position > 10]
        page2_count = sum(1 for kw in keywords if 11 <= kw.position <= 20)

        has_gap = (
            avg_position > CONTENT_GAP_AVG_POSITION
            or len(weak) > len(keywords) * CONTENT_GAP_WEAK_SHARE
            or page2_count >= CONTENT_GAP_PAGE2_COUNT
        )

        high_volume_weak = sorted(
            (kw for kw in weak if kw.search_volume >= CONTENT_GAP_HIGH_VOLUME),
            key=lambda k: k.search_volume,
            reverse=True,
        )
        suggested_new_content = min(MAX_NEW_PAGES, math.ceil(len(high_volume_weak) / KEYWORDS_PER_NEW_PAGE))

        if not has_gap or suggested_new_content == 0:
            continue

        volume_opportunity = sum(kw.search_volume for kw in high_volume_weak)
        total_volume = sum(kw.search_volume for kw in keywords)

        gaps.append(ContentGap(
            topic=category,
            category=category,
            your_coverage=len(unique_urls),
            avg_competitor_coverage=len(unique_urls) + suggested_new_content,
            total_volume=total_volume,
            priority=_priority_for(volume_opportunity),
            reasoning=generate_content_gap_reasoning(
                category, avg_position, len(weak), len(keywords), volume_opportunity
            ),
            estimated_traffic_gain=round_int(volume_opportunity * TRAFFIC_GAIN_RATE),
            suggested_new_content=suggested_new_content,
            top_missing_keywords=[kw.keyword for kw in high_volume_weak[:5]],
            existing_urls=unique_urls[:5],
            weak_keywords=[
                WeakKeyword(keyword=kw.keyword, position=kw.position, volume=kw.search_volume, url=kw.url or "")
                for kw in high_volume_weak[:5]
            ],
            suggested_content_types=get_suggested_content_types(category),
        ))

    gaps.sort(key=lambda g: (PRIORITY_ORDER[g.priority], -g.total_volume))
    logger.debug(f"Found {len(gaps)} content gaps across {len(groups)} categories")
    return gaps
