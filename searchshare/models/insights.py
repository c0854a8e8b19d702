"""
Insight output models.

Value objects produced by the action engine and the insights summary.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .keywords import FUNNEL_STAGES, SearchIntentInfo


@dataclass
class ActionItem:
    """A single prioritized recommendation."""
    id: str
    action_type: str        # optimize | create | investigate | monitor
    priority: int           # 0-100, higher first
    title: str
    description: str
    impact: str             # high | medium | low
    effort: str             # low | medium | high
    estimated_uplift: int
    reasoning: str
    keyword: Optional[str] = None
    category: Optional[str] = None
    is_recommended: bool = False
    recommended_reason: Optional[str] = None
    search_intent: Optional[SearchIntentInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "actionType": self.action_type,
            "priority": self.priority,
            "title": self.title,
            "description": self.description,
            "keyword": self.keyword,
            "category": self.category,
            "impact": self.impact,
            "effort": self.effort,
            "estimatedUplift": self.estimated_uplift,
            "reasoning": self.reasoning,
            "isRecommended": self.is_recommended,
            "recommendedReason": self.recommended_reason,
            "searchIntent": self.search_intent.to_dict() if self.search_intent else None,
        }


def empty_funnel_breakdown() -> Dict[str, Dict[str, int]]:
    return {stage: {"count": 0, "volume": 0} for stage in FUNNEL_STAGES}


@dataclass
class InsightsSummary:
    total_quick_win_potential: int = 0
    strong_categories: int = 0
    weak_categories: int = 0
    hidden_gems_count: int = 0
    cannibalization_count: int = 0
    top_priority_action: str = "No actions identified"
    funnel_breakdown: Dict[str, Dict[str, int]] = field(default_factory=empty_funnel_breakdown)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalQuickWinPotential": self.total_quick_win_potential,
            "strongCategories": self.strong_categories,
            "weakCategories": self.weak_categories,
            "hiddenGemsCount": self.hidden_gems_count,
            "cannibalizationCount": self.cannibalization_count,
            "topPriorityAction": self.top_priority_action,
            "funnelBreakdown": {stage: dict(values) for stage, values in self.funnel_breakdown.items()},
        }
