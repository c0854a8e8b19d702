"""
Insights Engine

Single entry point that turns ranked and brand keyword records into the
full ActionableInsights bundle.

Pipeline:
1. Relevance filter (once, when a BrandContext is given)
2. Enrichment: category and search intent filled in on copies of the records
3. Independent analyses: quick wins, category SOV, competitors, hidden gems,
   cannibalization, content gaps, funnel stages, intent opportunities
4. Action list and summary

Pure and deterministic: the same input always yields the same output and
input records are never modified.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional

from ..classification.categories import get_category
from ..classification.intent import with_search_intent
from ..context.relevance import filter_relevant_keywords
from ..models.insights import ActionItem, InsightsSummary, empty_funnel_breakdown
from ..models.keywords import BrandContext, BrandKeyword, RankedKeyword
from .actions import generate_action_list
from .cannibalization import CannibalizationIssue, detect_cannibalization
from .categories import CategorySOV, calculate_category_sov
from .competitors import CompetitorStrength, calculate_competitor_strength
from .content_gaps import ContentGap, analyze_content_gaps
from .funnel import FunnelStageAnalysis, IntentOpportunity, analyze_funnel_stages, analyze_intent_opportunities
from .hidden_gems import HIDDEN_GEM_MAX_DIFFICULTY, HIDDEN_GEM_MIN_VOLUME, HiddenGem, calculate_hidden_gems
from .quick_wins import QUICK_WIN_MIN_VOLUME, QuickWinOpportunity, calculate_quick_wins

logger = logging.getLogger(__name__)


@dataclass
class ActionableInsights:
    """Everything the engine produces for one brand."""
    quick_wins: List[QuickWinOpportunity] = field(default_factory=list)
    category_breakdown: List[CategorySOV] = field(default_factory=list)
    competitor_strengths: List[CompetitorStrength] = field(default_factory=list)
    action_list: List[ActionItem] = field(default_factory=list)
    hidden_gems: List[HiddenGem] = field(default_factory=list)
    cannibalization_issues: List[CannibalizationIssue] = field(default_factory=list)
    content_gaps: List[ContentGap] = field(default_factory=list)
    funnel_analysis: List[FunnelStageAnalysis] = field(default_factory=list)
    intent_opportunities: List[IntentOpportunity] = field(default_factory=list)
    summary: InsightsSummary = field(default_factory=InsightsSummary)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "quickWins": [q.to_dict() for q in self.quick_wins],
            "categoryBreakdown": [c.to_dict() for c in self.category_breakdown],
            "competitorStrengths": [c.to_dict() for c in self.competitor_strengths],
            "actionList": [a.to_dict() for a in self.action_list],
            "hiddenGems": [g.to_dict() for g in self.hidden_gems],
            "cannibalizationIssues": [i.to_dict() for i in self.cannibalization_issues],
            "contentGaps": [g.to_dict() for g in self.content_gaps],
            "funnelAnalysis": [f.to_dict() for f in self.funnel_analysis],
            "intentOpportunities": [o.to_dict() for o in self.intent_opportunities],
            "summary": self.summary.to_dict(),
        }


def enrich_keyword(keyword: RankedKeyword) -> RankedKeyword:
    """Copy of the keyword with category and search intent filled in."""
    if keyword.category is None:
        keyword = replace(keyword, category=get_category(keyword.keyword))
    return with_search_intent(keyword)


def build_summary(
    quick_wins: List[QuickWinOpportunity],
    category_breakdown: List[CategorySOV],
    hidden_gems: List[HiddenGem],
    cannibalization_issues: List[CannibalizationIssue],
    action_list: List[ActionItem],
    funnel_analysis: List[FunnelStageAnalysis],
) -> InsightsSummary:
    funnel_breakdown = empty_funnel_breakdown()
    for stage in funnel_analysis:
        funnel_breakdown[stage.stage] = {"count": stage.keyword_count, "volume": stage.total_volume}

    summary = InsightsSummary(
        total_quick_win_potential=sum(q.click_uplift for q in quick_wins),
        strong_categories=sum(1 for c in category_breakdown if c.is_strong),
        weak_categories=sum(1 for c in category_breakdown if c.is_weak),
        hidden_gems_count=len(hidden_gems),
        cannibalization_count=len(cannibalization_issues),
        funnel_breakdown=funnel_breakdown,
    )
    if action_list:
        summary.top_priority_action = action_list[0].title
    return summary


def generate_insights(
    ranked_keywords: Iterable[RankedKeyword],
    brand_keywords: Iterable[BrandKeyword],
    brand_context: Optional[BrandContext] = None,
    *,
    quick_win_min_volume: int = QUICK_WIN_MIN_VOLUME,
    hidden_gem_min_volume: int = HIDDEN_GEM_MIN_VOLUME,
    hidden_gem_max_difficulty: float = HIDDEN_GEM_MAX_DIFFICULTY,
) -> ActionableInsights:
    """
    Generate all actionable insights from keyword data.

    Args:
        ranked_keywords: Keywords the brand ranks for
        brand_keywords: Own and competitor brand keywords
        brand_context: Optional brand profile; enables relevance filtering
            and "recommended" labels
        quick_win_min_volume: Minimum volume for quick wins
        hidden_gem_min_volume: Minimum volume for hidden gems
        hidden_gem_max_difficulty: Maximum keyword difficulty for hidden gems

    Returns:
        ActionableInsights
    """
    ranked_keywords = list(ranked_keywords)
    brand_keywords = list(brand_keywords)

    relevant = [enrich_keyword(kw) for kw in filter_relevant_keywords(ranked_keywords, brand_context)]
    logger.info(
        f"Generating insights for {len(relevant)} relevant keywords "
        f"({len(ranked_keywords)} ranked, {len(brand_keywords)} brand)"
    )

    quick_wins = calculate_quick_wins(relevant, quick_win_min_volume, brand_context)
    category_breakdown = calculate_category_sov(relevant)
    competitor_strengths = calculate_competitor_strength(brand_keywords, relevant)
    hidden_gems = calculate_hidden_gems(
        relevant,
        brand_context,
        min_volume=hidden_gem_min_volume,
        max_difficulty=hidden_gem_max_difficulty,
    )
    cannibalization_issues = detect_cannibalization(relevant)
    content_gaps = analyze_content_gaps(relevant)
    funnel_analysis = analyze_funnel_stages(relevant, brand_context)
    intent_opportunities = analyze_intent_opportunities(relevant, brand_context)

    action_list = generate_action_list(
        quick_wins,
        category_breakdown,
        competitor_strengths,
        hidden_gems,
        cannibalization_issues,
        brand_context,
    )

    summary = build_summary(
        quick_wins, category_breakdown, hidden_gems, cannibalization_issues, action_list, funnel_analysis
    )

    logger.info(
        f"Insights ready: {len(quick_wins)} quick wins, {len(hidden_gems)} hidden gems, "
        f"{len(cannibalization_issues)} cannibalization issues, {len(content_gaps)} content gaps, "
        f"{len(action_list)} actions"
    )

    return ActionableInsights(
        quick_wins=quick_wins,
        category_breakdown=category_breakdown,
        competitor_strengths=competitor_strengths,
        action_list=action_list,
        hidden_gems=hidden_gems,
        cannibalization_issues=cannibalization_issues,
        content_gaps=content_gaps,
        funnel_analysis=funnel_analysis,
        intent_opportunities=intent_opportunities,
        summary=summary,
    )
