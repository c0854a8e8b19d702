"""
Action Prioritization

Merges the outputs of every detector into one ranked to-do list.

Sources, caps and priority formulas:

    quick wins          top 5   min(100, 50 + uplift / 50)
    hidden gems         top 3   min(95, 70 + volume / 500)
    cannibalization     top 3   min(90, 55 + impact / 100), impact >= 100 only
    weak categories     top 3   min(95, 40 + volume / 1000)
    competitor threats  first 2 flat 60, only when they win more keywords
    leading categories  top 2   flat 30 (monitoring)

Ids are assigned in generation order; the list is then stable-sorted by
priority, highest first.
"""

import itertools
import logging
from typing import List, Optional, Sequence

from ..context.relevance import NO_MATCH, match_brand_context
from ..models.insights import ActionItem
from ..models.keywords import BrandContext
from ..scoring.visibility import round_int
from .cannibalization import CannibalizationIssue
from .categories import CategorySOV
from .competitors import CompetitorStrength
from .hidden_gems import HiddenGem
from .quick_wins import QuickWinOpportunity

logger = logging.getLogger(__name__)


MAX_QUICK_WIN_ACTIONS = 5
MAX_HIDDEN_GEM_ACTIONS = 3
MAX_CANNIBALIZATION_ACTIONS = 3
MAX_CATEGORY_ACTIONS = 3
MAX_COMPETITOR_ACTIONS = 2
MAX_MONITOR_ACTIONS = 2
MIN_CANNIBALIZATION_IMPACT = 100

CANNIBALIZATION_VERBS = {
    "consolidate": "Consolidate",
    "redirect": "Redirect",
    "differentiate": "Differentiate",
}


def _impact_level(value: int, high: int, medium: int) -> str:
    if value >= high:
        return "high"
    if value >= medium:
        return "medium"
    return "low"


def _gem_effort(difficulty: float) -> str:
    if difficulty <= 20:
        return "low"
    if difficulty <= 35:
        return "medium"
    return "high"


def generate_action_list(
    quick_wins: Sequence[QuickWinOpportunity],
    categories: Sequence[CategorySOV],
    competitors: Sequence[CompetitorStrength],
    hidden_gems: Sequence[HiddenGem] = (),
    cannibalization_issues: Sequence[CannibalizationIssue] = (),
    brand_context: Optional[BrandContext] = None,
) -> List[ActionItem]:
    """
    Generate the prioritized action list.

    Args:
        quick_wins: Quick wins, highest uplift first
        categories: Category SOV breakdown
        competitors: Competitor strength estimates
        hidden_gems: Hidden gems, best first
        cannibalization_issues: Cannibalization issues, highest impact first
        brand_context: Optional brand profile for "recommended" labels

    Returns:
        Actions sorted by priority (highest first)
    """
    ids = itertools.count(1)
    actions = []

    for qw in quick_wins[:MAX_QUICK_WIN_ACTIONS]:
        actions.append(ActionItem(
            id=f"action-{next(ids)}",
            action_type="optimize",
            priority=min(100, 50 + round_int(qw.click_uplift / 50)),
            title=f'Optimize "{qw.keyword}" page',
            description=f"Move from position #{qw.current_position} to #{qw.target_position}",
            keyword=qw.keyword,
            category=qw.category,
            impact=_impact_level(qw.click_uplift, 500, 200),
            effort=qw.effort,
            estimated_uplift=qw.click_uplift,
            reasoning=f"+{qw.click_uplift:,} clicks potential ({qw.uplift_percentage}% increase)",
            is_recommended=qw.is_recommended,
            recommended_reason=qw.recommended_reason,
            search_intent=qw.search_intent,
        ))

    for gem in hidden_gems[:MAX_HIDDEN_GEM_ACTIONS]:
        context_match = match_brand_context(gem.keyword, gem.category, brand_context)
        actions.append(ActionItem(
            id=f"action-{next(ids)}",
            action_type="create",
            priority=min(95, 70 + round_int(gem.search_volume / 500)),
            title=f'Target "{gem.keyword}" (Hidden Gem)',
            description=gem.reasoning,
            keyword=gem.keyword,
            category=gem.category,
            impact=_impact_level(gem.search_volume, 1000, 500),
            effort=_gem_effort(gem.keyword_difficulty),
            estimated_uplift=gem.potential_clicks,
            reasoning=(
                f"KD: {gem.keyword_difficulty:g}, Volume: {gem.search_volume:,}, "
                f"Potential: {gem.potential_clicks:,} clicks"
            ),
            is_recommended=context_match.matches,
            recommended_reason=context_match.reason,
            search_intent=gem.search_intent,
        ))

    for issue in cannibalization_issues[:MAX_CANNIBALIZATION_ACTIONS]:
        if issue.impact_score < MIN_CANNIBALIZATION_IMPACT:
            continue

        context_match = match_brand_context(issue.keyword, None, brand_context)
        urls = ", ".join(u.url for u in issue.competing_urls)[:100]
        actions.append(ActionItem(
            id=f"action-{next(ids)}",
            action_type="optimize",
            priority=min(90, 55 + round_int(issue.impact_score / 100)),
            title=f'{CANNIBALIZATION_VERBS[issue.recommendation]} pages for "{issue.keyword}"',
            description=f"{len(issue.competing_urls)} URLs competing - {issue.recommendation}",
            keyword=issue.keyword,
            impact=_impact_level(issue.impact_score, 500, 200),
            effort="low" if issue.recommendation == "redirect" else "medium",
            estimated_uplift=issue.impact_score,
            reasoning=f"Cannibalization losing ~{issue.impact_score:,} clicks. URLs: {urls}...",
            is_recommended=context_match.matches,
            recommended_reason=context_match.reason,
        ))

    weak_categories = [c for c in categories if c.is_weak]
    for cat in weak_categories[:MAX_CATEGORY_ACTIONS]:
        context_match = match_brand_context("", cat.category, brand_context)
        actions.append(ActionItem(
            id=f"action-{next(ids)}",
            action_type="create",
            priority=min(95, 40 + round_int(cat.total_category_volume / 1000)),
            title=f'Build content for "{cat.category}"',
            description=f"Create topic cluster to improve {cat.status} category",
            category=cat.category,
            impact="high" if cat.total_category_volume > 10000 else "medium",
            effort="high",
            estimated_uplift=round_int(cat.total_category_volume * 0.1),
            reasoning=(
                f"{cat.keyword_count} keywords, {cat.total_category_volume:,} monthly searches. "
                f"Current SOV: {cat.your_sov:g}%"
            ),
            is_recommended=context_match.matches,
            recommended_reason=context_match.reason,
        ))

    for comp in competitors[:MAX_COMPETITOR_ACTIONS]:
        h2h = comp.head_to_head
        if h2h.they_win <= h2h.you_win:
            continue

        context_match = NO_MATCH
        for category in comp.dominant_categories:
            match = match_brand_context("", category, brand_context)
            if match.matches:
                context_match = match
                break

        actions.append(ActionItem(
            id=f"action-{next(ids)}",
            action_type="investigate",
            priority=60,
            title=f"Analyze {comp.competitor}'s content strategy",
            description=f"They're winning {h2h.they_win} keywords vs your {h2h.you_win}",
            impact="medium",
            effort="low",
            estimated_uplift=0,
            reasoning=f"{comp.competitor} dominates: {', '.join(comp.dominant_categories) or 'multiple categories'}",
            is_recommended=context_match.matches,
            recommended_reason=context_match.reason,
        ))

    leading_categories = [c for c in categories if c.status == "leading"]
    for cat in leading_categories[:MAX_MONITOR_ACTIONS]:
        context_match = match_brand_context("", cat.category, brand_context)
        actions.append(ActionItem(
            id=f"action-{next(ids)}",
            action_type="monitor",
            priority=30,
            title=f'Protect "{cat.category}" leadership',
            description="Monitor competitor moves in this strong category",
            category=cat.category,
            impact="low",
            effort="low",
            estimated_uplift=0,
            reasoning=f"You lead with {cat.your_sov:g}% SOV, avg position #{cat.avg_position:g}",
            is_recommended=context_match.matches,
            recommended_reason=context_match.reason,
        ))

    # sorted() is stable: equal priorities keep generation order
    actions = sorted(actions, key=lambda a: a.priority, reverse=True)
    logger.debug(f"Generated {len(actions)} actions")
    return actions
