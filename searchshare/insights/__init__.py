"""
Insights Module

Opportunity and risk detectors plus the engine that combines them:

- Quick wins: keywords ranked 4-20 with meaningful click uplift
- Hidden gems: low difficulty, high volume keywords outside the top 3
- Cannibalization: several own URLs ranking for one keyword
- Category SOV and content gaps: under-served topics
- Competitor strength: modelled head-to-head estimates
- Funnel analysis: visibility per funnel stage and intent opportunities
- Action list: everything above merged and prioritized

Example Usage:
    from searchshare.insights import generate_insights

    insights = generate_insights(ranked_keywords, brand_keywords, brand_context)
    for action in insights.action_list[:5]:
        print(f"[{action.priority}] {action.title}")
"""

from .actions import generate_action_list
from .cannibalization import CannibalizationIssue, CompetingUrl, detect_cannibalization
from .categories import CategorySOV, calculate_category_sov, determine_category_status
from .competitors import CompetitorStrength, HeadToHead, KeywordBattle, calculate_competitor_strength
from .content_gaps import ContentGap, WeakKeyword, analyze_content_gaps
from .engine import ActionableInsights, generate_insights
from .funnel import (
    FunnelKeyword,
    FunnelOpportunity,
    FunnelStageAnalysis,
    IntentOpportunity,
    analyze_funnel_stages,
    analyze_intent_opportunities,
)
from .hidden_gems import HiddenGem, calculate_hidden_gems
from .quick_wins import QuickWinOpportunity, calculate_quick_wins

__all__ = [
    # Engine
    "ActionableInsights",
    "generate_insights",
    "generate_action_list",
    # Opportunities
    "QuickWinOpportunity",
    "calculate_quick_wins",
    "HiddenGem",
    "calculate_hidden_gems",
    "ContentGap",
    "WeakKeyword",
    "analyze_content_gaps",
    # Risks
    "CannibalizationIssue",
    "CompetingUrl",
    "detect_cannibalization",
    "CompetitorStrength",
    "HeadToHead",
    "KeywordBattle",
    "calculate_competitor_strength",
    # Categories
    "CategorySOV",
    "calculate_category_sov",
    "determine_category_status",
    # Funnel
    "FunnelKeyword",
    "FunnelOpportunity",
    "FunnelStageAnalysis",
    "IntentOpportunity",
    "analyze_funnel_stages",
    "analyze_intent_opportunities",
]
