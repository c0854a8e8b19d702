"""
Funnel-Based Intent Analysis

Groups keywords by marketing funnel stage and surfaces, per stage, the
visibility the brand already has and the keywords worth improving.

Stages are taken from each keyword's search intent; keywords without one
are classified from their text.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..classification.categories import get_category
from ..classification.intent import FunnelStage, StrategicValue, assess_strategic_value, resolve_intent
from ..context.relevance import match_brand_context
from ..models.keywords import BrandContext, RankedKeyword
from ..scoring.visibility import get_ctr_for_position, round_half_up, round_int, safe_percentage, visible_volume

logger = logging.getLogger(__name__)


OPPORTUNITY_MIN_POSITION = 3       # exclusive
OPPORTUNITY_MIN_VOLUME = 100
OPPORTUNITY_TARGET_POSITION = 3
STAGE_TOP_KEYWORDS = 5
STAGE_OPPORTUNITIES = 5
INTENT_OPPORTUNITY_LIMIT = 50

STRATEGIC_VALUE_ORDER = {StrategicValue.HIGH: 0, StrategicValue.MEDIUM: 1, StrategicValue.LOW: 2}

STAGE_INFO: Mapping[FunnelStage, Tuple[str, str]] = MappingProxyType({
    FunnelStage.AWARENESS: (
        "Awareness Stage",
        "Users are researching, learning, or discovering. "
        "Focus on brand visibility and educational content.",
    ),
    FunnelStage.CONSIDERATION: (
        "Consideration Stage",
        "Users are comparing options and evaluating. "
        "Focus on differentiation and value propositions.",
    ),
    FunnelStage.DECISION: (
        "Decision Stage",
        "Users are ready to buy or convert. "
        "Focus on conversion optimization and clear CTAs.",
    ),
    FunnelStage.RETENTION: (
        "Retention Stage",
        "Users already know the brand and are navigating to it. "
        "Focus on support, account and brand pages.",
    ),
})


@dataclass
class FunnelKeyword:
    keyword: str
    search_volume: int
    position: int
    intent: str
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "searchVolume": self.search_volume,
            "position": self.position,
            "intent": self.intent,
            "url": self.url,
        }


@dataclass
class FunnelOpportunity:
    keyword: str
    search_volume: int
    position: int
    intent: str
    potential_clicks: int
    strategic_value: str    # reasoning text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "searchVolume": self.search_volume,
            "position": self.position,
            "intent": self.intent,
            "potentialClicks": self.potential_clicks,
            "strategicValue": self.strategic_value,
        }


@dataclass
class FunnelStageAnalysis:
    """Visibility and opportunities for one funnel stage."""
    stage: str
    stage_label: str
    description: str
    keyword_count: int
    total_volume: int
    avg_position: float
    visible_volume: int
    sov: float
    top_keywords: List[FunnelKeyword] = field(default_factory=list)
    opportunities: List[FunnelOpportunity] = field(default_factory=list)
    strategic_insights: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage,
            "stageLabel": self.stage_label,
            "description": self.description,
            "keywordCount": self.keyword_count,
            "totalVolume": self.total_volume,
            "avgPosition": self.avg_position,
            "visibleVolume": self.visible_volume,
            "sov": self.sov,
            "topKeywords": [k.to_dict() for k in self.top_keywords],
            "opportunities": [o.to_dict() for o in self.opportunities],
            "strategicInsights": list(self.strategic_insights),
        }


@dataclass
class IntentOpportunity:
    keyword: str
    search_volume: int
    position: int
    intent: str
    intent_probability: float
    funnel_stage: str
    category: str
    url: Optional[str]
    strategic_value: str    # high | medium | low
    strategic_reasoning: str
    brand_relevance: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "searchVolume": self.search_volume,
            "position": self.position,
            "intent": self.intent,
            "intentProbability": self.intent_probability,
            "funnelStage": self.funnel_stage,
            "category": self.category,
            "url": self.url,
            "strategicValue": self.strategic_value,
            "strategicReasoning": self.strategic_reasoning,
            "brandRelevance": self.brand_relevance,
        }


def keywords_for_stage(ranked_keywords: Iterable[RankedKeyword], stage: FunnelStage) -> List[RankedKeyword]:
    return [kw for kw in ranked_keywords if resolve_intent(kw).funnel_stage == stage.value]


def generate_funnel_stage_insights(
    stage: FunnelStage,
    stage_keywords: List[RankedKeyword],
    brand_context: Optional[BrandContext] = None,
) -> List[str]:
    """Short strategy notes for a funnel stage."""
    if not stage_keywords:
        return [f"No {stage.value} stage keywords detected. Consider creating content for this stage."]

    count = len(stage_keywords)
    avg_position = sum(kw.position for kw in stage_keywords) / count
    total_volume = sum(kw.search_volume for kw in stage_keywords)
    top_positions = sum(1 for kw in stage_keywords if kw.position <= 3)
    page1_count = sum(1 for kw in stage_keywords if kw.position <= 10)

    insights = []

    if stage == FunnelStage.AWARENESS:
        insights.append(f"You have {count} awareness keywords with {total_volume:,} total monthly searches")
        if avg_position > 10:
            insights.append(
                f"Average position #{avg_position:.1f} suggests room for improved visibility in educational content"
            )
        if brand_context:
            insights.append(
                f"Focus on creating authoritative content about {brand_context.industry or 'your industry'} "
                "topics to build brand trust"
            )

    elif stage == FunnelStage.CONSIDERATION:
        insights.append(f"{count} commercial keywords detected - users actively comparing options")
        if page1_count < count * 0.5:
            insights.append("Less than 50% of consideration keywords are on page 1 - prioritize comparison content")
        insights.append('Create comparison guides and "best of" content to capture users in the evaluation phase')

    elif stage == FunnelStage.DECISION:
        insights.append(f"{count} high-intent transactional keywords with {total_volume:,} monthly searches")
        if top_positions < count * 0.3:
            insights.append("Less than 30% in top 3 positions - optimize product/service pages for conversions")
        insights.append("Ensure landing pages have clear CTAs and streamlined purchase paths")

    elif stage == FunnelStage.RETENTION:
        insights.append(f"{count} navigational keywords - users are looking for you directly")
        if top_positions < count * 0.5:
            insights.append("Less than 50% in top 3 positions - make sure brand, support and account pages rank first")
        insights.append("Keep help, contact and login pages easy to find for returning customers")

    return insights


def analyze_funnel_stages(
    ranked_keywords: Iterable[RankedKeyword],
    brand_context: Optional[BrandContext] = None,
) -> List[FunnelStageAnalysis]:
    """
    Analyze keywords by funnel stage.

    Awareness is always reported; other stages only when they have keywords.

    Args:
        ranked_keywords: Relevant ranked keywords
        brand_context: Optional brand profile for strategic value and insights

    Returns:
        One FunnelStageAnalysis per reported stage, in funnel order
    """
    ranked_keywords = list(ranked_keywords)
    analyses = []

    for stage in FunnelStage:
        stage_keywords = keywords_for_stage(ranked_keywords, stage)
        if not stage_keywords and stage != FunnelStage.AWARENESS:
            continue

        label, description = STAGE_INFO[stage]
        total_volume = sum(kw.search_volume for kw in stage_keywords)
        visible = sum(visible_volume(kw) for kw in stage_keywords)
        avg_position = (
            sum(kw.position for kw in stage_keywords) / len(stage_keywords) if stage_keywords else 0
        )
        by_volume = sorted(stage_keywords, key=lambda k: k.search_volume, reverse=True)

        top_keywords = [
            FunnelKeyword(
                keyword=kw.keyword,
                search_volume=kw.search_volume,
                position=kw.position,
                intent=resolve_intent(kw).main_intent,
                url=kw.url,
            )
            for kw in by_volume[:STAGE_TOP_KEYWORDS]
        ]

        opportunities = [
            FunnelOpportunity(
                keyword=kw.keyword,
                search_volume=kw.search_volume,
                position=kw.position,
                intent=resolve_intent(kw).main_intent,
                potential_clicks=round_int(kw.search_volume * get_ctr_for_position(OPPORTUNITY_TARGET_POSITION)),
                strategic_value=assess_strategic_value(kw, brand_context).reasoning,
            )
            for kw in by_volume
            if kw.position > OPPORTUNITY_MIN_POSITION and kw.search_volume >= OPPORTUNITY_MIN_VOLUME
        ][:STAGE_OPPORTUNITIES]

        analyses.append(FunnelStageAnalysis(
            stage=stage.value,
            stage_label=label,
            description=description,
            keyword_count=len(stage_keywords),
            total_volume=total_volume,
            avg_position=round_half_up(avg_position),
            visible_volume=round_int(visible),
            sov=round_half_up(safe_percentage(visible, total_volume)),
            top_keywords=top_keywords,
            opportunities=opportunities,
            strategic_insights=generate_funnel_stage_insights(stage, stage_keywords, brand_context),
        ))

    logger.debug(f"Funnel analysis covers {len(analyses)} stages")
    return analyses


def analyze_intent_opportunities(
    ranked_keywords: Iterable[RankedKeyword],
    brand_context: Optional[BrandContext] = None,
) -> List[IntentOpportunity]:
    """
    Keywords outside the top 3 with volume >= 100, ranked by strategic value.

    Returns:
        Up to 50 opportunities, high value first, then by volume
    """
    opportunities = []

    for kw in ranked_keywords:
        if kw.position <= OPPORTUNITY_MIN_POSITION or kw.search_volume < OPPORTUNITY_MIN_VOLUME:
            continue

        intent = resolve_intent(kw)
        strategic = assess_strategic_value(kw, brand_context)
        category = get_category(kw.keyword, kw.category)
        context_match = match_brand_context(kw.keyword, category, brand_context)

        opportunities.append((strategic.value, IntentOpportunity(
            keyword=kw.keyword,
            search_volume=kw.search_volume,
            position=kw.position,
            intent=intent.main_intent,
            intent_probability=intent.probability,
            funnel_stage=intent.funnel_stage,
            category=category,
            url=kw.url,
            strategic_value=strategic.value.value,
            strategic_reasoning=strategic.reasoning,
            brand_relevance=context_match.reason if context_match.matches else None,
        )))

    opportunities.sort(key=lambda item: (STRATEGIC_VALUE_ORDER[item[0]], -item[1].search_volume))
    return [opportunity for _, opportunity in opportunities[:INTENT_OPPORTUNITY_LIMIT]]
