"""
Search Intent and Funnel Classification

Classifies keyword intent with ordered pattern families (most specific first)
and maps intent to a marketing funnel stage:

    informational -> awareness
    commercial    -> consideration
    transactional -> decision
    navigational  -> retention

Strategic value layers brand-context rules on top of the funnel stage.
"""

import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Pattern, Tuple

from ..models.keywords import BrandContext, RankedKeyword, SearchIntentInfo

logger = logging.getLogger(__name__)


class SearchIntent(Enum):
    """Search intent classification."""
    TRANSACTIONAL = "transactional"
    COMMERCIAL = "commercial"
    NAVIGATIONAL = "navigational"
    INFORMATIONAL = "informational"


class FunnelStage(Enum):
    """Marketing funnel stage."""
    AWARENESS = "awareness"
    CONSIDERATION = "consideration"
    DECISION = "decision"
    RETENTION = "retention"


class StrategicValue(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def _patterns(*sources: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(source, re.IGNORECASE) for source in sources)


# Evaluated in this order; first family with a matching pattern wins
INTENT_RULES: Tuple[Tuple[SearchIntent, Tuple[Pattern[str], ...]], ...] = (
    (SearchIntent.TRANSACTIONAL, _patterns(
        r"\b(buy|purchase|order|shop|deal|discount|coupon|price|cheap|affordable|sale|offer)\b",
        r"\b(near me|delivery|shipping|store|outlet)\b",
        r"\b(online|subscribe|download|get|hire)\b",
    )),
    (SearchIntent.COMMERCIAL, _patterns(
        r"\b(best|top|review|compare|comparison|vs|versus|alternative)\b",
        r"\b(recommended|rating|rated|guide|tips)\b",
        r"\b(pros|cons|features|benefits|worth)\b",
    )),
    (SearchIntent.NAVIGATIONAL, _patterns(
        r"\b(login|signin|sign in|account|portal|dashboard)\b",
        r"\b(contact|support|help|customer service)\b",
        r"\b(official|website|site|app)\b",
    )),
    (SearchIntent.INFORMATIONAL, _patterns(
        r"\b(how|what|why|when|where|who|which|can|does|is|are)\b",
        r"\b(tutorial|guide|learn|example|definition|meaning)\b",
        r"\b(tips|ideas|ways|steps|process)\b",
    )),
)

# Unmatched keywords naming a product/service type lean commercial
PRODUCT_TYPE_PATTERN = re.compile(
    r"\b(product|service|solution|software|tool|system|platform)\b", re.IGNORECASE
)

INTENT_TO_FUNNEL: Mapping[SearchIntent, FunnelStage] = MappingProxyType({
    SearchIntent.INFORMATIONAL: FunnelStage.AWARENESS,
    SearchIntent.COMMERCIAL: FunnelStage.CONSIDERATION,
    SearchIntent.TRANSACTIONAL: FunnelStage.DECISION,
    SearchIntent.NAVIGATIONAL: FunnelStage.RETENTION,
})

# Probability attached to pattern-based classifications
CLASSIFIER_PROBABILITY = 0.5

WORKFORCE_PATTERNS = _patterns(
    r"ausbildung|training|apprentice|intern",
    r"karriere|career|job|beruf",
    r"studium|student|university",
    r"lernen|learn|education",
)
CAREERS_URL_MARKERS = ("ausbildung", "karriere", "career")

COMPARISON_PATTERNS = _patterns(
    r"\b(vergleich|comparison|compare|vs|versus)\b",
    r"\b(test|review|bewertung)\b",
    r"\b(beste|best|top|ranking)\b",
    r"\b(alternative|option)\b",
)

STRATEGIC_VOLUME_THRESHOLD = 1000


def classify_intent(keyword: str) -> SearchIntent:
    """
    Classify keyword search intent.

    Args:
        keyword: Keyword text

    Returns:
        SearchIntent (informational when nothing matches)
    """
    kw = keyword.lower()
    for intent, patterns in INTENT_RULES:
        if any(pattern.search(kw) for pattern in patterns):
            return intent

    if PRODUCT_TYPE_PATTERN.search(kw):
        return SearchIntent.COMMERCIAL
    return SearchIntent.INFORMATIONAL


def get_funnel_stage(intent: SearchIntent) -> FunnelStage:
    return INTENT_TO_FUNNEL[intent]


def classify_search_intent(keyword: str) -> SearchIntentInfo:
    """Build a SearchIntentInfo record for a keyword from its text alone."""
    intent = classify_intent(keyword)
    return SearchIntentInfo(
        main_intent=intent.value,
        probability=CLASSIFIER_PROBABILITY,
        funnel_stage=get_funnel_stage(intent).value,
    )


def with_search_intent(keyword: RankedKeyword) -> RankedKeyword:
    """Return the keyword, or a copy with a classified intent if it had none."""
    if keyword.search_intent is not None:
        return keyword
    return replace(keyword, search_intent=classify_search_intent(keyword.keyword))


def resolve_intent(keyword: RankedKeyword) -> SearchIntentInfo:
    """Upstream intent when present, otherwise the pattern classification."""
    return keyword.search_intent or classify_search_intent(keyword.keyword)


# ============================================================================
# STRATEGIC VALUE
# ============================================================================

@dataclass
class StrategicAssessment:
    value: StrategicValue
    reasoning: str


def _is_careers_page(url: Optional[str]) -> bool:
    if not url:
        return False
    url_lower = url.lower()
    return any(marker in url_lower for marker in CAREERS_URL_MARKERS)


def assess_strategic_value(
    keyword: RankedKeyword,
    brand_context: Optional[BrandContext] = None,
) -> StrategicAssessment:
    """
    Assess how strategically valuable a keyword is for the brand.

    Decision-stage keywords are always high value. Workforce keywords that land
    on a careers page build brand recognition with future professionals, so
    they are high value despite informational intent.

    Args:
        keyword: Ranked keyword (intent classified if missing)
        brand_context: Optional brand profile

    Returns:
        StrategicAssessment with value and reasoning
    """
    stage = FunnelStage(resolve_intent(keyword).funnel_stage)
    kw_lower = keyword.keyword.lower()

    if stage == FunnelStage.DECISION:
        return StrategicAssessment(StrategicValue.HIGH, "High-intent keyword with purchase readiness")

    if stage == FunnelStage.AWARENESS and brand_context:
        is_workforce = any(p.search(kw_lower) for p in WORKFORCE_PATTERNS)
        if is_workforce and _is_careers_page(keyword.url):
            return StrategicAssessment(
                StrategicValue.HIGH,
                "Strategic awareness: Builds brand recognition with future professionals "
                f"in {brand_context.industry or 'your industry'}",
            )

        core_terms = [
            term.lower()
            for term in (*brand_context.seo_focus, *brand_context.product_categories, *brand_context.key_strengths)
            if term
        ]
        first_word = kw_lower.split()[0]
        if any(term in kw_lower or first_word in term for term in core_terms):
            return StrategicAssessment(
                StrategicValue.MEDIUM,
                "Awareness opportunity: Educational content about "
                f"{brand_context.vertical or brand_context.industry or 'your core topics'}",
            )

    if stage == FunnelStage.CONSIDERATION:
        if any(p.search(kw_lower) for p in COMPARISON_PATTERNS):
            return StrategicAssessment(
                StrategicValue.HIGH, "Active comparison stage - users evaluating options"
            )
        return StrategicAssessment(
            StrategicValue.MEDIUM, "Commercial intent - users researching before purchase"
        )

    if keyword.search_volume >= STRATEGIC_VOLUME_THRESHOLD:
        return StrategicAssessment(
            StrategicValue.MEDIUM, "High-volume awareness opportunity for brand visibility"
        )
    return StrategicAssessment(StrategicValue.LOW, "Informational content opportunity")
