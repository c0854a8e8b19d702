"""Keyword classification: topical category and search intent."""

from .categories import CATEGORY_RULES, DEFAULT_CATEGORY, detect_category, get_category
from .intent import (
    FunnelStage,
    SearchIntent,
    StrategicAssessment,
    StrategicValue,
    assess_strategic_value,
    classify_intent,
    classify_search_intent,
    get_funnel_stage,
    resolve_intent,
    with_search_intent,
)

__all__ = [
    "CATEGORY_RULES",
    "DEFAULT_CATEGORY",
    "detect_category",
    "get_category",
    # Intent
    "FunnelStage",
    "SearchIntent",
    "StrategicAssessment",
    "StrategicValue",
    "assess_strategic_value",
    "classify_intent",
    "classify_search_intent",
    "get_funnel_stage",
    "resolve_intent",
    "with_search_intent",
]
