"""
Search Share Insights - Data Models

Input records and shared output models.
"""

from .keywords import (
    FUNNEL_STAGES,
    SEARCH_INTENTS,
    BrandContext,
    BrandKeyword,
    InvalidKeywordDataError,
    RankedKeyword,
    SearchIntentInfo,
)
from .insights import ActionItem, InsightsSummary

__all__ = [
    "FUNNEL_STAGES",
    "SEARCH_INTENTS",
    "BrandContext",
    "BrandKeyword",
    "InvalidKeywordDataError",
    "RankedKeyword",
    "SearchIntentInfo",
    "ActionItem",
    "InsightsSummary",
]
