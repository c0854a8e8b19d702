"""
Brand Context

Relevance filtering and recommendation labelling against the brand profile.
"""

from .relevance import (
    INDUSTRY_TERMS,
    IRRELEVANT_PATTERNS,
    NO_MATCH,
    ContextMatch,
    filter_relevant_keywords,
    get_brand_industry_terms,
    is_generic_irrelevant_keyword,
    is_relevant_to_brand,
    match_brand_context,
)

__all__ = [
    "INDUSTRY_TERMS",
    "IRRELEVANT_PATTERNS",
    "NO_MATCH",
    "ContextMatch",
    "filter_relevant_keywords",
    "get_brand_industry_terms",
    "is_generic_irrelevant_keyword",
    "is_relevant_to_brand",
    "match_brand_context",
]
