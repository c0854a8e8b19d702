"""
Brand Relevance Filtering

Shared keyword relevance logic applied once, before any analysis runs, so that
every downstream statistic is computed on the same relevant subset:
- Generic off-topic queries (jobs, logins, news, downloads) are always excluded
- Remaining keywords must touch the brand's focus terms, product categories,
  strengths, industry or vertical, or the industry's expanded vocabulary

Without a BrandContext the filter is a no-op.

Also provides match_brand_context(), used to label recommendations for the brand.
"""

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Pattern, Tuple

from ..classification.categories import get_category
from ..models.keywords import BrandContext, RankedKeyword

logger = logging.getLogger(__name__)


# =============================================================================
# GENERIC OFF-TOPIC PATTERNS
# =============================================================================

IRRELEVANT_PATTERNS: Tuple[Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\b(generation [xyz]|gen[- ]?[xyz]|millennial|boomer)\b",
        r"\b(news|weather|stocks?|crypto|bitcoin)\b",
        r"\b(how to|what is|who is|when is|why is)\b",
        r"\b(free download|torrent|crack|hack)\b",
        r"\b(job[s]?|career[s]?|hiring|salary|interview)\b",
        r"\b(login|sign in|password|account)\b",
    )
)


# =============================================================================
# INDUSTRY VOCABULARY
# =============================================================================

INDUSTRY_TERMS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "automotive": (
        "tire", "tyre", "reifen", "wheel", "car", "vehicle", "auto", "driving", "road", "safety",
        "winter", "summer", "all-season", "suv", "truck", "performance", "brake", "suspension",
    ),
    "tires": (
        "tire", "tyre", "reifen", "wheel", "rim", "winter", "summer", "all-season", "snow",
        "performance", "size", "pressure", "rotation", "alignment", "balancing",
    ),
    "beauty": (
        "skincare", "skin", "face", "cream", "serum", "anti-aging", "moisturizer", "cleanser",
        "makeup", "cosmetic", "beauty", "care", "treatment", "routine",
    ),
    "cosmetics": (
        "makeup", "lipstick", "foundation", "mascara", "eyeshadow", "blush", "concealer",
        "powder", "primer", "beauty", "cosmetic",
    ),
    "sports": (
        "running", "training", "fitness", "workout", "gym", "sport", "athletic", "exercise",
        "performance", "gear", "equipment", "shoe", "apparel",
    ),
    "footwear": (
        "shoe", "sneaker", "boot", "sandal", "footwear", "running", "walking", "hiking",
        "casual", "sport",
    ),
    "technology": (
        "tech", "software", "app", "device", "digital", "smart", "phone", "computer",
        "laptop", "tablet",
    ),
    "finance": (
        "bank", "loan", "credit", "investment", "savings", "mortgage", "insurance",
        "financial", "money", "account",
    ),
    "retail": (
        "shop", "store", "buy", "price", "sale", "discount", "deal", "product", "order", "delivery",
    ),
    "fashion": (
        "clothing", "apparel", "wear", "style", "fashion", "outfit", "dress", "shirt",
        "pants", "jacket",
    ),
})


def is_generic_irrelevant_keyword(keyword: str) -> bool:
    """Check if a keyword is clearly off-topic for any brand."""
    return any(pattern.search(keyword) for pattern in IRRELEVANT_PATTERNS)


def get_brand_industry_terms(context: BrandContext) -> List[str]:
    """
    Expand the brand's industry, vertical and product categories into
    industry vocabulary.

    Args:
        context: Brand profile

    Returns:
        De-duplicated list of terms, in table order
    """
    # Empty labels are skipped: "" is a substring of every table key
    labels = [label.lower() for label in (context.industry, context.vertical) if label]
    terms: List[str] = []

    for key, values in INDUSTRY_TERMS.items():
        if any(key in label or label in key for label in labels):
            terms.extend(values)

    for category in context.product_categories:
        category_lower = category.lower()
        if not category_lower:
            continue
        for key, values in INDUSTRY_TERMS.items():
            if key in category_lower or category_lower in key:
                terms.extend(values)

    return list(dict.fromkeys(terms))


def is_relevant_to_brand(
    keyword: str,
    category: Optional[str],
    context: Optional[BrandContext],
) -> bool:
    """
    Check if a keyword is relevant to the brand's business.

    Args:
        keyword: Keyword text
        category: Provided or detected category
        context: Brand profile (None = everything is relevant)

    Returns:
        True if the keyword should be kept
    """
    if context is None:
        return True

    if is_generic_irrelevant_keyword(keyword):
        return False

    relevance_terms = context.relevance_terms
    if not relevance_terms:
        return True

    kw_lower = keyword.lower()
    cat_lower = (category or "").lower()
    first_word = kw_lower.split()[0]

    for term in relevance_terms:
        if term in kw_lower or term in cat_lower or first_word in term:
            return True

    for term in get_brand_industry_terms(context):
        if term in kw_lower or term in cat_lower:
            return True

    return False


def filter_relevant_keywords(
    keywords: Iterable[RankedKeyword],
    brand_context: Optional[BrandContext] = None,
) -> List[RankedKeyword]:
    """
    Keep only keywords relevant to the brand.

    Returns a new list; the input is not modified.
    """
    keywords = list(keywords)
    if brand_context is None:
        return keywords

    relevant = [
        kw for kw in keywords
        if is_relevant_to_brand(kw.keyword, get_category(kw.keyword, kw.category), brand_context)
    ]

    excluded = len(keywords) - len(relevant)
    if excluded:
        logger.info(f"Relevance filter excluded {excluded} of {len(keywords)} keywords")
    return relevant


# =============================================================================
# RECOMMENDATION LABELLING
# =============================================================================

@dataclass(frozen=True)
class ContextMatch:
    """Whether an item fits the brand profile, and why."""
    matches: bool
    reason: Optional[str] = None


NO_MATCH = ContextMatch(matches=False)


def match_brand_context(
    keyword: str,
    category: Optional[str],
    context: Optional[BrandContext],
) -> ContextMatch:
    """
    Check if a keyword or category matches the brand profile.

    Checked in order: SEO focus, product categories, key strengths (keyword
    only), industry, vertical. Separate from relevance filtering.
    """
    if context is None:
        return NO_MATCH

    kw_lower = keyword.lower()
    cat_lower = (category or "").lower()

    for focus in context.seo_focus:
        focus_lower = focus.lower()
        if focus_lower and (focus_lower in kw_lower or focus_lower in cat_lower):
            return ContextMatch(True, f'Aligns with your SEO focus: "{focus}"')

    for product_category in context.product_categories:
        product_lower = product_category.lower()
        if product_lower and (product_lower in kw_lower or product_lower in cat_lower):
            return ContextMatch(True, f'Matches your product category: "{product_category}"')

    for strength in context.key_strengths:
        strength_lower = strength.lower()
        if strength_lower and strength_lower in kw_lower:
            return ContextMatch(True, f'Leverages your strength: "{strength}"')

    if context.industry:
        industry_lower = context.industry.lower()
        if industry_lower in cat_lower or industry_lower in kw_lower:
            return ContextMatch(True, f"Core to your {context.industry} industry")

    if context.vertical:
        vertical_lower = context.vertical.lower()
        if vertical_lower in cat_lower or vertical_lower in kw_lower:
            return ContextMatch(True, f"Fits your {context.vertical} vertical")

    return NO_MATCH
