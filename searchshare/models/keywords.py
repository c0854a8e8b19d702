"""
Keyword Input Records

Records delivered by the upstream search-data collectors:
- RankedKeyword: a keyword the brand currently ranks for
- BrandKeyword: a brand-name search term (own brand or competitor)
- BrandContext: optional profile of the brand's business

Records are frozen. Constructors validate the engine contract and raise
InvalidKeywordDataError before any derived metric is computed.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)


SEARCH_INTENTS = ("informational", "navigational", "commercial", "transactional")
FUNNEL_STAGES = ("awareness", "consideration", "decision", "retention")


class InvalidKeywordDataError(ValueError):
    """Raised when a caller passes records that violate the engine contract."""
    pass


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key (wire camelCase or snake_case)."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_keyword(keyword: Any, record: str) -> None:
    if not isinstance(keyword, str) or not keyword.strip():
        raise InvalidKeywordDataError(f"{record}: keyword must be a non-empty string, got {keyword!r}")


def _require_volume(volume: Any, keyword: str, record: str) -> None:
    if not _is_int(volume) or volume < 0:
        raise InvalidKeywordDataError(
            f"{record} '{keyword}': search volume must be a non-negative integer, got {volume!r}"
        )


def _string_tuple(values: Optional[Iterable[Any]], name: str) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        raise InvalidKeywordDataError(f"BrandContext.{name} must be a list of strings, got a string")
    result = tuple(values)
    for value in result:
        if not isinstance(value, str):
            raise InvalidKeywordDataError(f"BrandContext.{name} must contain only strings, got {value!r}")
    return result


@dataclass(frozen=True)
class SearchIntentInfo:
    """Search intent classification attached to a ranked keyword."""
    main_intent: str
    probability: float
    funnel_stage: str

    def __post_init__(self):
        if self.main_intent not in SEARCH_INTENTS:
            raise InvalidKeywordDataError(f"Unknown search intent: {self.main_intent!r}")
        if self.funnel_stage not in FUNNEL_STAGES:
            raise InvalidKeywordDataError(f"Unknown funnel stage: {self.funnel_stage!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchIntentInfo":
        return cls(
            main_intent=_pick(data, "mainIntent", "main_intent"),
            probability=_pick(data, "probability", default=0.5),
            funnel_stage=_pick(data, "funnelStage", "funnel_stage"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mainIntent": self.main_intent,
            "probability": self.probability,
            "funnelStage": self.funnel_stage,
        }


@dataclass(frozen=True)
class RankedKeyword:
    """A keyword the brand ranks for, as delivered by the ranked-keywords collector."""
    keyword: str
    search_volume: int
    position: int
    url: Optional[str] = None
    category: Optional[str] = None
    keyword_difficulty: Optional[int] = None
    trend: Optional[float] = None  # YoY volume change, percent
    search_intent: Optional[SearchIntentInfo] = None

    def __post_init__(self):
        _require_keyword(self.keyword, "RankedKeyword")
        _require_volume(self.search_volume, self.keyword, "RankedKeyword")
        if not _is_int(self.position) or not 1 <= self.position <= 100:
            raise InvalidKeywordDataError(
                f"RankedKeyword '{self.keyword}': position must be an integer in 1-100, got {self.position!r}"
            )
        if self.keyword_difficulty is not None:
            if not isinstance(self.keyword_difficulty, (int, float)) or isinstance(self.keyword_difficulty, bool) \
                    or not 0 <= self.keyword_difficulty <= 100:
                raise InvalidKeywordDataError(
                    f"RankedKeyword '{self.keyword}': keyword difficulty must be in 0-100, "
                    f"got {self.keyword_difficulty!r}"
                )
        for name in ("url", "category"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise InvalidKeywordDataError(
                    f"RankedKeyword '{self.keyword}': {name} must be a string, got {value!r}"
                )
        if self.trend is not None and (not isinstance(self.trend, (int, float)) or isinstance(self.trend, bool)):
            raise InvalidKeywordDataError(
                f"RankedKeyword '{self.keyword}': trend must be a number, got {self.trend!r}"
            )
        if self.search_intent is not None and not isinstance(self.search_intent, SearchIntentInfo):
            raise InvalidKeywordDataError(
                f"RankedKeyword '{self.keyword}': search intent must be an object, got {self.search_intent!r}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RankedKeyword":
        intent = _pick(data, "searchIntent", "search_intent")
        if isinstance(intent, dict):
            intent = SearchIntentInfo.from_dict(intent)
        return cls(
            keyword=_pick(data, "keyword"),
            search_volume=_pick(data, "searchVolume", "search_volume"),
            position=_pick(data, "position"),
            url=_pick(data, "url"),
            category=_pick(data, "category"),
            keyword_difficulty=_pick(data, "keywordDifficulty", "keyword_difficulty"),
            trend=_pick(data, "trend"),
            search_intent=intent,
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "keyword": self.keyword,
            "searchVolume": self.search_volume,
            "position": self.position,
        }
        if self.url is not None:
            result["url"] = self.url
        if self.category is not None:
            result["category"] = self.category
        if self.keyword_difficulty is not None:
            result["keywordDifficulty"] = self.keyword_difficulty
        if self.trend is not None:
            result["trend"] = self.trend
        if self.search_intent is not None:
            result["searchIntent"] = self.search_intent.to_dict()
        return result


@dataclass(frozen=True)
class BrandKeyword:
    """A brand-name search term. Competitor identity is the first word, lower-cased."""
    keyword: str
    search_volume: int
    is_own_brand: bool

    def __post_init__(self):
        _require_keyword(self.keyword, "BrandKeyword")
        _require_volume(self.search_volume, self.keyword, "BrandKeyword")
        if not isinstance(self.is_own_brand, bool):
            raise InvalidKeywordDataError(
                f"BrandKeyword '{self.keyword}': is_own_brand must be a boolean, got {self.is_own_brand!r}"
            )

    @property
    def brand_name(self) -> str:
        return self.keyword.split()[0].lower()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BrandKeyword":
        return cls(
            keyword=_pick(data, "keyword"),
            search_volume=_pick(data, "searchVolume", "search_volume"),
            is_own_brand=_pick(data, "isOwnBrand", "is_own_brand"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "searchVolume": self.search_volume,
            "isOwnBrand": self.is_own_brand,
        }


@dataclass(frozen=True)
class BrandContext:
    """
    Business profile used for relevance filtering and "recommended" labels.

    Never required for the numeric calculations.
    """
    brand_name: str = ""
    industry: str = ""
    vertical: str = ""
    product_categories: Tuple[str, ...] = field(default_factory=tuple)
    key_strengths: Tuple[str, ...] = field(default_factory=tuple)
    seo_focus: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        for name in ("brand_name", "industry", "vertical"):
            value = getattr(self, name)
            if value is None:
                object.__setattr__(self, name, "")
            elif not isinstance(value, str):
                raise InvalidKeywordDataError(f"BrandContext.{name} must be a string, got {value!r}")
        for name in ("product_categories", "key_strengths", "seo_focus"):
            object.__setattr__(self, name, _string_tuple(getattr(self, name), name))

    @property
    def relevance_terms(self) -> Tuple[str, ...]:
        """Lower-cased focus terms, in the order they are checked."""
        terms = (
            *self.seo_focus,
            *self.product_categories,
            *self.key_strengths,
            self.industry,
            self.vertical,
        )
        return tuple(term.lower() for term in terms if term)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BrandContext":
        return cls(
            brand_name=_pick(data, "brandName", "brand_name", default=""),
            industry=_pick(data, "industry", default=""),
            vertical=_pick(data, "vertical", default=""),
            product_categories=_pick(data, "productCategories", "product_categories"),
            key_strengths=_pick(data, "keyStrengths", "key_strengths"),
            seo_focus=_pick(data, "seoFocus", "seo_focus"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "brandName": self.brand_name,
            "industry": self.industry,
            "vertical": self.vertical,
            "productCategories": list(self.product_categories),
            "keyStrengths": list(self.key_strengths),
            "seoFocus": list(self.seo_focus),
        }
