"""
Keyword Category Detection

Assigns a topical category when the upstream data source did not supply one.
Rules are evaluated in order against the lower-cased keyword; the first match
wins. More specific rules (e.g. "Winter Tires") come before general ones
("Tires").
"""

import re
from typing import Optional, Pattern, Tuple

DEFAULT_CATEGORY = "Other"


def _rule(category: str, pattern: str) -> Tuple[str, Pattern[str]]:
    return category, re.compile(pattern, re.IGNORECASE)


CATEGORY_RULES: Tuple[Tuple[str, Pattern[str]], ...] = (
    # Automotive / Tires (specific first)
    _rule("Winter Tires", r"winter.?reifen|winter.?tire|winter.?tyre|schnee.?reifen|snow.?tire"),
    _rule("Summer Tires", r"sommer.?reifen|summer.?tire|summer.?tyre"),
    _rule("All-Season Tires", r"allwetter|ganzjahres|all.?season|4.?season"),
    _rule("SUV/Truck Tires", r"suv.?reifen|suv.?tire|truck.?tire|geländewagen|offroad"),
    _rule("Performance Tires", r"sport.?reifen|performance|uhp|ultra.?high|racing"),
    _rule("Tires", r"\breifen\b|\btire[s]?\b|\btyre[s]?\b|pneu|pneumatic"),
    _rule("Wheels & Rims", r"felge|rim\b|wheel\b|alufelge|alloy"),
    _rule("Tire Services", r"reifenwechsel|tire.?change|mounting|balancing|rotation"),
    _rule("Automotive", r"\bauto\b|\bcar\b|fahrzeug|vehicle|kfz|pkw"),

    # Beauty & Personal Care
    _rule("Anti-Aging", r"anti.?age|anti.?aging|anti.?falten|wrinkle|retinol|collagen"),
    _rule("Skincare", r"skincare|skin.?care|hautpflege|face.?cream|gesichtscreme|serum|moistur|cleanser"),
    _rule("Makeup", r"makeup|make-up|lipstick|mascara|foundation|eyeshadow|lippenstift|rouge|blush|concealer"),
    _rule("Hair Care", r"hair.?care|haarpflege|shampoo|conditioner|spülung|haarkur"),
    _rule("Body Care", r"body.?care|körperpflege|body.?lotion|duschgel|shower|bodywash"),
    _rule("Natural Cosmetics", r"natural.?cosmetic|natur.?kosmetik|bio.?cosmetic|organic.?beauty"),
    _rule("Fragrances", r"perfume|parfum|fragrance|duft|eau.?de|cologne"),
    _rule("Sun Care", r"sun.?care|sonnenschutz|sunscreen|spf|uv.?schutz|sonnencreme"),

    # Sports & Athletic
    _rule("Running", r"running|laufschuh|jogging|marathon|trail.?run"),
    _rule("Football/Soccer", r"football|fußball|soccer|fussball"),
    _rule("Training", r"training|workout|fitness|gym\b|exercise"),
    _rule("Sneakers", r"sneaker|sportschuh|trainer\b|athletic.?shoe"),
    _rule("Outdoor", r"outdoor|hiking|wandern|camping|trekking"),
    _rule("Cycling", r"cycling|fahrrad|bike|bicycle|radfahren"),

    # Fashion
    _rule("Apparel", r"\bshirt\b|hoodie|jacket|jacke|pants|hose|shorts|dress|kleid"),
    _rule("Footwear", r"\bshoe[s]?\b|schuh|boots|stiefel|sandal"),
    _rule("Accessories", r"accessory|accessories|bag|tasche|wallet|belt|gürtel|hat|mütze"),

    # Technology
    _rule("Smartphones", r"smartphone|iphone|samsung.?galaxy|mobile.?phone|handy"),
    _rule("Laptops", r"laptop|notebook|macbook|computer"),
    _rule("Audio", r"headphone|kopfhörer|speaker|lautsprecher|earbuds|audio"),
    _rule("Smart Home", r"smart.?home|alexa|google.?home|iot|connected"),

    # Sustainability
    _rule("Eco-Friendly", r"eco.?friendly|öko|nachhaltig|sustainab|umweltfreundlich|green"),
    _rule("Vegan", r"\bvegan\b|tierversuchsfrei|cruelty.?free|plant.?based"),

    # Services
    _rule("Dealer Locator", r"händler|dealer|store.?locator|find.?a.?store|standort"),
    _rule("Contact", r"kontakt|contact|customer.?service|kundenservice|support"),
    _rule("Warranty", r"garantie|warranty|gewährleistung"),
)


def detect_category(keyword: str, default_category: str = DEFAULT_CATEGORY) -> str:
    """
    Detect a keyword's category from the ordered rule list.

    Args:
        keyword: Keyword text
        default_category: Returned when no rule matches

    Returns:
        Category name
    """
    kw = keyword.lower()
    for category, pattern in CATEGORY_RULES:
        if pattern.search(kw):
            return category
    return default_category


def get_category(keyword: str, provided_category: Optional[str] = None) -> str:
    """Prefer the upstream category, fall back to rule-based detection."""
    if provided_category:
        return provided_category
    return detect_category(keyword)
