"""
Sample Data

Demo dataset for a natural cosmetics brand (lavera) competing with other
German natural cosmetics brands. Served by the API and the CLI --sample flag.
"""

from typing import Any, Dict, List

from .models.keywords import BrandKeyword, RankedKeyword


SAMPLE_BRAND_KEYWORDS: List[BrandKeyword] = [
    BrandKeyword("lavera", 12100, True),
    BrandKeyword("lavera naturkosmetik", 1300, True),
    BrandKeyword("lavera lippenstift", 480, True),
    BrandKeyword("weleda", 18100, False),
    BrandKeyword("dr hauschka", 14800, False),
    BrandKeyword("annemarie börlind", 5400, False),
    BrandKeyword("alverde", 27100, False),
]

SAMPLE_RANKED_KEYWORDS: List[RankedKeyword] = [
    RankedKeyword("naturkosmetik", 22200, 4, url="/naturkosmetik"),
    RankedKeyword("bio gesichtscreme", 3600, 2, url="/gesichtspflege"),
    RankedKeyword("vegane kosmetik", 4400, 3, url="/vegan"),
    RankedKeyword("natürliche hautpflege", 2900, 1, url="/hautpflege"),
    RankedKeyword("bio lippenstift", 1900, 5, url="/lippen"),
    RankedKeyword("naturkosmetik gesicht", 2400, 6, url="/gesicht"),
    RankedKeyword("bio shampoo", 5400, 8, url="/haarpflege"),
    RankedKeyword("naturkosmetik marken", 1600, 2, url="/marken"),
    RankedKeyword("zertifizierte naturkosmetik", 880, 1, url="/zertifiziert"),
    RankedKeyword("bio bodylotion", 1300, 7, url="/koerperpflege"),
]


def get_sample_data() -> Dict[str, List[Dict[str, Any]]]:
    """Sample dataset in wire format."""
    return {
        "brandKeywords": [k.to_dict() for k in SAMPLE_BRAND_KEYWORDS],
        "rankedKeywords": [k.to_dict() for k in SAMPLE_RANKED_KEYWORDS],
    }
