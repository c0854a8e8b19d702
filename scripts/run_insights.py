#!/usr/bin/env python3
"""
Insights Runner

Generates actionable SEO insights from a keyword export and prints them as JSON.

Input file format (camelCase, as delivered by the keyword collectors):
    {
        "rankedKeywords": [{"keyword": "...", "searchVolume": 1000, "position": 4, "url": "/page"}],
        "brandKeywords": [{"keyword": "brand", "searchVolume": 5000, "isOwnBrand": true}],
        "brandContext": {"industry": "beauty", "productCategories": ["skincare"]}
    }

Usage:
    # Run on the built-in sample data:
    python scripts/run_insights.py --sample

    # Run on an export and write the result to a file:
    python scripts/run_insights.py data/keywords.json --output insights.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from searchshare.insights import generate_insights
from searchshare.models import BrandContext, BrandKeyword, InvalidKeywordDataError, RankedKeyword
from searchshare.sample_data import SAMPLE_BRAND_KEYWORDS, SAMPLE_RANKED_KEYWORDS
from searchshare.utils.config import get_settings

logger = logging.getLogger(__name__)


def load_input(path: Path):
    """Parse an input file into engine records."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise InvalidKeywordDataError(f"Top level must be a JSON object, got {type(data).__name__}")

    ranked_keywords = [RankedKeyword.from_dict(k) for k in data.get("rankedKeywords", [])]
    brand_keywords = [BrandKeyword.from_dict(k) for k in data.get("brandKeywords", [])]
    context_data = data.get("brandContext")
    brand_context = BrandContext.from_dict(context_data) if context_data else None

    return ranked_keywords, brand_keywords, brand_context


def run(args) -> int:
    settings = get_settings()

    if args.sample:
        ranked_keywords, brand_keywords, brand_context = SAMPLE_RANKED_KEYWORDS, SAMPLE_BRAND_KEYWORDS, None
        logger.info("Using built-in sample data")
    else:
        try:
            ranked_keywords, brand_keywords, brand_context = load_input(args.input)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read {args.input}: {e}")
            return 1
        except InvalidKeywordDataError as e:
            logger.error(f"Invalid keyword data in {args.input}: {e}")
            return 1

    insights = generate_insights(
        ranked_keywords,
        brand_keywords,
        brand_context,
        quick_win_min_volume=settings.QUICK_WIN_MIN_VOLUME,
        hidden_gem_min_volume=settings.HIDDEN_GEM_MIN_VOLUME,
        hidden_gem_max_difficulty=settings.HIDDEN_GEM_MAX_DIFFICULTY,
    )

    output = json.dumps(insights.to_dict(), indent=2, ensure_ascii=False)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        logger.info(f"Insights saved to: {args.output}")
    else:
        print(output)

    return 0


def main():
    """Main entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Generate actionable SEO insights from ranked and brand keyword data"
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="JSON file with rankedKeywords, brandKeywords and optional brandContext"
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Use the built-in sample data instead of an input file"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write JSON to this file instead of stdout"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: LOG_LEVEL setting)"
    )

    args = parser.parse_args()

    if not args.sample and args.input is None:
        parser.error("an input file is required unless --sample is given")

    # Logs go to stderr so stdout stays valid JSON
    logging.basicConfig(
        level=args.log_level or get_settings().LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    sys.exit(run(args))


if __name__ == "__main__":
    main()
