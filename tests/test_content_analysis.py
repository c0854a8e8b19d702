"""
Test Suite for Category SOV and Content Gap Analysis
"""

import pytest

from searchshare.insights import analyze_content_gaps, calculate_category_sov, determine_category_status
from searchshare.insights.content_gaps import get_suggested_content_types
from searchshare.models import RankedKeyword


# ============================================================================
# Category SOV
# ============================================================================

class TestCategoryStatus:

    @pytest.mark.parametrize("sov,avg_position,expected", [
        (25, 5, "leading"),
        (30, 6, "competitive"),
        (5, 8, "competitive"),
        (8, 20, "trailing"),
        (5, 12, "trailing"),
        (5, 13, "weak"),
    ])
    def test_thresholds(self, sov, avg_position, expected):
        assert determine_category_status(sov, avg_position) == expected


class TestCategorySOV:
    """Test calculate_category_sov."""

    def test_sample_data(self, sample_ranked_keywords):
        categories = calculate_category_sov(sample_ranked_keywords)
        natural = categories[0]

        assert natural.category == "Natural Cosmetics"
        assert natural.keyword_count == 4
        assert natural.total_category_volume == 27080
        assert natural.avg_position == pytest.approx(3.3)
        assert natural.your_sov == pytest.approx(7.0)
        assert natural.status == "competitive"
        assert natural.top_keywords[0] == "naturkosmetik"

    def test_sorted_by_volume(self, sample_ranked_keywords):
        volumes = [c.total_category_volume for c in calculate_category_sov(sample_ranked_keywords)]
        assert volumes == sorted(volumes, reverse=True)

    def test_leading_category(self):
        categories = calculate_category_sov([RankedKeyword("winterreifen", 1000, 1)])
        assert categories[0].status == "leading"
        assert categories[0].is_strong

    def test_empty_input(self):
        assert calculate_category_sov([]) == []


# ============================================================================
# Content Gaps
# ============================================================================

class TestContentGaps:
    """Test analyze_content_gaps."""

    def test_weak_category(self, winter_tire_keywords):
        gaps = analyze_content_gaps(winter_tire_keywords)

        assert len(gaps) == 1
        gap = gaps[0]
        assert gap.category == "Winter Tires"
        assert gap.your_coverage == 3
        assert gap.suggested_new_content == 1
        assert gap.avg_competitor_coverage == 4
        assert gap.total_volume == 7300
        assert gap.priority == "low"
        assert gap.estimated_traffic_gain == 215
        assert gap.top_missing_keywords == [
            "winterreifen 205 55 r16", "winterreifen test", "winterreifen günstig",
        ]
        assert gap.suggested_content_types[0] == "Tire size guide"

    def test_reasoning(self, winter_tire_keywords):
        gap = analyze_content_gaps(winter_tire_keywords)[0]
        assert gap.reasoning == (
            "Your average position is #12.5, which means most traffic goes to competitors. "
            '75% of your "Winter Tires" keywords rank outside the top 10. '
            "Creating targeted content can help you capture more of this Winter Tires traffic."
        )

    def test_other_category_skipped(self):
        keywords = [RankedKeyword(f"quarterly report {i}", 2000, 15, url=f"/r{i}") for i in range(5)]
        assert analyze_content_gaps(keywords) == []

    def test_small_category_skipped(self, winter_tire_keywords):
        assert analyze_content_gaps(winter_tire_keywords[:2]) == []

    def test_gap_without_high_volume_keywords(self):
        """A gap with nothing worth a new page is not reported."""
        keywords = [
            RankedKeyword(f"winterreifen {i}", 100, 15, url=f"/w{i}", category="Winter Tires")
            for i in range(3)
        ]
        assert analyze_content_gaps(keywords) == []

    def test_healthy_category_has_no_gap(self, sample_ranked_keywords):
        assert analyze_content_gaps(sample_ranked_keywords) == []

    def test_priority_order(self):
        high = [
            RankedKeyword(f"sommerreifen {i}", 20000, 15, url="/s", category="Summer Tires")
            for i in range(3)
        ]
        medium = [
            RankedKeyword(f"allwetterreifen {i}", 5000, 15, url="/a", category="All-Season Tires")
            for i in range(3)
        ]
        gaps = analyze_content_gaps(medium + high)

        assert [(g.category, g.priority) for g in gaps] == [
            ("Summer Tires", "high"),
            ("All-Season Tires", "medium"),
        ]

    def test_new_content_capped(self):
        keywords = [
            RankedKeyword(f"winterreifen {i}", 1000, 15, url=f"/w{i}", category="Winter Tires")
            for i in range(40)
        ]
        gap = analyze_content_gaps(keywords)[0]

        assert gap.suggested_new_content == 10
        assert len(gap.top_missing_keywords) == 5
        assert len(gap.existing_urls) == 5
        assert len(gap.weak_keywords) == 5


class TestContentTypes:

    def test_lookup(self):
        assert get_suggested_content_types("Winter Tires")[0] == "Tire size guide"
        assert get_suggested_content_types("Skincare")[0] == "How-to tutorial"
        assert get_suggested_content_types("Laptops")[0] == "Buying guide"
        assert get_suggested_content_types("Vegan")[0] == "Comprehensive guide"
