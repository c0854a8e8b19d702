"""
Test Suite for Competitor Strength Estimation
"""

import pytest

from searchshare.insights import calculate_competitor_strength
from searchshare.insights.competitors import is_branded_keyword, rotate_window
from searchshare.models import BrandKeyword, RankedKeyword


@pytest.fixture
def brand_keywords():
    return [
        BrandKeyword("lavera", 1000, True),
        BrandKeyword("weleda", 3000, False),
        BrandKeyword("weleda skin food", 1000, False),
        BrandKeyword("alverde", 5000, False),
    ]


@pytest.fixture
def ranked_keywords():
    return [
        RankedKeyword("weleda skin food dupe", 4000, 2),
        RankedKeyword("lavera creme", 2000, 1),
        RankedKeyword("bio creme", 1000, 2),
        RankedKeyword("naturkosmetik", 2000, 15),
        RankedKeyword("vegane kosmetik", 500, 8),
    ]


class TestBrandedKeywords:

    def test_substring_and_word(self):
        assert is_branded_keyword("weleda skin food", ["weleda"])
        assert is_branded_keyword("Lavera Creme", ["lavera"])
        assert not is_branded_keyword("bio creme", ["weleda", "lavera"])


class TestRotateWindow:

    def test_wraps_to_start(self):
        pool = [RankedKeyword(f"k{i}", 100, 1) for i in range(4)]
        assert [k.keyword for k in rotate_window(pool, 2)] == ["k2", "k3", "k0"]

    def test_offset_beyond_pool(self):
        pool = [RankedKeyword("only", 100, 1)]
        assert [k.keyword for k in rotate_window(pool, 3)] == ["only"]

    def test_empty_pool(self):
        assert rotate_window([], 1) == []


class TestCompetitorStrength:
    """Test calculate_competitor_strength."""

    def test_competitors_sorted_by_estimated_sov(self, brand_keywords, ranked_keywords):
        result = calculate_competitor_strength(brand_keywords, ranked_keywords)

        assert [c.competitor for c in result] == ["Alverde", "Weleda"]
        assert [c.estimated_sov for c in result] == [pytest.approx(50.0), pytest.approx(40.0)]
        assert [c.competitor_index for c in result] == [2, 1]

    def test_generic_keywords_only(self, brand_keywords, ranked_keywords):
        competitor = calculate_competitor_strength(brand_keywords, ranked_keywords)[0]

        assert competitor.keywords_analyzed == 3
        assert competitor.head_to_head.you_win == 1
        assert competitor.head_to_head.they_win == 1
        assert competitor.head_to_head.ties == 1

    def test_dominant_categories(self, brand_keywords, ranked_keywords):
        competitor = calculate_competitor_strength(brand_keywords, ranked_keywords)[0]
        assert competitor.dominant_categories == ["Natural Cosmetics"]

    def test_keyword_battles_are_estimates(self, brand_keywords, ranked_keywords):
        alverde = calculate_competitor_strength(brand_keywords, ranked_keywords)[0]

        win = alverde.top_winning_keywords[0]
        assert win.keyword == "bio creme"
        assert win.winner == "you"
        assert win.estimated_competitor_position == 20
        assert win.visibility_difference == 148
        assert win.is_estimate

        lose = alverde.top_losing_keywords[0]
        assert lose.keyword == "naturkosmetik"
        assert lose.winner == "competitor"
        assert lose.estimated_competitor_position == 7
        assert lose.visibility_difference == 36

        assert alverde.is_estimate
        assert alverde.to_dict()["isEstimate"] is True

    def test_no_competitors(self, ranked_keywords):
        assert calculate_competitor_strength([BrandKeyword("lavera", 1000, True)], ranked_keywords) == []

    def test_no_brand_volume(self, ranked_keywords):
        result = calculate_competitor_strength([BrandKeyword("weleda", 0, False)], ranked_keywords)
        assert result[0].estimated_sov == 0

    def test_sample_data(self, sample_brand_keywords, sample_ranked_keywords):
        result = calculate_competitor_strength(sample_brand_keywords, sample_ranked_keywords)

        assert [c.competitor for c in result] == ["Alverde", "Weleda", "Dr", "Annemarie"]
        assert result[0].estimated_sov == pytest.approx(34.2)
        assert result[0].head_to_head.you_win == 7
        assert result[0].head_to_head.they_win == 0
