"""
Test Suite for Hidden Gem Detection
"""

from searchshare.insights import calculate_hidden_gems
from searchshare.insights.hidden_gems import determine_opportunity_type, infer_keyword_difficulty
from searchshare.models import RankedKeyword


class TestDifficultyInference:

    def test_inferred_from_position(self):
        assert infer_keyword_difficulty(RankedKeyword("a", 100, 5)) == 25
        assert infer_keyword_difficulty(RankedKeyword("a", 100, 10)) == 30
        assert infer_keyword_difficulty(RankedKeyword("a", 100, 15)) == 35
        assert infer_keyword_difficulty(RankedKeyword("a", 100, 16)) == 40

    def test_real_difficulty_kept(self):
        assert infer_keyword_difficulty(RankedKeyword("a", 100, 16, keyword_difficulty=12)) == 12

    def test_opportunity_type(self):
        assert determine_opportunity_type(8, 25) == "rising-trend"
        assert determine_opportunity_type(60, None) == "first-mover"
        assert determine_opportunity_type(8, 5) == "easy-win"


class TestHiddenGems:
    """Test calculate_hidden_gems."""

    def test_inferred_difficulty_gem(self):
        gems = calculate_hidden_gems([RankedKeyword("bio bodylotion", 1000, 8)])

        assert len(gems) == 1
        gem = gems[0]
        assert gem.keyword_difficulty == 30
        assert gem.difficulty_estimated is True
        assert gem.opportunity == "easy-win"
        assert gem.potential_clicks == 90
        assert gem.reasoning == "Currently #8, easy to push to top 3 (Est. KD: 30)"

    def test_top_three_excluded(self):
        assert calculate_hidden_gems([RankedKeyword("owned", 5000, 3)]) == []

    def test_low_volume_excluded(self):
        assert calculate_hidden_gems([RankedKeyword("niche", 199, 8)]) == []

    def test_high_difficulty_excluded(self):
        assert calculate_hidden_gems([RankedKeyword("hard", 5000, 8, keyword_difficulty=55)]) == []

    def test_mixed_difficulty_data(self):
        """When some records carry difficulty, records without it are skipped."""
        keywords = [
            RankedKeyword("with kd", 500, 8, keyword_difficulty=10),
            RankedKeyword("without kd", 5000, 8),
        ]
        gems = calculate_hidden_gems(keywords)

        assert [g.keyword for g in gems] == ["with kd"]
        assert gems[0].difficulty_estimated is False
        assert "(KD: 10)" in gems[0].reasoning
        assert gems[0].potential_clicks == 140

    def test_rising_trend(self):
        gem = calculate_hidden_gems([RankedKeyword("trend", 1000, 8, keyword_difficulty=20, trend=35)])[0]
        assert gem.opportunity == "rising-trend"
        assert gem.reasoning.startswith("Trending keyword (+35% YoY)")

    def test_first_mover(self):
        gem = calculate_hidden_gems([RankedKeyword("fresh", 1000, 60, keyword_difficulty=20)])[0]
        assert gem.opportunity == "first-mover"

    def test_capped_at_twenty(self):
        keywords = [RankedKeyword(f"keyword {i}", 300 + i, 10) for i in range(30)]
        gems = calculate_hidden_gems(keywords)

        assert len(gems) == 20
        assert all(g.position > 3 for g in gems)

    def test_sorted_by_value_ratio(self):
        keywords = [
            RankedKeyword("small", 400, 8, keyword_difficulty=10),
            RankedKeyword("big", 4000, 8, keyword_difficulty=30),
        ]
        assert [g.keyword for g in calculate_hidden_gems(keywords)] == ["big", "small"]

    def test_brand_match_first(self, tire_context):
        keywords = [
            RankedKeyword("felgen", 5000, 8, keyword_difficulty=10),
            RankedKeyword("winterreifen 16 zoll", 400, 8, keyword_difficulty=30),
        ]
        gems = calculate_hidden_gems(keywords, tire_context)

        assert gems[0].keyword == "winterreifen 16 zoll"
        assert gems[0].is_recommended
        assert gems[0].reasoning.endswith('. Aligns with your SEO focus: "winterreifen"')

    def test_custom_thresholds(self):
        keywords = [RankedKeyword("mid", 300, 8, keyword_difficulty=35)]
        assert calculate_hidden_gems(keywords, max_difficulty=30) == []
        assert calculate_hidden_gems(keywords, min_volume=500) == []
        assert len(calculate_hidden_gems(keywords)) == 1
