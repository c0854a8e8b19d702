"""
Test Suite for Quick Win Detection
"""

from searchshare.insights import calculate_quick_wins
from searchshare.insights.quick_wins import calculate_effort, calculate_target_position
from searchshare.models import RankedKeyword


class TestTargetPosition:

    def test_ladder(self):
        assert calculate_target_position(3) == 1
        assert calculate_target_position(4) == 3
        assert calculate_target_position(5) == 3
        assert calculate_target_position(10) == 5
        assert calculate_target_position(15) == 8
        assert calculate_target_position(20) == 10

    def test_effort(self):
        assert calculate_effort(4, 3) == "low"
        assert calculate_effort(12, 8) == "medium"
        assert calculate_effort(20, 10) == "high"


class TestQuickWins:
    """Test calculate_quick_wins."""

    def test_basic_opportunity(self):
        result = calculate_quick_wins([RankedKeyword("winter tires", 10000, 4, url="/winter")])

        assert len(result) == 1
        qw = result[0]
        assert qw.target_position == 3
        assert qw.current_clicks == 600
        assert qw.potential_clicks == 900
        assert qw.click_uplift == 300
        assert qw.uplift_percentage == 50
        assert qw.effort == "low"
        assert qw.url == "/winter"

    def test_position_bounds(self):
        """Only positions 4-20 qualify."""
        keywords = [
            RankedKeyword("top three", 10000, 3),
            RankedKeyword("page three", 10000, 21),
            RankedKeyword("edge low", 10000, 4),
            RankedKeyword("edge high", 10000, 20),
        ]
        result = calculate_quick_wins(keywords)

        assert {qw.keyword for qw in result} == {"edge low", "edge high"}
        assert all(4 <= qw.current_position <= 20 for qw in result)

    def test_min_volume(self):
        assert calculate_quick_wins([RankedKeyword("niche", 99, 8)]) == []
        assert calculate_quick_wins([RankedKeyword("niche", 5000, 8)], min_volume=6000) == []

    def test_min_uplift(self):
        """Uplift of exactly 50 clicks qualifies, less does not."""
        assert len(calculate_quick_wins([RankedKeyword("page two", 5000, 12)])) == 1
        assert calculate_quick_wins([RankedKeyword("small", 1000, 4)]) == []

    def test_uplift_never_below_threshold(self, sample_ranked_keywords):
        assert all(qw.click_uplift >= 50 for qw in calculate_quick_wins(sample_ranked_keywords))

    def test_sorted_by_uplift(self):
        keywords = [
            RankedKeyword("page two", 5000, 12),
            RankedKeyword("big", 10000, 4),
            RankedKeyword("deep", 10000, 20),
        ]
        result = calculate_quick_wins(keywords)
        assert [qw.keyword for qw in result] == ["big", "deep", "page two"]

    def test_reasoning(self):
        qw = calculate_quick_wins([RankedKeyword("winter tires", 10000, 4)])[0]
        assert qw.reasoning == (
            "Already on page 1 (#4) - small optimization could push to top 3. "
            "High-volume keyword (10,000 monthly searches). "
            "Moving to position #3 could yield +300 clicks (50% increase)."
        )

    def test_category_detected(self):
        qw = calculate_quick_wins([RankedKeyword("winterreifen test", 10000, 4)])[0]
        assert qw.category == "Winter Tires"

    def test_recommended_with_context(self, tire_context):
        qw = calculate_quick_wins([RankedKeyword("winterreifen test", 10000, 4)], brand_context=tire_context)[0]
        assert qw.is_recommended
        assert qw.recommended_reason == 'Aligns with your SEO focus: "winterreifen"'

    def test_sample_data(self, sample_ranked_keywords):
        result = calculate_quick_wins(sample_ranked_keywords)

        assert [qw.keyword for qw in result] == ["naturkosmetik", "bio shampoo", "bio lippenstift"]
        assert [qw.click_uplift for qw in result] == [666, 108, 95]

    def test_empty_input(self):
        assert calculate_quick_wins([]) == []
