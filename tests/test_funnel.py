"""
Test Suite for Funnel-Based Intent Analysis
"""

from searchshare.insights import analyze_funnel_stages, analyze_intent_opportunities
from searchshare.insights.funnel import generate_funnel_stage_insights
from searchshare.classification import FunnelStage
from searchshare.models import RankedKeyword, SearchIntentInfo


class TestFunnelStages:
    """Test analyze_funnel_stages."""

    def test_sample_data_is_all_awareness(self, sample_ranked_keywords):
        stages = analyze_funnel_stages(sample_ranked_keywords)

        assert [s.stage for s in stages] == ["awareness"]
        awareness = stages[0]
        assert awareness.keyword_count == 10
        assert awareness.total_volume == 46580
        assert awareness.stage_label == "Awareness Stage"
        assert len(awareness.top_keywords) == 5
        assert awareness.top_keywords[0].keyword == "naturkosmetik"

    def test_awareness_always_reported(self):
        stages = analyze_funnel_stages([RankedKeyword("buy winter tires", 1000, 6)])

        assert [s.stage for s in stages] == ["awareness", "decision"]
        assert stages[0].keyword_count == 0
        assert stages[0].avg_position == 0
        assert stages[0].strategic_insights == [
            "No awareness stage keywords detected. Consider creating content for this stage."
        ]

    def test_upstream_intent_used(self):
        intent = SearchIntentInfo("navigational", 0.9, "retention")
        stages = analyze_funnel_stages([RankedKeyword("naturkosmetik", 1000, 6, search_intent=intent)])

        assert [s.stage for s in stages] == ["awareness", "retention"]

    def test_opportunities(self):
        keywords = [
            RankedKeyword("buy winter tires", 1000, 6),
            RankedKeyword("buy summer tires", 1000, 2),
            RankedKeyword("buy snow chains", 50, 9),
        ]
        decision = analyze_funnel_stages(keywords)[1]

        assert [o.keyword for o in decision.opportunities] == ["buy winter tires"]
        assert decision.opportunities[0].potential_clicks == 90
        assert decision.opportunities[0].strategic_value == "High-intent keyword with purchase readiness"

    def test_stage_metrics(self):
        keywords = [RankedKeyword("buy winter tires", 1000, 1), RankedKeyword("buy tires online", 1000, 3)]
        decision = analyze_funnel_stages(keywords)[1]

        assert decision.total_volume == 2000
        assert decision.avg_position == 2
        assert decision.visible_volume == 370
        assert decision.sov == 18.5


class TestFunnelInsights:

    def test_decision_insights(self):
        keywords = [RankedKeyword("buy winter tires", 1000, 6)]
        assert generate_funnel_stage_insights(FunnelStage.DECISION, keywords) == [
            "1 high-intent transactional keywords with 1,000 monthly searches",
            "Less than 30% in top 3 positions - optimize product/service pages for conversions",
            "Ensure landing pages have clear CTAs and streamlined purchase paths",
        ]

    def test_awareness_with_context(self, tire_context):
        keywords = [RankedKeyword("winterreifen pflicht", 12000, 14)]
        insights = generate_funnel_stage_insights(FunnelStage.AWARENESS, keywords, tire_context)

        assert insights[0] == "You have 1 awareness keywords with 12,000 total monthly searches"
        assert "Average position #14.0" in insights[1]
        assert "automotive" in insights[2]


class TestIntentOpportunities:
    """Test analyze_intent_opportunities."""

    def test_filters_and_order(self):
        keywords = [
            RankedKeyword("naturkosmetik", 500, 8),
            RankedKeyword("buy winter tires", 200, 8),
            RankedKeyword("best winter tires", 900, 8),
            RankedKeyword("owned", 5000, 2),
            RankedKeyword("tiny", 50, 8),
        ]
        result = analyze_intent_opportunities(keywords)

        assert [o.keyword for o in result] == ["best winter tires", "buy winter tires", "naturkosmetik"]
        assert [o.strategic_value for o in result] == ["high", "high", "low"]
        assert result[1].funnel_stage == "decision"
        assert result[1].intent_probability == 0.5

    def test_capped_at_fifty(self):
        keywords = [RankedKeyword(f"buy item {i}", 100 + i, 8) for i in range(60)]
        assert len(analyze_intent_opportunities(keywords)) == 50

    def test_brand_relevance(self, tire_context):
        result = analyze_intent_opportunities([RankedKeyword("winterreifen kaufen", 500, 8)], tire_context)
        assert result[0].brand_relevance == 'Aligns with your SEO focus: "winterreifen"'
