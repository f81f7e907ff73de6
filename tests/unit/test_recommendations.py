"""
Unit Tests for Recommendation Rules
규칙별 발동 조건 / 순서 테스트

Run: pytest tests/unit/test_recommendations.py -v
"""

import pytest

from creatorhub.models.analytics import (
    ContentMetrics,
    ContentPerformanceSummary,
    AudienceMetrics,
    EngagementMetrics,
    TimeBasedMetric,
    GrowthMetrics,
    ProjectedMetric,
    TrendAnalysis,
    ContentTrend,
    YouTubeMetrics,
    TikTokMetrics,
)
from creatorhub.domain.models import Platform
from creatorhub.services.analytics.recommendations import (
    RecommendationInputs,
    generate_recommendations,
    RULES,
)


def _inputs(**overrides) -> RecommendationInputs:
    data = {
        'metrics': ContentMetrics(publishing_frequency=5.0, content_quality_score=70.0),
        'platform_metrics': [],
        'audience': AudienceMetrics(),
        'engagement': EngagementMetrics(),
        'growth': GrowthMetrics(projected_growth={'views': ProjectedMetric(current=1000)}),
        'trends': TrendAnalysis(),
    }
    data.update(overrides)
    return RecommendationInputs(**data)


def _ids(inputs) -> list:
    return [r.id for r in generate_recommendations(inputs)]


class TestRecommendationRules:
    """규칙 발동 테스트"""

    def test_no_rule_fires_on_healthy_inputs(self):
        assert generate_recommendations(_inputs()) == []

    def test_rule_table_order(self):
        assert [rule.__name__ for rule in RULES] == [
            'publishing_frequency_rule',
            'publishing_time_rule',
            'youtube_ctr_rule',
            'tiktok_completion_rule',
            'underperforming_content_rule',
            'rising_trend_rule',
        ]

    def test_low_frequency(self):
        recs = generate_recommendations(_inputs(metrics=ContentMetrics(publishing_frequency=2.0)))

        assert len(recs) == 1
        rec = recs[0]
        assert rec.title == "Increase Publishing Frequency"
        assert rec.category == "content"
        assert rec.priority == 9
        assert rec.expected_results[0].metric == "Views"
        assert rec.expected_results[0].expected_value == 1400.0

    def test_peak_hour(self):
        engagement = EngagementMetrics(
            engagement_rate=4.0,
            engagement_by_time=[TimeBasedMetric(hour=h, value=10 if h == 0 else 0) for h in range(24)]
        )
        recs = generate_recommendations(_inputs(engagement=engagement))

        assert [r.priority for r in recs] == [7]
        assert recs[0].category == "timing"
        assert recs[0].action_items[0] == "Schedule posts between 23:00 and 1:00"
        assert "0:00" in recs[0].description

    def test_youtube_low_ctr(self):
        youtube = YouTubeMetrics(impressions=10000, click_through_rate=3.2)
        recs = generate_recommendations(_inputs(platform_metrics=[youtube]))

        assert [r.id for r in recs] == ["youtube-thumbnails"]
        assert recs[0].priority == 8
        assert recs[0].expected_results[0].expected_value == 6.5

    def test_youtube_without_impressions_is_skipped(self):
        youtube = YouTubeMetrics(impressions=0, click_through_rate=0.0)
        assert _ids(_inputs(platform_metrics=[youtube])) == []

    def test_tiktok_low_completion(self):
        tiktok = TikTokMetrics(views=5000, completion_rate=35.0)
        recs = generate_recommendations(_inputs(platform_metrics=[tiktok]))

        assert [r.priority for r in recs] == [6]
        assert recs[0].category == "platform"

    def test_underperforming_content(self):
        weak = ContentPerformanceSummary(
            id="c-1", title="Weak post", type="vlog", platform=Platform.YOUTUBE, performance_score=12.0
        )
        metrics = ContentMetrics(publishing_frequency=5.0, content_quality_score=95.0, underperforming_content=[weak])
        recs = generate_recommendations(_inputs(metrics=metrics))

        assert [r.priority for r in recs] == [5]
        assert recs[0].expected_results[0].expected_value == 100.0

    def test_rising_trend(self):
        trends = TrendAnalysis(content_trends=[
            ContentTrend(type="short", trend="rising", momentum=40.0, recommendation="Make more shorts"),
            ContentTrend(type="vlog", trend="declining", momentum=-30.0),
        ])
        recs = generate_recommendations(_inputs(trends=trends))

        assert [r.priority for r in recs] == [4]
        assert recs[0].action_items == ["Make more shorts"]

    def test_rules_are_independent(self):
        """여러 규칙이 동시에 발동하면 테이블 순서 유지"""
        inputs = _inputs(
            metrics=ContentMetrics(publishing_frequency=1.0),
            platform_metrics=[
                YouTubeMetrics(impressions=100, click_through_rate=1.0),
                TikTokMetrics(views=10, completion_rate=10.0),
            ]
        )
        assert _ids(inputs) == ["publishing-frequency", "youtube-thumbnails", "tiktok-completion"]
