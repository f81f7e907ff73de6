"""
Unit Tests for Metrics Aggregator
스냅샷 계산 흐름 / 카테고리 지표 테스트

Run: pytest tests/unit/test_metrics_aggregator.py -v
"""

import pytest
from datetime import datetime, date, timedelta, timezone
from unittest.mock import MagicMock

from creatorhub.core.exceptions import NotFoundError, ValidationError, StorageError
from creatorhub.domain.models import Platform, SubscriptionTier, ContentStatus
from creatorhub.models.analytics import AnalyticsPeriod, AnalyticsFilters, YouTubeMetrics, TikTokMetrics
from creatorhub.services.analytics import MetricsAggregator
from creatorhub.services.analytics.metrics import (
    build_content_metrics,
    build_engagement_metrics,
    build_growth_metrics,
    analyze_trends,
    next_milestone,
    momentum,
)


@pytest.fixture
def period():
    return AnalyticsPeriod(start=datetime(2024, 3, 1), end=datetime(2024, 3, 14, 23, 59, 59))


@pytest.fixture
def aggregator(memory_store):
    return MetricsAggregator(memory_store)


class TestTrackEvent:
    """track_event() 테스트"""

    def test_events_are_appended(self, aggregator, memory_store):
        first = aggregator.track_event("user-1", "view", {"path": "/"})
        aggregator.track_event("user-1", "engagement", {"engagementType": "like"})
        aggregator.track_event("user-2", "view")

        events = memory_store.list_events("user-1")
        assert [e.event_type for e in events] == ["view", "engagement"]
        assert events[0].event_id == first.event_id
        assert first.timestamp is not None
        assert [e.event_type for e in memory_store.list_events("user-1", "view")] == ["view"]

    def test_blank_type_rejected_before_store(self):
        store = MagicMock()
        with pytest.raises(ValidationError):
            MetricsAggregator(store).track_event("user-1", " ")
        store.add_event.assert_not_called()

class TestComputeAnalytics:
    """compute_analytics() 흐름 테스트"""

    def test_invalid_period_checked_before_store(self):
        store = MagicMock()
        period = AnalyticsPeriod(start=datetime(2024, 3, 10), end=datetime(2024, 3, 1))

        with pytest.raises(ValidationError):
            MetricsAggregator(store).compute_analytics("user-1", period)

        store.get_user.assert_not_called()

    def test_unknown_user(self, aggregator, period):
        with pytest.raises(NotFoundError):
            aggregator.compute_analytics("nobody", period)

    def test_single_day_period_has_one_growth_point(self, aggregator, memory_store, make_user):
        memory_store.add_user(make_user())
        day = datetime(2024, 3, 5)

        snapshot = aggregator.compute_analytics("user-1", AnalyticsPeriod(start=day, end=day))

        assert len(snapshot.growth_metrics.follower_growth) == 1
        assert snapshot.growth_metrics.follower_growth[0].change == 0
        assert len(snapshot.growth_metrics.views_growth) == 1

    def test_upsert_is_idempotent(self, aggregator, seeded_store, now):
        period = AnalyticsPeriod(start=now - timedelta(days=13), end=now)

        first = aggregator.compute_analytics("demo-user", period)
        second = aggregator.compute_analytics("demo-user", period)

        assert first.id == second.id
        assert first.content_dict() == second.content_dict()
        assert second.created_at == first.created_at
        assert second.updated_at >= first.updated_at

    def test_free_tier_skips_competitors(self, aggregator, memory_store, make_user, period):
        memory_store.add_user(make_user(tier=SubscriptionTier.FREE))
        snapshot = aggregator.compute_analytics("user-1", period)
        assert snapshot.competitor_analysis is None

    def test_paid_tier_has_competitors(self, aggregator, seeded_store, now):
        snapshot = aggregator.compute_analytics(
            "demo-user", AnalyticsPeriod(start=now - timedelta(days=29), end=now)
        )

        analysis = snapshot.competitor_analysis
        assert analysis is not None
        assert len(analysis.competitors) == 3
        assert set(analysis.benchmarks) == {
            'follower_growth', 'engagement_rate', 'content_frequency', 'content_quality'
        }

    def test_platform_filter(self, aggregator, seeded_store, now):
        snapshot = aggregator.compute_analytics(
            "demo-user",
            AnalyticsPeriod(start=now - timedelta(days=29), end=now),
            AnalyticsFilters(platforms=[Platform.TIKTOK])
        )

        assert [m.platform for m in snapshot.platform_metrics] == [Platform.TIKTOK]
        assert isinstance(snapshot.platform(Platform.TIKTOK), TikTokMetrics)
        assert snapshot.platform(Platform.YOUTUBE) is None
        assert set(snapshot.metrics.content_by_platform) == {"tiktok"}

    def test_timezone_aware_period(self, aggregator, memory_store, make_user, make_content):
        memory_store.add_user(make_user())
        memory_store.add_content_performance(make_content(datetime(2024, 3, 5, 10)))

        period = AnalyticsPeriod(
            start=datetime(2024, 3, 1, tzinfo=timezone.utc),
            end=datetime(2024, 3, 10, tzinfo=timezone.utc)
        )
        snapshot = aggregator.compute_analytics("user-1", period)

        assert snapshot.metrics.total_content == 1
        assert snapshot.period.start.tzinfo is None

    def test_storage_error_propagates(self, memory_store, make_user, period):
        memory_store.add_user(make_user())
        memory_store.upsert_snapshot = MagicMock(side_effect=StorageError("disk full"))

        with pytest.raises(StorageError):
            MetricsAggregator(memory_store).compute_analytics("user-1", period)


class TestContentMetrics:
    """콘텐츠 지표 테스트"""

    def test_counts_and_frequency(self, make_content):
        content = [
            make_content(datetime(2024, 3, 1), views=1000, engagement=100),
            make_content(datetime(2024, 3, 2), views=1000, engagement=10, content_type="vlog"),
            make_content(datetime(2024, 3, 3), status=ContentStatus.SCHEDULED),
        ]

        metrics = build_content_metrics(content, 14)

        assert metrics.total_content == 3
        assert metrics.published_content == 2
        assert metrics.scheduled_content == 1
        assert metrics.content_by_type == {"tutorial": 2, "vlog": 1}
        assert metrics.publishing_frequency == 1.0
        assert metrics.top_performing_content[0].performance_score == 100.0
        assert [c.performance_score for c in metrics.underperforming_content] == [10.0]
        assert metrics.content_quality_score == 55.0

    def test_empty(self):
        metrics = build_content_metrics([], 7)
        assert metrics.total_content == 0
        assert metrics.content_quality_score == 0.0
        assert metrics.publishing_frequency == 0.0


class TestEngagementMetrics:
    """참여 지표 테스트"""

    def test_histograms(self, make_content):
        content = [
            make_content(datetime(2024, 3, 4, 18), views=1000, engagement=30),  # Monday
            make_content(datetime(2024, 3, 5, 9), views=1000, engagement=10),   # Tuesday
        ]

        engagement = build_engagement_metrics(content)

        assert len(engagement.engagement_by_time) == 24
        assert len(engagement.engagement_by_day) == 7
        assert engagement.total_engagements == 40
        assert engagement.engagement_rate == 2.0
        assert engagement.peak_hour().hour == 18
        assert engagement.engagement_by_day[0].percentage == 75.0

    def test_no_engagement_has_no_peak(self):
        assert build_engagement_metrics([]).peak_hour() is None


class TestGrowthMetrics:
    """성장 지표 테스트"""

    def test_series_length_and_carry_forward(self, make_account, make_daily):
        period = AnalyticsPeriod(start=datetime(2024, 3, 1), end=datetime(2024, 3, 5, 23))
        daily = [
            make_daily(date(2024, 3, 1), 100, views=10),
            make_daily(date(2024, 3, 3), 120, views=20),
            make_daily(date(2024, 3, 5), 140, views=30),
        ]

        growth = build_growth_metrics([make_account(followers=140)], daily, period)

        values = [p.value for p in growth.follower_growth]
        assert values == [100, 100, 120, 120, 140]
        assert growth.follower_growth[2].change == 20
        assert growth.follower_growth[2].change_percentage == 20.0
        assert [p.value for p in growth.views_growth] == [10, 0, 20, 0, 30]
        assert growth.projected_growth['followers'].current == 140
        # 하루 10명 증가
        assert growth.projected_growth['followers'].projected_30_days == 440
        assert growth.projected_growth['views'].confidence == 78

    def test_milestone_eta(self, make_account, make_daily):
        period = AnalyticsPeriod(start=datetime(2024, 3, 1), end=datetime(2024, 3, 2))
        daily = [make_daily(date(2024, 3, 1), 900), make_daily(date(2024, 3, 2), 950)]

        eta = build_growth_metrics([make_account()], daily, period).time_to_milestone

        assert eta.next_follower_milestone == 1000
        assert eta.milestone_name == "1K Followers"
        assert eta.estimated_date == date(2024, 3, 3)

    def test_milestone_without_growth(self):
        eta = next_milestone(5000, 0.0, date(2024, 3, 1))
        assert eta.next_follower_milestone == 10_000
        assert eta.estimated_date is None

    def test_past_last_milestone(self):
        assert next_milestone(20_000_000, 10.0, date(2024, 3, 1)) is None


class TestTrends:
    """추세 분석 테스트"""

    def test_rising_and_declining(self, make_content, period):
        content = [
            make_content(datetime(2024, 3, 2), views=1000, content_type="short"),
            make_content(datetime(2024, 3, 12), views=2000, content_type="short"),
            make_content(datetime(2024, 3, 2), views=1000, content_type="vlog"),
            make_content(datetime(2024, 3, 12), views=500, content_type="vlog"),
            make_content(datetime(2024, 3, 2), views=1000, content_type="stream"),
            make_content(datetime(2024, 3, 12), views=1050, content_type="stream"),
        ]

        trends = analyze_trends(content, period)
        by_type = {t.type: t for t in trends.content_trends}

        assert by_type["short"].trend == "rising"
        assert by_type["short"].momentum == 100.0
        assert by_type["vlog"].trend == "declining"
        assert by_type["stream"].trend == "stable"

    def test_momentum_without_first_half(self):
        assert momentum([], [100]) == 100.0
        assert momentum([], []) == 0.0

    def test_opportunity_for_high_scoring_type(self, make_content, period):
        content = [
            make_content(datetime(2024, 3, 2), views=1000, engagement=100, content_type="short"),
            make_content(datetime(2024, 3, 3), views=1000, engagement=20, content_type="vlog"),
        ]

        opportunities = analyze_trends(content, period).emerging_opportunities

        assert [o.id for o in opportunities] == ["opportunity-short"]
        assert opportunities[0].priority == "high"


class TestPlatformMetrics:
    """플랫폼 지표 테스트"""

    def test_youtube_ctr_and_channel_counts(self, aggregator, memory_store, make_user, make_account, make_content, period):
        memory_store.add_user(make_user())
        memory_store.add_account(make_account(followers=500))
        memory_store.add_content_performance(make_content(
            datetime(2024, 3, 2), views=400, impressions=10000, content_type="tutorial"
        ))
        memory_store.add_content_performance(make_content(
            datetime(2024, 3, 3), views=100, impressions=0, content_type="short"
        ))

        youtube = aggregator.compute_analytics("user-1", period).platform(Platform.YOUTUBE)

        assert isinstance(youtube, YouTubeMetrics)
        assert youtube.subscribers == 500
        assert youtube.click_through_rate == 5.0
        assert youtube.channel_analytics.videos_published == 1
        assert youtube.channel_analytics.shorts_published == 1

    def test_tiktok_viral_and_completion(self, aggregator, memory_store, make_user, make_account, make_content, make_daily, period):
        memory_store.add_user(make_user())
        memory_store.add_account(make_account(platform=Platform.TIKTOK, followers=2000))
        for views in (100, 100, 100, 5000):
            memory_store.add_content_performance(make_content(
                datetime(2024, 3, 2), platform=Platform.TIKTOK, content_type="trend", views=views
            ))
        memory_store.add_daily_metric(make_daily(
            date(2024, 3, 2), 2000, platform=Platform.TIKTOK, extra={'completion_rate': 40.0}
        ))

        tiktok = aggregator.compute_analytics("user-1", period).platform(Platform.TIKTOK)

        assert [v.views for v in tiktok.viral_videos] == [5000]
        assert tiktok.completion_rate == 40.0
        assert tiktok.hashtag_performance == []
