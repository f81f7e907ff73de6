"""
Unit Tests for SQL Store
SQLite 인메모리 DB로 SqlStore 동작 확인

Run: pytest tests/unit/test_sql_storage.py -v
"""

import time
import pytest
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, date, timedelta
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from creatorhub.core.exceptions import StorageError
from creatorhub.domain.models import (
    Platform,
    SubscriptionTier,
    ContentStatus,
    ContentItem,
    AnalyticsEvent,
    DailyTask,
    UserProfile,
)
from creatorhub.models.analytics import AnalyticsPeriod
from creatorhub.services.storage import SqlStore, MemoryStore, get_store, set_store
from creatorhub.services.analytics import MetricsAggregator
from creatorhub.services.progress import ProgressProjector


@pytest.fixture
def sql_store():
    store = SqlStore("sqlite:///:memory:")
    yield store
    store.close()


class TestSqlStoreReads:
    """읽기 포트 테스트"""

    def test_user_roundtrip(self, sql_store, make_user):
        sql_store.add_user(make_user(tier=SubscriptionTier.STUDIO))

        user = sql_store.get_user("user-1")
        assert user.subscription_tier == SubscriptionTier.STUDIO
        assert sql_store.get_user("nobody") is None

    def test_list_content_filters(self, sql_store, make_content):
        sql_store.add_content_performance(make_content(datetime(2024, 3, 2), platform=Platform.YOUTUBE))
        sql_store.add_content_performance(make_content(datetime(2024, 3, 3), platform=Platform.TIKTOK))
        sql_store.add_content_performance(make_content(datetime(2024, 3, 4), status=ContentStatus.SCHEDULED))
        sql_store.add_content_performance(make_content(datetime(2024, 3, 4), status=ContentStatus.DRAFT))
        sql_store.add_content_performance(make_content(datetime(2024, 4, 1)))

        start, end = datetime(2024, 3, 1), datetime(2024, 3, 31)

        assert len(sql_store.list_content("user-1", start, end)) == 3
        tiktok = sql_store.list_content("user-1", start, end, platforms=[Platform.TIKTOK])
        assert [c.platform for c in tiktok] == [Platform.TIKTOK]

    def test_inclusive_bounds(self, sql_store, make_content):
        sql_store.add_content_performance(make_content(datetime(2024, 3, 1)))
        sql_store.add_content_performance(make_content(datetime(2024, 3, 31)))

        content = sql_store.list_content("user-1", datetime(2024, 3, 1), datetime(2024, 3, 31))
        assert len(content) == 2

    def test_daily_metrics_sorted(self, sql_store, make_daily):
        sql_store.add_daily_metric(make_daily(date(2024, 3, 3), 30, extra={'bits': 5}))
        sql_store.add_daily_metric(make_daily(date(2024, 3, 1), 10))

        metrics = sql_store.list_daily_metrics("user-1", date(2024, 3, 1), date(2024, 3, 31))

        assert [m.day for m in metrics] == [date(2024, 3, 1), date(2024, 3, 3)]
        assert metrics[1].extra == {'bits': 5}

    def test_completions_enriched_from_tasks(self, sql_store, make_completion, now):
        sql_store.add_task(DailyTask(
            task_id="youtube-general-day1", title="Day 1", platform=Platform.YOUTUBE, category="technical"
        ))
        sql_store.add_task_completion(make_completion(now, task_id="youtube-general-day1"))

        completions = sql_store.list_task_completions("user-1")

        assert completions[0].category == "technical"
        assert completions[0].platform == Platform.YOUTUBE
        assert sql_store.count_tasks(Platform.YOUTUBE, "general") == 1

    def test_content_items(self, sql_store):
        created = sql_store.create_content_item(ContentItem(
            content_id="", user_id="user-1", platform="tiktok", content_type="trend",
            title="Clip", metadata={'tags': ["fyp"]}
        ))

        assert created.content_id.startswith("content_")
        loaded = sql_store.get_content_item(created.content_id)
        assert loaded.metadata == {'tags': ["fyp"]}
        assert sql_store.content_stats("user-1")["tiktok"][0] == 1


class TestSqlSnapshots:
    """스냅샷 upsert 테스트"""

    def test_upsert_keeps_single_row(self, sql_store, seeded_sql_store, now):
        aggregator = MetricsAggregator(seeded_sql_store)
        period = AnalyticsPeriod(start=now - timedelta(days=6), end=now)

        first = aggregator.compute_analytics("demo-user", period)
        second = aggregator.compute_analytics("demo-user", period)

        assert first.id == second.id
        stored = seeded_sql_store.get_snapshot("demo-user", period.start, period.end)
        assert stored.id == first.id
        assert stored.content_dict() == second.content_dict()
        assert stored.created_at.tzinfo is None
        assert second.updated_at >= first.created_at

    def test_operational_error_becomes_storage_error(self, sql_store):
        with patch.object(sql_store, "SessionLocal") as session_factory:
            session_factory.return_value.query.side_effect = OperationalError("SELECT", {}, Exception("gone"))

            with pytest.raises(StorageError):
                sql_store.get_user("user-1")

    def test_events_roundtrip(self, sql_store):
        sql_store.add_event(AnalyticsEvent(
            event_id="", user_id="user-1", event_type="view",
            event_data={'path': "/"}, timestamp=datetime(2024, 3, 2)
        ))
        sql_store.add_event(AnalyticsEvent(
            event_id="", user_id="user-1", event_type="revenue",
            event_data={'amount': 4.5}, timestamp=datetime(2024, 3, 1)
        ))

        events = sql_store.list_events("user-1")

        assert [e.event_type for e in events] == ["revenue", "view"]
        assert events[1].event_data == {'path': "/"}
        assert all(e.event_id.startswith("evt_") for e in events)
        assert len(sql_store.list_events("user-1", "view")) == 1

    def test_health_check(self, sql_store):
        assert sql_store.health_check()['status'] == "healthy"


@pytest.fixture
def seeded_sql_store(sql_store, now):
    from creatorhub.services.storage.seed import seed_reference_data, seed_sample_data
    seed_reference_data(sql_store)
    seed_sample_data(sql_store, now=now, days=14)
    return sql_store


class TestSqlProgress:
    """SqlStore 기반 진행률"""

    def test_progress_from_sql(self, seeded_sql_store, clock):
        result = ProgressProjector(seeded_sql_store, clock=clock).compute_progress("demo-user")

        assert result.overview.total_tasks_completed > 0
        assert result.overview.longest_streak >= result.overview.current_streak
        youtube = next(p for p in result.platform_stats if p.platform == Platform.YOUTUBE)
        assert youtube.milestones_achieved == 1

    def test_profile_roundtrip(self, sql_store, now):
        sql_store.add_profile(UserProfile(user_id="user-1", start_date=now, selected_platform=Platform.TWITCH))
        profile = sql_store.get_profile("user-1")
        assert profile.selected_platform == Platform.TWITCH
        assert profile.start_date == now


class TestStoreFactory:
    """get_store() 싱글톤"""

    @pytest.fixture(autouse=True)
    def reset_store(self):
        set_store(None)
        yield
        set_store(None)

    def test_concurrent_calls_build_one_store(self):
        def slow_store(*args, **kwargs):
            time.sleep(0.05)
            return MemoryStore()

        with patch("creatorhub.services.storage.SqlStore", side_effect=slow_store) as factory:
            with ThreadPoolExecutor(max_workers=8) as executor:
                stores = list(executor.map(lambda _: get_store(), range(8)))

        assert factory.call_count == 1
        assert all(store is stores[0] for store in stores)

    def test_falls_back_to_memory(self):
        with patch("creatorhub.services.storage.SqlStore", side_effect=StorageError("down")):
            assert get_store().backend == "memory"
