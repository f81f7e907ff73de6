"""
Pytest Configuration and Fixtures
creatorhub 테스트 공통 설정

Features:
- 고정 시각 / 인메모리 저장소 fixture
- 레코드 생성 팩토리
- API 클라이언트
"""

import pytest
from datetime import datetime, date, timedelta
from typing import Callable

from creatorhub.domain.models import (
    Platform,
    SubscriptionTier,
    ContentStatus,
    UserRecord,
    ContentPerformance,
    PlatformAccount,
    DailyMetric,
    TaskCompletion,
)


# ============================================================
# Time / Store Fixtures
# ============================================================

@pytest.fixture
def now() -> datetime:
    """테스트 기준 시각"""
    return datetime(2024, 3, 15, 12, 0, 0)


@pytest.fixture
def clock(now) -> Callable[[], datetime]:
    return lambda: now


@pytest.fixture
def memory_store():
    """빈 인메모리 저장소"""
    from creatorhub.services.storage import MemoryStore
    return MemoryStore()


@pytest.fixture
def seeded_store(memory_store, now):
    """참조 데이터 + 데모 사용자 샘플 데이터"""
    from creatorhub.services.storage.seed import seed_reference_data, seed_sample_data
    seed_reference_data(memory_store)
    seed_sample_data(memory_store, now=now)
    return memory_store


@pytest.fixture
def disabled_cache():
    """Redis 없이 동작하는 캐시 (no-op)"""
    from creatorhub.services.shared.cache import CacheClient, CacheConfig
    return CacheClient(config=CacheConfig(host=None))


# ============================================================
# Record Factories
# ============================================================

@pytest.fixture
def make_user():
    def _make(user_id: str = "user-1", tier: SubscriptionTier = SubscriptionTier.PRO) -> UserRecord:
        return UserRecord(user_id=user_id, email=f"{user_id}@example.com", subscription_tier=tier)
    return _make


@pytest.fixture
def make_content():
    counter = {'n': 0}

    def _make(
        published_at: datetime,
        platform: Platform = Platform.YOUTUBE,
        content_type: str = "tutorial",
        views: int = 1000,
        engagement: int = 50,
        shares: int = 0,
        user_id: str = "user-1",
        status: ContentStatus = ContentStatus.PUBLISHED,
        **kwargs
    ) -> ContentPerformance:
        counter['n'] += 1
        return ContentPerformance(
            content_id=f"content-{counter['n']}",
            user_id=user_id,
            title=kwargs.pop('title', f"Post {counter['n']}"),
            content_type=content_type,
            platform=platform,
            status=status,
            published_at=published_at if status != ContentStatus.SCHEDULED else None,
            scheduled_for=published_at if status == ContentStatus.SCHEDULED else None,
            views=views,
            engagement=engagement,
            shares=shares,
            **kwargs
        )
    return _make


@pytest.fixture
def make_account():
    def _make(platform: Platform = Platform.YOUTUBE, followers: int = 1000, user_id: str = "user-1", **kwargs):
        return PlatformAccount(user_id=user_id, platform=platform, followers=followers, **kwargs)
    return _make


@pytest.fixture
def make_daily():
    def _make(day: date, followers: int, platform: Platform = Platform.YOUTUBE, user_id: str = "user-1", **kwargs):
        return DailyMetric(user_id=user_id, platform=platform, day=day, followers=followers, **kwargs)
    return _make


@pytest.fixture
def make_completion():
    counter = {'n': 0}

    def _make(completed_at: datetime, user_id: str = "user-1", **kwargs) -> TaskCompletion:
        counter['n'] += 1
        return TaskCompletion(
            completion_id=f"completion-{counter['n']}",
            user_id=user_id,
            task_id=kwargs.pop('task_id', f"youtube-general-day{counter['n']}"),
            completed_at=completed_at,
            **kwargs
        )
    return _make


# ============================================================
# API Fixtures
# ============================================================

@pytest.fixture
def api_client(seeded_store, disabled_cache):
    """샘플 데이터가 들어간 인메모리 저장소로 동작하는 TestClient"""
    from fastapi.testclient import TestClient
    from creatorhub.main import app
    from creatorhub.api.v1.deps import get_cache
    from creatorhub.services.storage import set_store, get_store

    set_store(seeded_store)
    app.dependency_overrides[get_store] = lambda: seeded_store
    app.dependency_overrides[get_cache] = lambda: disabled_cache

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
    set_store(None)
