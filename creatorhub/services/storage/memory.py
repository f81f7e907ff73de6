"""
In-Memory Store
DB 연결 실패 시 폴백 및 테스트용 저장소

서버 재시작 시 데이터 손실됨 (개발/테스트 용도)
"""

import copy
import uuid
import logging
import threading
from datetime import datetime, date
from typing import List, Optional, Dict, Tuple

from creatorhub.domain.models import (
    Platform,
    ContentStatus,
    UserRecord,
    UserProfile,
    ContentPerformance,
    PlatformAccount,
    DailyMetric,
    CompetitorRecord,
    DailyTask,
    TaskCompletion,
    Milestone,
    MilestoneAchievement,
    ContentItem,
    AnalyticsEvent,
    utc_now,
)
from creatorhub.models.analytics import AnalyticsSnapshot
from creatorhub.services.storage.base import Store

logger = logging.getLogger(__name__)


class MemoryStore(Store):
    """인메모리 저장소"""

    backend = "memory"

    def __init__(self):
        self._lock = threading.Lock()
        self._users: Dict[str, UserRecord] = {}
        self._profiles: Dict[str, UserProfile] = {}
        self._content: List[ContentPerformance] = []
        self._accounts: List[PlatformAccount] = []
        self._daily_metrics: List[DailyMetric] = []
        self._competitors: List[CompetitorRecord] = []
        self._tasks: Dict[str, DailyTask] = {}
        self._completions: List[TaskCompletion] = []
        self._milestones: Dict[str, Milestone] = {}
        self._achievements: List[MilestoneAchievement] = []
        self._items: Dict[str, ContentItem] = {}
        self._snapshots: Dict[Tuple[str, datetime, datetime], AnalyticsSnapshot] = {}
        self._events: List[AnalyticsEvent] = []

    # ========================================
    # Analytics
    # ========================================

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return self._users.get(user_id)

    def list_content(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
        platforms: Optional[List[Platform]] = None,
        content_types: Optional[List[str]] = None
    ) -> List[ContentPerformance]:
        results = []
        for content in self._content:
            if content.user_id != user_id:
                continue
            if content.status == ContentStatus.DRAFT:
                continue
            when = content.activity_time
            if when is None or not (start <= when <= end):
                continue
            if platforms and content.platform not in platforms:
                continue
            if content_types and content.content_type not in content_types:
                continue
            results.append(content)
        return results

    def list_accounts(
        self,
        user_id: str,
        platforms: Optional[List[Platform]] = None
    ) -> List[PlatformAccount]:
        return [
            a for a in self._accounts
            if a.user_id == user_id and (not platforms or a.platform in platforms)
        ]

    def list_daily_metrics(
        self,
        user_id: str,
        start: date,
        end: date,
        platforms: Optional[List[Platform]] = None
    ) -> List[DailyMetric]:
        results = [
            m for m in self._daily_metrics
            if m.user_id == user_id
            and start <= m.day <= end
            and (not platforms or m.platform in platforms)
        ]
        results.sort(key=lambda m: m.day)
        return results

    def list_competitors(self, user_id: str) -> List[CompetitorRecord]:
        return [c for c in self._competitors if c.user_id == user_id]

    def upsert_snapshot(self, snapshot: AnalyticsSnapshot) -> AnalyticsSnapshot:
        key = (snapshot.user_id, snapshot.period.start, snapshot.period.end)
        now = utc_now()

        with self._lock:
            existing = self._snapshots.get(key)
            stored = snapshot.model_copy(deep=True, update={
                'id': existing.id if existing else f"snap_{uuid.uuid4().hex[:12]}",
                'created_at': existing.created_at if existing else now,
                'updated_at': now,
            })
            self._snapshots[key] = stored

        return stored.model_copy(deep=True)

    def get_snapshot(
        self,
        user_id: str,
        start: datetime,
        end: datetime
    ) -> Optional[AnalyticsSnapshot]:
        stored = self._snapshots.get((user_id, start, end))
        return stored.model_copy(deep=True) if stored else None

    def add_event(self, event: AnalyticsEvent) -> AnalyticsEvent:
        stored = copy.deepcopy(event)
        stored.event_id = stored.event_id or f"evt_{uuid.uuid4().hex[:12]}"
        stored.timestamp = stored.timestamp or utc_now()

        with self._lock:
            self._events.append(stored)

        return copy.deepcopy(stored)

    def list_events(self, user_id: str, event_type: Optional[str] = None) -> List[AnalyticsEvent]:
        events = [
            copy.deepcopy(e) for e in self._events
            if e.user_id == user_id and (not event_type or e.event_type == event_type)
        ]
        events.sort(key=lambda e: e.timestamp)
        return events

    # ========================================
    # Progress
    # ========================================

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        return self._profiles.get(user_id)

    def list_task_completions(self, user_id: str) -> List[TaskCompletion]:
        results = []
        for completion in self._completions:
            if completion.user_id != user_id:
                continue
            enriched = copy.copy(completion)
            task = self._tasks.get(completion.task_id)
            if task is not None:
                enriched.category = enriched.category or task.category
                enriched.platform = enriched.platform or task.platform
            results.append(enriched)
        results.sort(key=lambda c: c.completed_at)
        return results

    def count_tasks(self, platform: Platform, niche: str) -> int:
        return sum(
            1 for t in self._tasks.values()
            if t.platform == platform and t.niche == niche
        )

    def list_milestones(self, platform: Optional[Platform] = None) -> List[Milestone]:
        milestones = [
            m for m in self._milestones.values()
            if platform is None or m.platform == platform
        ]
        milestones.sort(key=lambda m: m.order_index)
        return milestones

    def list_achievements(self, user_id: str) -> List[MilestoneAchievement]:
        return [a for a in self._achievements if a.user_id == user_id]

    # ========================================
    # Content
    # ========================================

    def get_content_item(self, content_id: str) -> Optional[ContentItem]:
        item = self._items.get(content_id)
        return copy.deepcopy(item) if item else None

    def create_content_item(self, item: ContentItem) -> ContentItem:
        stored = copy.deepcopy(item)
        stored.content_id = stored.content_id or f"content_{uuid.uuid4().hex[:12]}"
        stored.created_at = stored.created_at or utc_now()

        with self._lock:
            self._items[stored.content_id] = stored

        return copy.deepcopy(stored)

    def content_stats(self, user_id: str) -> Dict[str, Tuple[int, Optional[datetime]]]:
        stats: Dict[str, Tuple[int, Optional[datetime]]] = {}
        for item in self._items.values():
            if item.user_id != user_id:
                continue
            count, latest = stats.get(item.platform, (0, None))
            if latest is None or (item.created_at and item.created_at > latest):
                latest = item.created_at
            stats[item.platform] = (count + 1, latest)
        return stats

    # ========================================
    # Writers
    # ========================================

    def add_user(self, user: UserRecord) -> None:
        self._users[user.user_id] = user

    def add_profile(self, profile: UserProfile) -> None:
        self._profiles[profile.user_id] = profile

    def add_content_performance(self, content: ContentPerformance) -> None:
        self._content.append(content)

    def add_account(self, account: PlatformAccount) -> None:
        self._accounts = [
            a for a in self._accounts
            if not (a.user_id == account.user_id and a.platform == account.platform)
        ]
        self._accounts.append(account)

    def add_daily_metric(self, metric: DailyMetric) -> None:
        self._daily_metrics.append(metric)

    def add_competitor(self, competitor: CompetitorRecord) -> None:
        self._competitors.append(competitor)

    def add_task(self, task: DailyTask) -> None:
        self._tasks[task.task_id] = task

    def add_task_completion(self, completion: TaskCompletion) -> None:
        self._completions.append(completion)

    def add_milestone(self, milestone: Milestone) -> None:
        self._milestones[milestone.milestone_id] = milestone

    def add_achievement(self, achievement: MilestoneAchievement) -> None:
        self._achievements.append(achievement)
