"""
Storage Port
분석 컴포넌트가 사용하는 저장소 인터페이스

컴포넌트는 생성자로 저장소를 주입받는다. (테스트는 MemoryStore 사용)
"""

from abc import ABC, abstractmethod
from datetime import datetime, date
from typing import List, Optional, Dict, Tuple

from creatorhub.domain.models import (
    Platform,
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
)
from creatorhub.models.analytics import AnalyticsSnapshot


# ============================================================
# Read / Upsert Ports
# ============================================================

class AnalyticsStore(ABC):
    """MetricsAggregator용 저장소"""

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserRecord]:
        pass

    @abstractmethod
    def list_content(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
        platforms: Optional[List[Platform]] = None,
        content_types: Optional[List[str]] = None
    ) -> List[ContentPerformance]:
        """기간 내 게시(또는 예약)된 콘텐츠 (양 끝 포함)"""
        pass

    @abstractmethod
    def list_accounts(
        self,
        user_id: str,
        platforms: Optional[List[Platform]] = None
    ) -> List[PlatformAccount]:
        pass

    @abstractmethod
    def list_daily_metrics(
        self,
        user_id: str,
        start: date,
        end: date,
        platforms: Optional[List[Platform]] = None
    ) -> List[DailyMetric]:
        """일간 지표 (day 오름차순)"""
        pass

    @abstractmethod
    def list_competitors(self, user_id: str) -> List[CompetitorRecord]:
        pass

    @abstractmethod
    def upsert_snapshot(self, snapshot: AnalyticsSnapshot) -> AnalyticsSnapshot:
        """
        (user_id, period.start, period.end) 키로 스냅샷 저장

        같은 키가 있으면 덮어쓴다. (last-writer-wins)
        반환값에는 id, created_at, updated_at이 채워진다.
        """
        pass

    @abstractmethod
    def get_snapshot(
        self,
        user_id: str,
        start: datetime,
        end: datetime
    ) -> Optional[AnalyticsSnapshot]:
        pass

    @abstractmethod
    def add_event(self, event: AnalyticsEvent) -> AnalyticsEvent:
        """이벤트 추가 (event_id, timestamp 채워서 반환)"""
        pass

    @abstractmethod
    def list_events(self, user_id: str, event_type: Optional[str] = None) -> List[AnalyticsEvent]:
        """이벤트 로그 (timestamp 오름차순)"""
        pass


class ProgressStore(ABC):
    """ProgressProjector용 저장소"""

    @abstractmethod
    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        pass

    @abstractmethod
    def list_task_completions(self, user_id: str) -> List[TaskCompletion]:
        """전체 완료 로그 (completed_at 오름차순)"""
        pass

    @abstractmethod
    def count_tasks(self, platform: Platform, niche: str) -> int:
        pass

    @abstractmethod
    def list_milestones(self, platform: Optional[Platform] = None) -> List[Milestone]:
        """마일스톤 (order_index 오름차순)"""
        pass

    @abstractmethod
    def list_achievements(self, user_id: str) -> List[MilestoneAchievement]:
        pass


class ContentStore(ABC):
    """콘텐츠 동기화용 저장소"""

    @abstractmethod
    def get_content_item(self, content_id: str) -> Optional[ContentItem]:
        pass

    @abstractmethod
    def create_content_item(self, item: ContentItem) -> ContentItem:
        """새 콘텐츠 저장 (content_id, created_at 채워서 반환)"""
        pass

    @abstractmethod
    def content_stats(self, user_id: str) -> Dict[str, Tuple[int, Optional[datetime]]]:
        """플랫폼별 (콘텐츠 수, 최근 생성 시각)"""
        pass


# ============================================================
# Full Store
# ============================================================

class Store(AnalyticsStore, ProgressStore, ContentStore):
    """
    전체 저장소

    읽기 포트 + 시드/관리용 쓰기 메서드
    """

    backend: str = "unknown"

    @abstractmethod
    def add_user(self, user: UserRecord) -> None:
        pass

    @abstractmethod
    def add_profile(self, profile: UserProfile) -> None:
        pass

    @abstractmethod
    def add_content_performance(self, content: ContentPerformance) -> None:
        pass

    @abstractmethod
    def add_account(self, account: PlatformAccount) -> None:
        pass

    @abstractmethod
    def add_daily_metric(self, metric: DailyMetric) -> None:
        pass

    @abstractmethod
    def add_competitor(self, competitor: CompetitorRecord) -> None:
        pass

    @abstractmethod
    def add_task(self, task: DailyTask) -> None:
        pass

    @abstractmethod
    def add_task_completion(self, completion: TaskCompletion) -> None:
        pass

    @abstractmethod
    def add_milestone(self, milestone: Milestone) -> None:
        pass

    @abstractmethod
    def add_achievement(self, achievement: MilestoneAchievement) -> None:
        pass

    def health_check(self) -> Dict[str, str]:
        return {'status': 'healthy', 'backend': self.backend}

    def close(self):
        pass
