"""
도메인 레코드 모델
저장소에서 읽어오는 레코드와 공통 Enum 정의
"""
from dataclasses import dataclass, field
from datetime import datetime, date, timezone
from typing import Optional, Dict, Any, List
from enum import Enum

from creatorhub.core.exceptions import UnsupportedPlatformError


def utc_now() -> datetime:
    """naive UTC 현재 시각 (저장소 타임스탬프 기준)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ============================================================
# Enums
# ============================================================

class Platform(str, Enum):
    """지원 플랫폼 (고정 3종)"""
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    TWITCH = "twitch"

    @classmethod
    def from_string(cls, value: str) -> "Platform":
        """문자열에서 변환 (지원하지 않으면 UnsupportedPlatformError)"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedPlatformError(str(value))


class SubscriptionTier(str, Enum):
    """구독 등급"""
    FREE = "free"
    PRO = "pro"
    STUDIO = "studio"


class PeriodType(str, Enum):
    """분석 기간 타입"""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class ContentStatus(str, Enum):
    """콘텐츠 상태"""
    PUBLISHED = "published"
    SCHEDULED = "scheduled"
    DRAFT = "draft"


class TrendDirection(str, Enum):
    """지표 추세"""
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class Pace(str, Enum):
    """진행 속도 분류"""
    AHEAD = "ahead"
    ON_TRACK = "on-track"
    BEHIND = "behind"


class ExportFormat(str, Enum):
    """내보내기 포맷"""
    PDF = "pdf"
    CSV = "csv"
    JSON = "json"
    EXCEL = "excel"


# 점수 100에 해당하는 가중 참여율 (10%)
PERFORMANCE_TARGET_RATE = 0.10


# ============================================================
# Records
# ============================================================

@dataclass
class UserRecord:
    """사용자"""
    user_id: str
    email: str = ""
    subscription_tier: SubscriptionTier = SubscriptionTier.FREE
    created_at: Optional[datetime] = None


@dataclass
class UserProfile:
    """온보딩 프로필 (읽기 전용)"""
    user_id: str
    start_date: Optional[datetime] = None
    current_phase: int = 1
    current_week: int = 1
    selected_platform: Optional[Platform] = None
    selected_niche: Optional[str] = None


@dataclass
class ContentPerformance:
    """게시 콘텐츠 성과 (읽기 전용 프로젝션)"""
    content_id: str
    user_id: str
    title: str
    content_type: str
    platform: Platform
    status: ContentStatus = ContentStatus.PUBLISHED
    published_at: Optional[datetime] = None
    scheduled_for: Optional[datetime] = None

    # 인터랙션 메트릭
    views: int = 0
    engagement: int = 0
    shares: int = 0
    likes: int = 0
    comments: int = 0
    saves: int = 0
    clicks: int = 0

    # 시청 메트릭
    impressions: int = 0
    watch_time_minutes: float = 0.0
    duration_seconds: Optional[int] = None

    production_hours: Optional[float] = None
    revenue: Optional[float] = None

    @property
    def performance_score(self) -> float:
        """성과 점수 (0-100)"""
        if self.views <= 0:
            return 0.0
        weighted_rate = (self.engagement + 2 * self.shares) / self.views
        return round(min(100.0, weighted_rate / PERFORMANCE_TARGET_RATE * 100), 2)

    @property
    def engagement_rate(self) -> float:
        """참여율 (%)"""
        if self.views <= 0:
            return 0.0
        return self.engagement / self.views * 100

    @property
    def activity_time(self) -> Optional[datetime]:
        """게시 시각, 없으면 예약 시각"""
        return self.published_at or self.scheduled_for


@dataclass
class PlatformAccount:
    """연결된 플랫폼 계정"""
    user_id: str
    platform: Platform
    handle: str = ""
    followers: int = 0
    paid_subscribers: int = 0
    demographics: Dict[str, Dict[str, float]] = field(default_factory=dict)


@dataclass
class DailyMetric:
    """플랫폼별 일간 지표"""
    user_id: str
    platform: Platform
    day: date
    followers: int = 0
    views: int = 0
    engagements: int = 0
    revenue: float = 0.0
    extra: Dict[str, float] = field(default_factory=dict)


@dataclass
class CompetitorRecord:
    """추적 중인 경쟁 크리에이터"""
    competitor_id: str
    user_id: str
    name: str
    platform: Platform
    followers: int = 0
    follower_growth_rate: float = 0.0
    engagement_rate: float = 0.0
    content_frequency: float = 0.0
    content_quality: float = 0.0
    estimated_revenue: float = 0.0
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)


@dataclass
class DailyTask:
    """로드맵 일일 태스크 정의"""
    task_id: str
    title: str
    platform: Platform
    niche: str = "general"
    category: Optional[str] = None
    phase: int = 1
    day: int = 1


@dataclass
class TaskCompletion:
    """태스크 완료 로그 (append-only)"""
    completion_id: str
    user_id: str
    task_id: str
    completed_at: datetime
    time_spent: Optional[int] = None  # minutes
    quality: Optional[int] = None  # 1-5
    category: Optional[str] = None
    platform: Optional[Platform] = None


@dataclass
class Milestone:
    """마일스톤 정의"""
    milestone_id: str
    name: str
    platform: Platform
    order_index: int = 0
    requirement: Dict[str, Any] = field(default_factory=dict)


@dataclass
class MilestoneAchievement:
    """마일스톤 달성 기록"""
    user_id: str
    milestone_id: str
    achieved_at: Optional[datetime] = None


@dataclass
class ContentItem:
    """작성된 콘텐츠 (동기화 원본/결과)"""
    content_id: str
    user_id: str
    platform: str
    content_type: str
    title: str
    body: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "content_id": self.content_id,
            "user_id": self.user_id,
            "platform": self.platform,
            "content_type": self.content_type,
            "title": self.title,
            "body": self.body,
            "metadata": self.metadata,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class AnalyticsEvent:
    """추적 이벤트 (append-only 로그)"""
    event_id: str
    user_id: str
    event_type: str
    event_data: Dict[str, Any] = field(default_factory=dict)
    timestamp: Optional[datetime] = None
