"""
Analytics Models
분석 스냅샷 및 하위 지표 모델
"""

from pydantic import Field
from typing import List, Optional, Dict, Literal, Union
from typing_extensions import Annotated
from datetime import datetime, date

from creatorhub.models.base import BaseModel
from creatorhub.domain.models import Platform, PeriodType, TrendDirection


# ============================================================
# Period / Filters
# ============================================================

class AnalyticsPeriod(BaseModel):
    """분석 기간 (양 끝 포함)"""
    start: datetime
    end: datetime
    type: PeriodType = PeriodType.CUSTOM

    @property
    def days(self) -> int:
        """기간에 포함된 달력 일수"""
        return (self.end.date() - self.start.date()).days + 1


class AnalyticsFilters(BaseModel):
    """분석 필터"""
    platforms: Optional[List[Platform]] = None
    content_types: Optional[List[str]] = None


# ============================================================
# Content Metrics
# ============================================================

class ContentPerformanceSummary(BaseModel):
    """콘텐츠 성과 요약"""
    id: str
    title: str
    type: str
    platform: Platform
    published_at: Optional[datetime] = None
    views: int = 0
    engagement: int = 0
    shares: int = 0
    revenue: Optional[float] = None
    performance_score: float = 0.0


class ContentMetrics(BaseModel):
    """콘텐츠 지표"""
    total_content: int = 0
    published_content: int = 0
    scheduled_content: int = 0
    content_by_type: Dict[str, int] = Field(default_factory=dict)
    content_by_platform: Dict[str, int] = Field(default_factory=dict)
    top_performing_content: List[ContentPerformanceSummary] = Field(default_factory=list)
    underperforming_content: List[ContentPerformanceSummary] = Field(default_factory=list)
    average_production_time: float = 0.0  # hours
    publishing_frequency: float = 0.0  # posts per week
    content_quality_score: float = 0.0  # 0-100


# ============================================================
# Platform Metrics (tagged union)
# ============================================================

class ChannelAnalytics(BaseModel):
    """YouTube 채널 게시 현황"""
    videos_published: int = 0
    shorts_published: int = 0
    lives_hosted: int = 0
    community_posts: int = 0


class YouTubeMetrics(BaseModel):
    """YouTube 지표"""
    platform: Literal[Platform.YOUTUBE] = Platform.YOUTUBE
    subscribers: int = 0
    subscriber_growth: int = 0
    views: int = 0
    watch_time: float = 0.0  # minutes
    average_view_duration: float = 0.0  # seconds
    impressions: int = 0
    click_through_rate: float = 0.0
    likes: int = 0
    comments: int = 0
    shares: int = 0
    estimated_revenue: float = 0.0
    top_videos: List[ContentPerformanceSummary] = Field(default_factory=list)
    channel_analytics: ChannelAnalytics = Field(default_factory=ChannelAnalytics)


class TikTokMetrics(BaseModel):
    """TikTok 지표"""
    platform: Literal[Platform.TIKTOK] = Platform.TIKTOK
    followers: int = 0
    follower_growth: int = 0
    views: int = 0
    likes: int = 0
    comments: int = 0
    shares: int = 0
    average_watch_time: float = 0.0  # seconds
    completion_rate: float = 0.0  # %
    viral_videos: List[ContentPerformanceSummary] = Field(default_factory=list)
    hashtag_performance: List[Dict[str, float]] = Field(default_factory=list)


class TwitchMetrics(BaseModel):
    """Twitch 지표"""
    platform: Literal[Platform.TWITCH] = Platform.TWITCH
    followers: int = 0
    subscribers: int = 0
    average_viewers: float = 0.0
    peak_viewers: int = 0
    stream_time: float = 0.0  # hours
    chat_messages: int = 0
    bits_received: int = 0
    subscription_revenue: float = 0.0
    donation_revenue: float = 0.0
    top_streams: List[ContentPerformanceSummary] = Field(default_factory=list)


PlatformMetrics = Annotated[
    Union[YouTubeMetrics, TikTokMetrics, TwitchMetrics],
    Field(discriminator="platform"),
]


# ============================================================
# Audience / Engagement
# ============================================================

class Demographics(BaseModel):
    """오디언스 인구통계 (버킷별 %)"""
    age: Dict[str, float] = Field(default_factory=dict)
    gender: Dict[str, float] = Field(default_factory=dict)
    location: Dict[str, float] = Field(default_factory=dict)
    interests: Dict[str, float] = Field(default_factory=dict)
    devices: Dict[str, float] = Field(default_factory=dict)


class AudienceMetrics(BaseModel):
    """오디언스 지표"""
    total_audience: int = 0
    audience_growth: int = 0
    audience_growth_rate: float = 0.0  # %
    demographics: Demographics = Field(default_factory=Demographics)
    engagement_rate: float = 0.0
    audience_retention: float = 0.0  # %
    audience_lifetime_value: float = 0.0


class EngagementByType(BaseModel):
    """유형별 참여"""
    likes: int = 0
    comments: int = 0
    shares: int = 0
    saves: int = 0
    clicks: int = 0


class TimeBasedMetric(BaseModel):
    """시간대별 참여"""
    hour: int
    value: int = 0
    percentage: float = 0.0


class DayBasedMetric(BaseModel):
    """요일별 참여"""
    day: str
    value: int = 0
    percentage: float = 0.0


class EngagementMetrics(BaseModel):
    """참여 지표"""
    total_engagements: int = 0
    engagement_rate: float = 0.0
    average_engagement_per_post: float = 0.0
    engagement_by_type: EngagementByType = Field(default_factory=EngagementByType)
    engagement_by_time: List[TimeBasedMetric] = Field(default_factory=list)
    engagement_by_day: List[DayBasedMetric] = Field(default_factory=list)

    def peak_hour(self) -> Optional[TimeBasedMetric]:
        """참여가 가장 많은 시간대 (동률이면 이른 시간)"""
        peak = None
        for bucket in self.engagement_by_time:
            if bucket.value > 0 and (peak is None or bucket.value > peak.value):
                peak = bucket
        return peak


# ============================================================
# Growth
# ============================================================

class TimeSeriesPoint(BaseModel):
    """시계열 포인트"""
    date: date
    value: float = 0.0
    change: float = 0.0
    change_percentage: float = 0.0


class ProjectedMetric(BaseModel):
    """선형 예측 지표 (confidence는 고정 휴리스틱 상수)"""
    current: float = 0.0
    projected_30_days: float = 0.0
    projected_90_days: float = 0.0
    projected_1_year: float = 0.0
    confidence: int = 0


class MilestoneEta(BaseModel):
    """다음 팔로워 마일스톤"""
    next_follower_milestone: int
    milestone_name: str
    estimated_date: Optional[date] = None


class GrowthMetrics(BaseModel):
    """성장 지표"""
    follower_growth: List[TimeSeriesPoint] = Field(default_factory=list)
    views_growth: List[TimeSeriesPoint] = Field(default_factory=list)
    engagement_growth: List[TimeSeriesPoint] = Field(default_factory=list)
    revenue_growth: List[TimeSeriesPoint] = Field(default_factory=list)
    projected_growth: Dict[str, ProjectedMetric] = Field(default_factory=dict)
    growth_velocity: float = 0.0
    time_to_milestone: Optional[MilestoneEta] = None


# ============================================================
# Trends
# ============================================================

class ContentTrend(BaseModel):
    """콘텐츠 유형 추세"""
    type: str
    trend: Literal["rising", "stable", "declining"]
    momentum: float = 0.0
    examples: List[str] = Field(default_factory=list)
    recommendation: str = ""


class PlatformTrend(BaseModel):
    """플랫폼 추세"""
    platform: Platform
    trend: Literal["rising", "stable", "declining"]
    momentum: float = 0.0


class Opportunity(BaseModel):
    """성장 기회"""
    id: str
    type: Literal["content", "platform", "audience"]
    title: str
    description: str
    potential_impact: Dict[str, float] = Field(default_factory=dict)
    difficulty: Literal["easy", "medium", "hard"] = "medium"
    time_to_implement: int = 7  # days
    priority: Literal["low", "medium", "high"] = "medium"


class TrendAnalysis(BaseModel):
    """추세 분석"""
    content_trends: List[ContentTrend] = Field(default_factory=list)
    platform_trends: List[PlatformTrend] = Field(default_factory=list)
    emerging_opportunities: List[Opportunity] = Field(default_factory=list)


# ============================================================
# Recommendations
# ============================================================

class ExpectedResult(BaseModel):
    """기대 효과"""
    metric: str
    current_value: float
    expected_value: float
    timeframe: int  # days


class Recommendation(BaseModel):
    """성과 개선 추천"""
    id: str
    category: Literal["content", "timing", "platform"]
    title: str
    description: str
    impact: Literal["low", "medium", "high"]
    effort: Literal["low", "medium", "high"]
    priority: int
    action_items: List[str] = Field(default_factory=list)
    expected_results: List[ExpectedResult] = Field(default_factory=list)


# ============================================================
# Competitors
# ============================================================

class CompetitorSummary(BaseModel):
    """경쟁자 요약"""
    id: str
    name: str
    platform: Platform
    followers: int = 0
    engagement_rate: float = 0.0
    content_frequency: float = 0.0
    estimated_revenue: float = 0.0
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)


class BenchmarkComparison(BaseModel):
    """벤치마크 비교"""
    your_value: float
    competitor_average: float
    top_performer: float
    percentile: float
    trend: TrendDirection


class MarketPosition(BaseModel):
    """시장 내 위치 (팔로워 기준)"""
    rank: int
    total_competitors: int
    percentile: float


class CompetitorAnalysis(BaseModel):
    """경쟁자 분석"""
    competitors: List[CompetitorSummary] = Field(default_factory=list)
    market_position: MarketPosition
    competitive_advantages: List[str] = Field(default_factory=list)
    improvement_areas: List[str] = Field(default_factory=list)
    benchmarks: Dict[str, BenchmarkComparison] = Field(default_factory=dict)


# ============================================================
# Snapshot
# ============================================================

class AnalyticsSnapshot(BaseModel):
    """(user, period) 단위 분석 스냅샷"""
    id: Optional[str] = None
    user_id: str
    period: AnalyticsPeriod
    metrics: ContentMetrics
    platform_metrics: List[PlatformMetrics] = Field(default_factory=list)
    audience_metrics: AudienceMetrics
    engagement_metrics: EngagementMetrics
    growth_metrics: GrowthMetrics
    trends: TrendAnalysis
    recommendations: List[Recommendation] = Field(default_factory=list)
    competitor_analysis: Optional[CompetitorAnalysis] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def platform(self, platform: Platform):
        """플랫폼별 지표 조회 (없으면 None)"""
        for entry in self.platform_metrics:
            if entry.platform == platform:
                return entry
        return None

    def content_dict(self) -> dict:
        """저장/비교용 본문 (id, 타임스탬프 제외)"""
        return self.model_dump(mode="json", exclude={"id", "created_at", "updated_at"})
