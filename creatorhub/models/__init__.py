"""
응답/요청 모델 패키지
"""
from creatorhub.models.base import BaseModel
from creatorhub.models.analytics import (
    AnalyticsPeriod,
    AnalyticsFilters,
    AnalyticsSnapshot,
    ContentMetrics,
    ContentPerformanceSummary,
    YouTubeMetrics,
    TikTokMetrics,
    TwitchMetrics,
    AudienceMetrics,
    EngagementMetrics,
    GrowthMetrics,
    TrendAnalysis,
    Recommendation,
    ExpectedResult,
    CompetitorAnalysis,
    BenchmarkComparison,
)
from creatorhub.models.progress import ProgressAnalytics, ProgressPrediction
from creatorhub.models.content import (
    AdaptableField,
    PlatformContent,
    FieldChange,
    ContentAdaptation,
    PlatformStrategy,
    CrossPlatformStrategy,
    SyncResult,
    SyncReport,
    SyncStatus,
)

__all__ = [
    'BaseModel',
    'AnalyticsPeriod',
    'AnalyticsFilters',
    'AnalyticsSnapshot',
    'ContentMetrics',
    'ContentPerformanceSummary',
    'YouTubeMetrics',
    'TikTokMetrics',
    'TwitchMetrics',
    'AudienceMetrics',
    'EngagementMetrics',
    'GrowthMetrics',
    'TrendAnalysis',
    'Recommendation',
    'ExpectedResult',
    'CompetitorAnalysis',
    'BenchmarkComparison',
    'ProgressAnalytics',
    'ProgressPrediction',
    'AdaptableField',
    'PlatformContent',
    'FieldChange',
    'ContentAdaptation',
    'PlatformStrategy',
    'CrossPlatformStrategy',
    'SyncResult',
    'SyncReport',
    'SyncStatus',
]
