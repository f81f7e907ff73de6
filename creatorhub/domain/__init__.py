"""도메인 레코드 및 Enum"""
from .models import (
    Platform,
    SubscriptionTier,
    PeriodType,
    ContentStatus,
    TrendDirection,
    Pace,
    ExportFormat,
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

__all__ = [
    "Platform",
    "SubscriptionTier",
    "PeriodType",
    "ContentStatus",
    "TrendDirection",
    "Pace",
    "ExportFormat",
    "UserRecord",
    "UserProfile",
    "ContentPerformance",
    "PlatformAccount",
    "DailyMetric",
    "CompetitorRecord",
    "DailyTask",
    "TaskCompletion",
    "Milestone",
    "MilestoneAchievement",
    "ContentItem",
    "AnalyticsEvent",
    "utc_now",
]
