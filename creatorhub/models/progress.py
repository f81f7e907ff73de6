"""
Progress Models
태스크 진행률 분석 결과 모델
"""

from pydantic import Field
from typing import List, Optional
from datetime import datetime

from creatorhub.models.base import BaseModel
from creatorhub.domain.models import Platform, TrendDirection, Pace


class ProgressOverview(BaseModel):
    """진행 개요"""
    total_tasks_completed: int = 0
    total_time_spent: int = 0  # minutes
    current_streak: int = 0
    longest_streak: int = 0
    average_tasks_per_day: float = 0.0
    average_quality_score: float = 0.0
    completion_rate: float = 0.0  # %, 하루 3개 기준
    predicted_completion_date: Optional[datetime] = None


class WeeklyStat(BaseModel):
    """주간 통계 (ISO 주, 월요일 시작)"""
    week: str
    tasks_completed: int = 0
    time_spent: int = 0
    quality_score: float = 0.0


class CategoryStat(BaseModel):
    """카테고리별 통계"""
    category: str
    count: int = 0
    percentage: float = 0.0
    average_time: float = 0.0


class PlatformProgress(BaseModel):
    """플랫폼별 진행"""
    platform: Platform
    tasks_completed: int = 0
    milestones_achieved: int = 0
    next_milestone: Optional[str] = None


class TimeAnalysis(BaseModel):
    """시간대 분석"""
    most_productive_hour: int = 14
    most_productive_day: str = "Monday"
    average_session_length: float = 0.0
    total_days_active: int = 0


class QualityMetrics(BaseModel):
    """품질 지표"""
    average_quality: float = 0.0
    quality_trend: TrendDirection = TrendDirection.STABLE
    high_quality_tasks: int = 0
    low_quality_tasks: int = 0


class ProjectedMilestone(BaseModel):
    """마일스톤 예상 달성일"""
    milestone: str
    estimated_date: datetime


class ProgressPredictions(BaseModel):
    """예측"""
    estimated_completion_date: Optional[datetime] = None
    current_pace: Pace = Pace.ON_TRACK
    recommended_daily_tasks: int = 3
    projected_milestones: List[ProjectedMilestone] = Field(default_factory=list)


class ProgressAnalytics(BaseModel):
    """진행률 분석 전체"""
    overview: ProgressOverview
    weekly_stats: List[WeeklyStat] = Field(default_factory=list)
    category_breakdown: List[CategoryStat] = Field(default_factory=list)
    platform_stats: List[PlatformProgress] = Field(default_factory=list)
    time_analysis: TimeAnalysis = Field(default_factory=TimeAnalysis)
    quality_metrics: QualityMetrics = Field(default_factory=QualityMetrics)
    predictions: ProgressPredictions = Field(default_factory=ProgressPredictions)


# ============================================================
# Prediction
# ============================================================

class MilestoneProjection(BaseModel):
    """마일스톤 예측"""
    name: str
    estimated_date: datetime
    requirement: str = "{}"


class ProgressPrediction(BaseModel):
    """남은 기간/태스크 기반 예측"""
    days_remaining: int = 0
    tasks_remaining: int = 0
    recommended_pace: str = "maintain current pace"
    estimated_completion: Optional[datetime] = None
    milestone_projections: List[MilestoneProjection] = Field(default_factory=list)
