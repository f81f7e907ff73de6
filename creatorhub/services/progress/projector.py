"""
Progress Projector
태스크 완료 로그 기반 진행률 분석 및 완료 예측

전체 로그를 매 호출마다 스캔하므로 자주 호출되는 경로는 캐시를 사용
"""

import json
import math
import logging
from collections import OrderedDict
from datetime import datetime, date, timedelta
from typing import List, Optional, Callable, Tuple, Dict

from creatorhub.core.config import settings
from creatorhub.domain.models import (
    Platform,
    TrendDirection,
    Pace,
    UserProfile,
    TaskCompletion,
    Milestone,
)
from creatorhub.models.progress import (
    ProgressAnalytics,
    ProgressOverview,
    WeeklyStat,
    CategoryStat,
    PlatformProgress,
    TimeAnalysis,
    QualityMetrics,
    ProjectedMilestone,
    ProgressPredictions,
    MilestoneProjection,
    ProgressPrediction,
)
from creatorhub.services.shared.cache import CacheClient
from creatorhub.services.storage.base import ProgressStore

logger = logging.getLogger(__name__)

# 3 phase, 90일 로드맵
ROADMAP_DAYS = 90
ROADMAP_PHASES = 3
DEFAULT_TOTAL_TASKS = 90
TARGET_TASKS_PER_DAY = 3
PACE_BAND = 10.0

QUALITY_WINDOW = 10
QUALITY_THRESHOLD = 0.5
HIGH_QUALITY = 4
LOW_QUALITY = 2

DEFAULT_PRODUCTIVE_HOUR = 14
WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
UNCATEGORIZED = "uncategorized"
CACHE_NAMESPACE = "progress"


# ============================================================
# Pure Helpers
# ============================================================

def calculate_streaks(dates: List[date], today: date) -> Tuple[int, int]:
    """
    (current_streak, longest_streak)

    날짜는 저장된 로컬 날짜 그대로 사용 (타임존 변환 없음)
    마지막 완료일이 오늘 또는 어제일 때만 current_streak 유지
    """
    if not dates:
        return 0, 0

    ordered = sorted(set(dates))
    longest = 0
    running = 0
    previous: Optional[date] = None

    for day in ordered:
        if previous is not None and (day - previous).days == 1:
            running += 1
        else:
            running = 1
        longest = max(longest, running)
        previous = day

    current = running if (today - ordered[-1]).days <= 1 else 0
    return current, longest


def first_argmax(counts: List[int]) -> int:
    """최대값 인덱스 (동률이면 앞쪽)"""
    best = 0
    for index, value in enumerate(counts):
        if value > counts[best]:
            best = index
    return best


def classify_pace(actual: float, expected: float, band: float = PACE_BAND) -> Pace:
    if actual >= expected + band:
        return Pace.AHEAD
    if actual <= expected - band:
        return Pace.BEHIND
    return Pace.ON_TRACK


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


# ============================================================
# Projector
# ============================================================

class ProgressProjector:
    """
    진행률 분석기

    Usage:
        projector = ProgressProjector(store)
        analytics = projector.compute_progress(user_id)
    """

    def __init__(
        self,
        store: ProgressStore,
        cache: Optional[CacheClient] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.store = store
        self.cache = cache
        self.clock = clock

    # ========================================
    # Public API
    # ========================================

    def compute_progress(self, user_id: str, refresh: bool = False) -> ProgressAnalytics:
        """
        사용자 전체 진행률 분석

        refresh=True면 캐시를 건너뛰고 다시 계산한 결과로 덮어씀
        """
        if self.cache is None:
            return self._compute_progress(user_id)

        if refresh:
            analytics = self._compute_progress(user_id)
            self.cache.set(
                CACHE_NAMESPACE, user_id, analytics.model_dump(mode="json"), ttl=settings.PROGRESS_CACHE_TTL
            )
            return analytics

        payload = self.cache.get_or_set(
            CACHE_NAMESPACE,
            user_id,
            lambda: self._compute_progress(user_id).model_dump(mode="json"),
            ttl=settings.PROGRESS_CACHE_TTL
        )
        return ProgressAnalytics.model_validate(payload)

    def compute_prediction(self, user_id: str) -> ProgressPrediction:
        """남은 기간/태스크 기반 완료 예측"""
        now = self.clock()
        profile = self.store.get_profile(user_id)
        completed = len(self.store.list_task_completions(user_id))
        total_tasks = self._total_tasks(profile)

        tasks_remaining = max(0, total_tasks - completed)
        days_elapsed = self._days_elapsed(profile, now)
        days_remaining = max(0, ROADMAP_DAYS - days_elapsed)

        average = completed / days_elapsed if days_elapsed > 0 else 0.0
        required = tasks_remaining / days_remaining if days_remaining > 0 else 0.0

        if required > average * 1.2:
            recommended_pace = "increase pace"
        elif required < average * 0.8:
            recommended_pace = "can slow down slightly"
        else:
            recommended_pace = "maintain current pace"

        estimated = now + timedelta(days=tasks_remaining / average) if average > 0 else None

        tasks_per_milestone = total_tasks / 10
        projections = []
        for index, milestone in enumerate(self._upcoming_milestones(user_id, profile)):
            if average > 0:
                days_until = (index + 1) * tasks_per_milestone / average
            else:
                days_until = 30 * (index + 1)
            projections.append(MilestoneProjection(
                name=milestone.name,
                estimated_date=now + timedelta(days=days_until),
                requirement=json.dumps(milestone.requirement, sort_keys=True)
            ))

        return ProgressPrediction(
            days_remaining=days_remaining,
            tasks_remaining=tasks_remaining,
            recommended_pace=recommended_pace,
            estimated_completion=estimated,
            milestone_projections=projections
        )

    # ========================================
    # Computation
    # ========================================

    def _compute_progress(self, user_id: str) -> ProgressAnalytics:
        now = self.clock()
        profile = self.store.get_profile(user_id)
        completions = self.store.list_task_completions(user_id)
        total_tasks = self._total_tasks(profile)

        logger.debug(f"[ProgressProjector] {user_id}: {len(completions)} completions")

        projected_completion = self._project_completion(completions, total_tasks, now)

        return ProgressAnalytics(
            overview=self._overview(completions, profile, now, projected_completion),
            weekly_stats=self._weekly_stats(completions),
            category_breakdown=self._category_breakdown(completions),
            platform_stats=self._platform_stats(user_id, completions),
            time_analysis=self._time_analysis(completions),
            quality_metrics=self._quality_metrics(completions),
            predictions=self._predictions(user_id, completions, profile, total_tasks, now, projected_completion)
        )

    def _overview(
        self,
        completions: List[TaskCompletion],
        profile: Optional[UserProfile],
        now: datetime,
        projected_completion: Optional[datetime]
    ) -> ProgressOverview:
        total = len(completions)
        current, longest = calculate_streaks([c.completed_at.date() for c in completions], now.date())
        days_active = max(1, self._days_elapsed(profile, now) + 1)
        qualities = [c.quality for c in completions if c.quality is not None]

        return ProgressOverview(
            total_tasks_completed=total,
            total_time_spent=sum(c.time_spent or 0 for c in completions),
            current_streak=current,
            longest_streak=longest,
            average_tasks_per_day=total / days_active,
            average_quality_score=_mean(qualities),
            completion_rate=total / (days_active * TARGET_TASKS_PER_DAY) * 100,
            predicted_completion_date=projected_completion
        )

    def _weekly_stats(self, completions: List[TaskCompletion]) -> List[WeeklyStat]:
        weeks: Dict[str, Dict] = {}
        for c in completions:
            day = c.completed_at.date()
            key = (day - timedelta(days=day.weekday())).isoformat()
            week = weeks.setdefault(key, {'tasks': 0, 'time': 0, 'quality': []})
            week['tasks'] += 1
            week['time'] += c.time_spent or 0
            if c.quality is not None:
                week['quality'].append(c.quality)

        return [
            WeeklyStat(
                week=key,
                tasks_completed=stats['tasks'],
                time_spent=stats['time'],
                quality_score=_mean(stats['quality'])
            )
            for key, stats in sorted(weeks.items())
        ]

    def _category_breakdown(self, completions: List[TaskCompletion]) -> List[CategoryStat]:
        categories: "OrderedDict[str, Dict[str, int]]" = OrderedDict()
        for c in completions:
            entry = categories.setdefault(c.category or UNCATEGORIZED, {'count': 0, 'time': 0})
            entry['count'] += 1
            entry['time'] += c.time_spent or 0

        total = len(completions)
        stats = [
            CategoryStat(
                category=category,
                count=entry['count'],
                percentage=entry['count'] / total * 100 if total else 0.0,
                average_time=entry['time'] / entry['count'] if entry['count'] else 0.0
            )
            for category, entry in categories.items()
        ]
        stats.sort(key=lambda s: s.count, reverse=True)
        return stats

    def _platform_stats(self, user_id: str, completions: List[TaskCompletion]) -> List[PlatformProgress]:
        achieved = {a.milestone_id for a in self.store.list_achievements(user_id)}
        milestones = self.store.list_milestones()

        stats = []
        for platform in Platform:
            platform_milestones = [m for m in milestones if m.platform == platform]
            next_milestone = next(
                (m.name for m in platform_milestones if m.milestone_id not in achieved),
                None
            )
            stats.append(PlatformProgress(
                platform=platform,
                tasks_completed=sum(1 for c in completions if c.platform == platform),
                milestones_achieved=sum(1 for m in platform_milestones if m.milestone_id in achieved),
                next_milestone=next_milestone
            ))
        return stats

    def _time_analysis(self, completions: List[TaskCompletion]) -> TimeAnalysis:
        if not completions:
            return TimeAnalysis(
                most_productive_hour=DEFAULT_PRODUCTIVE_HOUR,
                most_productive_day=WEEKDAYS[0]
            )

        hours = [0] * 24
        weekdays = [0] * 7
        for c in completions:
            hours[c.completed_at.hour] += 1
            weekdays[c.completed_at.weekday()] += 1

        return TimeAnalysis(
            most_productive_hour=first_argmax(hours),
            most_productive_day=WEEKDAYS[first_argmax(weekdays)],
            average_session_length=sum(c.time_spent or 0 for c in completions) / len(completions),
            total_days_active=len({c.completed_at.date() for c in completions})
        )

    def _quality_metrics(self, completions: List[TaskCompletion]) -> QualityMetrics:
        scores = [c.quality for c in completions if c.quality is not None]
        if not scores:
            return QualityMetrics()

        trend = TrendDirection.STABLE
        if len(scores) >= QUALITY_WINDOW * 2:
            recent = _mean(scores[-QUALITY_WINDOW:])
            previous = _mean(scores[-QUALITY_WINDOW * 2:-QUALITY_WINDOW])
            if recent > previous + QUALITY_THRESHOLD:
                trend = TrendDirection.IMPROVING
            elif recent < previous - QUALITY_THRESHOLD:
                trend = TrendDirection.DECLINING

        return QualityMetrics(
            average_quality=_mean(scores),
            quality_trend=trend,
            high_quality_tasks=sum(1 for q in scores if q >= HIGH_QUALITY),
            low_quality_tasks=sum(1 for q in scores if q <= LOW_QUALITY)
        )

    def _predictions(
        self,
        user_id: str,
        completions: List[TaskCompletion],
        profile: Optional[UserProfile],
        total_tasks: int,
        now: datetime,
        projected_completion: Optional[datetime]
    ) -> ProgressPredictions:
        completed = len(completions)
        remaining = max(0, total_tasks - completed)

        actual = completed / total_tasks * 100 if total_tasks else 0.0
        pace = classify_pace(actual, self._expected_progress(profile, now))

        days_remaining = ROADMAP_DAYS - self._days_elapsed(profile, now)
        recommended = math.ceil(remaining / days_remaining) if days_remaining > 0 else TARGET_TASKS_PER_DAY

        projected = [
            ProjectedMilestone(milestone=m.name, estimated_date=now + timedelta(days=(index + 1) * 30))
            for index, m in enumerate(self._upcoming_milestones(user_id, profile))
        ]

        return ProgressPredictions(
            estimated_completion_date=projected_completion,
            current_pace=pace,
            recommended_daily_tasks=recommended,
            projected_milestones=projected
        )

    # ========================================
    # Internals
    # ========================================

    def _total_tasks(self, profile: Optional[UserProfile]) -> int:
        platform = (profile.selected_platform if profile else None) or Platform.YOUTUBE
        niche = (profile.selected_niche if profile else None) or "general"
        return self.store.count_tasks(platform, niche) or DEFAULT_TOTAL_TASKS

    def _days_elapsed(self, profile: Optional[UserProfile], now: datetime) -> int:
        if profile is None or profile.start_date is None:
            return 0
        return max(0, (now.date() - profile.start_date.date()).days)

    def _expected_progress(self, profile: Optional[UserProfile], now: datetime) -> float:
        """90일 로드맵 기준 기대 진행률 (시작일 없으면 phase 기준)"""
        if profile is not None and profile.start_date is not None:
            return min(100.0, self._days_elapsed(profile, now) / ROADMAP_DAYS * 100)
        phase = profile.current_phase if profile else 1
        return phase / ROADMAP_PHASES * 100

    def _project_completion(
        self,
        completions: List[TaskCompletion],
        total_tasks: int,
        now: datetime
    ) -> Optional[datetime]:
        """
        선형 완료일 예측

        첫 완료일~마지막 완료일 기준 일평균이 0이면 (완료 없음, 모두 같은 날) None
        """
        if not completions:
            return None

        span = (completions[-1].completed_at.date() - completions[0].completed_at.date()).days
        average = len(completions) / span if span > 0 else 0.0
        if average == 0:
            return None

        remaining = total_tasks - len(completions)
        if remaining <= 0:
            return now

        return now + timedelta(days=math.ceil(remaining / average))

    def _upcoming_milestones(self, user_id: str, profile: Optional[UserProfile], limit: int = 3) -> List[Milestone]:
        achieved = {a.milestone_id for a in self.store.list_achievements(user_id)}
        platform = profile.selected_platform if profile else None
        upcoming = [m for m in self.store.list_milestones(platform) if m.milestone_id not in achieved]
        return upcoming[:limit]
