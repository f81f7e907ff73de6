"""
Metrics Aggregator
(user, period) 단위 분석 스냅샷 계산 및 저장

흐름:
1. 기간 검증 (저장소 접근 전)
2. 사용자 조회
3. 콘텐츠 / 계정 / 일간 지표 로드 (필터 적용)
4. 카테고리별 지표 계산
5. 추천 (계산된 카테고리 기반)
6. 경쟁자 분석 (유료 등급만)
7. 스냅샷 upsert
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from creatorhub.core.exceptions import NotFoundError, ValidationError
from creatorhub.domain.models import SubscriptionTier, AnalyticsEvent
from creatorhub.models.analytics import (
    AnalyticsPeriod,
    AnalyticsFilters,
    AnalyticsSnapshot,
)
from creatorhub.services.storage.base import AnalyticsStore
from creatorhub.services.analytics.metrics import (
    build_content_metrics,
    build_platform_metrics,
    build_audience_metrics,
    build_engagement_metrics,
    build_growth_metrics,
    analyze_trends,
)
from creatorhub.services.analytics.recommendations import RecommendationInputs, generate_recommendations
from creatorhub.services.analytics.competitors import analyze_competitors

logger = logging.getLogger(__name__)


def _naive_utc(value: datetime) -> datetime:
    """저장된 시각과 비교하기 위해 naive UTC로 통일"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def normalize_period(period: AnalyticsPeriod) -> AnalyticsPeriod:
    """기간 검증 및 정규화"""
    start = _naive_utc(period.start)
    end = _naive_utc(period.end)
    if start > end:
        raise ValidationError(
            "Period start must not be after end",
            {'start': period.start.isoformat(), 'end': period.end.isoformat()}
        )
    return AnalyticsPeriod(start=start, end=end, type=period.type)


class MetricsAggregator:
    """
    분석 스냅샷 계산기

    Usage:
        aggregator = MetricsAggregator(store)
        snapshot = aggregator.compute_analytics(user_id, period)
    """

    def __init__(self, store: AnalyticsStore):
        self.store = store

    def compute_analytics(
        self,
        user_id: str,
        period: AnalyticsPeriod,
        filters: Optional[AnalyticsFilters] = None
    ) -> AnalyticsSnapshot:
        """
        분석 스냅샷 계산 후 저장

        Args:
            user_id: 사용자 ID
            period: 분석 기간 (양 끝 포함)
            filters: 플랫폼 / 콘텐츠 유형 필터

        Returns:
            저장된 스냅샷 (id, 타임스탬프 포함)

        Raises:
            ValidationError: start > end
            NotFoundError: 사용자 없음
            StorageError: 저장소 실패 (부분 저장 없음)
        """
        period = normalize_period(period)

        user = self.store.get_user(user_id)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}", {'user_id': user_id})

        filters = filters or AnalyticsFilters()
        platforms = filters.platforms or None

        content = self.store.list_content(
            user_id,
            period.start,
            period.end,
            platforms=platforms,
            content_types=filters.content_types or None
        )
        accounts = self.store.list_accounts(user_id, platforms=platforms)
        daily = self.store.list_daily_metrics(
            user_id,
            period.start.date(),
            period.end.date(),
            platforms=platforms
        )

        logger.debug(
            f"[Aggregator] {user_id}: {len(content)} content, "
            f"{len(accounts)} accounts, {len(daily)} daily rows"
        )

        metrics = build_content_metrics(content, period.days)
        platform_metrics = build_platform_metrics(accounts, content, daily)
        audience = build_audience_metrics(accounts, content, daily)
        engagement = build_engagement_metrics(content)
        growth = build_growth_metrics(accounts, daily, period)
        trends = analyze_trends(content, period)

        recommendations = generate_recommendations(RecommendationInputs(
            metrics=metrics,
            platform_metrics=platform_metrics,
            audience=audience,
            engagement=engagement,
            growth=growth,
            trends=trends
        ))

        competitor_analysis = None
        if user.subscription_tier != SubscriptionTier.FREE:
            competitor_analysis = analyze_competitors(
                self.store.list_competitors(user_id),
                {
                    'follower_growth': audience.audience_growth_rate,
                    'engagement_rate': audience.engagement_rate,
                    'content_frequency': metrics.publishing_frequency,
                    'content_quality': metrics.content_quality_score,
                },
                audience.total_audience
            )

        snapshot = self.store.upsert_snapshot(AnalyticsSnapshot(
            user_id=user_id,
            period=period,
            metrics=metrics,
            platform_metrics=platform_metrics,
            audience_metrics=audience,
            engagement_metrics=engagement,
            growth_metrics=growth,
            trends=trends,
            recommendations=recommendations,
            competitor_analysis=competitor_analysis
        ))

        logger.info(
            f"[Aggregator] snapshot {snapshot.id} for {user_id} "
            f"({period.start.date()} ~ {period.end.date()}, {len(recommendations)} recommendations)"
        )
        return snapshot

    def track_event(
        self,
        user_id: str,
        event_type: str,
        event_data: Optional[Dict[str, Any]] = None
    ) -> AnalyticsEvent:
        """분석 이벤트 기록 (append-only, 스냅샷에는 영향 없음)"""
        if not event_type or not event_type.strip():
            raise ValidationError("event_type is required", {'user_id': user_id})

        event = self.store.add_event(AnalyticsEvent(
            event_id="",
            user_id=user_id,
            event_type=event_type.strip(),
            event_data=dict(event_data or {})
        ))
        logger.debug(f"[Aggregator] event {event.event_type} for {user_id}")
        return event
