"""
Analytics API
분석 스냅샷 / 내보내기 엔드포인트
"""

from fastapi import APIRouter, Depends, Query, Response
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field
from datetime import datetime, date, time, timedelta
import logging

from creatorhub.api.v1.deps import get_aggregator, get_exporter
from creatorhub.domain.models import Platform, PeriodType, ExportFormat
from creatorhub.models.analytics import AnalyticsPeriod, AnalyticsFilters, AnalyticsSnapshot
from creatorhub.services.analytics import MetricsAggregator, AnalyticsExporter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics")

DEFAULT_PERIOD_DAYS = 30


# ============================================================
# Request Models
# ============================================================

class AnalyticsRequest(BaseModel):
    """분석 요청"""
    start: datetime = Field(..., description="기간 시작")
    end: datetime = Field(..., description="기간 종료 (포함)")
    type: PeriodType = Field(PeriodType.CUSTOM, description="기간 타입")
    platforms: Optional[List[Platform]] = Field(None, description="플랫폼 필터")
    content_types: Optional[List[str]] = Field(None, description="콘텐츠 유형 필터")

    def period(self) -> AnalyticsPeriod:
        return AnalyticsPeriod(start=self.start, end=self.end, type=self.type)

    def filters(self) -> AnalyticsFilters:
        return AnalyticsFilters(platforms=self.platforms, content_types=self.content_types)


class EventRequest(BaseModel):
    """이벤트 기록 요청"""
    event_type: str = Field(..., description="view | engagement | content_published | follower_change | revenue 등")
    event_data: Dict[str, Any] = Field(default_factory=dict)


class EventResponse(BaseModel):
    """기록된 이벤트"""
    event_id: str
    user_id: str
    event_type: str
    event_data: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime


class ExportRequest(BaseModel):
    """내보내기 요청"""
    start: datetime
    end: datetime
    format: ExportFormat = Field(ExportFormat.JSON, description="pdf | csv | json | excel")
    sections: List[str] = Field(default_factory=list, description="비어 있으면 전체 섹션")


# ============================================================
# API Endpoints
# ============================================================

@router.post("/{user_id}", response_model=AnalyticsSnapshot)
def compute_analytics(
    user_id: str,
    request: AnalyticsRequest,
    aggregator: MetricsAggregator = Depends(get_aggregator)
):
    """
    분석 스냅샷 계산

    같은 (user, start, end)로 다시 호출하면 기존 스냅샷을 갱신합니다.
    """
    return aggregator.compute_analytics(user_id, request.period(), request.filters())


@router.get("/{user_id}", response_model=AnalyticsSnapshot)
def get_analytics(
    user_id: str,
    start: Optional[datetime] = Query(None, description="기간 시작 (기본: 종료일 29일 전 00:00)"),
    end: Optional[datetime] = Query(None, description="기간 종료 (기본: 오늘 23:59:59)"),
    platforms: Optional[List[Platform]] = Query(None),
    aggregator: MetricsAggregator = Depends(get_aggregator)
):
    """기간 쿼리로 분석 스냅샷 계산"""
    end = end or datetime.combine(date.today(), time.max)
    start = start or datetime.combine(end.date() - timedelta(days=DEFAULT_PERIOD_DAYS - 1), time.min)

    return aggregator.compute_analytics(
        user_id,
        AnalyticsPeriod(start=start, end=end),
        AnalyticsFilters(platforms=platforms)
    )


@router.post("/{user_id}/export")
def export_analytics(
    user_id: str,
    request: ExportRequest,
    exporter: AnalyticsExporter = Depends(get_exporter)
):
    """선택한 섹션을 요청 포맷으로 내보내기"""
    result = exporter.export_analytics(
        user_id,
        AnalyticsPeriod(start=request.start, end=request.end),
        request.format,
        request.sections
    )
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'}
    )


@router.post("/{user_id}/events", response_model=EventResponse, status_code=201)
def track_event(
    user_id: str,
    request: EventRequest,
    aggregator: MetricsAggregator = Depends(get_aggregator)
):
    """분석 이벤트 기록"""
    event = aggregator.track_event(user_id, request.event_type, request.event_data)
    return EventResponse(**vars(event))
