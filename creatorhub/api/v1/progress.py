"""
Progress Analytics API
로드맵 진행률 / 완료 예측 엔드포인트
"""

from fastapi import APIRouter, Depends, Query
import logging

from creatorhub.api.v1.deps import get_projector
from creatorhub.models.progress import ProgressAnalytics, ProgressPrediction
from creatorhub.services.progress import ProgressProjector

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progress-analytics")


@router.get("/{user_id}", response_model=ProgressAnalytics)
def get_progress_analytics(
    user_id: str,
    refresh: bool = Query(False, description="캐시 무시 후 재계산"),
    projector: ProgressProjector = Depends(get_projector)
):
    """
    진행률 분석

    완료 로그 전체를 스캔합니다. (Redis 사용 가능 시 캐시)
    """
    return projector.compute_progress(user_id, refresh=refresh)


@router.get("/{user_id}/prediction", response_model=ProgressPrediction)
def get_progress_prediction(
    user_id: str,
    projector: ProgressProjector = Depends(get_projector)
):
    """남은 기간/태스크 기반 완료 예측"""
    return projector.compute_prediction(user_id)
