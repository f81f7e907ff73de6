"""
Content API
크로스 플랫폼 변환 / 전략 / 동기화 엔드포인트
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from typing import Optional, List
import logging

from creatorhub.api.v1.deps import get_adapter, get_sync_service
from creatorhub.models.content import (
    PlatformContent,
    ContentAdaptation,
    CrossPlatformStrategy,
    SyncReport,
    SyncStatus,
)
from creatorhub.services.content import ContentAdapter, ContentSyncService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content")


# ============================================================
# Request Models
# ============================================================

class AdaptRequest(BaseModel):
    """변환 요청"""
    source: PlatformContent = Field(..., description="원본 콘텐츠")
    target_platform: str = Field(..., description="youtube | tiktok | twitch")


class SyncRequest(BaseModel):
    """동기화 요청"""
    user_id: str
    source_content_id: str
    target_platforms: List[str] = Field(..., description="대상 플랫폼 목록")


# ============================================================
# API Endpoints
# ============================================================

@router.post("/adapt", response_model=ContentAdaptation)
def adapt_content(
    request: AdaptRequest,
    adapter: ContentAdapter = Depends(get_adapter)
):
    """대상 플랫폼 제약에 맞게 변환 (변경 필드만 반환)"""
    return adapter.adapt(request.source, request.target_platform)


@router.post("/sync", response_model=SyncReport)
def sync_content(
    request: SyncRequest,
    service: ContentSyncService = Depends(get_sync_service)
):
    """
    여러 플랫폼으로 동기화

    일부 플랫폼이 실패해도 200으로 플랫폼별 결과를 반환합니다.
    """
    return service.sync_content_across_platforms(
        request.user_id,
        request.source_content_id,
        request.target_platforms
    )


@router.get("/strategy", response_model=CrossPlatformStrategy)
def get_strategy(
    content_type: str = Query(..., description="tutorial | entertainment | educational"),
    content_id: Optional[str] = Query(None),
    adapter: ContentAdapter = Depends(get_adapter)
):
    """콘텐츠 유형별 플랫폼 전략"""
    return adapter.strategy(content_type, content_id=content_id)


@router.get("/sync-status/{user_id}", response_model=SyncStatus)
def get_sync_status(
    user_id: str,
    service: ContentSyncService = Depends(get_sync_service)
):
    """플랫폼별 콘텐츠 현황과 동기화 제안"""
    return service.get_content_sync_status(user_id)
