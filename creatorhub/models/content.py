"""
Content Models
크로스 플랫폼 콘텐츠 변환/동기화 모델
"""

from pydantic import Field
from typing import List, Optional, Dict, Any, Union, Literal
from datetime import datetime
from enum import Enum

from creatorhub.models.base import BaseModel
from creatorhub.domain.models import Platform


class AdaptableField(str, Enum):
    """변환 대상 필드"""
    TITLE = "title"
    DESCRIPTION = "description"
    FORMAT = "format"
    DURATION = "duration"
    TAGS = "tags"


class PlatformContent(BaseModel):
    """플랫폼 콘텐츠 (변환 입력)"""
    id: str = ""
    platform: str
    title: str
    description: str = ""
    format: str
    duration: Optional[int] = None  # seconds
    tags: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class FieldChange(BaseModel):
    """필드 단위 변경"""
    field: AdaptableField
    value: Union[int, str, List[str]]


class ContentAdaptation(BaseModel):
    """
    플랫폼 간 변환 결과

    changes에 없는 필드는 변경 없음을 의미
    """
    source_platform: Platform
    target_platform: Platform
    changes: List[FieldChange] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    guidance: Dict[str, str] = Field(default_factory=dict)

    def get(self, field: AdaptableField, default=None):
        """변경 값 조회 (변경 없으면 default)"""
        for change in self.changes:
            if change.field == field:
                return change.value
        return default

    @property
    def changed_fields(self) -> List[AdaptableField]:
        return [change.field for change in self.changes]


# ============================================================
# Strategy
# ============================================================

class PlatformStrategy(BaseModel):
    """플랫폼별 전략"""
    platform: Platform
    approach: str
    modifications: List[str] = Field(default_factory=list)
    estimated_effort: Literal["low", "medium", "high"] = "medium"
    tips: List[str] = Field(default_factory=list)


class CrossPlatformStrategy(BaseModel):
    """크로스 플랫폼 전략"""
    content_id: Optional[str] = None
    content_type: str
    strategies: List[PlatformStrategy] = Field(default_factory=list)


# ============================================================
# Sync
# ============================================================

class SyncResult(BaseModel):
    """대상 플랫폼별 동기화 결과"""
    platform: str
    success: bool
    content_id: Optional[str] = None
    error: Optional[str] = None


class SyncReport(BaseModel):
    """동기화 결과 보고"""
    synced: List[SyncResult] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    @property
    def failed(self) -> List[SyncResult]:
        return [result for result in self.synced if not result.success]


class PlatformSyncState(BaseModel):
    """플랫폼별 콘텐츠 현황"""
    platform: Platform
    content_count: int = 0
    last_sync: Optional[datetime] = None
    sync_enabled: bool = True


class SyncSuggestion(BaseModel):
    """동기화 제안"""
    source: Platform
    target: Platform
    potential_content: int
    estimated_reach: str


class SyncStatus(BaseModel):
    """사용자 콘텐츠 동기화 현황"""
    platforms: List[PlatformSyncState] = Field(default_factory=list)
    suggestions: List[SyncSuggestion] = Field(default_factory=list)
