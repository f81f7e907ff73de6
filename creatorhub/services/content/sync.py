"""
Content Sync Service
원본 콘텐츠를 여러 플랫폼용으로 변환하여 저장

대상 플랫폼별로 독립 실행되며 한 플랫폼의 실패가 다른 플랫폼에 영향을 주지 않음
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Tuple

from creatorhub.core.config import settings
from creatorhub.core.exceptions import NotFoundError, ValidationError
from creatorhub.domain.models import Platform, ContentItem
from creatorhub.models.content import (
    AdaptableField,
    PlatformContent,
    SyncResult,
    SyncReport,
    PlatformSyncState,
    SyncSuggestion,
    SyncStatus,
)
from creatorhub.services.content.adapter import ContentAdapter
from creatorhub.services.storage.base import ContentStore

logger = logging.getLogger(__name__)


def to_platform_content(item: ContentItem) -> PlatformContent:
    """저장된 콘텐츠를 변환 입력으로"""
    metadata = item.metadata or {}
    return PlatformContent(
        id=item.content_id,
        platform=item.platform,
        title=item.title,
        description=(item.body or {}).get('description') or "",
        format=item.content_type,
        duration=metadata.get('duration'),
        tags=list(metadata.get('tags') or []),
        metadata=metadata
    )


def format_reach(value: float) -> str:
    """도달 수 표기 (1.2M / 25K / 800)"""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.0f}K"
    return f"{value:.0f}"


class ContentSyncService:
    """
    크로스 플랫폼 동기화

    Usage:
        service = ContentSyncService(store)
        report = service.sync_content_across_platforms(user_id, content_id, ["tiktok", "twitch"])
    """

    def __init__(
        self,
        store: ContentStore,
        adapter: Optional[ContentAdapter] = None,
        max_workers: Optional[int] = None
    ):
        self.store = store
        self.adapter = adapter or ContentAdapter()
        self.max_workers = max_workers or settings.SYNC_MAX_WORKERS

    def sync_content_across_platforms(
        self,
        user_id: str,
        source_content_id: str,
        target_platforms: List[str]
    ) -> SyncReport:
        """
        원본 콘텐츠를 대상 플랫폼들로 동기화

        Args:
            user_id: 사용자 ID
            source_content_id: 원본 콘텐츠 ID
            target_platforms: 대상 플랫폼 문자열 목록

        Returns:
            입력 순서대로의 플랫폼별 결과 + 중복 제거된 추천

        Raises:
            ValidationError: 대상 목록이 비어 있음
            NotFoundError: 원본 콘텐츠 없음
            StorageError: 원본 조회 실패
        """
        if not target_platforms:
            raise ValidationError("At least one target platform is required")

        source = self.store.get_content_item(source_content_id)
        if source is None:
            raise NotFoundError(
                f"Source content not found: {source_content_id}",
                {'content_id': source_content_id}
            )

        outcomes: List[Optional[Tuple[SyncResult, List[str]]]] = [None] * len(target_platforms)
        workers = max(1, min(self.max_workers, len(target_platforms)))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(self._safe_sync, user_id, source, target): index
                for index, target in enumerate(target_platforms)
            }
            for future in as_completed(futures):
                outcomes[futures[future]] = future.result()

        synced = [result for result, _ in outcomes]
        recommendations: List[str] = []
        for _, suggestions in outcomes:
            for suggestion in suggestions:
                if suggestion not in recommendations:
                    recommendations.append(suggestion)

        failed = sum(1 for r in synced if not r.success)
        logger.info(
            f"[ContentSync] {source_content_id}: {len(synced) - failed} synced, {failed} failed"
        )

        return SyncReport(synced=synced, recommendations=recommendations)

    def _safe_sync(
        self,
        user_id: str,
        source: ContentItem,
        target: str
    ) -> Tuple[SyncResult, List[str]]:
        """대상 하나 동기화 (에러 격리)"""
        try:
            return self._sync_one(user_id, source, target)
        except Exception as e:
            logger.warning(f"[ContentSync] target '{target}' failed: {e}")
            return SyncResult(platform=target, success=False, error=str(e) or type(e).__name__), []

    def _sync_one(
        self,
        user_id: str,
        source: ContentItem,
        target: str
    ) -> Tuple[SyncResult, List[str]]:
        platform = Platform.from_string(target)
        adaptation = self.adapter.adapt(to_platform_content(source), platform)

        body = dict(source.body or {})
        body['description'] = adaptation.get(AdaptableField.DESCRIPTION) or body.get('description')
        body['adaptation_notes'] = adaptation.suggestions

        metadata = dict(source.metadata or {})
        metadata.update({
            'duration': adaptation.get(AdaptableField.DURATION, metadata.get('duration')),
            'tags': adaptation.get(AdaptableField.TAGS, metadata.get('tags') or []),
            'source_platform': source.platform,
            'source_content_id': source.content_id,
            'adapted': True,
        })

        created = self.store.create_content_item(ContentItem(
            content_id="",
            user_id=user_id,
            platform=platform.value,
            content_type=adaptation.get(AdaptableField.FORMAT, source.content_type),
            title=adaptation.get(AdaptableField.TITLE, source.title),
            body=body,
            metadata=metadata
        ))

        return (
            SyncResult(platform=target, success=True, content_id=created.content_id),
            adaptation.suggestions
        )

    # ========================================
    # Status
    # ========================================

    def get_content_sync_status(self, user_id: str) -> SyncStatus:
        """플랫폼별 콘텐츠 현황과 동기화 제안"""
        stats = self.store.content_stats(user_id)

        platforms = []
        for platform in Platform:
            count, last = stats.get(platform.value, (0, None))
            platforms.append(PlatformSyncState(
                platform=platform,
                content_count=count,
                last_sync=last
            ))

        suggestions = []
        for source in platforms:
            if source.content_count == 0:
                continue
            for target in platforms:
                if target.platform == source.platform or target.content_count >= source.content_count:
                    continue
                suggestions.append(SyncSuggestion(
                    source=source.platform,
                    target=target.platform,
                    potential_content=source.content_count - target.content_count,
                    estimated_reach=self.estimate_reach(source.platform, target.platform, source.content_count)
                ))

        return SyncStatus(platforms=platforms, suggestions=suggestions)

    def estimate_reach(self, source: Platform, target: Platform, content_count: int) -> str:
        multiplier = self.adapter.catalog.reach_multipliers.get(source, {}).get(target, 1.0)
        return format_reach(content_count * multiplier * 1000)
