"""
API Dependencies
라우터에서 사용하는 서비스 생성 (테스트에서 dependency_overrides로 교체)
"""

from fastapi import Depends

from creatorhub.services.storage import Store, get_store
from creatorhub.services.shared.cache import CacheClient, get_cache_client
from creatorhub.services.analytics import MetricsAggregator, AnalyticsExporter
from creatorhub.services.progress import ProgressProjector
from creatorhub.services.content import ContentAdapter, ContentSyncService


def get_cache() -> CacheClient:
    return get_cache_client()


def get_aggregator(store: Store = Depends(get_store)) -> MetricsAggregator:
    return MetricsAggregator(store)


def get_exporter(aggregator: MetricsAggregator = Depends(get_aggregator)) -> AnalyticsExporter:
    return AnalyticsExporter(aggregator)


def get_projector(
    store: Store = Depends(get_store),
    cache: CacheClient = Depends(get_cache)
) -> ProgressProjector:
    return ProgressProjector(store, cache=cache)


def get_adapter() -> ContentAdapter:
    return ContentAdapter()


def get_sync_service(
    store: Store = Depends(get_store),
    adapter: ContentAdapter = Depends(get_adapter)
) -> ContentSyncService:
    return ContentSyncService(store, adapter=adapter)
