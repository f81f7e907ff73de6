"""
Content Services
크로스 플랫폼 변환/전략/동기화
"""
from creatorhub.services.content.catalog import PlatformCatalog, PlatformConstraints, AdaptationRule, load_catalog
from creatorhub.services.content.adapter import ContentAdapter
from creatorhub.services.content.sync import ContentSyncService

__all__ = [
    'PlatformCatalog',
    'PlatformConstraints',
    'AdaptationRule',
    'load_catalog',
    'ContentAdapter',
    'ContentSyncService',
]
