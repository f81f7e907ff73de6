"""공유 인프라 (캐시)"""
from creatorhub.services.shared.cache import CacheClient, CacheConfig, CacheStats, get_cache_client

__all__ = ['CacheClient', 'CacheConfig', 'CacheStats', 'get_cache_client']
