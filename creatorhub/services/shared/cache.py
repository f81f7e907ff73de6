"""
Result Cache
사용자별 계산 결과(진행률 분석 등)를 Redis에 JSON으로 보관

키 형식: {key_prefix}:{namespace}:{user_id}
REDIS_HOST 미설정 또는 연결 실패 시 항상 miss인 no-op 캐시로 동작
"""

import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Optional, Any, Dict, Callable

import redis

from creatorhub.core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class CacheConfig:
    """캐시 설정"""
    host: Optional[str] = None
    port: int = 6379
    db: int = 0
    password: Optional[str] = None
    default_ttl: int = 3600
    key_prefix: str = "creatorhub"
    timeout: float = 2.0

    @classmethod
    def from_settings(cls) -> 'CacheConfig':
        return cls(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            password=settings.REDIS_PASSWORD,
            default_ttl=settings.CACHE_TTL,
        )


@dataclass
class CacheStats:
    """조회/저장 카운터 (동기화 워커와 요청 스레드가 공유)"""
    hits: int = 0
    misses: int = 0
    writes: int = 0
    errors: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, counter: str):
        with self._lock:
            setattr(self, counter, getattr(self, counter) + 1)

    def to_dict(self) -> Dict[str, Any]:
        lookups = self.hits + self.misses
        return {
            'hits': self.hits,
            'misses': self.misses,
            'writes': self.writes,
            'errors': self.errors,
            'hit_rate': round(self.hits / lookups * 100, 2) if lookups else 0.0,
        }


class CacheClient:
    """
    Redis 결과 캐시

    Usage:
        cache = CacheClient()
        payload = cache.get_or_set("progress", user_id, compute, ttl=300)
    """

    def __init__(self, config: Optional[CacheConfig] = None, client: Optional[redis.Redis] = None):
        self.config = config or CacheConfig.from_settings()
        self.stats = CacheStats()
        self.client = client

        if self.client is None and self.config.host:
            self.client = self._connect()

    @property
    def available(self) -> bool:
        return self.client is not None

    def _connect(self) -> Optional[redis.Redis]:
        client = redis.Redis(
            host=self.config.host,
            port=self.config.port,
            db=self.config.db,
            password=self.config.password,
            decode_responses=True,
            socket_timeout=self.config.timeout,
            socket_connect_timeout=self.config.timeout,
        )
        try:
            client.ping()
        except redis.RedisError as e:
            logger.warning(f"[Cache] Redis unavailable at {self.config.host}:{self.config.port}: {e}")
            return None

        logger.info(f"[Cache] Redis connected: {self.config.host}:{self.config.port}")
        return client

    def key(self, namespace: str, user_id: str) -> str:
        return f"{self.config.key_prefix}:{namespace}:{user_id}"

    def get(self, namespace: str, user_id: str) -> Optional[Any]:
        """저장된 값 (없거나 Redis 오류면 None)"""
        if not self.available:
            self.stats.record("misses")
            return None

        try:
            raw = self.client.get(self.key(namespace, user_id))
        except redis.RedisError as e:
            self.stats.record("errors")
            logger.warning(f"[Cache] get {namespace}/{user_id} failed: {e}")
            return None

        if raw is None:
            self.stats.record("misses")
            return None

        self.stats.record("hits")
        return json.loads(raw)

    def set(self, namespace: str, user_id: str, value: Any, ttl: Optional[int] = None) -> bool:
        """값 저장 (캐시 비활성 또는 오류면 False)"""
        if not self.available:
            return False

        try:
            self.client.setex(
                self.key(namespace, user_id),
                ttl or self.config.default_ttl,
                json.dumps(value, ensure_ascii=False, default=str)
            )
        except redis.RedisError as e:
            self.stats.record("errors")
            logger.warning(f"[Cache] set {namespace}/{user_id} failed: {e}")
            return False

        self.stats.record("writes")
        return True

    def get_or_set(
        self,
        namespace: str,
        user_id: str,
        factory: Callable[[], Any],
        ttl: Optional[int] = None
    ) -> Any:
        """
        캐시 값 반환, 없으면 factory() 결과를 저장 후 반환

        factory는 JSON 직렬화 가능한 값을 반환해야 함
        """
        value = self.get(namespace, user_id)
        if value is not None:
            return value

        value = factory()
        self.set(namespace, user_id, value, ttl)
        return value

    def health_check(self) -> Dict[str, Any]:
        if not self.available:
            return {'status': 'unavailable', 'stats': self.stats.to_dict()}

        try:
            self.client.ping()
        except redis.RedisError as e:
            return {'status': 'unhealthy', 'error': str(e), 'stats': self.stats.to_dict()}

        return {'status': 'healthy', 'stats': self.stats.to_dict()}

    def close(self):
        if self.client is not None:
            self.client.close()
            logger.info("[Cache] Redis connection closed")


_cache_client: Optional[CacheClient] = None
_cache_lock = threading.Lock()


def get_cache_client() -> CacheClient:
    """프로세스 단위 캐시 클라이언트"""
    global _cache_client

    if _cache_client is None:
        with _cache_lock:
            if _cache_client is None:
                _cache_client = CacheClient()

    return _cache_client
