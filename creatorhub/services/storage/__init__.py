"""
Storage Package
저장소 포트 및 구현체

Usage:
    from creatorhub.services.storage import get_store

    store = get_store()
"""

import logging
import threading
from typing import Optional

from creatorhub.services.storage.base import Store, AnalyticsStore, ProgressStore, ContentStore
from creatorhub.services.storage.memory import MemoryStore
from creatorhub.services.storage.sql import SqlStore

logger = logging.getLogger(__name__)

# Singleton instance
_store: Optional[Store] = None
_store_lock = threading.Lock()


def get_store() -> Store:
    """
    저장소 싱글톤

    DB 연결 실패 시 자동으로 인메모리 폴백 사용
    """
    global _store

    if _store is None:
        with _store_lock:
            if _store is None:
                try:
                    _store = SqlStore()
                    logger.info("Storage: SQL database connected")
                except Exception as e:
                    logger.warning(f"Database unavailable: {e}")
                    logger.warning("Falling back to in-memory storage (data is lost on restart)")
                    _store = MemoryStore()

    return _store


def set_store(store: Optional[Store]):
    """저장소 교체 (None이면 다음 호출 시 재생성)"""
    global _store
    with _store_lock:
        _store = store


def get_storage_type() -> str:
    """현재 저장소 타입 반환"""
    return _store.backend if _store is not None else "none"


__all__ = [
    'Store',
    'AnalyticsStore',
    'ProgressStore',
    'ContentStore',
    'MemoryStore',
    'SqlStore',
    'get_store',
    'set_store',
    'get_storage_type',
]
