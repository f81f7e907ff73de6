"""
CreatorHub - Core Package
설정 및 공통 에러 타입

Usage:
    from creatorhub.core import settings, NotFoundError
"""

from creatorhub.core.config import settings, Settings
from creatorhub.core.exceptions import (
    ErrorType,
    CreatorHubError,
    NotFoundError,
    UnsupportedPlatformError,
    StorageError,
    ValidationError,
)

__all__ = [
    'settings',
    'Settings',
    'ErrorType',
    'CreatorHubError',
    'NotFoundError',
    'UnsupportedPlatformError',
    'StorageError',
    'ValidationError',
]
