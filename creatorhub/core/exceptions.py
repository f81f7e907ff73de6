"""
서비스 에러 정의
- 에러 유형별 예외 클래스
- API 계층에서 HTTP 상태 코드로 매핑
"""

from typing import Dict, Any
from datetime import datetime
from enum import Enum


class ErrorType(str, Enum):
    """에러 유형"""
    NOT_FOUND = "not_found"
    UNSUPPORTED_PLATFORM = "unsupported_platform"
    STORAGE = "storage"
    VALIDATION = "validation"
    INTERNAL = "internal"


class CreatorHubError(Exception):
    """서비스 에러 베이스"""

    error_type: ErrorType = ErrorType.INTERNAL

    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'message': self.message,
            'type': self.error_type.value,
            'details': self.details,
            'timestamp': self.timestamp.isoformat(),
        }


class NotFoundError(CreatorHubError):
    """사용자/콘텐츠 등 참조 대상 없음"""
    error_type = ErrorType.NOT_FOUND


class UnsupportedPlatformError(CreatorHubError):
    """지원하지 않는 플랫폼 또는 변환 규칙 없음"""
    error_type = ErrorType.UNSUPPORTED_PLATFORM

    def __init__(self, platform: str, message: str = None):
        super().__init__(
            message or f"Unsupported platform: {platform}",
            {'platform': platform},
        )
        self.platform = platform


class StorageError(CreatorHubError):
    """저장소 읽기/쓰기 실패"""
    error_type = ErrorType.STORAGE


class ValidationError(CreatorHubError):
    """입력 검증 실패 (저장소 접근 전에 발생)"""
    error_type = ErrorType.VALIDATION
