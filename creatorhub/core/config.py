"""
전역 설정 관리
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """애플리케이션 전역 설정"""

    # ============================================
    # Application Settings
    # ============================================
    APP_NAME: str = "CreatorHub Analytics"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ============================================
    # Server Settings
    # ============================================
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000
    APP_RELOAD: bool = True

    # ============================================
    # Database (PostgreSQL / SQLite)
    # ============================================
    DATABASE_URL: Optional[str] = None
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "creatorhub"
    POSTGRES_USER: str = "creatorhub"
    POSTGRES_PASSWORD: str = ""
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_ECHO: bool = False

    # ============================================
    # Redis Cache (Optional)
    # ============================================
    REDIS_HOST: Optional[str] = None
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: Optional[str] = None
    REDIS_DB: int = 0
    CACHE_TTL: int = 3600
    PROGRESS_CACHE_TTL: int = 300

    # ============================================
    # Content Sync
    # ============================================
    SYNC_MAX_WORKERS: int = 3

    # ============================================
    # CORS Settings
    # ============================================
    CORS_ORIGINS: str = "http://localhost:3000"
    CORS_ALLOW_CREDENTIALS: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"  # 추가 환경변수 허용

    @property
    def database_url(self) -> str:
        """DATABASE_URL 우선, 없으면 POSTGRES_* 조합"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


# 싱글톤 인스턴스
settings = Settings()
