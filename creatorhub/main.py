"""
CreatorHub Analytics - Main Application
FastAPI 메인 앱
"""

# 환경변수 로드 (가장 먼저 실행)
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import time

from creatorhub.core.config import settings
from creatorhub.core.exceptions import (
    CreatorHubError,
    NotFoundError,
    UnsupportedPlatformError,
    StorageError,
    ValidationError,
)

# 로깅 설정
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션 생명주기 관리

    Startup:
    - 저장소 연결 (실패 시 인메모리 폴백)
    - 캐시 연결 확인

    Shutdown:
    - 리소스 정리
    """
    # ============ STARTUP ============
    logger.info(f"Starting {settings.APP_NAME} ({settings.ENVIRONMENT})...")

    from creatorhub.services.storage import get_store
    store = get_store()
    logger.info(f"Storage backend: {store.backend}")

    from creatorhub.services.shared.cache import get_cache_client
    cache = get_cache_client()
    if cache.available:
        logger.info("Redis cache available")
    else:
        logger.warning("Redis cache unavailable (continuing without cache)")

    from creatorhub.services.content import load_catalog
    catalog = load_catalog()
    logger.info(f"Platform catalog loaded: {len(catalog.constraints)} platforms")

    yield

    # ============ SHUTDOWN ============
    logger.info(f"Shutting down {settings.APP_NAME}...")
    store.close()
    cache.close()


# FastAPI 앱 생성
app = FastAPI(
    title=settings.APP_NAME,
    description="크리에이터 분석 / 로드맵 진행률 / 크로스 플랫폼 콘텐츠 API",
    version=settings.APP_VERSION,
    lifespan=lifespan
)


# ============================================
# CORS 설정
# ============================================

ALLOWED_ORIGINS = [origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()]
logger.info(f"CORS Origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)


# 요청 로깅 미들웨어
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """요청/응답 로깅"""
    start_time = time.time()

    logger.info(f"{request.method} {request.url.path}")

    try:
        response = await call_next(request)

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        logger.info(
            f"{request.method} {request.url.path} | "
            f"Status: {response.status_code} | "
            f"Time: {process_time:.3f}s"
        )

        return response

    except Exception as e:
        logger.error(f"Request error: {e}", exc_info=True)
        raise


# ============================================
# 에러 핸들러
# ============================================

ERROR_STATUS = {
    NotFoundError: 404,
    UnsupportedPlatformError: 400,
    ValidationError: 422,
    StorageError: 500,
}


@app.exception_handler(CreatorHubError)
async def service_exception_handler(request: Request, exc: CreatorHubError):
    """서비스 에러 -> HTTP 상태 코드"""
    status_code = ERROR_STATUS.get(type(exc), 500)

    if status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}", exc_info=exc)
    else:
        logger.warning(f"{type(exc).__name__}: {exc.message}")

    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            **exc.to_dict(),
            "path": request.url.path
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """전역 에러 핸들러"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": str(exc),
            "path": request.url.path
        }
    )


# ============================================
# API 라우터 등록
# ============================================
from creatorhub.api.v1 import analytics, progress, content

app.include_router(
    analytics.router,
    prefix="/api/v1",
    tags=["Analytics"]
)

app.include_router(
    progress.router,
    prefix="/api/v1",
    tags=["Progress Analytics"]
)

app.include_router(
    content.router,
    prefix="/api/v1",
    tags=["Content"]
)


# 루트 엔드포인트
@app.get("/", tags=["System"])
async def root():
    """시스템 정보"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health", tags=["System"])
def health():
    """
    서비스별 상태

    저장소가 비정상이면 degraded, 캐시는 선택 사항
    """
    from creatorhub.services.storage import get_store
    from creatorhub.services.shared.cache import get_cache_client

    health_status = {
        "status": "healthy",
        "services": {}
    }

    storage = get_store().health_check()
    health_status["services"]["storage"] = storage
    if storage.get("status") != "healthy":
        health_status["status"] = "degraded"

    health_status["services"]["cache"] = get_cache_client().health_check()

    return health_status


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on {settings.APP_HOST}:{settings.APP_PORT}")

    uvicorn.run(
        "creatorhub.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=settings.APP_RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )
