"""
Incoming Goods Tracker API - 메인 애플리케이션
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from incoming_goods.api.api import api_router
from incoming_goods.core.config import Settings, settings as default_settings
from incoming_goods.core.exceptions import IncomingGoodsError, InvalidTransition, StorageError
from incoming_goods.core.logging_setup import configure_logging
from incoming_goods.db.database import create_db_engine, create_session_factory, create_tables, seed_sample_orders
from incoming_goods.repositories.order_repository import SqlAlchemyOrderRepository
from incoming_goods.schemas.common import ErrorResponse
from incoming_goods.services.order_service import OrderLifecycleService
from incoming_goods.services.photo_service import PhotoIngestionService
from incoming_goods.storage.blob_store import LocalBlobStore

logger = structlog.get_logger()


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """FastAPI 애플리케이션 생성"""
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON, settings.LOG_FILE)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Incoming Goods Tracker API", version=settings.APP_VERSION)
        yield
        logger.info("Shutting down Incoming Goods Tracker API")
        app.state.engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="입고 주문 추적 및 사진 증빙 API",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # CORS 설정 (모바일 앱 접근 허용)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 저장소 / 서비스 구성
    logger.info("Initializing database", database_url=settings.DATABASE_URL)
    engine = create_db_engine(settings.DATABASE_URL)
    session_factory = create_session_factory(engine)
    try:
        create_tables(engine)
        if settings.SEED_SAMPLE_DATA:
            seed_sample_orders(session_factory)
        logger.info("Database tables initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    order_service = OrderLifecycleService(SqlAlchemyOrderRepository(session_factory))
    app.state.settings = settings
    app.state.engine = engine
    app.state.order_service = order_service
    app.state.photo_service = PhotoIngestionService(
        order_service,
        LocalBlobStore(settings.UPLOAD_DIR),
        max_bytes=settings.MAX_PHOTO_BYTES,
        allowed_extensions=settings.ALLOWED_PHOTO_EXTENSIONS,
        verify_signature=settings.VERIFY_IMAGE_SIGNATURE,
    )

    @app.exception_handler(IncomingGoodsError)
    async def handle_service_error(request: Request, exc: IncomingGoodsError):
        if isinstance(exc, StorageError):
            # 내부 경로 / 스택은 로그에만 남긴다
            logger.error(
                "Storage failure",
                method=request.method,
                path=request.url.path,
                order_id=exc.order_id,
                exc_info=exc,
            )
            body = ErrorResponse(message="Internal storage error")
        else:
            detail = exc.reason if isinstance(exc, InvalidTransition) else type(exc).__name__
            logger.info(
                "Request rejected",
                method=request.method,
                path=request.url.path,
                order_id=exc.order_id,
                error=type(exc).__name__,
                detail=exc.detail,
            )
            body = ErrorResponse(message=exc.detail, detail=detail)
        return JSONResponse(status_code=exc.status_code, content=body.model_dump())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        detail = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        logger.info("Request validation failed", method=request.method, path=request.url.path, detail=detail)
        body = ErrorResponse(message="Request validation failed", detail=detail)
        return JSONResponse(status_code=422, content=body.model_dump())

    # API 라우터 등록
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    async def root():
        """루트 엔드포인트"""
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.APP_VERSION,
            "docs": "/docs" if settings.DEBUG else "Documentation disabled in production"
        }

    @app.get("/health")
    async def health_check():
        """헬스 체크 엔드포인트"""
        return {"status": "healthy", "version": settings.APP_VERSION}

    return app
