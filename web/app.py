"""
FastAPI 애플리케이션

라우터 등록, 예외 → HTTP 상태 매핑 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.credit.engine import CreditLineEngine
from core.domain.errors import (
    CreditError,
    CreditLineNotFoundError,
    DuplicateCreditLineError,
    InvalidTransitionError,
    ValidationError,
)
from web.routes import audit, credit, health
from web.services.audit_service import AuditLogService

logger = logging.getLogger(__name__)

# 도메인 예외 → HTTP 상태
ERROR_STATUS: dict[type[CreditError], int] = {
    CreditLineNotFoundError: 404,
    InvalidTransitionError: 409,
    DuplicateCreditLineError: 409,
    ValidationError: 400,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리"""
    logger.info("Creditra API 시작")
    yield
    logger.info("Creditra API 종료")


async def credit_error_handler(request: Request, exc: CreditError) -> JSONResponse:
    """도메인 예외 → JSON 오류 응답"""
    status_code = 500
    for error_type, code in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            status_code = code
            break

    content: dict[str, str] = {"error": str(exc)}
    if isinstance(exc, ValidationError):
        content["field"] = exc.field

    logger.info(f"{request.method} {request.url.path} 거부: {status_code} {exc}")
    return JSONResponse(status_code=status_code, content=content)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTPException → {"error": ...}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 스키마 검증 실패 → 400"""
    errors = jsonable_encoder(exc.errors())
    fields = [".".join(str(p) for p in err.get("loc", ())[1:]) for err in errors]
    message = f"Invalid request: {', '.join(f for f in fields if f) or 'body'}"
    return JSONResponse(status_code=400, content={"error": message, "details": errors})


def create_app(
    engine: CreditLineEngine | None = None,
    audit_service: AuditLogService | None = None,
) -> FastAPI:
    """FastAPI 앱 생성

    Args:
        engine: Credit line 엔진 (None이면 새로 생성)
        audit_service: 감사 로그 서비스 (None이면 새로 생성)

    Returns:
        FastAPI 앱
    """
    app = FastAPI(
        title="Creditra API",
        description="Credit line 생명주기 및 거래 원장 API",
        version=health.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.engine = engine if engine is not None else CreditLineEngine()
    app.state.audit = audit_service if audit_service is not None else AuditLogService()

    # CORS 설정 (개발용)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CreditError, credit_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # =========================================================================
    # API 라우터 등록
    # =========================================================================

    app.include_router(health.router)
    app.include_router(credit.router)
    app.include_router(audit.router)

    return app


app = create_app()
