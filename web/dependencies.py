"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
Engine / 감사 로그 서비스는 app.state에 보관 (create_app에서 주입).
"""

from fastapi import Depends, Header, HTTPException, Request

from core.config.loader import AppSettings, get_settings
from core.constants import Defaults
from core.credit.engine import CreditLineEngine
from web.services.audit_service import AuditLogService
from web.services.credit_service import CreditService


def get_app_settings() -> AppSettings:
    """애플리케이션 설정 반환"""
    return get_settings().app


def get_engine(request: Request) -> CreditLineEngine:
    """Credit line 엔진 반환"""
    return request.app.state.engine


def get_audit_service(request: Request) -> AuditLogService | None:
    """감사 로그 서비스 반환 (없으면 None)"""
    return getattr(request.app.state, "audit", None)


def get_actor(
    x_user: str | None = Header(default=None, alias=Defaults.ACTOR_HEADER),
) -> str:
    """요청자 식별 (X-User 헤더, 없으면 anonymous)"""
    return x_user or Defaults.ANONYMOUS_ACTOR


def get_credit_service(
    engine: CreditLineEngine = Depends(get_engine),
    audit: AuditLogService | None = Depends(get_audit_service),
    actor: str = Depends(get_actor),
) -> CreditService:
    """Credit line 서비스 반환"""
    return CreditService(engine, audit, actor)


def require_admin(
    x_admin_api_key: str | None = Header(default=None, alias=Defaults.ADMIN_KEY_HEADER),
    settings: AppSettings = Depends(get_app_settings),
) -> None:
    """관리자 인증

    X-Admin-Api-Key 헤더가 설정된 관리자 키 중 하나와 일치해야 함.

    Raises:
        HTTPException: 401 (키 없음 또는 불일치)
    """
    if not settings.is_admin_key(x_admin_api_key):
        raise HTTPException(
            status_code=401,
            detail=f"Unauthorized: valid {Defaults.ADMIN_KEY_HEADER} header is required.",
        )
