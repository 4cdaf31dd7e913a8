"""
헬스 체크 엔드포인트

GET /health - 서버 상태 확인
"""

from fastapi import APIRouter

from core.utils.timezone import now_utc, to_iso
from web.models.responses import HealthResponse

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """서버 상태 확인

    Returns:
        HealthResponse: status, timestamp, version 정보
    """
    return HealthResponse(
        status="ok",
        timestamp=to_iso(now_utc()),
        version=API_VERSION,
    )
