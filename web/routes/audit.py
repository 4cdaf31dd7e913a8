"""
감사 로그 라우트

GET /api/audit/logs - 감사 로그 조회 (관리자)
"""

from fastapi import APIRouter, Depends, Query

from web.dependencies import get_audit_service, require_admin
from web.models.responses import AuditLogListResponse
from web.services.audit_service import AuditLogService

router = APIRouter(prefix="/api/audit", tags=["Audit"])


@router.get(
    "/logs",
    response_model=AuditLogListResponse,
    dependencies=[Depends(require_admin)],
)
async def list_audit_logs(
    resource_id: str | None = Query(default=None, alias="resourceId", description="리소스 ID 필터"),
    audit: AuditLogService | None = Depends(get_audit_service),
):
    """감사 로그 목록 (기록 순서)"""
    if audit is None:
        return {"data": []}
    return {"data": [entry.to_dict() for entry in audit.list(resource_id)]}
