"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화 (OpenAPI 문서용)
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    timestamp: str = Field(..., description="응답 시간 (UTC, ISO-8601)")
    version: str = Field(..., description="API 버전")


class LifecycleEventResponse(BaseModel):
    """생명주기 이벤트"""

    action: str = Field(..., description="created/suspended/closed")
    timestamp: str = Field(..., description="발생 시간")


class CreditLineResponse(BaseModel):
    """Credit line"""

    id: str = Field(..., description="Credit line ID")
    status: str = Field(..., description="상태 (active/suspended/closed)")
    borrower: str | None = Field(default=None, description="차입자")
    createdAt: str = Field(..., description="생성 시간")
    updatedAt: str = Field(..., description="마지막 변경 시간")
    events: list[LifecycleEventResponse] = Field(default_factory=list, description="이벤트 이력")


class CreditLineEnvelope(BaseModel):
    """Credit line 단건 응답"""

    data: CreditLineResponse
    message: str | None = Field(default=None, description="처리 결과 메시지")


class CreditLineListResponse(BaseModel):
    """Credit line 목록 응답"""

    data: list[CreditLineResponse] = Field(default_factory=list)
    total: int = Field(..., description="필터 후 전체 개수")
    page: int = Field(..., description="현재 페이지")
    pageSize: int = Field(..., description="페이지 크기")


class TransactionResponse(BaseModel):
    """Ledger 거래"""

    id: str = Field(..., description="거래 ID")
    creditLineId: str = Field(..., description="Credit line ID")
    type: str = Field(..., description="draw/repayment/status_change")
    amount: str | None = Field(default=None, description="금액")
    currency: str | None = Field(default=None, description="통화")
    timestamp: str = Field(..., description="기록 시간")
    metadata: dict[str, Any] = Field(default_factory=dict, description="부가 정보")


class TransactionPageResponse(BaseModel):
    """거래 조회 결과"""

    transactions: list[TransactionResponse] = Field(default_factory=list)
    total: int = Field(..., description="필터 후 전체 개수")
    page: int = Field(..., description="현재 페이지")
    limit: int = Field(..., description="페이지 크기")
    totalPages: int = Field(..., description="전체 페이지 수 (최소 1)")


class TransactionPageEnvelope(BaseModel):
    """거래 조회 응답"""

    data: TransactionPageResponse


class AuditLogResponse(BaseModel):
    """감사 로그"""

    id: str
    action: str
    actor: str
    resourceType: str
    resourceId: str
    timestamp: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class AuditLogListResponse(BaseModel):
    """감사 로그 목록 응답"""

    data: list[AuditLogResponse] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """오류 응답"""

    error: str = Field(..., description="오류 메시지")
    field: str | None = Field(default=None, description="검증 실패 필드")
