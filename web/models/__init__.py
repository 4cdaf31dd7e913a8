"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    CreditLineCreateRequest,
    MovementRequest,
)
from web.models.responses import (
    AuditLogListResponse,
    AuditLogResponse,
    CreditLineEnvelope,
    CreditLineListResponse,
    CreditLineResponse,
    ErrorResponse,
    HealthResponse,
    LifecycleEventResponse,
    TransactionPageEnvelope,
    TransactionPageResponse,
    TransactionResponse,
)

__all__ = [
    # Requests
    "CreditLineCreateRequest",
    "MovementRequest",
    # Responses
    "AuditLogListResponse",
    "AuditLogResponse",
    "CreditLineEnvelope",
    "CreditLineListResponse",
    "CreditLineResponse",
    "ErrorResponse",
    "HealthResponse",
    "LifecycleEventResponse",
    "TransactionPageEnvelope",
    "TransactionPageResponse",
    "TransactionResponse",
]
