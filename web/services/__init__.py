"""
Web 서비스 패키지

비즈니스 로직 처리
"""

from web.services.audit_service import AuditLogEntry, AuditLogService
from web.services.credit_service import CreditService

__all__ = [
    "AuditLogEntry",
    "AuditLogService",
    "CreditService",
]
