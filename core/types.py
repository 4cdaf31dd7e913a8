"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class CreditLineStatus(str, Enum):
    """Credit line 상태

    전이 규칙은 core.domain.state_machines.CreditLineStateMachine 참조.
    """

    ACTIVE = "active"
    SUSPENDED = "suspended"
    CLOSED = "closed"


class LifecycleAction(str, Enum):
    """Credit line 생명주기 이벤트 (events[].action)"""

    CREATED = "created"
    SUSPENDED = "suspended"
    CLOSED = "closed"


class TransitionRequest(str, Enum):
    """요청된 상태 전이 동작 (InvalidTransitionError.requested_action)"""

    SUSPEND = "suspend"
    CLOSE = "close"


class TransactionType(str, Enum):
    """Ledger 거래 유형"""

    DRAW = "draw"
    REPAYMENT = "repayment"
    STATUS_CHANGE = "status_change"


class SortDirection(str, Enum):
    """정렬 방향"""

    ASC = "asc"
    DESC = "desc"


class AuditAction(str, Enum):
    """감사 로그 동작"""

    CREDIT_LINE_CREATED = "CREDIT_LINE_CREATED"
    CREDIT_LINE_UPDATED = "CREDIT_LINE_UPDATED"
    CREDIT_LINE_SUSPENDED = "CREDIT_LINE_SUSPENDED"
    CREDIT_LINE_CLOSED = "CREDIT_LINE_CLOSED"
    CREDIT_LINE_DRAWN = "CREDIT_LINE_DRAWN"
    CREDIT_LINE_REPAID = "CREDIT_LINE_REPAID"
