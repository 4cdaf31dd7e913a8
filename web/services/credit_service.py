"""
Credit line 서비스

Engine 연산 결과를 응답 딕셔너리로 변환하고, 성공한 변경 연산을 감사 로그에 기록.
실패 결과는 unwrap()으로 도메인 예외가 되어 app의 예외 핸들러에서 HTTP 상태로 매핑됨.
"""

from typing import Any

from core.credit.engine import CreditLineEngine
from core.types import AuditAction
from web.services.audit_service import AuditLogService, record_audit_safely


class CreditService:
    """Credit line 서비스

    Args:
        engine: Credit line 엔진
        audit: 감사 로그 서비스 (None이면 기록 생략)
        actor: 요청자 (X-User 헤더)
    """

    def __init__(
        self,
        engine: CreditLineEngine,
        audit: AuditLogService | None = None,
        actor: str = "anonymous",
    ):
        self.engine = engine
        self.audit = audit
        self.actor = actor

    def list_lines(self, params: dict[str, Any]) -> dict[str, Any]:
        """목록 조회 (클램프 정책 페이지네이션)"""
        result = self.engine.search(params)
        return {
            "data": [line.to_dict() for line in result.items],
            "total": result.total,
            "page": result.page,
            "pageSize": result.page_size,
        }

    def get_line(self, credit_line_id: str) -> dict[str, Any] | None:
        """단건 조회"""
        line = self.engine.get(credit_line_id)
        return line.to_dict() if line else None

    def create_line(
        self,
        credit_line_id: str,
        status: str | None = None,
        borrower: str | None = None,
    ) -> dict[str, Any]:
        """생성"""
        if status is None:
            line = self.engine.create(credit_line_id, borrower=borrower).unwrap()
        else:
            line = self.engine.create(credit_line_id, status, borrower=borrower).unwrap()
        self._audit(AuditAction.CREDIT_LINE_CREATED, line.id, {"status": line.status.value})
        return {"data": line.to_dict()}

    def suspend_line(self, credit_line_id: str) -> dict[str, Any]:
        """정지"""
        line = self.engine.suspend(credit_line_id).unwrap()
        self._audit(AuditAction.CREDIT_LINE_SUSPENDED, line.id)
        return {"data": line.to_dict(), "message": "Credit line suspended."}

    def close_line(self, credit_line_id: str) -> dict[str, Any]:
        """종료"""
        line = self.engine.close(credit_line_id).unwrap()
        self._audit(AuditAction.CREDIT_LINE_CLOSED, line.id)
        return {"data": line.to_dict(), "message": "Credit line closed."}

    def draw(
        self,
        credit_line_id: str,
        borrower_id: str,
        amount: Any,
        currency: str | None = None,
    ) -> dict[str, Any]:
        """인출 기록"""
        line = self.engine.draw(credit_line_id, borrower_id, amount, currency).unwrap()
        self._audit(
            AuditAction.CREDIT_LINE_DRAWN,
            line.id,
            {"borrowerId": borrower_id, "amount": str(amount), "currency": currency},
        )
        return {"data": line.to_dict(), "message": "Draw recorded."}

    def repay(
        self,
        credit_line_id: str,
        borrower_id: str,
        amount: Any,
        currency: str | None = None,
    ) -> dict[str, Any]:
        """상환 기록"""
        line = self.engine.repay(credit_line_id, borrower_id, amount, currency).unwrap()
        self._audit(
            AuditAction.CREDIT_LINE_REPAID,
            line.id,
            {"borrowerId": borrower_id, "amount": str(amount), "currency": currency},
        )
        return {"data": line.to_dict(), "message": "Repayment recorded."}

    def get_transactions(
        self,
        credit_line_id: str,
        filters: dict[str, Any],
        page: dict[str, Any],
    ) -> dict[str, Any]:
        """거래 조회 (엄격 검증 페이지네이션)"""
        result = self.engine.get_transactions(credit_line_id, filters, page).unwrap()
        return {"data": result.to_dict()}

    def _audit(
        self,
        action: AuditAction,
        credit_line_id: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        record_audit_safely(self.audit, action, self.actor, credit_line_id, metadata)
