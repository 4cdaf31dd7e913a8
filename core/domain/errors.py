"""
도메인 예외

Credit line / Ledger 연산 실패 분류.
모두 호출자(Web 계층)에서 복구 가능한 거부이며, 프로세스를 종료시키는 오류는 없음.

- CreditLineNotFoundError → 404
- InvalidTransitionError → 409
- DuplicateCreditLineError → 409
- ValidationError → 400
"""


class CreditError(Exception):
    """Credit 도메인 예외 기본 클래스"""
    pass


class CreditLineNotFoundError(CreditError):
    """존재하지 않는 credit line id"""

    def __init__(self, credit_line_id: str):
        self.credit_line_id = credit_line_id
        super().__init__(f'Credit line "{credit_line_id}" not found.')


class InvalidTransitionError(CreditError):
    """허용되지 않은 상태 전이

    Args:
        current_status: 현재 상태
        requested_action: 요청된 동작 (suspend, close)
    """

    def __init__(self, current_status: str, requested_action: str):
        self.current_status = current_status
        self.requested_action = requested_action
        super().__init__(
            f'Cannot {requested_action} credit line: '
            f'current status is "{current_status}".'
        )


class DuplicateCreditLineError(CreditError):
    """이미 존재하는 credit line id로 생성 시도"""

    def __init__(self, credit_line_id: str):
        self.credit_line_id = credit_line_id
        super().__init__(f'Credit line "{credit_line_id}" already exists.')


class ValidationError(CreditError):
    """필터/페이지네이션/금액 입력 검증 실패

    Args:
        field: 문제가 된 필드 이름 (type, from, to, page, limit, amount 등)
        message: 상세 메시지
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class DuplicateTransactionError(CreditError):
    """Ledger에 이미 존재하는 transaction id (덮어쓰기 금지)"""

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f'Transaction "{transaction_id}" already exists.')
