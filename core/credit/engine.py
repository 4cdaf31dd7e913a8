"""
Credit Line Engine

Credit line 레코드를 소유하고 상태 머신을 강제하며,
허용된 모든 생명주기 이벤트/자금 이동을 Ledger에 기록.

원자성:
- 레코드 교체 + Ledger 추가는 하나의 락 범위에서 수행
- 읽기도 같은 락에서 스냅샷을 만들어 반환
  (상태 변경만 보이고 ledger 기록은 안 보이는 중간 상태 없음)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any

from core.domain.credit_line import CreditLine
from core.domain.errors import ValidationError
from core.domain.results import (
    Duplicate,
    Invalid,
    InvalidTransition,
    NotFound,
    Ok,
    Result,
)
from core.domain.state_machines import CreditLineStateMachine
from core.ledger.store import TransactionStore
from core.ledger.types import (
    PageRequest,
    TransactionFilter,
    TransactionPage,
    parse_amount,
)
from core.storage.credit_line_store import CreditLineStore
from core.types import (
    CreditLineStatus,
    LifecycleAction,
    TransactionType,
    TransitionRequest,
)
from core.utils.clock import Clock, SystemClock
from core.utils.paginate import (
    FieldMapping,
    ListQuery,
    PaginatedResponse,
    paginate_and_filter,
)

logger = logging.getLogger(__name__)

# 목록 조회 쿼리 키 → CreditLine 속성
CREDIT_LINE_FIELDS = FieldMapping.for_dataclass(
    CreditLine,
    {"createdAt": "created_at", "updatedAt": "updated_at"},
)


class CreditLineEngine:
    """Credit line 엔진

    모든 변경 연산은 결과 variant(Ok, NotFound, InvalidTransition,
    Invalid, Duplicate)를 반환. 예외 흐름이 필요하면 result.unwrap() 사용.

    Args:
        store: credit line 저장소 (None이면 새로 생성)
        ledger: 거래 원장 (None이면 새로 생성)
        clock: 시계 (None이면 SystemClock)
    """

    def __init__(
        self,
        store: CreditLineStore | None = None,
        ledger: TransactionStore | None = None,
        clock: Clock | None = None,
    ):
        self.store = store if store is not None else CreditLineStore()
        self.ledger = ledger if ledger is not None else TransactionStore()
        self.clock = clock or SystemClock()
        self._lock = threading.RLock()

    # =========================================================================
    # 조회
    # =========================================================================

    def get(self, credit_line_id: str) -> CreditLine | None:
        """credit line 조회 (부수 효과 없음)"""
        with self._lock:
            return self.store.get(credit_line_id)

    def list(self) -> list[CreditLine]:
        """전체 credit line 목록 (생성 순서)"""
        with self._lock:
            return self.store.values()

    def search(self, query: ListQuery | Mapping[str, Any]) -> PaginatedResponse[CreditLine]:
        """credit line 목록 필터/정렬/페이지네이션 (클램프 정책)

        Args:
            query: ListQuery 또는 {page, pageSize, status, borrower, sortBy, sortDirection}
        """
        return paginate_and_filter(self.list(), query, CREDIT_LINE_FIELDS)

    def get_transactions(
        self,
        credit_line_id: str,
        tx_filter: TransactionFilter | Mapping[str, Any] | None = None,
        page: PageRequest | Mapping[str, Any] | None = None,
    ) -> Result[TransactionPage]:
        """credit line의 거래 조회

        존재 확인을 필터/페이지 검증보다 먼저 수행.

        Args:
            credit_line_id: 대상 credit line
            tx_filter: TransactionFilter 또는 {type, from, to} 원시 값
            page: PageRequest 또는 {page, limit} 원시 값

        Returns:
            Ok(TransactionPage) | NotFound | Invalid
        """
        with self._lock:
            if credit_line_id not in self.store:
                return NotFound(credit_line_id)

            try:
                parsed_filter = _coerce_filter(tx_filter)
                parsed_page = _coerce_page(page)
            except ValidationError as e:
                return Invalid.from_error(e)

            return Ok(self.ledger.query(credit_line_id, parsed_filter, parsed_page))

    # =========================================================================
    # 생성 / 상태 전이
    # =========================================================================

    def create(
        self,
        credit_line_id: str,
        initial_status: CreditLineStatus | str = CreditLineStatus.ACTIVE,
        borrower: str | None = None,
    ) -> Result[CreditLine]:
        """credit line 생성

        이미 존재하는 id는 거부 (덮어쓰지 않음).
        created 이벤트 1개와 status_change 거래 1개를 함께 기록.

        Returns:
            Ok(CreditLine) | Duplicate | Invalid
        """
        if not isinstance(credit_line_id, str) or not credit_line_id.strip():
            return Invalid("id", '"id" must be a non-empty string.')

        try:
            status = CreditLineStatus(initial_status)
        except ValueError:
            valid = ", ".join(s.value for s in CreditLineStatus)
            return Invalid("status", f'Invalid initial status {initial_status!r}. Must be one of: {valid}.')

        with self._lock:
            if credit_line_id in self.store:
                return Duplicate(credit_line_id)

            ts = self.clock.now()
            line = CreditLine.create(credit_line_id, status, ts, borrower=borrower)
            self.store.insert(line)
            self.ledger.record(
                credit_line_id,
                TransactionType.STATUS_CHANGE,
                ts,
                metadata={"action": LifecycleAction.CREATED.value},
            )

        logger.debug(f"Credit line created: {credit_line_id} ({status.value})")
        return Ok(line)

    def suspend(self, credit_line_id: str) -> Result[CreditLine]:
        """credit line 정지 (active → suspended)

        Returns:
            Ok(CreditLine) | NotFound | InvalidTransition
        """
        return self._transition(credit_line_id, TransitionRequest.SUSPEND)

    def close(self, credit_line_id: str) -> Result[CreditLine]:
        """credit line 종료 (active/suspended → closed)

        Returns:
            Ok(CreditLine) | NotFound | InvalidTransition
        """
        return self._transition(credit_line_id, TransitionRequest.CLOSE)

    def _transition(
        self,
        credit_line_id: str,
        request: TransitionRequest,
    ) -> Result[CreditLine]:
        with self._lock:
            line = self.store.get(credit_line_id)
            if line is None:
                return NotFound(credit_line_id)

            machine = CreditLineStateMachine(line.status)
            if not machine.can_apply(request):
                return InvalidTransition(line.status.value, request.value)

            action = machine.apply(request)
            ts = self._next_ts(line)
            updated = line.with_event(CreditLineStatus(machine.state), action, ts)
            self.store.replace(updated)
            self.ledger.record(
                credit_line_id,
                TransactionType.STATUS_CHANGE,
                ts,
                metadata={"action": action.value},
            )

        logger.debug(f"Credit line {credit_line_id}: {line.status.value} → {updated.status.value}")
        return Ok(updated)

    # =========================================================================
    # 자금 이동
    # =========================================================================

    def draw(
        self,
        credit_line_id: str,
        borrower_id: str,
        amount: Decimal | int | float | str,
        currency: str | None = None,
    ) -> Result[CreditLine]:
        """인출 기록

        상태는 변경하지 않음. 잔액/한도 계산은 하지 않음.

        Returns:
            Ok(CreditLine) | NotFound | Invalid
        """
        return self._record_movement(
            credit_line_id, TransactionType.DRAW, borrower_id, amount, currency
        )

    def repay(
        self,
        credit_line_id: str,
        borrower_id: str,
        amount: Decimal | int | float | str,
        currency: str | None = None,
    ) -> Result[CreditLine]:
        """상환 기록

        Returns:
            Ok(CreditLine) | NotFound | Invalid
        """
        return self._record_movement(
            credit_line_id, TransactionType.REPAYMENT, borrower_id, amount, currency
        )

    def _record_movement(
        self,
        credit_line_id: str,
        tx_type: TransactionType,
        borrower_id: str,
        amount: Any,
        currency: str | None,
    ) -> Result[CreditLine]:
        with self._lock:
            line = self.store.get(credit_line_id)
            if line is None:
                return NotFound(credit_line_id)

            if not isinstance(borrower_id, str) or not borrower_id.strip():
                return Invalid("borrowerId", '"borrowerId" must be a non-empty string.')
            try:
                value = parse_amount(amount)
            except ValidationError as e:
                return Invalid.from_error(e)

            ts = self._next_ts(line)
            updated = line.touched(ts)
            self.store.replace(updated)
            self.ledger.record(
                credit_line_id,
                tx_type,
                ts,
                amount=value,
                currency=currency,
                metadata={"borrowerId": borrower_id},
            )

        logger.debug(f"Credit line {credit_line_id}: {tx_type.value} {value}")
        return Ok(updated)

    # =========================================================================
    # 관리
    # =========================================================================

    def reset(self) -> None:
        """두 저장소를 함께 초기화 (테스트용)"""
        with self._lock:
            self.store.reset()
            self.ledger.reset()

    def _next_ts(self, line: CreditLine) -> datetime:
        """다음 변경 시각 (updated_at이 감소하지 않도록 보정)"""
        return max(self.clock.now(), line.updated_at)


def _coerce_filter(value: TransactionFilter | Mapping[str, Any] | None) -> TransactionFilter:
    if value is None:
        return TransactionFilter()
    if isinstance(value, TransactionFilter):
        return value
    return TransactionFilter.parse(
        type=value.get("type"),
        from_=value.get("from", value.get("from_")),
        to=value.get("to"),
    )


def _coerce_page(value: PageRequest | Mapping[str, Any] | None) -> PageRequest:
    if value is None:
        return PageRequest()
    if isinstance(value, PageRequest):
        return value
    return PageRequest.parse(page=value.get("page"), limit=value.get("limit"))
