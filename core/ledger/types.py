"""
Ledger 타입 정의

Transaction(거래 기록), 조회 필터, 페이지 요청, 조회 결과.

페이지 요청은 엄격 검증 정책:
page < 1, 정수가 아닌 값, limit이 [1, 100] 범위 밖이면 ValidationError.
(목록 조회용 core.utils.paginate.ListQuery의 클램프 정책과 의도적으로 다름)
"""

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import uuid4

from core.constants import Pagination
from core.domain.errors import ValidationError
from core.types import TransactionType
from core.utils.timezone import ensure_utc, parse_iso8601, to_iso

_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")


@dataclass(frozen=True)
class Transaction:
    """Ledger 거래 기록 (불변)

    credit_line_id로 파티션되며, 한 번 기록되면 수정/삭제되지 않음.
    status_change 거래의 metadata에는 항상 action이 포함됨.
    """

    id: str
    credit_line_id: str
    type: TransactionType
    timestamp: datetime
    amount: Decimal | None = None
    currency: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def create(
        credit_line_id: str,
        tx_type: TransactionType,
        timestamp: datetime,
        amount: Decimal | None = None,
        currency: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> "Transaction":
        """새 거래 생성 (id 자동 생성)"""
        return Transaction(
            id=str(uuid4()),
            credit_line_id=credit_line_id,
            type=tx_type,
            timestamp=ensure_utc(timestamp),
            amount=amount,
            currency=currency,
            metadata=dict(metadata or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "id": self.id,
            "creditLineId": self.credit_line_id,
            "type": self.type.value,
            "amount": str(self.amount) if self.amount is not None else None,
            "currency": self.currency,
            "timestamp": to_iso(self.timestamp),
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class TransactionFilter:
    """거래 조회 필터

    모든 필드는 선택이며 AND 조건으로 결합.
    from/to는 양쪽 모두 포함 (from <= ts <= to).
    """

    type: TransactionType | None = None
    from_ts: datetime | None = None
    to_ts: datetime | None = None

    @classmethod
    def parse(
        cls,
        type: str | TransactionType | None = None,
        from_: str | datetime | None = None,
        to: str | datetime | None = None,
    ) -> "TransactionFilter":
        """원시 입력에서 필터 생성

        Args:
            type: draw, repayment, status_change 중 하나
            from_: 시작 시각 (ISO-8601)
            to: 종료 시각 (ISO-8601)

        Raises:
            ValidationError: 알 수 없는 type, 파싱 불가한 날짜
        """
        tx_type: TransactionType | None = None
        if type is not None:
            try:
                tx_type = TransactionType(type)
            except ValueError:
                valid = ", ".join(t.value for t in TransactionType)
                raise ValidationError(
                    "type", f'Invalid "type" filter: {type!r}. Must be one of: {valid}.'
                ) from None

        return cls(
            type=tx_type,
            from_ts=_parse_bound("from", from_),
            to_ts=_parse_bound("to", to),
        )

    def matches(self, tx: Transaction) -> bool:
        """필터 조건 일치 여부"""
        if self.type is not None and tx.type != self.type:
            return False
        if self.from_ts is not None and tx.timestamp < self.from_ts:
            return False
        if self.to_ts is not None and tx.timestamp > self.to_ts:
            return False
        return True


def _parse_bound(name: str, value: str | datetime | None) -> datetime | None:
    if value is None:
        return None
    try:
        return parse_iso8601(value)
    except ValueError:
        raise ValidationError(
            name, f'Invalid "{name}" date: {value!r}. Expected an ISO-8601 timestamp.'
        ) from None


@dataclass(frozen=True)
class PageRequest:
    """페이지 요청 (엄격 검증)

    page: 1 이상 정수 (기본 1)
    limit: 1~100 정수 (기본 20)
    """

    page: int = Pagination.MIN_PAGE
    limit: int = Pagination.LEDGER_DEFAULT_LIMIT

    @classmethod
    def parse(cls, page: Any = None, limit: Any = None) -> "PageRequest":
        """원시 입력에서 페이지 요청 생성

        Raises:
            ValidationError: 정수가 아니거나 범위를 벗어난 값 (클램프하지 않음)
        """
        parsed_page = _parse_int("page", page, Pagination.MIN_PAGE)
        parsed_limit = _parse_int("limit", limit, Pagination.LEDGER_DEFAULT_LIMIT)

        if parsed_page < Pagination.MIN_PAGE:
            raise ValidationError("page", f'"page" must be an integer >= 1, got {page!r}.')
        if not Pagination.MIN_LIMIT <= parsed_limit <= Pagination.MAX_LIMIT:
            raise ValidationError(
                "limit",
                f'"limit" must be an integer between {Pagination.MIN_LIMIT} '
                f'and {Pagination.MAX_LIMIT}, got {limit!r}.',
            )
        return cls(page=parsed_page, limit=parsed_limit)

    @property
    def offset(self) -> int:
        """슬라이스 시작 위치"""
        return (self.page - 1) * self.limit


def _parse_int(name: str, value: Any, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValidationError(name, f'"{name}" must be an integer, got {value!r}.')
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_RE.match(value):
        return int(value)
    raise ValidationError(name, f'"{name}" must be an integer, got {value!r}.')


@dataclass(frozen=True)
class TransactionPage:
    """거래 조회 결과"""

    transactions: list[Transaction]
    total: int
    page: int
    limit: int
    total_pages: int

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "transactions": [tx.to_dict() for tx in self.transactions],
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }


def total_pages(total: int, limit: int) -> int:
    """전체 페이지 수 (거래가 없어도 최소 1)"""
    return max(1, math.ceil(total / limit))


def parse_amount(value: Any) -> Decimal:
    """금액 검증 및 Decimal 변환

    유한한 양수만 허용. bool, NaN, Infinity, 숫자가 아닌 문자열, 0 이하는 거부.

    Raises:
        ValidationError: field="amount"
    """
    if value is None or isinstance(value, bool):
        raise ValidationError("amount", f'"amount" must be a positive number, got {value!r}.')

    try:
        if isinstance(value, float):
            amount = Decimal(str(value))
        elif isinstance(value, (int, Decimal)):
            amount = Decimal(value)
        elif isinstance(value, str):
            amount = Decimal(value.strip())
        else:
            raise InvalidOperation
    except (InvalidOperation, ValueError):
        raise ValidationError(
            "amount", f'"amount" must be a positive number, got {value!r}.'
        ) from None

    if not amount.is_finite() or amount <= 0:
        raise ValidationError("amount", f'"amount" must be a positive number, got {value!r}.')
    return amount
