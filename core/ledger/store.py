"""
Ledger 저장소

credit line별 거래 기록 저장 및 조회 (append-only)
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any

from core.domain.errors import DuplicateTransactionError
from core.ledger.types import (
    PageRequest,
    Transaction,
    TransactionFilter,
    TransactionPage,
    total_pages,
)
from core.types import TransactionType

logger = logging.getLogger(__name__)


class TransactionStore:
    """Ledger 저장소

    거래를 id로 키잉하여 저장하고, credit_line_id별 추가 순서(시간순)
    인덱스를 유지. 기록은 수정/삭제되지 않음 (reset 제외).

    스레드 안전성은 호출자(Engine)의 락에 위임.
    """

    def __init__(self) -> None:
        self._transactions: dict[str, Transaction] = {}
        self._by_line: dict[str, list[str]] = {}

    def __len__(self) -> int:
        return len(self._transactions)

    def append(self, transaction: Transaction) -> Transaction:
        """거래 추가

        Args:
            transaction: 추가할 거래

        Returns:
            추가된 거래

        Raises:
            DuplicateTransactionError: 이미 존재하는 id (덮어쓰지 않음)
        """
        if transaction.id in self._transactions:
            raise DuplicateTransactionError(transaction.id)

        self._transactions[transaction.id] = transaction
        self._by_line.setdefault(transaction.credit_line_id, []).append(transaction.id)

        logger.debug(
            f"Ledger append: {transaction.type.value} "
            f"line={transaction.credit_line_id} id={transaction.id}"
        )
        return transaction

    def record(
        self,
        credit_line_id: str,
        tx_type: TransactionType,
        timestamp: datetime,
        amount: Decimal | None = None,
        currency: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Transaction:
        """거래 생성 후 추가 (id 자동 생성)"""
        return self.append(
            Transaction.create(
                credit_line_id=credit_line_id,
                tx_type=tx_type,
                timestamp=timestamp,
                amount=amount,
                currency=currency,
                metadata=metadata,
            )
        )

    def get(self, transaction_id: str) -> Transaction | None:
        """id로 조회"""
        return self._transactions.get(transaction_id)

    def for_credit_line(self, credit_line_id: str) -> list[Transaction]:
        """credit line의 전체 거래 (추가 순서)"""
        return [self._transactions[tx_id] for tx_id in self._by_line.get(credit_line_id, [])]

    def count(
        self,
        credit_line_id: str | None = None,
        tx_type: TransactionType | None = None,
    ) -> int:
        """거래 수

        Args:
            credit_line_id: 지정 시 해당 line만
            tx_type: 지정 시 해당 유형만
        """
        if credit_line_id is None:
            transactions = list(self._transactions.values())
        else:
            transactions = self.for_credit_line(credit_line_id)
        if tx_type is None:
            return len(transactions)
        return sum(1 for tx in transactions if tx.type == tx_type)

    def query(
        self,
        credit_line_id: str,
        tx_filter: TransactionFilter | None = None,
        page: PageRequest | None = None,
    ) -> TransactionPage:
        """거래 조회 (필터 → 페이지네이션)

        1. credit_line_id로 선택
        2. type 필터
        3. from/to 필터 (양쪽 포함)
        4. total = 필터 후 개수
        5. total_pages = max(1, ceil(total / limit))
        6. [(page-1)*limit, page*limit) 슬라이스 (범위 밖이면 빈 목록)

        Args:
            credit_line_id: 대상 credit line
            tx_filter: 필터 (None이면 전체)
            page: 페이지 요청 (None이면 기본값)

        Returns:
            TransactionPage
        """
        tx_filter = tx_filter or TransactionFilter()
        page = page or PageRequest()

        filtered = [tx for tx in self.for_credit_line(credit_line_id) if tx_filter.matches(tx)]
        total = len(filtered)

        return TransactionPage(
            transactions=filtered[page.offset:page.offset + page.limit],
            total=total,
            page=page.page,
            limit=page.limit,
            total_pages=total_pages(total, page.limit),
        )

    def reset(self) -> None:
        """전체 삭제 (테스트용)"""
        count = len(self._transactions)
        self._transactions.clear()
        self._by_line.clear()
        logger.debug(f"TransactionStore reset: {count} transactions removed")
