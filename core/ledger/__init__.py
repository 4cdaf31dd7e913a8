"""
Ledger (거래 원장)

credit line별 거래를 기록하는 append-only 원장.
상태 변경(status_change)과 자금 이동(draw, repayment)을 모두 기록.

사용 예시:
```python
from core.ledger import TransactionStore, TransactionFilter, PageRequest
from core.types import TransactionType

ledger = TransactionStore()
ledger.record("line-1", TransactionType.STATUS_CHANGE, now, metadata={"action": "created"})

page = ledger.query(
    "line-1",
    TransactionFilter.parse(type="status_change"),
    PageRequest.parse(page=1, limit=20),
)
```
"""

from core.ledger.store import TransactionStore
from core.ledger.types import (
    PageRequest,
    Transaction,
    TransactionFilter,
    TransactionPage,
    parse_amount,
    total_pages,
)

__all__ = [
    # 핵심 클래스
    "TransactionStore",
    "Transaction",
    "TransactionFilter",
    "TransactionPage",
    "PageRequest",
    # 헬퍼
    "parse_amount",
    "total_pages",
]
