"""
Credit line 도메인 모델

상태와 생명주기 이벤트 이력을 가진 불변 스냅샷.
변경은 새 스냅샷으로 교체하는 방식 (읽는 쪽에서 중간 상태를 볼 수 없음).
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from core.types import CreditLineStatus, LifecycleAction
from core.utils.timezone import to_iso


@dataclass(frozen=True)
class LifecycleEvent:
    """생명주기 이벤트 (created, suspended, closed)"""

    action: LifecycleAction
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "action": self.action.value,
            "timestamp": to_iso(self.timestamp),
        }


@dataclass(frozen=True)
class CreditLine:
    """Credit line

    불변식:
    - events[0].action == "created"
    - events 길이 == 해당 line의 status_change 거래 수
    - updated_at은 감소하지 않음
    """

    id: str
    status: CreditLineStatus
    created_at: datetime
    updated_at: datetime
    events: tuple[LifecycleEvent, ...] = field(default_factory=tuple)
    borrower: str | None = None

    @staticmethod
    def create(
        credit_line_id: str,
        status: CreditLineStatus,
        ts: datetime,
        borrower: str | None = None,
    ) -> "CreditLine":
        """새 credit line 생성 (created 이벤트 1개 포함)"""
        return CreditLine(
            id=credit_line_id,
            status=status,
            created_at=ts,
            updated_at=ts,
            events=(LifecycleEvent(LifecycleAction.CREATED, ts),),
            borrower=borrower,
        )

    def with_event(
        self,
        status: CreditLineStatus,
        action: LifecycleAction,
        ts: datetime,
    ) -> "CreditLine":
        """상태 전이 적용한 새 스냅샷"""
        return replace(
            self,
            status=status,
            updated_at=ts,
            events=self.events + (LifecycleEvent(action, ts),),
        )

    def touched(self, ts: datetime) -> "CreditLine":
        """updated_at만 갱신한 새 스냅샷 (draw/repay)"""
        return replace(self, updated_at=ts)

    @property
    def actions(self) -> list[str]:
        """이벤트 action 목록"""
        return [event.action.value for event in self.events]

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "id": self.id,
            "status": self.status.value,
            "borrower": self.borrower,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
            "events": [event.to_dict() for event in self.events],
        }
