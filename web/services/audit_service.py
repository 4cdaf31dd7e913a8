"""
감사 로그 서비스

변경 요청 성공 후 (action, actor, resource_type, resource_id, metadata) 기록.
core는 감사 로그에 의존하지 않으며, 기록 실패는 이 경계에서만 흡수됨.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4

from core.types import AuditAction
from core.utils.timezone import now_utc, to_iso

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditLogEntry:
    """감사 로그 항목"""

    id: str
    action: str
    actor: str
    resource_type: str
    resource_id: str
    ts: datetime
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "id": self.id,
            "action": self.action,
            "actor": self.actor,
            "resourceType": self.resource_type,
            "resourceId": self.resource_id,
            "timestamp": to_iso(self.ts),
            "metadata": dict(self.metadata),
        }


class AuditLogService:
    """감사 로그 저장소 (메모리)"""

    def __init__(self) -> None:
        self._entries: list[AuditLogEntry] = []
        self._lock = threading.Lock()

    def record(
        self,
        action: AuditAction | str,
        actor: str,
        resource_type: str,
        resource_id: str,
        metadata: dict[str, Any] | None = None,
    ) -> AuditLogEntry:
        """감사 로그 기록"""
        entry = AuditLogEntry(
            id=str(uuid4()),
            action=action.value if isinstance(action, AuditAction) else action,
            actor=actor,
            resource_type=resource_type,
            resource_id=resource_id,
            ts=now_utc(),
            metadata=dict(metadata or {}),
        )
        with self._lock:
            self._entries.append(entry)
        return entry

    def list(self, resource_id: str | None = None) -> list[AuditLogEntry]:
        """감사 로그 조회 (기록 순서)

        Args:
            resource_id: 지정 시 해당 리소스만
        """
        with self._lock:
            entries = list(self._entries)
        if resource_id is None:
            return entries
        return [e for e in entries if e.resource_id == resource_id]

    def reset(self) -> None:
        """전체 삭제 (테스트용)"""
        with self._lock:
            self._entries.clear()


def record_audit_safely(
    audit: AuditLogService | None,
    action: AuditAction,
    actor: str,
    resource_id: str,
    metadata: dict[str, Any] | None = None,
) -> None:
    """감사 로그 기록 (fire-and-forget)

    실패해도 요청 처리에는 영향을 주지 않음.
    """
    if audit is None:
        return
    try:
        audit.record(action, actor, "credit_line", resource_id, metadata)
    except Exception as e:
        logger.warning(f"감사 로그 기록 실패: {action.value} {resource_id}: {e}")
