"""
CreditLineStore - credit line 레코드 저장소

id로 키잉된 메모리 저장소. Engine만 쓰기를 수행함.
프로세스 수명 동안 유지되며, 테스트에서는 reset()으로 초기화.
"""

import logging

from core.domain.credit_line import CreditLine

logger = logging.getLogger(__name__)


class CreditLineStore:
    """Credit line 저장소

    삽입 순서를 유지 (values()는 생성 순서대로 반환).
    스레드 안전성은 호출자(Engine)의 락에 위임.
    """

    def __init__(self) -> None:
        self._lines: dict[str, CreditLine] = {}

    def __contains__(self, credit_line_id: object) -> bool:
        return credit_line_id in self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def get(self, credit_line_id: str) -> CreditLine | None:
        """id로 조회

        Returns:
            CreditLine 또는 None (없으면)
        """
        return self._lines.get(credit_line_id)

    def insert(self, line: CreditLine) -> CreditLine:
        """신규 저장

        Raises:
            KeyError: 이미 존재하는 id
        """
        if line.id in self._lines:
            raise KeyError(line.id)
        self._lines[line.id] = line
        return line

    def replace(self, line: CreditLine) -> CreditLine:
        """기존 레코드 교체

        Raises:
            KeyError: 존재하지 않는 id
        """
        if line.id not in self._lines:
            raise KeyError(line.id)
        self._lines[line.id] = line
        return line

    def values(self) -> list[CreditLine]:
        """전체 목록 (생성 순서)"""
        return list(self._lines.values())

    def reset(self) -> None:
        """전체 삭제 (테스트용)"""
        count = len(self._lines)
        self._lines.clear()
        logger.debug(f"CreditLineStore reset: {count} lines removed")
