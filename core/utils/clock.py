"""
Clock 추상화

Engine이 datetime.now()를 직접 호출하지 않도록 주입 가능한 시계 제공.
테스트에서는 FixedClock으로 타임스탬프를 결정적으로 고정.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta

from core.utils.timezone import ensure_utc, now_utc


class Clock(ABC):
    """시계 인터페이스

    now()는 항상 UTC aware datetime을 반환해야 함.
    """

    @abstractmethod
    def now(self) -> datetime:
        """현재 시간 (UTC)"""
        ...


class SystemClock(Clock):
    """시스템 시계 (운영용)"""

    def now(self) -> datetime:
        return now_utc()


class FixedClock(Clock):
    """고정 시계 (테스트용)

    advance()로만 시간이 흐름.

    Args:
        start: 시작 시간 (naive면 UTC로 간주)
    """

    def __init__(self, start: datetime):
        self._current = ensure_utc(start)

    def now(self) -> datetime:
        return self._current

    def advance(self, **kwargs: float) -> datetime:
        """시간 진행

        Args:
            **kwargs: timedelta 인자 (seconds=1, minutes=5 등)

        Returns:
            진행 후 현재 시간
        """
        self._current = self._current + timedelta(**kwargs)
        return self._current

    def set(self, moment: datetime) -> None:
        """시간 강제 설정 (역행 테스트용)"""
        self._current = ensure_utc(moment)
