"""
유틸리티 패키지

타임존 처리, 시계 추상화, 목록 페이지네이션 등 공통 유틸리티
"""

from core.utils.clock import Clock, FixedClock, SystemClock
from core.utils.timezone import (
    ensure_utc,
    now_utc,
    parse_iso8601,
    to_iso,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "ensure_utc",
    "now_utc",
    "parse_iso8601",
    "to_iso",
]
