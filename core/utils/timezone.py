"""
타임존 유틸리티

내부 저장: UTC 원칙 준수를 위한 헬퍼 함수.
외부 입력(ISO-8601 문자열)은 모두 UTC aware datetime으로 정규화.
"""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    datetime.now(timezone.utc)의 축약형.

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """datetime을 UTC aware로 정규화

    Args:
        dt: datetime 객체 (naive면 UTC로 간주)

    Returns:
        UTC 타임존의 datetime
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_iso8601(value: str | datetime) -> datetime:
    """ISO-8601 문자열을 UTC datetime으로 파싱

    날짜만 있는 값("2024-01-01")은 자정으로 간주.
    "Z" 접미사 허용.

    Args:
        value: ISO-8601 문자열 또는 datetime

    Returns:
        UTC aware datetime

    Raises:
        ValueError: 파싱할 수 없는 값

    Example:
        >>> parse_iso8601("2024-01-01T09:00:00+09:00")
        datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str):
        raise ValueError(f"Not an ISO-8601 string: {value!r}")

    text = value.strip()
    if not text:
        raise ValueError("Empty timestamp")
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    return ensure_utc(datetime.fromisoformat(text))


def to_iso(dt: datetime) -> str:
    """UTC datetime을 ISO-8601 문자열로 변환 (직렬화용)"""
    return ensure_utc(dt).isoformat()
