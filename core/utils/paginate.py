"""
목록 페이지네이션/필터 유틸리티

임의의 레코드 컬렉션(credit line 목록 등)에 대한 필터 → 정렬 → 페이지네이션.

클램프 정책 (Ledger 조회의 PageRequest와 의도적으로 다름):
- page: 최소 1로 클램프 (기본 1)
- pageSize: [1, 100]으로 클램프 (기본 10)
- 숫자가 아닌 값은 오류 없이 기본값 사용
- sortDirection: "desc" 외의 값은 모두 "asc"
"""

import dataclasses
import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from core.constants import Pagination
from core.types import SortDirection

T = TypeVar("T")

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


class ListField(str, Enum):
    """쿼리에서 사용하는 필드 키 (필터/정렬)"""

    ID = "id"
    STATUS = "status"
    BORROWER = "borrower"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


class FieldMapping:
    """쿼리 필드 키 → 레코드 속성 이름 매핑

    생성 시 검증:
    - 키는 ListField 값이어야 함
    - fields가 주어지면 매핑 대상은 fields 안에 있어야 함

    매핑되지 않은 키는 같은 이름의 속성으로 간주.

    Args:
        mapping: {쿼리 키: 속성 이름}
        fields: 레코드가 가진 속성 이름 집합 (None이면 대상 검증 생략)

    Raises:
        ValueError: 알 수 없는 키 또는 속성 이름
    """

    def __init__(
        self,
        mapping: Mapping[ListField | str, str] | None = None,
        fields: Iterable[str] | None = None,
    ):
        self.fields: frozenset[str] | None = frozenset(fields) if fields is not None else None
        self._mapping: dict[ListField, str] = {key: key.value for key in ListField}

        for key, attr in (mapping or {}).items():
            try:
                list_field = ListField(key)
            except ValueError:
                valid = [f.value for f in ListField]
                raise ValueError(f"Unknown query field: {key!r}. Allowed: {valid}") from None
            self._mapping[list_field] = attr

        if self.fields is not None:
            for list_field, attr in (mapping or {}).items():
                if attr not in self.fields:
                    raise ValueError(
                        f"Field mapping {ListField(list_field).value!r} → {attr!r}: "
                        f"record has no field {attr!r}"
                    )

    @classmethod
    def for_dataclass(
        cls,
        record_type: type,
        mapping: Mapping[ListField | str, str] | None = None,
    ) -> "FieldMapping":
        """dataclass 필드 기준으로 검증하는 매핑 생성"""
        names = [f.name for f in dataclasses.fields(record_type)]
        return cls(mapping, fields=names)

    def resolve(self, key: ListField | str) -> str:
        """쿼리 키의 속성 이름"""
        return self._mapping[ListField(key)]

    def resolve_sort(self, sort_by: str | None) -> str:
        """정렬 키 해석

        ListField 키 → 매핑된 속성, 매핑 대상 속성 이름 → 그대로,
        그 외(또는 None) → 기본 정렬 키(createdAt).
        매핑되지 않은 레코드 속성(events 등)은 허용하지 않음.
        """
        if sort_by:
            try:
                return self.resolve(sort_by)
            except ValueError:
                pass
            if sort_by in self._mapping.values():
                return sort_by
        return self.resolve(Pagination.LIST_DEFAULT_SORT_BY)

    def as_dict(self) -> dict[str, str]:
        return {key.value: attr for key, attr in self._mapping.items()}


@dataclass(frozen=True)
class ListQuery:
    """목록 조회 요청 (클램프 정책)"""

    page: int = Pagination.MIN_PAGE
    page_size: int = Pagination.LIST_DEFAULT_PAGE_SIZE
    status: str | None = None
    borrower: str | None = None
    sort_by: str | None = None
    sort_direction: SortDirection = SortDirection.ASC

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "ListQuery":
        """원시 쿼리 파라미터에서 생성 (오류 없이 클램프/기본값)

        Args:
            params: page, pageSize, status, borrower, sortBy, sortDirection
        """
        page = _parse_leading_int(params.get("page"), Pagination.MIN_PAGE)
        page_size = _parse_leading_int(params.get("pageSize"), Pagination.LIST_DEFAULT_PAGE_SIZE)

        direction = params.get("sortDirection")
        sort_direction = SortDirection.DESC if direction == SortDirection.DESC.value else SortDirection.ASC

        return cls(
            page=max(Pagination.MIN_PAGE, page),
            page_size=min(Pagination.MAX_LIMIT, max(Pagination.MIN_LIMIT, page_size)),
            status=params.get("status") or None,
            borrower=params.get("borrower") or None,
            sort_by=params.get("sortBy") or None,
            sort_direction=sort_direction,
        )


def _parse_leading_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else default
    match = _LEADING_INT_RE.match(str(value))
    return int(match.group(1)) if match else default


@dataclass(frozen=True)
class PaginatedResponse(Generic[T]):
    """목록 조회 결과"""

    items: list[T]
    total: int
    page: int
    page_size: int

    def to_dict(self, serialize: Callable[[T], Any] | None = None) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)

        Args:
            serialize: 항목 변환 함수 (None이면 그대로)
        """
        items = [serialize(item) for item in self.items] if serialize else list(self.items)
        return {
            "items": items,
            "total": self.total,
            "page": self.page,
            "pageSize": self.page_size,
        }


def _get(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _matches(record: Any, query: ListQuery, mapping: FieldMapping) -> bool:
    if query.status is not None and _get(record, mapping.resolve(ListField.STATUS)) != query.status:
        return False

    if query.borrower is not None:
        borrower = _get(record, mapping.resolve(ListField.BORROWER))
        if not borrower:
            return False
        if query.borrower.lower() not in str(borrower).lower():
            return False

    return True


def paginate_and_filter(
    records: Sequence[T],
    query: ListQuery | Mapping[str, Any],
    mapping: FieldMapping | None = None,
) -> PaginatedResponse[T]:
    """필터 → 정렬 → 페이지네이션

    - status: 정확히 일치
    - borrower: 대소문자 무시 부분 일치 (값이 비어 있으면 제외)
    - 정렬: 안정 정렬 (동일 값은 입력 순서 유지), None은 가장 작은 값으로 취급

    Args:
        records: 대상 레코드 (dataclass 또는 Mapping)
        query: ListQuery 또는 원시 쿼리 파라미터
        mapping: 필드 매핑 (None이면 이름 그대로)

    Returns:
        PaginatedResponse
    """
    if not isinstance(query, ListQuery):
        query = ListQuery.from_params(query)
    mapping = mapping or FieldMapping()

    filtered = [record for record in records if _matches(record, query, mapping)]

    sort_key = mapping.resolve_sort(query.sort_by)
    filtered.sort(
        key=lambda record: _sort_value(_get(record, sort_key)),
        reverse=query.sort_direction == SortDirection.DESC,
    )

    start = (query.page - 1) * query.page_size
    return PaginatedResponse(
        items=filtered[start:start + query.page_size],
        total=len(filtered),
        page=query.page,
        page_size=query.page_size,
    )


def _sort_value(value: Any) -> tuple[bool, Any]:
    return (value is not None, value)
