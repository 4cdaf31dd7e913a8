"""
연산 결과 타입

Engine 연산은 예외 대신 결과 variant를 반환.
호출자는 match 문으로 각 경우를 명시적으로 처리하거나,
unwrap()으로 값을 꺼내면서 실패 시 대응 예외를 받을 수 있음.

사용 예:
    match engine.suspend("line-1"):
        case Ok(value=line):
            ...
        case NotFound(credit_line_id=cid):
            ...
        case InvalidTransition(current_status=s, requested_action=a):
            ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

from core.domain.errors import (
    CreditError,
    CreditLineNotFoundError,
    DuplicateCreditLineError,
    InvalidTransitionError,
    ValidationError,
)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """성공"""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


class _Failure(ABC):
    """실패 variant 공통 동작

    하위 클래스는 to_error()로 대응 도메인 예외를 제공해야 함.
    """

    @property
    def ok(self) -> bool:
        return False

    @abstractmethod
    def to_error(self) -> CreditError:
        """대응 도메인 예외"""
        ...

    def unwrap(self) -> NoReturn:
        raise self.to_error()


@dataclass(frozen=True)
class NotFound(_Failure):
    """존재하지 않는 credit line"""

    credit_line_id: str

    def to_error(self) -> CreditError:
        return CreditLineNotFoundError(self.credit_line_id)


@dataclass(frozen=True)
class InvalidTransition(_Failure):
    """허용되지 않은 상태 전이"""

    current_status: str
    requested_action: str

    def to_error(self) -> CreditError:
        return InvalidTransitionError(self.current_status, self.requested_action)


@dataclass(frozen=True)
class Invalid(_Failure):
    """입력 검증 실패"""

    field: str
    message: str

    @classmethod
    def from_error(cls, error: ValidationError) -> "Invalid":
        return cls(field=error.field, message=error.message)

    def to_error(self) -> CreditError:
        return ValidationError(self.field, self.message)


@dataclass(frozen=True)
class Duplicate(_Failure):
    """이미 존재하는 credit line id"""

    credit_line_id: str

    def to_error(self) -> CreditError:
        return DuplicateCreditLineError(self.credit_line_id)


Failure = Union[NotFound, InvalidTransition, Invalid, Duplicate]
Result = Union[Ok[T], NotFound, InvalidTransition, Invalid, Duplicate]
