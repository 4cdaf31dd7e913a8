"""
State Machines

Credit line 상태 전이 관리.
전이 규칙은 TRANSITIONS 테이블(데이터)로 정의하고, 동작(suspend/close)을
목표 상태로 매핑하여 검증.
"""

import logging
from enum import Enum

from core.types import CreditLineStatus, LifecycleAction, TransitionRequest

logger = logging.getLogger(__name__)


class StateMachineError(Exception):
    """상태 전이 오류"""
    pass


class StateMachine:
    """상태 머신 기본 클래스

    Args:
        initial_state: 초기 상태
        transitions: 허용된 전이 정의 {from_state: [to_states]}
        name: 머신 이름 (로깅용)
    """

    def __init__(
        self,
        initial_state: str | Enum,
        transitions: dict[str, list[str]],
        name: str = "StateMachine",
    ):
        self._state = initial_state.value if isinstance(initial_state, Enum) else initial_state
        self._transitions = transitions
        self._name = name
        self._history: list[tuple[str, str]] = []

    @property
    def state(self) -> str:
        """현재 상태"""
        return self._state

    def can_transition(self, to_state: str | Enum) -> bool:
        """전이 가능 여부 확인

        Args:
            to_state: 목표 상태

        Returns:
            전이 가능 여부
        """
        target = to_state.value if isinstance(to_state, Enum) else to_state
        allowed = self._transitions.get(self._state, [])
        return target in allowed

    def transition(self, to_state: str | Enum) -> str:
        """상태 전이

        Args:
            to_state: 목표 상태

        Returns:
            새 상태

        Raises:
            StateMachineError: 허용되지 않은 전이
        """
        target = to_state.value if isinstance(to_state, Enum) else to_state

        if not self.can_transition(target):
            allowed = self._transitions.get(self._state, [])
            raise StateMachineError(
                f"{self._name}: Cannot transition from {self._state} to {target}. "
                f"Allowed: {allowed}"
            )

        old_state = self._state
        self._state = target
        self._history.append((old_state, target))

        logger.debug(f"{self._name}: {old_state} → {target}")

        return target

    @property
    def history(self) -> list[tuple[str, str]]:
        """상태 전이 이력"""
        return self._history.copy()


class CreditLineStateMachine(StateMachine):
    """Credit line 상태 머신

    전이 규칙:
    - active → suspended: 정지
    - active → closed: 종료
    - suspended → closed: 종료
    - closed: 종료 상태 (전이 없음)

    자기 전이(active → active 등)는 허용하지 않음.
    """

    TRANSITIONS: dict[str, list[str]] = {
        "active": ["suspended", "closed"],
        "suspended": ["closed"],
        "closed": [],
    }

    # 요청 동작 → (목표 상태, 기록할 생명주기 이벤트)
    ACTIONS: dict[str, tuple[CreditLineStatus, LifecycleAction]] = {
        "suspend": (CreditLineStatus.SUSPENDED, LifecycleAction.SUSPENDED),
        "close": (CreditLineStatus.CLOSED, LifecycleAction.CLOSED),
    }

    def __init__(self, initial_state: str | CreditLineStatus = CreditLineStatus.ACTIVE):
        state = initial_state.value if isinstance(initial_state, Enum) else initial_state
        if state not in self.TRANSITIONS:
            raise StateMachineError(f"CreditLineStateMachine: Unknown state {state}")
        super().__init__(
            initial_state=state,
            transitions=self.TRANSITIONS,
            name="CreditLineStateMachine",
        )

    @staticmethod
    def target_of(action: str | TransitionRequest) -> CreditLineStatus:
        """요청 동작의 목표 상태

        Raises:
            StateMachineError: 알 수 없는 동작
        """
        key = action.value if isinstance(action, Enum) else action
        try:
            return CreditLineStateMachine.ACTIONS[key][0]
        except KeyError:
            raise StateMachineError(f"CreditLineStateMachine: Unknown action {key}") from None

    def can_apply(self, action: str | TransitionRequest) -> bool:
        """동작 적용 가능 여부"""
        return self.can_transition(self.target_of(action))

    def apply(self, action: str | TransitionRequest) -> LifecycleAction:
        """동작 적용

        Returns:
            기록할 생명주기 이벤트 (suspended, closed)

        Raises:
            StateMachineError: 허용되지 않은 전이
        """
        key = action.value if isinstance(action, Enum) else action
        target = self.target_of(key)
        self.transition(target)
        return self.ACTIONS[key][1]

    @property
    def is_terminal(self) -> bool:
        """종료 상태 여부"""
        return self._state == "closed"

    @property
    def is_active(self) -> bool:
        """활성 상태 여부"""
        return self._state == "active"
