"""Canonical job status transitions."""

from __future__ import annotations

from ppf_workshop.core.exceptions import InvalidStateTransition
from ppf_workshop.models.enums import JobStatus


class StateMachine:
    """Transition table keyed by status value."""

    def __init__(self, transitions: dict[str, set[str]]) -> None:
        self._transitions = transitions

    def can_transition(self, current: str, target: str) -> bool:
        return target in self._transitions.get(current, set())

    def assert_transition(self, current: str, target: str) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidStateTransition(
                f"Transition not allowed: {current} -> {target}",
                current=current,
                target=target,
            )

    def is_terminal(self, status: str) -> bool:
        return not self._transitions.get(status)


JOB_STATUS_MACHINE = StateMachine(
    {
        JobStatus.ACTIVE.value: {JobStatus.HOLD.value, JobStatus.DELIVERED.value, JobStatus.CANCELLED.value},
        JobStatus.HOLD.value: {JobStatus.ACTIVE.value, JobStatus.CANCELLED.value},
        JobStatus.DELIVERED.value: set(),
        JobStatus.CANCELLED.value: set(),
    }
)
