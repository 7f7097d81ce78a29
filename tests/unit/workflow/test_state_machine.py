from __future__ import annotations

import pytest

from ppf_workshop.core.exceptions import InvalidStateTransition
from ppf_workshop.workflow.state_machine import JOB_STATUS_MACHINE, StateMachine


def test_state_machine_allows_valid_transition():
    sm = StateMachine({"new": {"running"}, "running": {"completed"}})
    assert sm.can_transition("new", "running") is True
    sm.assert_transition("new", "running")


def test_state_machine_rejects_invalid_transition():
    sm = StateMachine({"new": {"running"}})
    with pytest.raises(InvalidStateTransition):
        sm.assert_transition("new", "completed")


def test_job_status_machine_terminal_states():
    assert JOB_STATUS_MACHINE.is_terminal("delivered") is True
    assert JOB_STATUS_MACHINE.is_terminal("cancelled") is True
    assert JOB_STATUS_MACHINE.is_terminal("active") is False
    assert JOB_STATUS_MACHINE.can_transition("hold", "delivered") is False
    assert JOB_STATUS_MACHINE.can_transition("active", "hold") is True
