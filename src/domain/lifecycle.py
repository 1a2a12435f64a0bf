"""
Employee Lifecycle

Transition table for the onboarding state machine:

    prospective        --submit-->       pending_approval
    information_needed --submit-->       pending_approval
    pending_approval   --approve-->      active
    pending_approval   --reject-->       rejected
    pending_approval   --request_info--> information_needed
    active             --deactivate-->   inactive

active and rejected are terminal for the onboarding cycle.
"""

from enum import Enum
from typing import Dict, FrozenSet, Tuple

from libs.result import Error

from src.domain.entities.enums import EmployeeStatus


class LifecycleAction(str, Enum):
    submit = "submit"
    approve = "approve"
    reject = "reject"
    request_info = "request_info"
    deactivate = "deactivate"


TRANSITIONS: Dict[LifecycleAction, Tuple[FrozenSet[EmployeeStatus], EmployeeStatus]] = {
    LifecycleAction.submit: (
        frozenset({EmployeeStatus.prospective, EmployeeStatus.information_needed}),
        EmployeeStatus.pending_approval,
    ),
    LifecycleAction.approve: (
        frozenset({EmployeeStatus.pending_approval}),
        EmployeeStatus.active,
    ),
    LifecycleAction.reject: (
        frozenset({EmployeeStatus.pending_approval}),
        EmployeeStatus.rejected,
    ),
    LifecycleAction.request_info: (
        frozenset({EmployeeStatus.pending_approval}),
        EmployeeStatus.information_needed,
    ),
    LifecycleAction.deactivate: (
        frozenset({EmployeeStatus.active}),
        EmployeeStatus.inactive,
    ),
}

# Statuses that end the onboarding cycle and how they are reported
_PROCESSED_MESSAGES = {
    EmployeeStatus.active: "Employee has already been approved",
    EmployeeStatus.rejected: "Employee has already been rejected",
}


def sources_for(action: LifecycleAction) -> FrozenSet[EmployeeStatus]:
    return TRANSITIONS[action][0]


def target_of(action: LifecycleAction) -> EmployeeStatus:
    return TRANSITIONS[action][1]


def can_transition(action: LifecycleAction, current: EmployeeStatus) -> bool:
    return current in sources_for(action)


def blocked_transition_error(
    action: LifecycleAction, current: EmployeeStatus
) -> Error:
    """
    Error for an action that is not allowed from the current status.

    HR decisions on an employee that already left pending_approval through
    approve/reject are reported as ALREADY_PROCESSED naming that state.
    """
    if action in (
        LifecycleAction.approve,
        LifecycleAction.reject,
        LifecycleAction.request_info,
    ) and current in _PROCESSED_MESSAGES:
        return Error(
            "ALREADY_PROCESSED",
            _PROCESSED_MESSAGES[current],
            reason=current.value,
        )

    if action == LifecycleAction.submit:
        return Error(
            "ONBOARDING_LOCKED",
            f"Onboarding cannot be submitted while status is {current.value}",
            reason=current.value,
        )

    return Error(
        "INVALID_STATUS",
        f"Cannot {action.value.replace('_', ' ')} an employee with status "
        f"{current.value}",
        reason=current.value,
    )
