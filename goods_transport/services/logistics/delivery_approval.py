"""Two-stage delivery sign-off: PENDING -> APPROVED_BY_ADMIN -> APPROVED."""
from typing import Dict, Tuple

from goods_transport.core.exceptions import FailedPreconditionError
from goods_transport.models.shared.enums import ApprovalAction, ApprovalStatus

TERMINAL_STATUSES = frozenset({ApprovalStatus.APPROVED, ApprovalStatus.REJECTED})

APPROVE_TRANSITIONS: Dict[ApprovalStatus, ApprovalStatus] = {
    ApprovalStatus.PENDING: ApprovalStatus.APPROVED_BY_ADMIN,
    ApprovalStatus.APPROVED_BY_ADMIN: ApprovalStatus.APPROVED,
}

STATUS_DESCRIPTIONS: Dict[ApprovalStatus, str] = {
    ApprovalStatus.APPROVED: "Approved (Final)",
    ApprovalStatus.APPROVED_BY_ADMIN: "Approved by Admin",
    ApprovalStatus.REJECTED: "Rejected",
    ApprovalStatus.PENDING: "Pending",
}


def next_approval_status(current: ApprovalStatus, action: ApprovalAction) -> ApprovalStatus:
    """
    Compute the status a delivery moves to.

    APPROVE only advances PENDING and APPROVED_BY_ADMIN. REJECT is accepted
    from any non-final state; rejecting an already rejected delivery is a
    no-op, rejecting an approved one is refused.
    """
    current = ApprovalStatus(current)
    action = ApprovalAction(action)

    if action == ApprovalAction.APPROVE:
        next_status = APPROVE_TRANSITIONS.get(current)
        if next_status is None:
            raise FailedPreconditionError(
                f"Delivery is already in status: {current.value}. Cannot approve further."
            )
        return next_status

    if current == ApprovalStatus.APPROVED:
        raise FailedPreconditionError(
            f"Delivery is already in status: {current.value}. Cannot reject a final approval."
        )
    return ApprovalStatus.REJECTED


def describe(status: ApprovalStatus) -> str:
    return STATUS_DESCRIPTIONS[ApprovalStatus(status)]


def is_final_approval(current: ApprovalStatus, next_status: ApprovalStatus) -> bool:
    return current == ApprovalStatus.APPROVED_BY_ADMIN and next_status == ApprovalStatus.APPROVED


def plan_transition(current: ApprovalStatus, action: ApprovalAction) -> Tuple[ApprovalStatus, bool]:
    """Next status plus whether anything needs to be written"""
    next_status = next_approval_status(current, action)
    return next_status, next_status != ApprovalStatus(current)
