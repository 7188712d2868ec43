from typing import Dict

from goods_transport.core.exceptions import FailedPreconditionError
from goods_transport.models.shared.enums import LabourAssignmentAction, LabourAssignmentStatus

# action -> (required current status, resulting status)
ASSIGNMENT_TRANSITIONS: Dict[LabourAssignmentAction, tuple] = {
    LabourAssignmentAction.DELIVER: (LabourAssignmentStatus.ASSIGNED, LabourAssignmentStatus.DELIVERED),
    LabourAssignmentAction.COLLECT: (LabourAssignmentStatus.DELIVERED, LabourAssignmentStatus.COLLECTED),
    LabourAssignmentAction.SETTLE: (LabourAssignmentStatus.COLLECTED, LabourAssignmentStatus.SETTLED),
}

PRECONDITION_MESSAGES = {
    LabourAssignmentAction.DELIVER: "Assignment must be in ASSIGNED status to be delivered.",
    LabourAssignmentAction.COLLECT: "Assignment must be marked delivered before collection.",
    LabourAssignmentAction.SETTLE: "Assignment must be collected before settlement.",
}


def next_assignment_status(current: LabourAssignmentStatus, action: LabourAssignmentAction) -> LabourAssignmentStatus:
    action = LabourAssignmentAction(action)
    required, result = ASSIGNMENT_TRANSITIONS[action]
    if LabourAssignmentStatus(current) != required:
        raise FailedPreconditionError(PRECONDITION_MESSAGES[action])
    return result
