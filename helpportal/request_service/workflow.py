"""
Help request status workflow.

Pending -> Accepted -> In-progress -> Completed

- No skipping states
- No backward transitions
- Completed is terminal
- Only a helper may accept; only the assigned helper may start or complete
"""

from typing import Dict, Optional

from ..shared.enums import RequestStatus, UserRole
from ..shared.errors import InvalidTransition, Unauthorized

# {to_status: required from_status}
REQUIRED_PREVIOUS: Dict[RequestStatus, RequestStatus] = {
    RequestStatus.ACCEPTED: RequestStatus.PENDING,
    RequestStatus.IN_PROGRESS: RequestStatus.ACCEPTED,
    RequestStatus.COMPLETED: RequestStatus.IN_PROGRESS,
}


def check_transition(
    *,
    current: RequestStatus,
    target: RequestStatus,
    actor_id: str,
    actor_role: Optional[str],
    helper_id: Optional[str],
) -> RequestStatus:
    """
    Validate a transition and return the status the row must still be in
    for the write to apply.

    Raises:
        Unauthorized: actor may not perform this transition
        InvalidTransition: target is not the next state from current
    """
    expected = REQUIRED_PREVIOUS.get(target)
    if expected is None:
        raise InvalidTransition(f"Cannot move a request to {target.value}")

    if target == RequestStatus.ACCEPTED:
        if actor_role != UserRole.HELPER.value:
            raise Unauthorized("Only helpers can accept requests")
    elif not helper_id or actor_id != helper_id:
        # checked before the status so a non-assigned actor always gets Unauthorized
        raise Unauthorized("Only the assigned helper can update this request")

    if current != expected:
        raise InvalidTransition(
            f"Invalid status transition: {current.value} -> {target.value}. "
            f"Request must be {expected.value}"
        )
    return expected
