# /app/services/enrollment_helpers/transitions.py

"""
The approval state machine shared by StudentLinks and TeacherLinks.

    pending --> approved
    pending --> rejected

`approved` and `rejected` are terminal. Re-reviewing a decided link means
removing it and proposing a new one. These helpers are pure; they look only
at the values passed in.
"""

from typing import Optional

from ...core.deps import Actor
from ...core.errors import InvalidTransitionError
from ...models.common import LinkStatus

ALLOWED_DECISIONS = {
    LinkStatus.PENDING: {LinkStatus.APPROVED, LinkStatus.REJECTED},
    LinkStatus.APPROVED: set(),
    LinkStatus.REJECTED: set(),
}


def check_decision(current: str, requested: LinkStatus) -> None:
    """Raises InvalidTransitionError unless `current -> requested` is allowed."""
    current_status = LinkStatus(current)
    if requested not in ALLOWED_DECISIONS[current_status]:
        raise InvalidTransitionError(
            f"Cannot move a link from '{current_status.value}' to '{LinkStatus(requested).value}'."
        )


def default_initial_status(actor: Actor, requested: Optional[LinkStatus] = None) -> LinkStatus:
    """
    The status a new link starts in when the caller did not choose one:
    links added by an administrator are approved straight away, self-service
    requests wait for review.
    """
    if requested is not None:
        return requested
    return LinkStatus.APPROVED if actor.is_admin else LinkStatus.PENDING
