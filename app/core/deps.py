# /app/core/deps.py

"""
Resolution of the acting user for each request.

Authentication happens in front of this service; by the time a request
arrives, the caller's user id is carried in the `X-Actor-Id` header. This
module turns that id into an `Actor` and offers the role checks the services
use to gate their operations.
"""

from dataclasses import dataclass
from typing import Iterable

from fastapi import Depends, Header, HTTPException, status

from ..models.common import Role
from ..services.database_service import DatabaseService, get_db_service
from .errors import PermissionDeniedError


@dataclass(frozen=True)
class Actor:
    id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def require_role(actor: Actor, roles: Iterable[Role], action: str) -> None:
    """Raises PermissionDeniedError unless the actor holds one of `roles`."""
    allowed = set(roles)
    if actor.role not in allowed:
        names = ", ".join(sorted(r.value for r in allowed))
        raise PermissionDeniedError(f"Only {names} users may {action}.")


def get_current_actor(
    x_actor_id: str = Header(..., alias="X-Actor-Id"),
    db: DatabaseService = Depends(get_db_service),
) -> Actor:
    """FastAPI dependency that returns the Actor making the request."""
    user = db.find("user", x_actor_id)
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown or inactive user.",
        )
    return Actor(id=user.id, role=Role(user.role))
