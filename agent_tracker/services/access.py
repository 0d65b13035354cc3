"""
Role-scoped subject resolution.

Agents only ever see and change their own records. Admins and managers act
on the user named in the request, or on themselves when none is named
(office staff keep personal agent-style records too).

Nothing here touches the database: the decision is made from the caller's
role and the requested id alone.
"""

from dataclasses import dataclass
from typing import Optional

from agent_tracker.errors import AuthorizationError

OFFICE_ROLES = ("admin", "manager")


@dataclass(frozen=True)
class Caller:
    """Verified identity of the user making a request."""

    user_id: int
    username: str
    role: str

    @property
    def is_office(self) -> bool:
        return self.role in OFFICE_ROLES


def resolve_subject(caller: Caller, requested_user_id: Optional[int] = None) -> int:
    """Return the id of the user whose records the request may read or write."""
    if not caller.is_office:
        return caller.user_id
    if requested_user_id is not None:
        return requested_user_id
    return caller.user_id


def can_act_for(caller: Caller, user_id: int) -> bool:
    return caller.user_id == user_id or caller.is_office


def require_office_role(caller: Caller) -> Caller:
    if not caller.is_office:
        raise AuthorizationError("Access denied. Admin/Manager only.")
    return caller
