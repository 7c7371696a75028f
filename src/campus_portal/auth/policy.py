from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..core.enums import Role
from ..core.exceptions import AuthorizationError


@dataclass(frozen=True)
class Actor:
    """Who is calling, as resolved by the session layer. Trusted as given."""

    user_id: int
    role: Role


class LeaveAccessPolicy(Protocol):
    """Authorization capability injected into the leave service.

    Each method returns None when allowed and raises AuthorizationError otherwise.
    """

    def require_submit(self, actor: Actor, student_id: int) -> None:
        raise NotImplementedError

    def require_view_student(self, actor: Actor, student_id: int) -> None:
        raise NotImplementedError

    def require_delete(self, actor: Actor, owner_id: int) -> None:
        raise NotImplementedError

    def require_teacher(self, actor: Actor) -> None:
        raise NotImplementedError

    def require_admin(self, actor: Actor) -> None:
        raise NotImplementedError


class RoleLeavePolicy(LeaveAccessPolicy):
    """Role and ownership checks only; no class/department scoping on decisions."""

    def require_submit(self, actor: Actor, student_id: int) -> None:
        if actor.role != Role.STUDENT or actor.user_id != int(student_id):
            raise AuthorizationError("Students can only request leave for themselves")

    def require_view_student(self, actor: Actor, student_id: int) -> None:
        if actor.role == Role.STUDENT and actor.user_id != int(student_id):
            raise AuthorizationError("You can only view your own leaves")

    def require_delete(self, actor: Actor, owner_id: int) -> None:
        if actor.role != Role.STUDENT or actor.user_id != int(owner_id):
            raise AuthorizationError("Only the student who applied can delete this leave")

    def require_teacher(self, actor: Actor) -> None:
        if actor.role != Role.TEACHER:
            raise AuthorizationError("Teacher access required")

    def require_admin(self, actor: Actor) -> None:
        if actor.role != Role.ADMIN:
            raise AuthorizationError("Admin access required")
