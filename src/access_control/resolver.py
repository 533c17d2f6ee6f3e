"""Resolve an actor's single effective role."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from .models import Role
from .repositories import RoleRepository


def resolve_role(user_id: Optional[UUID], roles: Optional[RoleRepository] = None) -> Role:
    """Return the effective role for ``user_id``.

    Anonymous callers and users without assignment rows are plain users. With
    several rows the first one in stable store order wins and the rest are
    ignored.
    """
    if user_id is None:
        return Role.USER
    roles = roles or RoleRepository()
    assignment = roles.first_for_user(user_id)
    if assignment is None:
        return Role.USER
    return Role(assignment.role)


@dataclass(frozen=True)
class Actor:
    """The identity performing an operation, with its resolved role."""

    user_id: Optional[UUID]
    role: Role

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None


ANONYMOUS = Actor(user_id=None, role=Role.USER)


def get_actor(request, roles: Optional[RoleRepository] = None) -> Actor:
    """Build the request's ``Actor`` once and cache it on the request."""
    cached = getattr(request, "_newsroom_actor", None)
    if cached is not None:
        return cached

    user = getattr(request, "user", None)
    if user is None or not getattr(user, "is_authenticated", False):
        actor = ANONYMOUS
    else:
        actor = Actor(user_id=user.id, role=resolve_role(user.id, roles))
    request._newsroom_actor = actor
    return actor


__all__ = ["Actor", "ANONYMOUS", "get_actor", "resolve_role"]
