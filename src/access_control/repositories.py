"""Role assignment storage behind a narrow, typed interface."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction

from .models import Role, UserRoleAssignment

logger = logging.getLogger(__name__)


class RoleRepository:
    """Reads and writes ``UserRoleAssignment`` rows."""

    def first_for_user(self, user_id: UUID) -> Optional[UserRoleAssignment]:
        """The effective row for ``user_id``, if any."""
        return (
            UserRoleAssignment.objects.filter(user_id=user_id)
            .order_by("created_at", "id")
            .first()
        )

    def effective_by_user(self) -> dict[UUID, UserRoleAssignment]:
        """Map every user with at least one row to their effective row."""
        effective: dict[UUID, UserRoleAssignment] = {}
        for assignment in UserRoleAssignment.objects.order_by("created_at", "id"):
            effective.setdefault(assignment.user_id, assignment)
        return effective

    @transaction.atomic
    def assign(self, user_id: UUID, role: Role) -> UserRoleAssignment:
        """Set the user's role, updating the effective row in place when present."""
        current = self.first_for_user(user_id)
        if current is None:
            current = UserRoleAssignment.objects.create(user_id=user_id, role=role)
            logger.info("Assigned role %s to user %s", role, user_id)
        else:
            current.role = role
            current.save(update_fields=["role", "updated_at"])
            logger.info("Changed role of user %s to %s", user_id, role)
        return current

    def revoke_all(self, user_id: UUID) -> int:
        """Delete every row for ``user_id``; returns how many were removed."""
        deleted, _ = UserRoleAssignment.objects.filter(user_id=user_id).delete()
        if deleted:
            logger.info("Revoked %d role assignment(s) from user %s", deleted, user_id)
        return deleted


__all__ = ["RoleRepository"]
