"""Role model: the three newsroom roles and their assignment rows."""

import uuid

from django.conf import settings
from django.db import models


class Role(models.TextChoices):
    """Coarse permission level of an actor."""

    ADMIN = "admin", "Admin"
    EDITOR = "editor", "Editor"
    USER = "user", "User"


class UserRoleAssignment(models.Model):
    """Grants a role to a user.

    Several rows may exist for one user; only the first in ``Meta.ordering``
    is effective. A user without rows is a plain ``user``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="role_assignments"
    )
    role = models.CharField(max_length=20, choices=Role.choices)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [models.Index(fields=["user", "created_at"], name="role_assignment_user_idx")]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.user_id} -> {self.role}"


__all__ = ["Role", "UserRoleAssignment"]
