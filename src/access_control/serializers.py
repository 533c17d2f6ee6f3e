"""Serializers for user role administration."""

from rest_framework import serializers

from .models import Role


class UserRoleSerializer(serializers.Serializer):
    """A user as seen by the admin user list, with the effective role.

    Built from a ``User`` instance plus the ``effective_roles`` mapping passed
    in the serializer context, so the list needs a single assignment query.
    """

    id = serializers.UUIDField(read_only=True)
    email = serializers.EmailField(read_only=True)
    display_name = serializers.CharField(read_only=True)
    is_active = serializers.BooleanField(read_only=True)
    role = serializers.SerializerMethodField()
    role_id = serializers.SerializerMethodField()
    date_joined = serializers.DateTimeField(read_only=True)

    def _assignment(self, obj):
        return self.context.get("effective_roles", {}).get(obj.id)

    def get_role(self, obj) -> str:
        assignment = self._assignment(obj)
        return assignment.role if assignment is not None else Role.USER.value

    def get_role_id(self, obj):
        assignment = self._assignment(obj)
        return str(assignment.id) if assignment is not None else None


class RoleAssignSerializer(serializers.Serializer):
    """Payload for ``PUT /users/{id}/role/``."""

    role = serializers.ChoiceField(choices=Role.choices)


__all__ = ["RoleAssignSerializer", "UserRoleSerializer"]
