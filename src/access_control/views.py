"""Admin endpoints for listing users and managing their role."""

import logging

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import mixins, status
from rest_framework.decorators import action

from core.events import DELETE, UPDATE, get_change_feed
from core.response import BaseGenericViewSet, api_response

from .models import Role
from .permissions import RolePolicyPermission
from .repositories import RoleRepository
from .serializers import RoleAssignSerializer, UserRoleSerializer

logger = logging.getLogger(__name__)

User = get_user_model()


class UserRoleViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, BaseGenericViewSet):
    """List users with their effective role; assign or revoke roles.

    Every method requires ``can_manage_users`` (admins only).
    """

    serializer_class = UserRoleSerializer
    permission_classes = [RolePolicyPermission]
    read_policy = "can_manage_users"
    write_policy = "can_manage_users"
    queryset = User.objects.select_related("profile").order_by("-date_joined")
    lookup_value_regex = "[0-9a-f-]{36}"
    roles = RoleRepository()

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["effective_roles"] = self.roles.effective_by_user()
        return context

    @action(detail=True, methods=["put", "post", "delete"], url_path="role")
    def role(self, request, pk=None):
        user = get_object_or_404(User, pk=pk)
        feed = get_change_feed()

        if request.method == "DELETE":
            removed = self.roles.revoke_all(user.id)
            feed.publish("user_roles", DELETE, {"user_id": str(user.id)})
            return api_response({"user_id": str(user.id), "role": Role.USER.value, "removed": removed})

        serializer = RoleAssignSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        assignment = self.roles.assign(user.id, Role(serializer.validated_data["role"]))
        feed.publish("user_roles", UPDATE, {"user_id": str(user.id), "role": assignment.role})
        return api_response(
            {"user_id": str(user.id), "role": assignment.role, "role_id": str(assignment.id)},
            status=status.HTTP_200_OK,
        )


__all__ = ["UserRoleViewSet"]
