"""DRF permission classes backed by the role policy predicates."""

from rest_framework import permissions

from core.exceptions import PERMISSION_DENIED_MESSAGE

from . import policy
from .resolver import get_actor


class RolePolicyPermission(permissions.BasePermission):
    """Gate a view on a named role predicate.

    Views declare ``read_policy`` for safe methods and ``write_policy`` for
    everything else; each is a key of ``policy.ROLE_POLICIES`` or ``None``
    for open access. Anonymous callers never pass a declared policy, which
    DRF turns into a 401.
    """

    message = PERMISSION_DENIED_MESSAGE

    def has_permission(self, request, view) -> bool:
        attr = "read_policy" if request.method in permissions.SAFE_METHODS else "write_policy"
        policy_name = getattr(view, attr, None)
        if policy_name is None:
            return True

        actor = get_actor(request)
        if actor.is_anonymous:
            return False
        predicate = policy.ROLE_POLICIES.get(policy_name)
        if predicate is None:
            return False
        return predicate(actor.role)


class CanModifyArticle(permissions.BasePermission):
    """Object-level ownership check for management article endpoints."""

    message = PERMISSION_DENIED_MESSAGE

    def has_object_permission(self, request, view, obj) -> bool:
        actor = get_actor(request)
        if request.method in permissions.SAFE_METHODS:
            return policy.can_view_article(actor.role, actor.user_id, obj.author_id)
        if request.method == "DELETE":
            return policy.can_delete_article(actor.role, actor.user_id, obj.author_id)
        return policy.can_modify_article(actor.role, actor.user_id, obj.author_id)


__all__ = ["CanModifyArticle", "RolePolicyPermission"]
