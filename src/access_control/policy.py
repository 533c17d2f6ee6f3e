"""Pure permission predicates over roles.

Every predicate takes the actor's resolved role (and, for ownership checks,
the actor's and author's ids) and returns a bool. Nothing here touches the
database, so the same rules serve views, the workflow and tests.
"""

from typing import Optional
from uuid import UUID

from .models import Role

ARTICLE_DRAFT = "draft"
ARTICLE_PENDING_REVIEW = "pending_review"
ARTICLE_PUBLISHED = "published"

_STAFF_ROLES = (Role.ADMIN, Role.EDITOR)


def can_view_article_list(role: Role) -> bool:
    return role in _STAFF_ROLES


def can_create_article(role: Role) -> bool:
    return role in _STAFF_ROLES


def can_set_status(role: Role, target_status: str) -> bool:
    """Whether ``role`` may move an article into ``target_status`` at all.

    Editors submit for review but never publish; admins publish directly and
    never submit for review. Both may return an article to draft.
    """
    if target_status == ARTICLE_DRAFT:
        return role in _STAFF_ROLES
    if target_status == ARTICLE_PENDING_REVIEW:
        return role == Role.EDITOR
    if target_status == ARTICLE_PUBLISHED:
        return role == Role.ADMIN
    return False


def _owns_or_admin(role: Role, actor_id: Optional[UUID], author_id: Optional[UUID]) -> bool:
    if role == Role.ADMIN:
        return True
    if role == Role.EDITOR:
        return actor_id is not None and actor_id == author_id
    return False


def can_modify_article(role: Role, actor_id: Optional[UUID], author_id: Optional[UUID]) -> bool:
    return _owns_or_admin(role, actor_id, author_id)


def can_delete_article(role: Role, actor_id: Optional[UUID], author_id: Optional[UUID]) -> bool:
    return _owns_or_admin(role, actor_id, author_id)


def can_view_article(role: Role, actor_id: Optional[UUID], author_id: Optional[UUID]) -> bool:
    """Management read access to a single article regardless of its status."""
    return _owns_or_admin(role, actor_id, author_id)


def can_manage_categories(role: Role) -> bool:
    return role == Role.ADMIN


def can_manage_users(role: Role) -> bool:
    return role == Role.ADMIN


def can_manage_global_seo(role: Role) -> bool:
    return role == Role.ADMIN


def can_approve_pending_review(role: Role) -> bool:
    return role == Role.ADMIN


def can_view_visitor_analytics(role: Role) -> bool:
    return role == Role.ADMIN


# Role-only predicates that views may name as their read/write policy.
ROLE_POLICIES = {
    "can_view_article_list": can_view_article_list,
    "can_create_article": can_create_article,
    "can_manage_categories": can_manage_categories,
    "can_manage_users": can_manage_users,
    "can_manage_global_seo": can_manage_global_seo,
    "can_approve_pending_review": can_approve_pending_review,
    "can_view_visitor_analytics": can_view_visitor_analytics,
}


__all__ = [
    "ARTICLE_DRAFT",
    "ARTICLE_PENDING_REVIEW",
    "ARTICLE_PUBLISHED",
    "ROLE_POLICIES",
    "can_approve_pending_review",
    "can_create_article",
    "can_delete_article",
    "can_manage_categories",
    "can_manage_global_seo",
    "can_manage_users",
    "can_modify_article",
    "can_set_status",
    "can_view_article",
    "can_view_article_list",
    "can_view_visitor_analytics",
]
