"""Editorial state machine for articles.

Every mutation goes through ``ArticleWorkflow`` so the role, ownership and
transition rules are applied in one place, inside one transaction. A refused
operation raises before anything is written.
"""

import logging
from typing import Any, Callable, Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied, ValidationError

from access_control import policy
from access_control.resolver import Actor
from categories.repositories import CategoryRepository
from core.exceptions import PERMISSION_DENIED_MESSAGE

from .models import Article, ArticleStatus
from .repositories import ArticleRepository
from .slugs import unique_slug

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "title",
    "excerpt",
    "content",
    "image_url",
    "category",
    "is_breaking",
    "is_featured",
    "seo_title",
    "meta_description",
    "keywords",
    "og_image",
    "canonical_url",
)

# (from, to) pairs that are real transitions; anything -> draft is handled separately.
_TRANSITIONS = {
    (ArticleStatus.DRAFT, ArticleStatus.PENDING_REVIEW),
    (ArticleStatus.DRAFT, ArticleStatus.PUBLISHED),
    (ArticleStatus.PENDING_REVIEW, ArticleStatus.PUBLISHED),
    (ArticleStatus.PUBLISHED, ArticleStatus.PUBLISHED),
}


def _deny(detail: str = PERMISSION_DENIED_MESSAGE):
    raise PermissionDenied(detail)


class ArticleWorkflow:
    def __init__(
        self,
        articles: Optional[ArticleRepository] = None,
        categories: Optional[CategoryRepository] = None,
        clock: Callable = timezone.now,
        clear_published_at_on_unpublish: Optional[bool] = None,
    ):
        self.articles = articles or ArticleRepository()
        self.categories = categories or CategoryRepository()
        self.clock = clock
        if clear_published_at_on_unpublish is None:
            clear_published_at_on_unpublish = settings.CLEAR_PUBLISHED_AT_ON_UNPUBLISH
        self.clear_published_at_on_unpublish = clear_published_at_on_unpublish

    @transaction.atomic
    def create(self, actor: Actor, data: dict[str, Any]) -> Article:
        """Create an article authored by ``actor``.

        ``data["status"]`` may be ``draft`` (default), ``pending_review``
        (editors) or ``published`` (admins).
        """
        if not policy.can_create_article(actor.role):
            _deny()

        target = self._parse_status(data.get("status") or ArticleStatus.DRAFT)
        if target != ArticleStatus.DRAFT and not policy.can_set_status(actor.role, target):
            _deny()

        fields = {key: data[key] for key in EDITABLE_FIELDS if key in data}
        fields.setdefault("category", settings.DEFAULT_ARTICLE_CATEGORY)
        if not fields.get("category"):
            fields["category"] = settings.DEFAULT_ARTICLE_CATEGORY

        article = Article(**fields)
        article.author_id = actor.user_id
        article.status = target
        article.slug = unique_slug(article.title or "", self.articles.slug_exists)
        self._validate_content(article)
        self._require_category(article.category)
        if target == ArticleStatus.PUBLISHED:
            article.published_at = self.clock()

        self.articles.save(article)
        logger.info("Article %s created as %s by %s", article.id, target, actor.user_id)
        return article

    @transaction.atomic
    def update(self, actor: Actor, article: Article, changes: dict[str, Any]) -> Article:
        """Apply content/SEO ``changes``; a changed ``status`` routes through the state machine.

        A ``status`` equal to the current one is ignored, so echoing a
        published article back is an edit, not a re-publish.
        """
        if not policy.can_modify_article(actor.role, actor.user_id, article.author_id):
            _deny()

        for key in EDITABLE_FIELDS:
            if key in changes:
                setattr(article, key, changes[key])
        if not article.category:
            article.category = settings.DEFAULT_ARTICLE_CATEGORY
        self._validate_content(article)

        if "category" in changes:
            self._require_category(article.category)

        target = changes.get("status")
        if target is not None:
            target = self._parse_status(target)
            if target != ArticleStatus(article.status):
                self._apply_status(actor, article, target)

        self.articles.save(article)
        logger.info("Article %s updated by %s", article.id, actor.user_id)
        return article

    @transaction.atomic
    def change_status(self, actor: Actor, article: Article, target: str) -> Article:
        target = self._parse_status(target)
        if not policy.can_modify_article(actor.role, actor.user_id, article.author_id):
            _deny()
        self._apply_status(actor, article, target)
        self.articles.save(article)
        return article

    @transaction.atomic
    def delete(self, actor: Actor, article: Article) -> None:
        if not policy.can_delete_article(actor.role, actor.user_id, article.author_id):
            _deny()
        article_id = article.id
        self.articles.delete(article)
        logger.info("Article %s deleted by %s", article_id, actor.user_id)

    def _apply_status(self, actor: Actor, article: Article, target: str) -> None:
        current = ArticleStatus(article.status)

        # Re-sending draft or pending_review is not a transition.
        if current == target and target != ArticleStatus.PUBLISHED:
            return

        self._require_category(article.category)

        if target == ArticleStatus.DRAFT:
            if not policy.can_set_status(actor.role, target):
                _deny()
            article.status = target
            if self.clear_published_at_on_unpublish:
                article.published_at = None
            logger.info("Article %s moved %s -> draft by %s", article.id, current, actor.user_id)
            return

        if (current, target) not in _TRANSITIONS:
            raise ValidationError({"status": [f"Cannot move an article from {current} to {target}."]})

        if current == ArticleStatus.PENDING_REVIEW and target == ArticleStatus.PUBLISHED:
            if not policy.can_approve_pending_review(actor.role):
                _deny()
        elif not policy.can_set_status(actor.role, target):
            _deny()

        article.status = target
        if target == ArticleStatus.PUBLISHED:
            article.published_at = self.clock()
        logger.info("Article %s moved %s -> %s by %s", article.id, current, target, actor.user_id)

    def _require_category(self, name: str) -> None:
        if not self.categories.exists(name):
            raise ValidationError({"category": [f"Unknown category: {name}."]})

    @staticmethod
    def _validate_content(article: Article) -> None:
        errors = {}
        if not (article.title or "").strip():
            errors["title"] = ["Title is required."]
        if not (article.content or "").strip():
            errors["content"] = ["Content is required."]
        if errors:
            raise ValidationError(errors)

    @staticmethod
    def _parse_status(value) -> ArticleStatus:
        try:
            return ArticleStatus(value)
        except ValueError:
            raise ValidationError({"status": [f"Unknown status: {value}."]}) from None


__all__ = ["ArticleWorkflow", "EDITABLE_FIELDS"]
