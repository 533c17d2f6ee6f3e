"""Article model and its editorial status."""

import uuid

from django.conf import settings
from django.db import models


class ArticleStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    PENDING_REVIEW = "pending_review", "Pending review"
    PUBLISHED = "published", "Published"


def _default_category() -> str:
    return settings.DEFAULT_ARTICLE_CATEGORY


class Article(models.Model):
    """A news article.

    Only ``published`` articles are visible to readers. ``category`` holds a
    category name as a plain string; the registry may lose the category later
    and the article keeps the name.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=300)
    slug = models.SlugField(max_length=150, unique=True, allow_unicode=True)
    excerpt = models.TextField(null=True, blank=True)
    content = models.TextField()
    image_url = models.CharField(max_length=500, null=True, blank=True)
    category = models.CharField(max_length=50, default=_default_category, db_index=True)
    is_breaking = models.BooleanField(default=False)
    is_featured = models.BooleanField(default=False)
    status = models.CharField(max_length=20, choices=ArticleStatus.choices, default=ArticleStatus.DRAFT)
    published_at = models.DateTimeField(null=True, blank=True)
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="articles",
    )
    view_count = models.PositiveIntegerField(default=0)

    seo_title = models.CharField(max_length=300, null=True, blank=True)
    meta_description = models.TextField(null=True, blank=True)
    keywords = models.JSONField(default=list, blank=True)
    og_image = models.CharField(max_length=500, null=True, blank=True)
    canonical_url = models.CharField(max_length=500, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "-published_at"], name="article_status_pub_idx"),
            models.Index(fields=["-view_count"], name="article_view_count_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title


__all__ = ["Article", "ArticleStatus"]
