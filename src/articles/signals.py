"""Publish article and category row changes to the change feed."""

import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from categories.models import Category
from core.events import DELETE, INSERT, UPDATE, get_change_feed

from .models import Article

logger = logging.getLogger(__name__)


def _article_row(article: Article) -> dict:
    return {
        "id": str(article.id),
        "slug": article.slug,
        "status": article.status,
        "category": article.category,
        "view_count": article.view_count,
    }


@receiver(post_save, sender=Article)
def publish_article_saved(sender, instance, created, **kwargs):
    get_change_feed().publish("articles", INSERT if created else UPDATE, _article_row(instance))


@receiver(post_delete, sender=Article)
def publish_article_deleted(sender, instance, **kwargs):
    get_change_feed().publish("articles", DELETE, _article_row(instance))
    logger.info("Article %s removed", instance.id)


@receiver(post_save, sender=Category)
def publish_category_saved(sender, instance, created, **kwargs):
    get_change_feed().publish("categories", INSERT if created else UPDATE, {"name": instance.name})


@receiver(post_delete, sender=Category)
def publish_category_deleted(sender, instance, **kwargs):
    get_change_feed().publish("categories", DELETE, {"name": instance.name})
