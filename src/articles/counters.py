"""Per-session de-duplicated view counting."""

import logging
from typing import Optional

import redis
from django.conf import settings
from rest_framework.exceptions import NotFound

from core.events import UPDATE, ChangeFeed, get_change_feed
from core.redis_client import get_redis_client

from .repositories import ArticleRepository

logger = logging.getLogger(__name__)


class ViewTrackingUnavailable(Exception):
    """Raised when the de-duplication store cannot be reached."""


class ViewCounter:
    """Count one view per (session token, article) pair.

    The pair is claimed in Redis with ``SET NX EX`` for the lifetime of a
    browsing session; only the caller that wins the claim increments the
    article's counter, and the increment itself is a single atomic update.
    """

    KEY_PREFIX = "views:seen:"

    def __init__(
        self,
        articles: Optional[ArticleRepository] = None,
        redis_client=None,
        feed: Optional[ChangeFeed] = None,
        ttl: Optional[int] = None,
    ):
        self.articles = articles or ArticleRepository()
        self.redis = redis_client
        self.feed = feed or get_change_feed()
        self.ttl = ttl or settings.VIEW_DEDUP_TTL_SECONDS

    def _client(self):
        return self.redis if self.redis is not None else get_redis_client()

    def _key(self, article_id, session_token: str) -> str:
        return f"{self.KEY_PREFIX}{article_id}:{session_token}"

    def record_view(self, article_id, session_token: str) -> bool:
        """Record a view; returns True if it was counted, False for a repeat."""
        client = self._client()
        key = self._key(article_id, session_token)
        try:
            claimed = client.set(key, "1", nx=True, ex=self.ttl)
        except redis.RedisError as exc:
            raise ViewTrackingUnavailable("Redis unavailable while recording a view") from exc

        if not claimed:
            return False

        if not self.articles.increment_view_count(article_id):
            try:
                client.delete(key)
            except redis.RedisError:
                logger.warning("Could not release view claim %s", key)
            raise NotFound("Article not found.")

        count = self.articles.view_count(article_id)
        self.feed.publish("articles", UPDATE, {"id": str(article_id), "view_count": count})
        logger.debug("Counted view of article %s (now %s)", article_id, count)
        return True


__all__ = ["ViewCounter", "ViewTrackingUnavailable"]
