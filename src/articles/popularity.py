"""Popularity rankings derived from raw view counts."""

import logging
from typing import Optional

from django.core.cache import cache

from core.events import ChangeEvent

from .models import Article
from .repositories import ArticleRepository

logger = logging.getLogger(__name__)


def popular_articles(
    limit: int, published_only: bool = True, articles: Optional[ArticleRepository] = None
) -> list[Article]:
    """Articles by descending ``view_count``; ties go to the older article, then id."""
    articles = articles or ArticleRepository()
    return articles.popular(max(0, limit), published_only=published_only)


def category_popularity(
    published_only: bool = False, articles: Optional[ArticleRepository] = None
) -> dict[str, dict[str, int]]:
    """Map each category name to its summed views and article count."""
    articles = articles or ArticleRepository()
    return {
        row["category"]: {
            "total_views": row["total_views"] or 0,
            "article_count": row["article_count"],
        }
        for row in articles.category_totals(published_only=published_only)
    }


class PopularityCache:
    """Caches popularity reads until the next article change.

    Keys carry a generation number; ``invalidate`` bumps it so every cached
    ranking is dropped at once.
    """

    GENERATION_KEY = "popularity:generation"
    TIMEOUT = 300

    def __init__(self, backend=None, articles: Optional[ArticleRepository] = None):
        self.cache = backend or cache
        self.articles = articles or ArticleRepository()

    def _generation(self) -> int:
        return self.cache.get_or_set(self.GENERATION_KEY, 1, timeout=None)

    def _key(self, name: str) -> str:
        return f"popularity:{self._generation()}:{name}"

    def popular_ids(self, limit: int) -> list[str]:
        key = self._key(f"popular:{limit}")
        ids = self.cache.get(key)
        if ids is None:
            ids = [str(a.id) for a in popular_articles(limit, articles=self.articles)]
            self.cache.set(key, ids, self.TIMEOUT)
        return ids

    def popular(self, limit: int) -> list[Article]:
        ids = self.popular_ids(limit)
        by_id = {str(a.id): a for a in self.articles.all().filter(pk__in=ids)}
        return [by_id[i] for i in ids if i in by_id]

    def category_stats(self) -> dict[str, dict[str, int]]:
        """Per-category totals over published articles, as shown to readers."""
        key = self._key("categories")
        stats = self.cache.get(key)
        if stats is None:
            stats = category_popularity(published_only=True, articles=self.articles)
            self.cache.set(key, stats, self.TIMEOUT)
        return stats

    def invalidate(self, change: Optional[ChangeEvent] = None) -> None:
        try:
            self.cache.incr(self.GENERATION_KEY)
        except ValueError:
            self.cache.set(self.GENERATION_KEY, 2, timeout=None)
        logger.debug("Popularity cache invalidated by %s", change.event if change else "caller")


popularity_cache = PopularityCache()


__all__ = ["PopularityCache", "category_popularity", "popular_articles", "popularity_cache"]
