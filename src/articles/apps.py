"""App configuration for articles."""

from django.apps import AppConfig


class ArticlesConfig(AppConfig):
    """Articles, the editorial workflow and view counting.

    On startup, model signals are connected and the popularity cache is
    subscribed to article and category changes.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "articles"

    def ready(self) -> None:
        from core.events import get_change_feed

        from . import signals  # noqa: F401
        from .popularity import popularity_cache

        feed = get_change_feed()
        self.subscriptions = [
            feed.on_change("articles", popularity_cache.invalidate),
            feed.on_change("categories", popularity_cache.invalidate),
        ]
