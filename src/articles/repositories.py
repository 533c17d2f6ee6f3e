"""Article queries and writes used by the workflow, counters and views."""

from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Count, F, QuerySet, Sum

from .models import Article, ArticleStatus

POPULARITY_ORDER = ("-view_count", "created_at", "id")


class ArticleRepository:
    """All article persistence goes through here."""

    def slug_exists(self, slug: str) -> bool:
        return Article.objects.filter(slug=slug).exists()

    def all(self) -> QuerySet:
        return Article.objects.select_related("author", "author__profile")

    def authored_by(self, user_id: UUID) -> QuerySet:
        return self.all().filter(author_id=user_id)

    def published(
        self,
        category: Optional[str] = None,
        breaking: Optional[bool] = None,
        featured: Optional[bool] = None,
    ) -> QuerySet:
        """Published articles, newest ``published_at`` first."""
        qs = self.all().filter(status=ArticleStatus.PUBLISHED)
        if category:
            qs = qs.filter(category=category)
        if breaking is not None:
            qs = qs.filter(is_breaking=breaking)
        if featured is not None:
            qs = qs.filter(is_featured=featured)
        return qs.order_by(F("published_at").desc(nulls_last=True), "-created_at")

    def save(self, article: Article) -> Article:
        article.save()
        return article

    def delete(self, article: Article) -> None:
        article.delete()

    def increment_view_count(self, article_id) -> bool:
        """Atomically add one view; False when the article does not exist."""
        try:
            updated = Article.objects.filter(pk=article_id).update(view_count=F("view_count") + 1)
        except (DjangoValidationError, ValueError, TypeError):
            return False
        return updated == 1

    def view_count(self, article_id) -> Optional[int]:
        return Article.objects.filter(pk=article_id).values_list("view_count", flat=True).first()

    def popular(self, limit: int, published_only: bool = True) -> list[Article]:
        """Top ``limit`` articles by views, ties broken by age then id."""
        qs = self.published() if published_only else self.all()
        return list(qs.order_by(*POPULARITY_ORDER)[:limit])

    def category_totals(self, published_only: bool = False) -> list[dict]:
        qs = Article.objects.all()
        if published_only:
            qs = qs.filter(status=ArticleStatus.PUBLISHED)
        return list(
            qs.values("category")
            .annotate(total_views=Sum("view_count"), article_count=Count("id"))
            .order_by("category")
        )

    def status_counts(self, qs: Optional[QuerySet] = None) -> dict[str, int]:
        qs = Article.objects.all() if qs is None else qs
        counts = {choice: 0 for choice in ArticleStatus.values}
        for row in qs.order_by().values("status").annotate(n=Count("id")):
            counts[row["status"]] = row["n"]
        return counts


__all__ = ["ArticleRepository", "POPULARITY_ORDER"]
