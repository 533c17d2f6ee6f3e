"""Article endpoints: the public reader API and the editorial management API."""

import logging

from django.conf import settings
from django.http import Http404
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.parsers import MultiPartParser
from rest_framework.permissions import AllowAny

from access_control.models import Role
from access_control.permissions import CanModifyArticle, RolePolicyPermission
from access_control.resolver import get_actor
from core.response import BaseAPIView, BaseReadOnlyViewSet, BaseViewSet, api_response
from core.storage import store_image

from .counters import ViewCounter
from .models import Article, ArticleStatus
from .popularity import popularity_cache
from .repositories import ArticleRepository
from .serializers import (
    ArticleSerializer,
    ImageUploadSerializer,
    NewsSerializer,
    StatusChangeSerializer,
    ViewRecordSerializer,
)
from .workflow import ArticleWorkflow

logger = logging.getLogger(__name__)

BREAKING_LIMIT = 5
POPULAR_MAX_LIMIT = 50


def _parse_bool(value):
    if value is None:
        return None
    return value.lower() in ("1", "true", "yes")


class NewsViewSet(BaseReadOnlyViewSet):
    """Published articles for readers; no authentication required."""

    serializer_class = NewsSerializer
    permission_classes = [AllowAny]
    lookup_field = "slug"
    lookup_value_regex = "[^/]+"
    articles = ArticleRepository()

    def get_queryset(self):
        params = self.request.query_params
        return self.articles.published(
            category=params.get("category") or None,
            breaking=_parse_bool(params.get("breaking")),
            featured=_parse_bool(params.get("featured")),
        )

    @action(detail=False, methods=["get"])
    def breaking(self, request):
        items = self.articles.published(breaking=True)[:BREAKING_LIMIT]
        return api_response(self.get_serializer(items, many=True).data)

    @action(detail=False, methods=["get"])
    def featured(self, request):
        article = self.articles.published(featured=True).first()
        if article is None:
            raise Http404("No featured article.")
        return api_response(self.get_serializer(article).data)

    @action(detail=False, methods=["get"])
    def popular(self, request):
        try:
            limit = int(request.query_params.get("limit", settings.POPULAR_ARTICLES_DEFAULT_LIMIT))
        except ValueError:
            limit = settings.POPULAR_ARTICLES_DEFAULT_LIMIT
        limit = max(1, min(limit, POPULAR_MAX_LIMIT))
        return api_response(self.get_serializer(popularity_cache.popular(limit), many=True).data)

    @action(detail=False, methods=["get"], url_path="category-stats")
    def category_stats(self, request):
        return api_response(popularity_cache.category_stats())

    @action(detail=True, methods=["get", "post"])
    def views(self, request, slug=None):
        article = self.get_object()
        if request.method == "POST":
            serializer = ViewRecordSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            counted = ViewCounter(articles=self.articles).record_view(
                article.id, serializer.validated_data["session"]
            )
            return api_response(
                {"counted": counted, "view_count": self.articles.view_count(article.id)}
            )
        return api_response({"view_count": article.view_count})


class ArticleViewSet(BaseViewSet):
    """Editorial CRUD for admins and editors.

    Admins list every article; editors list only their own. All writes go
    through ``ArticleWorkflow``.
    """

    serializer_class = ArticleSerializer
    permission_classes = [RolePolicyPermission, CanModifyArticle]
    read_policy = "can_view_article_list"
    write_policy = "can_create_article"
    queryset = Article.objects.all()
    lookup_value_regex = "[0-9a-f-]{36}"
    articles = ArticleRepository()

    def get_workflow(self) -> ArticleWorkflow:
        return ArticleWorkflow(articles=self.articles)

    def _visible_articles(self, actor):
        if actor.role == Role.ADMIN:
            return self.articles.all()
        return self.articles.authored_by(actor.user_id)

    def get_queryset(self):
        if self.action != "list":
            return self.articles.all()

        qs = self._visible_articles(get_actor(self.request))

        params = self.request.query_params
        if params.get("status"):
            qs = qs.filter(status=params["status"])
        if params.get("category"):
            qs = qs.filter(category=params["category"])
        return qs.order_by("-created_at")

    def perform_create(self, serializer):
        serializer.instance = self.get_workflow().create(get_actor(self.request), serializer.validated_data)

    def perform_update(self, serializer):
        serializer.instance = self.get_workflow().update(
            get_actor(self.request), serializer.instance, serializer.validated_data
        )

    def perform_destroy(self, instance):
        self.get_workflow().delete(get_actor(self.request), instance)

    @action(detail=True, methods=["post"])
    def status(self, request, pk=None):
        article = self.get_object()
        serializer = StatusChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        article = self.get_workflow().change_status(
            get_actor(request), article, serializer.validated_data["status"]
        )
        return api_response(self.get_serializer(article).data)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        qs = self._visible_articles(get_actor(request))
        counts = self.articles.status_counts(qs)
        return api_response(
            {
                "total": sum(counts.values()),
                "published": counts[ArticleStatus.PUBLISHED],
                "draft": counts[ArticleStatus.DRAFT],
                "pending_review": counts[ArticleStatus.PENDING_REVIEW],
                "total_views": sum(qs.values_list("view_count", flat=True)),
            }
        )


class ImageUploadView(BaseAPIView):
    """Store an article image and return its public URL (editors and admins)."""

    permission_classes = [RolePolicyPermission]
    read_policy = "can_create_article"
    write_policy = "can_create_article"
    parser_classes = [MultiPartParser]

    def post(self, request):
        serializer = ImageUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        url = store_image(
            serializer.validated_data["file"],
            folder="articles",
            owner=str(request.user.id),
            max_bytes=settings.ARTICLE_IMAGE_MAX_BYTES,
        )
        return api_response({"url": url}, status=status.HTTP_201_CREATED)


__all__ = ["ArticleViewSet", "ImageUploadView", "NewsViewSet"]
