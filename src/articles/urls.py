"""Routing for the reader and management article APIs."""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import ArticleViewSet, ImageUploadView, NewsViewSet

router = DefaultRouter()
router.register(r"news", NewsViewSet, basename="news")
router.register(r"articles", ArticleViewSet, basename="article")

urlpatterns = [
    path("uploads/article-image/", ImageUploadView.as_view(), name="article-image-upload"),
    path("", include(router.urls)),
]
