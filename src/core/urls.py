"""Root URL configuration for the newsroom API."""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView

from authentication.views import AuthorProfileView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("auth/", include("authentication.urls")),
    path("authors/<uuid:user_id>/", AuthorProfileView.as_view(), name="author-profile"),
    path("", include("access_control.urls")),
    path("", include("categories.urls")),
    path("", include("articles.urls")),
    path("", include("seo.urls")),
    path("", include("analytics.urls")),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
