"""Routing for SEO settings."""

from django.urls import path

from .views import SEOSettingsView

urlpatterns = [
    path("seo-settings/", SEOSettingsView.as_view(), name="seo-settings"),
]
