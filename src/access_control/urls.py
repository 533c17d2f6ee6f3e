"""Routing for user role administration."""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import UserRoleViewSet

router = DefaultRouter()
router.register(r"users", UserRoleViewSet, basename="user")

urlpatterns = [
    path("", include(router.urls)),
]
