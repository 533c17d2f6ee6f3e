"""Category endpoints: public reads, admin-only writes."""

import logging

from access_control.permissions import RolePolicyPermission
from access_control.policy import can_manage_categories
from access_control.resolver import get_actor
from core.response import BaseViewSet

from .models import Category
from .repositories import CategoryRepository
from .serializers import CategorySerializer

logger = logging.getLogger(__name__)


class CategoryViewSet(BaseViewSet):
    """List and manage categories by ``name``.

    Readers see active categories; admins see every category. Deleting a
    category leaves articles filed under it untouched.
    """

    serializer_class = CategorySerializer
    permission_classes = [RolePolicyPermission]
    read_policy = None
    write_policy = "can_manage_categories"
    lookup_field = "name"
    queryset = Category.objects.all()
    categories = CategoryRepository()

    def get_queryset(self):
        actor = get_actor(self.request)
        return self.categories.list(active_only=not can_manage_categories(actor.role))

    def perform_create(self, serializer):
        serializer.instance = self.categories.create(**serializer.validated_data)

    def perform_destroy(self, instance):
        self.categories.delete(instance)


__all__ = ["CategoryViewSet"]
