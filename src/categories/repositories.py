"""Category lookups used by the article workflow and serializers."""

import logging
from typing import Optional

from .models import Category

logger = logging.getLogger(__name__)


class CategoryRepository:
    """Thin query layer over ``Category``."""

    def get(self, name: str) -> Optional[Category]:
        """Return the category called ``name`` or ``None`` if unknown."""
        if not name:
            return None
        return Category.objects.filter(name=name).first()

    def exists(self, name: str) -> bool:
        return bool(name) and Category.objects.filter(name=name).exists()

    def label_for(self, name: str) -> str:
        """Human label for ``name``; unknown or deleted categories show the raw name."""
        category = self.get(name)
        return category.label if category is not None else name

    def labels(self) -> dict[str, str]:
        return dict(Category.objects.values_list("name", "label"))

    def list(self, active_only: bool = True):
        qs = Category.objects.all()
        if active_only:
            qs = qs.filter(is_active=True)
        return qs

    def create(self, **fields) -> Category:
        category = Category.objects.create(**fields)
        logger.info("Created category %s", category.name)
        return category

    def delete(self, category: Category) -> None:
        name = category.name
        category.delete()
        logger.info("Deleted category %s", name)


__all__ = ["CategoryRepository"]
