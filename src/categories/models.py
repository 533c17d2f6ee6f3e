"""Category registry: the set of sections an article can be filed under."""

from django.db import models


class Category(models.Model):
    """A news section such as ``sports`` or ``politics``.

    ``name`` is the stable key stored on articles and never changes after
    creation; ``label`` is what readers see.
    """

    name = models.CharField(max_length=50, unique=True)
    label = models.CharField(max_length=100)
    color = models.CharField(max_length=50, default="bg-primary")
    is_active = models.BooleanField(default=True)
    sort_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order", "name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.name


__all__ = ["Category"]
