"""Serializers for the category registry."""

from rest_framework import serializers

from .models import Category


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        """``name`` is writable on create only."""

        model = Category
        fields = ["id", "name", "label", "color", "is_active", "sort_order", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_name(self, value: str) -> str:
        value = value.strip().lower()
        if self.instance is not None and value != self.instance.name:
            raise serializers.ValidationError("Category name cannot be changed.")
        if not value:
            raise serializers.ValidationError("Category name is required.")
        if self.instance is None and Category.objects.filter(name=value).exists():
            raise serializers.ValidationError("A category with this name already exists.")
        return value


__all__ = ["CategorySerializer"]
