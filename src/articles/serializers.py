"""Serializers for the reader and management article APIs."""

from rest_framework import serializers

from categories.repositories import CategoryRepository

from .models import Article, ArticleStatus


class ArticleSerializer(serializers.ModelSerializer):
    """Full article representation used by the management API.

    Writes only validate field shapes; role, ownership, status and category
    rules are applied by ``ArticleWorkflow``.
    """

    author = serializers.PrimaryKeyRelatedField(read_only=True)
    author_name = serializers.SerializerMethodField()
    category_label = serializers.SerializerMethodField()
    status = serializers.ChoiceField(choices=ArticleStatus.choices, required=False)
    category = serializers.CharField(max_length=50, required=False, allow_blank=True)
    keywords = serializers.ListField(child=serializers.CharField(max_length=100), required=False)

    class Meta:
        """Slug, counters and timestamps are server-managed."""

        model = Article
        fields = [
            "id",
            "title",
            "slug",
            "excerpt",
            "content",
            "image_url",
            "category",
            "category_label",
            "is_breaking",
            "is_featured",
            "status",
            "published_at",
            "author",
            "author_name",
            "view_count",
            "seo_title",
            "meta_description",
            "keywords",
            "og_image",
            "canonical_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "slug", "published_at", "author", "view_count", "created_at", "updated_at"]

    def _labels(self) -> dict[str, str]:
        labels = self.context.get("category_labels")
        if labels is None:
            labels = CategoryRepository().labels()
            self.context["category_labels"] = labels
        return labels

    def get_category_label(self, obj) -> str:
        return self._labels().get(obj.category, obj.category)

    def get_author_name(self, obj):
        return obj.author.display_name if obj.author_id and obj.author else None


class NewsSerializer(ArticleSerializer):
    """Reader-facing article shape without editorial bookkeeping."""

    class Meta(ArticleSerializer.Meta):
        fields = [
            "id",
            "title",
            "slug",
            "excerpt",
            "content",
            "image_url",
            "category",
            "category_label",
            "is_breaking",
            "is_featured",
            "published_at",
            "author",
            "author_name",
            "view_count",
            "seo_title",
            "meta_description",
            "keywords",
            "og_image",
            "canonical_url",
        ]
        read_only_fields = fields


class StatusChangeSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ArticleStatus.choices)


class ViewRecordSerializer(serializers.Serializer):
    session = serializers.CharField(max_length=128)


class ImageUploadSerializer(serializers.Serializer):
    file = serializers.FileField()


__all__ = [
    "ArticleSerializer",
    "ImageUploadSerializer",
    "NewsSerializer",
    "StatusChangeSerializer",
    "ViewRecordSerializer",
]
