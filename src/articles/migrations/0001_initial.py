import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import articles.models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Article",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=300)),
                ("slug", models.SlugField(allow_unicode=True, max_length=150, unique=True)),
                ("excerpt", models.TextField(blank=True, null=True)),
                ("content", models.TextField()),
                ("image_url", models.CharField(blank=True, max_length=500, null=True)),
                (
                    "category",
                    models.CharField(db_index=True, default=articles.models._default_category, max_length=50),
                ),
                ("is_breaking", models.BooleanField(default=False)),
                ("is_featured", models.BooleanField(default=False)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("pending_review", "Pending review"),
                            ("published", "Published"),
                        ],
                        default="draft",
                        max_length=20,
                    ),
                ),
                ("published_at", models.DateTimeField(blank=True, null=True)),
                ("view_count", models.PositiveIntegerField(default=0)),
                ("seo_title", models.CharField(blank=True, max_length=300, null=True)),
                ("meta_description", models.TextField(blank=True, null=True)),
                ("keywords", models.JSONField(blank=True, default=list)),
                ("og_image", models.CharField(blank=True, max_length=500, null=True)),
                ("canonical_url", models.CharField(blank=True, max_length=500, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "author",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="articles",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status", "-published_at"], name="article_status_pub_idx"),
                    models.Index(fields=["-view_count"], name="article_view_count_idx"),
                ],
            },
        ),
    ]
