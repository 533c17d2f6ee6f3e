from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="VisitorRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("ip_address", models.CharField(max_length=64)),
                ("user_id", models.UUIDField(blank=True, null=True)),
                ("visitor_name", models.CharField(blank=True, max_length=200, null=True)),
                ("user_agent", models.TextField(blank=True, null=True)),
                ("page_visited", models.CharField(blank=True, max_length=500, null=True)),
                ("referrer", models.CharField(blank=True, max_length=500, null=True)),
                (
                    "device_type",
                    models.CharField(
                        blank=True,
                        choices=[("desktop", "Desktop"), ("mobile", "Mobile"), ("tablet", "Tablet")],
                        max_length=20,
                        null=True,
                    ),
                ),
                ("browser", models.CharField(blank=True, max_length=100, null=True)),
                ("country", models.CharField(blank=True, max_length=100, null=True)),
                ("city", models.CharField(blank=True, max_length=100, null=True)),
                ("push_token", models.TextField(blank=True, null=True)),
                ("is_subscribed_push", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
