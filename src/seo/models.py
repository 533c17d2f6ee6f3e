"""Site-wide SEO settings stored as key/value rows."""

from django.db import models

DEFAULT_SEO_SETTINGS = {
    "site_name": "ताज़ा खबर",
    "site_description": "भारत की सबसे विश्वसनीय हिंदी समाचार वेबसाइट",
    "default_keywords": "हिंदी समाचार, ताज़ा खबर, भारत समाचार",
    "google_verification": "",
    "bing_verification": "",
    "google_analytics_id": "",
}


class SEOSetting(models.Model):
    setting_key = models.CharField(max_length=100, unique=True)
    setting_value = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["setting_key"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.setting_key


def effective_settings() -> dict[str, str]:
    """Stored values layered over the defaults; unknown stored keys are ignored."""
    merged = dict(DEFAULT_SEO_SETTINGS)
    for key, value in SEOSetting.objects.filter(setting_key__in=DEFAULT_SEO_SETTINGS).values_list(
        "setting_key", "setting_value"
    ):
        merged[key] = value
    return merged


__all__ = ["DEFAULT_SEO_SETTINGS", "SEOSetting", "effective_settings"]
