"""Visitor log records, read by the admin analytics screens."""

from django.db import models


class DeviceType(models.TextChoices):
    DESKTOP = "desktop", "Desktop"
    MOBILE = "mobile", "Mobile"
    TABLET = "tablet", "Tablet"


class VisitorRecord(models.Model):
    """One page visit. Rows are written by the site front end, never by this API."""

    ip_address = models.CharField(max_length=64)
    user_id = models.UUIDField(null=True, blank=True)
    visitor_name = models.CharField(max_length=200, null=True, blank=True)
    user_agent = models.TextField(null=True, blank=True)
    page_visited = models.CharField(max_length=500, null=True, blank=True)
    referrer = models.CharField(max_length=500, null=True, blank=True)
    device_type = models.CharField(max_length=20, choices=DeviceType.choices, null=True, blank=True)
    browser = models.CharField(max_length=100, null=True, blank=True)
    country = models.CharField(max_length=100, null=True, blank=True)
    city = models.CharField(max_length=100, null=True, blank=True)
    push_token = models.TextField(null=True, blank=True)
    is_subscribed_push = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.ip_address} {self.page_visited}"


__all__ = ["DeviceType", "VisitorRecord"]
