"""Validation for SEO settings updates."""

from rest_framework import serializers

from .models import DEFAULT_SEO_SETTINGS


class SEOSettingsSerializer(serializers.Serializer):
    """Partial update of the known SEO keys; any other key is rejected."""

    site_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    site_description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    default_keywords = serializers.CharField(max_length=500, required=False, allow_blank=True)
    google_verification = serializers.CharField(max_length=200, required=False, allow_blank=True)
    bing_verification = serializers.CharField(max_length=200, required=False, allow_blank=True)
    google_analytics_id = serializers.CharField(max_length=50, required=False, allow_blank=True)

    def validate(self, attrs):
        unknown = sorted(set(self.initial_data) - set(DEFAULT_SEO_SETTINGS))
        if unknown:
            raise serializers.ValidationError({key: ["Unknown SEO setting."] for key in unknown})
        return attrs


__all__ = ["SEOSettingsSerializer"]
