from rest_framework import serializers

from .models import VisitorRecord


class VisitorRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = VisitorRecord
        fields = [
            "id",
            "ip_address",
            "user_id",
            "visitor_name",
            "user_agent",
            "page_visited",
            "referrer",
            "device_type",
            "browser",
            "country",
            "city",
            "is_subscribed_push",
            "created_at",
        ]
        read_only_fields = fields


__all__ = ["VisitorRecordSerializer"]
