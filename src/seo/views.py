"""Global SEO settings: readable by anyone, editable by admins."""

import logging

from django.db import transaction

from access_control.permissions import RolePolicyPermission
from core.response import BaseAPIView, api_response

from .models import SEOSetting, effective_settings
from .serializers import SEOSettingsSerializer

logger = logging.getLogger(__name__)


class SEOSettingsView(BaseAPIView):
    permission_classes = [RolePolicyPermission]
    read_policy = None
    write_policy = "can_manage_global_seo"

    def get(self, request):
        return api_response(effective_settings())

    def patch(self, request):
        serializer = SEOSettingsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            for key, value in serializer.validated_data.items():
                SEOSetting.objects.update_or_create(setting_key=key, defaults={"setting_value": value})
        logger.info("SEO settings updated: %s", ", ".join(sorted(serializer.validated_data)))
        return api_response(effective_settings())


__all__ = ["SEOSettingsView"]
