"""Read-only visitor analytics for admins."""

from django.conf import settings
from django.db.models import Count, Q
from rest_framework.decorators import action

from access_control.permissions import RolePolicyPermission
from core.response import BaseReadOnlyViewSet, api_response

from .models import VisitorRecord
from .serializers import VisitorRecordSerializer

SEARCH_FIELDS = {
    "ip": ("ip_address",),
    "name": ("visitor_name",),
    "user": ("user_id",),
}


class VisitorViewSet(BaseReadOnlyViewSet):
    """Newest visits first, optionally filtered.

    Query parameters: ``q`` search text, ``field`` one of all/ip/name/user,
    ``device`` a device type. Results are capped at ``VISITOR_LOG_PAGE_LIMIT``.
    """

    serializer_class = VisitorRecordSerializer
    permission_classes = [RolePolicyPermission]
    read_policy = "can_view_visitor_analytics"
    write_policy = "can_view_visitor_analytics"
    queryset = VisitorRecord.objects.all()

    def filter_records(self):
        params = self.request.query_params
        qs = VisitorRecord.objects.order_by("-created_at")

        device = params.get("device")
        if device and device != "all":
            qs = qs.filter(device_type=device)

        term = (params.get("q") or "").strip()
        if term:
            field = params.get("field", "all")
            columns = SEARCH_FIELDS.get(field)
            if columns is None:
                columns = ("ip_address", "visitor_name", "user_id")
            condition = Q()
            for column in columns:
                condition |= Q(**{f"{column}__icontains": term})
            qs = qs.filter(condition)
        return qs

    def get_queryset(self):
        qs = self.filter_records()
        if self.action == "list":
            qs = qs[: settings.VISITOR_LOG_PAGE_LIMIT]
        return qs

    @action(detail=False, methods=["get"])
    def summary(self, request):
        qs = VisitorRecord.objects.all()
        by_device = {
            row["device_type"] or "unknown": row["n"]
            for row in qs.order_by().values("device_type").annotate(n=Count("id"))
        }
        return api_response(
            {
                "total": qs.count(),
                "unique_ips": qs.order_by().values("ip_address").distinct().count(),
                "by_device": by_device,
                "push_subscribers": qs.filter(is_subscribed_push=True).count(),
            }
        )


__all__ = ["VisitorViewSet"]
