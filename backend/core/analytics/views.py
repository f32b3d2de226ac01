from __future__ import annotations

from datetime import datetime, time

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from rest_framework.response import Response
from rest_framework.views import APIView

from analytics.selectors import build_analytics_snapshot
from analytics.services import database_status
from tenancy.exceptions import InvalidOperation
from tenancy.permissions import IsRoleAllowed


def _parse_since(raw: str | None) -> datetime | None:
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        value = parse_datetime(raw)
        if value is None:
            day = parse_date(raw)
            value = datetime.combine(day, time.min) if day else None
    except ValueError:
        value = None
    if value is None:
        raise InvalidOperation("since must be an ISO-8601 date or datetime.")
    if timezone.is_naive(value):
        value = timezone.make_aware(value)
    return value


class AnalyticsSnapshotAPIView(APIView):
    permission_classes = [IsRoleAllowed]
    role_resource_key = "analytics"

    def get(self, request):
        since = _parse_since(request.query_params.get("since"))
        return Response(build_analytics_snapshot(request.access, since=since))


class DatabaseStatusAPIView(APIView):
    permission_classes = [IsRoleAllowed]
    role_resource_key = "analytics"

    def get(self, request):
        return Response(database_status())
