from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from django.conf import settings
from django.db.models import Count, Q
from django.utils import timezone

from accounts.models import User
from carriers.models import Carrier
from catalog.models import Product, Rule
from tenancy.access import AccessContext, scope_queryset


def _cumulative_counts(queryset, field: str, points: list[datetime]) -> list[int]:
    """Count rows created on or before each point in a single aggregate query."""

    aggregates = {
        f"upto_{idx}": Count("pk", filter=Q(**{f"{field}__lte": point}))
        for idx, point in enumerate(points)
    }
    result = queryset.aggregate(**aggregates)
    return [result[f"upto_{idx}"] for idx in range(len(points))]


def _grouped_counts(queryset, field: str) -> dict[str, int]:
    rows = (
        queryset.exclude(**{f"{field}__isnull": True})
        .values(field)
        .annotate(total=Count("pk"))
        .order_by(field)
    )
    return {row[field]: row["total"] for row in rows}


def build_analytics_snapshot(access: AccessContext, *, since: datetime | None = None) -> dict[str, Any]:
    now = timezone.now()
    growth_days = getattr(settings, "ANALYTICS_GROWTH_DAYS", 30)
    since = since or now - timedelta(days=30)

    rules = scope_queryset(Rule.objects.all(), access, "carrier_id")
    users = scope_queryset(User.objects.all(), access, "carrier_id")
    carriers = scope_queryset(Carrier.objects.all(), access, "carrier_id")
    products = scope_queryset(Product.objects.all(), access, "carrier_id")

    points = [now - timedelta(days=offset) for offset in range(growth_days - 1, -1, -1)]
    users_growth = _cumulative_counts(users, "created_at", points)
    rules_growth = _cumulative_counts(rules, "created_at", points)
    carriers_growth = _cumulative_counts(carriers, "created_at", points)

    growth_data = [
        {
            "date": point.date().isoformat(),
            "users": users_growth[idx],
            "rules": rules_growth[idx],
            "carriers": carriers_growth[idx],
        }
        for idx, point in enumerate(points)
    ]

    return {
        "generated_at": now,
        "metrics": {
            "total_rules": rules.count(),
            "rules_by_priority": _grouped_counts(rules, "priority"),
            "products_by_carrier": _grouped_counts(products, "carrier_name"),
            "recent_uploads": rules.filter(created_at__gte=since).count(),
            "total_users": users.count(),
            "total_carriers": carriers.count(),
            "total_products": products.count(),
            "users_by_role": _grouped_counts(users, "roles"),
            "growth_data": growth_data,
        },
        "embed_url": getattr(settings, "ANALYTICS_EMBED_URL", "/powerbi/embed/analytics"),
    }
