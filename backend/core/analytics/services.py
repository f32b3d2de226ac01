from __future__ import annotations

import logging
from typing import Any

from django.db import DatabaseError
from django.utils import timezone

from accounts.models import User
from analytics.models import Submission
from carriers.models import Carrier
from catalog.models import Product, ProductType, Rule
from events.models import Event

logger = logging.getLogger(__name__)

STATUS_TABLES = (
    ("users", User),
    ("rules", Rule),
    ("products", Product),
    ("product_types", ProductType),
    ("carriers", Carrier),
    ("events", Event),
    ("submissions", Submission),
)


def database_status() -> dict[str, Any]:
    """Row counts per table; a failing database is reported, not raised."""

    try:
        tables = {name: model.objects.count() for name, model in STATUS_TABLES}
    except DatabaseError as exc:
        logger.error("database status check failed: %s", exc)
        return {
            "database_connected": False,
            "error": str(exc),
            "last_checked": timezone.now(),
        }

    return {
        "database_connected": True,
        "tables": tables,
        "last_checked": timezone.now(),
    }
