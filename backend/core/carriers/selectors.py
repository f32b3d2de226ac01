from __future__ import annotations

from django.db import models

from carriers.models import Carrier
from tenancy.access import AccessContext, scope_queryset, validate_carrier_access
from tenancy.exceptions import ResourceNotFound


def list_carriers(*, access: AccessContext, search: str | None = None):
    qs = scope_queryset(Carrier.objects.all(), access, "carrier_id")
    if search:
        search = str(search).strip()
        if search:
            qs = qs.filter(
                models.Q(display_name__icontains=search) | models.Q(legal_name__icontains=search)
            )
    return qs.order_by("carrier_id")


def get_carrier(*, access: AccessContext, carrier_id) -> Carrier:
    carrier = Carrier.objects.filter(carrier_id=carrier_id).first()
    if carrier is None:
        raise ResourceNotFound(f"Carrier {carrier_id} not found")
    validate_carrier_access(access, carrier.carrier_id)
    return carrier
