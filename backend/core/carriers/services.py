from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from carriers.models import Carrier
from events.models import Event
from events.services import record_event
from tenancy.access import AccessContext, validate_carrier_access
from tenancy.exceptions import AccessDenied
from tenancy.text import join_csv

logger = logging.getLogger(__name__)


def _apply(instance: Carrier, data: dict) -> None:
    for key, value in data.items():
        if key == "products_offered" and isinstance(value, (list, tuple)):
            value = join_csv(value) or None
        setattr(instance, key, value)


def create_carrier(*, access: AccessContext, data: dict, request=None) -> Carrier:
    if not access.is_super_admin:
        raise AccessDenied("Only admin users can create carriers")

    with transaction.atomic():
        carrier = Carrier()
        _apply(carrier, data)
        if not carrier.created_by:
            carrier.created_by = access.user_id
        carrier.save()
        record_event(
            actor=access,
            action=Event.ACTION_CREATE,
            metadata={"resource": "carrier", "carrier_id": carrier.carrier_id},
            request=request,
        )
    logger.info("carrier created: id=%s by=%s", carrier.carrier_id, access.user_id)
    return carrier


def create_carrier_for_organization(
    *,
    organization_name: str,
    contact_name: str = "",
    contact_email: str = "",
    contact_phone: str = "",
    created_by: str = "system",
) -> Carrier:
    """Create the carrier that backs a newly registered or provisioned carrier admin."""

    return Carrier.objects.create(
        legal_name=organization_name,
        display_name=organization_name,
        primary_contact_name=contact_name or None,
        primary_contact_email=contact_email or None,
        primary_contact_phone=contact_phone or None,
        created_by=created_by,
    )


def update_carrier(*, access: AccessContext, instance: Carrier, data: dict, request=None) -> Carrier:
    validate_carrier_access(access, instance.carrier_id)
    if not (access.is_super_admin or access.is_carrier_admin):
        raise AccessDenied("Only admin or carrier admin users can update carriers")

    with transaction.atomic():
        _apply(instance, data)
        instance.updated_at = timezone.now()
        instance.save()
        record_event(
            actor=access,
            action=Event.ACTION_UPDATE,
            metadata={"resource": "carrier", "carrier_id": instance.carrier_id},
            request=request,
        )
    return instance


def delete_carrier(*, access: AccessContext, instance: Carrier, request=None) -> None:
    if not access.is_super_admin:
        raise AccessDenied("Only admin users can delete carriers")

    carrier_id = instance.carrier_id
    with transaction.atomic():
        # Users, products and rules keep their rows; their carrier FK is set to NULL.
        instance.delete()
        record_event(
            actor=access,
            action=Event.ACTION_DELETE,
            metadata={"resource": "carrier", "carrier_id": carrier_id},
            request=request,
        )
    logger.info("carrier deleted: id=%s by=%s", carrier_id, access.user_id)
