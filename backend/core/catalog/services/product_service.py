from __future__ import annotations

import logging

from django.db import transaction

from catalog.models import Product, ProductType
from events.models import Event
from events.services import record_event
from tenancy.access import AccessContext, validate_carrier_access
from tenancy.exceptions import AccessDenied, InvalidOperation

logger = logging.getLogger(__name__)


def resolve_product_type(type_name: str | None) -> ProductType | None:
    """Find a product type by name, creating it on first use."""

    type_name = (type_name or "").strip()
    if not type_name:
        return None
    product_type, created = ProductType.objects.get_or_create(
        type_name=type_name,
        defaults={"is_active": True, "display_order": 0},
    )
    if created:
        logger.info("product type created: %s", type_name)
    return product_type


def _product_snapshot(product: Product) -> dict:
    return {
        "id": product.pk,
        "name": product.name,
        "carrier": product.carrier_name,
        "carrier_id": product.carrier_id,
        "product_type": product.product_type.type_name if product.product_type_id else None,
    }


def _apply(product: Product, data: dict) -> None:
    data = dict(data)
    if "product_type" in data:
        product.product_type = resolve_product_type(data.pop("product_type"))
    for key, value in data.items():
        setattr(product, key, value)
    if product.min_annual_revenue > product.max_annual_revenue:
        raise InvalidOperation("min_annual_revenue must be less than or equal to max_annual_revenue.")


def create_product(*, access: AccessContext, data: dict, request=None) -> Product:
    if not (access.is_super_admin or access.is_carrier_admin):
        raise AccessDenied("Insufficient permissions to create products")

    with transaction.atomic():
        product = Product(carrier_id=None if access.is_super_admin else access.carrier_id)
        _apply(product, data)
        product.save()
        record_event(
            actor=access,
            action=Event.ACTION_CREATE,
            product_id=product.pk,
            metadata={"resource": "product", **_product_snapshot(product)},
            request=request,
        )
    return product


def update_product(*, access: AccessContext, instance: Product, data: dict, request=None) -> Product:
    validate_carrier_access(access, instance.carrier_id)

    with transaction.atomic():
        before = _product_snapshot(instance)
        _apply(instance, data)
        instance.save()
        record_event(
            actor=access,
            action=Event.ACTION_UPDATE,
            product_id=instance.pk,
            metadata={"resource": "product", "before": before, "after": _product_snapshot(instance)},
            request=request,
        )
    return instance


def delete_product(*, access: AccessContext, instance: Product, request=None) -> None:
    validate_carrier_access(access, instance.carrier_id)

    product_id = instance.pk
    with transaction.atomic():
        # Rules referencing the product keep their rows; the FK is set to NULL.
        instance.delete()
        record_event(
            actor=access,
            action=Event.ACTION_DELETE,
            product_id=product_id,
            metadata={"resource": "product"},
            request=request,
        )
    logger.info("product deleted: id=%s by=%s", product_id, access.user_id)
