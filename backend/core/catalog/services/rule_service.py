from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from catalog.models import Rule
from catalog.selectors.product_selector import get_product
from events.models import Event
from events.services import record_event
from tenancy.access import AccessContext, validate_carrier_access
from tenancy.exceptions import AccessDenied, InvalidOperation
from tenancy.text import join_csv

logger = logging.getLogger(__name__)

LIST_FIELDS = ("naics_codes", "states", "restrictions", "conditions")


def _apply(rule: Rule, data: dict, *, access: AccessContext) -> None:
    data = dict(data)
    if "product_id" in data:
        product_id = (data.pop("product_id") or "").strip()
        if product_id:
            product = get_product(access=access, product_id=product_id)
            rule.product = product
            if not data.get("product_name") and not rule.product_name:
                rule.product_name = product.name
        else:
            rule.product = None

    for key, value in data.items():
        if key in LIST_FIELDS and isinstance(value, (list, tuple)):
            value = join_csv(value) or None
        setattr(rule, key, value)

    if rule.min_revenue is not None and rule.max_revenue is not None and rule.min_revenue > rule.max_revenue:
        raise InvalidOperation("min_revenue must be less than or equal to max_revenue.")
    if rule.effective_from and rule.effective_to and rule.effective_from > rule.effective_to:
        raise InvalidOperation("effective_from must be before effective_to.")


def create_rule(*, access: AccessContext, data: dict, request=None) -> Rule:
    if not (access.is_super_admin or access.is_carrier_admin):
        raise AccessDenied("Insufficient permissions to create rules")

    with transaction.atomic():
        rule = Rule(
            carrier_id=None if access.is_super_admin else access.carrier_id,
            created_by=access.user_id,
        )
        _apply(rule, data, access=access)
        rule.save(force_insert=True)
        record_event(
            actor=access,
            action=Event.ACTION_CREATE,
            rule_id=rule.pk,
            product_id=rule.product_id,
            metadata={"resource": "rule", "title": rule.title},
            request=request,
        )
    return rule


def update_rule(*, access: AccessContext, instance: Rule, data: dict, request=None) -> Rule:
    validate_carrier_access(access, instance.carrier_id)

    with transaction.atomic():
        _apply(instance, data, access=access)
        instance.updated_at = timezone.now()
        instance.save()
        record_event(
            actor=access,
            action=Event.ACTION_UPDATE,
            rule_id=instance.pk,
            product_id=instance.product_id,
            metadata={"resource": "rule", "fields": sorted(data.keys())},
            request=request,
        )
    return instance


def delete_rule(*, access: AccessContext, instance: Rule, request=None) -> None:
    validate_carrier_access(access, instance.carrier_id)

    rule_id = instance.pk
    with transaction.atomic():
        instance.delete()
        record_event(
            actor=access,
            action=Event.ACTION_DELETE,
            rule_id=rule_id,
            metadata={"resource": "rule"},
            request=request,
        )
    logger.info("rule deleted: id=%s by=%s", rule_id, access.user_id)
