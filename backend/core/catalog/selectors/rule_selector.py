from __future__ import annotations

from catalog.models import Rule
from tenancy.access import AccessContext, scope_queryset, validate_carrier_access
from tenancy.exceptions import ResourceNotFound

RULE_SORT_ORDERINGS = {
    "priority": ("priority", "rule_id"),
    "status": ("status", "rule_id"),
    "created": ("-created_at", "rule_id"),
}
DEFAULT_RULE_ORDERING = ("title", "rule_id")


def list_rules(*, access: AccessContext, sort_by: str | None = None):
    ordering = RULE_SORT_ORDERINGS.get((sort_by or "").strip().lower(), DEFAULT_RULE_ORDERING)
    return scope_queryset(Rule.objects.all(), access, "carrier_id").order_by(*ordering)


def get_rule(*, access: AccessContext, rule_id: str) -> Rule:
    rule = Rule.objects.filter(pk=rule_id).first()
    if rule is None:
        raise ResourceNotFound(f"Rule {rule_id} not found")
    validate_carrier_access(access, rule.carrier_id)
    return rule
