from __future__ import annotations

from events.models import Event
from tenancy.context import get_current_correlation_id


def _actor_id(actor) -> str | None:
    if actor is None:
        return None
    if isinstance(actor, str):
        return actor or None
    user_id = getattr(actor, "user_id", None)
    if user_id:
        return str(user_id)
    pk = getattr(actor, "pk", None)
    return str(pk) if pk is not None else None


def _extract_ip(request) -> str:
    # Behind a load balancer X-Forwarded-For may hold a chain; keep the left-most hop.
    forwarded_for = (request.META.get("HTTP_X_FORWARDED_FOR") or "").strip()
    if forwarded_for:
        return forwarded_for.split(",", 1)[0].strip()
    return (request.META.get("REMOTE_ADDR") or "").strip()


def record_event(
    *,
    actor,
    action: str,
    rule_id: str | None = None,
    product_id: str | None = None,
    metadata: dict | None = None,
    request=None,
) -> Event:
    """Append an activity event. `actor` may be a user, an access context or a user id."""

    payload = dict(metadata) if isinstance(metadata, dict) else {}
    if request is not None:
        payload.setdefault("request_method", (getattr(request, "method", "") or "").upper())
        payload.setdefault("request_path", getattr(request, "path", "") or "")
        payload.setdefault("ip_address", _extract_ip(request))

    correlation_id = get_current_correlation_id()
    if correlation_id:
        payload.setdefault("correlation_id", correlation_id)

    return Event.objects.create(
        user_id=_actor_id(actor),
        action=action,
        rule_id=rule_id,
        product_id=product_id,
        metadata=payload,
    )
