from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tenancy.exceptions import AccessDenied, InvalidCredentials
from tenancy.rbac import ROLE_ADMIN, ROLE_CARRIER, ROLE_USER, parse_roles

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessContext:
    """Who is calling: user id, role names and the carrier they belong to."""

    user_id: str
    roles: tuple[str, ...] = field(default_factory=tuple)
    carrier_id: int | None = None
    organization_name: str = ""

    @property
    def is_super_admin(self) -> bool:
        return ROLE_ADMIN in self.roles

    @property
    def is_carrier_admin(self) -> bool:
        return ROLE_CARRIER in self.roles

    @property
    def is_carrier_user(self) -> bool:
        return ROLE_USER in self.roles


def access_context_for_user(user) -> AccessContext:
    if user is None or not getattr(user, "is_authenticated", False):
        raise InvalidCredentials("User not authenticated")

    # Reload from the database: roles or carrier may have changed since the token was issued.
    user_model = type(user)
    fresh = user_model.objects.filter(pk=user.pk).only(
        "id", "roles", "carrier_id", "organization_name"
    ).first()
    if fresh is None:
        raise InvalidCredentials("User not found")

    return AccessContext(
        user_id=str(fresh.pk),
        roles=tuple(parse_roles(fresh.roles)),
        carrier_id=fresh.carrier_id,
        organization_name=fresh.organization_name or "",
    )


def scope_queryset(queryset, access: AccessContext, field_name: str = "carrier_id"):
    """Restrict a queryset to the caller's carrier unless the caller is a super admin."""

    if access.is_super_admin:
        return queryset
    if access.carrier_id is None:
        return queryset.none()
    return queryset.filter(**{field_name: access.carrier_id})


def validate_carrier_access(access: AccessContext, target_carrier_id: int | None) -> None:
    if access.is_super_admin:
        return

    if access.carrier_id is None:
        logger.warning("carrier access denied: user=%s has no carrier", access.user_id)
        raise AccessDenied("User not associated with any carrier")

    if target_carrier_id != access.carrier_id:
        logger.warning(
            "carrier access denied: user=%s carrier=%s target=%s",
            access.user_id,
            access.carrier_id,
            target_carrier_id,
        )
        raise AccessDenied("Access denied to other carrier's data")
