from __future__ import annotations

from django.conf import settings
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken


def token_lifetime_seconds() -> int:
    return int(settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"].total_seconds())


def issue_access_token(user) -> str:
    """Sign an access token carrying the claims the console reads.

    `sub`, `iss`, `aud`, `exp` and `jti` are set by simplejwt from SIMPLE_JWT.
    """

    token = AccessToken.for_user(user)
    token["id"] = str(user.pk)
    token["name"] = user.name or ""
    token["email"] = user.email or ""
    token["carrier_id"] = str(user.carrier_id) if user.carrier_id is not None else ""
    token["organization_name"] = user.organization_name or ""
    token["auth_provider"] = user.auth_provider or "local"
    token["roles"] = user.role_list
    return str(token)


def validate_token(raw_token: str) -> dict | None:
    """Return the verified claims of `raw_token`, or None when it is invalid or expired."""

    if not raw_token:
        return None
    try:
        return dict(AccessToken(raw_token).payload)
    except TokenError:
        return None
