import logging
from copy import deepcopy
from typing import Iterable

from django.conf import settings
from django.core.exceptions import ValidationError

from tenancy.text import join_csv, split_csv

logger = logging.getLogger(__name__)

ROLE_ADMIN = "admin"
ROLE_CARRIER = "carrier"
ROLE_USER = "user"

VALID_ROLES = frozenset((ROLE_ADMIN, ROLE_CARRIER, ROLE_USER))
VALID_METHODS = frozenset(("GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE", "*"))

READ_ROLES = frozenset((ROLE_ADMIN, ROLE_CARRIER, ROLE_USER))
WRITE_ROLES = frozenset((ROLE_ADMIN, ROLE_CARRIER))
ADMIN_ROLES = frozenset((ROLE_ADMIN,))
NO_ROLES = frozenset()


def parse_roles(raw_roles) -> list[str]:
    """Split a comma-separated role string into trimmed, non-empty role names."""

    return split_csv(raw_roles)


def join_roles(roles: Iterable[str]) -> str:
    return join_csv(roles)


def build_role_matrix(
    *,
    read_roles=READ_ROLES,
    post_roles=WRITE_ROLES,
    put_roles=WRITE_ROLES,
    patch_roles=None,
    delete_roles=ADMIN_ROLES,
):
    if patch_roles is None:
        patch_roles = put_roles
    return {
        "GET": frozenset(read_roles),
        "HEAD": frozenset(read_roles),
        "OPTIONS": frozenset(read_roles),
        "POST": frozenset(post_roles),
        "PUT": frozenset(put_roles),
        "PATCH": frozenset(patch_roles),
        "DELETE": frozenset(delete_roles),
    }


DEFAULT_RESOURCE_ROLE_MATRICES = {
    "users": build_role_matrix(
        read_roles=WRITE_ROLES,
        put_roles=ADMIN_ROLES,
    ),
    "user_profiles": build_role_matrix(
        post_roles=NO_ROLES,
        put_roles=ADMIN_ROLES,
    ),
    "carriers": build_role_matrix(
        post_roles=ADMIN_ROLES,
    ),
    "products": build_role_matrix(
        delete_roles=WRITE_ROLES,
    ),
    "product_types": build_role_matrix(
        post_roles=NO_ROLES,
        put_roles=NO_ROLES,
        delete_roles=NO_ROLES,
    ),
    "rules": build_role_matrix(),
    "rule_uploads": build_role_matrix(
        read_roles=NO_ROLES,
        put_roles=NO_ROLES,
        delete_roles=NO_ROLES,
    ),
    "events": build_role_matrix(
        read_roles=ADMIN_ROLES,
        post_roles=NO_ROLES,
        put_roles=NO_ROLES,
        delete_roles=NO_ROLES,
    ),
    "analytics": build_role_matrix(
        post_roles=NO_ROLES,
        put_roles=NO_ROLES,
        delete_roles=NO_ROLES,
    ),
}

DEFAULT_ROLE_MATRIX = build_role_matrix()
KNOWN_RBAC_RESOURCES = frozenset(DEFAULT_RESOURCE_ROLE_MATRICES.keys())


def _normalize_roles(raw_roles: Iterable[str]) -> frozenset[str]:
    if not isinstance(raw_roles, (list, tuple, set, frozenset)):
        return frozenset()
    normalized = {str(role).strip().lower() for role in raw_roles}
    return frozenset(role for role in normalized if role in VALID_ROLES)


def validate_role_overrides_schema(overrides, *, allow_unknown_resources=False) -> None:
    if overrides in (None, {}):
        return

    if not isinstance(overrides, dict):
        raise ValidationError("ROLE_MATRICES must be a JSON object (dictionary).")

    errors = {}
    for resource_key, method_map in overrides.items():
        resource_name = str(resource_key)
        resource_errors = []

        if not allow_unknown_resources and resource_name not in KNOWN_RBAC_RESOURCES:
            resource_errors.append(
                f"Unknown resource '{resource_name}'. Allowed: {sorted(KNOWN_RBAC_RESOURCES)}"
            )

        if not isinstance(method_map, dict):
            resource_errors.append("Resource value must be an object of HTTP methods to role lists.")
            errors[resource_name] = resource_errors
            continue

        for method, raw_roles in method_map.items():
            method_name = str(method).upper()
            if method_name not in VALID_METHODS:
                resource_errors.append(
                    f"Method '{method_name}' is invalid. Allowed: {sorted(VALID_METHODS)}"
                )
                continue

            if not isinstance(raw_roles, list) or not raw_roles:
                resource_errors.append(
                    f"Method '{method_name}' must contain a non-empty role list."
                )
                continue

            normalized_roles = _normalize_roles(raw_roles)
            if len(normalized_roles) != len(set(str(r).strip().lower() for r in raw_roles)):
                resource_errors.append(
                    f"Method '{method_name}' contains invalid roles. "
                    f"Allowed roles: {sorted(VALID_ROLES)}"
                )

        if resource_errors:
            errors[resource_name] = resource_errors

    if errors:
        raise ValidationError(errors)


def _apply_overrides(matrices: dict, overrides: dict | None) -> dict:
    if not isinstance(overrides, dict):
        return matrices

    for resource_key, method_map in overrides.items():
        if not isinstance(method_map, dict):
            continue
        resource_matrix = matrices.setdefault(str(resource_key), {})
        for method, raw_roles in method_map.items():
            normalized_roles = _normalize_roles(raw_roles)
            if not normalized_roles:
                continue
            resource_matrix[str(method).upper()] = normalized_roles
    return matrices


def get_resource_role_matrices() -> dict:
    matrices = deepcopy(DEFAULT_RESOURCE_ROLE_MATRICES)

    overrides = getattr(settings, "ROLE_MATRICES", {})
    try:
        validate_role_overrides_schema(overrides)
        _apply_overrides(matrices, overrides)
    except ValidationError as exc:
        logger.warning("ignoring invalid ROLE_MATRICES override: %s", exc.messages)

    return matrices


def get_role_matrix_for_resource(resource_key: str) -> dict:
    return get_resource_role_matrices().get(resource_key, DEFAULT_ROLE_MATRIX)


def roles_can(role_matrix, roles: Iterable[str], method: str) -> bool:
    allowed_roles = role_matrix.get(method, role_matrix.get("*", frozenset()))
    return any(role in allowed_roles for role in roles)


def resource_capabilities_for_roles(role_matrix, roles):
    roles = list(roles)
    can_get = roles_can(role_matrix, roles, "GET")
    return {
        "list": can_get,
        "retrieve": can_get,
        "create": roles_can(role_matrix, roles, "POST"),
        "update": roles_can(role_matrix, roles, "PUT"),
        "partial_update": roles_can(role_matrix, roles, "PATCH"),
        "delete": roles_can(role_matrix, roles, "DELETE"),
    }
