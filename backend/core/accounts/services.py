from __future__ import annotations

import logging
import secrets
import string
from datetime import timedelta

from django.conf import settings
from django.db import models, transaction
from django.utils import timezone

from accounts.models import Role, User
from accounts.tokens import issue_access_token
from carriers.models import Carrier
from carriers.services import create_carrier_for_organization
from events.models import Event
from events.services import record_event
from tenancy.access import AccessContext, scope_queryset
from tenancy.exceptions import AccessDenied, InvalidCredentials, InvalidOperation, ResourceNotFound
from tenancy.rbac import ROLE_ADMIN, ROLE_CARRIER, ROLE_USER, VALID_ROLES, join_roles, parse_roles

logger = logging.getLogger(__name__)

TEMPORARY_PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%"
SYSTEM_ORGANIZATION_NAME = "System"


def generate_temporary_password(length: int | None = None) -> str:
    length = length or getattr(settings, "TEMPORARY_PASSWORD_LENGTH", 12)
    return "".join(secrets.choice(TEMPORARY_PASSWORD_ALPHABET) for _ in range(length))


def _role_row(role_names: list[str]) -> Role | None:
    if not role_names:
        return None
    return Role.objects.filter(role_name__iexact=role_names[0]).first()


def _validate_roles(raw_roles) -> list[str]:
    roles = parse_roles(raw_roles)
    if not roles:
        raise InvalidOperation("At least one role is required.")
    invalid = [role for role in roles if role not in VALID_ROLES]
    if invalid:
        raise InvalidOperation(
            f"Invalid role '{invalid[0]}'. Allowed roles: {', '.join(sorted(VALID_ROLES))}."
        )
    return roles


def _ensure_email_available(email: str, *, exclude_user_id: str | None = None) -> str:
    """Return the normalized e-mail, or raise when another account already uses it."""

    email = User.objects.normalize_email((email or "").strip())
    qs = User.objects.filter(email__iexact=email)
    if exclude_user_id:
        qs = qs.exclude(pk=exclude_user_id)
    if qs.exists():
        raise InvalidOperation("User with this email already exists")
    return email


def _user_snapshot(user: User) -> dict:
    return {
        "id": user.pk,
        "name": user.name,
        "email": user.email,
        "roles": user.role_list,
        "carrier_id": user.carrier_id,
        "organization_name": user.organization_name,
        "is_active": user.is_active,
    }


def _register_failed_attempt(user: User, now) -> None:
    User.objects.filter(pk=user.pk).update(
        failed_login_attempts=models.F("failed_login_attempts") + 1
    )
    user.refresh_from_db(fields=["failed_login_attempts"])

    max_attempts = getattr(settings, "LOGIN_MAX_FAILED_ATTEMPTS", 5)
    if user.failed_login_attempts >= max_attempts:
        user.lockout_end = now + timedelta(minutes=getattr(settings, "LOGIN_LOCKOUT_MINUTES", 15))
        user.save(update_fields=["lockout_end"])
        logger.warning(
            "account locked: user=%s attempts=%s until=%s",
            user.pk,
            user.failed_login_attempts,
            user.lockout_end.isoformat(),
        )
    else:
        logger.warning("login failed: user=%s attempts=%s", user.pk, user.failed_login_attempts)


def login(*, username: str, password: str, request=None) -> tuple[User, str]:
    """Verify credentials and return the user with a freshly signed access token.

    `username` matches either the e-mail (case-insensitively) or the display name
    of an active user.
    Repeated failures lock the account for LOGIN_LOCKOUT_MINUTES.
    """

    username = (username or "").strip()
    user = (
        User.objects.filter(is_active=True)
        .filter(models.Q(email__iexact=username) | models.Q(name=username))
        .order_by("created_at", "id")
        .first()
    )
    if user is None:
        logger.warning("login failed: unknown username=%s", username)
        raise InvalidCredentials("Invalid credentials")

    now = timezone.now()
    if user.is_locked_out(now):
        logger.warning("login rejected: user=%s is locked out", user.pk)
        raise InvalidCredentials("Account is locked. Try again later.")

    if not user.check_password(password or ""):
        _register_failed_attempt(user, now)
        raise InvalidCredentials("Invalid credentials")

    user.failed_login_attempts = 0
    user.lockout_end = None
    user.last_login = now
    user.save(update_fields=["failed_login_attempts", "lockout_end", "last_login"])

    access_token = issue_access_token(user)
    record_event(
        actor=user,
        action=Event.ACTION_LOGIN,
        metadata={"resource": "user", "user_id": user.pk},
        request=request,
    )
    logger.info("login succeeded: user=%s", user.pk)
    return user, access_token


def register(
    *,
    username: str,
    password: str,
    organization_name: str,
    admin_name: str = "",
    admin_email: str,
    admin_phone: str = "",
    request=None,
) -> User:
    """Self-service registration.

    The very first account becomes the super admin of the "System" organization;
    every later registration creates a carrier and its carrier admin.
    """

    admin_email = _ensure_email_available(admin_email)

    with transaction.atomic():
        is_first_user = not User.objects.exists()
        role = ROLE_ADMIN if is_first_user else ROLE_CARRIER

        carrier = None
        if role == ROLE_CARRIER:
            carrier = create_carrier_for_organization(
                organization_name=organization_name,
                contact_name=admin_name,
                contact_email=admin_email,
                contact_phone=admin_phone,
                created_by="system",
            )

        user = User.objects.create_user(
            email=admin_email,
            password=password,
            name=username,
            roles=role,
            role=_role_row([role]),
            carrier=carrier,
            organization_name=SYSTEM_ORGANIZATION_NAME if role == ROLE_ADMIN else organization_name,
            is_active=True,
            auth_provider="local",
        )
        record_event(
            actor=user,
            action=Event.ACTION_CREATE,
            metadata={"resource": "user", "registration": True, **_user_snapshot(user)},
            request=request,
        )

    logger.info("registration succeeded: user=%s role=%s", user.pk, role)
    return user


def get_user(*, user_id: str) -> User:
    user = User.objects.select_related("carrier").filter(pk=user_id).first()
    if user is None:
        raise ResourceNotFound(f"User {user_id} not found")
    return user


def get_user_profile(*, access: AccessContext, user_id: str) -> User:
    if not access.is_super_admin and user_id != access.user_id:
        logger.warning("profile access denied: user=%s target=%s", access.user_id, user_id)
        raise AccessDenied("Access denied to other users' profiles")
    return get_user(user_id=user_id)


def list_users(*, access: AccessContext, role: str | None = None):
    qs = scope_queryset(User.objects.all(), access, "carrier_id")
    role = (role or "").strip()
    if role:
        qs = qs.filter(roles__contains=role)
    return qs.order_by("created_at", "id")


def create_user_profile(
    *,
    access: AccessContext,
    name: str,
    email: str,
    roles,
    organization_id: str = "",
    organization_name: str = "",
    is_active: bool = True,
    auth_provider: str = "local",
    request=None,
) -> tuple[User, str]:
    """Provision a carrier admin or carrier user and return it with its temporary password."""

    roles = _validate_roles(roles)
    if ROLE_ADMIN in roles:
        raise AccessDenied("Cannot create Super Admin users")
    if not (access.is_super_admin or access.is_carrier_admin):
        raise AccessDenied("Only Super Admin or Carrier Admin can create users")

    email = _ensure_email_available(email)

    temporary_password = generate_temporary_password()
    with transaction.atomic():
        carrier_id = None
        if ROLE_CARRIER in roles:
            if access.is_super_admin:
                carrier = create_carrier_for_organization(
                    organization_name=organization_name or name,
                    contact_name=name,
                    contact_email=email,
                    created_by=access.user_id,
                )
                carrier_id = carrier.carrier_id
            else:
                carrier_id = access.carrier_id
        elif ROLE_USER in roles:
            if access.is_carrier_admin:
                carrier_id = access.carrier_id
            elif access.is_super_admin and str(organization_id or "").strip().isdigit():
                carrier_id = int(str(organization_id).strip())
                if not Carrier.objects.filter(pk=carrier_id).exists():
                    raise InvalidOperation(f"Carrier {carrier_id} does not exist")

        if access.is_carrier_admin and access.carrier_id is not None:
            organization_name = access.organization_name or organization_name

        user = User.objects.create_user(
            email=email,
            password=temporary_password,
            name=name,
            roles=join_roles(roles),
            role=_role_row(roles),
            carrier_id=carrier_id,
            organization_name=organization_name or None,
            is_active=is_active,
            auth_provider=auth_provider or "local",
        )
        record_event(
            actor=access,
            action=Event.ACTION_CREATE,
            metadata={"resource": "user", **_user_snapshot(user)},
            request=request,
        )

    logger.info("user created: id=%s roles=%s by=%s", user.pk, user.roles, access.user_id)
    return user, temporary_password


def quick_create_user(
    *,
    access: AccessContext,
    name: str,
    email: str,
    role: str,
    carrier_id: int | None = None,
    request=None,
) -> tuple[User, str]:
    roles = _validate_roles(role)
    if ROLE_ADMIN in roles and not access.is_super_admin:
        raise AccessDenied("Cannot create Super Admin users")
    if not (access.is_super_admin or access.is_carrier_admin):
        raise AccessDenied("Only Super Admin or Carrier Admin can create users")

    email = _ensure_email_available(email)

    organization_name = None
    if access.is_super_admin:
        if carrier_id is not None:
            carrier = Carrier.objects.filter(pk=carrier_id).first()
            if carrier is None:
                raise InvalidOperation(f"Carrier {carrier_id} does not exist")
            organization_name = carrier.display_name
    else:
        carrier_id = access.carrier_id
        organization_name = access.organization_name or None

    temporary_password = generate_temporary_password()
    with transaction.atomic():
        user = User.objects.create_user(
            email=email,
            password=temporary_password,
            name=name,
            roles=join_roles(roles),
            role=_role_row(roles),
            carrier_id=carrier_id,
            organization_name=organization_name,
            is_active=True,
            auth_provider="local",
        )
        record_event(
            actor=access,
            action=Event.ACTION_CREATE,
            metadata={"resource": "user", "quick_create": True, **_user_snapshot(user)},
            request=request,
        )

    logger.info("user quick-created: id=%s role=%s by=%s", user.pk, user.roles, access.user_id)
    return user, temporary_password


def update_user(*, access: AccessContext, user_id: str, data: dict, request=None) -> User:
    if not access.is_super_admin:
        raise AccessDenied("Only admin users can update users")

    user = get_user(user_id=user_id)
    with transaction.atomic():
        if "email" in data:
            user.email = _ensure_email_available(data["email"], exclude_user_id=user.pk)
        if "name" in data:
            user.name = data["name"]
        if "role" in data:
            roles = _validate_roles(data["role"])
            user.roles = join_roles(roles)
            user.role = _role_row(roles)
        if "organization_name" in data:
            user.organization_name = data["organization_name"]
        if "is_active" in data:
            user.is_active = data["is_active"]
        user.save()
        record_event(
            actor=access,
            action=Event.ACTION_UPDATE,
            metadata={"resource": "user", **_user_snapshot(user)},
            request=request,
        )
    return user


def delete_user(*, access: AccessContext, user_id: str, request=None) -> None:
    if not access.is_super_admin:
        raise AccessDenied("Only admin users can delete users")

    user = get_user(user_id=user_id)
    with transaction.atomic():
        user.delete()
        record_event(
            actor=access,
            action=Event.ACTION_DELETE,
            metadata={"resource": "user", "user_id": user_id},
            request=request,
        )
    logger.info("user deleted: id=%s by=%s", user_id, access.user_id)
