from __future__ import annotations

import uuid

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models
from django.utils import timezone

from tenancy.rbac import parse_roles


def new_user_id() -> str:
    return f"usr-{uuid.uuid4().hex[:12]}"


class Role(models.Model):
    role_id = models.AutoField(primary_key=True)
    role_name = models.CharField(max_length=100, unique=True)
    description = models.CharField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        ordering = ("role_id",)

    def __str__(self) -> str:  # pragma: no cover
        return self.role_name


class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("email is required.")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user


class User(AbstractBaseUser):
    """Back-office account.

    `roles` keeps the comma-separated role names that drive authorization;
    `role` points at the matching row of the roles table for reporting.
    Super admins have no carrier.
    """

    id = models.CharField(max_length=50, primary_key=True, default=new_user_id, editable=False)
    name = models.CharField(max_length=200)
    email = models.CharField(max_length=255, unique=True)
    roles = models.CharField(max_length=200, blank=True, null=True)
    role = models.ForeignKey(
        Role,
        on_delete=models.SET_NULL,
        related_name="users",
        null=True,
        blank=True,
    )
    carrier = models.ForeignKey(
        "carriers.Carrier",
        on_delete=models.SET_NULL,
        related_name="users",
        null=True,
        blank=True,
    )
    organization_name = models.CharField(max_length=200, blank=True, null=True)
    created_at = models.DateTimeField(default=timezone.now)
    is_active = models.BooleanField(default=True)
    auth_provider = models.CharField(max_length=50, default="local")

    password_reset_token = models.CharField(max_length=255, blank=True, null=True, db_index=True)
    password_reset_expiry = models.DateTimeField(blank=True, null=True)
    failed_login_attempts = models.IntegerField(default=0)
    lockout_end = models.DateTimeField(blank=True, null=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    class Meta:
        ordering = ("created_at", "id")
        indexes = [
            models.Index(fields=("carrier",), name="idx_users_carrier"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.name} <{self.email}>"

    @property
    def role_list(self) -> list[str]:
        return parse_roles(self.roles)

    def is_locked_out(self, now=None) -> bool:
        now = now or timezone.now()
        return self.lockout_end is not None and self.lockout_end > now
