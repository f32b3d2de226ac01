from __future__ import annotations

import uuid

from django.core.exceptions import ValidationError
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models
from django.utils import timezone


def _new_event_id() -> str:
    return str(uuid.uuid4())


class Event(models.Model):
    """Append-only activity event written by the services.

    Rows are never updated or deleted through the ORM; corrections are new events.
    """

    ACTION_CREATE = "create"
    ACTION_UPDATE = "update"
    ACTION_DELETE = "delete"
    ACTION_LOGIN = "login"
    ACTION_UPLOAD = "upload"

    event_id = models.CharField(max_length=36, primary_key=True, default=_new_event_id, editable=False)
    timestamp = models.DateTimeField(default=timezone.now)
    user_id = models.CharField(max_length=100, blank=True, null=True)
    action = models.CharField(max_length=100)
    rule_id = models.CharField(max_length=100, blank=True, null=True)
    product_id = models.CharField(max_length=100, blank=True, null=True)
    metadata = models.JSONField(default=dict, blank=True, encoder=DjangoJSONEncoder)

    class Meta:
        ordering = ("-timestamp",)
        indexes = [
            models.Index(fields=("timestamp",), name="idx_events_timestamp"),
            models.Index(fields=("user_id",), name="idx_events_user"),
        ]

    def __str__(self) -> str:  # pragma: no cover - admin/debug helper
        return f"{self.timestamp:%Y-%m-%d %H:%M:%S} {self.action} by {self.user_id or '-'}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Events are immutable; updates are not allowed.")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Events are immutable; deletes are not allowed.")
