from __future__ import annotations

import logging
import re
from typing import Any

from tenancy.context import get_current_correlation_id


_BEARER_RE = re.compile(r"(?i)bearer\s+[A-Za-z0-9\-_=]+\.[A-Za-z0-9\-_=]+\.?[A-Za-z0-9\-_.+/=]*")
_JWT_RE = re.compile(r"(?<![A-Za-z0-9_-])eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+")
_EMAIL_RE = re.compile(r"(?<![\w.+-])([\w.+-])[\w.+-]*@([\w-]+(?:\.[\w-]+)+)")


def mask_sensitive(text: str) -> str:
    """Mask bearer tokens, raw JWTs and e-mail local parts in a string.

    E-mails keep their first character and domain so log lines stay useful for
    support without exposing the full address.
    """

    if not text:
        return text

    text = _BEARER_RE.sub("Bearer ***TOKEN***", text)
    text = _JWT_RE.sub("***TOKEN***", text)
    text = _EMAIL_RE.sub(r"\1***@\2", text)
    return text


class MaskSensitiveDataFilter(logging.Filter):
    """Logging filter to mask credentials and e-mails in log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except Exception:  # pragma: no cover
            message = str(getattr(record, "msg", ""))

        masked = mask_sensitive(str(message))

        # Replace the formatted message and clear args to avoid double formatting.
        record.msg = masked
        record.args = ()

        for key in ("email", "username", "authorization"):
            if hasattr(record, key):
                value: Any = getattr(record, key)
                if isinstance(value, str):
                    setattr(record, key, mask_sensitive(value))

        return True


class CorrelationIdFilter(logging.Filter):
    """Stamp every record with the correlation id of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = get_current_correlation_id() or "-"
        return True
