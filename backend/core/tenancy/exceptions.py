"""Domain exceptions and the global DRF exception handler.

Services raise the exceptions below; views let them propagate and
`appetite_exception_handler` maps them to HTTP status codes.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from tenancy.context import get_current_correlation_id

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request."
GENERIC_ERROR_DETAILS = "Please contact support if the problem persists."


class AppetiteError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidCredentials(AppetiteError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid credentials"


class AccessDenied(AppetiteError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Access denied."


class ResourceNotFound(AppetiteError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found."


class InvalidOperation(AppetiteError):
    status_code = status.HTTP_400_BAD_REQUEST


def _validation_detail(exc: DjangoValidationError):
    try:
        return exc.message_dict
    except (AttributeError, TypeError):
        return exc.messages


def _with_correlation(payload: dict) -> dict:
    correlation_id = get_current_correlation_id()
    if correlation_id:
        payload["correlation_id"] = correlation_id
    return payload


def appetite_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is not None:
        if isinstance(response.data, dict):
            _with_correlation(response.data)
        return response

    if isinstance(exc, AppetiteError):
        return Response(_with_correlation({"detail": exc.detail}), status=exc.status_code)

    if isinstance(exc, (ObjectDoesNotExist, Http404)):
        return Response(
            _with_correlation({"detail": str(exc) or ResourceNotFound.default_detail}),
            status=status.HTTP_404_NOT_FOUND,
        )

    if isinstance(exc, DjangoValidationError):
        return Response(
            _with_correlation({"detail": _validation_detail(exc)}),
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, ValueError):
        return Response(_with_correlation({"detail": str(exc)}), status=status.HTTP_400_BAD_REQUEST)

    view = context.get("view")
    logger.exception(
        "unhandled exception in %s",
        view.__class__.__name__ if view is not None else "view",
    )
    details = str(exc) if settings.DEBUG else GENERIC_ERROR_DETAILS
    return Response(
        _with_correlation({"message": GENERIC_ERROR_MESSAGE, "details": details}),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
