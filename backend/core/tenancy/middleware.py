import logging
import uuid

from django.conf import settings

from tenancy.context import reset_current_correlation_id, set_current_correlation_id

DEFAULT_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": (
        "default-src 'self'; script-src 'self'; style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data:; font-src 'self';"
    ),
}


class CorrelationIdMiddleware:
    """Resolve a correlation id per request and expose it to logs and responses."""

    header_name = "X-Correlation-ID"

    def __init__(self, get_response):
        self.get_response = get_response
        self.logger = logging.getLogger(__name__)

    def __call__(self, request):
        request.correlation_id = self._resolve_correlation_id(request)
        token = set_current_correlation_id(request.correlation_id)
        try:
            response = self.get_response(request)
            response[self.header_name] = request.correlation_id
            if response.status_code >= 500:
                self.logger.error(
                    "request failed",
                    extra={
                        "path": request.path,
                        "method": request.method,
                        "status_code": response.status_code,
                    },
                )
            return response
        finally:
            reset_current_correlation_id(token)

    def _resolve_correlation_id(self, request) -> str:
        header_value = (request.headers.get(self.header_name, "") or "").strip()
        return header_value[:64] or str(uuid.uuid4())


class SecurityHeadersMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response
        self.headers = {
            **DEFAULT_SECURITY_HEADERS,
            **getattr(settings, "SECURITY_RESPONSE_HEADERS", {}),
        }

    def __call__(self, request):
        response = self.get_response(request)
        for header, value in self.headers.items():
            response.setdefault(header, value)
        return response
