from django.test import TestCase, override_settings

from tenancy.middleware import DEFAULT_SECURITY_HEADERS


class CorrelationIdMiddlewareTests(TestCase):
    def test_echoes_incoming_correlation_id(self):
        response = self.client.get("/healthz/", HTTP_X_CORRELATION_ID="corr-test-001")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["X-Correlation-ID"], "corr-test-001")

    def test_generates_correlation_id_when_missing(self):
        response = self.client.get("/healthz/")
        self.assertTrue(response["X-Correlation-ID"])

    def test_correlation_id_lands_in_error_payload(self):
        response = self.client.get("/api/carriers/", HTTP_X_CORRELATION_ID="corr-test-002")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["correlation_id"], "corr-test-002")


class SecurityHeadersMiddlewareTests(TestCase):
    def test_sets_default_security_headers(self):
        response = self.client.get("/healthz/")
        for header, value in DEFAULT_SECURITY_HEADERS.items():
            self.assertEqual(response[header], value)

    def test_healthz_payload(self):
        response = self.client.get("/healthz/")
        self.assertEqual(response.json(), {"status": "ok"})

    @override_settings(SECURITY_RESPONSE_HEADERS={"Referrer-Policy": "no-referrer"})
    def test_settings_override_default_header(self):
        response = self.client.get("/healthz/")
        self.assertEqual(response["Referrer-Policy"], "no-referrer")
