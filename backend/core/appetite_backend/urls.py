"""
URL configuration for appetite_backend project.

Every API route lives under /api/; /healthz/ is the unauthenticated liveness check.
"""
from django.http import JsonResponse
from django.urls import include, path

from accounts.urls import auth_urlpatterns, user_urlpatterns


def healthz(_request):
    return JsonResponse({"status": "ok"})


urlpatterns = [
    path("healthz/", healthz, name="healthz"),
    path("api/auth/", include(auth_urlpatterns)),
    path("api/users/", include(user_urlpatterns)),
    path("api/events/", include("events.urls")),
    path("api/", include("carriers.urls")),
    path("api/", include("catalog.api.urls")),
    path("api/", include("analytics.urls")),
]
