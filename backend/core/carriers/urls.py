from django.urls import include, path
from rest_framework.routers import SimpleRouter

from carriers.views import CarrierViewSet

router = SimpleRouter()
router.register(r"carriers", CarrierViewSet, basename="carrier")

urlpatterns = [
    path("", include(router.urls)),
]
