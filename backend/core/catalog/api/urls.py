from django.urls import include, path
from rest_framework.routers import SimpleRouter

from catalog.api.views import ProductTypeListAPIView, ProductViewSet, RuleUploadAPIView, RuleViewSet

router = SimpleRouter()
router.register(r"products", ProductViewSet, basename="product")
router.register(r"rules", RuleViewSet, basename="rule")

urlpatterns = [
    path("product-types/", ProductTypeListAPIView.as_view(), name="product-type-list"),
    path("rules/upload/", RuleUploadAPIView.as_view(), name="rule-upload"),
    path("", include(router.urls)),
]
