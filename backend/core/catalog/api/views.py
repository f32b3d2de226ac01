from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from catalog.api.serializers import (
    ProductSerializer,
    ProductSummarySerializer,
    ProductTypeSerializer,
    RuleSerializer,
    RuleSummarySerializer,
    RuleUploadSerializer,
)
from catalog.selectors.product_selector import get_product, list_product_types, list_products
from catalog.selectors.rule_selector import get_rule, list_rules
from catalog.services.product_service import create_product, delete_product, update_product
from catalog.services.rule_service import create_rule, delete_rule, update_rule
from catalog.services.rule_upload_service import upload_rules
from tenancy.pagination import paginated_response
from tenancy.permissions import IsRoleAllowed


class ProductViewSet(viewsets.ModelViewSet):
    serializer_class = ProductSerializer
    permission_classes = [IsRoleAllowed]
    role_resource_key = "products"
    lookup_value_regex = r"[^/]+"

    def get_queryset(self):
        return list_products(
            access=self.request.access,
            carrier=self.request.query_params.get("carrier"),
        )

    def get_object(self):
        return get_product(access=self.request.access, product_id=self.kwargs["pk"])

    def list(self, request, *args, **kwargs):
        return paginated_response(
            request,
            self.get_queryset(),
            ProductSummarySerializer,
            default_page_size=20,
        )

    def perform_create(self, serializer):
        serializer.instance = create_product(
            access=self.request.access,
            data=serializer.validated_data,
            request=self.request,
        )

    def perform_update(self, serializer):
        serializer.instance = update_product(
            access=self.request.access,
            instance=serializer.instance,
            data=serializer.validated_data,
            request=self.request,
        )

    def destroy(self, request, *args, **kwargs):
        delete_product(access=request.access, instance=self.get_object(), request=request)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProductTypeListAPIView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response(ProductTypeSerializer(list_product_types(), many=True).data)


class RuleViewSet(viewsets.ModelViewSet):
    serializer_class = RuleSerializer
    permission_classes = [IsRoleAllowed]
    role_resource_key = "rules"
    lookup_value_regex = r"[^/]+"

    def get_queryset(self):
        return list_rules(
            access=self.request.access,
            sort_by=self.request.query_params.get("sort_by"),
        )

    def get_object(self):
        return get_rule(access=self.request.access, rule_id=self.kwargs["pk"])

    def list(self, request, *args, **kwargs):
        return paginated_response(request, self.get_queryset(), RuleSummarySerializer)

    def perform_create(self, serializer):
        serializer.instance = create_rule(
            access=self.request.access,
            data=serializer.validated_data,
            request=self.request,
        )

    def perform_update(self, serializer):
        serializer.instance = update_rule(
            access=self.request.access,
            instance=serializer.instance,
            data=serializer.validated_data,
            request=self.request,
        )

    def destroy(self, request, *args, **kwargs):
        delete_rule(access=request.access, instance=self.get_object(), request=request)
        return Response(status=status.HTTP_204_NO_CONTENT)


def _query_flag(request, name: str) -> bool:
    return (request.query_params.get(name) or "").strip().lower() in {"1", "true", "yes", "on"}


class RuleUploadAPIView(APIView):
    permission_classes = [IsRoleAllowed]
    role_resource_key = "rule_uploads"
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        serializer = RuleUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        report = upload_rules(
            access=request.access,
            uploaded_file=serializer.validated_data["file"],
            overwrite=serializer.validated_data["overwrite"] or _query_flag(request, "overwrite"),
            request=request,
        )
        return Response(report)
