from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.response import Response

from carriers.selectors import get_carrier, list_carriers
from carriers.serializers import CarrierSerializer, CarrierSummarySerializer
from carriers.services import create_carrier, delete_carrier, update_carrier
from tenancy.pagination import paginated_response
from tenancy.permissions import IsRoleAllowed


class CarrierViewSet(viewsets.ModelViewSet):
    serializer_class = CarrierSerializer
    permission_classes = [IsRoleAllowed]
    role_resource_key = "carriers"
    lookup_field = "carrier_id"
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        return list_carriers(
            access=self.request.access,
            search=self.request.query_params.get("q"),
        )

    def get_object(self):
        return get_carrier(access=self.request.access, carrier_id=int(self.kwargs["carrier_id"]))

    def list(self, request, *args, **kwargs):
        return paginated_response(request, self.get_queryset(), CarrierSummarySerializer)

    def perform_create(self, serializer):
        serializer.instance = create_carrier(
            access=self.request.access,
            data=serializer.validated_data,
            request=self.request,
        )

    def perform_update(self, serializer):
        serializer.instance = update_carrier(
            access=self.request.access,
            instance=serializer.instance,
            data=serializer.validated_data,
            request=self.request,
        )

    def destroy(self, request, *args, **kwargs):
        delete_carrier(access=request.access, instance=self.get_object(), request=request)
        return Response(status=status.HTTP_204_NO_CONTENT)
