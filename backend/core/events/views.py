from rest_framework.views import APIView

from events.models import Event
from events.serializers import EventSerializer
from tenancy.pagination import paginated_response
from tenancy.permissions import IsRoleAllowed


class EventListAPIView(APIView):
    permission_classes = [IsRoleAllowed]
    role_resource_key = "events"

    def get(self, request):
        queryset = Event.objects.all().order_by("-timestamp")

        action = (request.query_params.get("action") or "").strip()
        if action:
            queryset = queryset.filter(action=action)

        user_id = (request.query_params.get("user_id") or "").strip()
        if user_id:
            queryset = queryset.filter(user_id=user_id)

        return paginated_response(request, queryset, EventSerializer, default_page_size=50)
