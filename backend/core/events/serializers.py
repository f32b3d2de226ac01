from rest_framework import serializers

from events.models import Event


class EventSerializer(serializers.ModelSerializer):
    class Meta:
        model = Event
        fields = (
            "event_id",
            "timestamp",
            "user_id",
            "action",
            "rule_id",
            "product_id",
            "metadata",
        )
