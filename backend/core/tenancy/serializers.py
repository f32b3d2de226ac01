from rest_framework import serializers

from tenancy.text import split_csv


class CommaListField(serializers.Field):
    """Comma-separated text column exposed as a JSON list of strings."""

    def to_representation(self, value):
        return split_csv(value)

    def to_internal_value(self, data):
        if data is None:
            return []
        if isinstance(data, str):
            return split_csv(data)
        if not isinstance(data, (list, tuple)):
            raise serializers.ValidationError("Expected a list of strings.")
        return split_csv(data)
