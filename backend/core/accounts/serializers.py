from rest_framework import serializers

from accounts.models import User
from tenancy.rbac import VALID_ROLES


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=255)
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class RegisterAdminSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    email = serializers.EmailField(max_length=255)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")


class RegisterSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=200)
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    organization_name = serializers.CharField(max_length=200)
    admin = RegisterAdminSerializer()


class UserInfoSerializer(serializers.ModelSerializer):
    """User block returned with a login response."""

    roles = serializers.ListField(source="role_list", child=serializers.CharField(), read_only=True)
    last_login_at = serializers.DateTimeField(source="last_login", read_only=True)

    class Meta:
        model = User
        fields = (
            "id",
            "name",
            "roles",
            "is_active",
            "last_login_at",
            "auth_provider",
            "organization_name",
        )


class UserSummarySerializer(serializers.ModelSerializer):
    roles = serializers.ListField(source="role_list", child=serializers.CharField(), read_only=True)

    class Meta:
        model = User
        fields = ("id", "name", "email", "roles", "is_active")


class UserProfileSerializer(serializers.ModelSerializer):
    roles = serializers.ListField(source="role_list", child=serializers.CharField(), read_only=True)
    organization = serializers.SerializerMethodField()
    last_login_at = serializers.DateTimeField(source="last_login", read_only=True)

    class Meta:
        model = User
        fields = (
            "id",
            "name",
            "email",
            "roles",
            "organization",
            "created_at",
            "is_active",
            "last_login_at",
            "auth_provider",
        )

    def get_organization(self, obj):
        return {
            "id": str(obj.carrier_id) if obj.carrier_id is not None else "",
            "name": obj.organization_name or "",
        }


class OrganizationPayloadSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True, default="")
    name = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")


class UserProfileCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    email = serializers.EmailField(max_length=255)
    roles = serializers.ListField(
        child=serializers.ChoiceField(choices=sorted(VALID_ROLES)),
        allow_empty=False,
    )
    organization = OrganizationPayloadSerializer(required=False)
    is_active = serializers.BooleanField(default=True)
    auth_provider = serializers.CharField(max_length=50, required=False, default="local")


class QuickCreateUserSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    email = serializers.EmailField(max_length=255)
    role = serializers.ChoiceField(choices=sorted(VALID_ROLES))
    carrier_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class UserUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)
    email = serializers.EmailField(max_length=255, required=False)
    role = serializers.ChoiceField(choices=sorted(VALID_ROLES), required=False)
    organization_name = serializers.CharField(
        max_length=200,
        required=False,
        allow_blank=True,
        allow_null=True,
    )
    is_active = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Send at least one field to update.")
        return attrs
