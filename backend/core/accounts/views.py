from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts import services
from accounts.serializers import (
    LoginSerializer,
    QuickCreateUserSerializer,
    RegisterSerializer,
    UserInfoSerializer,
    UserProfileCreateSerializer,
    UserProfileSerializer,
    UserSummarySerializer,
    UserUpdateSerializer,
)
from accounts.tokens import token_lifetime_seconds
from tenancy.access import access_context_for_user
from tenancy.pagination import paginated_response
from tenancy.permissions import IsRoleAllowed
from tenancy.rbac import get_resource_role_matrices, resource_capabilities_for_roles


class LoginAPIView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, access_token = services.login(
            username=serializer.validated_data["username"],
            password=serializer.validated_data["password"],
            request=request,
        )
        return Response(
            {
                "access_token": access_token,
                "token_type": "Bearer",
                "expires_in": token_lifetime_seconds(),
                "user": UserInfoSerializer(user).data,
            }
        )


class RegisterAPIView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        admin = serializer.validated_data["admin"]

        user = services.register(
            username=serializer.validated_data["username"],
            password=serializer.validated_data["password"],
            organization_name=serializer.validated_data["organization_name"],
            admin_name=admin.get("name", ""),
            admin_email=admin["email"],
            admin_phone=admin.get("phone", ""),
            request=request,
        )
        return Response(
            {
                "user_id": user.pk,
                "status": "active",
                "message": (
                    f"Registration successful as {user.roles}. "
                    "You can now login with your credentials."
                ),
            }
        )


class AuthenticatedUserAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        access = access_context_for_user(request.user)
        user = services.get_user(user_id=access.user_id)
        matrices = get_resource_role_matrices()
        payload = UserProfileSerializer(user).data
        payload["capabilities"] = {
            resource: resource_capabilities_for_roles(matrix, access.roles)
            for resource, matrix in matrices.items()
        }
        return Response(payload)


class UserListCreateAPIView(APIView):
    permission_classes = [IsRoleAllowed]
    role_resource_key = "users"

    def get(self, request):
        queryset = services.list_users(
            access=request.access,
            role=request.query_params.get("role"),
        )
        return paginated_response(request, queryset, UserSummarySerializer)

    def post(self, request):
        serializer = UserProfileCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        organization = serializer.validated_data.get("organization") or {}

        user, temporary_password = services.create_user_profile(
            access=request.access,
            name=serializer.validated_data["name"],
            email=serializer.validated_data["email"],
            roles=serializer.validated_data["roles"],
            organization_id=organization.get("id", ""),
            organization_name=organization.get("name", ""),
            is_active=serializer.validated_data["is_active"],
            auth_provider=serializer.validated_data["auth_provider"],
            request=request,
        )
        payload = UserProfileSerializer(user).data
        payload["temporary_password"] = temporary_password
        return Response(payload, status=status.HTTP_201_CREATED)


class UserQuickCreateAPIView(APIView):
    permission_classes = [IsRoleAllowed]
    role_resource_key = "users"

    def post(self, request):
        serializer = QuickCreateUserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, temporary_password = services.quick_create_user(
            access=request.access,
            name=serializer.validated_data["name"],
            email=serializer.validated_data["email"],
            role=serializer.validated_data["role"],
            carrier_id=serializer.validated_data.get("carrier_id"),
            request=request,
        )
        return Response(
            {
                "user_id": user.pk,
                "email": user.email,
                "temporary_password": temporary_password,
                "message": "User created successfully. Please share the temporary password securely.",
            },
            status=status.HTTP_201_CREATED,
        )


class UserDetailAPIView(APIView):
    permission_classes = [IsRoleAllowed]
    role_resource_key = "user_profiles"

    def get(self, request, user_id):
        user = services.get_user_profile(access=request.access, user_id=user_id)
        return Response(UserProfileSerializer(user).data)

    def put(self, request, user_id):
        return self._update(request, user_id, partial=False)

    def patch(self, request, user_id):
        return self._update(request, user_id, partial=True)

    def _update(self, request, user_id, *, partial):
        serializer = UserUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        user = services.update_user(
            access=request.access,
            user_id=user_id,
            data=serializer.validated_data,
            request=request,
        )
        return Response(UserProfileSerializer(user).data)

    def delete(self, request, user_id):
        services.delete_user(access=request.access, user_id=user_id, request=request)
        return Response(status=status.HTTP_204_NO_CONTENT)
