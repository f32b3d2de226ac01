from rest_framework.permissions import BasePermission

from tenancy.access import access_context_for_user
from tenancy.exceptions import InvalidCredentials
from tenancy.rbac import DEFAULT_ROLE_MATRIX, get_role_matrix_for_resource, roles_can


def _resolve_access(request):
    access = getattr(request, "access", None)
    if access is None:
        access = access_context_for_user(request.user)
        request.access = access
    return access


class IsRoleAllowed(BasePermission):
    """Allow the request when one of the caller's roles may use this HTTP method.

    Views declare `role_resource_key` (looked up in the role matrices) or an
    explicit `role_matrix`.
    """

    message = "User role is not allowed for this action."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        try:
            access = _resolve_access(request)
        except InvalidCredentials:
            return False

        role_matrix = getattr(view, "role_matrix", None)
        if role_matrix is None:
            resource_key = getattr(view, "role_resource_key", None)
            if resource_key:
                role_matrix = get_role_matrix_for_resource(resource_key)
            else:
                role_matrix = DEFAULT_ROLE_MATRIX

        return roles_can(role_matrix, access.roles, request.method)


class IsSuperAdmin(BasePermission):
    message = "Only admin users can perform this action."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        try:
            access = _resolve_access(request)
        except InvalidCredentials:
            return False
        return access.is_super_admin
