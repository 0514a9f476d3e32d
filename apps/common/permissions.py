"""
Permission classes shared across apps.
"""
from rest_framework.permissions import BasePermission

from apps.users.services import AuthService


class IsAdminMember(BasePermission):
    """Allow access to platform administrators only"""
    message = 'Admin access required'

    def has_permission(self, request, view):
        user = AuthService.get_current_user(request)
        return AuthService.is_admin_user(user)
