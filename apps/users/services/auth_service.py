"""
Authentication helpers consumed by the exchange views.

Token issuance lives elsewhere; this service only answers who is calling
and whether they may act as an administrator.
"""
from django.db.models import Q

from ..models import User


class AuthService:
    """Service for resolving the caller of a request"""

    @staticmethod
    def get_current_user(request):
        """Return the authenticated, non-deleted user of a request or None"""
        user = getattr(request, 'user', None)
        if user is None or not user.is_authenticated:
            return None
        if getattr(user, 'deleted_at', None) is not None or not user.is_active:
            return None
        return user

    @staticmethod
    def is_admin_user(user):
        """Check whether a user may use the admin exchange endpoints"""
        if user is None or not user.is_authenticated:
            return False
        return bool(user.is_staff or user.is_superuser)

    @staticmethod
    def get_admin_users():
        """All active administrators, used as notification recipients"""
        return User.active_objects.filter(
            Q(is_staff=True) | Q(is_superuser=True),
            is_active=True,
        ).order_by('id')
