"""
Custom authentication classes for handling edge cases
"""
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, AuthenticationFailed
from rest_framework_simplejwt.settings import api_settings
from django.contrib.auth import get_user_model
import logging

logger = logging.getLogger(__name__)


class SafeJWTAuthentication(JWTAuthentication):
    """
    JWT authentication that treats tokens of missing, deactivated or
    soft-deleted users as anonymous instead of raising.
    """

    def get_user(self, validated_token):
        """
        Attempts to find and return a user using the given validated token.
        Returns None if the user is gone instead of raising an exception.
        """
        User = get_user_model()
        user_id = None
        try:
            user_id = validated_token.get(api_settings.USER_ID_CLAIM)
            if user_id is None:
                return None

            user = User.objects.get(**{api_settings.USER_ID_FIELD: user_id})
        except User.DoesNotExist:
            logger.warning(f'JWT token contains invalid user_id: {user_id}')
            return None
        except (TypeError, ValueError, KeyError) as e:
            logger.error(f'Invalid token payload: {str(e)}')
            raise InvalidToken(f'Token contained invalid user identification: {str(e)}')

        if not user.is_active or getattr(user, 'deleted_at', None) is not None:
            logger.warning(f'JWT token used by inactive user_id: {user_id}')
            raise AuthenticationFailed('User is inactive', code='user_inactive')
        return user
