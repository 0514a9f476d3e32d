"""
User services module.
"""
from .auth_service import AuthService

__all__ = [
    'AuthService',
]
