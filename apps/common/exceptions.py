"""
Custom exception handler for consistent API responses
"""
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
import logging

from .services import AuditRecorder

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns consistent error responses
    """
    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)
    request = context.get('request')

    if response is None:
        # Unhandled error: record it, answer without leaking detail
        logger.error(f"Unhandled API exception: {exc}", exc_info=True)
        try:
            AuditRecorder.log_exception(exc, request)
        except Exception:
            logger.exception("Failed to record unhandled exception")
        return Response(
            {'success': False, 'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    logger.warning(f"API exception: {exc}")

    custom_response_data = {
        'success': False,
        'error': 'An error occurred',
        'errors': response.data
    }

    # Handle specific error types
    if response.status_code == status.HTTP_400_BAD_REQUEST:
        custom_response_data['error'] = 'Validation error'
    elif response.status_code == status.HTTP_401_UNAUTHORIZED:
        custom_response_data['error'] = 'Unauthorized'
    elif response.status_code == status.HTTP_403_FORBIDDEN:
        custom_response_data['error'] = 'Permission denied'
    elif response.status_code == status.HTTP_404_NOT_FOUND:
        custom_response_data['error'] = 'Resource not found'
    elif response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        custom_response_data['error'] = 'Method not allowed'
    elif response.status_code >= 500:
        custom_response_data['error'] = 'Internal server error'
        custom_response_data['errors'] = {'detail': 'Internal server error'}

    response.data = custom_response_data

    return response
