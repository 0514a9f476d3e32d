"""
Common utility functions for API responses
"""
from rest_framework.response import Response
from rest_framework import status


def error_response(message="Error", errors=None, status_code=status.HTTP_400_BAD_REQUEST, **extra):
    """
    Standard error response format
    """
    response_data = {
        "success": False,
        "error": message,
    }
    if errors:
        response_data["errors"] = errors
    response_data.update(extra)
    return Response(response_data, status=status_code)


def paginated_response(queryset, serializer_class, request, context=None):
    """
    Standard paginated response format
    """
    from .pagination import StandardPagination

    paginator = StandardPagination()
    page = paginator.paginate_queryset(queryset, request)
    serializer = serializer_class(page, many=True, context=context or {'request': request})
    return paginator.get_paginated_response(serializer.data)
