"""
Pagination used by list endpoints.

``page`` is 1-based; ``limit`` is clamped to 10..50 and defaults to 20.
"""
import math

from rest_framework.pagination import BasePagination
from rest_framework.response import Response


class StandardPagination(BasePagination):
    default_limit = 20
    min_limit = 10
    max_limit = 50

    def _read_int(self, request, name, default):
        try:
            return int(request.query_params.get(name, default))
        except (TypeError, ValueError):
            return default

    def paginate_queryset(self, queryset, request, view=None):
        self.page = max(1, self._read_int(request, 'page', 1))
        self.limit = min(self.max_limit, max(self.min_limit, self._read_int(request, 'limit', self.default_limit)))
        self.total = queryset.count()
        offset = (self.page - 1) * self.limit
        return list(queryset[offset:offset + self.limit])

    def get_paginated_response(self, data):
        pages = math.ceil(self.total / self.limit) if self.total else 0
        return Response({
            'success': True,
            'data': data,
            'pagination': {
                'page': self.page,
                'limit': self.limit,
                'total': self.total,
                'pages': pages,
            }
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                'success': {'type': 'boolean'},
                'data': schema,
                'pagination': {
                    'type': 'object',
                    'properties': {
                        'page': {'type': 'integer'},
                        'limit': {'type': 'integer'},
                        'total': {'type': 'integer'},
                        'pages': {'type': 'integer'},
                    },
                },
            },
        }
