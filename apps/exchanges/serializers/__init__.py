"""
Exchange serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .request_serializers import (
    FIELD_ALIASES,
    normalize_field_aliases,
    ExchangeRequestSerializer,
    ExchangeStatusUpdateSerializer,
)
from .order_serializers import ExchangeOrderSerializer, AdminExchangeOrderSerializer

__all__ = [
    'FIELD_ALIASES',
    'normalize_field_aliases',
    'ExchangeRequestSerializer',
    'ExchangeStatusUpdateSerializer',
    'ExchangeOrderSerializer',
    'AdminExchangeOrderSerializer',
]
