"""
Exchange views module.

All views are exported from this module to maintain backward compatibility.
"""
from .exchange_views import ExchangeProductView, UserExchangeListView, UserExchangeDetailView
from .admin_exchange_views import AdminExchangeListView, AdminExchangeDetailView, AdminExchangeStatusView

__all__ = [
    'ExchangeProductView',
    'UserExchangeListView',
    'UserExchangeDetailView',
    'AdminExchangeListView',
    'AdminExchangeDetailView',
    'AdminExchangeStatusView',
]
