"""
Exchange models module.

All models are exported from this module to maintain backward compatibility.
"""
from .exchange_order import ExchangeOrder

__all__ = [
    'ExchangeOrder',
]
