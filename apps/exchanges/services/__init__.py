"""
Exchange services module.

All services are exported from this module to maintain backward compatibility.
"""
from .order_store import ExchangeOrderStore
from .coordinator import ExchangeTransactionCoordinator, ExchangeResult
from .status_workflow import ExchangeStatusWorkflow

__all__ = [
    'ExchangeOrderStore',
    'ExchangeTransactionCoordinator',
    'ExchangeResult',
    'ExchangeStatusWorkflow',
]
