"""
Points services module.

All services are exported from this module to maintain backward compatibility.
"""
from .ledger import PointsLedger

__all__ = [
    'PointsLedger',
]
