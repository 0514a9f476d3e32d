"""
Points serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .ledger_serializers import PointsLedgerEntrySerializer, PointsBalanceSerializer

__all__ = [
    'PointsLedgerEntrySerializer',
    'PointsBalanceSerializer',
]
