"""
Points models module.

All models are exported from this module to maintain backward compatibility.
"""
from .ledger_entry import PointsLedgerEntry, LedgerEntryImmutableError

__all__ = [
    'PointsLedgerEntry',
    'LedgerEntryImmutableError',
]
