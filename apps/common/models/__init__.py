"""
Common models module.

All models are exported from this module to maintain backward compatibility.
"""
from .audit import AuditLog
from .notification import Message

__all__ = [
    'AuditLog',
    'Message',
]
