"""
Common services module.

All services are exported from this module to maintain backward compatibility.
"""
from .audit_recorder import AuditRecorder
from .notification_dispatcher import NotificationDispatcher

__all__ = [
    'AuditRecorder',
    'NotificationDispatcher',
]
