"""
Audit recorder for business actions and unexpected errors.
"""
import logging
import traceback

from ..models import AuditLog

audit_logger = logging.getLogger('audit')


class AuditRecorder:
    """Persist audit entries and mirror them to the audit log file"""

    @staticmethod
    def log(user_id, action, entity_type=None, entity_id=None, metadata=None, ip_address=None):
        """Record one audited action and return the stored entry"""
        entry = AuditLog.objects.create(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
            metadata=metadata or {},
            ip_address=ip_address,
        )
        audit_logger.info(
            f"{action} user={user_id} entity={entity_type}:{entity_id} metadata={metadata or {}}"
        )
        return entry

    @staticmethod
    def log_exception(exc, request=None):
        """Record an unexpected error; detail stays server-side"""
        user = getattr(request, 'user', None) if request is not None else None
        user_id = user.id if user is not None and user.is_authenticated else None
        metadata = {
            'exception': exc.__class__.__name__,
            'message': str(exc),
            'traceback': ''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))[-4000:],
        }
        if request is not None:
            metadata['method'] = request.method
            metadata['path'] = request.path
        return AuditRecorder.log(
            user_id,
            'unexpected_error',
            entity_type='request',
            metadata=metadata,
            ip_address=get_client_ip(request) if request is not None else None,
        )


def get_client_ip(request):
    """Get client IP address from request"""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')
