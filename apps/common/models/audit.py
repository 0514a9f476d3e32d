from django.db import models
from django.conf import settings


class AuditLog(models.Model):
    """Audit trail of business actions (exchanges, status changes, errors)"""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs'
    )
    action = models.CharField(max_length=100)
    entity_type = models.CharField(max_length=100, null=True, blank=True)
    entity_id = models.CharField(max_length=100, null=True, blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'audit_logs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'created_at'], name='audit_logs_user_created_idx'),
            models.Index(fields=['action', 'created_at'], name='audit_logs_action_created_idx'),
            models.Index(fields=['entity_type', 'entity_id'], name='audit_logs_entity_idx'),
        ]

    def __str__(self):
        actor = self.user_id if self.user_id else 'system'
        return f"{actor} - {self.action} - {self.created_at}"
