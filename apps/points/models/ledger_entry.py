import uuid

from django.conf import settings
from django.db import models


class LedgerEntryImmutableError(Exception):
    """Raised on any attempt to rewrite or remove a ledger entry"""


class PointsLedgerEntryQuerySet(models.QuerySet):
    def update(self, **kwargs):
        raise LedgerEntryImmutableError("Points ledger entries cannot be updated")

    def delete(self):
        raise LedgerEntryImmutableError("Points ledger entries cannot be deleted")


class PointsLedgerEntry(models.Model):
    """Append-only record of a signed points change"""
    TYPE_ACTIVITY_REWARD = 'activity_reward'
    TYPE_PRODUCT_EXCHANGE = 'product_exchange'
    TYPE_ADMIN_ADJUSTMENT = 'admin_adjustment'
    ENTRY_TYPES = [
        (TYPE_ACTIVITY_REWARD, 'Activity Reward'),
        (TYPE_PRODUCT_EXCHANGE, 'Product Exchange'),
        (TYPE_ADMIN_ADJUSTMENT, 'Admin Adjustment'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='points_entries')
    points = models.IntegerField()  # Positive for earning, negative for spending
    type = models.CharField(max_length=30, choices=ENTRY_TYPES)
    description = models.CharField(max_length=255, blank=True, default='')
    related_table = models.CharField(max_length=50, null=True, blank=True)
    related_id = models.CharField(max_length=64, null=True, blank=True)
    balance_after = models.IntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = PointsLedgerEntryQuerySet.as_manager()

    class Meta:
        db_table = 'points_transactions'
        ordering = ['-created_at']
        verbose_name = 'Points Ledger Entry'
        verbose_name_plural = 'Points Ledger Entries'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='points_tx_user_created_idx'),
            models.Index(fields=['related_table', 'related_id'], name='points_tx_related_idx'),
        ]

    def __str__(self):
        return f"{self.user_id} {self.points:+d} ({self.get_type_display()})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise LedgerEntryImmutableError("Points ledger entries cannot be updated")
        kwargs['force_insert'] = True
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise LedgerEntryImmutableError("Points ledger entries cannot be deleted")

    @property
    def is_earning(self):
        return self.points > 0

    @property
    def is_spending(self):
        return self.points < 0
