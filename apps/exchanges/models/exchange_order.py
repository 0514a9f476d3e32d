import uuid

from django.conf import settings
from django.db import models


class ExchangeOrder(models.Model):
    """A user's redemption of points for product units, snapshotted at submission"""
    STATUS_PENDING = 'pending'
    STATUS_PROCESSING = 'processing'
    STATUS_SHIPPED = 'shipped'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_PROCESSING, 'Processing'),
        (STATUS_SHIPPED, 'Shipped'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='exchange_orders')
    product = models.ForeignKey('products.Product', on_delete=models.PROTECT, related_name='exchange_orders')
    quantity = models.PositiveIntegerField(default=1)
    # Fixed at submission, never recomputed from later catalog changes
    points_used = models.PositiveIntegerField()
    product_name = models.CharField(max_length=200)
    product_price = models.PositiveIntegerField(help_text="Points per unit at submission")

    delivery_address = models.TextField(null=True, blank=True)
    contact_phone = models.CharField(max_length=50, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    tracking_number = models.CharField(max_length=100, null=True, blank=True)
    admin_notes = models.TextField(null=True, blank=True)
    idempotency_key = models.CharField(max_length=100, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'point_exchanges'
        ordering = ['-created_at']
        verbose_name = 'Exchange Order'
        verbose_name_plural = 'Exchange Orders'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='point_exch_user_created_idx'),
            models.Index(fields=['status', 'created_at'], name='point_exch_status_created_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'idempotency_key'],
                name='point_exchanges_user_idempotency_key',
            ),
        ]

    def __str__(self):
        return f"{self.id} - {self.product_name} x{self.quantity} ({self.status})"

    @property
    def is_deleted(self):
        return self.deleted_at is not None
