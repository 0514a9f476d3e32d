from django.db import models


class Product(models.Model):
    """Catalog product redeemable for points"""
    STATUS_ACTIVE = 'active'
    STATUS_INACTIVE = 'inactive'
    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_INACTIVE, 'Inactive'),
    ]

    # Stock value meaning "not tracked"; never decremented
    UNLIMITED_STOCK = -1

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    category = models.CharField(max_length=100, blank=True, default='')
    points_required = models.PositiveIntegerField(default=0)
    stock = models.IntegerField(default=0, help_text="Units in stock, -1 = unlimited")
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
    sort_order = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'products'
        ordering = ['sort_order', 'id']
        indexes = [
            models.Index(fields=['status'], name='products_status_idx'),
            models.Index(fields=['deleted_at'], name='products_deleted_at_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock__gte=-1),
                name='products_stock_valid',
            ),
        ]

    def __str__(self):
        return f"{self.name} (id: {self.id})"

    @property
    def is_active(self):
        return self.status == self.STATUS_ACTIVE

    @property
    def has_unlimited_stock(self):
        return self.stock == self.UNLIMITED_STOCK

    @property
    def is_deleted(self):
        return self.deleted_at is not None
