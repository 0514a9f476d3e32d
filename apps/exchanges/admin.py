from django.contrib import admin
from .models import ExchangeOrder


@admin.register(ExchangeOrder)
class ExchangeOrderAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'product_name', 'quantity', 'points_used', 'status', 'tracking_number', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['id', 'user__username', 'product_name', 'tracking_number']
    # Orders are created by the exchange coordinator; status goes through the API workflow
    readonly_fields = [
        'id', 'user', 'product', 'quantity', 'points_used', 'product_name', 'product_price',
        'delivery_address', 'contact_phone', 'notes', 'status', 'idempotency_key',
        'created_at', 'updated_at'
    ]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
