from django.contrib import admin
from .models import PointsLedgerEntry


@admin.register(PointsLedgerEntry)
class PointsLedgerEntryAdmin(admin.ModelAdmin):
    list_display = ['user', 'type', 'points', 'balance_after', 'description', 'created_at']
    list_filter = ['type', 'created_at']
    search_fields = ['user__username', 'description', 'related_id']

    def has_add_permission(self, request):
        return False  # Entries are created programmatically

    def has_change_permission(self, request, obj=None):
        return False  # Entries should not be modified

    def has_delete_permission(self, request, obj=None):
        return False
