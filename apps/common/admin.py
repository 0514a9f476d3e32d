from django.contrib import admin
from .models import AuditLog, Message


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ['user', 'action', 'entity_type', 'entity_id', 'ip_address', 'created_at']
    list_filter = ['action', 'entity_type', 'created_at']
    search_fields = ['user__username', 'action', 'entity_id']
    readonly_fields = ['user', 'action', 'entity_type', 'entity_id', 'metadata', 'ip_address', 'created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ['receiver', 'message_type', 'title', 'priority', 'is_read', 'created_at']
    list_filter = ['message_type', 'priority', 'is_read', 'created_at']
    search_fields = ['receiver__username', 'title', 'content']
