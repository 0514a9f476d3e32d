"""
Exchange order serializers for user and admin views.
"""
from rest_framework import serializers
from ..models import ExchangeOrder


class ExchangeOrderSerializer(serializers.ModelSerializer):
    """
    Serializer for a user's own exchange orders.
    Used for: GET /api/exchange/transactions/
    """
    product_id = serializers.IntegerField(read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = ExchangeOrder
        fields = [
            'id', 'product_id', 'product_name', 'product_price', 'quantity',
            'points_used', 'delivery_address', 'contact_phone', 'notes',
            'status', 'status_display', 'tracking_number', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class AdminExchangeOrderSerializer(ExchangeOrderSerializer):
    """
    Serializer for the admin exchange views, with the owner's identity.
    Used for: GET /api/admin/exchanges/
    """
    user_id = serializers.IntegerField(read_only=True)
    user_username = serializers.CharField(source='user.username', read_only=True)
    user_email = serializers.CharField(source='user.email', read_only=True)

    class Meta(ExchangeOrderSerializer.Meta):
        fields = ExchangeOrderSerializer.Meta.fields + [
            'user_id', 'user_username', 'user_email', 'admin_notes'
        ]
        read_only_fields = fields
