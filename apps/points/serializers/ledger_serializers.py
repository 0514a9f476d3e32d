"""
Points ledger serializers for balance and history responses.
"""
from rest_framework import serializers
from ..models import PointsLedgerEntry


class PointsLedgerEntrySerializer(serializers.ModelSerializer):
    """
    Serializer for ledger history rows.
    Used for: GET /api/points/transactions/
    """
    type_display = serializers.CharField(source='get_type_display', read_only=True)

    class Meta:
        model = PointsLedgerEntry
        fields = [
            'id', 'points', 'type', 'type_display', 'description',
            'related_table', 'related_id', 'balance_after', 'created_at'
        ]
        read_only_fields = fields


class PointsBalanceSerializer(serializers.Serializer):
    """Serializer for the balance response"""
    points = serializers.IntegerField()
    lifetime_earned = serializers.IntegerField()
    lifetime_redeemed = serializers.IntegerField()
