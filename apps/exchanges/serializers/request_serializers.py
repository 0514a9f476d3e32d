"""
Request serializers for exchange submission and admin status updates.

Clients send delivery details under several historical key names. They are
collapsed onto one canonical field here, before validation, so nothing past
the API boundary ever sees an alias.
"""
from rest_framework import serializers

from ..services.coordinator import ExchangeTransactionCoordinator
from ..services.status_workflow import ExchangeStatusWorkflow

# Ordered canonical name -> aliases; the canonical key wins, then the first
# non-empty alias in list order.
FIELD_ALIASES = (
    ('delivery_address', ('shipping_address', 'address', 'ship_address')),
    ('contact_phone', ('phone', 'mobile', 'tel', 'contact')),
    ('notes', ('remark', 'remarks', 'comment', 'comments', 'note')),
)


def _is_blank(value):
    return value is None or value == ''


def normalize_field_aliases(data, aliases=FIELD_ALIASES):
    """Return a plain dict with alias keys resolved onto their canonical names"""
    if hasattr(data, 'dict'):
        normalized = data.dict()  # QueryDict from form posts
    else:
        normalized = dict(data or {})

    for canonical, alternates in aliases:
        if not _is_blank(normalized.get(canonical)):
            continue
        for alternate in alternates:
            if not _is_blank(normalized.get(alternate)):
                normalized[canonical] = normalized[alternate]
                break
    return normalized


class QuantityField(serializers.Field):
    """Lenient quantity: anything unusable becomes 1"""

    def to_internal_value(self, data):
        return ExchangeTransactionCoordinator.normalize_quantity(data)

    def to_representation(self, value):
        return value


class ExchangeRequestSerializer(serializers.Serializer):
    """
    Serializer for exchange submissions.
    Used for: POST /api/products/{id}/exchange/ and POST /api/exchange/
    """
    product_id = serializers.IntegerField(required=False, min_value=1, max_value=9223372036854775807)
    quantity = QuantityField(required=False, default=1, allow_null=True)
    delivery_address = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=500)
    contact_phone = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=50)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)

    def to_internal_value(self, data):
        return super().to_internal_value(normalize_field_aliases(data))

    def delivery_info(self):
        return {
            key: self.validated_data.get(key) or None
            for key, _ in FIELD_ALIASES
        }


class ExchangeStatusUpdateSerializer(serializers.Serializer):
    """
    Serializer for admin status updates.
    Used for: PATCH /api/admin/exchanges/{id}/status/
    """
    status = serializers.ChoiceField(choices=ExchangeStatusWorkflow.SETTABLE_STATUSES)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)
    tracking_number = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
