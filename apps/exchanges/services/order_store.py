"""
Exchange order store for creating, reading and updating exchange orders.
"""
from typing import Dict, Optional

from django.core.exceptions import ValidationError

from ..models import ExchangeOrder


class ExchangeOrderStore:
    """Persistence operations on exchange orders; soft-deleted rows are never returned"""

    @staticmethod
    def base_queryset():
        return ExchangeOrder.objects.filter(deleted_at__isnull=True)

    @staticmethod
    def create(user, product, quantity: int, points_used: int,
               delivery_info: Optional[Dict] = None, idempotency_key: Optional[str] = None) -> ExchangeOrder:
        """
        Insert a pending order. ``product`` is the snapshot read under lock;
        its name and unit price are copied onto the order.
        """
        delivery_info = delivery_info or {}
        return ExchangeOrder.objects.create(
            user_id=user.pk,
            product_id=product.id,
            quantity=quantity,
            points_used=points_used,
            product_name=product.name,
            product_price=product.points_required,
            delivery_address=delivery_info.get('delivery_address'),
            contact_phone=delivery_info.get('contact_phone'),
            notes=delivery_info.get('notes'),
            status=ExchangeOrder.STATUS_PENDING,
            idempotency_key=idempotency_key or None,
        )

    @staticmethod
    def get(order_id, lock: bool = False) -> Optional[ExchangeOrder]:
        """Get an order by id, optionally locking its row"""
        queryset = ExchangeOrderStore.base_queryset()
        if lock:
            queryset = queryset.select_for_update()
        else:
            queryset = queryset.select_related('user', 'product')
        try:
            return queryset.filter(pk=order_id).first()
        except (ValidationError, ValueError):
            return None

    @staticmethod
    def get_for_user(user, order_id) -> Optional[ExchangeOrder]:
        """Get an order only if it belongs to the user"""
        try:
            return ExchangeOrderStore.base_queryset().filter(pk=order_id, user=user).first()
        except (ValidationError, ValueError):
            return None

    @staticmethod
    def list_for_user(user):
        return ExchangeOrderStore.base_queryset().filter(user=user).select_related(
            'product'
        ).order_by('-created_at')

    @staticmethod
    def list_all(status: Optional[str] = None, user_id: Optional[int] = None):
        queryset = ExchangeOrderStore.base_queryset().select_related('user', 'product')
        if status:
            queryset = queryset.filter(status=status)
        if user_id:
            queryset = queryset.filter(user_id=user_id)
        return queryset.order_by('-created_at')

    @staticmethod
    def find_by_idempotency_key(user, idempotency_key: str) -> Optional[ExchangeOrder]:
        if not idempotency_key:
            return None
        return ExchangeOrder.objects.filter(user=user, idempotency_key=idempotency_key).first()

    @staticmethod
    def update_status(order: ExchangeOrder, status: str, admin_notes: Optional[str] = None,
                      tracking_number: Optional[str] = None) -> ExchangeOrder:
        """
        Persist a status change. Quantities and points stay untouched;
        a missing tracking number keeps the one already stored.
        """
        order.status = status
        update_fields = ['status', 'updated_at']
        if admin_notes is not None:
            order.admin_notes = admin_notes
            update_fields.append('admin_notes')
        if tracking_number:
            order.tracking_number = tracking_number
            update_fields.append('tracking_number')
        order.save(update_fields=update_fields)
        return order
