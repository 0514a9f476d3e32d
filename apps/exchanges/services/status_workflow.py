"""
Admin-driven status changes on exchange orders.
"""
import logging
from typing import Optional

from django.conf import settings
from django.db import transaction

from apps.common.models import Message
from apps.common.services import AuditRecorder, NotificationDispatcher
from ..exceptions import ExchangeNotFound, ExchangeValidationError, InvalidStatusTransition
from ..models import ExchangeOrder
from .order_store import ExchangeOrderStore

logger = logging.getLogger(__name__)


class ExchangeStatusWorkflow:
    """
    Moves orders through pending -> processing -> shipped -> completed,
    with cancellation possible from any non-final state.

    By default any settable status is accepted from any current status;
    with ``EXCHANGE_ENFORCE_STATUS_TRANSITIONS`` the table below is binding.
    """

    SETTABLE_STATUSES = (
        ExchangeOrder.STATUS_PROCESSING,
        ExchangeOrder.STATUS_SHIPPED,
        ExchangeOrder.STATUS_COMPLETED,
        ExchangeOrder.STATUS_CANCELLED,
    )

    TRANSITIONS = {
        ExchangeOrder.STATUS_PENDING: {ExchangeOrder.STATUS_PROCESSING, ExchangeOrder.STATUS_CANCELLED},
        ExchangeOrder.STATUS_PROCESSING: {ExchangeOrder.STATUS_SHIPPED, ExchangeOrder.STATUS_CANCELLED},
        ExchangeOrder.STATUS_SHIPPED: {ExchangeOrder.STATUS_COMPLETED, ExchangeOrder.STATUS_CANCELLED},
        ExchangeOrder.STATUS_COMPLETED: set(),
        ExchangeOrder.STATUS_CANCELLED: set(),
    }

    STATUS_TITLES = {
        ExchangeOrder.STATUS_PROCESSING: 'Your exchange order is being processed',
        ExchangeOrder.STATUS_SHIPPED: 'Your exchange item has shipped',
        ExchangeOrder.STATUS_COMPLETED: 'Your exchange order is complete',
        ExchangeOrder.STATUS_CANCELLED: 'Your exchange order was cancelled',
    }

    def __init__(self, enforce_transitions=None, store=ExchangeOrderStore,
                 notifier=NotificationDispatcher, auditor=AuditRecorder):
        if enforce_transitions is None:
            enforce_transitions = getattr(settings, 'EXCHANGE_ENFORCE_STATUS_TRANSITIONS', False)
        self.enforce_transitions = enforce_transitions
        self.store = store
        self.notifier = notifier
        self.auditor = auditor

    @classmethod
    def can_transition(cls, current_status, new_status):
        return new_status in cls.TRANSITIONS.get(current_status, set())

    def update_status(self, admin, order_id, new_status, notes: Optional[str] = None,
                      tracking_number: Optional[str] = None) -> ExchangeOrder:
        """Change an order's status; stock and points are never re-validated"""
        if new_status not in self.SETTABLE_STATUSES:
            raise ExchangeValidationError('Invalid status')

        with transaction.atomic():
            order = self.store.get(order_id, lock=True)
            if order is None:
                raise ExchangeNotFound('Exchange not found')

            previous_status = order.status
            if not self.can_transition(previous_status, new_status):
                if self.enforce_transitions:
                    raise InvalidStatusTransition(
                        f"Cannot change status from {previous_status} to {new_status}"
                    )
                logger.warning(
                    f"Exchange {order.id} moved outside the transition table: "
                    f"{previous_status} -> {new_status}"
                )

            self.store.update_status(order, new_status, notes, tracking_number)

        logger.info(f"Exchange {order.id} status {previous_status} -> {new_status} by admin {admin.pk}")

        # Each side effect gets its own savepoint; failures never undo the update
        try:
            with transaction.atomic():
                self._notify_owner(order, new_status, notes, tracking_number)
        except Exception:
            logger.exception(f"Failed to notify owner of exchange {order.id}")

        try:
            with transaction.atomic():
                self._audit_change(admin, order, previous_status, new_status, notes, tracking_number)
        except Exception:
            logger.exception(f"Failed to audit status change of exchange {order.id}")

        return order

    def _audit_change(self, admin, order, previous_status, new_status, notes, tracking_number):
        self.auditor.log(
            admin.pk,
            'exchange_status_updated',
            ExchangeOrder._meta.db_table,
            order.id,
            {
                'previous_status': previous_status,
                'status': new_status,
                'notes': notes,
                'tracking_number': tracking_number,
            },
        )

    def _notify_owner(self, order, new_status, notes, tracking_number):
        title = self.STATUS_TITLES.get(new_status, 'Exchange status updated')
        body = f"Your exchange order ({order.product_name} x{order.quantity}) status is now: {title}"
        if tracking_number:
            body += f"\nTracking number: {tracking_number}"
        if notes:
            body += f"\nNotes: {notes}"

        self.notifier.send_message(
            order.user_id,
            'exchange_status_updated',
            title,
            body,
            Message.PRIORITY_NORMAL,
        )
