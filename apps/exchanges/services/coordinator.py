"""
Exchange transaction coordinator.

Runs one points-for-product exchange as a single atomic unit: lock the
product row, validate it, debit the user's cached balance, decrement stock,
create the order and append the matching ledger entry. Notifications and
the audit entry are sent only after the unit commits, and their failures
never undo it.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, OperationalError, transaction
from django.db.models import F
from django.utils import timezone

from apps.common.models import Message
from apps.common.services import AuditRecorder, NotificationDispatcher
from apps.points.models import PointsLedgerEntry
from apps.points.services import PointsLedger
from apps.products.models import Product
from apps.products.services import get_product_catalog
from apps.users.services import AuthService
from ..exceptions import (
    ExchangeInternalError,
    ExchangeNotFound,
    ExchangeValidationError,
    InsufficientPoints,
    InsufficientStock,
    ProductUnavailable,
)
from ..models import ExchangeOrder
from .order_store import ExchangeOrderStore

logger = logging.getLogger(__name__)


@dataclass
class ExchangeResult:
    order: ExchangeOrder
    points_used: int
    remaining_points: int
    replayed: bool = False


class ExchangeTransactionCoordinator:
    """The only write path for exchanges and the balance debits they cause"""

    # Largest value the quantity and points_used columns hold on every backend
    MAX_QUANTITY = 2147483647

    def __init__(self, catalog=None, store=ExchangeOrderStore, ledger=PointsLedger,
                 notifier=NotificationDispatcher, auditor=AuditRecorder):
        self.catalog = catalog or get_product_catalog()
        self.store = store
        self.ledger = ledger
        self.notifier = notifier
        self.auditor = auditor

    @staticmethod
    def normalize_quantity(quantity) -> int:
        """Coerce a requested quantity to an integer of at least 1"""
        try:
            quantity = int(quantity)
        except (TypeError, ValueError, OverflowError):
            return 1
        return max(1, quantity)

    def submit_exchange(self, user, product_id, quantity=1, delivery_info: Optional[Dict] = None,
                        idempotency_key: Optional[str] = None) -> ExchangeResult:
        """
        Exchange points for ``quantity`` units of a product.

        Raises an ExchangeError subclass on any domain failure, in which case
        nothing was written. With an ``idempotency_key`` a repeated call
        returns the order created by the first one instead of debiting again.
        """
        if product_id is None or product_id == '':
            raise ExchangeValidationError('Product ID is required')
        quantity = self.normalize_quantity(quantity)
        if quantity > self.MAX_QUANTITY:
            raise ExchangeValidationError('Quantity is too large')

        if idempotency_key:
            existing = self.store.find_by_idempotency_key(user, idempotency_key)
            if existing is not None:
                return self._replay(user, existing)

        try:
            result = self._run_exchange(user, product_id, quantity, delivery_info or {}, idempotency_key)
        except IntegrityError:
            # A concurrent request with the same key committed first
            existing = self.store.find_by_idempotency_key(user, idempotency_key) if idempotency_key else None
            if existing is None:
                raise
            return self._replay(user, existing)
        except OperationalError as exc:
            # Lock wait timeouts, deadlocks and lost connections
            logger.error(f"Exchange aborted by database error for user {user.pk}: {exc}")
            raise ExchangeInternalError() from exc

        user.points = result.remaining_points
        logger.info(
            f"Exchange {result.order.id}: user={user.pk} product={product_id} "
            f"quantity={quantity} points_used={result.points_used}"
        )

        self._after_commit(user, result.order)
        return result

    def _run_exchange(self, user, product_id, quantity, delivery_info, idempotency_key):
        with transaction.atomic():
            product = self.catalog.fetch_lockable_product(product_id)
            if product is None:
                raise ExchangeNotFound('Product not found')
            if not product.is_active:
                raise ProductUnavailable('Product is not available')
            if not product.has_stock_for(quantity):
                raise InsufficientStock('Insufficient stock')

            total_points = product.points_required * quantity

            account = self.catalog.lock_user(user.pk)
            if account is None:
                raise ExchangeNotFound('User not found')
            if account.points < total_points:
                raise InsufficientPoints('Insufficient points')

            self._debit_points(user.pk, total_points)
            if not product.has_unlimited_stock:
                self._decrement_stock(product.id, quantity)

            order = self.store.create(
                user=user,
                product=product,
                quantity=quantity,
                points_used=total_points,
                delivery_info=delivery_info,
                idempotency_key=idempotency_key,
            )
            remaining_points = account.points - total_points
            self.ledger.append(
                user.pk,
                -total_points,
                PointsLedgerEntry.TYPE_PRODUCT_EXCHANGE,
                f"Exchanged {product.name} x{quantity}",
                related_table=ExchangeOrder._meta.db_table,
                related_id=order.id,
                balance_after=remaining_points,
            )

        return ExchangeResult(order=order, points_used=total_points, remaining_points=remaining_points)

    @staticmethod
    def _debit_points(user_id, total_points):
        # Conditional so the balance cannot go negative even without a row lock
        User = get_user_model()
        updated = User.objects.filter(pk=user_id, points__gte=total_points).update(
            points=F('points') - total_points,
            updated_at=timezone.now(),
        )
        if updated != 1:
            raise InsufficientPoints('Insufficient points')

    @staticmethod
    def _decrement_stock(product_id, quantity):
        updated = Product.objects.filter(
            pk=product_id,
            deleted_at__isnull=True,
            stock__gte=quantity,
        ).update(
            stock=F('stock') - quantity,
            updated_at=timezone.now(),
        )
        if updated != 1:
            raise InsufficientStock('Insufficient stock')

    def _replay(self, user, order):
        logger.info(f"Replaying exchange {order.id} for user {user.pk} (idempotency key {order.idempotency_key})")
        User = get_user_model()
        remaining = User.objects.filter(pk=user.pk).values_list('points', flat=True).first()
        return ExchangeResult(
            order=order,
            points_used=order.points_used,
            remaining_points=remaining if remaining is not None else 0,
            replayed=True,
        )

    def _after_commit(self, user, order):
        self._best_effort(
            'purchaser notification',
            self.notifier.send_message,
            user.pk,
            'product_exchanged',
            'Exchange successful',
            f"You exchanged {order.product_name} x{order.quantity} for {order.points_used} points. "
            f"We will arrange delivery as soon as possible.",
            Message.PRIORITY_NORMAL,
        )

        admin_ids = self._best_effort(
            'admin lookup',
            lambda: list(AuthService.get_admin_users().values_list('id', flat=True)),
        ) or []
        for admin_id in admin_ids:
            self._best_effort(
                f'admin notification to {admin_id}',
                self.notifier.send_message,
                admin_id,
                'new_exchange_pending',
                'New exchange order',
                f"User {user.username} exchanged {order.product_name} x{order.quantity}, please process it.",
                Message.PRIORITY_HIGH,
            )

        self._best_effort(
            'audit entry',
            self.auditor.log,
            user.pk,
            'product_exchanged',
            ExchangeOrder._meta.db_table,
            order.id,
            {
                'product_id': order.product_id,
                'quantity': order.quantity,
                'points_used': order.points_used,
            },
        )

    @staticmethod
    def _best_effort(description, func, *args):
        # Own savepoint so a failed write cannot poison a caller's outer transaction
        try:
            with transaction.atomic():
                return func(*args)
        except Exception:
            logger.exception(f"Post-exchange {description} failed")
            return None
