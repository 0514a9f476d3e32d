"""
Product catalog accessor for the exchange coordinator.

The coordinator only needs a narrow read contract: a snapshot of a product
taken under an exclusive row lock, plus a locked read of the purchasing
user's balance. Whether the lock is real depends on the database engine,
so the choice is made once here instead of branching on driver names
inside the transaction path.
"""
import logging
from dataclasses import dataclass

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DEFAULT_DB_ALIAS, connections

from ..models import Product

logger = logging.getLogger(__name__)

LOCKING_AUTO = 'auto'
LOCKING_ON = 'on'
LOCKING_OFF = 'off'


@dataclass(frozen=True)
class ProductSnapshot:
    """Immutable view of a product row as read inside the exchange transaction"""
    id: int
    name: str
    points_required: int
    stock: int
    status: str

    @classmethod
    def from_product(cls, product):
        return cls(
            id=product.id,
            name=product.name,
            points_required=product.points_required,
            stock=product.stock,
            status=product.status,
        )

    @property
    def is_active(self):
        return self.status == Product.STATUS_ACTIVE

    @property
    def has_unlimited_stock(self):
        return self.stock == Product.UNLIMITED_STOCK

    def has_stock_for(self, quantity):
        return self.has_unlimited_stock or self.stock >= quantity


class ProductCatalog:
    """Read contract the exchange coordinator depends on"""

    locks_rows = False

    def fetch_lockable_product(self, product_id):
        """Return a ProductSnapshot, or None if missing or soft-deleted"""
        raise NotImplementedError

    def lock_user(self, user_id):
        """Return the current row of a user, or None if missing"""
        raise NotImplementedError


class LockingProductCatalog(ProductCatalog):
    """Takes SELECT ... FOR UPDATE row locks held until the transaction ends"""

    locks_rows = True

    def fetch_lockable_product(self, product_id):
        product = (
            Product.objects.select_for_update()
            .filter(pk=product_id, deleted_at__isnull=True)
            .first()
        )
        return ProductSnapshot.from_product(product) if product else None

    def lock_user(self, user_id):
        User = get_user_model()
        return User.objects.select_for_update().filter(pk=user_id).first()


class UnlockedProductCatalog(ProductCatalog):
    """
    Degraded mode for engines without row-level locking (e.g. SQLite).

    Only safe for single-writer deployments. Two concurrent exchanges may
    both read the same stock; the coordinator's conditional updates still
    refuse to drive stock or points below zero.
    """

    def fetch_lockable_product(self, product_id):
        product = Product.objects.filter(pk=product_id, deleted_at__isnull=True).first()
        return ProductSnapshot.from_product(product) if product else None

    def lock_user(self, user_id):
        User = get_user_model()
        return User.objects.filter(pk=user_id).first()


def get_product_catalog(using=DEFAULT_DB_ALIAS):
    """
    Pick the catalog adapter for a database alias.

    ``EXCHANGE_ROW_LOCKING`` may force the choice ('on' / 'off'); with
    'auto' the database's select_for_update capability decides.
    """
    mode = str(getattr(settings, 'EXCHANGE_ROW_LOCKING', LOCKING_AUTO)).lower()

    if mode == LOCKING_ON:
        return LockingProductCatalog()
    if mode == LOCKING_OFF:
        return UnlockedProductCatalog()

    if connections[using].features.has_select_for_update:
        return LockingProductCatalog()

    logger.debug(
        f"Database '{connections[using].vendor}' has no row-level locking, "
        f"exchanges run in single-writer mode"
    )
    return UnlockedProductCatalog()
