"""
Points ledger service.

The ledger is append-only. It trusts its caller to pair every append with
the matching change of the cached ``User.points`` balance inside one atomic
block, and refuses to run outside of one.
"""
import logging

from django.db import DEFAULT_DB_ALIAS, connections
from django.db.transaction import TransactionManagementError
from django.db.models import Sum

from ..models import PointsLedgerEntry

logger = logging.getLogger(__name__)


class PointsLedger:
    """Service for appending to and reading the points ledger"""

    @staticmethod
    def append(user_id, delta, entry_type, description="", related_table=None,
               related_id=None, balance_after=None, using=DEFAULT_DB_ALIAS):
        """
        Append one signed entry and return its id.

        Must be called from inside ``transaction.atomic()`` so that the
        entry commits or rolls back together with the balance change.
        """
        if not connections[using].in_atomic_block:
            raise TransactionManagementError(
                "Points ledger appends must run inside an atomic block"
            )

        entry = PointsLedgerEntry.objects.using(using).create(
            user_id=user_id,
            points=delta,
            type=entry_type,
            description=description[:255],
            related_table=related_table,
            related_id=str(related_id) if related_id is not None else None,
            balance_after=balance_after,
        )
        logger.info(
            f"Ledger entry {entry.id}: user={user_id} delta={delta} type={entry_type} "
            f"related={related_table}:{related_id}"
        )
        return entry.id

    @staticmethod
    def balance_from_ledger(user_id):
        """Sum of every delta recorded for a user"""
        total = PointsLedgerEntry.objects.filter(user_id=user_id).aggregate(
            total=Sum('points')
        )['total']
        return total or 0

    @staticmethod
    def entries_for(user, entry_type=None):
        """A user's ledger history, newest first"""
        queryset = PointsLedgerEntry.objects.filter(user=user)
        if entry_type:
            queryset = queryset.filter(type=entry_type)
        return queryset.order_by('-created_at')

    @staticmethod
    def entries_related_to(related_table, related_id):
        """Entries pointing back at one related record, e.g. an exchange order"""
        return PointsLedgerEntry.objects.filter(
            related_table=related_table,
            related_id=str(related_id),
        )
