from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db.models import Sum

from apps.points.models import PointsLedgerEntry


class Command(BaseCommand):
    help = 'Compare cached user points balances with the sum of their ledger entries'

    def add_arguments(self, parser):
        parser.add_argument(
            '--user-id',
            type=int,
            help='Check a specific user ID only',
        )

    def handle(self, *args, **options):
        User = get_user_model()
        users = User.objects.all().order_by('id')
        if options.get('user_id'):
            users = users.filter(id=options['user_id'])
            if not users.exists():
                self.stdout.write(self.style.ERROR(f"User with ID {options['user_id']} not found"))
                return

        totals = dict(
            PointsLedgerEntry.objects.filter(user__in=users)
            .values('user_id')
            .annotate(total=Sum('points'))
            .values_list('user_id', 'total')
        )

        mismatches = 0
        for user_id, username, cached in users.values_list('id', 'username', 'points'):
            ledger_total = totals.get(user_id) or 0
            if ledger_total != cached:
                mismatches += 1
                self.stdout.write(
                    self.style.WARNING(
                        f'{username} (id {user_id}): cached={cached} ledger={ledger_total} '
                        f'diff={cached - ledger_total}'
                    )
                )

        if mismatches:
            self.stdout.write(self.style.ERROR(f'{mismatches} balance mismatch(es) found'))
        else:
            self.stdout.write(self.style.SUCCESS('All cached balances match the ledger'))
