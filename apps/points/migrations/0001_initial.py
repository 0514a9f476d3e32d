import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='PointsLedgerEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('points', models.IntegerField()),
                ('type', models.CharField(choices=[('activity_reward', 'Activity Reward'), ('product_exchange', 'Product Exchange'), ('admin_adjustment', 'Admin Adjustment')], max_length=30)),
                ('description', models.CharField(blank=True, default='', max_length=255)),
                ('related_table', models.CharField(blank=True, max_length=50, null=True)),
                ('related_id', models.CharField(blank=True, max_length=64, null=True)),
                ('balance_after', models.IntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='points_entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Points Ledger Entry',
                'verbose_name_plural': 'Points Ledger Entries',
                'db_table': 'points_transactions',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'created_at'], name='points_tx_user_created_idx'),
                    models.Index(fields=['related_table', 'related_id'], name='points_tx_related_idx'),
                ],
            },
        ),
    ]
