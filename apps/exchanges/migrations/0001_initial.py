import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('products', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ExchangeOrder',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('quantity', models.PositiveIntegerField(default=1)),
                ('points_used', models.PositiveIntegerField()),
                ('product_name', models.CharField(max_length=200)),
                ('product_price', models.PositiveIntegerField(help_text='Points per unit at submission')),
                ('delivery_address', models.TextField(blank=True, null=True)),
                ('contact_phone', models.CharField(blank=True, max_length=50, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('processing', 'Processing'), ('shipped', 'Shipped'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='pending', max_length=20)),
                ('tracking_number', models.CharField(blank=True, max_length=100, null=True)),
                ('admin_notes', models.TextField(blank=True, null=True)),
                ('idempotency_key', models.CharField(blank=True, max_length=100, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='exchange_orders', to='products.product')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='exchange_orders', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Exchange Order',
                'verbose_name_plural': 'Exchange Orders',
                'db_table': 'point_exchanges',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'created_at'], name='point_exch_user_created_idx'),
                    models.Index(fields=['status', 'created_at'], name='point_exch_status_created_idx'),
                ],
                'constraints': [models.UniqueConstraint(fields=('user', 'idempotency_key'), name='point_exchanges_user_idempotency_key')],
            },
        ),
    ]
