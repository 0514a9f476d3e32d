from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, default='')),
                ('category', models.CharField(blank=True, default='', max_length=100)),
                ('points_required', models.PositiveIntegerField(default=0)),
                ('stock', models.IntegerField(default=0, help_text='Units in stock, -1 = unlimited')),
                ('status', models.CharField(choices=[('active', 'Active'), ('inactive', 'Inactive')], default='active', max_length=10)),
                ('sort_order', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
            ],
            options={
                'db_table': 'products',
                'ordering': ['sort_order', 'id'],
                'indexes': [
                    models.Index(fields=['status'], name='products_status_idx'),
                    models.Index(fields=['deleted_at'], name='products_deleted_at_idx'),
                ],
                'constraints': [models.CheckConstraint(condition=models.Q(('stock__gte', -1)), name='products_stock_valid')],
            },
        ),
    ]
