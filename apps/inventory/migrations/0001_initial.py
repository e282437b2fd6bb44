# Generated manually for the inventory app

import uuid
from decimal import Decimal
import django.core.validators
import django.db.models.deletion
import django.db.models.functions.text
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='InventoryCategory',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner_id', models.CharField(db_index=True, editable=False, max_length=255)),
                ('name', models.CharField(max_length=100)),
                ('description', models.CharField(blank=True, max_length=500)),
            ],
            options={
                'db_table': 'inventory_categories',
                'verbose_name_plural': 'inventory categories',
                'ordering': ['name'],
                'constraints': [
                    models.UniqueConstraint(django.db.models.functions.text.Lower('name'), models.F('owner_id'), name='uniq_inventory_category_name'),
                ],
            },
        ),
        migrations.CreateModel(
            name='InventoryItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner_id', models.CharField(db_index=True, editable=False, max_length=255)),
                ('sku', models.CharField(max_length=100)),
                ('name', models.CharField(db_index=True, max_length=200)),
                ('description', models.CharField(blank=True, max_length=200)),
                ('order_unit', models.CharField(max_length=50)),
                ('unit', models.CharField(max_length=50)),
                ('quantity', models.PositiveIntegerField(default=0)),
                ('reorder_level', models.PositiveIntegerField(blank=True, null=True)),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('amount_per_unit', models.DecimalField(decimal_places=3, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.001'))])),
                ('supplier', models.CharField(blank=True, max_length=100)),
                ('status', models.CharField(choices=[('IN_STOCK', 'In stock'), ('LOW_IN_STOCK', 'Low in stock'), ('OUT_OF_STOCK', 'Out of stock')], default='OUT_OF_STOCK', editable=False, max_length=20)),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='items', to='inventory.inventorycategory')),
            ],
            options={
                'db_table': 'inventory_items',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['owner_id', 'status'], name='inventory_owner_status_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('owner_id', 'sku'), name='uniq_inventory_item_sku'),
                    models.CheckConstraint(condition=models.Q(('amount_per_unit__gt', 0)), name='inventory_amount_per_unit_positive'),
                ],
            },
        ),
    ]
