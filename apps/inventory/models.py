from django.db import models
from django.db.models.functions import Lower
from django.core.validators import MinValueValidator
from decimal import Decimal

from apps.core.models import OwnedModel


class StockStatus(models.TextChoices):
    IN_STOCK = 'IN_STOCK', 'In stock'
    LOW_IN_STOCK = 'LOW_IN_STOCK', 'Low in stock'
    OUT_OF_STOCK = 'OUT_OF_STOCK', 'Out of stock'


class InventoryCategory(OwnedModel):
    """Grouping of stock items (Coffee Beans, Milk & Cream...)."""

    name = models.CharField(max_length=100)
    description = models.CharField(max_length=500, blank=True)

    class Meta:
        db_table = 'inventory_categories'
        verbose_name_plural = 'inventory categories'
        constraints = [
            models.UniqueConstraint(Lower('name'), 'owner_id', name='uniq_inventory_category_name'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name


class InventoryItem(OwnedModel):
    """
    Stocked ingredient or supply.

    Bought in ``order_unit`` (a sack, a carton) that holds
    ``amount_per_unit`` of ``unit`` (grams, millilitres). ``unit_price`` is
    the price of one order unit, ``quantity`` the number of order units in
    stock. ``status`` is derived from quantity and reorder level on save.
    """

    sku = models.CharField(max_length=100)
    name = models.CharField(max_length=200, db_index=True)
    category = models.ForeignKey(
        InventoryCategory,
        on_delete=models.PROTECT,
        related_name='items'
    )
    description = models.CharField(max_length=200, blank=True)
    order_unit = models.CharField(max_length=50)
    unit = models.CharField(max_length=50)
    quantity = models.PositiveIntegerField(default=0)
    reorder_level = models.PositiveIntegerField(null=True, blank=True)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0.01'))])
    amount_per_unit = models.DecimalField(max_digits=12, decimal_places=3, validators=[MinValueValidator(Decimal('0.001'))])
    supplier = models.CharField(max_length=100, blank=True)
    status = models.CharField(
        max_length=20,
        choices=StockStatus.choices,
        default=StockStatus.OUT_OF_STOCK,
        editable=False
    )

    class Meta:
        db_table = 'inventory_items'
        constraints = [
            models.UniqueConstraint(fields=['owner_id', 'sku'], name='uniq_inventory_item_sku'),
            models.CheckConstraint(condition=models.Q(amount_per_unit__gt=0), name='inventory_amount_per_unit_positive'),
        ]
        indexes = [
            models.Index(fields=['owner_id', 'status'], name='inventory_owner_status_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.sku})"

    def save(self, *args, **kwargs):
        from .services.stock_status import derive_stock_status
        self.status = derive_stock_status(self.quantity, self.reorder_level)
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'status' not in update_fields:
            kwargs['update_fields'] = [*update_fields, 'status']
        super().save(*args, **kwargs)
