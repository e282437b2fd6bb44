from django.db import models
from django.db.models.functions import Lower
from django.core.validators import MinValueValidator
from decimal import Decimal

from apps.core.models import OwnedModel, TimestampedModel


class ProductCategory(OwnedModel):
    """Grouping of sellable products (Hot Drinks, Pastries...)."""

    name = models.CharField(max_length=100)
    description = models.CharField(max_length=500, blank=True)

    class Meta:
        db_table = 'product_categories'
        verbose_name_plural = 'product categories'
        constraints = [
            models.UniqueConstraint(Lower('name'), 'owner_id', name='uniq_product_category_name'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name


class Product(OwnedModel):
    """
    Sellable product.

    A product without variants carries its own SKU. A product with
    variants has no SKU of its own; every variant carries one.
    """

    name = models.CharField(max_length=200, db_index=True)
    description = models.CharField(max_length=1000, blank=True)
    category = models.ForeignKey(
        ProductCategory,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='products'
    )
    base_price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0.01'))])
    sku = models.CharField(max_length=100, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    has_variants = models.BooleanField(default=False)

    class Meta:
        db_table = 'products'
        constraints = [
            models.UniqueConstraint(
                fields=['owner_id', 'sku'],
                condition=models.Q(sku__isnull=False),
                name='uniq_product_sku',
            ),
        ]
        indexes = [
            models.Index(fields=['owner_id', 'is_active'], name='products_owner_active_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class VariantOption(TimestampedModel):
    """Axis of variation of a product (Size, Temperature)."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='variant_options')
    name = models.CharField(max_length=100)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'product_variant_options'
        constraints = [
            models.UniqueConstraint(Lower('name'), 'product', name='uniq_variant_option_name'),
        ]
        ordering = ['position', 'created_at']

    def __str__(self):
        return f"{self.product.name} - {self.name}"


class VariantOptionValue(TimestampedModel):
    """One value along an option axis (12oz, Iced)."""

    option = models.ForeignKey(VariantOption, on_delete=models.CASCADE, related_name='values')
    value = models.CharField(max_length=100)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'product_variant_option_values'
        constraints = [
            models.UniqueConstraint(Lower('value'), 'option', name='uniq_variant_option_value'),
        ]
        ordering = ['position', 'created_at']

    def __str__(self):
        return self.value


class Variant(OwnedModel):
    """Sellable configuration of a product, e.g. "12oz / Hot"."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='variants')
    title = models.CharField(max_length=255)
    sku = models.CharField(max_length=100)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0.01'))])
    is_default = models.BooleanField(default=False)
    is_available = models.BooleanField(default=True)
    position = models.PositiveIntegerField(default=0)
    option_values = models.ManyToManyField(
        VariantOptionValue,
        related_name='variants',
        blank=True
    )

    class Meta:
        db_table = 'product_variants'
        constraints = [
            models.UniqueConstraint(fields=['owner_id', 'sku'], name='uniq_variant_sku'),
        ]
        ordering = ['position', 'created_at']

    def __str__(self):
        return f"{self.product.name} - {self.title}"
