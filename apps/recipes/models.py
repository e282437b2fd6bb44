from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal

from apps.core.models import OwnedModel, TimestampedModel


class Recipe(OwnedModel):
    """
    How a product (or one variant of it) is made from inventory items.

    ``total_cost`` is the summed cost of the ingredients, kept in step
    with ingredient quantities and inventory prices by the services.
    """

    name = models.CharField(max_length=100, db_index=True)
    description = models.CharField(max_length=500, blank=True)
    instructions = models.TextField(max_length=1000, blank=True)
    prep_time_minutes = models.PositiveIntegerField(null=True, blank=True)
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='recipes'
    )
    product_variant = models.ForeignKey(
        'catalog.Variant',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recipes'
    )
    is_active = models.BooleanField(default=True)
    total_cost = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    class Meta:
        db_table = 'recipes'
        indexes = [
            models.Index(fields=['owner_id', 'is_active'], name='recipes_owner_active_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class RecipeIngredient(TimestampedModel):
    """Quantity of one inventory item used by a recipe, in the item's unit."""

    recipe = models.ForeignKey(Recipe, on_delete=models.CASCADE, related_name='ingredients')
    inventory_item = models.ForeignKey(
        'inventory.InventoryItem',
        on_delete=models.PROTECT,
        related_name='recipe_ingredients'
    )
    quantity = models.DecimalField(max_digits=10, decimal_places=3, validators=[MinValueValidator(Decimal('0.001'))])
    unit = models.CharField(max_length=50, blank=True)
    notes = models.CharField(max_length=200, blank=True)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'recipe_ingredients'
        constraints = [
            models.UniqueConstraint(fields=['recipe', 'inventory_item'], name='uniq_recipe_ingredient'),
        ]
        ordering = ['position', 'created_at']

    def __str__(self):
        return f"{self.quantity} {self.unit} {self.inventory_item.name}"
