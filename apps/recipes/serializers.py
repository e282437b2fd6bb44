from decimal import Decimal

from django.conf import settings
from rest_framework import serializers

from .models import Recipe, RecipeIngredient
from .services.costing import derive_ingredient_cost, ingredient_cost_terms, round_cost


# =============================================================================
# Input Serializers
# =============================================================================

class RecipeFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for recipe filtering.

    Query Parameters:
        search (str): Part of the recipe name
        product (UUID): Product id
        product_variant (UUID): Product variant id
        is_active (bool): Active flag
    """

    search = serializers.CharField(required=False, allow_blank=True)
    product = serializers.UUIDField(required=False)
    product_variant = serializers.UUIDField(required=False)
    is_active = serializers.BooleanField(required=False, allow_null=True, default=None)


class RecipeIngredientInputSerializer(serializers.Serializer):
    """One ingredient; ``id`` is present when editing a stored ingredient."""

    id = serializers.UUIDField(required=False, allow_null=True)
    inventory_item = serializers.UUIDField()
    quantity = serializers.DecimalField(max_digits=10, decimal_places=3, min_value=Decimal('0.001'))
    unit = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    notes = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')


class RecipeInputSerializer(serializers.Serializer):
    """Full state of a recipe, used for both create and replace."""

    name = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    instructions = serializers.CharField(max_length=1000, required=False, allow_blank=True, default='')
    prep_time_minutes = serializers.IntegerField(min_value=0, required=False, allow_null=True, default=None)
    product = serializers.UUIDField()
    product_variant = serializers.UUIDField(required=False, allow_null=True, default=None)
    is_active = serializers.BooleanField(default=True)
    ingredients = RecipeIngredientInputSerializer(many=True)

    def validate_ingredients(self, ingredients):
        minimum = getattr(settings, 'RECIPES_MIN_INGREDIENTS', 1)
        if len(ingredients) < minimum:
            raise serializers.ValidationError(
                f'At least {minimum} ingredient(s) are required'
            )
        return ingredients

    def to_service_kwargs(self):
        data = dict(self.validated_data)
        data['product_id'] = data.pop('product')
        data['product_variant_id'] = data.pop('product_variant')
        return data


# =============================================================================
# Output Serializers
# =============================================================================

class RecipeIngredientSerializer(serializers.ModelSerializer):
    """Ingredient with the inventory item it draws from and its cost."""

    inventory_item_name = serializers.CharField(source='inventory_item.name', read_only=True)
    inventory_item_unit = serializers.CharField(source='inventory_item.unit', read_only=True)
    cost = serializers.SerializerMethodField()

    class Meta:
        model = RecipeIngredient
        fields = [
            'id',
            'inventory_item',
            'inventory_item_name',
            'inventory_item_unit',
            'quantity',
            'unit',
            'notes',
            'position',
            'cost',
        ]
        read_only_fields = fields

    def get_cost(self, obj) -> str:
        return str(round_cost(derive_ingredient_cost(*ingredient_cost_terms(obj))))


class RecipeSerializer(serializers.ModelSerializer):
    """Recipe with its ingredients."""

    product_name = serializers.CharField(source='product.name', read_only=True)
    product_variant_title = serializers.CharField(source='product_variant.title', read_only=True, default=None)
    ingredients = RecipeIngredientSerializer(many=True, read_only=True)

    class Meta:
        model = Recipe
        fields = [
            'id',
            'name',
            'description',
            'instructions',
            'prep_time_minutes',
            'product',
            'product_name',
            'product_variant',
            'product_variant_title',
            'is_active',
            'total_cost',
            'ingredients',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class RecipeListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    product_name = serializers.CharField(source='product.name', read_only=True)
    product_variant_title = serializers.CharField(source='product_variant.title', read_only=True, default=None)
    ingredient_count = serializers.SerializerMethodField()

    class Meta:
        model = Recipe
        fields = [
            'id',
            'name',
            'product',
            'product_name',
            'product_variant',
            'product_variant_title',
            'is_active',
            'total_cost',
            'ingredient_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_ingredient_count(self, obj) -> int:
        return len(obj.ingredients.all())
