from decimal import Decimal

from rest_framework import serializers

from .models import InventoryCategory, InventoryItem, StockStatus


# =============================================================================
# Input Serializers
# =============================================================================

class InventoryItemFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for inventory filtering.

    Query Parameters:
        status (str): Stock status
        search (str): Part of the item name or SKU
        category (UUID): Inventory category id
    """

    status = serializers.ChoiceField(choices=StockStatus.choices, required=False)
    search = serializers.CharField(required=False, allow_blank=True)
    category = serializers.UUIDField(required=False)


class InventoryItemInputSerializer(serializers.Serializer):
    """Full state of an inventory item."""

    sku = serializers.CharField(max_length=100)
    name = serializers.CharField(max_length=200)
    category = serializers.UUIDField()
    description = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    order_unit = serializers.CharField(max_length=50)
    unit = serializers.CharField(max_length=50)
    quantity = serializers.IntegerField(min_value=0)
    reorder_level = serializers.IntegerField(min_value=0, required=False, allow_null=True, default=None)
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    amount_per_unit = serializers.DecimalField(max_digits=12, decimal_places=3, min_value=Decimal('0.001'))
    supplier = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')

    def to_service_kwargs(self):
        data = dict(self.validated_data)
        data['category_id'] = data.pop('category')
        return data


# =============================================================================
# Output Serializers
# =============================================================================

class InventoryCategorySerializer(serializers.ModelSerializer):
    """Serializer for inventory categories."""

    item_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = InventoryCategory
        fields = [
            'id',
            'name',
            'description',
            'item_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class InventoryItemSerializer(serializers.ModelSerializer):
    """Inventory item with its derived stock status."""

    category = serializers.PrimaryKeyRelatedField(read_only=True)
    category_name = serializers.CharField(source='category.name', read_only=True)

    class Meta:
        model = InventoryItem
        fields = [
            'id',
            'sku',
            'name',
            'category',
            'category_name',
            'description',
            'order_unit',
            'unit',
            'quantity',
            'reorder_level',
            'unit_price',
            'amount_per_unit',
            'supplier',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class InventoryStatsSerializer(serializers.Serializer):
    in_stock = serializers.IntegerField()
    low_in_stock = serializers.IntegerField()
    out_of_stock = serializers.IntegerField()
    total = serializers.IntegerField()
