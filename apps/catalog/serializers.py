from decimal import Decimal

from django.conf import settings
from rest_framework import serializers

from .models import Product, ProductCategory, Variant, VariantOption, VariantOptionValue


def _min_option_values():
    return getattr(settings, 'CATALOG_MIN_OPTION_VALUES', 1)


# =============================================================================
# Input Serializers
# =============================================================================

class ProductFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for product filtering.

    Query Parameters:
        search (str): Part of the product name
        category (UUID): Product category id
        is_active (bool): Active flag
    """

    search = serializers.CharField(required=False, allow_blank=True)
    category = serializers.UUIDField(required=False)
    is_active = serializers.BooleanField(required=False, allow_null=True, default=None)


class VariantOptionValueInputSerializer(serializers.Serializer):
    """One value of an option; ``id`` is present when editing a stored value."""

    id = serializers.UUIDField(required=False, allow_null=True)
    value = serializers.CharField(max_length=100)
    position = serializers.IntegerField(min_value=0, required=False)


class VariantOptionInputSerializer(serializers.Serializer):
    """Option with its full list of values."""

    id = serializers.UUIDField(required=False, allow_null=True)
    name = serializers.CharField(max_length=100)
    position = serializers.IntegerField(min_value=0, required=False)
    values = VariantOptionValueInputSerializer(many=True)

    def validate_values(self, values):
        minimum = _min_option_values()
        if len(values) < minimum:
            raise serializers.ValidationError(
                f'At least {minimum} option value(s) are required'
            )
        return values


class VariantInputSerializer(serializers.Serializer):
    """Sellable variant; the title names one value of every option."""

    id = serializers.UUIDField(required=False, allow_null=True)
    title = serializers.CharField(max_length=255)
    sku = serializers.CharField(max_length=100)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    is_default = serializers.BooleanField(default=False)
    is_available = serializers.BooleanField(default=True)


class ProductInputSerializer(serializers.Serializer):
    """
    Full state of a product, used for both create and replace.

    A product without variants needs its own SKU; a product with variants
    needs at least one variant and has its SKU cleared.
    """

    name = serializers.CharField(max_length=200)
    description = serializers.CharField(max_length=1000, required=False, allow_blank=True, default='')
    category = serializers.UUIDField(required=False, allow_null=True, default=None)
    base_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    sku = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True, default=None)
    is_active = serializers.BooleanField(default=True)
    has_variants = serializers.BooleanField(default=False)
    variant_options = VariantOptionInputSerializer(many=True, required=False, default=list)
    variants = VariantInputSerializer(many=True, required=False, default=list)

    def validate(self, attrs):
        """Check the SKU / variants rule of the product."""
        if attrs['has_variants']:
            if not attrs['variants']:
                raise serializers.ValidationError({
                    'variants': 'A product with variants needs at least one variant'
                })
            attrs['sku'] = None
        else:
            if not (attrs.get('sku') or '').strip():
                raise serializers.ValidationError({
                    'sku': 'SKU is required'
                })
            attrs['variant_options'] = []
            attrs['variants'] = []
        return attrs

    def to_service_kwargs(self):
        data = dict(self.validated_data)
        data['category_id'] = data.pop('category')
        return data


class GenerateOptionValueInputSerializer(serializers.Serializer):
    """Option value as typed so far; blank values are skipped by the generator."""

    id = serializers.UUIDField(required=False, allow_null=True)
    value = serializers.CharField(max_length=100, allow_blank=True)
    position = serializers.IntegerField(min_value=0, required=False)


class GenerateOptionInputSerializer(serializers.Serializer):
    """Option being edited; it may still be unnamed or without values."""

    id = serializers.UUIDField(required=False, allow_null=True)
    name = serializers.CharField(max_length=100, allow_blank=True)
    position = serializers.IntegerField(min_value=0, required=False)
    values = GenerateOptionValueInputSerializer(many=True, required=False, default=list)


class GenerateVariantRowInputSerializer(serializers.Serializer):
    """Row of a generated table; new rows have no id and may have no price yet."""

    id = serializers.UUIDField(required=False, allow_null=True)
    title = serializers.CharField(max_length=255)
    sku = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0.01'), required=False, allow_null=True
    )
    is_default = serializers.BooleanField(default=False)
    is_available = serializers.BooleanField(default=True)


class GenerateVariantsInputSerializer(serializers.Serializer):
    """Options to expand into a variant table, plus the table shown so far."""

    name = serializers.CharField(max_length=200)
    base_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0.01'), required=False, allow_null=True
    )
    variant_options = GenerateOptionInputSerializer(many=True)
    variants = GenerateVariantRowInputSerializer(many=True, required=False, default=list)


# =============================================================================
# Output Serializers
# =============================================================================

class ProductCategorySerializer(serializers.ModelSerializer):
    """Serializer for product categories."""

    product_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = ProductCategory
        fields = [
            'id',
            'name',
            'description',
            'product_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class VariantOptionValueSerializer(serializers.ModelSerializer):

    class Meta:
        model = VariantOptionValue
        fields = ['id', 'value', 'position']
        read_only_fields = fields


class VariantOptionSerializer(serializers.ModelSerializer):
    values = VariantOptionValueSerializer(many=True, read_only=True)

    class Meta:
        model = VariantOption
        fields = ['id', 'name', 'position', 'values']
        read_only_fields = fields


class VariantSerializer(serializers.ModelSerializer):
    option_values = serializers.PrimaryKeyRelatedField(many=True, read_only=True)

    class Meta:
        model = Variant
        fields = [
            'id',
            'title',
            'sku',
            'price',
            'is_default',
            'is_available',
            'position',
            'option_values',
        ]
        read_only_fields = fields


class ProductCategoryMinimalSerializer(serializers.ModelSerializer):

    class Meta:
        model = ProductCategory
        fields = ['id', 'name']
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    """Product with its options, values and variants."""

    category = ProductCategoryMinimalSerializer(read_only=True)
    variant_options = VariantOptionSerializer(many=True, read_only=True)
    variants = VariantSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            'id',
            'name',
            'description',
            'category',
            'base_price',
            'sku',
            'is_active',
            'has_variants',
            'variant_options',
            'variants',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ProductListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    category = ProductCategoryMinimalSerializer(read_only=True)
    variant_count = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id',
            'name',
            'category',
            'base_price',
            'sku',
            'is_active',
            'has_variants',
            'variant_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_variant_count(self, obj) -> int:
        return len(obj.variants.all())


class GeneratedVariantSerializer(serializers.Serializer):
    id = serializers.UUIDField(allow_null=True)
    title = serializers.CharField()
    sku = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    is_default = serializers.BooleanField()
    is_available = serializers.BooleanField()
