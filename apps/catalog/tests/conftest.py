import pytest
from decimal import Decimal
from apps.catalog.models import ProductCategory, Product
from apps.catalog.services import create_product


@pytest.fixture
def product_category(db, owner_id):
    """Create and return a product category of the owner."""
    return ProductCategory.objects.create(
        owner_id=owner_id,
        name='Hot Drinks',
        description='Espresso based drinks',
    )


@pytest.fixture
def other_category(db, other_owner_id):
    """Create and return a category of another owner."""
    return ProductCategory.objects.create(
        owner_id=other_owner_id,
        name='Hot Drinks',
    )


@pytest.fixture
def size_option():
    """Size option payload without ids."""
    return {
        'name': 'Size',
        'values': [{'value': '8oz'}, {'value': '12oz'}, {'value': '16oz'}],
    }


@pytest.fixture
def temp_option():
    """Temperature option payload without ids."""
    return {
        'name': 'Temp',
        'values': [{'value': 'Hot'}, {'value': 'Iced'}],
    }


@pytest.fixture
def latte_variants():
    """Variants matching the size option."""
    return [
        {'title': '8oz', 'sku': 'LAT-8OZ', 'price': Decimal('3.50'), 'is_default': True},
        {'title': '12oz', 'sku': 'LAT-12O', 'price': Decimal('4.00')},
        {'title': '16oz', 'sku': 'LAT-16O', 'price': Decimal('4.50')},
    ]


@pytest.fixture
def latte(db, owner_id, product_category, size_option, latte_variants):
    """Create a Latte sold in three sizes."""
    product, _ = create_product(
        owner_id=owner_id,
        name='Latte',
        base_price=Decimal('3.50'),
        category_id=product_category.id,
        has_variants=True,
        variant_options=[size_option],
        variants=latte_variants,
    )
    return product


@pytest.fixture
def espresso(db, owner_id, product_category):
    """Create a product without variants."""
    product, _ = create_product(
        owner_id=owner_id,
        name='Espresso',
        base_price=Decimal('2.50'),
        category_id=product_category.id,
        sku='ESP-001',
    )
    return product


def product_state(product):
    """
    Current options and variants of a product as a PUT payload, ids included.
    """
    product = Product.objects.prefetch_related('variant_options__values', 'variants').get(pk=product.pk)
    return {
        'variant_options': [
            {
                'id': option.id,
                'name': option.name,
                'position': option.position,
                'values': [
                    {'id': value.id, 'value': value.value, 'position': value.position}
                    for value in option.values.all()
                ],
            }
            for option in product.variant_options.all()
        ],
        'variants': [
            {
                'id': variant.id,
                'title': variant.title,
                'sku': variant.sku,
                'price': variant.price,
                'is_default': variant.is_default,
                'is_available': variant.is_available,
            }
            for variant in product.variants.all()
        ],
    }
