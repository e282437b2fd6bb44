import pytest
from decimal import Decimal
from apps.catalog.models import Product, ProductCategory, Variant
from apps.catalog.services import (
    CategoryInUseError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    DuplicateSkuError,
    InvalidVariantError,
    MissingCategoryError,
    ProductNotFoundError,
    create_category,
    create_product,
    delete_category,
    delete_product,
    get_product,
    list_categories,
    update_category,
    update_product,
)
from .conftest import product_state


# =============================================================================
# Category Management Tests
# =============================================================================

@pytest.mark.django_db
class TestCategoryManagement:
    """Tests for product category services."""

    def test_create_category(self, owner_id):
        category = create_category(owner_id=owner_id, name='  Pastries ', description='Baked goods')

        assert category.name == 'Pastries'
        assert category.owner_id == owner_id

    def test_create_duplicate_name_case_insensitive(self, owner_id, product_category):
        with pytest.raises(DuplicateCategoryError) as exc_info:
            create_category(owner_id=owner_id, name='hot drinks')

        assert exc_info.value.field == 'name'

    def test_same_name_for_other_owner_is_allowed(self, other_owner_id, product_category):
        category = create_category(owner_id=other_owner_id, name='Hot Drinks')

        assert category.pk != product_category.pk

    def test_update_category(self, owner_id, product_category):
        category = update_category(
            owner_id=owner_id,
            category_id=product_category.id,
            data={'name': 'Coffee', 'description': 'All coffee'},
        )

        assert category.name == 'Coffee'
        assert category.description == 'All coffee'

    def test_update_category_of_other_owner(self, other_owner_id, product_category):
        with pytest.raises(CategoryNotFoundError):
            update_category(owner_id=other_owner_id, category_id=product_category.id, data={'name': 'X'})

    def test_delete_category_in_use(self, owner_id, product_category, espresso):
        with pytest.raises(CategoryInUseError) as exc_info:
            delete_category(owner_id=owner_id, category_id=product_category.id)

        assert exc_info.value.error_code == 'FOREIGN_KEY_CONSTRAINT'
        assert ProductCategory.objects.filter(pk=product_category.pk).exists()

    def test_delete_empty_category(self, owner_id, product_category):
        delete_category(owner_id=owner_id, category_id=product_category.id)

        assert not ProductCategory.objects.filter(pk=product_category.pk).exists()

    def test_list_categories_counts_products(self, owner_id, product_category, espresso, latte):
        categories = list(list_categories(owner_id=owner_id))

        assert len(categories) == 1
        assert categories[0].product_count == 2


# =============================================================================
# Product Management Tests
# =============================================================================

@pytest.mark.django_db
class TestProductManagement:
    """Tests for product services."""

    def test_create_product_without_variants(self, espresso):
        assert espresso.sku == 'ESP-001'
        assert espresso.variants.count() == 0

    def test_create_product_with_variants_clears_sku(self, owner_id, size_option, latte_variants):
        product, outcome = create_product(
            owner_id=owner_id,
            name='Flat White',
            base_price=Decimal('3.80'),
            sku='IGNORED',
            has_variants=True,
            variant_options=[size_option],
            variants=[{**v, 'sku': f"FW-{v['title']}"} for v in latte_variants],
        )

        assert product.sku is None
        assert outcome.counts['variants']['created'] == 3
        assert Variant.objects.filter(product=product, owner_id=owner_id).count() == 3

    def test_product_without_variants_needs_sku(self, owner_id):
        with pytest.raises(InvalidVariantError) as exc_info:
            create_product(owner_id=owner_id, name='Tea', base_price=Decimal('2.00'))

        assert exc_info.value.field == 'sku'

    def test_product_with_variants_needs_variants(self, owner_id, size_option):
        with pytest.raises(InvalidVariantError) as exc_info:
            create_product(
                owner_id=owner_id, name='Tea', base_price=Decimal('2.00'),
                has_variants=True, variant_options=[size_option],
            )

        assert exc_info.value.field == 'variants'

    def test_product_sku_clashing_with_variant(self, owner_id, latte):
        with pytest.raises(DuplicateSkuError) as exc_info:
            create_product(owner_id=owner_id, name='Tea', base_price=Decimal('2.00'), sku='LAT-8OZ')

        assert exc_info.value.field == 'sku'

    def test_missing_category(self, owner_id, other_category):
        with pytest.raises(MissingCategoryError) as exc_info:
            create_product(
                owner_id=owner_id, name='Tea', base_price=Decimal('2.00'),
                sku='TEA-001', category_id=other_category.id,
            )

        assert exc_info.value.error_code == 'RELATED_RECORD_MISSING'
        assert exc_info.value.field == 'category'
        assert not Product.objects.filter(name='Tea').exists()

    def test_failed_variants_roll_back_product(self, owner_id, size_option):
        with pytest.raises(InvalidVariantError):
            create_product(
                owner_id=owner_id, name='Cortado', base_price=Decimal('3.00'),
                has_variants=True, variant_options=[size_option],
                variants=[{'title': 'Venti', 'sku': 'COR-V', 'price': Decimal('3.00')}],
            )

        assert not Product.objects.filter(name='Cortado').exists()

    def test_update_product_replaces_fields_and_variants(self, owner_id, latte):
        state = product_state(latte)
        state['variants'][0]['price'] = Decimal('3.75')

        product, outcome = update_product(
            owner_id=owner_id,
            product_id=latte.id,
            data={
                'name': 'Caffe Latte',
                'description': '',
                'category_id': None,
                'base_price': Decimal('3.75'),
                'is_active': True,
                'has_variants': True,
                **state,
            },
        )

        assert product.name == 'Caffe Latte'
        assert product.category is None
        assert outcome.counts['variants'] == {'created': 0, 'updated': 3, 'changed': 1, 'deleted': 0}

    def test_switching_variants_off(self, owner_id, latte):
        product, _ = update_product(
            owner_id=owner_id,
            product_id=latte.id,
            data={'name': 'Latte', 'base_price': Decimal('3.50'), 'has_variants': False, 'sku': 'LAT-001'},
        )

        assert product.sku == 'LAT-001'
        assert product.variants.count() == 0
        assert product.variant_options.count() == 0

    def test_update_product_of_other_owner(self, other_owner_id, latte):
        with pytest.raises(ProductNotFoundError):
            update_product(owner_id=other_owner_id, product_id=latte.id, data={'name': 'Stolen'})

    def test_delete_product_cascades(self, owner_id, latte):
        delete_product(owner_id=owner_id, product_id=latte.id)

        assert not Product.objects.filter(pk=latte.pk).exists()
        assert not Variant.objects.filter(product_id=latte.pk).exists()

    def test_get_product_of_other_owner(self, other_owner_id, latte):
        with pytest.raises(ProductNotFoundError):
            get_product(owner_id=other_owner_id, product_id=latte.id)
