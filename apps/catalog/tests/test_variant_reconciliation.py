import pytest
from decimal import Decimal
from apps.catalog.models import Variant, VariantOption, VariantOptionValue
from apps.catalog.services import (
    DuplicateOptionNameError,
    DuplicateOptionValueError,
    DuplicateSkuError,
    InvalidVariantError,
    create_product,
    reconcile_product_variants,
)
from apps.core.exceptions import RecordNotFoundError
from .conftest import product_state


# =============================================================================
# Reconciliation Tests
# =============================================================================

@pytest.mark.django_db
class TestReconcileProductVariants:
    """Tests for reconcile_product_variants()"""

    def test_create_links_variants_to_option_values(self, latte):
        variant = latte.variants.get(title='12oz')

        assert [v.value for v in variant.option_values.all()] == ['12oz']
        assert latte.variant_options.get().values.count() == 3

    def test_rerun_with_assigned_ids_is_a_no_op(self, latte):
        state = product_state(latte)
        variant_ids = set(latte.variants.values_list('id', flat=True))

        outcome = reconcile_product_variants(product=latte, **state)

        assert outcome.counts['options'] == {'created': 0, 'updated': 1, 'changed': 0, 'deleted': 0}
        assert outcome.counts['values'] == {'created': 0, 'updated': 3, 'changed': 0, 'deleted': 0}
        assert outcome.counts['variants'] == {'created': 0, 'updated': 3, 'changed': 0, 'deleted': 0}
        assert set(latte.variants.values_list('id', flat=True)) == variant_ids

    def test_update_preserves_identity_and_replaces_fields(self, latte):
        state = product_state(latte)
        medium = next(v for v in state['variants'] if v['title'] == '12oz')
        medium_id = medium['id']
        medium.update(sku='LAT-MEDIUM', price=Decimal('4.25'), is_available=False)

        reconcile_product_variants(product=latte, **state)

        stored = Variant.objects.get(pk=medium_id)
        assert stored.sku == 'LAT-MEDIUM'
        assert stored.price == Decimal('4.25')
        assert stored.is_available is False

    def test_omitted_flags_fall_back_to_defaults(self, latte):
        state = product_state(latte)
        small = state['variants'][0]
        assert small['is_default'] is True
        del small['is_default']

        reconcile_product_variants(product=latte, **state)

        assert Variant.objects.get(pk=small['id']).is_default is False

    def test_removed_value_deletes_value_and_variant(self, latte):
        state = product_state(latte)
        large_value = state['variant_options'][0]['values'].pop()
        large_variant = state['variants'].pop()

        outcome = reconcile_product_variants(product=latte, **state)

        assert outcome.values.deleted == [large_value['id']]
        assert outcome.variants.deleted == [large_variant['id']]
        assert not VariantOptionValue.objects.filter(pk=large_value['id']).exists()
        assert not Variant.objects.filter(pk=large_variant['id']).exists()

    def test_removed_option_cascades_to_its_values(self, latte, temp_option):
        state = product_state(latte)
        size = state['variant_options'][0]
        size_value_ids = [v['id'] for v in size['values']]

        outcome = reconcile_product_variants(
            product=latte,
            variant_options=[temp_option],
            variants=[
                {'title': 'Hot', 'sku': 'LAT-HOT', 'price': Decimal('3.50')},
                {'title': 'Iced', 'sku': 'LAT-ICE', 'price': Decimal('3.90')},
            ],
        )

        assert outcome.options.deleted == [size['id']]
        assert sorted(map(str, outcome.values.deleted)) == sorted(map(str, size_value_ids))
        assert not VariantOption.objects.filter(pk=size['id']).exists()
        assert not VariantOptionValue.objects.filter(pk__in=size_value_ids).exists()
        assert list(latte.variants.values_list('title', flat=True)) == ['Hot', 'Iced']

    def test_adding_option_regenerates_variants(self, latte, temp_option):
        state = product_state(latte)
        state['variant_options'].append(temp_option)
        state['variants'] = [
            {'title': f'{size} / {temp}', 'sku': f'LAT-{size}-{temp}', 'price': Decimal('4.00')}
            for size in ('8oz', '12oz', '16oz') for temp in ('Hot', 'Iced')
        ]

        outcome = reconcile_product_variants(product=latte, **state)

        assert outcome.counts['options']['created'] == 1
        assert outcome.counts['values']['created'] == 2
        assert outcome.counts['variants'] == {'created': 6, 'updated': 0, 'changed': 0, 'deleted': 3}
        iced = latte.variants.get(title='12oz / Iced')
        assert sorted(v.value for v in iced.option_values.all()) == ['12oz', 'Iced']

    def test_freed_sku_can_be_reused_in_same_edit(self, latte):
        state = product_state(latte)
        removed = state['variants'].pop()
        state['variant_options'][0]['values'].pop()
        state['variants'][0]['sku'] = removed['sku']

        reconcile_product_variants(product=latte, **state)

        assert latte.variants.get(title='8oz').sku == removed['sku']

    def test_variants_can_trade_skus(self, latte):
        state = product_state(latte)
        small, medium = state['variants'][:2]
        small['sku'], medium['sku'] = medium['sku'], small['sku']

        outcome = reconcile_product_variants(product=latte, **state)

        assert outcome.counts['variants'] == {'created': 0, 'updated': 3, 'changed': 2, 'deleted': 0}
        assert Variant.objects.get(pk=small['id']).sku == 'LAT-12O'
        assert Variant.objects.get(pk=medium['id']).sku == 'LAT-8OZ'

    def test_option_values_can_trade_values(self, latte):
        state = product_state(latte)
        first, second = state['variant_options'][0]['values'][:2]
        first['value'], second['value'] = second['value'], first['value']

        outcome = reconcile_product_variants(product=latte, **state)

        assert outcome.counts['values'] == {'created': 0, 'updated': 3, 'changed': 2, 'deleted': 0}
        assert VariantOptionValue.objects.get(pk=first['id']).value == '12oz'
        assert VariantOptionValue.objects.get(pk=second['id']).value == '8oz'
        small = latte.variants.get(title='8oz')
        assert [v.id for v in small.option_values.all()] == [second['id']]

    def test_padded_names_are_stored_trimmed(self, latte):
        state = product_state(latte)
        state['variant_options'][0]['name'] = '  Size '
        state['variant_options'][0]['values'][0]['value'] = ' 8oz'

        outcome = reconcile_product_variants(product=latte, **state)

        assert outcome.counts['options']['changed'] == 0
        assert outcome.counts['values']['changed'] == 0
        assert latte.variant_options.get().name == 'Size'

    def test_unknown_id_is_rejected(self, latte):
        state = product_state(latte)
        state['variants'][0]['id'] = '00000000-0000-0000-0000-000000000000'

        with pytest.raises(RecordNotFoundError):
            reconcile_product_variants(product=latte, **state)

    def test_id_of_another_product_is_rejected(self, latte, owner_id, size_option):
        other, _ = create_product(
            owner_id=owner_id,
            name='Mocha',
            base_price=Decimal('4.00'),
            has_variants=True,
            variant_options=[size_option],
            variants=[{'title': '8oz', 'sku': 'MOC-8OZ', 'price': Decimal('4.00')}],
        )
        state = product_state(latte)
        state['variants'][0]['id'] = other.variants.get().id

        with pytest.raises(RecordNotFoundError):
            reconcile_product_variants(product=latte, **state)

        assert other.variants.count() == 1

    def test_failure_rolls_back_every_level(self, latte):
        state = product_state(latte)
        state['variant_options'][0]['name'] = 'Cup Size'
        state['variants'][0]['price'] = Decimal('9.99')
        state['variants'][2]['id'] = '00000000-0000-0000-0000-000000000000'

        with pytest.raises(RecordNotFoundError):
            reconcile_product_variants(product=latte, **state)

        assert latte.variant_options.get().name == 'Size'
        assert latte.variants.get(title='8oz').price == Decimal('3.50')

    def test_product_without_variants_drops_everything(self, latte):
        latte.has_variants = False
        latte.sku = 'LAT-001'
        latte.save()

        reconcile_product_variants(product=latte, **product_state(latte))

        assert latte.variant_options.count() == 0
        assert latte.variants.count() == 0


# =============================================================================
# Validation Tests
# =============================================================================

@pytest.mark.django_db
class TestVariantValidation:
    """Tests for the checks made before anything is written."""

    def test_duplicate_option_name_is_case_insensitive(self, latte, size_option):
        clash = {**size_option, 'name': 'size'}

        with pytest.raises(DuplicateOptionNameError) as exc_info:
            reconcile_product_variants(product=latte, variant_options=[size_option, clash], variants=[])

        assert exc_info.value.field == 'variant_options.1.name'
        assert exc_info.value.status_code == 409

    def test_duplicate_option_value(self, latte):
        option = {'name': 'Temp', 'values': [{'value': 'Hot'}, {'value': 'HOT'}]}

        with pytest.raises(DuplicateOptionValueError) as exc_info:
            reconcile_product_variants(product=latte, variant_options=[option], variants=[])

        assert exc_info.value.field == 'variant_options.0.values.1.value'

    def test_duplicate_sku_in_payload(self, latte):
        state = product_state(latte)
        state['variants'][1]['sku'] = state['variants'][0]['sku']

        with pytest.raises(DuplicateSkuError) as exc_info:
            reconcile_product_variants(product=latte, **state)

        assert exc_info.value.field == 'variants.1.sku'

    def test_sku_of_other_product_is_rejected(self, latte, espresso):
        state = product_state(latte)
        state['variants'][2]['sku'] = espresso.sku

        with pytest.raises(DuplicateSkuError) as exc_info:
            reconcile_product_variants(product=latte, **state)

        assert exc_info.value.field == 'variants.2.sku'

    def test_sku_of_other_owner_is_allowed(self, latte, other_owner_id):
        create_product(
            owner_id=other_owner_id, name='Espresso', base_price=Decimal('2.00'), sku='LAT-12O-X'
        )
        state = product_state(latte)
        state['variants'][1]['sku'] = 'LAT-12O-X'

        reconcile_product_variants(product=latte, **state)

        assert latte.variants.get(title='12oz').sku == 'LAT-12O-X'

    def test_title_not_producible_from_options(self, latte):
        state = product_state(latte)
        state['variants'][0]['title'] = '20oz'

        with pytest.raises(InvalidVariantError) as exc_info:
            reconcile_product_variants(product=latte, **state)

        assert exc_info.value.field == 'variants.0.title'

    def test_title_submitted_twice(self, latte):
        state = product_state(latte)
        state['variants'].append({'title': '8oz', 'sku': 'LAT-8OZ-B', 'price': Decimal('3.00')})

        with pytest.raises(InvalidVariantError):
            reconcile_product_variants(product=latte, **state)
