from decimal import Decimal

from apps.catalog.services.variant_generation import (
    build_variants,
    generate_combinations,
    split_title,
    usable_options,
)


SIZE = {'name': 'Size', 'values': [{'value': '8oz'}, {'value': '12oz'}, {'value': '16oz'}]}
TEMP = {'name': 'Temp', 'values': [{'value': 'Hot'}, {'value': 'Iced'}]}


# =============================================================================
# Combination Tests
# =============================================================================

class TestGenerateCombinations:
    """Tests for generate_combinations()"""

    def test_count_is_product_of_value_counts(self):
        milk = {'name': 'Milk', 'values': ['Whole', 'Oat', 'Soy', 'Almond']}

        combinations = generate_combinations([SIZE, TEMP, milk])

        assert len(combinations) == 3 * 2 * 4
        assert len({c.title for c in combinations}) == 24

    def test_titles_follow_option_and_value_order(self):
        titles = [c.title for c in generate_combinations([SIZE, TEMP])]

        assert titles == [
            '8oz / Hot', '8oz / Iced',
            '12oz / Hot', '12oz / Iced',
            '16oz / Hot', '16oz / Iced',
        ]

    def test_options_mapping_keeps_option_order(self):
        first = generate_combinations([SIZE, TEMP])[0]

        assert first.options == (('Size', '8oz'), ('Temp', 'Hot'))
        assert first.values == ('8oz', 'Hot')

    def test_single_option_titles_are_plain_values(self):
        titles = [c.title for c in generate_combinations([SIZE])]

        assert titles == ['8oz', '12oz', '16oz']

    def test_no_options_yields_nothing(self):
        assert generate_combinations([]) == []

    def test_option_with_only_blank_values_is_skipped(self):
        blank = {'name': 'Syrup', 'values': [{'value': ''}, {'value': '   '}]}

        titles = [c.title for c in generate_combinations([blank, TEMP])]

        assert titles == ['Hot', 'Iced']

    def test_all_options_blank_yields_nothing(self):
        blank = {'name': 'Syrup', 'values': [{'value': ''}]}
        unnamed = {'name': '  ', 'values': [{'value': 'Vanilla'}]}

        assert generate_combinations([blank, unnamed]) == []

    def test_repeated_value_is_used_once(self):
        assert usable_options([{'name': 'Temp', 'values': ['Hot', 'Hot', 'Iced']}]) == [
            ('Temp', ['Hot', 'Iced'])
        ]

    def test_split_title_reverses_join(self):
        assert split_title('12oz / Iced') == ['12oz', 'Iced']


# =============================================================================
# Variant Table Tests
# =============================================================================

class TestBuildVariants:
    """Tests for build_variants()"""

    def test_fresh_table_defaults(self):
        variants = build_variants(product_name='Latte', options=[SIZE], base_price=Decimal('3.50'))

        assert [v['title'] for v in variants] == ['8oz', '12oz', '16oz']
        assert [v['sku'] for v in variants] == ['LAT-8OZ', 'LAT-12O', 'LAT-16O']
        assert all(v['is_available'] for v in variants)
        assert all(v['id'] is None for v in variants)

    def test_fresh_table_first_variant_is_default(self):
        variants = build_variants(product_name='Latte', options=[SIZE], base_price=Decimal('3.50'))

        assert [v['is_default'] for v in variants] == [True, False, False]
        assert variants[0]['price'] == Decimal('3.50')
        assert variants[1]['price'] is None

    def test_matching_titles_keep_price_sku_and_id(self):
        existing = [
            {'id': 'a1', 'title': '8oz', 'sku': 'L-SMALL', 'price': Decimal('3.10'),
             'is_default': True, 'is_available': False},
        ]

        variants = build_variants(product_name='Latte', options=[SIZE], existing_variants=existing)

        small = variants[0]
        assert small['id'] == 'a1'
        assert small['sku'] == 'L-SMALL'
        assert small['price'] == Decimal('3.10')
        assert small['is_default'] is True
        assert small['is_available'] is False

    def test_regenerated_table_has_no_new_default(self):
        existing = [{'title': '8oz', 'sku': 'L-SMALL', 'price': Decimal('3.10'), 'is_default': False}]

        variants = build_variants(
            product_name='Latte', options=[SIZE], existing_variants=existing,
            base_price=Decimal('3.50'),
        )

        assert not any(v['is_default'] for v in variants)

    def test_adding_option_drops_old_titles(self):
        existing = build_variants(product_name='Latte', options=[SIZE])

        variants = build_variants(product_name='Latte', options=[SIZE, TEMP], existing_variants=existing)

        assert len(variants) == 6
        assert variants[0]['title'] == '8oz / Hot'
        assert variants[0]['sku'] == 'LAT-8OZ-HOT'
        assert all(v['id'] is None for v in variants)

    def test_removing_option_again_restores_matching_variants(self):
        sized = [
            {'id': 'v1', 'title': '8oz', 'sku': 'LAT-S', 'price': Decimal('3.00')},
            {'id': 'v2', 'title': '12oz', 'sku': 'LAT-M', 'price': Decimal('3.50')},
            {'id': 'v3', 'title': '16oz', 'sku': 'LAT-L', 'price': Decimal('4.00')},
        ]
        table = build_variants(product_name='Latte', options=[SIZE, TEMP], existing_variants=sized)

        reverted = build_variants(product_name='Latte', options=[SIZE], existing_variants=sized + table)

        assert [(v['id'], v['sku'], v['price']) for v in reverted] == [
            ('v1', 'LAT-S', Decimal('3.00')),
            ('v2', 'LAT-M', Decimal('3.50')),
            ('v3', 'LAT-L', Decimal('4.00')),
        ]

    def test_no_options_yields_no_variants(self):
        assert build_variants(product_name='Latte', options=[]) == []
