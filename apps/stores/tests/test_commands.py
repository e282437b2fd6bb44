import pytest
from decimal import Decimal
from django.core.management import call_command
from apps.catalog.models import Product, Variant
from apps.inventory.models import InventoryItem
from apps.recipes.models import Recipe
from apps.stores.models import Store


@pytest.mark.django_db
class TestCreateSampleData:
    """Tests for the create_sample_data management command."""

    def test_creates_sample_shop(self):
        call_command('create_sample_data', owner='sample-owner')

        assert Store.objects.filter(owner_id='sample-owner').exists()
        assert InventoryItem.objects.filter(owner_id='sample-owner').count() == 5
        assert Variant.objects.filter(product__name='Latte').count() == 6
        assert Recipe.objects.get(name='Espresso').total_cost == Decimal('1.80')
        # 1.80 beans + 0.48 milk + 0.12 cup
        assert Recipe.objects.get(name='Latte 12oz / Hot').total_cost == Decimal('2.40')

    def test_clear_recreates_data(self):
        call_command('create_sample_data', owner='sample-owner')
        call_command('create_sample_data', owner='sample-owner', clear=True)

        assert Store.objects.filter(owner_id='sample-owner').count() == 1
        assert Product.objects.filter(owner_id='sample-owner').count() == 2
