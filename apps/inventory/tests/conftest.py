import pytest
from decimal import Decimal
from apps.inventory.models import InventoryCategory
from apps.inventory.services import create_inventory_item


@pytest.fixture
def milk_category(db, owner_id):
    """Create and return an inventory category of the owner."""
    return InventoryCategory.objects.create(
        owner_id=owner_id,
        name='Milk & Cream',
        description='Fresh milk, creamers, and dairy',
    )


@pytest.fixture
def beans_category(db, owner_id):
    return InventoryCategory.objects.create(owner_id=owner_id, name='Coffee Beans')


@pytest.fixture
def whole_milk(db, owner_id, milk_category):
    """Ten 1000 ml cartons of milk, reorder at 4."""
    return create_inventory_item(
        owner_id=owner_id,
        sku='MLK-WHL',
        name='Whole Milk',
        category_id=milk_category.id,
        order_unit='carton',
        unit='ml',
        quantity=10,
        reorder_level=4,
        unit_price=Decimal('2.40'),
        amount_per_unit=Decimal('1000'),
        supplier='Local Dairy',
    )


@pytest.fixture
def espresso_beans(db, owner_id, beans_category):
    """Two 1 kg bags of beans, reorder at 3."""
    return create_inventory_item(
        owner_id=owner_id,
        sku='BEA-ESP',
        name='Espresso Blend',
        category_id=beans_category.id,
        order_unit='bag',
        unit='g',
        quantity=2,
        reorder_level=3,
        unit_price=Decimal('100.00'),
        amount_per_unit=Decimal('1000'),
    )


@pytest.fixture
def oat_milk(db, owner_id, milk_category):
    """Out of stock item."""
    return create_inventory_item(
        owner_id=owner_id,
        sku='MLK-OAT',
        name='Oat Milk',
        category_id=milk_category.id,
        order_unit='carton',
        unit='ml',
        quantity=0,
        unit_price=Decimal('3.10'),
        amount_per_unit=Decimal('1000'),
    )
