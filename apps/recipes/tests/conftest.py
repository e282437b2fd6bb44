import pytest
from decimal import Decimal
from apps.catalog.tests.conftest import (  # noqa: F401
    espresso,
    latte,
    latte_variants,
    product_category,
    size_option,
)
from apps.inventory.tests.conftest import (  # noqa: F401
    beans_category,
    espresso_beans,
    milk_category,
    whole_milk,
)
from apps.recipes.services import create_recipe


@pytest.fixture
def latte_recipe(db, owner_id, latte, espresso_beans, whole_milk):
    """12oz latte: 18 g of beans (1.80) and 200 ml of milk (0.48)."""
    return create_recipe(
        owner_id=owner_id,
        name='Latte 12oz',
        product_id=latte.id,
        product_variant_id=latte.variants.get(title='12oz').id,
        instructions='Pull a double shot, steam the milk, pour.',
        prep_time_minutes=4,
        ingredients=[
            {'inventory_item': espresso_beans.id, 'quantity': Decimal('18')},
            {'inventory_item': whole_milk.id, 'quantity': Decimal('200'), 'notes': 'steamed'},
        ],
    )
