import pytest
from decimal import Decimal
from apps.catalog.services import ProductInUseError, delete_product
from apps.core.exceptions import RecordNotFoundError
from apps.inventory.services import InventoryItemInUseError, delete_inventory_item, update_inventory_item
from apps.recipes.models import Recipe, RecipeIngredient
from apps.recipes.services import (
    DuplicateIngredientError,
    InvalidRecipeError,
    MissingInventoryItemError,
    MissingProductError,
    RecipeNotFoundError,
    create_recipe,
    delete_recipe,
    get_recipe,
    list_recipes,
    update_recipe,
)


def recipe_data(recipe, **overrides):
    """Full replacement data for ``recipe``, ingredient ids included."""
    data = {
        'name': recipe.name,
        'product_id': recipe.product_id,
        'product_variant_id': recipe.product_variant_id,
        'ingredients': [
            {
                'id': ingredient.id,
                'inventory_item': ingredient.inventory_item_id,
                'quantity': ingredient.quantity,
                'unit': ingredient.unit,
                'notes': ingredient.notes,
            }
            for ingredient in recipe.ingredients.all()
        ],
    }
    data.update(overrides)
    return data


# =============================================================================
# Create Tests
# =============================================================================

@pytest.mark.django_db
class TestCreateRecipe:
    """Tests for create_recipe service."""

    def test_total_cost(self, latte_recipe):
        assert latte_recipe.total_cost == Decimal('2.28')

    def test_ingredient_unit_defaults_to_item_unit(self, latte_recipe):
        units = list(latte_recipe.ingredients.values_list('unit', flat=True))

        assert units == ['g', 'ml']

    def test_ingredient_positions_follow_submit_order(self, latte_recipe, espresso_beans):
        first = latte_recipe.ingredients.first()

        assert first.position == 0
        assert first.inventory_item == espresso_beans

    def test_duplicate_ingredient(self, owner_id, espresso, espresso_beans):
        with pytest.raises(DuplicateIngredientError) as exc_info:
            create_recipe(
                owner_id=owner_id,
                name='Espresso',
                product_id=espresso.id,
                ingredients=[
                    {'inventory_item': espresso_beans.id, 'quantity': Decimal('18')},
                    {'inventory_item': espresso_beans.id, 'quantity': Decimal('2')},
                ],
            )

        assert exc_info.value.field == 'ingredients.1.inventory_item'
        assert not Recipe.objects.exists()

    def test_missing_inventory_item(self, owner_id, espresso, espresso_beans):
        with pytest.raises(MissingInventoryItemError) as exc_info:
            create_recipe(
                owner_id=owner_id,
                name='Espresso',
                product_id=espresso.id,
                ingredients=[
                    {'inventory_item': espresso_beans.id, 'quantity': Decimal('18')},
                    {'inventory_item': '00000000-0000-0000-0000-000000000000', 'quantity': Decimal('1')},
                ],
            )

        assert exc_info.value.field == 'ingredients.1.inventory_item'

    def test_product_of_other_owner(self, other_owner_id, espresso, espresso_beans):
        with pytest.raises(MissingProductError) as exc_info:
            create_recipe(
                owner_id=other_owner_id,
                name='Espresso',
                product_id=espresso.id,
                ingredients=[{'inventory_item': espresso_beans.id, 'quantity': Decimal('18')}],
            )

        assert exc_info.value.field == 'product'

    def test_no_ingredients(self, owner_id, espresso):
        with pytest.raises(InvalidRecipeError) as exc_info:
            create_recipe(owner_id=owner_id, name='Empty', product_id=espresso.id, ingredients=[])

        assert exc_info.value.field == 'ingredients'

    def test_variant_of_another_product(self, owner_id, espresso, latte, espresso_beans):
        with pytest.raises(InvalidRecipeError) as exc_info:
            create_recipe(
                owner_id=owner_id,
                name='Espresso',
                product_id=espresso.id,
                product_variant_id=latte.variants.first().id,
                ingredients=[{'inventory_item': espresso_beans.id, 'quantity': Decimal('18')}],
            )

        assert exc_info.value.field == 'product_variant'


# =============================================================================
# Update Tests
# =============================================================================

@pytest.mark.django_db
class TestUpdateRecipe:
    """Tests for update_recipe service."""

    def test_ingredient_ids_survive(self, owner_id, latte_recipe):
        before = set(latte_recipe.ingredients.values_list('id', flat=True))
        data = recipe_data(latte_recipe)
        data['ingredients'][1]['quantity'] = Decimal('250')

        recipe = update_recipe(owner_id=owner_id, recipe_id=latte_recipe.id, data=data)

        assert set(recipe.ingredients.values_list('id', flat=True)) == before
        assert recipe.total_cost == Decimal('2.40')

    def test_ingredients_can_trade_inventory_items(
        self, owner_id, latte_recipe, espresso_beans, whole_milk
    ):
        data = recipe_data(latte_recipe)
        first, second = data['ingredients']
        first['inventory_item'], second['inventory_item'] = whole_milk.id, espresso_beans.id

        recipe = update_recipe(owner_id=owner_id, recipe_id=latte_recipe.id, data=data)

        ingredients = list(recipe.ingredients.all())
        assert [i.id for i in ingredients] == [first['id'], second['id']]
        assert [i.inventory_item_id for i in ingredients] == [whole_milk.id, espresso_beans.id]
        # 18 ml of milk (0.0432) + 200 g of beans (20.00)
        assert recipe.total_cost == Decimal('20.04')

    def test_omitted_ingredient_is_deleted(self, owner_id, latte_recipe, espresso_beans):
        data = recipe_data(latte_recipe)
        data['ingredients'] = data['ingredients'][:1]

        recipe = update_recipe(owner_id=owner_id, recipe_id=latte_recipe.id, data=data)

        assert list(recipe.ingredients.values_list('inventory_item', flat=True)) == [espresso_beans.id]
        assert recipe.total_cost == Decimal('1.80')

    def test_unknown_ingredient_id(self, owner_id, latte_recipe):
        data = recipe_data(latte_recipe)
        data['ingredients'][0]['id'] = '00000000-0000-0000-0000-000000000000'

        with pytest.raises(RecordNotFoundError):
            update_recipe(owner_id=owner_id, recipe_id=latte_recipe.id, data=data)

        assert RecipeIngredient.objects.filter(recipe=latte_recipe).count() == 2

    def test_omitted_variant_is_cleared(self, owner_id, latte_recipe):
        data = recipe_data(latte_recipe)
        del data['product_variant_id']

        recipe = update_recipe(owner_id=owner_id, recipe_id=latte_recipe.id, data=data)

        assert recipe.product_variant is None

    def test_update_of_other_owner(self, other_owner_id, latte_recipe):
        with pytest.raises(RecipeNotFoundError):
            update_recipe(
                owner_id=other_owner_id, recipe_id=latte_recipe.id, data=recipe_data(latte_recipe)
            )

    def test_inventory_price_change_reprices_recipe(self, owner_id, latte_recipe, espresso_beans):
        update_inventory_item(
            owner_id=owner_id, item_id=espresso_beans.id, data={'unit_price': Decimal('120.00')}
        )

        latte_recipe.refresh_from_db()
        assert latte_recipe.total_cost == Decimal('2.64')


# =============================================================================
# Query and Delete Tests
# =============================================================================

@pytest.mark.django_db
class TestRecipeQueries:
    """Tests for recipe listing and deletion."""

    def test_list_filters(self, owner_id, latte, latte_recipe):
        assert list(list_recipes(owner_id=owner_id, search='latte')) == [latte_recipe]
        assert list(list_recipes(owner_id=owner_id, product_id=latte.id)) == [latte_recipe]
        assert list(list_recipes(owner_id=owner_id, is_active=False)) == []

    def test_get_recipe_of_other_owner(self, other_owner_id, latte_recipe):
        with pytest.raises(RecipeNotFoundError):
            get_recipe(owner_id=other_owner_id, recipe_id=latte_recipe.id)

    def test_delete_recipe_removes_ingredients(self, owner_id, latte_recipe):
        delete_recipe(owner_id=owner_id, recipe_id=latte_recipe.id)

        assert not RecipeIngredient.objects.exists()

    def test_product_with_recipe_cannot_be_deleted(self, owner_id, latte, latte_recipe):
        with pytest.raises(ProductInUseError):
            delete_product(owner_id=owner_id, product_id=latte.id)

    def test_ingredient_item_cannot_be_deleted(self, owner_id, whole_milk, latte_recipe):
        with pytest.raises(InventoryItemInUseError):
            delete_inventory_item(owner_id=owner_id, item_id=whole_milk.id)
