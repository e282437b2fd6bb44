"""Services for recipe business logic."""

from .exceptions import (
    RecipeServiceError,
    RecipeNotFoundError,
    MissingProductError,
    MissingInventoryItemError,
    DuplicateIngredientError,
    InvalidRecipeError,
)
from .costing import (
    derive_ingredient_cost,
    derive_recipe_total_cost,
    round_cost,
)
from .recipe_management import (
    recipe_queryset,
    list_recipes,
    get_recipe,
    create_recipe,
    update_recipe,
    delete_recipe,
    update_recipe_cost,
    refresh_recipe_costs_for_item,
)

__all__ = [
    # Exceptions
    'RecipeServiceError',
    'RecipeNotFoundError',
    'MissingProductError',
    'MissingInventoryItemError',
    'DuplicateIngredientError',
    'InvalidRecipeError',
    # Costing
    'derive_ingredient_cost',
    'derive_recipe_total_cost',
    'round_cost',
    # Recipe Management
    'recipe_queryset',
    'list_recipes',
    'get_recipe',
    'create_recipe',
    'update_recipe',
    'delete_recipe',
    'update_recipe_cost',
    'refresh_recipe_costs_for_item',
]
