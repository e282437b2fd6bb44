"""
Recipe cost derivation.

An inventory item is bought per order unit at ``unit_price`` and one order
unit holds ``amount_per_unit`` of the item's unit, so an ingredient using
``quantity`` of that unit costs::

    unit_price / amount_per_unit * quantity

e.g. beans at 100.00 per 1000 g bag, 18 g per shot: 100 / 1000 * 18 = 1.80.

``amount_per_unit`` is validated to be positive when the item is saved;
these functions do not check it again.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Tuple

CENT = Decimal('0.01')


def derive_ingredient_cost(unit_cost: Decimal, amount_per_unit: Decimal, quantity: Decimal) -> Decimal:
    """Cost of ``quantity`` of an item, unrounded."""
    return Decimal(unit_cost) / Decimal(amount_per_unit) * Decimal(quantity)


def derive_recipe_total_cost(ingredients: Iterable[Tuple[Decimal, Decimal, Decimal]]) -> Decimal:
    """
    Sum of the ingredient costs.

    Args:
        ingredients: ``(unit_cost, amount_per_unit, quantity)`` per ingredient

    Returns:
        Unrounded total, Decimal('0') for no ingredients
    """
    return sum(
        (derive_ingredient_cost(*ingredient) for ingredient in ingredients),
        Decimal('0'),
    )


def round_cost(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def ingredient_cost_terms(ingredient) -> Tuple[Decimal, Decimal, Decimal]:
    """Cost inputs of a stored RecipeIngredient."""
    item = ingredient.inventory_item
    return item.unit_price, item.amount_per_unit, ingredient.quantity
