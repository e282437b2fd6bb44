"""Recipe CRUD operations service."""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet

from apps.catalog.models import Product, Variant
from apps.core.reconciliation import ReconcileResult, assign_fields, reconcile_collection, save_changed
from apps.core.transactions import atomic_action, row_scope
from apps.inventory.models import InventoryItem

from ..models import Recipe, RecipeIngredient
from .costing import derive_recipe_total_cost, ingredient_cost_terms, round_cost
from .exceptions import (
    DuplicateIngredientError,
    InvalidRecipeError,
    MissingInventoryItemError,
    MissingProductError,
    RecipeNotFoundError,
)

logger = logging.getLogger(__name__)

RECIPE_FIELDS = ('name', 'description', 'instructions', 'prep_time_minutes', 'is_active')
INGREDIENT_FIELDS = ('inventory_item', 'quantity', 'unit', 'notes', 'position')


def recipe_queryset() -> QuerySet:
    """Recipes with everything the detail representation reads."""
    return (
        Recipe.objects
        .select_related('product__category', 'product_variant')
        .prefetch_related('ingredients__inventory_item')
    )


def _resolve_product(*, owner_id: str, product_id: UUID, product_variant_id: Optional[UUID]):
    try:
        product = Product.objects.get(pk=product_id, owner_id=owner_id)
    except Product.DoesNotExist:
        raise MissingProductError(f"Product {product_id} does not exist", field='product')

    if product_variant_id is None:
        return product, None

    try:
        variant = Variant.objects.get(pk=product_variant_id, owner_id=owner_id)
    except Variant.DoesNotExist:
        raise MissingProductError(
            f"Product variant {product_variant_id} does not exist",
            field='product_variant'
        )
    if variant.product_id != product.pk:
        raise InvalidRecipeError(
            f"Variant '{variant.title}' is not a variant of {product.name}",
            field='product_variant'
        )
    return product, variant


def _resolve_ingredients(*, owner_id: str, ingredients: Sequence[Mapping]) -> List[Dict[str, Any]]:
    """
    Check the submitted ingredients and swap item ids for inventory items.

    Raises:
        InvalidRecipeError: Fewer ingredients than the configured minimum
        DuplicateIngredientError: The same inventory item is used twice
        MissingInventoryItemError: An inventory item does not exist
    """
    minimum = getattr(settings, 'RECIPES_MIN_INGREDIENTS', 1)
    if len(ingredients) < minimum:
        raise InvalidRecipeError(
            f"A recipe needs at least {minimum} ingredient(s)",
            field='ingredients'
        )

    seen = set()
    for index, ingredient in enumerate(ingredients):
        item_id = str(ingredient['inventory_item'])
        if item_id in seen:
            raise DuplicateIngredientError(
                "This inventory item is already an ingredient of the recipe",
                field=f"ingredients.{index}.inventory_item"
            )
        seen.add(item_id)

    items = {
        str(item.pk): item
        for item in InventoryItem.objects.filter(owner_id=owner_id, pk__in=seen)
    }

    rows = []
    for index, ingredient in enumerate(ingredients):
        item = items.get(str(ingredient['inventory_item']))
        if item is None:
            raise MissingInventoryItemError(
                f"Inventory item {ingredient['inventory_item']} does not exist",
                field=f"ingredients.{index}.inventory_item"
            )
        rows.append({
            'id': ingredient.get('id'),
            'inventory_item': item,
            'quantity': ingredient['quantity'],
            'unit': ingredient.get('unit') or item.unit,
            'notes': ingredient.get('notes', ''),
            'position': index,
            'path': f'ingredients.{index}',
        })
    return rows


def _reconcile_ingredients(recipe: Recipe, rows: List[Dict[str, Any]]) -> ReconcileResult:
    parked = set()

    def create_ingredient(data):
        with row_scope(data['path']):
            return RecipeIngredient.objects.create(
                recipe=recipe,
                **{name: data[name] for name in INGREDIENT_FIELDS}
            )

    def update_ingredient(ingredient, data):
        changed = assign_fields(ingredient, data, INGREDIENT_FIELDS)
        with row_scope(data['path']):
            if ingredient.pk not in parked:
                return save_changed(ingredient, changed)
            # Parked rows come back under their own id and creation time.
            created_at = ingredient.created_at
            ingredient.save(force_insert=True)
            RecipeIngredient.objects.filter(pk=ingredient.pk).update(created_at=created_at)
            ingredient.created_at = created_at
            return True

    def park_ingredients(moving):
        # An inventory item reference has no free placeholder value.
        parked.update(ingredient.pk for ingredient, _ in moving)
        RecipeIngredient.objects.filter(pk__in=parked).delete()

    def delete_ingredients(orphans):
        RecipeIngredient.objects.filter(pk__in=[i.pk for i in orphans]).delete()

    return reconcile_collection(
        existing=recipe.ingredients.all(),
        incoming=rows,
        create=create_ingredient,
        update=update_ingredient,
        delete=delete_ingredients,
        label='ingredient',
        unique_fields=('inventory_item',),
        park=park_ingredients,
    )


def _store_total_cost(recipe: Recipe) -> Recipe:
    ingredients = recipe.ingredients.select_related('inventory_item')
    recipe.total_cost = round_cost(
        derive_recipe_total_cost(ingredient_cost_terms(i) for i in ingredients)
    )
    recipe.save(update_fields=['total_cost', 'updated_at'])
    return recipe


def list_recipes(
    *,
    owner_id: str,
    search: str = '',
    product_id: Optional[UUID] = None,
    product_variant_id: Optional[UUID] = None,
    is_active: Optional[bool] = None,
) -> QuerySet:
    """Recipes of the owner, newest first."""
    queryset = recipe_queryset().filter(owner_id=owner_id)
    if search:
        queryset = queryset.filter(name__icontains=search)
    if product_id:
        queryset = queryset.filter(product_id=product_id)
    if product_variant_id:
        queryset = queryset.filter(product_variant_id=product_variant_id)
    if is_active is not None:
        queryset = queryset.filter(is_active=is_active)
    return queryset.order_by('-created_at')


def get_recipe(*, owner_id: str, recipe_id: UUID) -> Recipe:
    try:
        return recipe_queryset().get(pk=recipe_id, owner_id=owner_id)
    except Recipe.DoesNotExist:
        raise RecipeNotFoundError(f"Recipe {recipe_id} not found")


def create_recipe(
    *,
    owner_id: str,
    name: str,
    product_id: UUID,
    ingredients: Sequence[Mapping],
    product_variant_id: Optional[UUID] = None,
    description: str = '',
    instructions: str = '',
    prep_time_minutes: Optional[int] = None,
    is_active: bool = True,
) -> Recipe:
    """
    Create a recipe with its ingredients and derive its total cost.

    Args:
        owner_id: Owner the recipe belongs to
        name: Recipe name
        product_id: Product the recipe makes
        ingredients: ``inventory_item`` id, ``quantity``, ``unit``, ``notes``
        product_variant_id: Optional variant of the product
        description: Short description
        instructions: Preparation steps
        prep_time_minutes: Preparation time
        is_active: Whether the recipe is in use

    Returns:
        Created Recipe instance

    Raises:
        MissingProductError: If the product or variant does not exist
        MissingInventoryItemError: If an inventory item does not exist
        DuplicateIngredientError: If an inventory item is listed twice
        InvalidRecipeError: If the variant is not one of the product
    """
    with atomic_action():
        product, variant = _resolve_product(
            owner_id=owner_id, product_id=product_id, product_variant_id=product_variant_id
        )
        rows = _resolve_ingredients(owner_id=owner_id, ingredients=ingredients)

        recipe = Recipe.objects.create(
            owner_id=owner_id,
            name=name.strip(),
            description=description,
            instructions=instructions,
            prep_time_minutes=prep_time_minutes,
            product=product,
            product_variant=variant,
            is_active=is_active,
        )
        _reconcile_ingredients(recipe, rows)
        _store_total_cost(recipe)

    logger.info("Created recipe %s for owner %s (cost %s)", recipe.pk, owner_id, recipe.total_cost)
    return recipe


def update_recipe(*, owner_id: str, recipe_id: UUID, data: Dict[str, Any]) -> Recipe:
    """
    Replace a recipe and its ingredients, then re-derive its total cost.

    Ingredients carrying an ``id`` keep their identity, the ones left out
    are deleted.

    Raises:
        RecipeNotFoundError: If the recipe doesn't exist
        RecordNotFoundError: If an ingredient id does not belong to the recipe
        (and everything create_recipe raises)
    """
    with atomic_action():
        try:
            recipe = (
                Recipe.objects
                .select_for_update()
                .get(pk=recipe_id, owner_id=owner_id)
            )
        except Recipe.DoesNotExist:
            raise RecipeNotFoundError(f"Recipe {recipe_id} not found")

        product, variant = _resolve_product(
            owner_id=owner_id,
            product_id=data.get('product_id', recipe.product_id),
            product_variant_id=data.get('product_variant_id'),
        )
        rows = _resolve_ingredients(owner_id=owner_id, ingredients=data.get('ingredients', []))

        for field in RECIPE_FIELDS:
            if field in data:
                setattr(recipe, field, data[field])
        recipe.name = recipe.name.strip()
        recipe.product = product
        recipe.product_variant = variant
        recipe.save()

        outcome = _reconcile_ingredients(recipe, rows)
        _store_total_cost(recipe)

    logger.info("Updated recipe %s for owner %s: %s", recipe.pk, owner_id, outcome.counts)
    return recipe


@transaction.atomic
def delete_recipe(*, owner_id: str, recipe_id: UUID) -> None:
    """
    Delete a recipe and its ingredients.

    Raises:
        RecipeNotFoundError: If the recipe doesn't exist
    """
    deleted, _ = Recipe.objects.filter(pk=recipe_id, owner_id=owner_id).delete()
    if not deleted:
        raise RecipeNotFoundError(f"Recipe {recipe_id} not found")


@transaction.atomic
def update_recipe_cost(*, recipe_id: UUID) -> Recipe:
    """
    Recalculate and store a recipe's total cost.

    Uses select_for_update() so concurrent edits of the recipe wait.

    Raises:
        RecipeNotFoundError: If the recipe doesn't exist
    """
    try:
        recipe = (
            Recipe.objects
            .select_for_update()
            .get(pk=recipe_id)
        )
    except Recipe.DoesNotExist:
        raise RecipeNotFoundError(f"Recipe {recipe_id} not found")

    return _store_total_cost(recipe)


def refresh_recipe_costs_for_item(*, item_id: UUID) -> int:
    """
    Re-derive the cost of every recipe using an inventory item.

    Called after the item's price or pack size changed.

    Returns:
        Number of recipes updated
    """
    recipe_ids = list(
        Recipe.objects
        .filter(ingredients__inventory_item_id=item_id)
        .values_list('pk', flat=True)
        .distinct()
    )
    for recipe_id in recipe_ids:
        update_recipe_cost(recipe_id=recipe_id)
    return len(recipe_ids)
