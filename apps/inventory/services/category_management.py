"""Inventory category CRUD operations service."""

import logging
from typing import Any, Dict, List
from uuid import UUID

from django.db import transaction
from django.db.models import Count, QuerySet

from apps.core.transactions import atomic_action

from ..models import InventoryCategory
from .exceptions import (
    DuplicateInventoryCategoryError,
    InventoryCategoryInUseError,
    InventoryCategoryNotFoundError,
)

logger = logging.getLogger(__name__)

# Categories every shop starts with.
DEFAULT_CATEGORIES = [
    ('Uncategorized', ''),
    ('Coffee Beans', 'All types of coffee beans'),
    ('Ice & Cooling', 'Ingredients for cooling'),
    ('Powdered Products', 'Powdered ingredients for flavoring'),
    ('Milk & Cream', 'Fresh milk, creamers, and dairy'),
    ('Syrups & Sweeteners', 'Sugar, honey, flavored syrups'),
    ('Pastries & Bread', 'Baked goods and pastries'),
    ('Cups & Lids', 'Disposable cups, mugs, and lids'),
    ('Cleaning Supplies', 'Detergents and sanitizers'),
    ('Cutlery', 'Drinking straws, spoon, fork, knife'),
]


def _ensure_unique_name(*, owner_id: str, name: str, exclude_id=None) -> None:
    queryset = InventoryCategory.objects.filter(owner_id=owner_id, name__iexact=name)
    if exclude_id is not None:
        queryset = queryset.exclude(pk=exclude_id)
    if queryset.exists():
        raise DuplicateInventoryCategoryError(
            f"An inventory category named '{name}' already exists",
            field='name'
        )


def list_inventory_categories(*, owner_id: str) -> QuerySet:
    """Categories of the owner with their item counts, by name."""
    return (
        InventoryCategory.objects
        .filter(owner_id=owner_id)
        .annotate(item_count=Count('items'))
        .order_by('name')
    )


def get_inventory_category(*, owner_id: str, category_id: UUID) -> InventoryCategory:
    try:
        return InventoryCategory.objects.get(pk=category_id, owner_id=owner_id)
    except InventoryCategory.DoesNotExist:
        raise InventoryCategoryNotFoundError(f"Inventory category {category_id} not found")


def create_inventory_category(*, owner_id: str, name: str, description: str = '') -> InventoryCategory:
    """
    Create an inventory category.

    Raises:
        DuplicateInventoryCategoryError: If the owner already has a category with this name
    """
    name = name.strip()
    _ensure_unique_name(owner_id=owner_id, name=name)

    with atomic_action():
        category = InventoryCategory.objects.create(
            owner_id=owner_id,
            name=name,
            description=description,
        )
    return category


def update_inventory_category(*, owner_id: str, category_id: UUID, data: Dict[str, Any]) -> InventoryCategory:
    """
    Update an inventory category.

    Raises:
        InventoryCategoryNotFoundError: If the category doesn't exist
        DuplicateInventoryCategoryError: If the new name is already taken
    """
    with atomic_action():
        try:
            category = (
                InventoryCategory.objects
                .select_for_update()
                .get(pk=category_id, owner_id=owner_id)
            )
        except InventoryCategory.DoesNotExist:
            raise InventoryCategoryNotFoundError(f"Inventory category {category_id} not found")

        if 'name' in data:
            data = {**data, 'name': data['name'].strip()}
            _ensure_unique_name(owner_id=owner_id, name=data['name'], exclude_id=category.pk)

        for field in ('name', 'description'):
            if field in data:
                setattr(category, field, data[field])
        category.save()

    return category


@transaction.atomic
def delete_inventory_category(*, owner_id: str, category_id: UUID) -> None:
    """
    Delete an inventory category.

    Raises:
        InventoryCategoryNotFoundError: If the category doesn't exist
        InventoryCategoryInUseError: If items still belong to the category
    """
    category = get_inventory_category(owner_id=owner_id, category_id=category_id)

    item_count = category.items.count()
    if item_count:
        raise InventoryCategoryInUseError(
            f"Inventory category '{category.name}' still has {item_count} item(s)"
        )

    category.delete()
    logger.info("Deleted inventory category %s for owner %s", category_id, owner_id)


def seed_default_categories(*, owner_id: str) -> List[InventoryCategory]:
    """
    Give the owner the default inventory categories.

    Categories the owner already has (by name, case-insensitive) are left
    alone, so seeding twice creates nothing the second time.

    Returns:
        The categories created by this call
    """
    existing = {
        name.lower()
        for name in InventoryCategory.objects.filter(owner_id=owner_id).values_list('name', flat=True)
    }
    missing = [
        InventoryCategory(owner_id=owner_id, name=name, description=description)
        for name, description in DEFAULT_CATEGORIES
        if name.lower() not in existing
    ]

    with atomic_action():
        created = InventoryCategory.objects.bulk_create(missing)

    logger.info("Seeded %d inventory categories for owner %s", len(created), owner_id)
    return created
