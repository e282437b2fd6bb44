"""Inventory item CRUD operations service."""

import logging
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Count, ProtectedError, Q, QuerySet

from apps.core.transactions import atomic_action
from apps.recipes.services import refresh_recipe_costs_for_item

from ..models import InventoryCategory, InventoryItem, StockStatus
from .exceptions import (
    DuplicateInventorySkuError,
    InventoryItemInUseError,
    InventoryItemNotFoundError,
    MissingInventoryCategoryError,
)

logger = logging.getLogger(__name__)

# Changing these re-prices every recipe using the item.
COST_FIELDS = ('unit_price', 'amount_per_unit')

ITEM_FIELDS = [
    'sku', 'name', 'description', 'order_unit', 'unit', 'quantity',
    'reorder_level', 'unit_price', 'amount_per_unit', 'supplier',
]


def _resolve_category(*, owner_id: str, category_id: UUID) -> InventoryCategory:
    try:
        return InventoryCategory.objects.get(pk=category_id, owner_id=owner_id)
    except InventoryCategory.DoesNotExist:
        raise MissingInventoryCategoryError(
            f"Inventory category {category_id} does not exist",
            field='category'
        )


def _ensure_unique_sku(*, owner_id: str, sku: str, exclude_id=None) -> None:
    queryset = InventoryItem.objects.filter(owner_id=owner_id, sku=sku)
    if exclude_id is not None:
        queryset = queryset.exclude(pk=exclude_id)
    if queryset.exists():
        raise DuplicateInventorySkuError(
            f"An inventory item with SKU {sku} already exists",
            field='sku'
        )


def list_inventory_items(
    *,
    owner_id: str,
    status: Optional[str] = None,
    search: str = '',
    category_id: Optional[UUID] = None,
) -> QuerySet:
    """
    Inventory items of the owner.

    Args:
        owner_id: Owner of the items
        status: Only items with this stock status
        search: Case-insensitive match on name or SKU
        category_id: Only items of this category
    """
    queryset = InventoryItem.objects.filter(owner_id=owner_id).select_related('category')
    if status:
        queryset = queryset.filter(status=status)
    if search:
        queryset = queryset.filter(Q(name__icontains=search) | Q(sku__icontains=search))
    if category_id:
        queryset = queryset.filter(category_id=category_id)
    return queryset.order_by('name')


def count_items_by_status(*, owner_id: str) -> Dict[str, int]:
    """Number of items of the owner per stock status, every status included."""
    counts = {choice: 0 for choice in StockStatus.values}
    rows = (
        InventoryItem.objects
        .filter(owner_id=owner_id)
        .values('status')
        .annotate(total=Count('id'))
        .order_by()
    )
    for row in rows:
        counts[row['status']] = row['total']
    return counts


def get_inventory_item(*, owner_id: str, item_id: UUID) -> InventoryItem:
    try:
        return InventoryItem.objects.select_related('category').get(pk=item_id, owner_id=owner_id)
    except InventoryItem.DoesNotExist:
        raise InventoryItemNotFoundError(f"Inventory item {item_id} not found")


def create_inventory_item(
    *,
    owner_id: str,
    sku: str,
    name: str,
    category_id: UUID,
    order_unit: str,
    unit: str,
    unit_price: Decimal,
    amount_per_unit: Decimal,
    quantity: int = 0,
    reorder_level: Optional[int] = None,
    description: str = '',
    supplier: str = '',
) -> InventoryItem:
    """
    Create an inventory item; its stock status is derived on save.

    Raises:
        MissingInventoryCategoryError: If the category does not exist
        DuplicateInventorySkuError: If the owner already uses the SKU
    """
    sku = sku.strip()
    with atomic_action():
        category = _resolve_category(owner_id=owner_id, category_id=category_id)
        _ensure_unique_sku(owner_id=owner_id, sku=sku)

        item = InventoryItem.objects.create(
            owner_id=owner_id,
            sku=sku,
            name=name.strip(),
            category=category,
            description=description,
            order_unit=order_unit,
            unit=unit,
            quantity=quantity,
            reorder_level=reorder_level,
            unit_price=unit_price,
            amount_per_unit=amount_per_unit,
            supplier=supplier,
        )

    logger.info("Created inventory item %s (%s) for owner %s", item.pk, item.status, owner_id)
    return item


def update_inventory_item(*, owner_id: str, item_id: UUID, data: Dict[str, Any]) -> InventoryItem:
    """
    Update an inventory item and re-derive its stock status.

    Raises:
        InventoryItemNotFoundError: If the item doesn't exist
        MissingInventoryCategoryError: If the category does not exist
        DuplicateInventorySkuError: If the new SKU is already taken
    """
    with atomic_action():
        try:
            item = (
                InventoryItem.objects
                .select_for_update()
                .get(pk=item_id, owner_id=owner_id)
            )
        except InventoryItem.DoesNotExist:
            raise InventoryItemNotFoundError(f"Inventory item {item_id} not found")

        if 'category_id' in data:
            item.category = _resolve_category(owner_id=owner_id, category_id=data['category_id'])
        if 'sku' in data:
            data = {**data, 'sku': data['sku'].strip()}
            _ensure_unique_sku(owner_id=owner_id, sku=data['sku'], exclude_id=item.pk)

        repriced = any(field in data and data[field] != getattr(item, field) for field in COST_FIELDS)
        for field in ITEM_FIELDS:
            if field in data:
                setattr(item, field, data[field])
        item.save()

        if repriced:
            refresh_recipe_costs_for_item(item_id=item.pk)

    logger.info("Updated inventory item %s (%s) for owner %s", item.pk, item.status, owner_id)
    return item


def delete_inventory_item(*, owner_id: str, item_id: UUID) -> None:
    """
    Delete an inventory item.

    Raises:
        InventoryItemNotFoundError: If the item doesn't exist
        InventoryItemInUseError: If recipes still use the item
    """
    item = get_inventory_item(owner_id=owner_id, item_id=item_id)
    try:
        with transaction.atomic():
            item.delete()
    except ProtectedError:
        raise InventoryItemInUseError(f"Inventory item '{item.name}' is used by one or more recipes")

    logger.info("Deleted inventory item %s for owner %s", item_id, owner_id)
