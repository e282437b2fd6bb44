"""Services for inventory business logic."""

from .exceptions import (
    InventoryServiceError,
    InventoryCategoryNotFoundError,
    DuplicateInventoryCategoryError,
    InventoryCategoryInUseError,
    InventoryItemNotFoundError,
    DuplicateInventorySkuError,
    MissingInventoryCategoryError,
    InventoryItemInUseError,
)
from .stock_status import (
    derive_stock_status,
)
from .category_management import (
    DEFAULT_CATEGORIES,
    list_inventory_categories,
    get_inventory_category,
    create_inventory_category,
    update_inventory_category,
    delete_inventory_category,
    seed_default_categories,
)
from .item_management import (
    list_inventory_items,
    count_items_by_status,
    get_inventory_item,
    create_inventory_item,
    update_inventory_item,
    delete_inventory_item,
)

__all__ = [
    # Exceptions
    'InventoryServiceError',
    'InventoryCategoryNotFoundError',
    'DuplicateInventoryCategoryError',
    'InventoryCategoryInUseError',
    'InventoryItemNotFoundError',
    'DuplicateInventorySkuError',
    'MissingInventoryCategoryError',
    'InventoryItemInUseError',
    # Stock Status
    'derive_stock_status',
    # Category Management
    'DEFAULT_CATEGORIES',
    'list_inventory_categories',
    'get_inventory_category',
    'create_inventory_category',
    'update_inventory_category',
    'delete_inventory_category',
    'seed_default_categories',
    # Item Management
    'list_inventory_items',
    'count_items_by_status',
    'get_inventory_item',
    'create_inventory_item',
    'update_inventory_item',
    'delete_inventory_item',
]
