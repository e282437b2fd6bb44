"""Domain-specific exceptions for inventory services."""

from apps.core.exceptions import (
    ServiceError,
    RecordNotFoundError,
    UniqueConstraintError,
    RelatedRecordMissingError,
    ReferentialIntegrityError,
)


class InventoryServiceError(ServiceError):
    """Base exception for inventory services."""
    pass


class InventoryCategoryNotFoundError(InventoryServiceError, RecordNotFoundError):
    """Raised when an inventory category does not exist."""
    pass


class DuplicateInventoryCategoryError(InventoryServiceError, UniqueConstraintError):
    """Raised when an inventory category name is already used by the owner."""
    pass


class InventoryCategoryInUseError(InventoryServiceError, ReferentialIntegrityError):
    """Raised when deleting a category that still holds items."""
    pass


class InventoryItemNotFoundError(InventoryServiceError, RecordNotFoundError):
    """Raised when an inventory item does not exist."""
    pass


class DuplicateInventorySkuError(InventoryServiceError, UniqueConstraintError):
    """Raised when an inventory SKU is already used by the owner."""
    pass


class MissingInventoryCategoryError(InventoryServiceError, RelatedRecordMissingError):
    """Raised when an item points at a category that does not exist."""
    pass


class InventoryItemInUseError(InventoryServiceError, ReferentialIntegrityError):
    """Raised when deleting an item that recipes still use."""
    pass
