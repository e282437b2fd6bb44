"""Domain-specific exceptions for catalog services."""

from apps.core.exceptions import (
    ServiceError,
    RecordNotFoundError,
    UniqueConstraintError,
    RelatedRecordMissingError,
    ReferentialIntegrityError,
    InvalidValueError,
)


class CatalogServiceError(ServiceError):
    """Base exception for catalog services."""
    pass


class CategoryNotFoundError(CatalogServiceError, RecordNotFoundError):
    """Raised when a product category does not exist."""
    pass


class DuplicateCategoryError(CatalogServiceError, UniqueConstraintError):
    """Raised when a category name is already used by the owner."""
    pass


class CategoryInUseError(CatalogServiceError, ReferentialIntegrityError):
    """Raised when deleting a category that still has products."""
    pass


class ProductNotFoundError(CatalogServiceError, RecordNotFoundError):
    """Raised when a product does not exist."""
    pass


class ProductInUseError(CatalogServiceError, ReferentialIntegrityError):
    """Raised when deleting a product that recipes still reference."""
    pass


class MissingCategoryError(CatalogServiceError, RelatedRecordMissingError):
    """Raised when a product points at a category that does not exist."""
    pass


class DuplicateSkuError(CatalogServiceError, UniqueConstraintError):
    """Raised when a product or variant SKU is already taken."""
    pass


class DuplicateOptionNameError(CatalogServiceError, UniqueConstraintError):
    """Raised when two options of a product share a name."""
    pass


class DuplicateOptionValueError(CatalogServiceError, UniqueConstraintError):
    """Raised when two values of an option are the same."""
    pass


class InvalidVariantError(CatalogServiceError, InvalidValueError):
    """Raised when variants do not fit the product or its options."""
    pass
