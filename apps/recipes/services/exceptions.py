"""Domain-specific exceptions for recipe services."""

from apps.core.exceptions import (
    ServiceError,
    RecordNotFoundError,
    UniqueConstraintError,
    RelatedRecordMissingError,
    InvalidValueError,
)


class RecipeServiceError(ServiceError):
    """Base exception for recipe services."""
    pass


class RecipeNotFoundError(RecipeServiceError, RecordNotFoundError):
    """Raised when a recipe does not exist."""
    pass


class MissingProductError(RecipeServiceError, RelatedRecordMissingError):
    """Raised when a recipe points at a product or variant that does not exist."""
    pass


class MissingInventoryItemError(RecipeServiceError, RelatedRecordMissingError):
    """Raised when an ingredient points at an inventory item that does not exist."""
    pass


class DuplicateIngredientError(RecipeServiceError, UniqueConstraintError):
    """Raised when an inventory item is listed twice in one recipe."""
    pass


class InvalidRecipeError(RecipeServiceError, InvalidValueError):
    """Raised when a recipe breaks a business rule."""
    pass
