"""
Custom exceptions for store services.

Exception Hierarchy:
    StoreServiceError (base)
    ├── StoreNotFoundError
    └── StoreExistsError
"""

from apps.core.exceptions import RecordNotFoundError, ServiceError, UniqueConstraintError


class StoreServiceError(ServiceError):
    """Base exception for store service errors."""
    pass


class StoreNotFoundError(StoreServiceError, RecordNotFoundError):
    """Raised when the owner has not onboarded a store yet."""
    default_message = 'No store has been set up yet'


class StoreExistsError(StoreServiceError, UniqueConstraintError):
    """Raised when onboarding an owner that already has a store."""
    default_message = 'A store already exists for this account'
