"""Services for store onboarding and profile."""

from .exceptions import (
    StoreServiceError,
    StoreNotFoundError,
    StoreExistsError,
)
from .store_management import (
    get_store,
    create_store,
    update_store,
)

__all__ = [
    # Exceptions
    'StoreServiceError',
    'StoreNotFoundError',
    'StoreExistsError',
    # Store Management
    'get_store',
    'create_store',
    'update_store',
]
