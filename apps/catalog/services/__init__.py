"""Services for catalog business logic."""

from .exceptions import (
    CatalogServiceError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    CategoryInUseError,
    ProductNotFoundError,
    ProductInUseError,
    MissingCategoryError,
    DuplicateSkuError,
    DuplicateOptionNameError,
    DuplicateOptionValueError,
    InvalidVariantError,
)
from .category_management import (
    list_categories,
    get_category,
    create_category,
    update_category,
    delete_category,
)
from .product_management import (
    product_queryset,
    list_products,
    get_product,
    create_product,
    update_product,
    delete_product,
)
from .variant_generation import (
    TITLE_SEPARATOR,
    VariantCombination,
    generate_combinations,
    build_variants,
    split_title,
)
from .variant_reconciliation import (
    ProductReconciliation,
    validate_variant_payload,
    reconcile_product_variants,
    link_variant_option_values,
)

__all__ = [
    # Exceptions
    'CatalogServiceError',
    'CategoryNotFoundError',
    'DuplicateCategoryError',
    'CategoryInUseError',
    'ProductNotFoundError',
    'ProductInUseError',
    'MissingCategoryError',
    'DuplicateSkuError',
    'DuplicateOptionNameError',
    'DuplicateOptionValueError',
    'InvalidVariantError',
    # Category Management
    'list_categories',
    'get_category',
    'create_category',
    'update_category',
    'delete_category',
    # Product Management
    'product_queryset',
    'list_products',
    'get_product',
    'create_product',
    'update_product',
    'delete_product',
    # Variant Generation
    'TITLE_SEPARATOR',
    'VariantCombination',
    'generate_combinations',
    'build_variants',
    'split_title',
    # Variant Reconciliation
    'ProductReconciliation',
    'validate_variant_payload',
    'reconcile_product_variants',
    'link_variant_option_values',
]
