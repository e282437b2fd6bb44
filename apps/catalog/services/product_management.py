"""Product CRUD operations service."""

import logging
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple
from uuid import UUID

from django.db import transaction
from django.db.models import ProtectedError, QuerySet

from apps.core.transactions import atomic_action

from ..models import Product, ProductCategory, Variant
from .exceptions import (
    DuplicateSkuError,
    InvalidVariantError,
    MissingCategoryError,
    ProductInUseError,
    ProductNotFoundError,
)
from .variant_reconciliation import ProductReconciliation, reconcile_product_variants

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = ('name', 'description', 'base_price', 'is_active', 'has_variants')


def product_queryset() -> QuerySet:
    """Products with everything the detail representation reads."""
    return (
        Product.objects
        .select_related('category')
        .prefetch_related('variant_options__values', 'variants__option_values')
    )


def _resolve_category(*, owner_id: str, category_id: Optional[UUID]) -> Optional[ProductCategory]:
    if category_id is None:
        return None
    try:
        return ProductCategory.objects.get(pk=category_id, owner_id=owner_id)
    except ProductCategory.DoesNotExist:
        raise MissingCategoryError(f"Category {category_id} does not exist", field='category')


def _resolve_sku(
    *,
    owner_id: str,
    has_variants: bool,
    sku: Optional[str],
    variants: Sequence[Mapping],
    exclude_id=None,
) -> Optional[str]:
    """
    A product with variants has no SKU of its own; any other product must
    carry one that no product or variant of the owner uses yet.
    """
    if has_variants:
        if not variants:
            raise InvalidVariantError("A product with variants needs at least one variant", field='variants')
        return None

    sku = (sku or '').strip()
    if not sku:
        raise InvalidVariantError("A product without variants needs a SKU", field='sku')

    products = Product.objects.filter(owner_id=owner_id, sku=sku)
    if exclude_id is not None:
        products = products.exclude(pk=exclude_id)
    if products.exists() or Variant.objects.filter(owner_id=owner_id, sku=sku).exists():
        raise DuplicateSkuError(f"A product or variant with SKU {sku} already exists", field='sku')
    return sku


def list_products(
    *,
    owner_id: str,
    search: str = '',
    category_id: Optional[UUID] = None,
    is_active: Optional[bool] = None,
) -> QuerySet:
    """Products of the owner, newest first."""
    queryset = product_queryset().filter(owner_id=owner_id)
    if search:
        queryset = queryset.filter(name__icontains=search)
    if category_id:
        queryset = queryset.filter(category_id=category_id)
    if is_active is not None:
        queryset = queryset.filter(is_active=is_active)
    return queryset.order_by('-created_at')


def get_product(*, owner_id: str, product_id: UUID) -> Product:
    """
    Get a product of the owner with its options and variants.

    Raises:
        ProductNotFoundError: Unknown id or product of another owner
    """
    try:
        return product_queryset().get(pk=product_id, owner_id=owner_id)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product {product_id} not found")


def create_product(
    *,
    owner_id: str,
    name: str,
    base_price: Decimal,
    description: str = '',
    category_id: Optional[UUID] = None,
    sku: Optional[str] = None,
    is_active: bool = True,
    has_variants: bool = False,
    variant_options: Sequence[Mapping] = (),
    variants: Sequence[Mapping] = (),
) -> Tuple[Product, ProductReconciliation]:
    """
    Create a product together with its options, values and variants.

    Args:
        owner_id: Owner the product belongs to
        name: Product name
        base_price: Price of the product (or of its default variant)
        description: Optional description
        category_id: Optional product category of the owner
        sku: Product SKU, required when the product has no variants
        is_active: Whether the product is on sale
        has_variants: Whether SKUs and prices live on variants
        variant_options: Options with nested values (no ids)
        variants: Variants (no ids)

    Returns:
        Tuple of (Product, ProductReconciliation)

    Raises:
        MissingCategoryError: If the category does not exist
        DuplicateSkuError: If a SKU is already used by the owner
        InvalidVariantError: If variants do not fit the options
    """
    with atomic_action():
        category = _resolve_category(owner_id=owner_id, category_id=category_id)
        sku = _resolve_sku(owner_id=owner_id, has_variants=has_variants, sku=sku, variants=variants)

        product = Product.objects.create(
            owner_id=owner_id,
            name=name.strip(),
            description=description,
            category=category,
            base_price=base_price,
            sku=sku,
            is_active=is_active,
            has_variants=has_variants,
        )
        outcome = reconcile_product_variants(
            product=product,
            variant_options=variant_options,
            variants=variants,
        )

    logger.info("Created product %s for owner %s", product.pk, owner_id)
    return product, outcome


def update_product(
    *,
    owner_id: str,
    product_id: UUID,
    data: Dict[str, Any],
) -> Tuple[Product, ProductReconciliation]:
    """
    Replace a product and its nested collections with the submitted state.

    Options, values and variants carrying an ``id`` keep their identity;
    the ones left out are deleted. Switching ``has_variants`` off removes
    every option and variant.

    Raises:
        ProductNotFoundError: If the product doesn't exist
        MissingCategoryError: If the category does not exist
        DuplicateSkuError: If a SKU is already used by the owner
        RecordNotFoundError: If a nested id does not belong to the product
    """
    with atomic_action():
        try:
            product = (
                Product.objects
                .select_for_update()
                .get(pk=product_id, owner_id=owner_id)
            )
        except Product.DoesNotExist:
            raise ProductNotFoundError(f"Product {product_id} not found")

        variant_options = data.get('variant_options', [])
        variants = data.get('variants', [])
        has_variants = data.get('has_variants', product.has_variants)

        product.category = _resolve_category(owner_id=owner_id, category_id=data.get('category_id'))
        product.sku = _resolve_sku(
            owner_id=owner_id,
            has_variants=has_variants,
            sku=data.get('sku'),
            variants=variants,
            exclude_id=product.pk,
        )
        for field in PRODUCT_FIELDS:
            if field in data:
                setattr(product, field, data[field])
        product.name = product.name.strip()
        product.save()

        outcome = reconcile_product_variants(
            product=product,
            variant_options=variant_options,
            variants=variants,
        )

    logger.info("Updated product %s for owner %s", product.pk, owner_id)
    return product, outcome


def delete_product(*, owner_id: str, product_id: UUID) -> None:
    """
    Delete a product with its options, values and variants.

    Raises:
        ProductNotFoundError: If the product doesn't exist
        ProductInUseError: If recipes still reference the product
    """
    product = get_product(owner_id=owner_id, product_id=product_id)
    try:
        with transaction.atomic():
            product.delete()
    except ProtectedError:
        raise ProductInUseError(f"Product '{product.name}' is still used by one or more recipes")

    logger.info("Deleted product %s for owner %s", product_id, owner_id)
