"""Product category CRUD operations service."""

import logging
from typing import Any, Dict
from uuid import UUID

from django.db import transaction
from django.db.models import Count, QuerySet

from apps.core.transactions import atomic_action

from ..models import ProductCategory
from .exceptions import CategoryInUseError, CategoryNotFoundError, DuplicateCategoryError

logger = logging.getLogger(__name__)


def _ensure_unique_name(*, owner_id: str, name: str, exclude_id=None) -> None:
    queryset = ProductCategory.objects.filter(owner_id=owner_id, name__iexact=name)
    if exclude_id is not None:
        queryset = queryset.exclude(pk=exclude_id)
    if queryset.exists():
        raise DuplicateCategoryError(
            f"A product category named '{name}' already exists",
            field='name'
        )


def list_categories(*, owner_id: str) -> QuerySet:
    """Categories of the owner with their product counts, by name."""
    return (
        ProductCategory.objects
        .filter(owner_id=owner_id)
        .annotate(product_count=Count('products'))
        .order_by('name')
    )


def get_category(*, owner_id: str, category_id: UUID) -> ProductCategory:
    """
    Get a category of the owner.

    Raises:
        CategoryNotFoundError: Unknown id or category of another owner
    """
    try:
        return ProductCategory.objects.get(pk=category_id, owner_id=owner_id)
    except ProductCategory.DoesNotExist:
        raise CategoryNotFoundError(f"Category {category_id} not found")


def create_category(*, owner_id: str, name: str, description: str = '') -> ProductCategory:
    """
    Create a product category.

    Args:
        owner_id: Owner the category belongs to
        name: Category name, unique per owner (case-insensitive)
        description: Optional description

    Returns:
        Created ProductCategory instance

    Raises:
        DuplicateCategoryError: If the owner already has a category with this name
    """
    name = name.strip()
    _ensure_unique_name(owner_id=owner_id, name=name)

    with atomic_action():
        category = ProductCategory.objects.create(
            owner_id=owner_id,
            name=name,
            description=description,
        )

    logger.info("Created product category %s for owner %s", category.pk, owner_id)
    return category


def update_category(*, owner_id: str, category_id: UUID, data: Dict[str, Any]) -> ProductCategory:
    """
    Update a product category.

    Raises:
        CategoryNotFoundError: If the category doesn't exist
        DuplicateCategoryError: If the new name is already taken
    """
    with atomic_action():
        try:
            category = (
                ProductCategory.objects
                .select_for_update()
                .get(pk=category_id, owner_id=owner_id)
            )
        except ProductCategory.DoesNotExist:
            raise CategoryNotFoundError(f"Category {category_id} not found")

        if 'name' in data:
            data = {**data, 'name': data['name'].strip()}
            _ensure_unique_name(owner_id=owner_id, name=data['name'], exclude_id=category.pk)

        for field in ('name', 'description'):
            if field in data:
                setattr(category, field, data[field])
        category.save()

    return category


@transaction.atomic
def delete_category(*, owner_id: str, category_id: UUID) -> None:
    """
    Delete a product category.

    Raises:
        CategoryNotFoundError: If the category doesn't exist
        CategoryInUseError: If products still belong to the category
    """
    category = get_category(owner_id=owner_id, category_id=category_id)

    product_count = category.products.count()
    if product_count:
        raise CategoryInUseError(
            f"Category '{category.name}' still has {product_count} product(s)"
        )

    category.delete()
    logger.info("Deleted product category %s for owner %s", category_id, owner_id)
