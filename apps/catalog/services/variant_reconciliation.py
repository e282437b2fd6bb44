"""
Variant reconciliation service.

Brings a product's persisted options, option values and variants in line
with a submitted full replacement of them, keeping the identity of every
record that survives the edit. See ``apps.core.reconciliation`` for the
per-collection diff; this module applies it at the three nesting levels:

    options ──► values of every surviving option
    variants

A created option is created together with its values, a deleted option
takes its values with it (ON DELETE CASCADE). The whole reconcile runs in
one transaction: any failure leaves the product exactly as it was.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

from apps.core.reconciliation import (
    ReconcileResult,
    assign_fields,
    reconcile_collection,
    save_changed,
)
from apps.core.transactions import atomic_action, row_scope

from ..models import Product, Variant, VariantOption, VariantOptionValue
from .exceptions import (
    DuplicateOptionNameError,
    DuplicateOptionValueError,
    DuplicateSkuError,
    InvalidVariantError,
)
from .variant_generation import generate_combinations, split_title

logger = logging.getLogger(__name__)

OPTION_FIELDS = ('name', 'position')
VALUE_FIELDS = ('value', 'position')
VARIANT_FIELDS = ('title', 'sku', 'price', 'is_default', 'is_available', 'position')


@dataclass
class ProductReconciliation:
    """Per-level outcome of one product reconcile."""

    options: ReconcileResult = field(default_factory=ReconcileResult)
    values: ReconcileResult = field(default_factory=ReconcileResult)
    variants: ReconcileResult = field(default_factory=ReconcileResult)

    @property
    def counts(self) -> Dict[str, dict]:
        return {
            'options': self.options.counts,
            'values': self.values.counts,
            'variants': self.variants.counts,
        }


def _normalized_options(variant_options: Sequence[Mapping]) -> List[Dict[str, Any]]:
    """
    Trimmed names and values; entries without an explicit position keep
    their submit order. Every entry carries the ``path`` of its row.
    """
    options = []
    for index, option in enumerate(variant_options):
        path = f'variant_options.{index}'
        values = [
            {
                **entry,
                'value': entry['value'].strip(),
                'position': entry.get('position', value_index),
                'path': f'{path}.values.{value_index}',
            }
            for value_index, entry in enumerate(option.get('values', []))
        ]
        options.append({
            **option,
            'name': option['name'].strip(),
            'position': option.get('position', index),
            'values': values,
            'path': path,
        })
    return options


def _ordered_options(variant_options: Sequence[Mapping]) -> List[Mapping]:
    return sorted(variant_options, key=lambda option: option.get('position', 0))


def _variant_rows(variants: Sequence[Mapping]) -> List[Dict[str, Any]]:
    """Full-replace rows: absent flags fall back to their defaults."""
    rows = []
    for index, data in enumerate(variants):
        rows.append({
            'id': data.get('id'),
            'title': data['title'],
            'sku': data['sku'],
            'price': data['price'],
            'is_default': data.get('is_default', False),
            'is_available': data.get('is_available', True),
            'position': index,
            'path': f'variants.{index}',
        })
    return rows


def validate_variant_payload(
    *,
    product: Product,
    variant_options: Sequence[Mapping],
    variants: Sequence[Mapping],
) -> None:
    """
    Reject semantically invalid option/variant sets before anything is written.

    Raises:
        DuplicateOptionNameError: Two options share a name (case-insensitive)
        DuplicateOptionValueError: An option repeats a value (case-insensitive)
        InvalidVariantError: A variant title cannot be produced from the
            options, or a title is submitted twice
        DuplicateSkuError: A SKU is repeated, or already used by another
            product or variant of the same owner
    """
    seen_names = set()
    for index, option in enumerate(variant_options):
        name = option['name'].strip()
        if name.casefold() in seen_names:
            raise DuplicateOptionNameError(
                f"{name} already exists.",
                field=f"variant_options.{index}.name"
            )
        seen_names.add(name.casefold())

        seen_values = set()
        for value_index, entry in enumerate(option.get('values', [])):
            value = entry['value'].strip()
            if value.casefold() in seen_values:
                raise DuplicateOptionValueError(
                    f"{value} already exists.",
                    field=f"variant_options.{index}.values.{value_index}.value"
                )
            seen_values.add(value.casefold())

    producible = {c.title for c in generate_combinations(_ordered_options(variant_options))}
    seen_titles = set()
    seen_skus = {}
    for index, variant in enumerate(variants):
        title = variant['title']
        if title not in producible:
            raise InvalidVariantError(
                f"'{title}' does not match the product options",
                field=f"variants.{index}.title"
            )
        if title in seen_titles:
            raise InvalidVariantError(
                f"'{title}' was submitted twice",
                field=f"variants.{index}.title"
            )
        seen_titles.add(title)

        sku = variant['sku']
        if sku in seen_skus:
            raise DuplicateSkuError(
                f"SKU {sku} is used by more than one variant",
                field=f"variants.{index}.sku"
            )
        seen_skus[sku] = index

    if not seen_skus:
        return

    taken = set(
        Variant.objects
        .filter(owner_id=product.owner_id, sku__in=seen_skus)
        .exclude(product=product)
        .values_list('sku', flat=True)
    )
    taken.update(
        Product.objects
        .filter(owner_id=product.owner_id, sku__in=seen_skus)
        .exclude(pk=product.pk)
        .values_list('sku', flat=True)
    )
    if taken:
        sku = min(taken, key=seen_skus.get)
        raise DuplicateSkuError(
            f"A product or variant with SKU {sku} already exists",
            field=f"variants.{seen_skus[sku]}.sku"
        )


def _reconcile_options(product, variant_options, outcome):
    def create_value(option, data):
        with row_scope(data['path']):
            return VariantOptionValue.objects.create(
                option=option,
                value=data['value'],
                position=data['position'],
            )

    def update_value(value, data):
        with row_scope(data['path']):
            return save_changed(value, assign_fields(value, data, VALUE_FIELDS))

    def delete_values(values):
        VariantOptionValue.objects.filter(pk__in=[v.pk for v in values]).delete()

    def create_option(data):
        with row_scope(data['path']):
            option = VariantOption.objects.create(
                product=product,
                name=data['name'],
                position=data['position'],
            )
        for entry in data['values']:
            outcome.values.created.append(create_value(option, entry))
        return option

    def update_option(option, data):
        with row_scope(data['path']):
            changed = save_changed(option, assign_fields(option, data, OPTION_FIELDS))
        outcome.values.merge(reconcile_collection(
            existing=option.values.all(),
            incoming=data['values'],
            create=lambda entry: create_value(option, entry),
            update=update_value,
            delete=delete_values,
            label='option value',
            unique_fields=('value',),
        ))
        return changed

    def delete_options(options):
        option_ids = [o.pk for o in options]
        outcome.values.deleted.extend(
            VariantOptionValue.objects.filter(option_id__in=option_ids).values_list('pk', flat=True)
        )
        VariantOption.objects.filter(pk__in=option_ids).delete()

    outcome.options = reconcile_collection(
        existing=product.variant_options.prefetch_related('values'),
        incoming=variant_options,
        create=create_option,
        update=update_option,
        delete=delete_options,
        label='variant option',
        unique_fields=('name',),
    )


def _reconcile_variants(product, variants, outcome):
    def create_variant(data):
        with row_scope(data['path']):
            return Variant.objects.create(
                product=product,
                owner_id=product.owner_id,
                **{name: data[name] for name in VARIANT_FIELDS}
            )

    def update_variant(variant, data):
        with row_scope(data['path']):
            return save_changed(variant, assign_fields(variant, data, VARIANT_FIELDS))

    def delete_variants(orphans):
        Variant.objects.filter(pk__in=[v.pk for v in orphans]).delete()

    outcome.variants = reconcile_collection(
        existing=product.variants.all(),
        incoming=_variant_rows(variants),
        create=create_variant,
        update=update_variant,
        delete=delete_variants,
        label='variant',
        unique_fields=('sku',),
    )


def link_variant_option_values(product: Product) -> None:
    """Point every variant at the option values named by its title."""
    options = list(product.variant_options.prefetch_related('values'))
    lookup = [{value.value: value for value in option.values.all()} for option in options]

    for variant in product.variants.all():
        parts = split_title(variant.title)
        if len(parts) != len(lookup):
            variant.option_values.clear()
            continue
        values = [by_value.get(part) for by_value, part in zip(lookup, parts)]
        variant.option_values.set([value for value in values if value is not None])


def reconcile_product_variants(
    *,
    product: Product,
    variant_options: Sequence[Mapping],
    variants: Sequence[Mapping],
) -> ProductReconciliation:
    """
    Make the product's options, values and variants match the submitted ones.

    Records with an ``id`` update the persisted record with that id, records
    without one are created, and persisted records left out are deleted.
    Updates overwrite every field with the submitted value.

    A product without variants ends up with no options and no variants,
    whatever was submitted.

    Args:
        product: Persisted product owning the collections
        variant_options: Submitted options, each with nested ``values``
        variants: Submitted variants

    Returns:
        ProductReconciliation with per-level created/updated/deleted records

    Raises:
        DuplicateOptionNameError, DuplicateOptionValueError,
        DuplicateSkuError, InvalidVariantError: Invalid submission
        RecordNotFoundError: A submitted id does not belong to this product
        UniqueConstraintError: The database rejected a duplicate mid-way
    """
    if not product.has_variants:
        variant_options, variants = [], []

    variant_options = _normalized_options(variant_options)
    validate_variant_payload(product=product, variant_options=variant_options, variants=variants)

    outcome = ProductReconciliation()
    with atomic_action():
        Product.objects.select_for_update().filter(pk=product.pk).first()
        _reconcile_options(product, variant_options, outcome)
        _reconcile_variants(product, variants, outcome)
        link_variant_option_values(product)

    logger.info("Reconciled variants of product %s: %s", product.pk, outcome.counts)
    return outcome
