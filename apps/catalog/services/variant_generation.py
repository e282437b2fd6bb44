"""
Variant combination generator.

Turns a product's options into the full set of sellable variants: one
variant per way of picking exactly one value from every option, in the
order the options and their values are given.

    >>> [c.title for c in generate_combinations([
    ...     {'name': 'Size', 'values': [{'value': '8oz'}, {'value': '12oz'}]},
    ...     {'name': 'Temp', 'values': [{'value': 'Hot'}, {'value': 'Iced'}]},
    ... ])]
    ['8oz / Hot', '8oz / Iced', '12oz / Hot', '12oz / Iced']

Pure functions, no database access.
"""

from dataclasses import dataclass
from decimal import Decimal
from itertools import product as cartesian_product
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from apps.core.utils import generate_sku

TITLE_SEPARATOR = ' / '


@dataclass(frozen=True)
class VariantCombination:
    """One pick of a value per option."""

    title: str
    options: Tuple[Tuple[str, str], ...]

    @property
    def values(self) -> Tuple[str, ...]:
        return tuple(value for _, value in self.options)


def _field(obj: Any, name: str, default=None):
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _clean(text) -> str:
    return (text or '').strip()


def usable_options(options: Iterable[Any]) -> List[Tuple[str, List[str]]]:
    """
    Keep the options that can take part in a combination.

    Blank values are dropped, and so is every option left without a name
    or without any value. Repeated values within an option are kept once.
    """
    usable = []
    for option in options:
        name = _clean(_field(option, 'name'))
        values = []
        for entry in _field(option, 'values', None) or []:
            value = _clean(entry if isinstance(entry, str) else _field(entry, 'value'))
            if value and value not in values:
                values.append(value)
        if name and values:
            usable.append((name, values))
    return usable


def generate_combinations(options: Iterable[Any]) -> List[VariantCombination]:
    """
    Cartesian product of the usable options.

    Args:
        options: Ordered options, mappings or objects with ``name`` and
            ``values`` (each value a string or a mapping/object with ``value``)

    Returns:
        One VariantCombination per combination, empty when no option is usable
    """
    usable = usable_options(options)
    if not usable:
        return []

    names = [name for name, _ in usable]
    combinations = []
    for picked in cartesian_product(*(values for _, values in usable)):
        combinations.append(VariantCombination(
            title=TITLE_SEPARATOR.join(picked),
            options=tuple(zip(names, picked)),
        ))
    return combinations


def split_title(title: str) -> List[str]:
    """Inverse of the title join: the chosen value of every option."""
    return title.split(TITLE_SEPARATOR)


def build_variants(
    *,
    product_name: str,
    options: Iterable[Any],
    existing_variants: Sequence[Any] = (),
    base_price: Optional[Decimal] = None,
) -> List[Dict[str, Any]]:
    """
    Regenerate a product's variant table after its options changed.

    A combination whose title matches a prior variant exactly keeps that
    variant's id, price, SKU and flags. Other combinations get an SKU
    derived from the product name and title, ``is_default=False`` and
    ``is_available=True``. Prior variants whose title can no longer be
    produced are dropped.

    When there is no prior variant at all, the first combination becomes
    the default variant and is priced at ``base_price``.

    Args:
        product_name: Name of the product, source of generated SKUs
        options: Ordered options (see generate_combinations)
        existing_variants: Variants currently shown/persisted
        base_price: Price given to the default variant of a fresh table

    Returns:
        List of variant dicts: id, title, sku, price, is_default, is_available
    """
    previous = {}
    for variant in existing_variants:
        title = _field(variant, 'title')
        if title and title not in previous:
            previous[title] = variant

    fresh = not previous
    variants = []
    for index, combination in enumerate(generate_combinations(options)):
        found = previous.get(combination.title)
        if found is not None:
            variants.append({
                'id': _field(found, 'id'),
                'title': combination.title,
                'sku': _field(found, 'sku') or generate_sku(f"{product_name} {combination.title}"),
                'price': _field(found, 'price'),
                'is_default': bool(_field(found, 'is_default', False)),
                'is_available': bool(_field(found, 'is_available', True)),
            })
            continue

        is_default = fresh and index == 0
        variants.append({
            'id': None,
            'title': combination.title,
            'sku': generate_sku(f"{product_name} {combination.title}"),
            'price': base_price if is_default else None,
            'is_default': is_default,
            'is_available': True,
        })
    return variants
