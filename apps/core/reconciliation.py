"""
Identity-preserving reconciliation of a persisted child collection.

Nested collections (a product's variant options, an option's values, a
product's variants, a recipe's ingredients) are submitted as a full
replacement of the persisted set. Records carrying an ``id`` are updates
of the persisted record with that id, records without one are new, and
persisted records whose id is not submitted any more are deleted.

The same routine serves every nesting level. The caller supplies the
``create``, ``update`` and ``delete`` callables for the entity at hand:

    result = reconcile_collection(
        existing=product.variants.all(),
        incoming=variants,
        create=lambda data: Variant.objects.create(product=product, **data),
        update=update_variant,
        delete=lambda objs: Variant.objects.filter(pk__in=[o.pk for o in objs]).delete(),
        label='variant',
    )

Deletions are applied before updates and creates so a SKU or name freed
by a removed record can be reused in the same edit. Surviving records
whose ``unique_fields`` change are parked first (their unique columns
moved to a per-row placeholder), so two records can trade values, e.g.
swap SKUs, without tripping a constraint half-way. Callers must run the
whole reconciliation inside one ``transaction.atomic`` block.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from .exceptions import InvalidValueError, RecordNotFoundError


@dataclass
class ReconcilePlan:
    """What has to happen to bring the persisted set in line with the submitted one."""

    updates: List[Tuple[Any, Mapping]] = field(default_factory=list)
    creates: List[Mapping] = field(default_factory=list)
    deletes: List[Any] = field(default_factory=list)


@dataclass
class ReconcileResult:
    """Outcome of one reconciliation, merged across sibling collections."""

    created: List[Any] = field(default_factory=list)
    updated: List[Any] = field(default_factory=list)
    changed: List[Any] = field(default_factory=list)
    deleted: List[Any] = field(default_factory=list)

    def merge(self, other: 'ReconcileResult') -> 'ReconcileResult':
        self.created.extend(other.created)
        self.updated.extend(other.updated)
        self.changed.extend(other.changed)
        self.deleted.extend(other.deleted)
        return self

    @property
    def counts(self) -> dict:
        return {
            'created': len(self.created),
            'updated': len(self.updated),
            'changed': len(self.changed),
            'deleted': len(self.deleted),
        }


def plan_reconciliation(
    existing: Iterable[Any],
    incoming: Sequence[Mapping],
    *,
    identity: str = 'id',
    label: str = 'record',
) -> ReconcilePlan:
    """
    Partition submitted records into updates and creates, and find orphans.

    Raises:
        RecordNotFoundError: A submitted id is not part of ``existing``
            (unknown, or owned by another parent).
        InvalidValueError: The same id is submitted twice.
    """
    existing_by_id = {str(getattr(obj, identity)): obj for obj in existing}
    plan = ReconcilePlan()
    seen = set()

    for data in incoming:
        record_id = data.get(identity)
        if record_id in (None, ''):
            plan.creates.append(data)
            continue

        key = str(record_id)
        if key in seen:
            raise InvalidValueError(f"{label.capitalize()} {record_id} was submitted twice", field=identity)
        obj = existing_by_id.get(key)
        if obj is None:
            raise RecordNotFoundError(f"{label.capitalize()} {record_id} not found", field=identity)

        seen.add(key)
        plan.updates.append((obj, data))

    plan.deletes = [obj for key, obj in existing_by_id.items() if key not in seen]
    return plan


PLACEHOLDER_PREFIX = '~parked~'

Moving = List[Tuple[Any, List[str]]]


def moving_unique_fields(updates: Sequence[Tuple[Any, Mapping]], unique_fields: Sequence[str]) -> Moving:
    """Surviving records paired with the unique fields the submission changes."""
    moving = []
    for obj, data in updates:
        names = [
            name for name in unique_fields
            if name in data and getattr(obj, name) != data[name]
        ]
        if names:
            moving.append((obj, names))
    return moving


def park_unique_values(moving: Moving) -> None:
    """
    Move the changing unique columns of each record to a value no other
    row can hold, leaving the in-memory instances untouched.

    Only usable for text columns; the placeholder is derived from the pk.
    """
    for obj, names in moving:
        placeholder = f'{PLACEHOLDER_PREFIX}{obj.pk}'
        type(obj)._default_manager.filter(pk=obj.pk).update(
            **{name: placeholder for name in names}
        )


def reconcile_collection(
    *,
    existing: Iterable[Any],
    incoming: Sequence[Mapping],
    create: Callable[[Mapping], Any],
    update: Callable[[Any, Mapping], bool],
    delete: Callable[[List[Any]], Any],
    identity: str = 'id',
    label: str = 'record',
    unique_fields: Sequence[str] = (),
    park: Optional[Callable[[Moving], Any]] = None,
) -> ReconcileResult:
    """
    Apply the create / update / delete set for one collection.

    Args:
        existing: Persisted records of the collection
        incoming: Submitted records, plain mappings with an optional identity
        create: Persists one new record and returns it
        update: Overwrites one persisted record with submitted values,
            returns True when anything was written
        delete: Removes the given orphaned records
        identity: Name of the identity attribute/key
        label: Entity name used in error messages
        unique_fields: Fields under a unique constraint within the collection
        park: Frees the unique values of records about to change them,
            called with ``(record, changing field names)`` pairs before any
            update. Defaults to :func:`park_unique_values`.

    Returns:
        ReconcileResult with created/updated/changed records and deleted ids
    """
    plan = plan_reconciliation(existing, incoming, identity=identity, label=label)
    result = ReconcileResult()

    if plan.deletes:
        delete(plan.deletes)
        result.deleted = [getattr(obj, identity) for obj in plan.deletes]

    moving = moving_unique_fields(plan.updates, unique_fields)
    if moving:
        (park or park_unique_values)(moving)

    for obj, data in plan.updates:
        if update(obj, data):
            result.changed.append(obj)
        result.updated.append(obj)

    for data in plan.creates:
        result.created.append(create(data))

    return result


def assign_fields(obj: Any, data: Mapping, fields: Iterable[str]) -> List[str]:
    """
    Copy ``fields`` from ``data`` onto ``obj`` (full replace).

    Returns the names of the fields whose value actually changed.
    """
    changed = []
    for name in fields:
        value = data.get(name)
        if getattr(obj, name) != value:
            setattr(obj, name, value)
            changed.append(name)
    return changed


def save_changed(obj: Any, changed: List[str]) -> bool:
    """Persist only the changed columns; no write at all when nothing changed."""
    if not changed:
        return False
    obj.save(update_fields=[*changed, 'updated_at'])
    return True
