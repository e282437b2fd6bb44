from contextlib import contextmanager
from typing import Iterator

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError, RestrictedError

from .exceptions import UniqueConstraintError, translate_error


@contextmanager
def atomic_action(using=None) -> Iterator:
    """
    Run a multi-step write as one all-or-nothing transaction.

    Database constraint failures leave the block already rolled back and
    are re-raised as the matching ServiceError, so callers only ever see
    the service taxonomy. Nesting is fine: an inner block becomes a
    savepoint and its error aborts the outer block too.

    Usage:
        with atomic_action():
            ... DB work ...
    """
    try:
        with transaction.atomic(using=using):
            yield
    except (IntegrityError, ProtectedError, RestrictedError) as exc:
        raise translate_error(exc) from exc


@contextmanager
def row_scope(path: str, using=None) -> Iterator:
    """
    Write one submitted row inside its own savepoint.

    A uniqueness failure raised by the database inside the block is tagged
    with the row's path, so ``sku`` becomes ``variants.2.sku`` and the
    client can show it on the right row.
    """
    try:
        with atomic_action(using=using):
            yield
    except UniqueConstraintError as exc:
        exc.field = f'{path}.{exc.field}' if exc.field else path
        raise
