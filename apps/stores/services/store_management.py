"""Store profile and onboarding service."""

import logging
from typing import Any, Dict

from django.db import transaction

from apps.core.transactions import atomic_action
from apps.inventory.services import seed_default_categories

from ..models import Store
from .exceptions import StoreExistsError, StoreNotFoundError

logger = logging.getLogger(__name__)

STORE_FIELDS = ('name', 'address', 'email', 'phone', 'logo_url', 'website')


def get_store(*, owner_id: str) -> Store:
    """
    Get the store of an owner.

    Raises:
        StoreNotFoundError: If the owner has not onboarded yet
    """
    try:
        return Store.objects.get(owner_id=owner_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError()


def create_store(
    *,
    owner_id: str,
    name: str,
    address: str = '',
    email: str = '',
    phone: str = '',
    logo_url: str = '',
    website: str = '',
) -> Store:
    """
    Onboard an owner: create the store and seed the default inventory categories.

    Args:
        owner_id: Identity of the new shop owner
        name: Store name
        address: Postal address
        email: Contact email
        phone: Contact phone
        logo_url: URL of the store logo
        website: Store website

    Returns:
        Created Store instance

    Raises:
        StoreExistsError: If the owner already has a store
    """
    if Store.objects.filter(owner_id=owner_id).exists():
        raise StoreExistsError()

    with atomic_action():
        store = Store.objects.create(
            owner_id=owner_id,
            name=name.strip(),
            address=address,
            email=email,
            phone=phone,
            logo_url=logo_url,
            website=website,
        )
        seeded = seed_default_categories(owner_id=owner_id)

    logger.info("Onboarded store %s for owner %s (%d categories seeded)", store.pk, owner_id, len(seeded))
    return store


@transaction.atomic
def update_store(*, owner_id: str, data: Dict[str, Any]) -> Store:
    """
    Replace the store profile.

    Fields left out are cleared, except the name which is required.

    Raises:
        StoreNotFoundError: If the owner has not onboarded yet
    """
    try:
        store = Store.objects.select_for_update().get(owner_id=owner_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError()

    for field in STORE_FIELDS:
        setattr(store, field, data.get(field, ''))
    store.name = data['name'].strip()
    store.save()

    logger.info("Updated store %s for owner %s", store.pk, owner_id)
    return store
