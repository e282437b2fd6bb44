import pytest
from apps.stores.services import create_store


@pytest.fixture
def store(db, owner_id):
    """Onboard the owner with a store."""
    return create_store(
        owner_id=owner_id,
        name='Bean There',
        address='Main Street 1',
        email='hello@beanthere.example',
        website='https://beanthere.example',
    )
