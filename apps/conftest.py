import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken


def bearer_client(owner_id):
    """Return an API client carrying an access token for ``owner_id``."""
    token = AccessToken()
    token['sub'] = owner_id
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def owner_id():
    """Identity provider id of the shop owner under test."""
    return 'user_2shopowner'


@pytest.fixture
def other_owner_id():
    """Identity provider id of an unrelated shop owner."""
    return 'user_2othershop'


@pytest.fixture
def owner_client(owner_id):
    """Return API client authenticated as the shop owner."""
    return bearer_client(owner_id)


@pytest.fixture
def other_client(other_owner_id):
    """Return API client authenticated as another owner."""
    return bearer_client(other_owner_id)
