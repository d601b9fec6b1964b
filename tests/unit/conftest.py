import pytest
from unittest.mock import AsyncMock, MagicMock

from admin_iam.app.services.credential_verifier import CredentialVerifier
from admin_iam.app.services.token_service import TokenService


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.admins = MagicMock()
    uow.admins.get_by_id = AsyncMock(return_value=None)
    uow.admins.get_by_email = AsyncMock(return_value=None)
    uow.admins.get_by_phone = AsyncMock(return_value=None)
    uow.admins.list_page = AsyncMock(return_value=[])
    uow.admins.count = AsyncMock(return_value=0)
    uow.admins.create = AsyncMock()
    uow.admins.update = AsyncMock()
    uow.admins.set_refresh_token_hash = AsyncMock()
    uow.admins.compare_and_set_refresh_token_hash = AsyncMock(return_value=True)
    return uow


@pytest.fixture
def token_service():
    return TokenService(secret="unit-access-secret", refresh_secret="unit-refresh-secret")


@pytest.fixture
def verifier():
    # Lowest bcrypt cost keeps unit tests fast
    return CredentialVerifier(rounds=4)
