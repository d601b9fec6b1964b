from unittest.mock import AsyncMock

import pytest

from admin_iam.app.use_cases.admins import SeedAdminUseCase
from admin_iam.domain.entities import Admin, AdminRole


@pytest.mark.asyncio
async def test_seeds_super_admin_into_empty_store(mock_uow, verifier):
    def assign_id(admin: Admin) -> Admin:
        admin.id = 1
        return admin

    mock_uow.admins.create = AsyncMock(side_effect=assign_id)

    result = await SeedAdminUseCase(mock_uow, verifier).execute(
        name="Root", email="root@x.com", password="Abcdef1!", phone=""
    )

    assert result.value == 1
    created = mock_uow.admins.create.call_args.args[0]
    assert created.role == AdminRole.super_admin
    assert created.phone is None
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_skips_when_admins_exist(mock_uow, verifier):
    mock_uow.admins.count = AsyncMock(return_value=3)

    result = await SeedAdminUseCase(mock_uow, verifier).execute(
        name="Root", email="root@x.com", password="Abcdef1!"
    )

    assert result.is_ok()
    assert result.value is None
    mock_uow.admins.create.assert_not_called()


@pytest.mark.asyncio
async def test_missing_credentials(mock_uow, verifier):
    result = await SeedAdminUseCase(mock_uow, verifier).execute(
        name="Root", email=None, password="Abcdef1!"
    )

    assert result.error.code == "MISSING_SEED_CREDENTIALS"
    mock_uow.admins.count.assert_not_called()
