"""
Unit tests for ListAdminsUseCase, GetAdminUseCase and LogoutUseCase
"""

from unittest.mock import AsyncMock

import pytest

from admin_iam.app.use_cases.admins import GetAdminUseCase, ListAdminsUseCase
from admin_iam.app.use_cases.auth import LogoutUseCase
from admin_iam.domain.entities import Admin, AdminRole


def make_admins(count: int, start: int = 1):
    return [
        Admin(
            id=i,
            name=f"Admin {i}",
            email=f"admin{i}@x.com",
            password_hash="secret-hash",
            refresh_token_hash="secret-refresh-hash",
            role=AdminRole.moderator,
        )
        for i in range(start, start + count)
    ]


@pytest.mark.asyncio
async def test_list_second_page(mock_uow):
    mock_uow.admins.list_page = AsyncMock(return_value=make_admins(10, start=11))
    mock_uow.admins.count = AsyncMock(return_value=25)

    result = await ListAdminsUseCase(mock_uow).execute(page=2, limit=10)

    assert result.is_ok()
    data = result.value
    assert len(data.admins) == 10
    assert data.pagination.total_count == 25
    assert data.pagination.total_pages == 3
    assert data.pagination.current_page == 2
    assert data.pagination.page_size == 10
    mock_uow.admins.list_page.assert_called_once_with(10, 10)


@pytest.mark.asyncio
async def test_list_defaults_and_empty_store(mock_uow):
    result = await ListAdminsUseCase(mock_uow).execute()

    assert result.value.admins == []
    assert result.value.pagination.total_pages == 0
    assert result.value.pagination.current_page == 1
    mock_uow.admins.list_page.assert_called_once_with(0, 10)


@pytest.mark.asyncio
async def test_list_never_exposes_hashes(mock_uow):
    mock_uow.admins.list_page = AsyncMock(return_value=make_admins(1))
    mock_uow.admins.count = AsyncMock(return_value=1)

    result = await ListAdminsUseCase(mock_uow).execute()

    dumped = result.value.model_dump()
    assert "password_hash" not in dumped["admins"][0]
    assert "refresh_token_hash" not in dumped["admins"][0]


@pytest.mark.asyncio
async def test_get_admin(mock_uow):
    mock_uow.admins.get_by_id = AsyncMock(return_value=make_admins(1, start=7)[0])

    result = await GetAdminUseCase(mock_uow).execute(7)

    assert result.is_ok()
    assert result.value.admin.id == 7
    assert result.value.admin.email == "admin7@x.com"


@pytest.mark.asyncio
async def test_get_admin_not_found(mock_uow):
    result = await GetAdminUseCase(mock_uow).execute(99)

    assert result.is_err()
    assert result.error.code == "ADMIN_NOT_FOUND"


@pytest.mark.asyncio
async def test_logout_clears_session(mock_uow):
    result = await LogoutUseCase(mock_uow).execute(5)

    assert result.is_ok()
    mock_uow.admins.set_refresh_token_hash.assert_called_once_with(5, None)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_logout_without_admin_is_ok(mock_uow):
    result = await LogoutUseCase(mock_uow).execute(None)

    assert result.is_ok()
    mock_uow.admins.set_refresh_token_hash.assert_not_called()
