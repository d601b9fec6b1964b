import pytest
from httpx import AsyncClient
from sqlmodel import select

from admin_iam.domain.entities import Admin
from tests.utils.auth import bearer


@pytest.mark.asyncio
async def test_logout_clears_session(client: AsyncClient, super_admin, login, test_data, db_session):
    """Logout

    Given I am logged in
    When I log out
    Then my stored session is cleared
    And my refresh token can no longer be used
    And the session cookies are expired
    """
    account = test_data.get("super_admin")
    tokens = await login(account["email"], account["password"])

    response = await client.post("/auth/logout", headers=bearer(tokens["access_token"]))

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    set_cookie = " ".join(response.headers.get_list("set-cookie"))
    assert "accessToken=" in set_cookie
    assert "Max-Age=0" in set_cookie

    admin_id = super_admin.id
    db_session.expire_all()
    stored = (await db_session.exec(select(Admin).where(Admin.id == admin_id))).one()
    assert stored.refresh_token_hash is None

    refresh = await client.post("/auth/refresh", json={
        "refresh_token": tokens["refresh_token"],
    })
    assert refresh.status_code == 401
    assert refresh.json()["error"]["code"] == "INVALID_SESSION"


@pytest.mark.asyncio
async def test_logout_with_refresh_cookie_only(client: AsyncClient, super_admin, login, test_data, db_session):
    account = test_data.get("super_admin")
    tokens = await login(account["email"], account["password"])
    client.cookies.clear()
    client.cookies.set("refreshToken", tokens["refresh_token"])

    response = await client.post("/auth/logout")

    assert response.status_code == 200
    admin_id = super_admin.id
    db_session.expire_all()
    stored = (await db_session.exec(select(Admin).where(Admin.id == admin_id))).one()
    assert stored.refresh_token_hash is None


@pytest.mark.asyncio
async def test_logout_without_session_succeeds(client: AsyncClient):
    client.cookies.clear()

    response = await client.post("/auth/logout")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_logout_with_invalid_token_succeeds(client: AsyncClient):
    client.cookies.clear()

    response = await client.post("/auth/logout", headers=bearer("garbage"))

    assert response.status_code == 200
