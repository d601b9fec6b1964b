from typing import Optional

import bcrypt
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from admin_iam.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from admin_iam.api.app import create_app
from admin_iam.depends import get_unit_of_work
from admin_iam.domain.entities import Admin, AdminRole
from tests.fixtures.json_loader import TestDataLoader

TEST_DB_URI = "sqlite+aiosqlite:///./test_admin_iam.db"


class TestConfig(ApplicationConfig):
    __test__ = False

    DB_URI = TEST_DB_URI
    JWT_SECRET = "integration-access-secret"
    JWT_REFRESH_SECRET = "integration-refresh-secret"
    BCRYPT_ROUNDS = 4
    SEED_ADMIN = False


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(TEST_DB_URI)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    app = create_app(TestConfig)

    # One session per request, as in production
    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def create_admin(db_session):
    """Insert an account directly, bypassing the API"""

    async def _create(
        email: str,
        password: str,
        role: AdminRole = AdminRole.moderator,
        name: str = "Test Admin",
        phone: Optional[str] = None,
    ) -> Admin:
        admin = Admin(
            name=name,
            email=email,
            phone=phone,
            password_hash=bcrypt.hashpw(
                password.encode("utf-8"), bcrypt.gensalt(TestConfig.BCRYPT_ROUNDS)
            ).decode("utf-8"),
            role=role,
        )
        db_session.add(admin)
        await db_session.commit()
        await db_session.refresh(admin)
        return admin

    return _create


@pytest_asyncio.fixture
async def login(client):
    """Log in and return the token pair body"""

    async def _login(email: str, password: str) -> dict:
        response = await client.post(
            "/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _login


@pytest_asyncio.fixture
async def super_admin(create_admin, test_data):
    account = test_data.get("super_admin")
    return await create_admin(
        account["email"], account["password"], AdminRole.super_admin, account["name"]
    )


@pytest_asyncio.fixture
async def admin(create_admin, test_data):
    account = test_data.get("admin")
    return await create_admin(
        account["email"], account["password"], AdminRole.admin, account["name"]
    )


@pytest_asyncio.fixture
async def moderator(create_admin, test_data):
    account = test_data.get("moderator")
    return await create_admin(
        account["email"], account["password"], AdminRole.moderator, account["name"]
    )
