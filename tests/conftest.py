import os

os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("MERCADO_PAGO_ACCESS_TOKEN", "")

from datetime import date  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from components.account.models import Account  # noqa: E402
from components.core.database import DatabaseManager  # noqa: E402
from components.core.init_db import get_db  # noqa: E402
from components.core.security import hash_password  # noqa: E402
from restapi.endpoints.helpers import get_gateway, get_today  # noqa: E402
from restapi.router import create_app  # noqa: E402

TODAY = date(2024, 5, 15)  # a Wednesday


@pytest.fixture
async def db_manager():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    manager = DatabaseManager(engine=engine)
    await manager.create_tables()
    yield manager
    await engine.dispose()


@pytest.fixture
async def session(db_manager):
    async with db_manager.get_db() as db:
        yield db


@pytest.fixture
def app(db_manager):
    application = create_app()

    async def override_get_db():
        async with db_manager.get_db() as db:
            yield db

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_today] = lambda: TODAY
    return application


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


async def _make_account(session, email, plan="free", role="user", full_name="Ana Souza"):
    account = Account(
        email=email,
        full_name=full_name,
        password=hash_password("secret123"),
        plan=plan,
        role=role,
    )
    session.add(account)
    await session.commit()
    await session.refresh(account)
    await session.commit()
    return account


@pytest.fixture
def make_account(session):
    async def factory(email="ana@studio.com", plan="free", role="user", full_name="Ana Souza"):
        return await _make_account(session, email, plan, role, full_name)
    return factory


@pytest.fixture
def login(client):
    async def factory(email="ana@studio.com", password="secret123"):
        response = await client.post("/auth/login", data={"username": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}
    return factory


@pytest.fixture
def use_gateway(app):
    def install(gateway):
        app.dependency_overrides[get_gateway] = lambda: gateway
    return install
