import os
import uuid

# Settings are read at import time, so the environment is prepared first.
TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ["JWT_SECRET"] = "test-secret"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.pop("ADMIN_PASSWORD", None)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from backoffice.core import db as db_module
from backoffice.core.security import TokenService, TokenSettings, hash_password
from backoffice.main import app
from backoffice.models.user import Role, User

db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL

TEST_SECRET = "test-secret"
LOGIN_URL = "/api/v1/auth/login"


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TokenSettings(secret=TEST_SECRET))


@pytest_asyncio.fixture
async def db():
    """Fresh database without an HTTP client, for tests that call code directly."""
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(token_service):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    The lifespan does not run under ASGITransport, so the token service is
    attached here the same way startup does it.
    """
    await _init_test_db()
    app.state.token_service = token_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def create_user():
    """
    Factory fixture creating users directly via ORM.
    Defaults to an active ADMIN.
    """

    async def _create_user(
        password: str = "AdminPass!23",
        role: Role = Role.ADMIN,
        email: str | None = None,
        is_active: bool = True,
    ) -> tuple[User, str]:
        user = await User.create(
            first_name="Test",
            last_name=role.value.title(),
            email=email or f"{role.value.lower()}_{uuid.uuid4().hex[:6]}@example.com",
            password_hash=hash_password(password),
            role=role,
            is_active=is_active,
        )
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def admin_headers(client, create_user):
    """Authorization headers of a freshly created admin, obtained via the login endpoint."""
    admin, password = await create_user()
    resp = await client.post(LOGIN_URL, json={"email": admin.email, "password": password})
    assert resp.status_code == 200, resp.text
    token = resp.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}
