"""Shared test fixtures — async SQLite in-memory DB + test client."""

from collections.abc import AsyncGenerator

import pytest
from cryptography.fernet import Fernet
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

# Import all models so metadata is populated
import fooder.models  # noqa: F401
from fooder.core.config import Settings, get_settings
from fooder.core.database import get_session
from fooder.core.security import PIICodec, create_jwt, fingerprint, get_pii_codec
from fooder.main import app
from fooder.models.user import UserRole
from fooder.stores.users import UserStore

ADMIN_EMAIL = "admin@example.com"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite://",
        tenant_id="DEFAULT",
        encryption_keys=Fernet.generate_key().decode(),
        admin_email_hashes=fingerprint(ADMIN_EMAIL),
        jwt_secret_key="test-jwt-secret",
        provisioning_secret="test-provisioning-secret",
    )


@pytest.fixture
def codec(settings: Settings) -> PIICodec:
    return PIICodec(settings.encryption_keys.split(","))


@pytest.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as sess:
        yield sess
        await sess.rollback()


@pytest.fixture
async def client(session, settings, codec) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX async test client with DB session, settings and codec overrides."""

    async def _override_session():
        yield session

    app.dependency_overrides[get_session] = _override_session
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_pii_codec] = lambda: codec

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session, settings, codec):
    """Store a user directly, the way provisioning would."""

    async def _make(
        user_id: str,
        role: UserRole = UserRole.CUSTOMER,
        email: str | None = None,
        display_name: str = "Test User",
    ):
        email = email or f"{user_id}@example.com"
        return await UserStore(session).upsert(
            tenant_id=settings.tenant_id,
            user_id=user_id,
            email_hash=fingerprint(email),
            encrypted_email=codec.seal(email),
            encrypted_display_name=codec.seal(display_name),
            role=role,
        )

    return _make


@pytest.fixture
def auth_headers(settings):
    def _headers(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_jwt(user_id, settings)}"}

    return _headers


@pytest.fixture
async def admin_headers(make_user, auth_headers) -> dict[str, str]:
    await make_user("admin-1", UserRole.ADMIN, email=ADMIN_EMAIL, display_name="Admin")
    return auth_headers("admin-1")


@pytest.fixture
async def customer_headers(make_user, auth_headers) -> dict[str, str]:
    await make_user("customer-1", UserRole.CUSTOMER, display_name="Casey Customer")
    return auth_headers("customer-1")
