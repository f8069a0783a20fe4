import os

# Must be set before taskhub.rate_limit is imported.
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taskhub.auth.models import User  # noqa: F401 - register with Base
from taskhub.auth.service import register_user
from taskhub.config import Settings, get_settings
from taskhub.database import get_db
from taskhub.main import create_app
from taskhub.shared.database.postgres import Base
from taskhub.shared.models.user import CurrentUser
from taskhub.tasks.models import Task  # noqa: F401 - register with Base
from tests.helpers import PASSWORD, as_actor


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-jwt-secret",
        jwt_refresh_secret="test-refresh-secret",
        jwt_expire_seconds=900,
        jwt_refresh_expire_seconds=604_800,
        admin_emails="admin@example.com",
    )


@pytest_asyncio.fixture
async def session_factory(
    settings: Settings,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = create_async_engine(settings.database_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def async_client(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    app = create_app()

    async def _get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_settings] = lambda: settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ── Users (service level) ─────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def alice(db_session: AsyncSession) -> CurrentUser:
    user = await register_user(db_session, email="alice@example.com", password=PASSWORD)
    return as_actor(user)


@pytest_asyncio.fixture
async def bob(db_session: AsyncSession) -> CurrentUser:
    user = await register_user(db_session, email="bob@example.com", password=PASSWORD)
    return as_actor(user)


@pytest_asyncio.fixture
async def admin(db_session: AsyncSession) -> CurrentUser:
    user = await register_user(db_session, email="admin@example.com", password=PASSWORD)
    return as_actor(user)

