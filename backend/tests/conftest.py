"""
Pytest configuration and fixtures.

Every test gets its own SQLite database file with the schema created from
model metadata; the FastAPI ``get_db`` dependency is pointed at it.
"""
import uuid
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from main import app
from app.core.config import settings
from app.db.base import Base
from app.db.database import get_db
from app.models import Plant, Profile

TRUSTED_ORIGIN = "http://wiki.test"
PUBLIC_ORIGIN = "http://elsewhere.test"


@pytest_asyncio.fixture
async def isolated_engine(tmp_path):
    """Fresh SQLite database file per test with all tables created."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
        future=True,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(isolated_engine):
    return async_sessionmaker(isolated_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def async_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture(autouse=True)
def trusted_origins(monkeypatch):
    monkeypatch.setattr(settings, "TRUSTED_ORIGINS", [TRUSTED_ORIGIN])


@pytest_asyncio.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """Async test HTTP client for the FastAPI app, bound to the test database."""
    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest_asyncio.fixture
async def plant(async_session: AsyncSession) -> Plant:
    plant = Plant(
        id=42,
        name="Mint",
        scientific_name="Mentha",
        color="green",
        edibilities=["leaves"],
        sun_preferences=["partial_shade"],
    )
    async_session.add(plant)
    await async_session.commit()
    await async_session.refresh(plant)
    return plant


@pytest_asyncio.fixture
async def owner(async_session: AsyncSession) -> Profile:
    profile = Profile(
        id=uuid.uuid4(),
        username="gardener",
        display_name="Garden Er",
    )
    async_session.add(profile)
    await async_session.commit()
    await async_session.refresh(profile)
    return profile


@pytest.fixture
def trusted_headers() -> dict:
    return {"Origin": TRUSTED_ORIGIN}


@pytest.fixture
def public_headers() -> dict:
    return {"Origin": PUBLIC_ORIGIN}
