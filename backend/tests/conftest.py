"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app import app
from errors import UpstreamError
from models import Base, get_session
from services import geo, github
from services.cache import FreshnessCache, get_cache

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeClock:
    """Manually advanced monotonic clock for cache tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="function")
async def test_db():
    """Create a fresh test database for each test."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stats_cache(clock):
    return FreshnessCache(ttl_seconds=300, clock=clock)


@pytest.fixture(scope="function")
async def client(test_db, stats_cache, monkeypatch):
    """Test client with test database, fake-clock cache and no outbound calls.

    Geolocation resolves to UNKNOWN and every GitHub fetch fails unless a
    test patches in its own stub.
    """

    async def override_get_session():
        yield test_db

    async def no_geo(ip, **kwargs):
        return geo.UNKNOWN

    async def github_down(*args, **kwargs):
        raise UpstreamError()

    monkeypatch.setattr(geo, "lookup", no_geo)
    for name in ("fetch_profile_summary", "fetch_recent_repos", "fetch_recent_activity"):
        monkeypatch.setattr(github, name, github_down)

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_cache] = lambda: stats_cache

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
