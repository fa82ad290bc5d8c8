"""
Test fixtures for the shipping backend tests.

Provides:
- In-memory SQLite database per test (aiosqlite + StaticPool)
- Async HTTP client with the session dependency overridden
- Catalog fixtures mirroring the Lima checkout scenarios
"""
# IMPORTANT: Set environment variables BEFORE any other imports
import os

# DB settings required by Settings validation (tests use SQLite in-memory, these are not actually used)
os.environ.setdefault("DB_USER", "test")
os.environ.setdefault("DB_PASSWORD", "test")
os.environ.setdefault("DB_NAME", "test")
# Development mode for tests (disables ALLOWED_ORIGINS requirement)
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from shipping_backend.app.core.base import Base
import shipping_backend.app.models.location  # noqa: F401 (registers tables with Base.metadata)
import shipping_backend.app.models.shipping  # noqa: F401
from shipping_backend.app.main import app
from shipping_backend.app.api.deps import get_session
from shipping_backend.app.core.limiter import limiter
from shipping_backend.app.models.location import Department, Province, District
from shipping_backend.app.models.shipping import ShippingZone
from shipping_backend.tests.factories import (
    LIMA_DISTRICT,
    create_group,
    create_rate,
    create_zone,
)

# Rate limiting is exercised in production only
limiter.enabled = False

# Test database URL - SQLite in-memory
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Fresh in-memory database with all tables for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client for testing API endpoints.
    Each request gets its own session on the test database; fixtures must
    commit the rows they create.
    """
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# --- Test Data Factories ---

@pytest.fixture
async def lima_zone(test_session: AsyncSession) -> ShippingZone:
    """
    "Lima Metropolitana" covering San Isidro with one "Standard" group:
    - Rate A: [0, 150], cost 15
    - Rate B: [150, ∞), cost 15, free from 150
    """
    zone = await create_zone(test_session, "Lima Metropolitana", [LIMA_DISTRICT])
    group = await create_group(test_session, zone, "Standard", order=0)
    await create_rate(
        test_session, group, "Rate A", base_cost=15, min_order_amount=0, max_order_amount=150,
        order=0, estimated_days="2 días", time_window="9am-6pm",
    )
    await create_rate(
        test_session, group, "Rate B", base_cost=15, min_order_amount=150, free_shipping_min=150,
        order=1, estimated_days="3 días", carrier="Olva",
    )
    await test_session.commit()
    return zone


@pytest.fixture
async def lima_location(test_session: AsyncSession) -> District:
    """Lima department → Lima province → San Isidro and Miraflores."""
    department = Department(code="15", name="Lima")
    test_session.add(department)
    await test_session.flush()
    province = Province(code="1501", name="Lima", department_id=department.id)
    test_session.add(province)
    await test_session.flush()
    miraflores = District(code="150122", name="Miraflores", province_id=province.id)
    san_isidro = District(code=LIMA_DISTRICT, name="San Isidro", province_id=province.id)
    test_session.add_all([san_isidro, miraflores])
    await test_session.commit()
    return san_isidro
