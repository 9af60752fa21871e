"""
Pytest fixtures for HelixGate tests.
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Ensure test config is set before importing helixgate modules.
os.environ.setdefault("HELIXGATE_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("HELIXGATE_QUERY_TIMEOUT_SECONDS", "5")

from helixgate.db.base import Base  # noqa: E402
from helixgate.db.tables import AuditTable, TimeSeriesTable  # noqa: E402
from helixgate.engine import AnimalRegistry  # noqa: E402
from helixgate.observability.metrics import metrics  # noqa: E402


def _memory_engine():
    return create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
async def engine():
    """In-memory store with the time-series and audit tables."""
    engine = _memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def broken_engine():
    """Store with an audit table but no time-series table, so reads fail."""
    engine = _memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(AuditTable.__table__.create)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def broken_session_factory(broken_engine):
    return async_sessionmaker(broken_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def seed_rows(session_factory):
    """Insert (tag_id, time_stamp, value) rows into the time-series table."""

    async def _seed(rows):
        async with session_factory() as session:
            session.add_all(
                TimeSeriesTable(tag_id=tag_id, time_stamp=ts, value=value)
                for tag_id, ts, value in rows
            )
            await session.commit()

    return _seed


@pytest.fixture
def registry():
    return AnimalRegistry()


def _client_for(factory, registry):
    from helixgate.api.deps import get_registry, get_session_factory
    from helixgate.main import app

    app.dependency_overrides[get_session_factory] = lambda: factory
    app.dependency_overrides[get_registry] = lambda: registry

    transport = ASGITransport(app=app)
    return app, AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
async def client(session_factory, registry):
    """Async test client wired to the in-memory store and a fresh registry."""
    app, client = _client_for(session_factory, registry)
    async with client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def broken_client(broken_session_factory, registry):
    """Async test client whose time-series reads fail."""
    app, client = _client_for(broken_session_factory, registry)
    async with client:
        yield client
    app.dependency_overrides.clear()
