"""Database engine and session management."""

import time
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from helixgate.config import settings
from helixgate.observability.metrics import metrics


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


def build_engine(database_url: str, **overrides: Any) -> AsyncEngine:
    """Create an async engine with query metrics attached.

    Pool sizing only applies to server databases; SQLite picks its own pool.
    """
    options: dict[str, Any] = {"echo": settings.debug}
    if database_url.startswith("postgresql"):
        options.update(pool_pre_ping=True, pool_size=10, max_overflow=5)
    options.update(overrides)
    new_engine = create_async_engine(database_url, **options)
    attach_query_metrics(new_engine)
    return new_engine


def _start_timer(conn, cursor, statement, parameters, context, executemany):
    if context is not None:
        context._helixgate_started = time.perf_counter()


def _stop_timer(conn, cursor, statement, parameters, context, executemany):
    started = getattr(context, "_helixgate_started", None)
    if started is not None:
        metrics.record_store_query(statement, (time.perf_counter() - started) * 1000.0)


def attach_query_metrics(target_engine: AsyncEngine) -> None:
    """Time every cursor execution on ``target_engine``; repeat calls are no-ops."""
    sync_engine = target_engine.sync_engine
    if event.contains(sync_engine, "before_cursor_execute", _start_timer):
        return
    event.listen(sync_engine, "before_cursor_execute", _start_timer)
    event.listen(sync_engine, "after_cursor_execute", _stop_timer)


engine = build_engine(settings.database_url)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db() -> None:
    """Create the time-series and audit tables if missing."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections."""
    await engine.dispose()
