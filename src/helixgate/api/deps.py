"""API dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from helixgate.db import base as db_base
from helixgate.engine import AnimalRegistry, QueryProxy
from helixgate.engine.registry import registry


def get_registry() -> AnimalRegistry:
    """Process-wide animal registry."""
    return registry


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for the relational store, resolved per request."""
    return db_base.async_session_factory


def get_query_proxy(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> QueryProxy:
    return QueryProxy(session_factory)
