"""HelixGate engine - registry and query proxy operations."""

from helixgate.engine.errors import (
    AnimalNotFound,
    DateRangeInvalid,
    HelixGateError,
    SchemaInvalid,
    StoreFailure,
)
from helixgate.engine.proxy import ProxyResult, QueryProxy
from helixgate.engine.registry import AnimalRegistry

__all__ = [
    "AnimalNotFound",
    "AnimalRegistry",
    "DateRangeInvalid",
    "HelixGateError",
    "ProxyResult",
    "QueryProxy",
    "SchemaInvalid",
    "StoreFailure",
]
