"""HelixGate database layer."""

from helixgate.db.base import Base, init_db
from helixgate.db.tables import AuditTable, TimeSeriesTable

__all__ = [
    "AuditTable",
    "Base",
    "TimeSeriesTable",
    "init_db",
]
