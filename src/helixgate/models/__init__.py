"""HelixGate data models."""

from helixgate.models.animal import Animal, AnimalBase, AnimalCreate
from helixgate.models.audit import AuditRecord
from helixgate.models.enums import AuditStatus
from helixgate.models.timeseries import (
    QueryRequest,
    TagRequest,
    TagResponse,
    TimeSeriesEvent,
)

__all__ = [
    "Animal",
    "AnimalBase",
    "AnimalCreate",
    "AuditRecord",
    "AuditStatus",
    "QueryRequest",
    "TagRequest",
    "TagResponse",
    "TimeSeriesEvent",
]
