"""SQLAlchemy table definitions for the external relational store."""

from datetime import datetime

from sqlalchemy import (
    CHAR,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from helixgate.config import settings
from helixgate.db.base import Base


class TimeSeriesTable(Base):
    """Time-series observations, read-only from this service."""

    __tablename__ = settings.timeseries_table

    tag_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    time_stamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), primary_key=True)
    value: Mapped[float] = mapped_column(Float, nullable=False)

    __table_args__ = (Index(f"idx_{settings.timeseries_table}_tag_ts", "tag_id", "time_stamp"),)


class AuditTable(Base):
    """Audit rows, one per proxy query attempt. Insert only."""

    __tablename__ = settings.audit_table

    audit_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    app_context_guid: Mapped[str] = mapped_column(String(64), nullable=False)
    function_name: Mapped[str] = mapped_column(String(50), nullable=False)
    start_date_utc: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date_utc: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    row_total: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(CHAR(1), nullable=False)
    last_error: Mapped[str | None] = mapped_column(Text, nullable=True)
    run_timestamp_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index(f"idx_{settings.audit_table}_guid", "app_context_guid", "run_timestamp_utc"),
    )
