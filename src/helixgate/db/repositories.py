"""Database repositories for the time-series and audit tables."""

from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from helixgate.db.tables import AuditTable, TimeSeriesTable
from helixgate.models import AuditRecord, AuditStatus, TimeSeriesEvent
from helixgate.utils.time import as_utc, utc_now

MAX_ERROR_LENGTH = 4000


class TimeSeriesRepository:
    """Read access to tag observations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_events(
        self,
        tag_ids: Sequence[int],
        start: datetime,
        end: datetime,
    ) -> list[tuple[int, TimeSeriesEvent]]:
        """
        Rows for the given tags within [start, end], ordered by tag then time.

        Tag ids go through an expanding bind parameter, so the statement
        text never contains caller data.
        """
        result = await self.session.execute(
            select(TimeSeriesTable.tag_id, TimeSeriesTable.time_stamp, TimeSeriesTable.value)
            .where(
                TimeSeriesTable.tag_id.in_(sorted(set(tag_ids))),
                TimeSeriesTable.time_stamp.between(start, end),
            )
            .order_by(TimeSeriesTable.tag_id.asc(), TimeSeriesTable.time_stamp.asc())
        )
        return [
            (row.tag_id, TimeSeriesEvent(time_stamp=as_utc(row.time_stamp), value=row.value))
            for row in result
        ]


class AuditRepository:
    """Insert-only access to the audit table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def record(
        self,
        app_context_guid: str,
        function_name: str,
        status: AuditStatus,
        start_date_utc: datetime | None = None,
        end_date_utc: datetime | None = None,
        row_total: int = 0,
        last_error: str | None = None,
    ) -> AuditRecord:
        """Add an audit row to the session and flush it."""
        row = AuditTable(
            app_context_guid=app_context_guid,
            function_name=function_name,
            start_date_utc=start_date_utc,
            end_date_utc=end_date_utc,
            row_total=row_total,
            status=status.value,
            last_error=last_error[:MAX_ERROR_LENGTH] if last_error else last_error,
            run_timestamp_utc=utc_now(),
        )
        self.session.add(row)
        await self.session.flush()
        return self._row_to_model(row)

    async def list_for_guid(self, app_context_guid: str) -> list[AuditRecord]:
        """Audit records for a correlation guid, oldest first."""
        result = await self.session.execute(
            select(AuditTable)
            .where(AuditTable.app_context_guid == app_context_guid)
            .order_by(AuditTable.run_timestamp_utc.asc(), AuditTable.audit_id.asc())
        )
        return [self._row_to_model(row) for row in result.scalars().all()]

    def _row_to_model(self, row: AuditTable) -> AuditRecord:
        return AuditRecord(
            audit_id=row.audit_id,
            app_context_guid=row.app_context_guid,
            function_name=row.function_name,
            start_date_utc=as_utc(row.start_date_utc) if row.start_date_utc else None,
            end_date_utc=as_utc(row.end_date_utc) if row.end_date_utc else None,
            row_total=row.row_total,
            status=AuditStatus(row.status),
            last_error=row.last_error,
            run_timestamp_utc=as_utc(row.run_timestamp_utc),
        )
