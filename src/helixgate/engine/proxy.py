"""Time-series query proxy.

Validates a query request, reads matching rows from the relational store,
groups them per requested tag and writes one audit row per attempt.
"""

import asyncio
import logging
import re
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from helixgate.config import settings
from helixgate.db.repositories import AuditRepository, TimeSeriesRepository
from helixgate.engine.errors import (
    DateRangeInvalid,
    HelixGateError,
    SchemaInvalid,
    StoreFailure,
)
from helixgate.models import (
    AuditRecord,
    AuditStatus,
    QueryRequest,
    TagResponse,
    TimeSeriesEvent,
)
from helixgate.observability.metrics import metrics
from helixgate.utils.time import as_utc

logger = logging.getLogger("helixgate.proxy")

NIL_GUID = "00000000-0000-0000-0000-000000000000"

_datetime_adapter = TypeAdapter(datetime)

# Bare numbers would otherwise be read as Unix epochs.
_NUMERIC = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp; naive values are taken as UTC.

    Raises ValueError for anything else, numeric strings included.
    """
    if _NUMERIC.fullmatch(value):
        raise ValueError(f"Not an ISO 8601 timestamp: {value!r}")
    return as_utc(_datetime_adapter.validate_python(value))


def validate_schema(payload: Any) -> QueryRequest:
    """Return the parsed request or raise SchemaInvalid."""
    try:
        return QueryRequest.model_validate(payload)
    except ValidationError as e:
        logger.info("Rejected query request: %s", e.errors(include_url=False))
        raise SchemaInvalid() from e


def validate_date_range(start_date: str, end_date: str) -> tuple[datetime, datetime]:
    """Return the parsed bounds or raise DateRangeInvalid."""
    try:
        start = parse_timestamp(start_date)
        end = parse_timestamp(end_date)
    except ValueError as e:
        raise DateRangeInvalid("Invalid date format") from e
    if start > end:
        raise DateRangeInvalid("Start date is after end date")
    return start, end


def group_events(
    request: QueryRequest,
    rows: list[tuple[int, TimeSeriesEvent]],
) -> list[TagResponse]:
    """Shape one TagResponse per requested tag, in request order."""
    grouped: dict[int, list[TimeSeriesEvent]] = defaultdict(list)
    for tag_id, event in rows:
        grouped[tag_id].append(event)

    return [
        TagResponse(
            tag_name=tag.tag_name,
            tag_id=tag.tag_id,
            app_context_guid=request.app_context_guid,
            events=list(grouped.get(tag.tag_id, [])),
        )
        for tag in request.tags
    ]


@dataclass
class ProxyResult:
    """Outcome of a successful query."""

    responses: list[TagResponse]
    row_total: int
    audit: AuditRecord

    @property
    def has_rows(self) -> bool:
        return self.row_total > 0


class QueryProxy:
    """Runs the validate, query, group and audit flow for one request."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        function_name: Optional[str] = None,
        query_timeout_seconds: Optional[float] = None,
        audit_validation_failures: Optional[bool] = None,
    ):
        self.session_factory = session_factory
        self.function_name = function_name or settings.function_name
        self.query_timeout_seconds = (
            settings.query_timeout_seconds
            if query_timeout_seconds is None
            else query_timeout_seconds
        )
        self.audit_validation_failures = (
            settings.audit_validation_failures
            if audit_validation_failures is None
            else audit_validation_failures
        )

    async def handle(self, payload: Any) -> ProxyResult:
        """
        Process one raw JSON payload.

        Raises:
            SchemaInvalid: payload is missing fields or has ill-typed ones.
            DateRangeInvalid: dates do not parse or start is after end.
            StoreFailure: the query or the audit insert failed. A Failure
                audit record has been attempted before this is raised.
        """
        metrics.record_proxy_request()

        try:
            request = validate_schema(payload)
            start, end = validate_date_range(request.start_date, request.end_date)
        except (SchemaInvalid, DateRangeInvalid) as e:
            metrics.record_proxy_outcome("validation_failed")
            if self.audit_validation_failures:
                await self._record_validation_failure(payload, e)
            raise

        try:
            result = await self._query_and_audit(request, start, end)
        except Exception as e:
            logger.exception(
                "Query failed for appContextGuid=%s", request.app_context_guid
            )
            metrics.record_proxy_outcome("failed")
            await self._record_failure(
                app_context_guid=request.app_context_guid,
                start=start,
                end=end,
                error=_describe(e),
            )
            raise StoreFailure() from e

        metrics.record_proxy_outcome(
            "success" if result.has_rows else "zero_rows", row_total=result.row_total
        )
        logger.info(
            "Query for appContextGuid=%s returned %d rows across %d tags",
            request.app_context_guid,
            result.row_total,
            len(request.tags),
        )
        return result

    async def _query_and_audit(
        self,
        request: QueryRequest,
        start: datetime,
        end: datetime,
    ) -> ProxyResult:
        """Read and flush the audit row under the timeout, then commit.

        The commit is not timed: once it starts, its own result decides
        whether this attempt is audited as S/Z or falls through to F.
        """
        async with self.session_factory() as session:
            rows, audit = await asyncio.wait_for(
                self._read_and_stage(session, request, start, end),
                timeout=self.query_timeout_seconds,
            )
            await session.commit()
        return ProxyResult(
            responses=group_events(request, rows), row_total=len(rows), audit=audit
        )

    async def _read_and_stage(
        self,
        session: AsyncSession,
        request: QueryRequest,
        start: datetime,
        end: datetime,
    ) -> tuple[list[tuple[int, TimeSeriesEvent]], AuditRecord]:
        rows = await TimeSeriesRepository(session).fetch_events(
            [tag.tag_id for tag in request.tags], start, end
        )
        audit = await AuditRepository(session).record(
            app_context_guid=request.app_context_guid,
            function_name=self.function_name,
            status=AuditStatus.for_row_total(len(rows)),
            start_date_utc=start,
            end_date_utc=end,
            row_total=len(rows),
        )
        return rows, audit

    async def _record_failure(
        self,
        app_context_guid: str,
        start: Optional[datetime],
        end: Optional[datetime],
        error: str,
    ) -> None:
        """Write a Failure audit row on a fresh session. Errors here are logged only."""
        try:
            await self._insert_failure(app_context_guid, start, end, error)
        except Exception:
            logger.exception(
                "Failed to record audit entry for appContextGuid=%s", app_context_guid
            )

    async def _insert_failure(
        self,
        app_context_guid: str,
        start: Optional[datetime],
        end: Optional[datetime],
        error: str,
    ) -> None:
        async with self.session_factory() as session:
            await asyncio.wait_for(
                AuditRepository(session).record(
                    app_context_guid=app_context_guid,
                    function_name=self.function_name,
                    status=AuditStatus.FAILURE,
                    start_date_utc=start,
                    end_date_utc=end,
                    row_total=0,
                    last_error=error,
                ),
                timeout=self.query_timeout_seconds,
            )
            await session.commit()

    async def _record_validation_failure(self, payload: Any, error: HelixGateError) -> None:
        fields = payload if isinstance(payload, dict) else {}
        guid = fields.get("appContextGuid")
        await self._record_failure(
            app_context_guid=guid if isinstance(guid, str) and guid else NIL_GUID,
            start=_parse_or_none(fields.get("startDate")),
            end=_parse_or_none(fields.get("endDate")),
            error=f"{error.code}: {error.message}",
        )


def _parse_or_none(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        return None


def _describe(error: BaseException) -> str:
    if isinstance(error, asyncio.TimeoutError):
        return "Query timed out"
    return str(error) or type(error).__name__
