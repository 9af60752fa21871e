"""Audit record model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from helixgate.models.enums import AuditStatus


class AuditRecord(BaseModel):
    """Persisted outcome of one proxy query attempt."""

    audit_id: Optional[int] = None
    app_context_guid: str
    function_name: str
    start_date_utc: Optional[datetime] = None
    end_date_utc: Optional[datetime] = None
    row_total: int = 0
    status: AuditStatus
    last_error: Optional[str] = None
    run_timestamp_utc: datetime
