"""API request/response schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Structured error body for proxy failures."""

    model_config = ConfigDict(populate_by_name=True)

    error_code: str = Field(..., alias="errorCode", description="JH-xxxx error code")
    message: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class MetricsResponse(BaseModel):
    """Process-local metrics snapshot."""

    counters: dict[str, int]
    summaries: dict[str, dict[str, Any]]
