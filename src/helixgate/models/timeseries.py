"""Time-series query models.

Wire JSON uses camelCase keys; attributes are snake_case and the
camelCase names are their aliases.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TagRequest(CamelModel):
    """A tag of interest in a query request."""

    tag_name: StrictStr
    tag_id: StrictInt


class QueryRequest(CamelModel):
    """Inbound proxy request.

    Dates stay strings here; parsing them is the range validation step,
    which reports its own error code.
    """

    tags: list[TagRequest] = Field(..., min_length=1)
    start_date: StrictStr
    end_date: StrictStr
    app_context_guid: StrictStr = Field(..., min_length=1)


class TimeSeriesEvent(CamelModel):
    """One observation of a tag."""

    time_stamp: datetime
    value: float


class TagResponse(CamelModel):
    """Events for one requested tag."""

    tag_name: str
    tag_id: int
    app_context_guid: str
    events: list[TimeSeriesEvent] = Field(default_factory=list)
