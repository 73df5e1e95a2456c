"""Loggly search result models.

An event is either structured (Loggly parsed the message as JSON and put it
under ``event.json``) or plain text (only ``logmsg`` is meaningful). Anything
else Loggly attaches under ``event`` (syslog, http, ...) is kept as extra data.
"""

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class StructuredPayload(BaseModel):
    """JSON body of a structured event. Known request fields, any JSON type, plus anything else."""

    model_config = ConfigDict(extra="allow", frozen=True)

    timestamp: JsonValue = None
    method: JsonValue = None
    path: JsonValue = None
    status: JsonValue = None
    user_id: JsonValue = None


class EventBody(BaseModel):
    """Parsed sections Loggly attaches to an event."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    json_payload: StructuredPayload | None = Field(default=None, alias="json")


class LogEvent(BaseModel):
    """A single log record as returned by the events endpoint."""

    model_config = ConfigDict(frozen=True)

    tags: list[str] = []
    timestamp: int  # Unix epoch, milliseconds
    logmsg: str = ""
    logtypes: list[str] = []
    id: str = ""
    event: EventBody = Field(default_factory=EventBody)

    @property
    def payload(self) -> StructuredPayload | None:
        """Structured JSON payload, or None for plain-text events."""
        return self.event.json_payload

    @property
    def is_structured(self) -> bool:
        return self.event.json_payload is not None


class SearchResult(BaseModel):
    """One page of events for a search handle, oldest first when order=asc."""

    total_events: int = 0
    page: int = 0
    events: list[LogEvent] = []
