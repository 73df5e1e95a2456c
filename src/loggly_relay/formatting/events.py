"""Render a batch of Loggly events into a single Slack message body."""

import json
from datetime import datetime, tzinfo

from pydantic import JsonValue

from loggly_relay.formatting.hits import format_hit, is_stack_trace
from loggly_relay.formatting.timestamps import format_timestamp
from loggly_relay.models.events import LogEvent, StructuredPayload

RULE = "=" * 100
CHANNEL_SEPARATOR = f"\n{RULE}\n"
COMPACT_SEPARATOR = "\n"


def format_structured(payload: StructuredPayload, *, compact: bool = False) -> str:
    """Render a structured JSON payload.

    Full mode dumps the whole payload as indented JSON in a code block.
    Compact mode keeps only the request fields on one line.
    """
    if not compact:
        fields = payload.model_dump(mode="json", exclude_unset=True)
        fields.update(payload.model_extra or {})
        return f"```\n{json.dumps(fields, indent=2)}\n```"

    parts = []
    if payload.timestamp is not None:
        parts.append(_parse_payload_time(payload.timestamp))
    for value in (payload.method, payload.path, payload.status):
        if value is not None:
            parts.append(str(value))
    if payload.user_id is not None:
        parts.append(f"user={payload.user_id}")
    return "`" + " ".join(parts) + "`" if parts else "`{}`"


def _parse_payload_time(value: JsonValue) -> str:
    """Normalise an ISO-8601 payload timestamp to seconds precision, else return as-is."""
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime(
                "%H:%M:%S"
            )
        except ValueError:
            return value
    return str(value)


def format_event(event: LogEvent, tz: tzinfo | None = None, *, compact: bool = False) -> str:
    """Render one event prefixed with its bold timestamp."""
    payload = event.payload
    if payload is not None:
        text = format_structured(payload, compact=compact)
    elif is_stack_trace(event.logmsg):
        text = format_hit(event.logmsg)
    else:
        text = event.logmsg
    return f"*{format_timestamp(event.timestamp, tz)}*\n{text}"


def format_events(
    events: list[LogEvent], tz: tzinfo | None = None, *, compact: bool = False
) -> str:
    """Render events in order, separated by a rule (or a newline when compact)."""
    separator = COMPACT_SEPARATOR if compact else CHANNEL_SEPARATOR
    return separator.join(format_event(e, tz, compact=compact) for e in events)
