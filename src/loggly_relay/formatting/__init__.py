"""Event formatting: stack-trace truncation, timestamps, and batch rendering."""

from loggly_relay.formatting.events import format_event, format_events, format_structured
from loggly_relay.formatting.hits import (
    MULTILINE_MARKER,
    format_hit,
    highlight_names,
    is_stack_trace,
    summary_line,
)
from loggly_relay.formatting.timestamps import format_timestamp, resolve_timezone

__all__ = [
    "MULTILINE_MARKER",
    "format_event",
    "format_events",
    "format_hit",
    "format_structured",
    "format_timestamp",
    "highlight_names",
    "is_stack_trace",
    "resolve_timezone",
    "summary_line",
]
