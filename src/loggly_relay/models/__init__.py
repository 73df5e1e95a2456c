"""Data models for Loggly events, alerts, and Slack attachments."""

from loggly_relay.models.alert import Alert
from loggly_relay.models.events import EventBody, LogEvent, SearchResult, StructuredPayload
from loggly_relay.models.slack import Attachment, AttachmentField

__all__ = [
    "Alert",
    "Attachment",
    "AttachmentField",
    "EventBody",
    "LogEvent",
    "SearchResult",
    "StructuredPayload",
]
