"""Slack side of the relay: request verification, attachments, and routes."""

from loggly_relay.slack.attachments import build_attachment, parse_alert
from loggly_relay.slack.router import router

__all__ = [
    "build_attachment",
    "parse_alert",
    "router",
]
