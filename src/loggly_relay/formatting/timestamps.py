"""Millisecond epoch rendering in the configured display zone."""

import logging
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


def resolve_timezone(name: str | None) -> tzinfo | None:
    """Return the named zone, or None (process local zone) if blank or unknown.

    Never raises: an invalid LOCATION must not break message formatting.
    """
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown time zone %r, falling back to local time", name)
        return None


def format_timestamp(timestamp_ms: int, tz: tzinfo | None = None) -> str:
    """Format a millisecond epoch as ``YYYY-MM-DD HH:MM:SS.mmm ZONE``.

    ``tz=None`` renders in the process's local zone.
    """
    seconds, millis = divmod(timestamp_ms, 1000)
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc).astimezone(tz)
    return f"{moment:%Y-%m-%d %H:%M:%S}.{millis:03d} {moment:%Z}"
