"""Loggly search API access."""

from loggly_relay.loggly.client import SearchClient, SearchParams

__all__ = [
    "SearchClient",
    "SearchParams",
]
