"""Error taxonomy for the relay.

Library errors (httpx, pydantic) are translated into these types at the seam
where they occur so handlers only deal with ``RelayError``.
"""


class RelayError(Exception):
    """Base class for all relay errors."""


class TransportError(RelayError):
    """Network or timeout failure talking to a remote service."""


class ProtocolError(RelayError):
    """A remote JSON response did not have the expected shape."""


class RemoteError(RelayError):
    """A remote dependency answered with a non-success status."""

    def __init__(self, status_code: int, body: str, url: str = "") -> None:
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(f"{url or 'remote'} returned HTTP {status_code}: {body[:200]}")


class DecodeError(RelayError):
    """An inbound payload is not valid JSON of the expected shape."""


class MalformedAlertError(RelayError):
    """An inbound alert decoded correctly but carries no hits."""


class QueueClosedError(RelayError):
    """A task was enqueued after the dispatch queue was closed."""
