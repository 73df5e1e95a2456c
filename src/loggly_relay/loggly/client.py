"""Loggly search API client.

Loggly searches are a two-step protocol: submitting a query returns an
ephemeral search handle (``rsid``), and events are fetched for that handle.
Each call opens its own HTTP client; nothing is cached between calls.
"""

import logging
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from loggly_relay.errors import ProtocolError, RemoteError, TransportError
from loggly_relay.models.events import SearchResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchParams:
    """Query parameters for the search endpoint."""

    query: str
    from_: str = "-10m"
    until: str = "now"
    order: str = "asc"
    size: int = 50

    def to_params(self) -> dict[str, str]:
        return {
            "q": self.query,
            "from": self.from_,
            "until": self.until,
            "order": self.order,
            "size": str(self.size),
        }


class SearchClient:
    """Authenticated client for the Loggly ``apiv2`` search endpoints."""

    def __init__(
        self,
        domain: str,
        username: str,
        password: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.domain = domain
        self.api_base = f"https://{domain}.loggly.com/apiv2/"
        self._auth = httpx.BasicAuth(username, password)
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport

    async def _get_json(self, endpoint: str, params: dict[str, str]) -> object:
        """GET an endpoint and decode its JSON body, translating failures."""
        url = self.api_base + endpoint
        try:
            async with httpx.AsyncClient(
                auth=self._auth,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc

        if not response.is_success:
            raise RemoteError(response.status_code, response.text, url=url)

        try:
            return response.json()
        except ValueError as exc:
            raise ProtocolError(f"GET {url} returned non-JSON body: {response.text[:200]}") from exc

    async def get_search_handle(self, params: SearchParams) -> str:
        """Submit a query and return the search handle (``rsid.id``)."""
        body = await self._get_json("search", params.to_params())
        rsid = body.get("rsid") if isinstance(body, dict) else None
        handle = rsid.get("id") if isinstance(rsid, dict) else None
        if not isinstance(handle, str):
            raise ProtocolError(f"Search response has no rsid.id: {body!r}")
        return handle

    async def get_events(self, handle: str) -> SearchResult:
        """Fetch the events matched by a search handle."""
        body = await self._get_json("events", {"rsid": handle})
        try:
            return SearchResult.model_validate(body)
        except ValidationError as exc:
            raise ProtocolError(f"Unexpected events response for rsid={handle}: {exc}") from exc

    async def search(self, params: SearchParams) -> SearchResult:
        """Run a query end to end: obtain a fresh handle, then fetch its events."""
        handle = await self.get_search_handle(params)
        result = await self.get_events(handle)
        logger.info(
            "Loggly search q=%r rsid=%s events=%d",
            params.query,
            handle,
            result.total_events,
        )
        return result
