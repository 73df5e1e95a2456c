"""Request handlers for Loggly alerts and searches.

Alerts are formatted in the request and handed to the dispatch queue; the
response does not wait for Slack. Searches run synchronously because the
formatted events are (or feed) the response.
"""

import logging

from fastapi import HTTPException
from fastapi.responses import JSONResponse

from loggly_relay.config import Settings
from loggly_relay.dispatch.queue import DeliveryTask, DispatchQueue, TaskContext
from loggly_relay.errors import (
    DecodeError,
    MalformedAlertError,
    QueueClosedError,
    RelayError,
)
from loggly_relay.formatting import format_events, resolve_timezone
from loggly_relay.loggly.client import SearchClient, SearchParams
from loggly_relay.models.events import SearchResult
from loggly_relay.slack.attachments import build_attachment

logger = logging.getLogger(__name__)


def handle_alert(
    raw: bytes, queue: DispatchQueue, settings: Settings, context: TaskContext
) -> JSONResponse:
    """Build an attachment from a Loggly alert and queue it for the channel.

    Bad payloads, and alerts arriving after the queue closed, are logged and
    acknowledged without queuing anything.
    """
    try:
        attachment = build_attachment(raw)
    except (DecodeError, MalformedAlertError) as exc:
        logger.error("Dropping Loggly alert: %s", exc, extra={"request_id": context.request_id})
        return JSONResponse({"ok": False})

    try:
        queue.enqueue(
            DeliveryTask.post_message(
                settings.slack_channel, context, attachments=[attachment]
            )
        )
    except QueueClosedError as exc:
        logger.error("Dropping Loggly alert: %s", exc, extra={"request_id": context.request_id})
        return JSONResponse({"ok": False})
    logger.info(
        "Queued alert %r for %s",
        attachment.title,
        settings.slack_channel,
        extra={"request_id": context.request_id},
    )
    return JSONResponse({"ok": True})


def search_params(settings: Settings, query: str | None = None) -> SearchParams:
    """Search parameters from settings, with an optional query override."""
    return SearchParams(
        query=(query or "").strip() or settings.loggly_search_query,
        from_=settings.search_from,
        until=settings.search_until,
        order=settings.search_order,
        size=settings.search_size,
    )


async def run_search(client: SearchClient, params: SearchParams) -> SearchResult:
    """Run a search, turning any relay error into a generic 500.

    The cause is logged here; the caller only learns that the search failed.
    """
    try:
        return await client.search(params)
    except RelayError as exc:
        logger.error("Loggly search failed for q=%r: %s", params.query, exc, exc_info=True)
        raise HTTPException(status_code=500, detail="Search failed") from exc


async def handle_search_command(
    form: dict[str, str], client: SearchClient, settings: Settings
) -> JSONResponse:
    """Answer a slash command with the formatted events for its query text."""
    params = search_params(settings, form.get("text"))
    result = await run_search(client, params)

    if not result.events:
        return JSONResponse(
            {"response_type": "ephemeral", "text": f"No events for `{params.query}`"}
        )

    text = format_events(result.events, resolve_timezone(settings.location), compact=True)
    return JSONResponse({"response_type": "in_channel", "text": text})


async def handle_scheduled_search(
    client: SearchClient,
    queue: DispatchQueue,
    settings: Settings,
    context: TaskContext,
) -> dict:
    """Search the default query and post any events to the channel."""
    params = search_params(settings)
    result = await run_search(client, params)

    if not result.events:
        return {"status": "empty", "events": 0}

    text = format_events(result.events, resolve_timezone(settings.location))
    try:
        queue.enqueue(DeliveryTask.post_message(settings.slack_channel, context, text=text))
    except QueueClosedError as exc:
        logger.error(
            "Dropping scheduled search post: %s", exc, extra={"request_id": context.request_id}
        )
        return {"status": "dropped", "events": result.total_events}
    return {"status": "queued", "events": result.total_events}
