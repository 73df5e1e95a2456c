"""Routes for Loggly alert webhooks, slash-command searches, and scheduled searches."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from loggly_relay.config import Settings
from loggly_relay.deps import (
    get_app_settings,
    get_dispatch_queue,
    get_search_client,
    get_task_context,
    verify_scheduler,
)
from loggly_relay.dispatch.queue import DispatchQueue, TaskContext
from loggly_relay.loggly.client import SearchClient
from loggly_relay.slack.handlers import (
    handle_alert,
    handle_scheduled_search,
    handle_search_command,
)
from loggly_relay.slack.verification import verify_slack_request

router = APIRouter(prefix="/loggly", tags=["loggly"])


@router.post("")
async def loggly_alert(
    request: Request,
    queue: DispatchQueue = Depends(get_dispatch_queue),
    settings: Settings = Depends(get_app_settings),
    context: TaskContext = Depends(get_task_context),
) -> JSONResponse:
    """Receive a Loggly HTTP alert. Returns before the Slack post happens."""
    body = await request.body()
    return handle_alert(body, queue, settings, context)


@router.get("/search")
async def loggly_search_health() -> dict:
    """Health check for the search endpoint."""
    return {"status": "ok"}


@router.post("/search")
async def loggly_search(
    form: dict = Depends(verify_slack_request),
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """Slack slash command: search Loggly for the command text."""
    return await handle_search_command(form, client, settings)


@router.post("/search/scheduled", dependencies=[Depends(verify_scheduler)])
async def loggly_scheduled_search(
    client: SearchClient = Depends(get_search_client),
    queue: DispatchQueue = Depends(get_dispatch_queue),
    settings: Settings = Depends(get_app_settings),
    context: TaskContext = Depends(get_task_context),
) -> dict:
    """Timer trigger: search the default query and post results to the channel."""
    return await handle_scheduled_search(client, queue, settings, context)
