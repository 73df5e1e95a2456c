"""FastAPI dependencies exposing the components built in the app lifespan."""

from fastapi import HTTPException, Request

from loggly_relay.config import Settings, get_settings
from loggly_relay.dispatch.queue import DispatchQueue, TaskContext
from loggly_relay.loggly.client import SearchClient


def get_search_client(request: Request) -> SearchClient:
    """Return the SearchClient created at startup."""
    return request.app.state.search_client


def get_dispatch_queue(request: Request) -> DispatchQueue:
    """Return the DispatchQueue drained by the background worker."""
    return request.app.state.dispatch_queue


def get_app_settings(request: Request) -> Settings:
    """Return the settings loaded at startup."""
    return request.app.state.settings


def get_task_context(request: Request) -> TaskContext:
    """Build the trace context carried by tasks this request enqueues.

    Reuses the caller's X-Request-ID (or the Cloud Run trace id) when present.
    """
    request_id = request.headers.get("X-Request-ID") or request.headers.get(
        "X-Cloud-Trace-Context", ""
    ).split("/", 1)[0]
    if request_id:
        return TaskContext(request_id=request_id)
    return TaskContext()


async def verify_scheduler(request: Request) -> None:
    """Verify the scheduler secret header for protected endpoints.

    Compares the X-Scheduler-Secret header against the configured secret.
    Raises HTTPException 403 if the header is missing, empty, or mismatched.
    """
    settings = get_settings()
    secret = request.headers.get("X-Scheduler-Secret", "")
    if not settings.scheduler_secret or secret != settings.scheduler_secret:
        raise HTTPException(status_code=403, detail="Invalid scheduler secret")
