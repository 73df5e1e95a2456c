"""FastAPI application with lifespan, dispatch worker, and health endpoint."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slack_sdk.web.async_client import AsyncWebClient

from loggly_relay.config import get_settings
from loggly_relay.dispatch import DispatchQueue, Worker
from loggly_relay.logging_config import configure_logging
from loggly_relay.loggly import SearchClient
from loggly_relay.slack.router import router as loggly_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared components and run the single dispatch worker.

    On shutdown the queue is closed and the worker drains what is left.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    app.state.search_client = SearchClient(
        settings.loggly_domain,
        settings.loggly_username,
        settings.loggly_password,
        timeout=settings.search_timeout,
    )
    queue = DispatchQueue()
    app.state.dispatch_queue = queue
    app.state.slack_client = AsyncWebClient(token=settings.slack_bot_token)
    worker = Worker(queue, app.state.slack_client)
    worker_task = asyncio.create_task(worker.run())

    yield

    queue.close()
    await worker_task


app = FastAPI(
    title="Loggly Relay",
    lifespan=lifespan,
)
app.include_router(loggly_router)


@app.get("/health")
async def health():
    """Health check endpoint for Cloud Run and local development."""
    return {
        "status": "ok",
        "service": "loggly-relay",
        "version": "0.1.0",
    }
