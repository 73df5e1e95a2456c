"""Delivery tasks and the queue that decouples request handling from Slack.

Producers (request handlers) call ``enqueue`` and return immediately; a single
worker consumes tasks in FIFO order. Closing the queue lets the worker finish
what is already queued and then stop.
"""

import asyncio
import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from loggly_relay.errors import QueueClosedError
from loggly_relay.models.slack import Attachment

POST_MESSAGE = "chat.postMessage"


@dataclass(frozen=True)
class TaskContext:
    """Trace context of the request that produced a task."""

    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class DeliveryTask:
    """A Slack Web API call with its pre-encoded form data."""

    method: str
    data: dict[str, str]
    context: TaskContext

    @classmethod
    def post_message(
        cls,
        channel: str,
        context: TaskContext,
        *,
        text: str | None = None,
        attachments: list[Attachment] | None = None,
    ) -> "DeliveryTask":
        """Build a chat.postMessage task posting as the bot, not as a user."""
        data = {"channel": channel}
        if attachments is not None:
            data["attachments"] = json.dumps(
                [a.model_dump(mode="json") for a in attachments]
            )
        if text is not None:
            data["text"] = text
        data["as_user"] = "false"
        return cls(method=POST_MESSAGE, data=data, context=context)


# Queued after the last task by close() to mark end of stream
_CLOSED = None


class DispatchQueue:
    """Unbounded FIFO of delivery tasks with a closable input side."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[DeliveryTask | None] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def qsize(self) -> int:
        return self._queue.qsize()

    def enqueue(self, task: DeliveryTask) -> None:
        """Hand a task to the consumer without waiting for delivery."""
        if self._closed:
            raise QueueClosedError(f"Dispatch queue closed, dropping {task.method}")
        self._queue.put_nowait(task)

    def close(self) -> None:
        """Stop accepting tasks. Already queued tasks are still delivered."""
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    async def get(self) -> DeliveryTask | None:
        """Wait for the next task. Returns None once the queue is closed and drained."""
        task = await self._queue.get()
        self._queue.task_done()
        return task
