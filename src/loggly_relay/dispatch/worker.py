"""Single consumer that delivers queued tasks to the Slack Web API.

Delivery is best effort: a failed call is logged with its payload and dropped.
Nothing is retried or requeued, and no error reaches the request that produced
the task (it has already been answered).
"""

import logging

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from loggly_relay.dispatch.queue import DeliveryTask, DispatchQueue

logger = logging.getLogger(__name__)


class Worker:
    """Drains a DispatchQueue one task at a time until it is closed."""

    def __init__(self, queue: DispatchQueue, client: AsyncWebClient) -> None:
        self.queue = queue
        self.client = client
        self.delivered = 0
        self.failed = 0

    async def run(self) -> None:
        """Consume tasks in FIFO order. Returns only after the queue is closed."""
        logger.info("Dispatch worker started")
        while True:
            task = await self.queue.get()
            if task is None:
                break
            await self.deliver(task)
        logger.info(
            "Dispatch worker stopped (delivered=%d failed=%d)",
            self.delivered,
            self.failed,
        )

    async def deliver(self, task: DeliveryTask) -> bool:
        """Perform one Slack API call. Returns False (after logging) on failure."""
        extra = {"request_id": task.context.request_id, "method": task.method}
        try:
            await self.client.api_call(task.method, data=task.data)
        except SlackApiError as exc:
            error_code = exc.response.get("error", "") if exc.response else ""
            logger.error(
                "Slack %s failed (%s): %s",
                task.method,
                error_code,
                task.data,
                extra=extra,
            )
            self.failed += 1
            return False
        except Exception:
            logger.error(
                "Slack %s delivery error: %s",
                task.method,
                task.data,
                exc_info=True,
                extra=extra,
            )
            self.failed += 1
            return False

        self.delivered += 1
        logger.debug("Delivered %s", task.method, extra=extra)
        return True
