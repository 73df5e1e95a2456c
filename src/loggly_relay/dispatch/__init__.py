"""Asynchronous delivery pipeline: queue of Slack API calls and its worker."""

from loggly_relay.dispatch.queue import (
    POST_MESSAGE,
    DeliveryTask,
    DispatchQueue,
    TaskContext,
)
from loggly_relay.dispatch.worker import Worker

__all__ = [
    "POST_MESSAGE",
    "DeliveryTask",
    "DispatchQueue",
    "TaskContext",
    "Worker",
]
