"""Integration tests for the /loggly endpoints."""

import hashlib
import hmac
import json
import time
from unittest.mock import MagicMock, patch
from urllib.parse import urlencode

import httpx
from fastapi.testclient import TestClient

from loggly_relay.app import app
from loggly_relay.config import Settings
from loggly_relay.deps import get_app_settings, get_dispatch_queue, get_search_client
from loggly_relay.dispatch.queue import DispatchQueue
from loggly_relay.loggly.client import SearchClient

TEST_SIGNING_SECRET = "test_signing_secret_1234"
TEST_SCHEDULER_SECRET = "test-scheduler-secret"

EVENTS_BODY = {
    "total_events": 1,
    "page": 0,
    "events": [
        {
            "tags": ["api"],
            "timestamp": 1700000000000,
            "logmsg": "NullPointerException#012> at foo#012> at bar",
            "logtypes": ["syslog"],
            "id": "e1",
            "event": {},
        }
    ],
}


def _mock_settings() -> MagicMock:
    """Create a mock Settings for request verification."""
    settings = MagicMock()
    settings.slack_signing_secret = TEST_SIGNING_SECRET
    settings.scheduler_secret = TEST_SCHEDULER_SECRET
    return settings


def _app_settings() -> Settings:
    """Settings injected into handlers."""
    return Settings(_env_file=None, slack_channel="#loggly", location="UTC")


def _sign_request(body: bytes, secret: str) -> tuple[str, str]:
    """Generate Slack-compatible signature headers."""
    timestamp = str(int(time.time()))
    sig_basestring = f"v0:{timestamp}:{body.decode()}"
    signature = "v0=" + hmac.new(
        secret.encode(), sig_basestring.encode(), hashlib.sha256
    ).hexdigest()
    return timestamp, signature


def _loggly_transport(requests: list, events_body: dict = EVENTS_BODY, status: int = 200):
    """MockTransport serving the Loggly search and events endpoints."""

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if status != 200:
            return httpx.Response(status, text="rsid=secret-internals")
        if request.url.path == "/apiv2/search":
            return httpx.Response(200, json={"rsid": {"id": "rsid-1"}})
        return httpx.Response(200, json=events_body)

    return httpx.MockTransport(handler)


def _override(queue: DispatchQueue | None = None, transport: httpx.MockTransport | None = None):
    """Point the app dependencies at test doubles."""
    app.dependency_overrides[get_app_settings] = _app_settings
    if queue is not None:
        app.dependency_overrides[get_dispatch_queue] = lambda: queue
    if transport is not None:
        search_client = SearchClient("acme", "bot", "pw", transport=transport)
        app.dependency_overrides[get_search_client] = lambda: search_client


def _slash_command(client: TestClient, text: str, secret: str = TEST_SIGNING_SECRET):
    """Send a signed slash-command POST to /loggly/search."""
    body = urlencode({"command": "/loggly", "text": text, "user_id": "U1"}).encode()
    timestamp, signature = _sign_request(body, secret)
    headers = {
        "X-Slack-Request-Timestamp": timestamp,
        "X-Slack-Signature": signature,
        "Content-Type": "application/x-www-form-urlencoded",
    }
    return client.post("/loggly/search", content=body, headers=headers)


# -- Alert webhook --


def test_alert_webhook_queues_and_returns():
    """POST /loggly acknowledges immediately with the task queued."""
    queue = DispatchQueue()
    _override(queue=queue)
    alert = {"alert_name": "Errors", "query": "error", "num_hits": 1, "recent_hits": ["boom"]}

    with TestClient(app) as client:
        response = client.post(
            "/loggly", content=json.dumps(alert), headers={"X-Request-ID": "req-42"}
        )

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert queue.qsize() == 1


async def test_alert_webhook_carries_request_id():
    """The queued task keeps the caller's request id for tracing."""
    queue = DispatchQueue()
    _override(queue=queue)
    alert = {"alert_name": "Errors", "recent_hits": ["boom"]}

    with TestClient(app) as client:
        client.post("/loggly", content=json.dumps(alert), headers={"X-Request-ID": "req-42"})

    task = await queue.get()
    assert task.context.request_id == "req-42"


def test_alert_webhook_bad_payload():
    """Malformed alerts are acknowledged but nothing is queued."""
    queue = DispatchQueue()
    _override(queue=queue)

    with TestClient(app) as client:
        response = client.post("/loggly", content=b"garbage")

    assert response.status_code == 200
    assert response.json() == {"ok": False}
    assert queue.qsize() == 0


# -- Slash command search --


@patch("loggly_relay.slack.verification.get_settings")
def test_slash_command_end_to_end(mock_get_settings: MagicMock):
    """A signed /loggly error command returns the formatted search output."""
    mock_get_settings.return_value = _mock_settings()
    requests: list[httpx.Request] = []
    _override(transport=_loggly_transport(requests))

    with TestClient(app) as client:
        response = _slash_command(client, "error")

    assert response.status_code == 200
    body = response.json()
    assert body["response_type"] == "in_channel"
    lines = body["text"].split("\n")
    assert lines[0] == "*2023-11-14 22:13:20.000 UTC*"
    assert lines[1] == "`NullPointerException`"
    assert lines[2:] == ["> > at foo", "> > at bar"]
    assert "lines more" not in body["text"]
    assert requests[0].url.params["q"] == "error"
    assert requests[1].url.params["rsid"] == "rsid-1"


@patch("loggly_relay.slack.verification.get_settings")
def test_slash_command_invalid_signature(mock_get_settings: MagicMock):
    """A bad signature is rejected before any search happens."""
    mock_get_settings.return_value = _mock_settings()
    requests: list[httpx.Request] = []
    _override(transport=_loggly_transport(requests))

    with TestClient(app) as client:
        response = _slash_command(client, "error", secret="wrong-secret")

    assert response.status_code == 403
    assert requests == []


@patch("loggly_relay.slack.verification.get_settings")
def test_slash_command_remote_failure_is_generic_500(mock_get_settings: MagicMock):
    """Loggly failures become a 500 whose body does not leak details."""
    mock_get_settings.return_value = _mock_settings()
    _override(transport=_loggly_transport([], status=403))

    with TestClient(app) as client:
        response = _slash_command(client, "error")

    assert response.status_code == 500
    assert response.json() == {"detail": "Search failed"}
    assert "secret-internals" not in response.text


# -- Scheduled search --


def test_scheduled_search_requires_secret():
    """POST /loggly/search/scheduled without the scheduler secret returns 403."""
    with TestClient(app) as client:
        response = client.post("/loggly/search/scheduled")
    assert response.status_code == 403


@patch("loggly_relay.deps.get_settings")
def test_scheduled_search_queues_results(mock_get_settings: MagicMock):
    """An authenticated timer trigger posts found events to the channel."""
    mock_get_settings.return_value = _mock_settings()
    queue = DispatchQueue()
    _override(queue=queue, transport=_loggly_transport([]))

    with TestClient(app) as client:
        response = client.post(
            "/loggly/search/scheduled",
            headers={"X-Scheduler-Secret": TEST_SCHEDULER_SECRET},
        )

    assert response.status_code == 200
    assert response.json() == {"status": "queued", "events": 1}
    assert queue.qsize() == 1


@patch("loggly_relay.deps.get_settings")
def test_scheduled_search_no_events(mock_get_settings: MagicMock):
    """No events: nothing is posted."""
    mock_get_settings.return_value = _mock_settings()
    queue = DispatchQueue()
    empty = {"total_events": 0, "page": 0, "events": []}
    _override(queue=queue, transport=_loggly_transport([], events_body=empty))

    with TestClient(app) as client:
        response = client.post(
            "/loggly/search/scheduled",
            headers={"X-Scheduler-Secret": TEST_SCHEDULER_SECRET},
        )

    assert response.json() == {"status": "empty", "events": 0}
    assert queue.qsize() == 0
