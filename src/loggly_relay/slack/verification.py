"""Slack request signature verification as a FastAPI dependency."""

from urllib.parse import parse_qsl

from fastapi import HTTPException, Request
from slack_sdk.signature import SignatureVerifier

from loggly_relay.config import get_settings


async def verify_slack_request(request: Request) -> dict[str, str]:
    """Verify a slash command's Slack signature and return its form fields.

    Reads the raw body FIRST so the signature is checked against the exact
    bytes Slack signed, then parses it as ``application/x-www-form-urlencoded``.

    Raises HTTPException(403) if the signature is invalid.
    """
    settings = get_settings()
    body = (await request.body()).decode("utf-8")

    timestamp = request.headers.get("X-Slack-Request-Timestamp", "")
    signature = request.headers.get("X-Slack-Signature", "")

    verifier = SignatureVerifier(signing_secret=settings.slack_signing_secret)

    if not verifier.is_valid(body=body, timestamp=timestamp, signature=signature):
        raise HTTPException(status_code=403, detail="Invalid Slack signature")

    return dict(parse_qsl(body, keep_blank_values=True))
