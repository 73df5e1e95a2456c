"""Build a Slack attachment from a Loggly HTTP alert."""

from pydantic import ValidationError

from loggly_relay.errors import DecodeError, MalformedAlertError
from loggly_relay.formatting.hits import format_hit, is_stack_trace, summary_line
from loggly_relay.models.alert import Alert
from loggly_relay.models.slack import Attachment, AttachmentField


def parse_alert(raw: bytes) -> Alert:
    """Decode an alert body, rejecting alerts without any hits."""
    try:
        alert = Alert.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(f"Invalid Loggly alert payload: {exc}") from exc
    if not alert.recent_hits:
        raise MalformedAlertError(f"Alert {alert.alert_name!r} has no recent hits")
    return alert


def build_attachment(raw: bytes) -> Attachment:
    """Turn a raw Loggly alert body into a warning-colored Slack attachment.

    When the first hit is a ``#012`` stack trace, its summary line becomes the
    notification fallback and every hit is truncated with ``format_hit``.
    Otherwise the first hit is the fallback and hits are shown verbatim.
    """
    alert = parse_alert(raw)

    hits = alert.recent_hits
    if is_stack_trace(hits[0]):
        fallback = summary_line(hits[0])
        hits = [format_hit(hit) for hit in hits]
    else:
        fallback = hits[0]

    fields = [
        AttachmentField(title="Description", value=alert.alert_description, short=False),
        AttachmentField(title="Query", value=alert.query, short=True),
        AttachmentField(title="Num Hits", value=str(alert.num_hits), short=True),
        AttachmentField(title="Recent Hits", value="\n".join(hits), short=False),
    ]
    return Attachment(
        fallback=fallback,
        color="warning",
        title=alert.alert_name,
        title_link=alert.search_link,
        text=f"Edit this alert on <{alert.edit_alert_link}|Loggly>",
        fields=fields,
        mrkdwn_in=["fields"],
    )
