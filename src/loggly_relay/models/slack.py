"""Slack legacy message attachment models."""

from pydantic import BaseModel


class AttachmentField(BaseModel):
    """A title/value pair rendered in the attachment's field grid."""

    title: str
    value: str
    short: bool = False


class Attachment(BaseModel):
    """A Slack message attachment built from one Loggly alert."""

    fallback: str
    color: str = "warning"
    title: str = ""
    title_link: str = ""
    text: str = ""
    fields: list[AttachmentField] = []
    mrkdwn_in: list[str] = ["fields"]
