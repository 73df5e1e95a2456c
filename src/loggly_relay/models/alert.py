"""Loggly HTTP alert payload."""

from pydantic import BaseModel


class Alert(BaseModel):
    """Body Loggly POSTs when an alert rule triggers.

    Missing string fields default to empty; ``recent_hits`` must be non-empty
    for the alert to be usable, which is checked by the attachment builder.
    """

    alert_name: str = ""
    alert_description: str = ""
    edit_alert_link: str = ""
    source_group: str = ""
    start_time: str = ""
    end_time: str = ""
    search_link: str = ""
    query: str = ""
    num_hits: int = 0
    recent_hits: list[str] = []
    owner_username: str = ""
