"""Stack-trace truncation for Loggly hits.

Loggly escapes embedded newlines in a single record as ``#012``. A record
containing the marker is treated as an error summary followed by stack frames.
"""

import re

MULTILINE_MARKER = "#012"

# Frames shown after the summary line before the rest is collapsed
MAX_TRACE_LINES = 5

# Ruby/C++ qualified names (Foo::Bar, A::B::C) and Java/Python exception names
# (NullPointerException, java.io.IOException, RuntimeError). \w is ASCII only.
QUALIFIED_NAME_PATTERN = re.compile(
    r"\w+(?:::\w+)+|\b(?:[a-z_]\w*\.)*[A-Z]\w*(?:Exception|Error)\b",
    re.ASCII,
)


def is_stack_trace(text: str) -> bool:
    """Return True if the text contains the multi-line marker."""
    return MULTILINE_MARKER in text


def summary_line(text: str) -> str:
    """Return everything before the first multi-line marker."""
    return text.split(MULTILINE_MARKER, 1)[0]


def highlight_names(line: str) -> str:
    """Wrap qualified class and exception names in backticks."""
    return QUALIFIED_NAME_PATTERN.sub(lambda m: f"`{m.group(0)}`", line)


def format_hit(hit: str) -> str:
    """Render a ``#012``-delimited stack trace as Slack mrkdwn.

    The first segment is the highlighted summary, the next five are quoted
    with ``> ``. Anything past that collapses into one "...and N lines more"
    line where N counts from the sixth segment onwards (``len(segments) - 5``).
    """
    segments = hit.strip().split(MULTILINE_MARKER)
    lines = [highlight_names(segments[0])]
    for segment in segments[1 : MAX_TRACE_LINES + 1]:
        lines.append(f"> {segment}")
    if len(segments) > MAX_TRACE_LINES + 1:
        lines.append(f"...and {len(segments) - MAX_TRACE_LINES} lines more")
    return "\n".join(lines)
