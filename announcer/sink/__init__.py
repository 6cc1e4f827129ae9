"""Notification sinks: where rendered entries end up."""

from announcer.sink.base import NotificationSink
from announcer.sink.formatting import format_links, render_entry
from announcer.sink.logging_sink import LoggingSink
from announcer.sink.slack import SlackSink

__all__ = [
    "LoggingSink",
    "NotificationSink",
    "SlackSink",
    "format_links",
    "render_entry",
]
