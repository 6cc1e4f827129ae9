"""Sink that only logs, used in dry-run mode."""

from announcer.core.logging import get_logger
from announcer.feed.models import Entry
from announcer.sink.base import NotificationSink
from announcer.sink.formatting import render_entry

logger = get_logger(__name__)

DRY_RUN_HANDLE = "dry-run"


class LoggingSink(NotificationSink):
    """Renders messages to the log instead of Slack. Always succeeds."""

    async def post_message(self, entry: Entry) -> str:
        text = render_entry(entry)
        logger.info("dry_run_post_message", text=text)
        return DRY_RUN_HANDLE

    async def update_message(self, entry: Entry, handle: str) -> None:
        text = render_entry(entry)
        logger.info("dry_run_update_message", handle=handle, text=text)
