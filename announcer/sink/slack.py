"""Slack Web API sink."""

import httpx
from pydantic import BaseModel, ValidationError

from announcer.core.config import SinkConfig
from announcer.core.errors import SinkError
from announcer.core.logging import get_logger
from announcer.feed.models import Entry
from announcer.reconciler.metrics import SINK_REQUESTS
from announcer.sink.base import NotificationSink
from announcer.sink.formatting import render_entry

logger = get_logger(__name__)

POST_MESSAGE = "chat.postMessage"
UPDATE_MESSAGE = "chat.update"


class SlackMessage(BaseModel):
    """Request body shared by ``chat.postMessage`` and ``chat.update``."""

    channel: str
    ts: str = ""
    text: str


class SlackResponse(BaseModel):
    """The part of a Slack API response we care about."""

    ok: bool
    ts: str = ""
    error: str = ""


class SlackSink(NotificationSink):
    """Posts and edits messages in one Slack channel."""

    def __init__(
        self, client: httpx.AsyncClient, config: SinkConfig, timeout: float
    ) -> None:
        """Initialize the sink.

        Args:
            client: Shared HTTP client
            config: Slack token, channel and API base URL
            timeout: Deadline for each API call, in seconds
        """
        self.client = client
        self.config = config
        self.timeout = timeout

    async def post_message(self, entry: Entry) -> str:
        payload = SlackMessage(
            channel=self.config.channel_id, text=render_entry(entry)
        )
        response = await self._call(POST_MESSAGE, payload)
        return response.ts

    async def update_message(self, entry: Entry, handle: str) -> None:
        payload = SlackMessage(
            channel=self.config.channel_id, ts=handle, text=render_entry(entry)
        )
        await self._call(UPDATE_MESSAGE, payload)

    async def _call(self, method: str, payload: SlackMessage) -> SlackResponse:
        """Send one request to the Slack Web API.

        Raises:
            SinkError: On transport failure, a non-success HTTP status, an
                unreadable body, or ``ok: false`` (carrying Slack's reason)
        """
        url = f"{self.config.api_url.rstrip('/')}/{method}"
        try:
            http_response = await self.client.post(
                url,
                json=payload.model_dump(),
                headers={
                    "Authorization": f"Bearer {self.config.token}",
                    "Content-Type": "application/json; charset=utf-8",
                },
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            SINK_REQUESTS.labels(method=method, status="transport_error").inc()
            raise SinkError(f"{method} failed: {e}") from e

        if not http_response.is_success:
            SINK_REQUESTS.labels(method=method, status="http_error").inc()
            raise SinkError(f"{method} answered HTTP {http_response.status_code}")

        try:
            response = SlackResponse.model_validate_json(http_response.content)
        except ValidationError as e:
            SINK_REQUESTS.labels(method=method, status="invalid_response").inc()
            raise SinkError(f"{method} returned an unreadable body") from e

        if not response.ok:
            SINK_REQUESTS.labels(method=method, status="rejected").inc()
            raise SinkError(response.error or "unknown_error")

        SINK_REQUESTS.labels(method=method, status="ok").inc()
        logger.debug("slack_call_succeeded", method=method, ts=response.ts)
        return response
